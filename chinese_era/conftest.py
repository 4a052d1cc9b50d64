from __future__ import annotations

from datetime import date

import pytest

from .catalog import EraCatalog
from .models import EraDefinition


@pytest.fixture
def hongwu() -> EraDefinition:
    return EraDefinition(
        dynasty="明",
        emperor="朱元璋",
        era_name="洪武",
        aliases=["洪武", "太祖洪武"],
        start_date=date(1368, 1, 23),
        end_date=date(1398, 2, 12),
        notes="開國之年",
    )


@pytest.fixture
def jianwen() -> EraDefinition:
    return EraDefinition(
        dynasty="明",
        emperor="朱允炆",
        era_name="建文",
        aliases=["建文"],
        start_date=date(1399, 7, 30),
        end_date=date(1402, 7, 25),
        notes="燕王靖難",
    )


@pytest.fixture
def catalog(hongwu: EraDefinition, jianwen: EraDefinition) -> EraCatalog:
    return EraCatalog.of([jianwen, hongwu])
