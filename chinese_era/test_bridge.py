from __future__ import annotations

from datetime import date

import pytest

from .bridge import DateBridge, add_years, days_in_month
from .catalog import EraCatalog
from .errors import OutOfRange
from .models import EraDate, EraDefinition
from .resolver import EraResolver


def _definition(start: date, end: date) -> EraDefinition:
    return EraDefinition(dynasty="明", emperor="", era_name="測試", start_date=start, end_date=end)


def test_parsed_text_converts_to_gregorian(catalog: EraCatalog) -> None:
    era_date = EraResolver(catalog).parse("明洪武十五年八月初三日")
    bridge = DateBridge(catalog)
    assert bridge.to_gregorian_year(era_date) == 1382
    assert bridge.to_gregorian_date(era_date) == date(1382, 8, 3)


def test_missing_month_and_day_fall_back_to_start_anniversary(catalog: EraCatalog, hongwu: EraDefinition) -> None:
    bridge = DateBridge(catalog)
    assert bridge.to_gregorian_date(EraDate(definition=hongwu, year=2)) == date(1369, 1, 23)
    assert bridge.to_gregorian_date(EraDate(definition=hongwu, year=2, month=5)) == date(1369, 5, 23)


def test_day_is_clamped_to_month_length() -> None:
    definition = _definition(date(1369, 1, 31), date(1380, 12, 31))
    bridge = DateBridge(EraCatalog.of([definition]))
    assert bridge.to_gregorian_date(EraDate(definition=definition, year=1, month=2)) == date(1369, 2, 28)
    assert bridge.to_gregorian_date(EraDate(definition=definition, year=4, month=2)) == date(1372, 2, 29)
    assert bridge.to_gregorian_date(EraDate(definition=definition, year=1, month=4, day=31)) == date(1369, 4, 30)


def test_leap_day_start_rolls_back_in_common_years() -> None:
    definition = _definition(date(1368, 2, 29), date(1380, 12, 31))
    bridge = DateBridge(EraCatalog.of([definition]))
    assert bridge.to_gregorian_date(EraDate(definition=definition, year=2)) == date(1369, 2, 28)
    assert bridge.to_gregorian_date(EraDate(definition=definition, year=5)) == date(1372, 2, 29)


def test_to_era(catalog: EraCatalog, hongwu: EraDefinition, jianwen: EraDefinition) -> None:
    bridge = DateBridge(catalog)

    era_date = bridge.to_era(date(1382, 8, 3))
    assert era_date is not None
    assert era_date.definition == hongwu
    assert era_date.year == 1382 - 1368 + 1
    assert era_date.month is None

    assert bridge.to_era(date(1400, 3, 1)).definition == jianwen
    assert bridge.to_era(date(1398, 6, 1)) is None
    assert bridge.to_era(date(1500, 1, 1)) is None


def test_calendar_helpers() -> None:
    assert add_years(date(2020, 2, 29), 1) == date(2021, 2, 28)
    assert add_years(date(2020, 2, 29), 4) == date(2024, 2, 29)
    assert add_years(date(2021, 3, 31), -1) == date(2020, 3, 31)
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29


def test_years_beyond_calendar_range_raise_out_of_range(catalog: EraCatalog) -> None:
    era_date = EraResolver(catalog).parse("明洪武九千年")
    assert era_date.year == 9000
    bridge = DateBridge(catalog)
    assert bridge.to_gregorian_year(era_date) == 10367
    with pytest.raises(OutOfRange) as excinfo:
        bridge.to_gregorian_date(era_date)
    assert excinfo.value.value == 10367
    with pytest.raises(OutOfRange):
        add_years(date(1, 1, 1), -1)
