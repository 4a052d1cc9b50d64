from __future__ import annotations

import json
from datetime import date
from pathlib import Path

import pytest

from .catalog import EraCatalog
from .errors import CatalogLoadError
from .models import EraDefinition


def test_catalog_is_sorted_by_start_date(catalog: EraCatalog, hongwu: EraDefinition) -> None:
    assert len(catalog) == 2
    assert catalog.definitions[0] == hongwu
    assert [definition.era_name for definition in catalog] == ["洪武", "建文"]


def test_find_by_name(catalog: EraCatalog, hongwu: EraDefinition) -> None:
    assert catalog.find_by_name("洪武") == hongwu
    assert catalog.find_by_name(" 太祖洪武 ") == hongwu
    assert catalog.find_by_name("不存在") is None
    assert catalog.find_by_name("") is None


def test_find_by_date(catalog: EraCatalog, hongwu: EraDefinition, jianwen: EraDefinition) -> None:
    assert catalog.find_by_date(date(1368, 1, 23)) == hongwu
    assert catalog.find_by_date(date(1400, 1, 1)) == jianwen
    assert catalog.find_by_date(date(1398, 6, 1)) is None


def test_find_by_date_prefers_earliest_start_on_overlap(hongwu: EraDefinition) -> None:
    overlapping = EraDefinition(
        dynasty="元",
        emperor="妥懽帖睦爾",
        era_name="至正",
        start_date=date(1341, 1, 1),
        end_date=date(1370, 12, 31),
    )
    catalog = EraCatalog.of([hongwu, overlapping])
    assert catalog.find_by_date(date(1369, 5, 1)) == overlapping


def test_search(catalog: EraCatalog, hongwu: EraDefinition, jianwen: EraDefinition) -> None:
    assert catalog.search("朱允炆") == [jianwen]
    assert catalog.search("明") == [hongwu, jianwen]
    assert catalog.search("太祖") == [hongwu]
    assert catalog.search("洪武十五年") == [hongwu]
    assert catalog.search("  ") == []


def test_dynasty_monarch_and_year_filters(catalog: EraCatalog, jianwen: EraDefinition) -> None:
    assert len(catalog.for_dynasty("明")) == 2
    assert catalog.for_dynasty("清") == []
    assert catalog.for_monarch("朱允炆") == [jianwen]
    assert catalog.eras_in_year(1399) == [jianwen]
    assert catalog.eras_in_year(1398)[0].era_name == "洪武"


def test_periods_group_by_dynasty(catalog: EraCatalog) -> None:
    periods = catalog.periods()
    assert list(periods) == ["明"]
    assert [str(period) for period in periods["明"]] == [
        "明洪武(1368-01-23-1398-02-12)",
        "明建文(1399-07-30-1402-07-25)",
    ]


def test_alias_pattern_prefers_longest_alias(catalog: EraCatalog) -> None:
    pattern = catalog.alias_pattern()
    assert pattern.search("太祖洪武三年").group(0) == "太祖洪武"
    assert pattern.search("建文元年").group(0) == "建文"
    assert EraCatalog.of([]).alias_pattern().search("洪武") is None


def test_from_file_round_trips_records(tmp_path: Path, catalog: EraCatalog) -> None:
    path = tmp_path / "eras.json"
    path.write_text(
        json.dumps([definition.to_record() for definition in catalog], ensure_ascii=False),
        encoding="utf-8",
    )
    loaded = EraCatalog.from_file(path)
    assert list(loaded) == list(catalog)


def test_loader_errors(tmp_path: Path) -> None:
    with pytest.raises(CatalogLoadError):
        EraCatalog.from_file(tmp_path / "missing.json")
    with pytest.raises(CatalogLoadError):
        EraCatalog.from_json("{not json")
    with pytest.raises(CatalogLoadError):
        EraCatalog.from_json('{"eraName": "洪武"}')
    with pytest.raises(CatalogLoadError):
        EraCatalog.from_json(
            '[{"dynasty": "明", "emperor": "x", "eraName": "洪武",'
            ' "startDate": "1398-01-01", "endDate": "1368-01-01"}]'
        )
    with pytest.raises(CatalogLoadError):
        EraCatalog.from_records(
            [{"dynasty": "明", "emperor": "", "eraName": "  ", "startDate": "1368-01-23", "endDate": "1398-02-12"}]
        )


def test_default_catalog_contains_ming_and_qing() -> None:
    catalog = EraCatalog.default()
    assert catalog.find_by_name("康熙") is not None
    assert catalog.find_by_name("永乐").era_name == "永樂"
    assert set(catalog.periods()) == {"明", "清"}
