from __future__ import annotations

import json
import re
from datetime import date
from html import escape
from typing import Dict, Iterable, List, Optional

from .bridge import DateBridge, add_years
from .catalog import EraCatalog
from .lunar import LunarConverter, lunar_text, solar_to_lunar
from .models import EraDate, EraDefinition, EraPeriod, EraSummary
from .numerals import decode_numeral
from .resolver import EraResolver

# Adjacent runs of these characters need a separating space; CJK text does not.
_SPLIT_CHARS = "a-zA-Z\\d\\-,'\"\\u0e00-\\u0e7f"
_SPLIT_CHARS_NO_DIGIT = _SPLIT_CHARS.replace("\\d", "")
NEED_SPLIT_PREFIX = re.compile(f"^[{_SPLIT_CHARS}]")
NEED_SPLIT_POSTFIX = re.compile(f"[{_SPLIT_CHARS_NO_DIGIT}]$")
REDUCE_PATTERN = re.compile(f"([^{_SPLIT_CHARS}]) ([^{_SPLIT_CHARS_NO_DIGIT}])")


def concat_name(parts: Iterable[Optional[str]]) -> str:
    """Join name fragments, adding a space only where two Latin-like runs meet."""

    pieces: List[str] = []
    previous = ""
    for part in parts:
        if part is None:
            continue
        trimmed = part.strip()
        if not trimmed:
            continue
        if previous and NEED_SPLIT_PREFIX.search(trimmed) and NEED_SPLIT_POSTFIX.search(previous):
            pieces.append(" ")
        pieces.append(trimmed)
        previous = trimmed
    return "".join(pieces)


def reduce_name(name: str) -> str:
    return REDUCE_PATTERN.sub(r"\1\2", name.strip())


class EraToolkit:
    """Facade bundling catalog lookups, text resolution and date conversion."""

    def __init__(self, catalog: EraCatalog, *, lunar_converter: LunarConverter = solar_to_lunar) -> None:
        self.catalog = catalog
        self.resolver = EraResolver(catalog)
        self.bridge = DateBridge(catalog)
        self.lunar_converter = lunar_converter

    @classmethod
    def default(cls) -> "EraToolkit":
        return cls(EraCatalog.default())

    def pack(self, definitions: Iterable[EraDefinition]) -> str:
        return json.dumps([definition.to_record() for definition in definitions], ensure_ascii=False, indent=2)

    def extract(self, name: str) -> Optional[EraSummary]:
        definition = self.catalog.find_by_name(name)
        if definition is None:
            return None
        return EraSummary.from_definition(definition)

    def periods(self) -> Dict[str, List[EraPeriod]]:
        return self.catalog.periods()

    def candidates(self, text: str, limit: int = 0) -> List[EraDefinition]:
        return self.resolver.candidates(text, limit)

    def year_starts(self, name: str) -> List[date]:
        """Start date of the era followed by each anniversary up to its end."""

        definition = self.catalog.find_by_name(name)
        if definition is None:
            return []
        result: List[date] = []
        for offset in range(definition.end_date.year - definition.start_date.year + 1):
            cursor = add_years(definition.start_date, offset)
            if cursor > definition.end_date:
                break
            result.append(cursor)
        return result

    def for_dynasty(self, dynasty: str) -> List[EraDefinition]:
        return self.catalog.for_dynasty(dynasty)

    def for_monarch(self, monarch: str) -> List[EraDefinition]:
        return self.catalog.for_monarch(monarch)

    def eras_in_year(self, year: int) -> List[EraDefinition]:
        return self.catalog.eras_in_year(year)

    def numeralize(self, text: str) -> int:
        return decode_numeral(text)

    def parse(self, text: str) -> EraDate:
        return self.resolver.parse(text)

    def parse_many(self, texts: Iterable[str]) -> List[EraDate]:
        return [self.parse(text) for text in texts]

    def to_gregorian(self, era_date: EraDate) -> date:
        return self.bridge.to_gregorian_date(era_date)

    def to_era(self, value: date) -> Optional[EraDate]:
        return self.bridge.to_era(value)

    def to_html(self, era_date: EraDate) -> str:
        definition = era_date.definition
        return (
            '<span class="era" data-dynasty="' + escape(definition.dynasty)
            + '" data-era="' + escape(definition.era_name) + '">'
            + escape(era_date.to_text()) + "</span>"
        )

    def note(self, definition: EraDefinition) -> Optional[str]:
        return definition.notes or None

    def lunar_text(self, value: date) -> str:
        return lunar_text(value, self.lunar_converter)


__all__ = ["EraToolkit", "concat_name", "reduce_name"]
