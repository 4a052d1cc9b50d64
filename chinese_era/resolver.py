from __future__ import annotations

import logging
import re
from dataclasses import dataclass
from typing import List, Optional

from .catalog import EraCatalog
from .errors import EraNotFound, EraYearNotFound, InvalidNumeral
from .models import EraDate, EraDefinition
from .numerals import NUMERAL_CLASS, ONE_MARKER, decode_numeral

logger = logging.getLogger("chinese_era.resolver")

LEAP_MARKERS = "閏闰"
FIRST_MARKER = "初"

# 元 only stands alone as "first"; it never mixes with other numerals.
YEAR_PATTERN = re.compile(rf"({ONE_MARKER}|[{NUMERAL_CLASS}]+)年")
MONTH_PATTERN = re.compile(rf"([{LEAP_MARKERS}]?(?:{ONE_MARKER}|[{NUMERAL_CLASS}]+))月")
DAY_PATTERN = re.compile(rf"({FIRST_MARKER}?[{NUMERAL_CLASS}]+)[日号]")

_MARKER_TABLE = str.maketrans("", "", LEAP_MARKERS + FIRST_MARKER)


@dataclass(frozen=True)
class Candidate:
    definition: EraDefinition
    score: int

    @property
    def sort_key(self):
        return (-self.score, self.definition.start_date, self.definition.display_name)


def match_score(definition: EraDefinition, text: str) -> int:
    """Length of the longest era name form found verbatim in ``text``."""

    best = 0
    for alias in definition.aliases:
        for form in (definition.dynasty + alias, alias):
            if form and form in text and len(form) > best:
                best = len(form)
    display_name = definition.display_name
    if display_name in text and len(display_name) > best:
        best = len(display_name)
    return best


def extract_year(text: str) -> int:
    match = YEAR_PATTERN.search(text)
    if not match:
        raise EraYearNotFound(text)
    year = decode_numeral(match.group(1))
    if year < 1:
        raise InvalidNumeral(f"Era year must be >= 1: {match.group(1)}", text=match.group(1))
    return year


def _extract_optional(text: str, pattern: re.Pattern[str]) -> Optional[int]:
    match = pattern.search(text)
    if not match:
        return None
    value = match.group(1).translate(_MARKER_TABLE)
    try:
        return decode_numeral(value)
    except InvalidNumeral:
        logger.debug("Ignoring undecodable field %r in %r", match.group(0), text)
        return None


def extract_month(text: str) -> Optional[int]:
    month = _extract_optional(text, MONTH_PATTERN)
    if month is not None and not 1 <= month <= 12:
        logger.debug("Ignoring out-of-range month %d in %r", month, text)
        return None
    return month


def extract_day(text: str) -> Optional[int]:
    day = _extract_optional(text, DAY_PATTERN)
    if day is not None and not 1 <= day <= 31:
        logger.debug("Ignoring out-of-range day %d in %r", day, text)
        return None
    return day


class EraResolver:
    """Resolve free text such as ``明洪武十五年八月初三日`` against a catalog."""

    def __init__(self, catalog: EraCatalog) -> None:
        self.catalog = catalog

    def rank(self, text: Optional[str], limit: int = 0) -> List[Candidate]:
        if text is None or not text.strip():
            return []
        normalised = text.strip()
        ranked = [
            Candidate(definition=definition, score=match_score(definition, normalised))
            for definition in self.catalog
        ]
        ranked = sorted((candidate for candidate in ranked if candidate.score > 0), key=lambda c: c.sort_key)
        if limit > 0:
            ranked = ranked[:limit]
        return ranked

    def candidates(self, text: Optional[str], limit: int = 0) -> List[EraDefinition]:
        """Definitions whose names occur in ``text``, best match first.

        A non-positive ``limit`` returns every candidate.
        """

        return [candidate.definition for candidate in self.rank(text, limit)]

    def best_match(self, text: str) -> EraDefinition:
        ranked = self.rank(text, 1)
        if not ranked:
            raise EraNotFound(text)
        logger.debug("Resolved %r to %s (score=%d)", text, ranked[0].definition.display_name, ranked[0].score)
        return ranked[0].definition

    def parse(self, text: str) -> EraDate:
        if text is None or not text.strip():
            raise EraNotFound("" if text is None else text)
        normalised = text.strip()
        definition = self.best_match(normalised)
        year = extract_year(normalised)
        # 閏 is matched but not kept on the result.
        month = extract_month(normalised)
        day = extract_day(normalised)
        return EraDate(definition=definition, year=year, month=month, day=day)


__all__ = [
    "Candidate",
    "EraResolver",
    "extract_day",
    "extract_month",
    "extract_year",
    "match_score",
]
