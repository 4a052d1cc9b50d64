from __future__ import annotations

from calendar import isleap, monthrange
from datetime import MAXYEAR, MINYEAR, date
from typing import Optional

from .catalog import EraCatalog
from .errors import OutOfRange
from .models import EraDate


def add_years(value: date, years: int) -> date:
    """Shift ``value`` by whole years; Feb 29 lands on Feb 28 in common years."""

    target_year = value.year + years
    if not MINYEAR <= target_year <= MAXYEAR:
        raise OutOfRange(target_year, MINYEAR, MAXYEAR)
    if value.month == 2 and value.day == 29 and not isleap(target_year):
        return date(target_year, 2, 28)
    return value.replace(year=target_year)


def days_in_month(year: int, month: int) -> int:
    return monthrange(year, month)[1]


class DateBridge:
    """Convert between era dates and Gregorian dates."""

    def __init__(self, catalog: EraCatalog) -> None:
        self.catalog = catalog

    def to_gregorian_year(self, era_date: EraDate) -> int:
        return era_date.definition.start_date.year + era_date.year - 1

    def to_gregorian_date(self, era_date: EraDate) -> date:
        base = add_years(era_date.definition.start_date, era_date.year - 1)
        month = era_date.month if era_date.month is not None else base.month
        last_day = days_in_month(base.year, month)
        day = era_date.day if era_date.day is not None else base.day
        return date(base.year, month, min(day, last_day))

    def to_era(self, value: date) -> Optional[EraDate]:
        definition = self.catalog.find_by_date(value)
        if definition is None:
            return None
        return EraDate(definition=definition, year=self.catalog.year_offset(definition, value) + 1)


__all__ = ["DateBridge", "add_years", "days_in_month"]
