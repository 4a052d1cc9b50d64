from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Callable

from korean_lunar_calendar import KoreanLunarCalendar

from .errors import EraError
from .numerals import encode_numeral

LEAP_MONTH_MARKER = "閏"


class LunarConversionError(EraError):
    pass


@dataclass(frozen=True)
class LunarDate:
    year: int
    month: int
    day: int
    is_leap_month: bool = False


LunarConverter = Callable[[date], LunarDate]


def solar_to_lunar(value: date) -> LunarDate:
    """Default converter backed by ``korean-lunar-calendar``."""

    calendar = KoreanLunarCalendar()
    if not calendar.setSolarDate(value.year, value.month, value.day):
        raise LunarConversionError(f"Date is outside the supported lunar range: {value.isoformat()}")
    return LunarDate(
        year=calendar.lunarYear,
        month=calendar.lunarMonth,
        day=calendar.lunarDay,
        is_leap_month=bool(calendar.isIntercalation),
    )


def format_lunar_date(lunar: LunarDate) -> str:
    parts = [encode_numeral(lunar.year), "年"]
    if lunar.is_leap_month:
        parts.append(LEAP_MONTH_MARKER)
    parts.extend([encode_numeral(lunar.month), "月", encode_numeral(lunar.day), "日"])
    return "".join(parts)


def lunar_text(value: date, converter: LunarConverter = solar_to_lunar) -> str:
    return format_lunar_date(converter(value))


__all__ = [
    "LunarConversionError",
    "LunarConverter",
    "LunarDate",
    "format_lunar_date",
    "lunar_text",
    "solar_to_lunar",
]
