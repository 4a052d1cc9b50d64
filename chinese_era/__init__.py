"""Convert between Chinese era (年號) expressions and Gregorian dates."""

from .bridge import DateBridge
from .catalog import EraCatalog
from .errors import CatalogLoadError, EraError, EraNotFound, EraYearNotFound, InvalidNumeral, OutOfRange
from .models import EraDate, EraDefinition, EraPeriod, EraSummary
from .numerals import decode_numeral, encode_numeral
from .resolver import EraResolver
from .toolkit import EraToolkit

__all__ = [
    "CatalogLoadError",
    "DateBridge",
    "EraCatalog",
    "EraDate",
    "EraDefinition",
    "EraError",
    "EraNotFound",
    "EraPeriod",
    "EraResolver",
    "EraSummary",
    "EraToolkit",
    "EraYearNotFound",
    "InvalidNumeral",
    "OutOfRange",
    "decode_numeral",
    "encode_numeral",
]
