from __future__ import annotations


class EraError(ValueError):
    """Base class for every conversion failure raised by this package."""


class InvalidNumeral(EraError):
    def __init__(self, message: str, *, text: object = None) -> None:
        super().__init__(message)
        self.text = text


class EraNotFound(EraError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Unable to locate era information in text: {text}")
        self.text = text


class EraYearNotFound(EraError):
    def __init__(self, text: str) -> None:
        super().__init__(f"Era year not found in text: {text}")
        self.text = text


class OutOfRange(EraError):
    def __init__(self, value: object, start: object, end: object) -> None:
        super().__init__(f"Value is outside of the supported range: {value} (expected {start} .. {end})")
        self.value = value
        self.start = start
        self.end = end


class CatalogLoadError(RuntimeError):
    """Raised when era definitions cannot be read from their source."""


__all__ = [
    "CatalogLoadError",
    "EraError",
    "EraNotFound",
    "EraYearNotFound",
    "InvalidNumeral",
    "OutOfRange",
]
