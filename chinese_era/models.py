from __future__ import annotations

from datetime import date, datetime
from typing import Any, List, Optional, Tuple

from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator, model_validator

from .errors import OutOfRange
from .numerals import encode_numeral


class EraDefinition(BaseModel):
    """Immutable representation of a historical era definition."""

    model_config = ConfigDict(frozen=True, populate_by_name=True)

    dynasty: str = Field(..., description="Dynasty grouping the era, e.g. 明")
    emperor: str = Field(..., description="Monarch label; not used for matching")
    era_name: str = Field(..., alias="eraName", min_length=1, description="Canonical era label")
    aliases: Tuple[str, ...] = Field(
        default=(),
        validate_default=True,
        description="Alternate names; always starts with the canonical era name",
    )
    start_date: date = Field(..., alias="startDate", description="First day of era year 1")
    end_date: date = Field(..., alias="endDate", description="Last day of the era (inclusive)")
    notes: str = Field(default="", description="Free-form remarks")

    @field_validator("dynasty", "emperor", "era_name")
    @classmethod
    def _strip_labels(cls, value: str, info: ValidationInfo) -> str:
        cleaned = value.strip()
        if info.field_name == "era_name" and not cleaned:
            raise ValueError("eraName must not be blank")
        return cleaned

    @field_validator("aliases", mode="before")
    @classmethod
    def _normalise_aliases(cls, value: Any, info: ValidationInfo) -> Tuple[str, ...]:
        normalised: List[str] = []
        era_name = info.data.get("era_name")
        if era_name:
            normalised.append(era_name)
        for alias in value or ():
            if alias is None:
                continue
            candidate = str(alias).strip()
            if candidate and candidate not in normalised:
                normalised.append(candidate)
        return tuple(normalised)

    @field_validator("notes", mode="before")
    @classmethod
    def _normalise_notes(cls, value: Optional[str]) -> str:
        return "" if value is None else str(value).strip()

    @model_validator(mode="after")
    def _check_range(self) -> "EraDefinition":
        if self.end_date < self.start_date:
            raise ValueError("endDate must not be before startDate")
        return self

    @property
    def display_name(self) -> str:
        return self.dynasty + self.era_name

    def contains(self, value: date) -> bool:
        return self.start_date <= value <= self.end_date

    def matches_name(self, name: Optional[str]) -> bool:
        if name is None or not name.strip():
            return False
        normalised = name.strip().lower()
        return any(alias.lower() == normalised for alias in self.aliases)

    def year_offset(self, value: date) -> int:
        """Gregorian year difference between ``value`` and the era start."""

        if not self.contains(value):
            raise OutOfRange(value, self.start_date, self.end_date)
        return value.year - self.start_date.year

    def to_record(self) -> dict:
        return self.model_dump(mode="json", by_alias=True)

    def __str__(self) -> str:
        return f"{self.display_name}({self.start_date.isoformat()}..{self.end_date.isoformat()})"


class EraDate(BaseModel):
    """A specific (possibly partial) date inside a historical era."""

    model_config = ConfigDict(frozen=True)

    definition: EraDefinition
    year: int = Field(..., description="Era-relative year, starting at 1")
    month: Optional[int] = Field(default=None, ge=1, le=12)
    day: Optional[int] = Field(default=None, ge=1, le=31)

    @field_validator("year")
    @classmethod
    def _check_year(cls, value: int) -> int:
        if value < 1:
            raise ValueError("Era year must be >= 1")
        return value

    def to_text(self) -> str:
        parts = [self.definition.dynasty, self.definition.era_name, encode_numeral(self.year), "年"]
        if self.month is not None:
            parts.extend([encode_numeral(self.month), "月"])
        if self.day is not None:
            parts.extend([encode_numeral(self.day), "日"])
        return "".join(parts)

    def __str__(self) -> str:
        return self.to_text()


class EraSummary(BaseModel):
    """Lightweight summary of an era suitable for data extraction APIs."""

    model_config = ConfigDict(frozen=True)

    display_name: str
    dynasty: str
    emperor: str
    start_date: date
    end_date: date
    total_years: int
    notes: str = ""

    @classmethod
    def from_definition(cls, definition: EraDefinition) -> "EraSummary":
        return cls(
            display_name=definition.display_name,
            dynasty=definition.dynasty,
            emperor=definition.emperor,
            start_date=definition.start_date,
            end_date=definition.end_date,
            total_years=definition.end_date.year - definition.start_date.year + 1,
            notes=definition.notes,
        )


class EraPeriod(BaseModel):
    model_config = ConfigDict(frozen=True)

    label: str
    start: date
    end: date

    @model_validator(mode="after")
    def _check_range(self) -> "EraPeriod":
        if self.end < self.start:
            raise ValueError("end must not be before start")
        return self

    @property
    def length_in_days(self) -> int:
        return (self.end - self.start).days + 1

    def __str__(self) -> str:
        return f"{self.label}({self.start.isoformat()}-{self.end.isoformat()})"


class TextRequest(BaseModel):
    text: str = Field(..., description="Era expression such as 明洪武十五年八月初三日")

    @field_validator("text")
    @classmethod
    def ensure_non_empty(cls, value: str) -> str:
        cleaned = value.strip()
        if not cleaned:
            raise ValueError("テキストが空です。内容を入力してください。")
        return cleaned


class CandidatesRequest(TextRequest):
    limit: Optional[int] = Field(
        default=None,
        ge=0,
        le=100,
        description="Maximum number of candidates; 0 or omitted uses the configured default",
    )


class EncodeRequest(BaseModel):
    value: int = Field(..., ge=1, le=9999, description="Integer to render as Chinese numerals")


class ToEraRequest(BaseModel):
    value: date = Field(..., description="Gregorian date to place inside an era")


class DecodeResponse(BaseModel):
    text: str
    value: int


class EncodeResponse(BaseModel):
    value: int
    text: str


class EraDateResponse(BaseModel):
    """Serialised era date together with its Gregorian counterpart."""

    dynasty: str
    era_name: str
    display_name: str
    year: int
    month: Optional[int] = None
    day: Optional[int] = None
    text: str
    gregorian_year: int
    gregorian_date: date


class CandidatesResponse(BaseModel):
    text: str
    candidates: List[EraDefinition]
    total: int


class SearchResponse(BaseModel):
    query: str
    results: List[EraDefinition]
    total: int
    generated_at: datetime
