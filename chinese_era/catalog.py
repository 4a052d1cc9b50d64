from __future__ import annotations

import json
import logging
import re
from collections import OrderedDict
from datetime import date
from pathlib import Path
from typing import Dict, Iterable, Iterator, List, Optional, Sequence, Union

from pydantic import ValidationError

from .errors import CatalogLoadError
from .models import EraDefinition, EraPeriod

logger = logging.getLogger("chinese_era.catalog")

DEFAULT_CATALOG_PATH = Path(__file__).parent / "data" / "era_definitions.json"


class EraCatalog:
    """Read-only sequence of era definitions ordered by start date."""

    def __init__(self, definitions: Iterable[EraDefinition]) -> None:
        self._definitions = tuple(sorted(definitions, key=lambda definition: definition.start_date))

    @classmethod
    def of(cls, definitions: Iterable[EraDefinition]) -> "EraCatalog":
        return cls(definitions)

    @classmethod
    def from_records(cls, records: Iterable[dict]) -> "EraCatalog":
        definitions: List[EraDefinition] = []
        for index, record in enumerate(records):
            try:
                definitions.append(EraDefinition.model_validate(record))
            except ValidationError as exc:
                raise CatalogLoadError(f"Invalid era definition at index {index}: {exc}") from exc
        return cls(definitions)

    @classmethod
    def from_json(cls, text: str) -> "EraCatalog":
        try:
            payload = json.loads(text)
        except json.JSONDecodeError as exc:
            raise CatalogLoadError("Unable to decode era definitions JSON") from exc
        if not isinstance(payload, list):
            raise CatalogLoadError("Era definitions JSON must be an array of records")
        return cls.from_records(payload)

    @classmethod
    def from_file(cls, path: Union[str, Path]) -> "EraCatalog":
        source = Path(path)
        try:
            text = source.read_text(encoding="utf-8")
        except OSError as exc:
            raise CatalogLoadError(f"Unable to read era definitions from {source}") from exc
        catalog = cls.from_json(text)
        logger.info("Loaded %d era definitions from %s", len(catalog), source)
        return catalog

    @classmethod
    def default(cls) -> "EraCatalog":
        return cls.from_file(DEFAULT_CATALOG_PATH)

    @property
    def definitions(self) -> Sequence[EraDefinition]:
        return self._definitions

    def __len__(self) -> int:
        return len(self._definitions)

    def __iter__(self) -> Iterator[EraDefinition]:
        return iter(self._definitions)

    def find_by_name(self, name: Optional[str]) -> Optional[EraDefinition]:
        if name is None or not name.strip():
            return None
        for definition in self._definitions:
            if definition.matches_name(name):
                return definition
        return None

    def find_by_date(self, value: date) -> Optional[EraDefinition]:
        for definition in self._definitions:
            if definition.contains(value):
                return definition
        return None

    def year_offset(self, definition: EraDefinition, value: date) -> int:
        return definition.year_offset(value)

    def search(self, query: Optional[str]) -> List[EraDefinition]:
        """Case-insensitive substring search over names, aliases and monarchs."""

        if query is None or not query.strip():
            return []
        normalised = query.strip().lower()
        results: List[EraDefinition] = []
        for definition in self._definitions:
            aliases = [alias.lower() for alias in definition.aliases]
            if (
                normalised in definition.display_name.lower()
                or any(normalised in alias or alias in normalised for alias in aliases)
                or normalised in definition.emperor.lower()
            ):
                results.append(definition)
        return results

    def for_dynasty(self, dynasty: Optional[str]) -> List[EraDefinition]:
        if dynasty is None or not dynasty.strip():
            return []
        normalised = dynasty.strip()
        return [definition for definition in self._definitions if definition.dynasty == normalised]

    def for_monarch(self, monarch: Optional[str]) -> List[EraDefinition]:
        if monarch is None or not monarch.strip():
            return []
        normalised = monarch.strip().lower()
        return [definition for definition in self._definitions if definition.emperor.lower() == normalised]

    def eras_in_year(self, year: int) -> List[EraDefinition]:
        january = date(year, 1, 1)
        december = date(year, 12, 31)
        return [
            definition
            for definition in self._definitions
            if definition.end_date >= january and definition.start_date <= december
        ]

    def periods(self) -> Dict[str, List[EraPeriod]]:
        grouped: Dict[str, List[EraPeriod]] = OrderedDict()
        for definition in self._definitions:
            grouped.setdefault(definition.dynasty, []).append(
                EraPeriod(label=definition.display_name, start=definition.start_date, end=definition.end_date)
            )
        return grouped

    def alias_pattern(self) -> re.Pattern[str]:
        aliases = {alias for definition in self._definitions for alias in definition.aliases}
        if not aliases:
            return re.compile(r"(?!)")
        ordered = sorted(aliases, key=lambda alias: (-len(alias), alias))
        return re.compile("|".join(re.escape(alias) for alias in ordered))


__all__ = ["DEFAULT_CATALOG_PATH", "EraCatalog"]
