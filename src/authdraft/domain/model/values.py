"""Canonical scalar values carried by fields and statements.

Values are small frozen dataclasses so they compare and hash by content; the
reconciler relies on that to match candidate statements against existing ones.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Final

from authdraft.domain.model.enums import DatePrecision, ValueKind

UNDETERMINED_LANGUAGE: Final[str] = "und"


@dataclass(frozen=True, slots=True)
class Text:
    text: str
    language: str | None = None


@dataclass(frozen=True, slots=True)
class Date:
    """A calendar date known to ``precision``; finer parts stay ``None``."""

    year: int
    month: int | None = None
    day: int | None = None
    precision: DatePrecision = DatePrecision.YEAR

    def __post_init__(self) -> None:
        if self.precision is DatePrecision.YEAR and (self.month or self.day):
            raise ValueError("year precision date cannot carry month or day")
        if self.precision is DatePrecision.MONTH and (self.month is None or self.day):
            raise ValueError("month precision date needs a month and no day")
        if self.precision is DatePrecision.DAY and (self.month is None or self.day is None):
            raise ValueError("day precision date needs month and day")
        if self.month is not None and not 1 <= self.month <= 12:  # noqa: PLR2004
            raise ValueError(f"month out of range: {self.month}")
        if self.day is not None and self.month is not None and self.year > 0:
            # raises ValueError for impossible days like 1950-02-30
            date(self.year, self.month, self.day)

    @property
    def iso(self) -> str:
        """Partial ISO-8601 form (``1950``, ``1950-05``, ``1950-05-17``)."""

        sign = "-" if self.year < 0 else ""
        text = f"{sign}{abs(self.year):04d}"
        if self.month is not None:
            text += f"-{self.month:02d}"
        if self.day is not None:
            text += f"-{self.day:02d}"
        return text

    @property
    def wikibase_time(self) -> str:
        """Time string as the knowledge base stores it (unknown parts are ``00``)."""

        sign = "-" if self.year < 0 else "+"
        return f"{sign}{abs(self.year):04d}-{self.month or 0:02d}-{self.day or 0:02d}T00:00:00Z"


@dataclass(frozen=True, slots=True)
class ExternalId:
    value: str


@dataclass(frozen=True, slots=True)
class Url:
    value: str


@dataclass(frozen=True, slots=True)
class ItemRef:
    item_id: str


type CanonicalValue = Text | Date | ExternalId | Url | ItemRef


def value_matches_kind(value: CanonicalValue, kind: ValueKind) -> bool:
    match kind:
        case ValueKind.STRING | ValueKind.LANG_STRING:
            return isinstance(value, Text)
        case ValueKind.DATE:
            return isinstance(value, Date)
        case ValueKind.IRI:
            return isinstance(value, Url)
        case ValueKind.EXTERNAL_ID:
            return isinstance(value, ExternalId)
        case ValueKind.ITEM:
            return isinstance(value, ItemRef)
