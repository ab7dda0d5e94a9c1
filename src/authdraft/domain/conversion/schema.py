"""Per-source extraction schemas and their read-only registry."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from types import MappingProxyType
from typing import TYPE_CHECKING

from authdraft.domain.errors import UnknownSourceError
from authdraft.domain.model import Cardinality, SourceType, ValueKind

if TYPE_CHECKING:
    from collections.abc import Iterable


class TextTransform(StrEnum):
    INVERT_NAME = "invert_name"


@dataclass(frozen=True, slots=True)
class SchemaEntry:
    """Maps one predicate of a source vocabulary to a semantic field.

    ``subject_template`` reads the predicate from another node than the record
    subject (``{id}`` is replaced with the record identifier).
    """

    predicate: str
    field_name: str
    cardinality: Cardinality = Cardinality.MANY
    value_kind: ValueKind = ValueKind.STRING
    subject_template: str | None = None
    transform: TextTransform | None = None


@dataclass(frozen=True, slots=True)
class SourceSchema:
    source_type: SourceType
    label: str
    subject_template: str
    entries: tuple[SchemaEntry, ...]
    property_id: str | None = None
    stated_in: str | None = None

    def record_subject(self, external_id: str) -> str:
        return self.subject_template.format(id=external_id)

    def entry_subject(self, entry: SchemaEntry, external_id: str) -> str:
        template = entry.subject_template or self.subject_template
        return template.format(id=external_id)


class SchemaRegistry:
    """Immutable lookup from source type to schema; safe to share between tasks."""

    __slots__ = ("_schemas",)

    def __init__(self, schemas: Iterable[SourceSchema]) -> None:
        table: dict[SourceType, SourceSchema] = {}
        for schema in schemas:
            if schema.source_type in table:
                raise ValueError(f"Duplicate schema for {schema.source_type}")
            table[schema.source_type] = schema
        self._schemas = MappingProxyType(table)

    def lookup(self, source_type: SourceType | str) -> SourceSchema:
        key = source_type if isinstance(source_type, SourceType) else parse_source_type(source_type)
        try:
            return self._schemas[key]
        except KeyError:
            raise UnknownSourceError(f"No schema registered for {key}") from None

    def sources(self) -> tuple[SourceSchema, ...]:
        return tuple(self._schemas.values())

    def __contains__(self, source_type: object) -> bool:
        return source_type in self._schemas


def parse_source_type(tag: str) -> SourceType:
    """Turn a user supplied tag (any case) into a ``SourceType``."""

    try:
        return SourceType(tag.strip().upper())
    except ValueError:
        raise UnknownSourceError(f"Unknown source type: {tag!r}") from None


__all__ = [
    "SchemaEntry",
    "SchemaRegistry",
    "SourceSchema",
    "TextTransform",
    "parse_source_type",
]
