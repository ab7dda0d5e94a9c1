"""Walk a parsed record graph with a source schema and collect normalized fields."""

from __future__ import annotations

from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING, Final

from rdflib import BNode

from authdraft.domain.conversion.normalize import normalize
from authdraft.domain.conversion.schema import TextTransform
from authdraft.domain.errors import NormalizationError
from authdraft.domain.model import Cardinality, Date, NormalizedField, Text, ValueKind

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping

    from authdraft.domain.conversion.graph import GraphNode, RawGraph
    from authdraft.domain.conversion.schema import SchemaEntry, SourceSchema
    from authdraft.domain.model import CanonicalValue

log = getLogger(__name__)

MAX_TEXT_LENGTH: Final = 250


@dataclass(frozen=True, slots=True)
class ExtractionResult:
    fields: Mapping[str, NormalizedField]
    warnings: tuple[str, ...] = ()


@dataclass(slots=True)
class _FieldBuffer:
    value_kind: ValueKind
    values: list[CanonicalValue] = field(default_factory=list)


class _Warnings:
    """Ordered, de-duplicated warning collector."""

    def __init__(self) -> None:
        self._seen: dict[str, None] = {}

    def add(self, message: str) -> None:
        self._seen.setdefault(message, None)

    def freeze(self) -> tuple[str, ...]:
        return tuple(self._seen)


def extract_fields(graph: RawGraph, schema: SourceSchema, external_id: str) -> ExtractionResult:
    """Extract the fields ``schema`` describes for the record ``external_id``.

    Entries are visited in schema order and objects in the order they were
    parsed. A ``one`` entry keeps the first value of its field and warns about
    every later value, equal or not; ``many`` entries keep every distinct value.
    Values that fail normalization are dropped with a warning; text longer
    than ``MAX_TEXT_LENGTH`` characters is cut with a warning.
    """

    warnings = _Warnings()
    buffers: dict[str, _FieldBuffer] = {}

    record_subject = _resolve_subject(graph, schema.record_subject(external_id))
    if record_subject is None:
        warnings.add(
            f"Record subject <{schema.record_subject(external_id)}> not found in "
            f"{schema.source_type} document"
        )

    for entry in schema.entries:
        if entry.subject_template is None:
            if record_subject is None:
                continue
            subject = record_subject
        else:
            subject = _resolve_subject(graph, schema.entry_subject(entry, external_id))
            if subject is None:
                continue

        buffer = buffers.get(entry.field_name)
        if buffer is None:
            buffer = buffers[entry.field_name] = _FieldBuffer(entry.value_kind)
        elif buffer.value_kind is not entry.value_kind:
            warnings.add(
                f"Field {entry.field_name!r}: entry {entry.predicate} declares "
                f"{entry.value_kind}, field is {buffer.value_kind}; entry skipped"
            )
            continue

        for raw in _expand(graph, graph.objects(subject, entry.predicate)):
            try:
                value = _apply_transform(normalize(raw, entry.value_kind), entry)
            except NormalizationError as exc:
                warnings.add(
                    f"Field {entry.field_name!r}: dropped value from {entry.predicate}: {exc}"
                )
                continue
            if isinstance(value, Text) and len(value.text) > MAX_TEXT_LENGTH:
                warnings.add(
                    f"Field {entry.field_name!r}: value from {entry.predicate} "
                    f"shortened to {MAX_TEXT_LENGTH} characters"
                )
                value = Text(value.text[:MAX_TEXT_LENGTH], value.language)
            _accept(buffer, value, entry, warnings)

    fields = {
        name: NormalizedField(name, buffer.value_kind, tuple(buffer.values))
        for name, buffer in buffers.items()
        if buffer.values
    }
    log.debug(
        "Extracted %d fields from %s record %s", len(fields), schema.source_type, external_id
    )
    return ExtractionResult(fields=fields, warnings=warnings.freeze())


def _resolve_subject(graph: RawGraph, subject: str) -> str | None:
    if graph.has_subject(subject):
        return subject
    if subject.startswith("http://"):
        alternative = "https://" + subject.removeprefix("http://")
    elif subject.startswith("https://"):
        alternative = "http://" + subject.removeprefix("https://")
    else:
        return None
    return alternative if graph.has_subject(alternative) else None


def _expand(graph: RawGraph, objects: tuple[GraphNode, ...]) -> Iterator[GraphNode]:
    """Yield objects, replacing ``rdf:Seq``/``rdf:Bag`` nodes with their members."""

    for obj in objects:
        if isinstance(obj, BNode):
            members = graph.container_members(obj)
            if members is not None:
                yield from members
                continue
        yield obj


def _accept(
    buffer: _FieldBuffer,
    value: CanonicalValue,
    entry: SchemaEntry,
    warnings: _Warnings,
) -> None:
    if entry.cardinality is Cardinality.ONE and buffer.values:
        warnings.add(
            f"Field {entry.field_name!r} allows one value; kept {_describe(buffer.values[0])}, "
            f"dropped {_describe(value)} from {entry.predicate}"
        )
        return
    if value in buffer.values:
        return
    buffer.values.append(value)


def _apply_transform(value: CanonicalValue, entry: SchemaEntry) -> CanonicalValue:
    if entry.transform is TextTransform.INVERT_NAME and isinstance(value, Text):
        return Text(invert_name(value.text), value.language)
    return value


def invert_name(text: str) -> str:
    """Turn ``"Doe, Jane"`` into ``"Jane Doe"``; anything else is returned unchanged."""

    parts = text.split(", ")
    if len(parts) != 2:  # noqa: PLR2004
        return text
    last, first = parts
    return f"{first} {last}"


def _describe(value: CanonicalValue) -> str:
    match value:
        case Text(text=text, language=language):
            return f"{text!r}@{language}" if language else repr(text)
        case Date():
            return value.iso
        case _:
            return repr(value)


__all__ = ["MAX_TEXT_LENGTH", "ExtractionResult", "extract_fields", "invert_name"]
