"""Render conversion results and errors as JSON-compatible documents."""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Final

from authdraft.domain.conversion.properties import RETRIEVED, STATED_IN
from authdraft.domain.model import (
    UNDETERMINED_LANGUAGE,
    Date,
    DatePrecision,
    ExternalId,
    ItemRef,
    Text,
    Url,
)

if TYPE_CHECKING:
    from collections.abc import Iterable

    from authdraft.domain.errors import ConversionError
    from authdraft.domain.model import (
        CandidateStatement,
        CanonicalValue,
        ConversionResult,
        Reference,
    )

type Document = dict[str, Any]

GREGORIAN_CALENDAR: Final[str] = "http://www.wikidata.org/entity/Q1985727"


def result_to_document(result: ConversionResult) -> Document:
    return {
        "authority": {
            "source_type": str(result.authority.source_type),
            "external_id": result.authority.external_id,
        },
        "statements": [statement_to_document(statement) for statement in result.statements],
        "descriptions": [value_to_document(description) for description in result.descriptions],
        "existing_entity_id": result.existing_entity_id,
        "warnings": list(result.warnings),
    }


def error_to_document(error: ConversionError) -> Document:
    return {"error": {"kind": error.kind, "message": str(error)}}


def statement_to_document(statement: CandidateStatement) -> Document:
    return {
        "property": statement.property_id,
        "value": value_to_document(statement.value),
        "qualifiers": {
            property_id: value_to_document(value)
            for property_id, value in statement.qualifiers.items()
        },
        "rank": str(statement.rank),
        "reference": _reference_to_document(statement.reference),
    }


def value_to_document(value: CanonicalValue) -> Document:
    """Type-tagged form of a canonical value."""

    match value:
        case Text():
            return {"type": "text", "text": value.text, "language": value.language}
        case Date():
            return {
                "type": "date",
                "year": value.year,
                "month": value.month,
                "day": value.day,
                "precision": int(value.precision),
                "iso": value.iso,
            }
        case ExternalId():
            return {"type": "external_id", "value": value.value}
        case Url():
            return {"type": "url", "value": value.value}
        case ItemRef():
            return {"type": "item", "id": value.item_id}


def _reference_to_document(reference: Reference) -> Document:
    return {
        "source_type": str(reference.source_type),
        "external_id": reference.external_id,
        "retrieved_at": reference.retrieved_at.isoformat(),
        "stated_in": reference.stated_in,
        "property_id": reference.property_id,
    }


def descriptions_to_wikibase(descriptions: Iterable[Text]) -> Document:
    """Render descriptions as the language-keyed term map of a Wikibase entity."""

    terms: Document = {}
    for description in descriptions:
        language = description.language or UNDETERMINED_LANGUAGE
        terms.setdefault(language, {"language": language, "value": description.text})
    return terms


def statement_to_wikibase(statement: CandidateStatement) -> Document:
    """Render ``statement`` as a Wikibase claim (the shape ``wbeditentity`` accepts)."""

    claim: Document = {
        "type": "statement",
        "rank": str(statement.rank),
        "mainsnak": _snak(statement.property_id, statement.value),
    }
    if statement.qualifiers:
        claim["qualifiers"] = {
            property_id: [_snak(property_id, value)]
            for property_id, value in statement.qualifiers.items()
        }
        claim["qualifiers-order"] = list(statement.qualifiers)
    claim["references"] = [_reference_snaks(statement.reference)]
    return claim


def _reference_snaks(reference: Reference) -> Document:
    snaks: dict[str, list[Document]] = {}
    if reference.stated_in is not None:
        snaks[STATED_IN] = [_snak(STATED_IN, ItemRef(reference.stated_in))]
    if reference.property_id is not None:
        snaks[reference.property_id] = [
            _snak(reference.property_id, ExternalId(reference.external_id))
        ]
    retrieved = reference.retrieved_at.date()
    snaks[RETRIEVED] = [
        _snak(
            RETRIEVED,
            Date(retrieved.year, retrieved.month, retrieved.day, DatePrecision.DAY),
        )
    ]
    return {"snaks": snaks, "snaks-order": list(snaks)}


def _snak(property_id: str, value: CanonicalValue) -> Document:
    datatype, datavalue = _datavalue(value)
    return {
        "snaktype": "value",
        "property": property_id,
        "datavalue": datavalue,
        "datatype": datatype,
    }


def _datavalue(value: CanonicalValue) -> tuple[str, Document]:
    match value:
        case Text():
            return "monolingualtext", {
                "value": {"text": value.text, "language": value.language or UNDETERMINED_LANGUAGE},
                "type": "monolingualtext",
            }
        case Date():
            return "time", {
                "value": {
                    "time": value.wikibase_time,
                    "timezone": 0,
                    "before": 0,
                    "after": 0,
                    "precision": int(value.precision),
                    "calendarmodel": GREGORIAN_CALENDAR,
                },
                "type": "time",
            }
        case ExternalId():
            return "external-id", {"value": value.value, "type": "string"}
        case Url():
            return "url", {"value": value.value, "type": "string"}
        case ItemRef():
            return "wikibase-item", {
                "value": {
                    "entity-type": "item",
                    "numeric-id": int(value.item_id.removeprefix("Q")),
                    "id": value.item_id,
                },
                "type": "wikibase-entityid",
            }


__all__ = [
    "descriptions_to_wikibase",
    "error_to_document",
    "result_to_document",
    "statement_to_document",
    "statement_to_wikibase",
    "value_to_document",
]
