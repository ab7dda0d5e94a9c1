"""Coerce raw graph literals into canonical values."""

from __future__ import annotations

import re
from typing import TYPE_CHECKING, Final

from rdflib import BNode, Literal, URIRef

from authdraft.domain.conversion.properties import VALUE_ITEMS
from authdraft.domain.errors import NormalizationError
from authdraft.domain.model import (
    UNDETERMINED_LANGUAGE,
    Date,
    DatePrecision,
    ExternalId,
    ItemRef,
    Text,
    Url,
    ValueKind,
)

if TYPE_CHECKING:
    from authdraft.domain.conversion.graph import GraphNode
    from authdraft.domain.model import CanonicalValue

_DATE: Final = re.compile(
    r"(?P<sign>[+-])?(?P<year>\d{4,})"
    r"(?:-(?P<month>\d{2})"
    r"(?:-(?P<day>\d{2})(?:T\d{2}:\d{2}(?::\d{2}(?:\.\d+)?)?)?(?:Z|[+-]\d{2}:\d{2})?)?)?"
)
_HTTP_URL: Final = re.compile(r"https?://\S+")


def normalize(raw_value: GraphNode | str, expected_kind: ValueKind) -> CanonicalValue:
    """Normalize ``raw_value`` into the canonical value for ``expected_kind``.

    Plain strings are treated as untagged literals. Raises ``NormalizationError``
    when the value cannot be coerced; nothing is ever guessed or defaulted.
    """

    if isinstance(raw_value, BNode):
        raise NormalizationError("Blank node cannot be used as a value")
    node = raw_value if isinstance(raw_value, (URIRef, Literal)) else Literal(raw_value)
    if not str(node).strip():
        raise NormalizationError(f"Empty value where {expected_kind} was expected")

    match expected_kind:
        case ValueKind.DATE:
            return _normalize_date(node)
        case ValueKind.LANG_STRING | ValueKind.STRING:
            return _normalize_text(node)
        case ValueKind.IRI:
            return _normalize_iri(node)
        case ValueKind.EXTERNAL_ID:
            if isinstance(node, URIRef):
                raise NormalizationError(f"Expected an identifier literal, got IRI <{node}>")
            return ExternalId(str(node).strip())
        case ValueKind.ITEM:
            return _normalize_item(node)


def parse_date(text: str) -> Date:
    """Parse ``YYYY``, ``YYYY-MM`` or ``YYYY-MM-DD`` (optionally signed, with a time part)."""

    match = _DATE.fullmatch(text.strip())
    if match is None:
        raise NormalizationError(f"Unrecognised date: {text!r}")

    year = int(match["year"])
    if year == 0:
        raise NormalizationError(f"Year zero is not a valid date: {text!r}")
    if match["sign"] == "-":
        year = -year
    month = int(match["month"]) if match["month"] else None
    day = int(match["day"]) if match["day"] else None
    if day is not None:
        precision = DatePrecision.DAY
    elif month is not None:
        precision = DatePrecision.MONTH
    else:
        precision = DatePrecision.YEAR

    try:
        return Date(year, month, day, precision)
    except ValueError as exc:
        raise NormalizationError(f"Invalid date {text!r}: {exc}") from exc


def _normalize_date(node: URIRef | Literal) -> Date:
    if isinstance(node, URIRef):
        # date IRIs such as http://data.bnf.fr/date/1978
        return parse_date(str(node).rstrip("/").rsplit("/", 1)[-1])
    return parse_date(str(node))


def _normalize_text(node: URIRef | Literal) -> Text:
    if isinstance(node, URIRef):
        raise NormalizationError(f"Expected text, got IRI <{node}>")
    return Text(str(node).strip(), node.language or UNDETERMINED_LANGUAGE)


def _normalize_iri(node: URIRef | Literal) -> Url:
    value = str(node).strip()
    if isinstance(node, URIRef) or _HTTP_URL.fullmatch(value):
        return Url(value)
    raise NormalizationError(f"Expected an IRI, got literal {value!r}")


def _normalize_item(node: URIRef | Literal) -> ItemRef:
    key = str(node).strip()
    item_id = VALUE_ITEMS.get(key)
    if item_id is None and isinstance(node, Literal):
        item_id = VALUE_ITEMS.get(key.lower())
    if item_id is None:
        raise NormalizationError(f"No item known for vocabulary value {key!r}")
    return ItemRef(item_id)


__all__ = ["normalize", "parse_date"]
