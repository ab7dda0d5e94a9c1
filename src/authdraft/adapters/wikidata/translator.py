"""Translate Wikidata claims into canonical values."""

from __future__ import annotations

import re
from logging import getLogger
from typing import TYPE_CHECKING, Final

from authdraft.domain.conversion.properties import normalize_external_id
from authdraft.domain.model import (
    Date,
    DatePrecision,
    ExternalId,
    ItemRef,
    Text,
    Url,
)
from authdraft.domain.ports import ExistingEntity

if TYPE_CHECKING:
    from authdraft.domain.model import CanonicalValue

    from .schema import Entity, Snak

log = getLogger(__name__)

_WIKIBASE_TIME: Final = re.compile(r"(?P<sign>[+-])(?P<year>\d+)-(?P<month>\d{2})-(?P<day>\d{2})T")


def snak_to_value(snak: Snak) -> CanonicalValue | None:
    """Return the canonical value of a value snak, ``None`` for unsupported ones."""

    if snak.snak_type != "value" or snak.datavalue is None:
        return None
    raw = snak.datavalue.value
    match snak.datatype, raw:
        case "external-id", str():
            return ExternalId(normalize_external_id(snak.property, raw))
        case "url", str():
            return Url(raw)
        case "string", str():
            return Text(raw)
        case "monolingualtext", {"text": str(text), "language": str(language)}:
            return Text(text, language)
        case "time", {"time": str(time), "precision": int(precision)}:
            return _time_to_date(time, precision)
        case "wikibase-item", {"id": str(item_id)}:
            return ItemRef(item_id)
        case _:
            return None


def _time_to_date(time: str, precision: int) -> Date | None:
    parts = _WIKIBASE_TIME.match(time)
    if parts is None:
        return None
    year = int(parts["year"]) * (-1 if parts["sign"] == "-" else 1)
    month, day = int(parts["month"]), int(parts["day"])
    try:
        date_precision = DatePrecision(precision)
        if date_precision is DatePrecision.YEAR:
            return Date(year)
        if date_precision is DatePrecision.MONTH:
            return Date(year, month, precision=DatePrecision.MONTH)
        return Date(year, month, day, DatePrecision.DAY)
    except ValueError:
        # coarser than a year, or an impossible calendar date
        log.debug("Ignoring time value %s with precision %s", time, precision)
        return None


def entity_to_existing(entity: Entity) -> ExistingEntity:
    """Collect the ``(property, value)`` pairs and description languages of ``entity``."""

    claims: set[tuple[str, CanonicalValue]] = set()
    for property_id, property_claims in entity.claims.items():
        for claim in property_claims:
            value = snak_to_value(claim.mainsnak)
            if value is not None:
                claims.add((property_id, value))
    return ExistingEntity(
        entity_id=entity.id,
        claims=frozenset(claims),
        description_languages=frozenset(entity.descriptions),
    )
