"""Map normalized fields onto candidate knowledge-base statements."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from types import MappingProxyType
from typing import TYPE_CHECKING

from authdraft.domain.conversion.properties import (
    DATE_PROPERTIES,
    DESCRIBED_AT_URL,
    DESCRIPTION_FIELD,
    FIELD_PROPERTIES,
    LESS_PRECISE_VALUE,
    REASON_FOR_DEPRECATED_RANK,
    SAME_AS_FIELD,
    is_excluded_url,
    normalize_external_id,
    url_to_external_id,
)
from authdraft.domain.errors import MappingGapError
from authdraft.domain.model import (
    CandidateStatement,
    Date,
    ExternalId,
    ItemRef,
    Reference,
    StatementRank,
    Text,
    Url,
)

if TYPE_CHECKING:
    from collections.abc import Iterator, Mapping
    from datetime import datetime

    from authdraft.domain.conversion.schema import SourceSchema
    from authdraft.domain.model import AuthorityReference, CanonicalValue, NormalizedField

log = getLogger(__name__)

type Claim = tuple[str, CanonicalValue]


@dataclass(frozen=True, slots=True)
class MappingResult:
    statements: tuple[CandidateStatement, ...]
    descriptions: tuple[Text, ...] = ()
    warnings: tuple[str, ...] = ()


def map_statements(
    fields: Mapping[str, NormalizedField],
    *,
    authority: AuthorityReference,
    schema: SourceSchema,
    retrieved_at: datetime,
) -> MappingResult:
    """Build the ordered candidate statements for ``fields``.

    ``retrieved_at`` is supplied by the caller so that mapping stays pure.
    Fields without a property mapping are reported as warnings. The
    ``description`` field is not a statement: its first value per language
    becomes a proposed description.
    """

    reference = Reference(
        source_type=authority.source_type,
        external_id=authority.external_id,
        retrieved_at=retrieved_at,
        stated_in=schema.stated_in,
        property_id=schema.property_id,
    )
    claims: dict[Claim, None] = {}
    warnings: list[str] = []

    if schema.property_id is not None:
        own_id = ExternalId(normalize_external_id(schema.property_id, authority.external_id))
        claims[(schema.property_id, own_id)] = None

    for field in fields.values():
        if field.field_name == DESCRIPTION_FIELD:
            continue
        try:
            field_claims = list(_field_claims(field))
        except MappingGapError as exc:
            warnings.append(str(exc))
            continue
        for claim in field_claims:
            claims.setdefault(claim, None)

    statements = tuple(_rank_dates(list(claims), reference))
    log.debug(
        "Mapped %d fields of %s to %d statements",
        len(fields),
        authority.external_id,
        len(statements),
    )
    description_field = fields.get(DESCRIPTION_FIELD)
    descriptions = _first_per_language(description_field.values if description_field else ())
    return MappingResult(
        statements=statements, descriptions=descriptions, warnings=tuple(warnings)
    )


def _first_per_language(values: tuple[CanonicalValue, ...]) -> tuple[Text, ...]:
    chosen: dict[str | None, Text] = {}
    for value in values:
        if isinstance(value, Text):
            chosen.setdefault(value.language, value)
    return tuple(chosen.values())


def _field_claims(field: NormalizedField) -> Iterator[Claim]:
    if field.field_name == SAME_AS_FIELD:
        yield from _same_as_claims(field)
        return

    property_id = FIELD_PROPERTIES.get(field.field_name)
    if property_id is None:
        raise MappingGapError(f"No property mapped for field {field.field_name!r}; skipped")
    for value in field.values:
        if isinstance(value, ExternalId):
            yield property_id, ExternalId(normalize_external_id(property_id, value.value))
        else:
            yield property_id, value


def _same_as_claims(field: NormalizedField) -> Iterator[Claim]:
    for value in field.values:
        if not isinstance(value, Url):
            continue
        if is_excluded_url(value.value):
            log.debug("Skipping link into the knowledge base: %s", value.value)
            continue
        external = url_to_external_id(value.value)
        if external is not None:
            yield external
        else:
            yield DESCRIBED_AT_URL, value


def _rank_dates(claims: list[Claim], reference: Reference) -> Iterator[CandidateStatement]:
    """Deprecate date values that are less precise than the best one of their property."""

    best: dict[str, int] = {}
    for property_id, value in claims:
        if property_id in DATE_PROPERTIES and isinstance(value, Date):
            best[property_id] = max(best.get(property_id, 0), value.precision)

    for property_id, value in claims:
        if (
            isinstance(value, Date)
            and property_id in best
            and value.precision < best[property_id]
        ):
            yield CandidateStatement(
                property_id=property_id,
                value=value,
                reference=reference,
                qualifiers=MappingProxyType(
                    {REASON_FOR_DEPRECATED_RANK: ItemRef(LESS_PRECISE_VALUE)}
                ),
                rank=StatementRank.DEPRECATED,
            )
        else:
            yield CandidateStatement(property_id=property_id, value=value, reference=reference)


__all__ = ["MappingResult", "map_statements"]
