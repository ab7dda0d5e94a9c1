"""Records flowing through a conversion: requests, fields, statements, results."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from authdraft.domain.model.enums import SourceType, StatementRank, ValueKind
from authdraft.domain.model.values import value_matches_kind

if TYPE_CHECKING:
    from collections.abc import Mapping
    from datetime import datetime

    from authdraft.domain.model.values import CanonicalValue, Text


@dataclass(frozen=True, slots=True)
class AuthorityReference:
    """Identifies the authority record to convert."""

    source_type: SourceType
    external_id: str

    def __post_init__(self) -> None:
        stripped = self.external_id.strip()
        if not stripped:
            raise ValueError("external_id must not be empty")
        object.__setattr__(self, "external_id", stripped)


@dataclass(frozen=True, slots=True)
class NormalizedField:
    field_name: str
    value_kind: ValueKind
    values: tuple[CanonicalValue, ...] = ()

    def __post_init__(self) -> None:
        for value in self.values:
            if not value_matches_kind(value, self.value_kind):
                raise ValueError(
                    f"{self.field_name}: {type(value).__name__} does not match {self.value_kind}"
                )


@dataclass(frozen=True, slots=True)
class Reference:
    """Provenance attached to every candidate statement."""

    source_type: SourceType
    external_id: str
    retrieved_at: datetime
    stated_in: str | None = None
    property_id: str | None = None


@dataclass(frozen=True, slots=True)
class CandidateStatement:
    property_id: str
    value: CanonicalValue
    reference: Reference
    qualifiers: Mapping[str, CanonicalValue] = field(default_factory=dict)
    rank: StatementRank = StatementRank.NORMAL

    @property
    def claim_key(self) -> tuple[str, CanonicalValue]:
        return (self.property_id, self.value)


@dataclass(frozen=True, slots=True)
class ConversionResult:
    authority: AuthorityReference
    statements: tuple[CandidateStatement, ...] = ()
    descriptions: tuple[Text, ...] = ()
    existing_entity_id: str | None = None
    warnings: tuple[str, ...] = ()
