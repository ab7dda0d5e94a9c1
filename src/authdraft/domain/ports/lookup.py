"""Port for looking up existing knowledge-base entities."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from authdraft.domain.model import CanonicalValue, SourceType


@dataclass(frozen=True, slots=True)
class ExistingEntity:
    """An entity already in the knowledge base and the claims it carries.

    ``description_languages`` lists the languages the entity already has a
    description in.
    """

    entity_id: str
    claims: frozenset[tuple[str, CanonicalValue]] = field(default_factory=frozenset)
    description_languages: frozenset[str] = field(default_factory=frozenset)

    def has_claim(self, property_id: str, value: CanonicalValue) -> bool:
        return (property_id, value) in self.claims

    def has_description(self, language: str) -> bool:
        return language in self.description_languages


@runtime_checkable
class KnowledgeBaseLookup(Protocol):
    """Find the entity carrying ``external_id`` for ``source_type``.

    Returns ``None`` when nothing matches; raises ``ReconciliationError`` when the
    lookup itself fails or is ambiguous.
    """

    async def lookup(self, source_type: SourceType, external_id: str) -> ExistingEntity | None: ...


__all__ = ["ExistingEntity", "KnowledgeBaseLookup"]
