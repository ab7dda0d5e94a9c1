"""``KnowledgeBaseLookup`` implementation backed by the Wikidata API."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from authdraft.domain.conversion.properties import normalize_external_id
from authdraft.domain.conversion.sources import default_registry
from authdraft.domain.errors import ReconciliationError

from .translator import entity_to_existing

if TYPE_CHECKING:
    from authdraft.domain.conversion.schema import SchemaRegistry
    from authdraft.domain.model import SourceType
    from authdraft.domain.ports import ExistingEntity

    from .client import WikidataClient

log = getLogger(__name__)


class WikidataLookup:
    """Find the single item that carries a source's identifier property."""

    def __init__(self, client: WikidataClient, *, registry: SchemaRegistry | None = None) -> None:
        self._client = client
        self._registry = registry or default_registry()

    async def lookup(self, source_type: SourceType, external_id: str) -> ExistingEntity | None:
        property_id = self._registry.lookup(source_type).property_id
        if property_id is None:
            log.debug("%s has no identifier property; nothing to look up", source_type)
            return None

        value = normalize_external_id(property_id, external_id)
        total, entity_ids = await self._client.search_external_id(property_id, value)
        if total == 0:
            return None
        if total > 1:
            raise ReconciliationError(
                f"{property_id}={value} is carried by {total} items ({', '.join(entity_ids)})"
            )

        if not entity_ids:
            raise ReconciliationError(f"Search for {property_id}={value} returned no entity ids")

        entity = await self._client.get_entity(entity_ids[0])
        return entity_to_existing(entity)
