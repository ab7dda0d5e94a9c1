"""Wikidata action API client."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, Any

import httpx
from pydantic import ValidationError

from authdraft.adapters.http_resilience import ResilientClient
from authdraft.domain.errors import ReconciliationError

from .schema import EntitiesResponse, Entity, SearchResponse

if TYPE_CHECKING:
    from collections.abc import Callable

    from authdraft.config.http_resilience import ResilienceConfig
    from authdraft.config.wikidata import WikidataConfig

log = getLogger(__name__)


class WikidataClient:
    """Low-level HTTP client for the two API calls reconciliation needs."""

    def __init__(
        self,
        *,
        config: WikidataConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def search_external_id(
        self, property_id: str, external_id: str, *, limit: int = 5
    ) -> tuple[int, list[str]]:
        """Return the total hit count and the ids of entities carrying the identifier."""

        params = {
            "action": "query",
            "list": "search",
            "srsearch": f'haswbstatement:"{property_id}={external_id}"',
            "srlimit": str(limit),
            "srprop": "",
            "format": "json",
        }
        payload = await self._perform_request(params)
        response = _validate(SearchResponse, payload)
        if response.error is not None:
            raise ReconciliationError(
                f"Wikidata search failed: {response.error.code} {response.error.info}".strip()
            )
        if response.query is None:
            raise ReconciliationError("Wikidata search response has no query block")
        return response.query.search_info.total_hits, [hit.title for hit in response.query.search]

    async def get_entity(self, entity_id: str) -> Entity:
        params = {
            "action": "wbgetentities",
            "ids": entity_id,
            "props": "claims|descriptions",
            "format": "json",
        }
        payload = await self._perform_request(params)
        response = _validate(EntitiesResponse, payload)
        if response.error is not None:
            error = response.error
            raise ReconciliationError(
                f"Wikidata entity lookup failed: {error.code} {error.info}".strip()
            )
        entity = response.entities.get(entity_id)
        if entity is None or entity.missing is not None:
            raise ReconciliationError(f"Wikidata entity {entity_id} is missing")
        return entity

    async def _perform_request(self, params: dict[str, str]) -> dict[str, Any]:
        try:
            async with self._client_factory(self._resilience) as client:
                response = await client.get(self._config.api_url, params=params)
                response.raise_for_status()
                payload = response.json()
        except httpx.HTTPError as exc:
            raise ReconciliationError(f"Wikidata request failed: {exc}") from exc
        except ValueError as exc:
            raise ReconciliationError("Wikidata returned a non-JSON response") from exc

        if not isinstance(payload, dict):
            raise ReconciliationError("Unexpected Wikidata response payload")
        return payload


def _validate[M: (SearchResponse, EntitiesResponse)](model: type[M], payload: dict[str, Any]) -> M:
    try:
        return model.model_validate(payload)
    except ValidationError as exc:
        log.debug("Invalid Wikidata payload: %s", exc)
        message = f"Malformed Wikidata response: {exc.error_count()} validation errors"
        raise ReconciliationError(message) from exc
