"""HTTP client retrieving authority records as serialized graph documents."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

import httpx

from authdraft.adapters.http_resilience import ResilientClient
from authdraft.domain.errors import FetchError
from authdraft.domain.ports import FetchedRecord

if TYPE_CHECKING:
    from collections.abc import Callable

    from authdraft.config.authority import AuthorityConfig, FetchEndpoint
    from authdraft.config.http_resilience import ResilienceConfig
    from authdraft.domain.model import SourceType

log = getLogger(__name__)


def is_graph_document(body: bytes) -> bool:
    """Cache predicate: only keep responses that carry a document."""

    return bool(body.strip())


class AuthorityRecordClient:
    """Fetch records through one ``FetchEndpoint`` per source type.

    Implements the ``RecordFetcher`` port. Every transport problem (status,
    network, timeout) is reported as ``FetchError``.
    """

    def __init__(
        self,
        *,
        config: AuthorityConfig,
        client_factory: Callable[[ResilienceConfig], ResilientClient] | None = None,
    ) -> None:
        self._config = config
        self._resilience = config.resilience
        self._client_factory = client_factory or ResilientClient

    async def fetch(self, source_type: SourceType, external_id: str) -> FetchedRecord:
        endpoint = self._endpoint(source_type)
        url = endpoint.url(external_id)
        async with self._client_factory(self._resilience) as client:
            response = await self._perform_request(
                client=client, endpoint=endpoint, url=url, external_id=external_id
            )

        content = response.content
        if not content.strip():
            raise FetchError(f"{source_type} returned an empty document for {external_id}")
        log.debug("Fetched %s %s: %d bytes", source_type, external_id, len(content))
        return FetchedRecord(content=content, graph_format=endpoint.graph_format, url=url)

    def _endpoint(self, source_type: SourceType) -> FetchEndpoint:
        try:
            return self._config.endpoints[source_type]
        except KeyError:
            raise FetchError(f"No fetch endpoint configured for {source_type}") from None

    async def _perform_request(
        self,
        *,
        client: ResilientClient,
        endpoint: FetchEndpoint,
        url: str,
        external_id: str,
    ) -> httpx.Response:
        headers = {"Accept": endpoint.accept}
        try:
            if endpoint.method == "POST":
                response = await client.post(
                    url, json=endpoint.body(external_id), headers=headers
                )
            else:
                response = await client.get(url, headers=headers)
            response.raise_for_status()
        except httpx.HTTPStatusError as exc:
            status = exc.response.status_code
            if status == httpx.codes.NOT_FOUND:
                raise FetchError(f"Record {external_id} not found at {url}") from exc
            raise FetchError(f"{url} answered with HTTP {status}") from exc
        except httpx.TimeoutException as exc:
            raise FetchError(f"Timed out fetching {url}") from exc
        except httpx.HTTPError as exc:
            raise FetchError(f"Could not fetch {url}: {exc}") from exc
        return response
