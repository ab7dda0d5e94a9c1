"""Rate-limited, cached ``httpx`` client used by the authority and Wikidata adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING, TypedDict, Unpack

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from authdraft.common.storage import get_http_cache_path
from authdraft.config.http_resilience import (
    CacheConfig,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
    ShouldCacheHook,
)

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import HeaderTypes, QueryParamTypes

log = getLogger(__name__)


class RequestOptions(TypedDict, total=False):
    params: QueryParamTypes | None
    headers: HeaderTypes | None
    json: object


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        max_backoff_wait=policy.max_backoff_wait,
        allowed_methods=tuple(policy.methods),
        status_forcelist=tuple(policy.statuses),
        retry_on_exceptions=policy.exceptions,
    )


class ResilientClient:
    """Async HTTP client that throttles calls and caches what its config allows."""

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        limit = config.ratelimit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds) if limit else None

        transport = RetryTransport(retry=build_retry(config.retry))
        headers = dict(config.default_headers or {})
        storage = _cache_storage(config.cache)
        if storage is None:
            self._client = httpx.AsyncClient(
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
                follow_redirects=True,
            )
        else:
            self._client = AsyncCacheClient(
                timeout=config.timeout_seconds,
                headers=headers,
                transport=transport,
                follow_redirects=True,
                storage=storage,
                policy=_cache_policy(config.cache),
            )

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, **options: Unpack[RequestOptions]) -> httpx.Response:
        return await self._throttled("GET", url, options)

    async def post(self, url: str, **options: Unpack[RequestOptions]) -> httpx.Response:
        return await self._throttled("POST", url, options)

    async def _throttled(
        self, method: str, url: str, options: RequestOptions
    ) -> httpx.Response:
        log.debug("%s %s %s", self.config.name, method, url)
        if self._limiter is None:
            return await self._client.request(method, url, **options)
        async with self._limiter:
            return await self._client.request(method, url, **options)


class _BodyPredicateFilter(BaseFilter[HishelCacheResponse]):
    """Lets ``should_cache`` veto responses whose body is not worth keeping."""

    def __init__(self, predicate: ShouldCacheHook) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        return body is None or bool(self._predicate(body))


def _cache_storage(config: CacheConfig | None) -> AsyncSqliteStorage | None:
    if config is None:
        return None
    match config.backend:
        case "sqlite":
            database_path = str(get_http_cache_path())
        case "memory":
            database_path = ":memory:"
        case other:
            raise ValueError(f"Unsupported cache backend: {other}")
    return AsyncSqliteStorage(database_path=database_path, default_ttl=config.ttl_seconds)


def _cache_policy(config: CacheConfig | None) -> FilterPolicy | None:
    if config is None or config.should_cache is None:
        return None
    return FilterPolicy(response_filters=[_BodyPredicateFilter(config.should_cache)])


__all__ = [
    "CacheConfig",
    "RateLimit",
    "RequestOptions",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]
