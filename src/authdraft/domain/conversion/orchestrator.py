"""Compose fetch, parse, extract, map and reconcile into one conversion."""

from __future__ import annotations

import asyncio
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING

from authdraft.domain.conversion.extract import extract_fields
from authdraft.domain.conversion.graph import parse_graph
from authdraft.domain.conversion.mapping import map_statements
from authdraft.domain.conversion.reconcile import NullReconciler
from authdraft.domain.conversion.sources import default_registry
from authdraft.domain.errors import FetchError

if TYPE_CHECKING:
    from collections.abc import Callable

    from authdraft.domain.conversion.reconcile import StatementReconciler
    from authdraft.domain.conversion.schema import SchemaRegistry
    from authdraft.domain.model import AuthorityReference, ConversionResult
    from authdraft.domain.ports import FetchedRecord, RecordFetcher

log = getLogger(__name__)

DEFAULT_FETCH_TIMEOUT = 30.0
DEFAULT_LOOKUP_TIMEOUT = 10.0


def _utcnow() -> datetime:
    return datetime.now(UTC)


class AuthorityConverter:
    """Turn an authority reference into a ``ConversionResult``.

    Only ``UnknownSourceError``, ``FetchError`` and ``ParseError`` escape
    ``convert``; every later problem ends up in ``ConversionResult.warnings``.
    """

    def __init__(
        self,
        *,
        fetcher: RecordFetcher,
        reconciler: StatementReconciler | None = None,
        registry: SchemaRegistry | None = None,
        clock: Callable[[], datetime] = _utcnow,
        fetch_timeout: float | None = DEFAULT_FETCH_TIMEOUT,
        lookup_timeout: float | None = DEFAULT_LOOKUP_TIMEOUT,
    ) -> None:
        self._fetcher = fetcher
        self._reconciler = reconciler or NullReconciler()
        self._registry = registry or default_registry()
        self._clock = clock
        self._fetch_timeout = fetch_timeout
        self._lookup_timeout = lookup_timeout

    async def convert(self, authority: AuthorityReference) -> ConversionResult:
        schema = self._registry.lookup(authority.source_type)
        record = await self._fetch(authority)

        extraction = extract_fields(
            parse_graph(record.content, record.graph_format),
            schema,
            authority.external_id,
        )

        mapping = map_statements(
            extraction.fields,
            authority=authority,
            schema=schema,
            retrieved_at=self._clock(),
        )
        result = await self._reconciler.reconcile(
            authority.external_id,
            authority.source_type,
            mapping.statements,
            descriptions=mapping.descriptions,
            warnings=_unique((*extraction.warnings, *mapping.warnings)),
            timeout=self._lookup_timeout,
        )
        log.info(
            "Converted %s %s: statements=%d, existing=%s, warnings=%d",
            authority.source_type,
            authority.external_id,
            len(result.statements),
            result.existing_entity_id,
            len(result.warnings),
        )
        return result

    async def _fetch(self, authority: AuthorityReference) -> FetchedRecord:
        try:
            async with asyncio.timeout(self._fetch_timeout):
                record = await self._fetcher.fetch(authority.source_type, authority.external_id)
        except TimeoutError as exc:
            raise FetchError(
                f"Fetching {authority.source_type} {authority.external_id} timed out "
                f"after {self._fetch_timeout}s"
            ) from exc
        log.debug(
            "Fetched %s %s (%d bytes) from %s",
            authority.source_type,
            authority.external_id,
            len(record.content),
            record.url,
        )
        return record


def _unique(warnings: tuple[str, ...]) -> tuple[str, ...]:
    return tuple(dict.fromkeys(warnings))


__all__ = ["AuthorityConverter"]
