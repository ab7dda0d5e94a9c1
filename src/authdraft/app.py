"""Application orchestration entry points."""

from __future__ import annotations

import asyncio
from logging import getLogger
from typing import TYPE_CHECKING

from authdraft.adapters.authority import build_http_record_fetcher, is_graph_document
from authdraft.adapters.wikidata import build_wikidata_lookup
from authdraft.config.authority import get_authority_config
from authdraft.config.wikidata import get_wikidata_config
from authdraft.domain.conversion import (
    AuthorityConverter,
    NullReconciler,
    Reconciler,
    parse_source_type,
)
from authdraft.domain.conversion.orchestrator import DEFAULT_FETCH_TIMEOUT, DEFAULT_LOOKUP_TIMEOUT
from authdraft.domain.model import AuthorityReference, SourceType

if TYPE_CHECKING:
    from authdraft.domain.conversion.reconcile import StatementReconciler
    from authdraft.domain.model import ConversionResult
    from authdraft.domain.ports import KnowledgeBaseLookup, RecordFetcher

log = getLogger(__name__)


def build_converter(
    *,
    fetcher: RecordFetcher | None = None,
    lookup: KnowledgeBaseLookup | None = None,
    reconcile: bool = True,
) -> AuthorityConverter:
    """Wire the converter to the HTTP adapters (or to the given collaborators)."""

    authority_config = (
        get_authority_config(cache_predicate=is_graph_document) if fetcher is None else None
    )
    effective_fetcher = fetcher or build_http_record_fetcher(config=authority_config)

    fetch_timeout = (
        authority_config.fetch_timeout if authority_config is not None else DEFAULT_FETCH_TIMEOUT
    )
    lookup_timeout = DEFAULT_LOOKUP_TIMEOUT
    reconciler: StatementReconciler
    if not reconcile:
        reconciler = NullReconciler()
    elif lookup is not None:
        reconciler = Reconciler(lookup)
    else:
        wikidata_config = get_wikidata_config()
        lookup_timeout = wikidata_config.lookup_timeout
        reconciler = Reconciler(build_wikidata_lookup(config=wikidata_config))

    return AuthorityConverter(
        fetcher=effective_fetcher,
        reconciler=reconciler,
        fetch_timeout=fetch_timeout,
        lookup_timeout=lookup_timeout,
    )


async def convert_authority_async(
    source_type: SourceType | str,
    external_id: str,
    *,
    converter: AuthorityConverter | None = None,
    reconcile: bool = True,
) -> ConversionResult:
    """Convert one authority record into candidate statements."""

    source = source_type if isinstance(source_type, SourceType) else parse_source_type(source_type)
    authority = AuthorityReference(source, external_id)
    active = converter or build_converter(reconcile=reconcile)
    log.info(
        "Converting %s %s (reconcile=%s)", authority.source_type, authority.external_id, reconcile
    )
    return await active.convert(authority)


def convert_authority(
    source_type: SourceType | str,
    external_id: str,
    *,
    converter: AuthorityConverter | None = None,
    reconcile: bool = True,
) -> ConversionResult:
    """Blocking wrapper around ``convert_authority_async``."""

    return asyncio.run(
        convert_authority_async(
            source_type,
            external_id,
            converter=converter,
            reconcile=reconcile,
        )
    )
