"""Default record fetcher wiring."""

from __future__ import annotations

from typing import TYPE_CHECKING

from authdraft.config.authority import get_authority_config

from .client import AuthorityRecordClient, is_graph_document

if TYPE_CHECKING:
    from authdraft.config.authority import AuthorityConfig
    from authdraft.domain.ports import RecordFetcher


def build_http_record_fetcher(*, config: AuthorityConfig | None = None) -> RecordFetcher:
    """Return the HTTP ``RecordFetcher`` configured from the environment."""

    effective = config or get_authority_config(cache_predicate=is_graph_document)
    return AuthorityRecordClient(config=effective)
