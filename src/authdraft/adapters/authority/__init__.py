"""Authority record adapter (VIAF, GND, LoC, BNE, IdRef, NTA, ORCID)."""

from __future__ import annotations

from .client import AuthorityRecordClient, is_graph_document
from .fetcher import build_http_record_fetcher

__all__ = ["AuthorityRecordClient", "build_http_record_fetcher", "is_graph_document"]
