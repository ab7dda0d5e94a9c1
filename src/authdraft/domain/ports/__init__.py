"""Domain port definitions for adapters."""

from __future__ import annotations

from .fetching import FetchedRecord, RecordFetcher
from .lookup import ExistingEntity, KnowledgeBaseLookup

__all__ = [
    "ExistingEntity",
    "FetchedRecord",
    "KnowledgeBaseLookup",
    "RecordFetcher",
]
