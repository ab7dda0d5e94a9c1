"""Port for fetching raw authority records."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from authdraft.domain.model import GraphFormat, SourceType


@dataclass(frozen=True, slots=True)
class FetchedRecord:
    """Serialized graph document as returned by an authority."""

    content: bytes
    graph_format: GraphFormat
    url: str | None = None


@runtime_checkable
class RecordFetcher(Protocol):
    """Retrieve the serialized record for ``external_id`` or raise ``FetchError``."""

    async def fetch(self, source_type: SourceType, external_id: str) -> FetchedRecord: ...


__all__ = ["FetchedRecord", "RecordFetcher"]
