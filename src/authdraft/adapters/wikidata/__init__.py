"""Wikidata reconciliation adapter."""

from __future__ import annotations

from typing import TYPE_CHECKING

from authdraft.config.wikidata import get_wikidata_config

from .client import WikidataClient
from .lookup import WikidataLookup
from .translator import entity_to_existing, snak_to_value

if TYPE_CHECKING:
    from authdraft.config.wikidata import WikidataConfig


def build_wikidata_lookup(*, config: WikidataConfig | None = None) -> WikidataLookup:
    """Return the Wikidata ``KnowledgeBaseLookup`` configured from the environment."""

    return WikidataLookup(WikidataClient(config=config or get_wikidata_config()))


__all__ = [
    "WikidataClient",
    "WikidataLookup",
    "build_wikidata_lookup",
    "entity_to_existing",
    "snak_to_value",
]
