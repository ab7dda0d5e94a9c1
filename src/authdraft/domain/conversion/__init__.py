"""Conversion core: authority record graph in, candidate statements out."""

from __future__ import annotations

from .extract import ExtractionResult, extract_fields
from .graph import RawGraph, parse_graph
from .mapping import MappingResult, map_statements
from .normalize import normalize
from .orchestrator import AuthorityConverter
from .reconcile import NullReconciler, Reconciler, StatementReconciler
from .schema import SchemaEntry, SchemaRegistry, SourceSchema, TextTransform, parse_source_type
from .serialization import (
    descriptions_to_wikibase,
    error_to_document,
    result_to_document,
    statement_to_wikibase,
)
from .sources import default_registry

__all__ = [
    "AuthorityConverter",
    "ExtractionResult",
    "MappingResult",
    "NullReconciler",
    "RawGraph",
    "Reconciler",
    "SchemaEntry",
    "SchemaRegistry",
    "SourceSchema",
    "StatementReconciler",
    "TextTransform",
    "default_registry",
    "descriptions_to_wikibase",
    "error_to_document",
    "extract_fields",
    "map_statements",
    "normalize",
    "parse_graph",
    "parse_source_type",
    "result_to_document",
    "statement_to_wikibase",
]
