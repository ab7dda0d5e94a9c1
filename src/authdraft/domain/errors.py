"""Conversion error taxonomy.

``FetchError``, ``ParseError`` and ``UnknownSourceError`` abort a conversion.
The remaining errors are raised inside a stage and turned into warnings by the
stage that catches them.
"""

from __future__ import annotations

from typing import ClassVar


class ConversionError(Exception):
    """Base class; ``kind`` is the machine-readable error tag."""

    kind: ClassVar[str] = "conversion_error"
    fatal: ClassVar[bool] = True


class FetchError(ConversionError):
    kind = "fetch_error"


class ParseError(ConversionError):
    kind = "parse_error"


class UnknownSourceError(ConversionError):
    kind = "unknown_source"


class NormalizationError(ConversionError):
    kind = "normalization_error"
    fatal = False


class MappingGapError(ConversionError):
    kind = "mapping_gap"
    fatal = False


class ReconciliationError(ConversionError):
    kind = "reconciliation_error"
    fatal = False


__all__ = [
    "ConversionError",
    "FetchError",
    "MappingGapError",
    "NormalizationError",
    "ParseError",
    "ReconciliationError",
    "UnknownSourceError",
]
