"""Public domain model surface."""

from __future__ import annotations

from authdraft.domain.model.enums import (
    Cardinality,
    DatePrecision,
    GraphFormat,
    SourceType,
    StatementRank,
    ValueKind,
)
from authdraft.domain.model.statements import (
    AuthorityReference,
    CandidateStatement,
    ConversionResult,
    NormalizedField,
    Reference,
)
from authdraft.domain.model.values import (
    UNDETERMINED_LANGUAGE,
    CanonicalValue,
    Date,
    ExternalId,
    ItemRef,
    Text,
    Url,
)

__all__ = [  # noqa: RUF022
    # enums
    "Cardinality",
    "DatePrecision",
    "GraphFormat",
    "SourceType",
    "StatementRank",
    "ValueKind",
    # values
    "UNDETERMINED_LANGUAGE",
    "CanonicalValue",
    "Date",
    "ExternalId",
    "ItemRef",
    "Text",
    "Url",
    # statements
    "AuthorityReference",
    "CandidateStatement",
    "ConversionResult",
    "NormalizedField",
    "Reference",
]
