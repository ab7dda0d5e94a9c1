"""Domain enums (pure, dependency-light)."""

from __future__ import annotations

from enum import IntEnum, StrEnum


class SourceType(StrEnum):
    """Authority sources the converter knows how to read."""

    EXAMPLE_AUTHORITY = "EXAMPLE_AUTHORITY"
    VIAF = "VIAF"
    GND = "GND"
    LOC = "LOC"
    BNE = "BNE"
    IDREF = "IDREF"
    NTA = "NTA"
    ORCID = "ORCID"


class GraphFormat(StrEnum):
    """Serializations accepted by the graph parser (values are rdflib format names)."""

    RDF_XML = "xml"
    TURTLE = "turtle"
    NTRIPLES = "nt"
    JSON_LD = "json-ld"


class Cardinality(StrEnum):
    ONE = "one"
    MANY = "many"


class ValueKind(StrEnum):
    STRING = "string"
    LANG_STRING = "lang_string"
    DATE = "date"
    IRI = "iri"
    EXTERNAL_ID = "external_id"
    ITEM = "item"


class DatePrecision(IntEnum):
    """Date precision using the knowledge base's numeric codes."""

    YEAR = 9
    MONTH = 10
    DAY = 11


class StatementRank(StrEnum):
    NORMAL = "normal"
    DEPRECATED = "deprecated"
