"""Source-independent knowledge-base vocabulary.

Field names map to the same property whichever authority produced them; the
tables below are the only place where property and item ids are spelled out.
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from types import MappingProxyType
from typing import Final

from authdraft.domain.model import ExternalId

FIELD_PROPERTIES: Final = MappingProxyType(
    {
        "name": "P2561",
        "alternate_name": "P4970",
        "birth_date": "P569",
        "death_date": "P570",
        "gender": "P21",
        "language": "P1412",
        "instance_of": "P31",
        "described_at_url": "P973",
        "orcid": "P496",
        "isni": "P213",
        "viaf": "P214",
    }
)

SAME_AS_FIELD: Final[str] = "same_as"
DESCRIPTION_FIELD: Final[str] = "description"
DESCRIBED_AT_URL: Final[str] = "P973"
DATE_PROPERTIES: Final = frozenset({"P569", "P570"})

REASON_FOR_DEPRECATED_RANK: Final[str] = "P2241"
LESS_PRECISE_VALUE: Final[str] = "Q42727519"

STATED_IN: Final[str] = "P248"
RETRIEVED: Final[str] = "P813"

HUMAN: Final[str] = "Q5"
MALE: Final[str] = "Q6581097"
FEMALE: Final[str] = "Q6581072"

_LANGUAGES: Final = {
    "spa": "Q1321",
    "eng": "Q1860",
    "ger": "Q188",
    "fre": "Q150",
    "ita": "Q652",
    "por": "Q5146",
    "dut": "Q7411",
    "cat": "Q7026",
    "glg": "Q9307",
    "baq": "Q8752",
    "lat": "Q397",
}

# Controlled vocabulary values (IRIs or literals) with a fixed item meaning.
VALUE_ITEMS: Final = MappingProxyType(
    {
        "http://schema.org/Person": HUMAN,
        "https://schema.org/Person": HUMAN,
        "http://xmlns.com/foaf/0.1/Person": HUMAN,
        "https://id.kb.se/vocab/Person": HUMAN,
        "https://d-nb.info/standards/elementset/gnd#DifferentiatedPerson": HUMAN,
        "https://d-nb.info/standards/vocab/gnd/gender#male": MALE,
        "https://d-nb.info/standards/vocab/gnd/gender#female": FEMALE,
        "male": MALE,
        "female": FEMALE,
        "masculino": MALE,
        "femenino": FEMALE,
        # MARC language codes, as literals or id.loc.gov vocabulary IRIs
        **_LANGUAGES,
        **{
            f"http://id.loc.gov/vocabulary/languages/{code}": item
            for code, item in _LANGUAGES.items()
        },
    }
)


@dataclass(frozen=True, slots=True)
class ExternalIdPattern:
    """Recognises an authority URL and rebuilds the identifier from its groups."""

    pattern: re.Pattern[str]
    template: str
    property_id: str

    def extract(self, url: str) -> str | None:
        match = self.pattern.fullmatch(url)
        if match is None:
            return None
        return match.expand(self.template)


def _pattern(regex: str, template: str, property_id: str) -> ExternalIdPattern:
    return ExternalIdPattern(re.compile(regex), template, property_id)


_LOC_ID = r"(gf|n|nb|nr|no|ns|sh|sj)([4-9][0-9]|00|20[0-2][0-9])([0-9]{6})"

EXTERNAL_ID_PATTERNS: Final[tuple[ExternalIdPattern, ...]] = (
    _pattern(r"https?://viaf\.org/viaf/(\d+)/?", r"\1", "P214"),
    _pattern(r"https?://(?:www\.)?isni\.org/isni/(\d{15}[\dX])", r"\1", "P213"),
    _pattern(r"https?://isni-url\.oclc\.nl/isni/(\d{15}[\dX])", r"\1", "P213"),
    _pattern(
        r"https?://d-nb\.info/gnd/"
        r"(1[012]?\d{7}[0-9X]|[47]\d{6}-\d|[1-9]\d{0,7}-[0-9X]|3\d{7}[0-9X])",
        r"\1",
        "P227",
    ),
    _pattern(rf"https?://id\.loc\.gov/authorities/names/{_LOC_ID}", r"\1\2\3", "P244"),
    _pattern(rf"https?://id\.loc\.gov/rwo/agents/{_LOC_ID}(?:\.html)?", r"\1\2\3", "P244"),
    _pattern(r"https?://data\.bnf\.fr/(\d{8,9}).*", r"\1", "P268"),
    _pattern(
        r"https?://data\.bnf\.fr/ark:/12148/cb(\d{8,9}[0-9bcdfghjkmnpqrstvwxz]).*", r"\1", "P268"
    ),
    _pattern(r"https?://www\.idref\.fr/(\d{8}[\dX]).*", r"\1", "P269"),
    _pattern(r"https?://libris\.kb\.se/resource/auth/([1-9]\d{4,5})", r"\1", "P906"),
    _pattern(r"https?://datos\.bne\.es/resource/(.+?)", r"\1", "P950"),
    _pattern(r"https?://data\.bibsys\.no/data/notrbib/authorityentry/x([1-9]\d*)", r"\1", "P1015"),
    _pattern(
        r"https?://authority\.bibsys\.no/authority/rest/authorities/html/([1-9]\d*)",
        r"\1",
        "P1015",
    ),
    _pattern(r"https?://data\.bibliotheken\.nl/id/thes/p(\d{8}[\dX])", r"\1", "P1006"),
    _pattern(r"https?://orcid\.org/(\d{4}-\d{4}-\d{4}-\d{3}[\dX])", r"\1", "P496"),
    _pattern(r"https?://sws\.geonames\.org/([1-9][0-9]{0,8}).*", r"\1", "P1566"),
)

# Links into the target knowledge base itself are never proposed as statements.
EXCLUDED_URL_PATTERNS: Final[tuple[re.Pattern[str], ...]] = (
    re.compile(r"https?://www\.wikidata\.org/.*"),
)


def is_excluded_url(url: str) -> bool:
    return any(pattern.fullmatch(url) for pattern in EXCLUDED_URL_PATTERNS)


def url_to_external_id(url: str) -> tuple[str, ExternalId] | None:
    """Return ``(property_id, ExternalId)`` for a known authority URL."""

    for candidate in EXTERNAL_ID_PATTERNS:
        value = candidate.extract(url)
        if value is not None:
            return candidate.property_id, ExternalId(
                normalize_external_id(candidate.property_id, value)
            )
    return None


def normalize_external_id(property_id: str, value: str) -> str:
    """Bring an identifier into the form the knowledge base stores for ``property_id``."""

    value = value.strip()
    match property_id:
        case "P213":
            return value.replace(" ", "")
        case "P244" | "P1207":
            return value.replace("+", "")
        case "P1368":
            return value.replace("LNC10-", "")
        case "P8034":
            return value.replace("_", "/")
        case "P268" if value.isdigit():
            return f"{value}p"
        case _:
            return value


__all__ = [
    "DATE_PROPERTIES",
    "DESCRIBED_AT_URL",
    "DESCRIPTION_FIELD",
    "EXCLUDED_URL_PATTERNS",
    "EXTERNAL_ID_PATTERNS",
    "FIELD_PROPERTIES",
    "LESS_PRECISE_VALUE",
    "REASON_FOR_DEPRECATED_RANK",
    "RETRIEVED",
    "SAME_AS_FIELD",
    "STATED_IN",
    "VALUE_ITEMS",
    "ExternalIdPattern",
    "is_excluded_url",
    "normalize_external_id",
    "url_to_external_id",
]
