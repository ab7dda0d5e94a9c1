"""Built-in schemas for the supported authority sources.

Each source is a table of predicate -> field entries. Supporting a new
authority means adding a table here; extraction code stays untouched.
"""

from __future__ import annotations

from functools import cache
from typing import Final

from authdraft.domain.conversion.schema import (
    SchemaEntry,
    SchemaRegistry,
    SourceSchema,
    TextTransform,
)
from authdraft.domain.model import Cardinality, SourceType, ValueKind

SCHEMA: Final[str] = "http://schema.org/"
FOAF: Final[str] = "http://xmlns.com/foaf/0.1/"
RDF_TYPE: Final[str] = "http://www.w3.org/1999/02/22-rdf-syntax-ns#type"
RDFS_LABEL: Final[str] = "http://www.w3.org/2000/01/rdf-schema#label"
OWL_SAME_AS: Final[str] = "http://www.w3.org/2002/07/owl#sameAs"
SKOS_EXACT_MATCH: Final[str] = "http://www.w3.org/2004/02/skos/core#exactMatch"
SKOS_PREF_LABEL: Final[str] = "http://www.w3.org/2004/02/skos/core#prefLabel"
GND: Final[str] = "https://d-nb.info/standards/elementset/gnd#"
MADS: Final[str] = "http://www.loc.gov/mads/rdf/v1#"
BNE: Final[str] = "https://datos.bne.es/def/"
RDA: Final[str] = "http://www.rdaregistry.info/Elements/a/"
RDA_GENDER: Final[str] = f"{RDA}P50116"
RDA_LANGUAGE: Final[str] = f"{RDA}P50102"
RDA_BIOGRAPHY: Final[str] = f"{RDA}P50113"
RDVOCAB_BIOGRAPHY: Final[str] = "http://rdvocab.info/ElementsGr2/biographicalInformation"
BIO_DATE: Final[str] = "http://purl.org/vocab/bio/0.1/date"

ONE = Cardinality.ONE
MANY = Cardinality.MANY


def _same_as(*predicates: str) -> tuple[SchemaEntry, ...]:
    return tuple(
        SchemaEntry(predicate, "same_as", MANY, ValueKind.IRI) for predicate in predicates
    )


def _description(*predicates: str) -> tuple[SchemaEntry, ...]:
    return tuple(
        SchemaEntry(predicate, "description", MANY, ValueKind.LANG_STRING)
        for predicate in predicates
    )


EXAMPLE_AUTHORITY_SCHEMA = SourceSchema(
    source_type=SourceType.EXAMPLE_AUTHORITY,
    label="Example authority",
    subject_template="http://example.org/authority/{id}",
    entries=(
        SchemaEntry(f"{SCHEMA}name", "name", ONE, ValueKind.LANG_STRING),
        SchemaEntry(f"{SCHEMA}birthDate", "birth_date", ONE, ValueKind.DATE),
        SchemaEntry(f"{SCHEMA}deathDate", "death_date", ONE, ValueKind.DATE),
    ),
)

VIAF_SCHEMA = SourceSchema(
    source_type=SourceType.VIAF,
    label="Virtual International Authority File",
    subject_template="http://viaf.org/viaf/{id}",
    property_id="P214",
    stated_in="Q54919",
    entries=(
        SchemaEntry(RDF_TYPE, "instance_of", MANY, ValueKind.ITEM),
        SchemaEntry(
            f"{SCHEMA}name",
            "name",
            MANY,
            ValueKind.LANG_STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        SchemaEntry(
            f"{SCHEMA}alternateName",
            "alternate_name",
            MANY,
            ValueKind.LANG_STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        SchemaEntry(f"{SCHEMA}birthDate", "birth_date", MANY, ValueKind.DATE),
        SchemaEntry(f"{SCHEMA}deathDate", "death_date", MANY, ValueKind.DATE),
        *_same_as(f"{SCHEMA}sameAs", OWL_SAME_AS),
    ),
)

GND_SCHEMA = SourceSchema(
    source_type=SourceType.GND,
    label="Gemeinsame Normdatei",
    subject_template="https://d-nb.info/gnd/{id}",
    property_id="P227",
    stated_in="Q36578",
    entries=(
        SchemaEntry(RDF_TYPE, "instance_of", MANY, ValueKind.ITEM),
        SchemaEntry(
            f"{GND}preferredNameForThePerson",
            "name",
            ONE,
            ValueKind.STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        SchemaEntry(
            f"{GND}variantNameForThePerson",
            "alternate_name",
            MANY,
            ValueKind.STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        SchemaEntry(f"{GND}dateOfBirth", "birth_date", ONE, ValueKind.DATE),
        SchemaEntry(f"{GND}dateOfDeath", "death_date", ONE, ValueKind.DATE),
        SchemaEntry(f"{GND}gender", "gender", ONE, ValueKind.ITEM),
        *_description(f"{GND}biographicalOrHistoricalInformation"),
        *_same_as(OWL_SAME_AS),
    ),
)

LOC_SCHEMA = SourceSchema(
    source_type=SourceType.LOC,
    label="Library of Congress Name Authority File",
    subject_template="http://id.loc.gov/authorities/names/{id}",
    property_id="P244",
    stated_in="Q13219454",
    entries=(
        SchemaEntry(
            f"{MADS}authoritativeLabel",
            "name",
            ONE,
            ValueKind.STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        *_same_as(
            f"{MADS}hasExactExternalAuthority",
            f"{MADS}hasCloseExternalAuthority",
            SKOS_EXACT_MATCH,
            OWL_SAME_AS,
        ),
    ),
)

BNE_SCHEMA = SourceSchema(
    source_type=SourceType.BNE,
    label="Biblioteca Nacional de España",
    subject_template="https://datos.bne.es/resource/{id}",
    property_id="P950",
    stated_in="Q50358336",
    entries=(
        SchemaEntry(
            f"{BNE}P5012", "name", ONE, ValueKind.STRING, transform=TextTransform.INVERT_NAME
        ),
        SchemaEntry(f"{BNE}P5010", "birth_date", ONE, ValueKind.DATE),
        SchemaEntry(f"{BNE}P5011", "death_date", ONE, ValueKind.DATE),
        SchemaEntry(RDA_GENDER, "gender", ONE, ValueKind.ITEM),
        SchemaEntry(RDA_LANGUAGE, "language", MANY, ValueKind.ITEM),
        *_description(f"{BNE}P3067", RDA_BIOGRAPHY),
        *_same_as(OWL_SAME_AS),
    ),
)

IDREF_SCHEMA = SourceSchema(
    source_type=SourceType.IDREF,
    label="IdRef (SUDOC authorities)",
    subject_template="http://www.idref.fr/{id}/id",
    property_id="P269",
    stated_in="Q47757534",
    entries=(
        SchemaEntry(RDF_TYPE, "instance_of", MANY, ValueKind.ITEM),
        SchemaEntry(f"{FOAF}name", "name", ONE, ValueKind.STRING),
        SchemaEntry(
            SKOS_PREF_LABEL,
            "alternate_name",
            MANY,
            ValueKind.STRING,
            transform=TextTransform.INVERT_NAME,
        ),
        SchemaEntry(f"{FOAF}gender", "gender", ONE, ValueKind.ITEM),
        SchemaEntry(
            BIO_DATE,
            "birth_date",
            ONE,
            ValueKind.DATE,
            subject_template="http://www.idref.fr/{id}/birth",
        ),
        SchemaEntry(
            BIO_DATE,
            "death_date",
            ONE,
            ValueKind.DATE,
            subject_template="http://www.idref.fr/{id}/death",
        ),
        *_description(RDVOCAB_BIOGRAPHY),
        *_same_as(OWL_SAME_AS),
    ),
)

NTA_SCHEMA = SourceSchema(
    source_type=SourceType.NTA,
    label="Nederlandse Thesaurus van Auteursnamen",
    subject_template="http://data.bibliotheken.nl/id/thes/p{id}",
    property_id="P1006",
    stated_in="Q105488572",
    entries=(
        SchemaEntry(RDF_TYPE, "instance_of", MANY, ValueKind.ITEM),
        SchemaEntry(f"{SCHEMA}name", "name", ONE, ValueKind.STRING),
        SchemaEntry(f"{SCHEMA}alternateName", "alternate_name", MANY, ValueKind.STRING),
        SchemaEntry(f"{SCHEMA}birthDate", "birth_date", ONE, ValueKind.DATE),
        SchemaEntry(f"{SCHEMA}deathDate", "death_date", ONE, ValueKind.DATE),
        *_description(f"{SCHEMA}description"),
        *_same_as(f"{SCHEMA}sameAs", OWL_SAME_AS),
    ),
)

ORCID_SCHEMA = SourceSchema(
    source_type=SourceType.ORCID,
    label="ORCID",
    subject_template="https://orcid.org/{id}",
    property_id="P496",
    stated_in="Q51044",
    entries=(
        SchemaEntry(RDF_TYPE, "instance_of", MANY, ValueKind.ITEM),
        SchemaEntry(RDFS_LABEL, "name", ONE, ValueKind.STRING),
        SchemaEntry(f"{FOAF}name", "name", ONE, ValueKind.STRING),
        *_same_as(OWL_SAME_AS),
    ),
)

BUILTIN_SCHEMAS: Final[tuple[SourceSchema, ...]] = (
    EXAMPLE_AUTHORITY_SCHEMA,
    VIAF_SCHEMA,
    GND_SCHEMA,
    LOC_SCHEMA,
    BNE_SCHEMA,
    IDREF_SCHEMA,
    NTA_SCHEMA,
    ORCID_SCHEMA,
)


@cache
def default_registry() -> SchemaRegistry:
    """Process-wide registry over the built-in schemas."""

    return SchemaRegistry(BUILTIN_SCHEMAS)


__all__ = ["BUILTIN_SCHEMAS", "default_registry"]
