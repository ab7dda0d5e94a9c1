from __future__ import annotations

from authdraft.domain.conversion import (
    ExtractionResult,
    SchemaEntry,
    SchemaRegistry,
    SourceSchema,
    extract_fields,
    parse_graph,
)
from authdraft.domain.conversion.extract import MAX_TEXT_LENGTH, invert_name
from authdraft.domain.model import (
    Cardinality,
    Date,
    DatePrecision,
    GraphFormat,
    ItemRef,
    SourceType,
    Text,
    Url,
    ValueKind,
)
from tests.support.graphs import EXAMPLE_DOCUMENT, EXAMPLE_SUBJECT, GND_DOCUMENT, rdf_document


def _example(
    registry: SchemaRegistry, document: bytes, external_id: str = "12345"
) -> ExtractionResult:
    schema = registry.lookup(SourceType.EXAMPLE_AUTHORITY)
    return extract_fields(parse_graph(document, GraphFormat.RDF_XML), schema, external_id)


def test_example_record_yields_name_and_birth_date(registry: SchemaRegistry) -> None:
    result = _example(registry, EXAMPLE_DOCUMENT)

    assert result.warnings == ()
    assert set(result.fields) == {"name", "birth_date"}
    assert result.fields["name"].values == (Text("Jane Doe", "en"),)
    assert result.fields["name"].value_kind is ValueKind.LANG_STRING
    assert result.fields["birth_date"].values == (
        Date(1950, 5, precision=DatePrecision.MONTH),
    )


def test_year_only_date_keeps_year_precision(registry: SchemaRegistry) -> None:
    document = rdf_document(EXAMPLE_SUBJECT, "<schema:birthDate>1983</schema:birthDate>")

    result = _example(registry, document)

    (birth,) = result.fields["birth_date"].values
    assert birth == Date(1983)
    assert isinstance(birth, Date)
    assert birth.precision is DatePrecision.YEAR


def test_cardinality_one_keeps_a_single_value_and_warns(registry: SchemaRegistry) -> None:
    document = rdf_document(
        EXAMPLE_SUBJECT,
        """
    <schema:name xml:lang="en">Jane Doe</schema:name>
    <schema:name xml:lang="en">J. Doe</schema:name>
        """,
    )

    result = _example(registry, document)

    (kept,) = result.fields["name"].values
    assert kept in {Text("Jane Doe", "en"), Text("J. Doe", "en")}
    assert len(result.warnings) == 1
    assert "allows one value" in result.warnings[0]


def test_repeated_equal_value_of_single_valued_field_warns(registry: SchemaRegistry) -> None:
    document = rdf_document(
        EXAMPLE_SUBJECT,
        """
    <schema:birthDate>1950-05</schema:birthDate>
    <schema:birthDate xml:lang="en">1950-05</schema:birthDate>
        """,
    )

    result = _example(registry, document)

    assert result.fields["birth_date"].values == (Date(1950, 5, precision=DatePrecision.MONTH),)
    (warning,) = result.warnings
    assert warning.startswith("Field 'birth_date' allows one value; kept 1950-05, dropped 1950-05")


def test_identical_values_of_multi_valued_field_are_merged_silently(
    registry: SchemaRegistry,
) -> None:
    document = rdf_document(
        "http://viaf.org/viaf/113230702",
        """
    <schema:alternateName xml:lang="fr">Doe, Jeanne</schema:alternateName>
    <schema:alternateName xml:lang="fr">Jeanne Doe</schema:alternateName>
        """,
    )

    result = extract_fields(
        parse_graph(document, GraphFormat.RDF_XML),
        registry.lookup(SourceType.VIAF),
        "113230702",
    )

    assert result.fields["alternate_name"].values == (Text("Jeanne Doe", "fr"),)
    assert result.warnings == ()


def test_unparsable_value_is_dropped_with_warning(registry: SchemaRegistry) -> None:
    document = rdf_document(
        EXAMPLE_SUBJECT,
        """
    <schema:name>Jane Doe</schema:name>
    <schema:birthDate>sometime in the fifties</schema:birthDate>
        """,
    )

    result = _example(registry, document)

    assert "birth_date" not in result.fields
    assert result.fields["name"].values == (Text("Jane Doe", "und"),)
    (warning,) = result.warnings
    assert warning.startswith("Field 'birth_date': dropped value from http://schema.org/birthDate")


def test_missing_record_subject_yields_no_fields_and_one_warning(
    registry: SchemaRegistry,
) -> None:
    result = _example(registry, EXAMPLE_DOCUMENT, external_id="999")

    assert result.fields == {}
    (warning,) = result.warnings
    assert "http://example.org/authority/999" in warning


def test_subject_falls_back_between_http_and_https(registry: SchemaRegistry) -> None:
    document = rdf_document(
        "https://example.org/authority/12345",
        '<schema:name xml:lang="en">Jane Doe</schema:name>',
    )

    result = _example(registry, document)

    assert result.fields["name"].values == (Text("Jane Doe", "en"),)


def test_gnd_record(registry: SchemaRegistry) -> None:
    schema = registry.lookup(SourceType.GND)

    result = extract_fields(parse_graph(GND_DOCUMENT, GraphFormat.RDF_XML), schema, "118540238")

    assert result.warnings == ()
    fields = result.fields
    assert fields["instance_of"].values == (ItemRef("Q5"),)
    assert fields["name"].values == (Text("Johann Wolfgang von Goethe", "und"),)
    assert set(fields["alternate_name"].values) == {
        Text("J. W. Goethe", "und"),
        Text("Gête", "und"),
    }
    assert fields["birth_date"].values == (Date(1749, 8, 28, DatePrecision.DAY),)
    assert fields["death_date"].values == (Date(1832, 3, 22, DatePrecision.DAY),)
    assert fields["gender"].values == (ItemRef("Q6581097"),)
    assert Url("http://viaf.org/viaf/24602065") in fields["same_as"].values
    assert len(fields["same_as"].values) == 6


def test_entries_can_read_from_a_related_subject(registry: SchemaRegistry) -> None:
    schema = registry.lookup(SourceType.IDREF)
    document = rdf_document(
        "http://www.idref.fr/026927608/id",
        "<foaf:name>Marie Curie</foaf:name>",
        extra="""
  <rdf:Description rdf:about="http://www.idref.fr/026927608/birth">
    <bio:date>1867-11-07</bio:date>
  </rdf:Description>
        """,
    )

    result = extract_fields(parse_graph(document, GraphFormat.RDF_XML), schema, "026927608")

    assert result.fields["name"].values == (Text("Marie Curie", "und"),)
    assert result.fields["birth_date"].values == (Date(1867, 11, 7, DatePrecision.DAY),)
    assert "death_date" not in result.fields


def test_container_values_are_expanded(registry: SchemaRegistry) -> None:
    schema = registry.lookup(SourceType.VIAF)
    document = rdf_document(
        "http://viaf.org/viaf/113230702",
        """
    <schema:alternateName>
      <rdf:Bag>
        <rdf:li xml:lang="fr">Doe, Jeanne</rdf:li>
        <rdf:li xml:lang="de">Doe, Johanna</rdf:li>
      </rdf:Bag>
    </schema:alternateName>
        """,
    )

    result = extract_fields(parse_graph(document, GraphFormat.RDF_XML), schema, "113230702")

    assert result.fields["alternate_name"].values == (
        Text("Jeanne Doe", "fr"),
        Text("Johanna Doe", "de"),
    )


def test_entry_with_conflicting_kind_is_skipped_with_warning() -> None:
    schema = SourceSchema(
        source_type=SourceType.EXAMPLE_AUTHORITY,
        label="conflicting",
        subject_template="http://example.org/authority/{id}",
        entries=(
            SchemaEntry("http://schema.org/name", "name", Cardinality.ONE, ValueKind.LANG_STRING),
            SchemaEntry("http://schema.org/birthDate", "name", Cardinality.ONE, ValueKind.DATE),
        ),
    )

    result = extract_fields(parse_graph(EXAMPLE_DOCUMENT, GraphFormat.RDF_XML), schema, "12345")

    assert result.fields["name"].values == (Text("Jane Doe", "en"),)
    (warning,) = result.warnings
    assert warning.endswith("entry skipped")


def test_extraction_is_deterministic(registry: SchemaRegistry) -> None:
    schema = registry.lookup(SourceType.GND)

    first = extract_fields(parse_graph(GND_DOCUMENT, GraphFormat.RDF_XML), schema, "118540238")
    second = extract_fields(parse_graph(GND_DOCUMENT, GraphFormat.RDF_XML), schema, "118540238")

    assert first == second


def test_invert_name() -> None:
    assert invert_name("Doe, Jane") == "Jane Doe"
    assert invert_name("Jane Doe") == "Jane Doe"
    assert invert_name("Doe, Jane, 1950-") == "Doe, Jane, 1950-"


def test_overlong_text_is_shortened_with_warning(registry: SchemaRegistry) -> None:
    long_name = "x" * 600
    document = rdf_document(
        EXAMPLE_SUBJECT, f'<schema:name xml:lang="en">{long_name}</schema:name>'
    )

    result = _example(registry, document)

    (name,) = result.fields["name"].values
    assert isinstance(name, Text)
    assert len(name.text) == MAX_TEXT_LENGTH
    assert name.language == "en"
    assert result.warnings == (
        "Field 'name': value from http://schema.org/name shortened to 250 characters",
    )


def test_bne_record_yields_description_and_language(registry: SchemaRegistry) -> None:
    document = rdf_document(
        "https://datos.bne.es/resource/XX1718747",
        """
    <bne:P5012>Cervantes Saavedra, Miguel de</bne:P5012>
    <bne:P3067 xml:lang="es">Novelista, poeta y dramaturgo</bne:P3067>
    <rdaa:P50113>Autor del Quijote</rdaa:P50113>
    <rdaa:P50102>spa</rdaa:P50102>
    <rdaa:P50102>klingon</rdaa:P50102>
        """,
    )

    result = extract_fields(
        parse_graph(document, GraphFormat.RDF_XML), registry.lookup(SourceType.BNE), "XX1718747"
    )

    assert result.fields["name"].values == (Text("Miguel de Cervantes Saavedra", "und"),)
    assert result.fields["description"].values == (
        Text("Novelista, poeta y dramaturgo", "es"),
        Text("Autor del Quijote", "und"),
    )
    assert result.fields["language"].values == (ItemRef("Q1321"),)
    (warning,) = result.warnings
    assert warning.startswith("Field 'language': dropped value")
    assert "klingon" in warning
