from __future__ import annotations

import pytest
from rdflib import Literal, URIRef

from authdraft.domain.conversion import parse_graph
from authdraft.domain.errors import ParseError
from authdraft.domain.model import GraphFormat
from tests.support.graphs import EXAMPLE_DOCUMENT, EXAMPLE_SUBJECT, rdf_document

SCHEMA_NAME = "http://schema.org/name"

TURTLE = b"""
@prefix schema: <http://schema.org/> .
<http://example.org/authority/7> schema:name "Ada Lovelace"@en ;
    schema:birthDate "1815-12-10" .
"""


def test_parse_rdf_xml_indexes_objects_by_subject_and_predicate() -> None:
    graph = parse_graph(EXAMPLE_DOCUMENT, GraphFormat.RDF_XML)

    assert len(graph) == 2
    assert graph.has_subject(EXAMPLE_SUBJECT)
    assert graph.objects(EXAMPLE_SUBJECT, SCHEMA_NAME) == (Literal("Jane Doe", lang="en"),)
    assert graph.objects(EXAMPLE_SUBJECT, "http://schema.org/deathDate") == ()


def test_parse_turtle() -> None:
    graph = parse_graph(TURTLE, GraphFormat.TURTLE)

    (birth,) = graph.objects("http://example.org/authority/7", "http://schema.org/birthDate")
    assert str(birth) == "1815-12-10"


def test_unknown_subject_is_absent() -> None:
    graph = parse_graph(EXAMPLE_DOCUMENT, GraphFormat.RDF_XML)

    assert not graph.has_subject("http://example.org/authority/other")
    assert list(graph.predicates("http://example.org/authority/other")) == []


@pytest.mark.parametrize("content", [b"", b"   \n"])
def test_empty_document_is_a_parse_error(content: bytes) -> None:
    with pytest.raises(ParseError, match="Empty"):
        parse_graph(content, GraphFormat.RDF_XML)


def test_malformed_document_is_a_parse_error() -> None:
    with pytest.raises(ParseError, match="RDF_XML"):
        parse_graph(b"<rdf:RDF><unclosed>", GraphFormat.RDF_XML)


def test_container_members_are_returned_in_order() -> None:
    document = rdf_document(
        EXAMPLE_SUBJECT,
        """
    <schema:alternateName>
      <rdf:Seq>
        <rdf:li>First</rdf:li>
        <rdf:li>Then this</rdf:li>
      </rdf:Seq>
    </schema:alternateName>
        """,
    )
    graph = parse_graph(document, GraphFormat.RDF_XML)

    (node,) = graph.objects(EXAMPLE_SUBJECT, "http://schema.org/alternateName")
    members = graph.container_members(node)  # type: ignore[arg-type]

    assert members is not None
    assert [str(member) for member in members] == ["First", "Then this"]


def test_container_members_is_none_for_plain_nodes() -> None:
    graph = parse_graph(EXAMPLE_DOCUMENT, GraphFormat.RDF_XML)

    assert graph.container_members(URIRef(EXAMPLE_SUBJECT)) is None


def test_literal_not_matching_its_datatype_is_a_parse_error() -> None:
    document = b"""
@prefix schema: <http://schema.org/> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
<http://example.org/authority/7> schema:birthDate "abc"^^xsd:date .
"""

    with pytest.raises(ParseError, match="is not a valid"):
        parse_graph(document, GraphFormat.TURTLE)


def test_well_typed_literal_is_kept() -> None:
    document = b"""
@prefix schema: <http://schema.org/> .
@prefix xsd: <http://www.w3.org/2001/XMLSchema#> .
<http://example.org/authority/7> schema:birthDate "1815-12-10"^^xsd:date .
"""

    graph = parse_graph(document, GraphFormat.TURTLE)

    (birth_date,) = graph.objects("http://example.org/authority/7", "http://schema.org/birthDate")
    assert str(birth_date) == "1815-12-10"
