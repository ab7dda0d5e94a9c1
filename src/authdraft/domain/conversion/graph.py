"""Parse serialized graph documents into an indexed triple store."""

from __future__ import annotations

import re
from collections import defaultdict
from logging import getLogger
from typing import TYPE_CHECKING, Final

from rdflib import RDF, BNode, Graph, Literal, URIRef

from authdraft.domain.errors import ParseError

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator

    from authdraft.domain.model import GraphFormat

log = getLogger(__name__)

type GraphNode = URIRef | BNode | Literal
type Triple = tuple[URIRef | BNode, URIRef, GraphNode]

_CONTAINER_MEMBER: Final[re.Pattern[str]] = re.compile(re.escape(str(RDF)) + r"_(\d+)$")


class RawGraph:
    """Triples indexed by ``(subject, predicate)``.

    Objects are kept in the order the parser produced them, so extraction over
    the same document is deterministic.
    """

    __slots__ = ("_index", "_size")

    def __init__(self, triples: Iterable[Triple]) -> None:
        index: dict[tuple[URIRef | BNode, URIRef], list[GraphNode]] = defaultdict(list)
        size = 0
        for subject, predicate, obj in triples:
            index[(subject, predicate)].append(obj)
            size += 1
        self._index = dict(index)
        self._size = size

    def __len__(self) -> int:
        return self._size

    def objects(self, subject: str | BNode, predicate: str) -> tuple[GraphNode, ...]:
        return tuple(self._index.get((_as_subject(subject), URIRef(predicate)), ()))

    def has_subject(self, subject: str | BNode) -> bool:
        node = _as_subject(subject)
        return any(key[0] == node for key in self._index)

    def predicates(self, subject: str | BNode) -> Iterator[URIRef]:
        node = _as_subject(subject)
        for key_subject, predicate in self._index:
            if key_subject == node:
                yield predicate

    def container_members(self, node: BNode | URIRef) -> tuple[GraphNode, ...] | None:
        """Return the members of an ``rdf:Seq``/``rdf:Bag`` node in ``rdf:_N`` order.

        ``None`` means the node is not a container.
        """

        numbered: list[tuple[int, GraphNode]] = []
        for predicate in self.predicates(node):
            match = _CONTAINER_MEMBER.match(predicate)
            if match is None:
                continue
            numbered.extend((int(match.group(1)), obj) for obj in self._index[(node, predicate)])
        if not numbered:
            return None
        numbered.sort(key=lambda item: item[0])
        return tuple(obj for _, obj in numbered)


def _as_subject(subject: str | BNode) -> URIRef | BNode:
    if isinstance(subject, (BNode, URIRef)):
        return subject
    return URIRef(subject)


def parse_graph(content: bytes, graph_format: GraphFormat) -> RawGraph:
    """Parse ``content`` in ``graph_format`` or raise ``ParseError``.

    A literal whose lexical form does not fit its XSD datatype (``"abc"^^xsd:date``)
    makes the document invalid.
    """

    if not content.strip():
        raise ParseError("Empty graph document")

    graph = Graph()
    try:
        graph.parse(data=content, format=graph_format.value)
    except Exception as exc:  # noqa: BLE001
        # rdflib surfaces SAX, syntax, JSON and decoding failures with unrelated types
        raise ParseError(f"Invalid {graph_format.name} document: {exc}") from exc

    triples: list[Triple] = [
        (subject, predicate, obj)  # type: ignore[misc]
        for subject, predicate, obj in graph
        if isinstance(predicate, URIRef)
    ]
    for _, predicate, obj in triples:
        if isinstance(obj, Literal) and obj.ill_typed:
            raise ParseError(
                f"Invalid {graph_format.name} document: literal {str(obj)!r} is not a valid "
                f"{obj.datatype} (object of {predicate})"
            )
    log.debug("Parsed %d triples from %s document", len(triples), graph_format.name)
    return RawGraph(triples)


__all__ = ["GraphNode", "RawGraph", "Triple", "parse_graph"]
