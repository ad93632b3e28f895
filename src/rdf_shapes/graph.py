"""
Immutable triple graph used as validator input.

The graph keeps its triples in insertion order with duplicates removed and
maintains a single subject index. SPARQL evaluation is delegated to an
Oxigraph store that is built lazily the first time a query constraint
needs it.
"""

from __future__ import annotations

from threading import Lock
from typing import Iterable, Iterator

from pyoxigraph import BlankNode as OxBlankNode
from pyoxigraph import Literal as OxLiteral
from pyoxigraph import NamedNode, Quad, RdfFormat, Store
from pyoxigraph import parse as oxigraph_parse

from rdf_shapes.terms import BlankNode, Iri, Literal, Subject, Term, Triple


class Graph:
    """
    An unordered set of triples with lookup by subject and predicate.

    Instances are never mutated after construction; ``union`` returns a
    new graph.
    """

    def __init__(self, triples: Iterable[Triple | tuple] = ()) -> None:
        unique: dict[Triple, None] = {}
        for triple in triples:
            if not isinstance(triple, Triple):
                triple = Triple(*triple)
            unique[triple] = None
        self._triples: tuple[Triple, ...] = tuple(unique)

        by_subject: dict[Subject, list[Triple]] = {}
        for triple in self._triples:
            by_subject.setdefault(triple.subject, []).append(triple)
        self._by_subject = by_subject

        self._store: Store | None = None
        self._store_lock = Lock()

    @classmethod
    def from_turtle(cls, turtle: str, base_iri: str | None = None) -> "Graph":
        """
        Parse Turtle text into a graph.

        Raises:
            SyntaxError: If the text is not valid Turtle
        """
        return cls(
            Triple(
                from_oxigraph_term(quad.subject),
                from_oxigraph_term(quad.predicate),
                from_oxigraph_term(quad.object),
            )
            for quad in oxigraph_parse(turtle, RdfFormat.TURTLE, base_iri=base_iri)
        )

    def __len__(self) -> int:
        return len(self._triples)

    def __iter__(self) -> Iterator[Triple]:
        return iter(self._triples)

    def __contains__(self, triple: object) -> bool:
        if not isinstance(triple, Triple):
            return False
        return triple in self._by_subject.get(triple.subject, ())

    def __repr__(self) -> str:
        return f"Graph({len(self._triples)} triples)"

    def triples_with(
        self,
        subject: Subject | None = None,
        predicate: Iri | None = None,
    ) -> list[Triple]:
        """Return the triples matching the given subject and/or predicate."""
        if subject is not None:
            candidates: Iterable[Triple] = self._by_subject.get(subject, ())
        else:
            candidates = self._triples
        if predicate is None:
            return list(candidates)
        return [t for t in candidates if t.predicate == predicate]

    def objects(self, subject: Term, predicate: Iri) -> list[Term]:
        """All objects of ``(subject, predicate, ?)``, in insertion order."""
        if isinstance(subject, Literal):
            return []
        return [t.object for t in self.triples_with(subject, predicate)]

    def value(self, subject: Term, predicate: Iri) -> Term | None:
        """First object of ``(subject, predicate, ?)`` or None."""
        values = self.objects(subject, predicate)
        return values[0] if values else None

    def subjects(self, predicate: Iri, obj: Term) -> list[Subject]:
        """Distinct subjects of ``(?, predicate, obj)``, in insertion order."""
        found: dict[Subject, None] = {}
        for triple in self._triples:
            if triple.predicate == predicate and triple.object == obj:
                found[triple.subject] = None
        return list(found)

    def union(self, triples: Iterable[Triple | tuple]) -> "Graph":
        """Return a new graph with the extra triples added."""
        return Graph([*self._triples, *triples])

    def to_store(self) -> Store:
        """
        Return an Oxigraph store holding this graph's triples.

        The store is built once and reused; it is only ever read.
        """
        with self._store_lock:
            if self._store is None:
                store = Store()
                store.extend(
                    Quad(
                        to_oxigraph_term(t.subject),
                        to_oxigraph_term(t.predicate),
                        to_oxigraph_term(t.object),
                    )
                    for t in self._triples
                )
                self._store = store
            return self._store


# =============================================================================
# Oxigraph conversion
# =============================================================================

def to_oxigraph_term(term: Term):
    """Convert a term to its Oxigraph counterpart."""
    if isinstance(term, Iri):
        return NamedNode(term.value)
    if isinstance(term, BlankNode):
        return OxBlankNode(term.id)
    if term.language is not None:
        return OxLiteral(term.lexical, language=term.language)
    return OxLiteral(term.lexical, datatype=NamedNode(term.datatype.value))


def from_oxigraph_term(term) -> Term:
    """Convert an Oxigraph term back to a term."""
    if isinstance(term, NamedNode):
        return Iri(term.value)
    if isinstance(term, OxBlankNode):
        return BlankNode(term.value)
    if isinstance(term, OxLiteral):
        if term.language:
            return Literal(term.value, language=term.language)
        return Literal(term.value, Iri(term.datatype.value))
    raise ValueError(f"Unsupported RDF term: {term!r}")
