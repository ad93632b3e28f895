"""
RDF terms and triples for shape validation.

Terms are small immutable value objects with structural equality, so they
can be used as dictionary keys, compared with ``in`` and shared freely
between validator threads.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from typing import Any, Union


# =============================================================================
# Namespaces
# =============================================================================

RDF = "http://www.w3.org/1999/02/22-rdf-syntax-ns#"
RDFS = "http://www.w3.org/2000/01/rdf-schema#"
XSD = "http://www.w3.org/2001/XMLSchema#"
SH = "http://www.w3.org/ns/shacl#"


# =============================================================================
# Term Representation
# =============================================================================

_ESCAPES = {
    "\\": "\\\\",
    '"': '\\"',
    "\n": "\\n",
    "\r": "\\r",
    "\t": "\\t",
}


def _escape(text: str) -> str:
    return "".join(_ESCAPES.get(ch, ch) for ch in text)


@dataclass(frozen=True, slots=True)
class Iri:
    """An IRI reference."""

    value: str

    def n3(self) -> str:
        """N-Triples form, e.g. ``<http://example.org/x>``."""
        return f"<{self.value}>"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True, slots=True)
class BlankNode:
    """A blank node identified by its local label (without ``_:``)."""

    id: str

    def n3(self) -> str:
        return f"_:{self.id}"

    def __str__(self) -> str:
        return self.n3()


@dataclass(frozen=True, slots=True)
class Literal:
    """
    An RDF literal.

    Attributes:
        lexical: Lexical form of the literal
        datatype: Datatype IRI (``xsd:string`` when not given)
        language: Language tag for ``rdf:langString`` literals
    """

    lexical: str
    datatype: Iri | None = None
    language: str | None = None

    def __post_init__(self) -> None:
        if self.language is not None:
            object.__setattr__(self, "language", self.language.lower())
            object.__setattr__(self, "datatype", LANG_STRING)
        elif self.datatype is None:
            object.__setattr__(self, "datatype", XSD_STRING)

    @classmethod
    def of(cls, value: Any) -> "Literal":
        """Build a typed literal from a Python value."""
        if isinstance(value, Literal):
            return value
        if isinstance(value, bool):
            return cls("true" if value else "false", XSD_BOOLEAN)
        if isinstance(value, int):
            return cls(str(value), XSD_INTEGER)
        if isinstance(value, Decimal):
            return cls(format(value, "f"), Iri(f"{XSD}decimal"))
        if isinstance(value, float):
            if math.isnan(value):
                return cls("NaN", XSD_DOUBLE)
            if math.isinf(value):
                return cls("INF" if value > 0 else "-INF", XSD_DOUBLE)
            return cls(repr(value), XSD_DOUBLE)
        return cls(str(value))

    def n3(self) -> str:
        quoted = f'"{_escape(self.lexical)}"'
        if self.language is not None:
            return f"{quoted}@{self.language}"
        if self.datatype == XSD_STRING:
            return quoted
        return f"{quoted}^^{self.datatype.n3()}"

    def __str__(self) -> str:
        return self.lexical


Term = Union[Iri, BlankNode, Literal]
Subject = Union[Iri, BlankNode]


@dataclass(frozen=True, slots=True)
class Triple:
    """A single subject-predicate-object fact."""

    subject: Subject
    predicate: Iri
    object: Term

    def n3(self) -> str:
        return f"{self.subject.n3()} {self.predicate.n3()} {self.object.n3()} ."


# =============================================================================
# Well-known IRIs
# =============================================================================

RDF_TYPE = Iri(f"{RDF}type")
RDF_FIRST = Iri(f"{RDF}first")
RDF_REST = Iri(f"{RDF}rest")
RDF_NIL = Iri(f"{RDF}nil")
LANG_STRING = Iri(f"{RDF}langString")
RDFS_CLASS = Iri(f"{RDFS}Class")

XSD_STRING = Iri(f"{XSD}string")
XSD_BOOLEAN = Iri(f"{XSD}boolean")
XSD_INTEGER = Iri(f"{XSD}integer")
XSD_DOUBLE = Iri(f"{XSD}double")

INTEGER_DATATYPES = frozenset(
    Iri(f"{XSD}{name}")
    for name in (
        "integer", "int", "long", "short", "byte",
        "nonNegativeInteger", "nonPositiveInteger",
        "positiveInteger", "negativeInteger",
        "unsignedLong", "unsignedInt", "unsignedShort", "unsignedByte",
    )
)
DECIMAL_DATATYPES = frozenset(
    Iri(f"{XSD}{name}") for name in ("decimal", "double", "float")
)


def to_term(value: Any) -> Term:
    """Coerce a Python value into a term; terms pass through unchanged."""
    if isinstance(value, (Iri, BlankNode, Literal)):
        return value
    return Literal.of(value)
