"""
Shape model: node shapes, property shapes and SPARQL constraints.

Every constraint field is optional. ``None`` (or an empty list for list
valued constraints) means the constraint is not active for that shape.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from enum import Enum
from typing import Union

from rdf_shapes.results import Severity
from rdf_shapes.terms import SH, BlankNode, Iri, Literal, Term

Number = Union[int, float]
ShapeId = Union[Iri, BlankNode]


class NodeKind(Enum):
    """SHACL node kinds for sh:nodeKind constraint."""

    IRI = f"{SH}IRI"
    BLANK_NODE = f"{SH}BlankNode"
    LITERAL = f"{SH}Literal"
    BLANK_NODE_OR_IRI = f"{SH}BlankNodeOrIRI"
    BLANK_NODE_OR_LITERAL = f"{SH}BlankNodeOrLiteral"
    IRI_OR_LITERAL = f"{SH}IRIOrLiteral"


@dataclass(frozen=True)
class SPARQLConstraint:
    """
    A SELECT query evaluated once per focus node.

    The query uses the ``$this`` placeholder for the focus node; every row
    it returns is reported as one violation.
    """

    source_shape: ShapeId
    select: str
    message: str | None = None
    prefixes: dict[str, str] = field(default_factory=dict, hash=False)


@dataclass(frozen=True)
class PropertyShape:
    """A constraint set applied to the values of one predicate."""

    id: ShapeId
    path: Iri
    message: str | None = None
    severity: Severity = Severity.VIOLATION
    deactivated: bool = False

    # Cardinality
    min_count: int | None = None
    max_count: int | None = None

    # Value type
    datatype: Iri | None = None
    class_: Iri | None = None

    # String-based
    pattern: re.Pattern | None = None
    min_length: int | None = None
    max_length: int | None = None

    # Value range
    min_inclusive: Number | Literal | None = None
    max_inclusive: Number | Literal | None = None
    min_exclusive: Number | Literal | None = None
    max_exclusive: Number | Literal | None = None

    # Enumeration
    in_: list[Term] = field(default_factory=list, hash=False)
    has_value: Term | None = None

    # Qualified value shape
    qualified_class: Iri | None = None
    qualified_min_count: int | None = None


@dataclass(frozen=True)
class NodeShape:
    """
    A shape applied to focus nodes selected by its targets.

    The node-level constraint fields check the focus node itself; property
    shapes and SPARQL constraints are evaluated for each focus node too.
    """

    id: ShapeId
    target_classes: list[Iri] = field(default_factory=list, hash=False)
    target_nodes: list[Term] = field(default_factory=list, hash=False)
    implicit_class_target: Iri | None = None
    property_shapes: list[PropertyShape] = field(default_factory=list, hash=False)
    sparql_constraints: list[SPARQLConstraint] = field(default_factory=list, hash=False)
    message: str | None = None
    severity: Severity = Severity.VIOLATION
    deactivated: bool = False

    # Node-level constraints
    datatype: Iri | None = None
    class_: Iri | None = None
    node_kind: NodeKind | None = None
    pattern: re.Pattern | None = None
    min_length: int | None = None
    max_length: int | None = None
    language_in: list[str] = field(default_factory=list, hash=False)
    in_: list[Term] = field(default_factory=list, hash=False)
    has_value: Term | None = None
    min_inclusive: Number | Literal | None = None
    max_inclusive: Number | Literal | None = None
    min_exclusive: Number | Literal | None = None
    max_exclusive: Number | Literal | None = None
