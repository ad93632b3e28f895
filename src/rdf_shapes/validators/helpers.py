"""
Shared helpers for the constraint validators.

The extractors are deliberately soft: a value of the wrong kind yields
``None`` and the calling check skips it. Reporting a wrong kind of value is
the job of the type validator.
"""

from __future__ import annotations

import re
from typing import Any

from rdf_shapes.graph import Graph
from rdf_shapes.results import Severity, ValidationResult
from rdf_shapes.shapes import NodeKind, NodeShape, Number, PropertyShape
from rdf_shapes.terms import (
    DECIMAL_DATATYPES,
    INTEGER_DATATYPES,
    RDF_TYPE,
    SH,
    XSD,
    BlankNode,
    Iri,
    Literal,
    Term,
)


def constraint_component(name: str) -> Iri:
    """IRI of a SHACL constraint component, e.g. ``PatternConstraintComponent``."""
    return Iri(f"{SH}{name}ConstraintComponent")


def get_property_values(graph: Graph, focus_node: Term, path: Iri) -> list[Term]:
    """All objects of triples ``(focus_node, path, ?)``."""
    return graph.objects(focus_node, path)


def is_instance_of(graph: Graph, node: Term, class_iri: Iri) -> bool:
    """
    True iff ``(node, rdf:type, class_iri)`` is asserted in the graph.

    Only direct assertions count; there is no subclass closure.
    """
    if isinstance(node, Literal):
        return False
    return class_iri in graph.objects(node, RDF_TYPE)


def is_datatype(term: Term, datatype: Iri) -> bool:
    """True iff ``term`` is a literal whose datatype is ``datatype``."""
    return isinstance(term, Literal) and term.datatype == datatype


def is_node_kind(term: Term, kind: NodeKind) -> bool:
    """Match a term against a SHACL node kind."""
    is_iri = isinstance(term, Iri)
    is_blank = isinstance(term, BlankNode)
    is_literal = isinstance(term, Literal)

    if kind == NodeKind.IRI:
        return is_iri
    if kind == NodeKind.BLANK_NODE:
        return is_blank
    if kind == NodeKind.LITERAL:
        return is_literal
    if kind == NodeKind.BLANK_NODE_OR_IRI:
        return is_blank or is_iri
    if kind == NodeKind.BLANK_NODE_OR_LITERAL:
        return is_blank or is_literal
    if kind == NodeKind.IRI_OR_LITERAL:
        return is_iri or is_literal
    return False


_INTEGER_FORM = re.compile(r"[+-]?[0-9]+")
_DECIMAL_FORM = re.compile(r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)")
_DOUBLE_FORM = re.compile(
    r"[+-]?([0-9]+(\.[0-9]*)?|\.[0-9]+)([eE][+-]?[0-9]+)?|[+-]?INF|NaN"
)


def extract_string(term: Term) -> str | None:
    """Lexical form of a literal, or None for IRIs and blank nodes."""
    if isinstance(term, Literal):
        return term.lexical
    return None


def extract_number(term: Any) -> Number | None:
    """
    Numeric value of a numeric XSD literal.

    Returns None for non-literals, non-numeric datatypes and lexical forms
    outside the XSD lexical space of their datatype.
    """
    if not isinstance(term, Literal):
        return None
    lexical = term.lexical.strip()
    if term.datatype in INTEGER_DATATYPES:
        return int(lexical) if _INTEGER_FORM.fullmatch(lexical) else None
    if term.datatype == Iri(f"{XSD}decimal"):
        return float(lexical) if _DECIMAL_FORM.fullmatch(lexical) else None
    if term.datatype in DECIMAL_DATATYPES:
        return float(lexical) if _DOUBLE_FORM.fullmatch(lexical) else None
    return None


def unwrap_bound(bound: Number | Literal | None) -> Number | None:
    """Bounds may be given as plain numbers or as numeric literals."""
    if isinstance(bound, Literal):
        return extract_number(bound)
    return bound


def build_violation(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    default_message: str,
    details: dict[str, Any],
    value: Term | None = None,
) -> ValidationResult:
    """
    Build a violation for a property-level or node-level constraint.

    The shape's own message wins over ``default_message``. Node shapes
    produce results without a path.
    """
    path = shape.path if isinstance(shape, PropertyShape) else None
    return ValidationResult(
        focus_node=focus_node,
        result_path=path,
        value=value,
        message=shape.message or default_message,
        severity=Severity.VIOLATION,
        source_shape=shape.id,
        constraint_component=details.get("constraint_component"),
        details=details,
    )
