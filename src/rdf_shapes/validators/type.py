"""
Type constraints: sh:datatype, sh:class and (node-level) sh:nodeKind.

Datatype and class checks run independently, so one value can produce a
violation for each. Every value is checked; nothing short-circuits.
"""

from __future__ import annotations

from rdf_shapes.graph import Graph
from rdf_shapes.results import ValidationResult
from rdf_shapes.shapes import NodeShape, PropertyShape
from rdf_shapes.terms import Iri, Term
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    get_property_values,
    is_datatype,
    is_instance_of,
    is_node_kind,
)


def validate(
    graph: Graph, focus_node: Term, shape: PropertyShape
) -> list[ValidationResult]:
    """Validate sh:datatype and sh:class on every value of the shape's path."""
    if shape.datatype is None and shape.class_ is None:
        return []

    values = get_property_values(graph, focus_node, shape.path)
    results: list[ValidationResult] = []

    if shape.datatype is not None:
        for value in values:
            if not is_datatype(value, shape.datatype):
                results.append(_datatype_violation(
                    focus_node, shape, shape.datatype, value,
                    f"Value does not have required datatype <{shape.datatype}>",
                ))

    if shape.class_ is not None:
        for value in values:
            if not is_instance_of(graph, value, shape.class_):
                results.append(_class_violation(
                    focus_node, shape, shape.class_, value,
                    f"Value is not an instance of class <{shape.class_}>",
                ))

    return results


def validate_node(
    graph: Graph, focus_node: Term, shape: NodeShape
) -> list[ValidationResult]:
    """Validate sh:datatype, sh:class and sh:nodeKind on the focus node itself."""
    results: list[ValidationResult] = []

    if shape.datatype is not None and not is_datatype(focus_node, shape.datatype):
        results.append(_datatype_violation(
            focus_node, shape, shape.datatype, focus_node,
            f"Focus node does not have required datatype <{shape.datatype}>",
        ))

    if shape.class_ is not None and not is_instance_of(graph, focus_node, shape.class_):
        results.append(_class_violation(
            focus_node, shape, shape.class_, focus_node,
            f"Focus node is not an instance of class <{shape.class_}>",
        ))

    if shape.node_kind is not None and not is_node_kind(focus_node, shape.node_kind):
        results.append(build_violation(
            focus_node,
            shape,
            f"Focus node does not match required node kind <{shape.node_kind.value}>",
            {
                "constraint_component": constraint_component("NodeKind"),
                "expected_node_kind": shape.node_kind,
                "actual_value": focus_node,
            },
            value=focus_node,
        ))

    return results


def _datatype_violation(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    datatype: Iri,
    value: Term,
    message: str,
) -> ValidationResult:
    return build_violation(
        focus_node,
        shape,
        message,
        {
            "constraint_component": constraint_component("Datatype"),
            "expected_datatype": datatype,
            "actual_value": value,
        },
        value=value,
    )


def _class_violation(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    class_iri: Iri,
    value: Term,
    message: str,
) -> ValidationResult:
    return build_violation(
        focus_node,
        shape,
        message,
        {
            "constraint_component": constraint_component("Class"),
            "expected_class": class_iri,
            "actual_value": value,
        },
        value=value,
    )
