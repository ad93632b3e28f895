"""Cardinality constraints (sh:minCount, sh:maxCount) on property values."""

from __future__ import annotations

from rdf_shapes.graph import Graph
from rdf_shapes.results import ValidationResult
from rdf_shapes.shapes import PropertyShape
from rdf_shapes.terms import Term
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    get_property_values,
)


def validate(
    graph: Graph, focus_node: Term, shape: PropertyShape
) -> list[ValidationResult]:
    """Check the number of values reachable through the shape's path."""
    if shape.min_count is None and shape.max_count is None:
        return []

    values = get_property_values(graph, focus_node, shape.path)
    count = len(values)
    results: list[ValidationResult] = []

    if shape.min_count is not None and count < shape.min_count:
        results.append(build_violation(
            focus_node,
            shape,
            f"Expected at least {shape.min_count} values, found {count}",
            {
                "constraint_component": constraint_component("MinCount"),
                "min_count": shape.min_count,
                "actual_count": count,
            },
        ))

    if shape.max_count is not None and count > shape.max_count:
        results.append(build_violation(
            focus_node,
            shape,
            f"Expected at most {shape.max_count} values, found {count}",
            {
                "constraint_component": constraint_component("MaxCount"),
                "max_count": shape.max_count,
                "actual_count": count,
            },
        ))

    return results
