"""Qualified value shapes restricted to ``sh:qualifiedValueShape [ sh:class C ]``."""

from __future__ import annotations

from rdf_shapes.graph import Graph
from rdf_shapes.results import ValidationResult
from rdf_shapes.shapes import PropertyShape
from rdf_shapes.terms import Term
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    get_property_values,
    is_instance_of,
)


def validate(
    graph: Graph, focus_node: Term, shape: PropertyShape
) -> list[ValidationResult]:
    """
    Require at least ``qualified_min_count`` values that are instances of
    ``qualified_class``.

    Both fields must be set for the check to run. At most one violation is
    produced per focus node.
    """
    if shape.qualified_class is None or shape.qualified_min_count is None:
        return []

    values = get_property_values(graph, focus_node, shape.path)
    qualified = sum(1 for v in values if is_instance_of(graph, v, shape.qualified_class))

    if qualified >= shape.qualified_min_count:
        return []

    return [build_violation(
        focus_node,
        shape,
        "Property has too few values of required type (expected at least "
        f"{shape.qualified_min_count} instances of <{shape.qualified_class}>, "
        f"found {qualified})",
        {
            "constraint_component": constraint_component("QualifiedMinCount"),
            "qualified_class": shape.qualified_class,
            "qualified_min_count": shape.qualified_min_count,
            "actual_qualified_count": qualified,
            "total_values": len(values),
        },
    )]
