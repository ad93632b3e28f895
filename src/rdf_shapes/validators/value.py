"""
Value constraints: sh:in, sh:hasValue and the numeric range bounds.

Range checks compare the numeric value of numeric XSD literals and skip
everything else. Bounds may be given as Python numbers or numeric literals.
"""

from __future__ import annotations

import operator
from typing import Callable, NamedTuple

from rdf_shapes.graph import Graph
from rdf_shapes.results import ValidationResult
from rdf_shapes.shapes import NodeShape, PropertyShape
from rdf_shapes.terms import Term
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    extract_number,
    get_property_values,
    unwrap_bound,
)


class _Bound(NamedTuple):
    attr: str
    component: str
    holds: Callable[[float, float], bool]
    message: str


_BOUNDS = (
    _Bound("min_inclusive", "MinInclusive", operator.ge,
           "{subject} is below minimum (expected >= {bound}, found {actual})"),
    _Bound("max_inclusive", "MaxInclusive", operator.le,
           "{subject} exceeds maximum (expected <= {bound}, found {actual})"),
    _Bound("min_exclusive", "MinExclusive", operator.gt,
           "{subject} is below minimum (expected > {bound}, found {actual})"),
    _Bound("max_exclusive", "MaxExclusive", operator.lt,
           "{subject} exceeds maximum (expected < {bound}, found {actual})"),
)


def validate(
    graph: Graph, focus_node: Term, shape: PropertyShape
) -> list[ValidationResult]:
    """Validate sh:in, sh:hasValue and range bounds on the shape's values."""
    active_bounds = [b for b in _BOUNDS if getattr(shape, b.attr) is not None]
    if not shape.in_ and shape.has_value is None and not active_bounds:
        return []

    values = get_property_values(graph, focus_node, shape.path)
    results: list[ValidationResult] = []

    if shape.in_:
        for value in values:
            if value not in shape.in_:
                results.append(_in_violation(focus_node, shape, value, "Value"))

    if shape.has_value is not None and shape.has_value not in values:
        results.append(_has_value_violation(focus_node, shape, "Required value is missing"))

    for bound in active_bounds:
        for value in values:
            result = _check_bound(focus_node, shape, bound, value, "Value")
            if result is not None:
                results.append(result)

    return results


def validate_node(
    graph: Graph, focus_node: Term, shape: NodeShape
) -> list[ValidationResult]:
    """Validate sh:in, sh:hasValue and range bounds against the focus node."""
    results: list[ValidationResult] = []

    if shape.in_ and focus_node not in shape.in_:
        results.append(_in_violation(focus_node, shape, focus_node, "Focus node"))

    if shape.has_value is not None and focus_node != shape.has_value:
        results.append(_has_value_violation(
            focus_node, shape, "Focus node is not the required value"
        ))

    for bound in _BOUNDS:
        if getattr(shape, bound.attr) is None:
            continue
        result = _check_bound(focus_node, shape, bound, focus_node, "Focus node")
        if result is not None:
            results.append(result)

    return results


def _in_violation(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    value: Term,
    subject: str,
) -> ValidationResult:
    return build_violation(
        focus_node,
        shape,
        f"{subject} is not one of the allowed values",
        {
            "constraint_component": constraint_component("In"),
            "allowed_values": list(shape.in_),
            "actual_value": value,
        },
        value=value,
    )


def _has_value_violation(
    focus_node: Term, shape: PropertyShape | NodeShape, message: str
) -> ValidationResult:
    return build_violation(
        focus_node,
        shape,
        message,
        {
            "constraint_component": constraint_component("HasValue"),
            "required_value": shape.has_value,
        },
    )


def _check_bound(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    bound: _Bound,
    value: Term,
    subject: str,
) -> ValidationResult | None:
    limit = unwrap_bound(getattr(shape, bound.attr))
    if limit is None:
        return None

    number = extract_number(value)
    if number is None or bound.holds(number, limit):
        return None

    return build_violation(
        focus_node,
        shape,
        bound.message.format(subject=subject, bound=limit, actual=number),
        {
            "constraint_component": constraint_component(bound.component),
            bound.attr: limit,
            "actual_value": number,
        },
        value=value,
    )
