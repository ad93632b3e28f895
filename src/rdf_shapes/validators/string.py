"""
String constraints: sh:pattern, sh:minLength, sh:maxLength, sh:languageIn.

Values that are not literals are skipped by the pattern and length checks.
sh:languageIn is node-level only and reports non-literals explicitly.
"""

from __future__ import annotations

import re

from rdf_shapes.graph import Graph
from rdf_shapes.results import ValidationResult
from rdf_shapes.shapes import NodeShape, PropertyShape
from rdf_shapes.terms import Literal, Term
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    extract_string,
    get_property_values,
)


def validate(
    graph: Graph, focus_node: Term, shape: PropertyShape
) -> list[ValidationResult]:
    """Validate string constraints on every value of the shape's path."""
    if shape.pattern is None and shape.min_length is None and shape.max_length is None:
        return []

    values = get_property_values(graph, focus_node, shape.path)
    results: list[ValidationResult] = []

    if shape.pattern is not None:
        for value in values:
            result = _check_pattern(focus_node, shape, value, "Value")
            if result is not None:
                results.append(result)

    if shape.min_length is not None:
        for value in values:
            result = _check_min_length(focus_node, shape, value, "Value")
            if result is not None:
                results.append(result)

    if shape.max_length is not None:
        for value in values:
            result = _check_max_length(focus_node, shape, value, "Value")
            if result is not None:
                results.append(result)

    return results


def validate_node(
    graph: Graph, focus_node: Term, shape: NodeShape
) -> list[ValidationResult]:
    """Validate string constraints on the focus node itself."""
    results: list[ValidationResult] = []

    if shape.pattern is not None:
        result = _check_pattern(focus_node, shape, focus_node, "Focus node")
        if result is not None:
            results.append(result)

    if shape.min_length is not None:
        result = _check_min_length(focus_node, shape, focus_node, "Focus node")
        if result is not None:
            results.append(result)

    if shape.max_length is not None:
        result = _check_max_length(focus_node, shape, focus_node, "Focus node")
        if result is not None:
            results.append(result)

    if shape.language_in:
        result = _check_language_in(focus_node, shape)
        if result is not None:
            results.append(result)

    return results


def _check_pattern(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    value: Term,
    subject: str,
) -> ValidationResult | None:
    text = extract_string(value)
    if text is None:
        return None

    pattern: re.Pattern = shape.pattern
    if pattern.search(text):
        return None

    return build_violation(
        focus_node,
        shape,
        f"{subject} does not match required pattern '{pattern.pattern}'",
        {
            "constraint_component": constraint_component("Pattern"),
            "pattern": pattern.pattern,
            "actual_value": text,
        },
        value=value,
    )


def _check_min_length(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    value: Term,
    subject: str,
) -> ValidationResult | None:
    text = extract_string(value)
    if text is None:
        return None

    actual = len(text)
    if actual >= shape.min_length:
        return None

    return build_violation(
        focus_node,
        shape,
        f"{subject} is too short (expected at least {shape.min_length} "
        f"characters, found {actual})",
        {
            "constraint_component": constraint_component("MinLength"),
            "min_length": shape.min_length,
            "actual_length": actual,
            "actual_value": text,
        },
        value=value,
    )


def _check_max_length(
    focus_node: Term,
    shape: PropertyShape | NodeShape,
    value: Term,
    subject: str,
) -> ValidationResult | None:
    text = extract_string(value)
    if text is None:
        return None

    actual = len(text)
    if actual <= shape.max_length:
        return None

    return build_violation(
        focus_node,
        shape,
        f"{subject} is too long (expected at most {shape.max_length} "
        f"characters, found {actual})",
        {
            "constraint_component": constraint_component("MaxLength"),
            "max_length": shape.max_length,
            "actual_length": actual,
            "actual_value": text,
        },
        value=value,
    )


def _check_language_in(focus_node: Term, shape: NodeShape) -> ValidationResult | None:
    allowed = shape.language_in
    details = {
        "constraint_component": constraint_component("LanguageIn"),
        "allowed_languages": list(allowed),
        "actual_value": focus_node,
    }

    if not isinstance(focus_node, Literal):
        return build_violation(
            focus_node, shape,
            "Focus node must be a literal with a language tag",
            details, value=focus_node,
        )

    if focus_node.language is None:
        return build_violation(
            focus_node, shape,
            "Focus node must have a language tag",
            details, value=focus_node,
        )

    if focus_node.language in {lang.lower() for lang in allowed}:
        return None

    details["actual_language"] = focus_node.language
    return build_violation(
        focus_node, shape,
        f"Language tag '{focus_node.language}' is not in the allowed list",
        details, value=focus_node,
    )
