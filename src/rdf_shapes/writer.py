"""Turtle serialization of validation reports."""

from __future__ import annotations

from rdf_shapes.results import Report, ValidationResult
from rdf_shapes.terms import Literal


def to_turtle(report: Report) -> str:
    """
    Convert a report to a SHACL validation report in Turtle.

    The report node is a blank node with one nested ``sh:result`` blank
    node per result. ``report_parser.parse`` reads the output back.
    """
    lines = [
        "@prefix sh: <http://www.w3.org/ns/shacl#> .",
        "",
        "[] a sh:ValidationReport ;",
        f"    sh:conforms {'true' if report.conforms else 'false'} ;",
    ]

    results = report.results
    if results:
        result_lines = [_result_to_turtle(result) for result in results]
        lines.append("    sh:result " + ", ".join(result_lines) + " .")
    else:
        lines[-1] = lines[-1].rstrip(" ;") + " ."

    return "\n".join(lines) + "\n"


def _result_to_turtle(result: ValidationResult) -> str:
    """Convert a single result to a nested blank node."""
    parts = ["[", "        a sh:ValidationResult"]
    if result.focus_node is not None:
        parts.append(f"        sh:focusNode {result.focus_node.n3()}")

    if result.result_path is not None:
        parts.append(f"        sh:resultPath {result.result_path.n3()}")

    if result.value is not None:
        parts.append(f"        sh:value {result.value.n3()}")

    if result.source_shape is not None:
        parts.append(f"        sh:sourceShape {result.source_shape.n3()}")

    if result.constraint_component is not None:
        parts.append(
            f"        sh:sourceConstraintComponent {result.constraint_component.n3()}"
        )

    if result.message:
        parts.append(f"        sh:resultMessage {Literal(result.message).n3()}")

    parts.append(f"        sh:resultSeverity {result.severity.iri.n3()}")

    return parts[0] + "\n" + " ;\n".join(parts[1:]) + "\n    ]"
