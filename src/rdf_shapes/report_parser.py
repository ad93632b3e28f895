"""
Parse SHACL validation reports from Turtle.

The parser reads exactly what ``writer.to_turtle`` writes, and also accepts
reports produced by other SHACL engines. A malformed report raises
``ReportParseError``; it is never turned into an empty report.
"""

from __future__ import annotations

import logging

from rdf_shapes.graph import Graph
from rdf_shapes.results import Report, Severity, ValidationResult
from rdf_shapes.terms import (
    LANG_STRING,
    SH,
    XSD_BOOLEAN,
    XSD_STRING,
    Iri,
    Literal,
    Subject,
    Term,
)

logger = logging.getLogger(__name__)

SH_CONFORMS = Iri(f"{SH}conforms")
SH_RESULT = Iri(f"{SH}result")
SH_FOCUS_NODE = Iri(f"{SH}focusNode")
SH_RESULT_PATH = Iri(f"{SH}resultPath")
SH_VALUE = Iri(f"{SH}value")
SH_RESULT_MESSAGE = Iri(f"{SH}resultMessage")
SH_RESULT_SEVERITY = Iri(f"{SH}resultSeverity")
SH_SOURCE_SHAPE = Iri(f"{SH}sourceShape")
SH_SOURCE_CONSTRAINT_COMPONENT = Iri(f"{SH}sourceConstraintComponent")


class ReportParseError(Exception):
    """
    Raised when text is not a readable validation report.

    Attributes:
        reason: ``turtle_parse_error``, ``no_validation_report_found`` or
            ``invalid_conforms_value``
        detail: The underlying error or offending value, if any
    """

    def __init__(self, reason: str, detail: object = None):
        self.reason = reason
        self.detail = detail
        message = reason if detail is None else f"{reason}: {detail}"
        super().__init__(message)


def parse(text: str) -> Report:
    """
    Parse a Turtle validation report.

    Raises:
        ReportParseError: If the text is not Turtle, has no ``sh:conforms``
            subject, or its conforms value is not a boolean
    """
    try:
        graph = Graph.from_turtle(text)
    except (SyntaxError, ValueError) as e:
        # ValueError: terms with no counterpart here, e.g. RDF-star triple terms
        raise ReportParseError("turtle_parse_error", e) from e

    return parse_graph(graph)


def parse_graph(graph: Graph) -> Report:
    """Build a report from an already parsed graph."""
    report_node = _find_report_node(graph)
    conforms = _parse_conforms(graph.value(report_node, SH_CONFORMS))

    results = [
        _parse_result(graph, node) for node in graph.objects(report_node, SH_RESULT)
    ]
    logger.debug(f"Parsed report with {len(results)} results (conforms={conforms})")

    report = Report.from_results(results)
    # The conforms flag is read from the report, not recomputed.
    return Report(
        conforms=conforms,
        violations=report.violations,
        warnings=report.warnings,
        info=report.info,
    )


def _find_report_node(graph: Graph) -> Subject:
    for triple in graph.triples_with(predicate=SH_CONFORMS):
        return triple.subject
    raise ReportParseError("no_validation_report_found")


_BOOLEAN_FORMS = {"true": True, "1": True, "false": False, "0": False}
_STRING_FORMS = {"true": True, "false": False}


def _parse_conforms(value: Term | None) -> bool:
    if isinstance(value, Literal):
        lexical = value.lexical.strip()
        if value.datatype == XSD_BOOLEAN and lexical in _BOOLEAN_FORMS:
            return _BOOLEAN_FORMS[lexical]
        if value.datatype in (XSD_STRING, LANG_STRING) and lexical in _STRING_FORMS:
            return _STRING_FORMS[lexical]
    raise ReportParseError("invalid_conforms_value", value)


def _parse_result(graph: Graph, node: Term) -> ValidationResult:
    message = graph.value(node, SH_RESULT_MESSAGE)
    path = graph.value(node, SH_RESULT_PATH)
    component = graph.value(node, SH_SOURCE_CONSTRAINT_COMPONENT)

    return ValidationResult(
        focus_node=graph.value(node, SH_FOCUS_NODE),
        result_path=path if isinstance(path, Iri) else None,
        value=graph.value(node, SH_VALUE),
        message=str(message) if message is not None else "",
        severity=Severity.from_iri(graph.value(node, SH_RESULT_SEVERITY)),
        source_shape=graph.value(node, SH_SOURCE_SHAPE),
        constraint_component=component if isinstance(component, Iri) else None,
    )
