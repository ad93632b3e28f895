"""
rdf-shapes: SHACL-style validation of RDF graphs.

Checks triple graphs against node shapes and property shapes, runs
SPARQL-based constraints, and reads and writes SHACL validation reports.
"""

__version__ = "0.1.0"

from rdf_shapes.terms import Iri, BlankNode, Literal, Triple, Term
from rdf_shapes.graph import Graph
from rdf_shapes.shapes import NodeKind, NodeShape, PropertyShape, SPARQLConstraint
from rdf_shapes.results import Report, Severity, ValidationResult
from rdf_shapes.config import ValidatorConfig
from rdf_shapes.query_context import QueryStats, QueryTimeoutException
from rdf_shapes.reader import ShapeParseError, read_shapes, read_shapes_turtle
from rdf_shapes.report_parser import ReportParseError, parse as parse_report
from rdf_shapes.writer import to_turtle
from rdf_shapes.validator import ShapeValidator, validate

__all__ = [
    "Iri",
    "BlankNode",
    "Literal",
    "Triple",
    "Term",
    "Graph",
    # Shapes
    "NodeKind",
    "NodeShape",
    "PropertyShape",
    "SPARQLConstraint",
    "ShapeParseError",
    "read_shapes",
    "read_shapes_turtle",
    # Results
    "Report",
    "Severity",
    "ValidationResult",
    "ReportParseError",
    "parse_report",
    "to_turtle",
    # Validation
    "ShapeValidator",
    "ValidatorConfig",
    "QueryStats",
    "QueryTimeoutException",
    "validate",
]
