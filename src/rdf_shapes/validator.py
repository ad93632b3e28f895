"""
Validation orchestrator.

Selects focus nodes for every node shape, runs the node-level validators,
the property-level validators for each property shape and finally the
SPARQL constraints, and collects everything into a ``Report``.
"""

from __future__ import annotations

import dataclasses
import logging
import time
from concurrent.futures import ThreadPoolExecutor
from typing import Iterable, Optional, Union

from rdf_shapes.config import ValidatorConfig
from rdf_shapes.graph import Graph
from rdf_shapes.reader import read_shapes_turtle
from rdf_shapes.results import Report, Severity, ValidationResult
from rdf_shapes.shapes import NodeShape
from rdf_shapes.terms import RDF_TYPE, Term
from rdf_shapes.validators import NODE_VALIDATORS, PROPERTY_VALIDATORS, sparql

logger = logging.getLogger(__name__)


def _with_severity(
    results: list[ValidationResult], severity: Severity
) -> list[ValidationResult]:
    if severity == Severity.VIOLATION:
        return results
    return [dataclasses.replace(r, severity=severity) for r in results]


class ShapeValidator:
    """
    Validates data graphs against a fixed list of node shapes.

    Example:
        validator = ShapeValidator(read_shapes_turtle(shapes_ttl))
        report = validator.validate(Graph.from_turtle(data_ttl))
    """

    def __init__(
        self,
        shapes: Iterable[NodeShape],
        config: Optional[ValidatorConfig] = None,
    ) -> None:
        self.shapes = list(shapes)
        self.config = config or ValidatorConfig()
        self.config.apply_logging()

    def focus_nodes(self, graph: Graph, shape: NodeShape) -> list[Term]:
        """
        Focus nodes of a shape: instances of its target classes, instances
        of its implicit class target, then its explicit target nodes.
        """
        found: dict[Term, None] = {}
        classes = list(shape.target_classes)
        if shape.implicit_class_target is not None:
            classes.append(shape.implicit_class_target)
        for class_iri in classes:
            for subject in graph.subjects(RDF_TYPE, class_iri):
                found[subject] = None
        for node in shape.target_nodes:
            found[node] = None
        return list(found)

    def validate(self, graph: Graph) -> Report:
        """Validate a data graph and return the report."""
        start = time.time()

        tasks: list[tuple[NodeShape, Term]] = []
        for shape in self.shapes:
            if shape.deactivated:
                logger.debug(f"Skipping deactivated shape {shape.id.n3()}")
                continue
            focus_nodes = self.focus_nodes(graph, shape)
            logger.debug(f"Shape {shape.id.n3()} has {len(focus_nodes)} focus nodes")
            tasks.extend((shape, node) for node in focus_nodes)

        if self.config.parallel and len(tasks) > 1:
            with ThreadPoolExecutor(max_workers=self.config.max_workers) as executor:
                batches = list(executor.map(
                    lambda task: self.validate_focus_node(graph, task[1], task[0]),
                    tasks,
                ))
        else:
            batches = [self.validate_focus_node(graph, node, shape) for shape, node in tasks]

        report = Report.from_results(r for batch in batches for r in batch)
        logger.info(
            f"Validated {len(tasks)} focus nodes against {len(self.shapes)} shapes "
            f"in {(time.time() - start) * 1000:.1f}ms: "
            f"{len(report.violations)} violations, {len(report.warnings)} warnings, "
            f"{len(report.info)} info"
        )
        return report

    def validate_focus_node(
        self, graph: Graph, focus_node: Term, shape: NodeShape
    ) -> list[ValidationResult]:
        """All results of one node shape for one focus node, in check order."""
        results: list[ValidationResult] = []

        node_results: list[ValidationResult] = []
        for family in NODE_VALIDATORS:
            node_results.extend(family.validate_node(graph, focus_node, shape))
        results.extend(_with_severity(node_results, shape.severity))

        for prop in shape.property_shapes:
            if prop.deactivated:
                continue
            prop_results: list[ValidationResult] = []
            for family in PROPERTY_VALIDATORS:
                prop_results.extend(family.validate(graph, focus_node, prop))
            results.extend(_with_severity(prop_results, prop.severity))

        if shape.sparql_constraints:
            sparql_results = sparql.validate(
                graph,
                focus_node,
                shape.sparql_constraints,
                timeout=self.config.query_timeout_seconds,
            )
            results.extend(_with_severity(sparql_results, shape.severity))

        return results


def validate(
    data_graph: Union[Graph, str],
    shapes: Union[Iterable[NodeShape], str],
    config: Optional[ValidatorConfig] = None,
) -> Report:
    """
    Validate a data graph against shapes.

    Args:
        data_graph: A ``Graph`` or Turtle text
        shapes: Node shapes, or Turtle text of a shapes graph
        config: Validator configuration (defaults apply when omitted)

    Raises:
        ShapeParseError: If ``shapes`` is Turtle that cannot be read
        SyntaxError: If ``data_graph`` is Turtle that does not parse
    """
    if isinstance(data_graph, str):
        data_graph = Graph.from_turtle(data_graph)
    if isinstance(shapes, str):
        shapes = read_shapes_turtle(shapes)
    return ShapeValidator(shapes, config).validate(data_graph)
