"""
SPARQL-based constraints (sh:sparql).

Each constraint is a SELECT query with a ``$this`` placeholder. The
placeholder is substituted textually, so ``$this`` inside a comment or a
string literal in the query is rewritten too.

A constraint whose query fails to parse, fails to evaluate or times out
contributes no results; the failure is logged and the run continues.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, Optional

from rdf_shapes.graph import Graph
from rdf_shapes.query_context import QueryTimeoutException, run_select
from rdf_shapes.results import Severity, ValidationResult
from rdf_shapes.shapes import SPARQLConstraint
from rdf_shapes.terms import BlankNode, Iri, Term
from rdf_shapes.validators.helpers import constraint_component

logger = logging.getLogger(__name__)

_WHERE_OPEN = re.compile(r"WHERE\s*\{")

DEFAULT_MESSAGE = "SPARQL constraint violation"


def substitute_this(query: str, focus_node: Iri | BlankNode) -> str:
    """
    Replace the ``$this`` placeholder with the focus node.

    For an IRI, a projected ``SELECT $this`` becomes ``SELECT ?this`` and
    ``?this`` is bound right after the first ``WHERE {``. Blank nodes are
    substituted as ``_:id`` with no binding, so they cannot be projected.
    """
    if isinstance(focus_node, BlankNode):
        return query.replace("$this", focus_node.n3())

    iri = focus_node.n3()
    rewritten = query.replace("SELECT $this", "SELECT ?this")
    rewritten = rewritten.replace("$this", iri)

    if "SELECT ?this" in rewritten:
        rewritten = _WHERE_OPEN.sub(
            lambda _: f"WHERE {{ BIND({iri} AS ?this) . ", rewritten, count=1
        )
    return rewritten


def _with_prefixes(query: str, prefixes: dict[str, str]) -> str:
    if not prefixes:
        return query
    header = "".join(f"PREFIX {p}: <{ns}>\n" for p, ns in prefixes.items())
    return header + query


def validate(
    graph: Graph,
    focus_node: Term,
    constraints: Iterable[SPARQLConstraint],
    timeout: Optional[float] = None,
) -> list[ValidationResult]:
    """Run every constraint for one focus node; one violation per result row."""
    results: list[ValidationResult] = []
    for constraint in constraints:
        results.extend(_validate_constraint(graph, focus_node, constraint, timeout))
    return results


def _validate_constraint(
    graph: Graph,
    focus_node: Term,
    constraint: SPARQLConstraint,
    timeout: Optional[float],
) -> list[ValidationResult]:
    if not isinstance(focus_node, (Iri, BlankNode)):
        logger.debug(f"Skipping SPARQL constraint for literal focus node {focus_node.n3()}")
        return []

    query = _with_prefixes(substitute_this(constraint.select, focus_node), constraint.prefixes)

    try:
        rows, _ = run_select(graph, query, timeout)
    except QueryTimeoutException as e:
        logger.warning(
            f"SPARQL constraint of {constraint.source_shape.n3()} timed out "
            f"for {focus_node.n3()}: {e}"
        )
        return []
    except Exception as e:
        logger.warning(
            f"SPARQL constraint of {constraint.source_shape.n3()} failed "
            f"for {focus_node.n3()}: {e}"
        )
        return []

    component = constraint_component("SPARQL")
    return [
        ValidationResult(
            focus_node=focus_node,
            value=row.get("value"),
            message=constraint.message or DEFAULT_MESSAGE,
            severity=Severity.VIOLATION,
            source_shape=constraint.source_shape,
            constraint_component=component,
            details=row,
        )
        for row in rows
    ]
