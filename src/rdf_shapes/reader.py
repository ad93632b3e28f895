"""
Read node shapes from a SHACL shapes graph.

Supports:
- sh:targetClass, sh:targetNode and implicit class targets
- sh:property with sh:path (a single predicate IRI)
- sh:sparql with sh:select, sh:message and sh:prefixes / sh:declare
- Node-level and property-level core constraints
- sh:qualifiedValueShape [ sh:class C ] with sh:qualifiedMinCount
- sh:severity, sh:deactivated, sh:message
"""

from __future__ import annotations

import logging
import re
from typing import Any

from rdf_shapes.graph import Graph
from rdf_shapes.results import Severity
from rdf_shapes.shapes import NodeKind, NodeShape, PropertyShape, SPARQLConstraint
from rdf_shapes.terms import (
    RDF_FIRST,
    RDF_NIL,
    RDF_REST,
    RDF_TYPE,
    RDFS_CLASS,
    SH,
    BlankNode,
    Iri,
    Literal,
    Term,
)

logger = logging.getLogger(__name__)


def _sh(name: str) -> Iri:
    return Iri(f"{SH}{name}")


SH_NODE_SHAPE = _sh("NodeShape")

# Constraint predicates shared by node shapes and property shapes
_INTEGER_PARAMS = {
    _sh("minLength"): "min_length",
    _sh("maxLength"): "max_length",
}
_BOUND_PARAMS = {
    _sh("minInclusive"): "min_inclusive",
    _sh("maxInclusive"): "max_inclusive",
    _sh("minExclusive"): "min_exclusive",
    _sh("maxExclusive"): "max_exclusive",
}
_REGEX_FLAGS = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
    "x": re.VERBOSE,
}


class ShapeParseError(Exception):
    """Raised when a shapes graph contains a shape that cannot be read."""
    pass


class ShapesReader:
    """Builds ``NodeShape`` objects from the triples of a shapes graph."""

    def __init__(self, graph: Graph) -> None:
        self.graph = graph

    def read(self) -> list[NodeShape]:
        """Read every ``sh:NodeShape`` in the graph, in graph order."""
        shapes = [
            self._parse_node_shape(subject)
            for subject in self.graph.subjects(RDF_TYPE, SH_NODE_SHAPE)
        ]
        logger.debug(f"Read {len(shapes)} node shapes")
        return shapes

    # -------------------------------------------------------------------------
    # Shapes
    # -------------------------------------------------------------------------

    def _parse_node_shape(self, node: Iri | BlankNode) -> NodeShape:
        g = self.graph
        fields: dict[str, Any] = {
            "target_classes": [
                c for c in g.objects(node, _sh("targetClass")) if isinstance(c, Iri)
            ],
            "target_nodes": g.objects(node, _sh("targetNode")),
            "property_shapes": [
                self._parse_property_shape(p) for p in g.objects(node, _sh("property"))
            ],
            "sparql_constraints": [
                self._parse_sparql(node, s) for s in g.objects(node, _sh("sparql"))
            ],
        }

        if isinstance(node, Iri) and RDFS_CLASS in g.objects(node, RDF_TYPE):
            fields["implicit_class_target"] = node

        kind = g.value(node, _sh("nodeKind"))
        if kind is not None:
            try:
                fields["node_kind"] = NodeKind(str(kind))
            except ValueError:
                raise ShapeParseError(f"Unknown sh:nodeKind {kind.n3()} on {node.n3()}")

        language_in = g.value(node, _sh("languageIn"))
        if language_in is not None:
            fields["language_in"] = [str(t) for t in self._parse_list(language_in)]

        fields.update(self._parse_common(node))
        return NodeShape(id=node, **fields)

    def _parse_property_shape(self, node: Term) -> PropertyShape:
        g = self.graph
        if isinstance(node, Literal):
            raise ShapeParseError(f"sh:property value {node.n3()} is not a shape")

        path = g.value(node, _sh("path"))
        if path is None:
            raise ShapeParseError(f"Property shape {node.n3()} has no sh:path")
        if not isinstance(path, Iri):
            raise ShapeParseError(
                f"Property shape {node.n3()} has an unsupported sh:path {path.n3()}"
            )

        fields: dict[str, Any] = {
            "min_count": self._parse_integer(node, _sh("minCount")),
            "max_count": self._parse_integer(node, _sh("maxCount")),
        }

        qualified = g.value(node, _sh("qualifiedValueShape"))
        if qualified is not None:
            qualified_class = g.value(qualified, _sh("class"))
            if isinstance(qualified_class, Iri):
                fields["qualified_class"] = qualified_class
            else:
                logger.warning(
                    f"Ignoring sh:qualifiedValueShape of {node.n3()}: "
                    "only [ sh:class C ] is supported"
                )
        fields["qualified_min_count"] = self._parse_integer(node, _sh("qualifiedMinCount"))

        fields.update(self._parse_common(node))
        return PropertyShape(id=node, path=path, **fields)

    def _parse_common(self, node: Iri | BlankNode) -> dict[str, Any]:
        """Parameters that node shapes and property shapes share."""
        g = self.graph
        fields: dict[str, Any] = {}

        message = g.value(node, _sh("message"))
        if message is not None:
            fields["message"] = str(message)

        severity = g.value(node, _sh("severity"))
        if severity is not None:
            fields["severity"] = Severity.from_iri(severity)

        deactivated = g.value(node, _sh("deactivated"))
        if deactivated is not None:
            fields["deactivated"] = self._parse_boolean(deactivated)

        datatype = g.value(node, _sh("datatype"))
        if isinstance(datatype, Iri):
            fields["datatype"] = datatype

        class_ = g.value(node, _sh("class"))
        if isinstance(class_, Iri):
            fields["class_"] = class_

        pattern = g.value(node, _sh("pattern"))
        if pattern is not None:
            fields["pattern"] = self._parse_pattern(node, pattern)

        for predicate, name in _INTEGER_PARAMS.items():
            value = self._parse_integer(node, predicate)
            if value is not None:
                fields[name] = value

        for predicate, name in _BOUND_PARAMS.items():
            value = g.value(node, predicate)
            if value is not None:
                fields[name] = value

        in_list = g.value(node, _sh("in"))
        if in_list is not None:
            fields["in_"] = self._parse_list(in_list)

        has_value = g.value(node, _sh("hasValue"))
        if has_value is not None:
            fields["has_value"] = has_value

        return fields

    def _parse_sparql(self, shape: Iri | BlankNode, node: Term) -> SPARQLConstraint:
        g = self.graph
        select = g.value(node, _sh("select"))
        if select is None:
            raise ShapeParseError(f"SPARQL constraint of {shape.n3()} has no sh:select")

        message = g.value(node, _sh("message"))
        prefixes: dict[str, str] = {}
        for prefixes_node in g.objects(node, _sh("prefixes")):
            prefixes.update(self._parse_prefix_declarations(prefixes_node))

        return SPARQLConstraint(
            source_shape=shape,
            select=str(select),
            message=str(message) if message is not None else None,
            prefixes=prefixes,
        )

    def _parse_prefix_declarations(self, node: Term) -> dict[str, str]:
        g = self.graph
        prefixes = {}
        for declaration in g.objects(node, _sh("declare")):
            prefix = g.value(declaration, _sh("prefix"))
            namespace = g.value(declaration, _sh("namespace"))
            if prefix is None or namespace is None:
                raise ShapeParseError(
                    f"Incomplete sh:declare on {node.n3()}: needs sh:prefix and sh:namespace"
                )
            prefixes[str(prefix)] = str(namespace)
        return prefixes

    # -------------------------------------------------------------------------
    # Values
    # -------------------------------------------------------------------------

    def _parse_pattern(self, node: Term, pattern: Term) -> re.Pattern:
        flags = 0
        flags_value = self.graph.value(node, _sh("flags"))
        if flags_value is not None:
            for flag in str(flags_value):
                if flag not in _REGEX_FLAGS:
                    raise ShapeParseError(f"Unsupported sh:flags '{flag}' on {node.n3()}")
                flags |= _REGEX_FLAGS[flag]
        try:
            return re.compile(str(pattern), flags)
        except re.error as e:
            raise ShapeParseError(f"Invalid sh:pattern on {node.n3()}: {e}") from e

    def _parse_integer(self, node: Term, predicate: Iri) -> int | None:
        value = self.graph.value(node, predicate)
        if value is None:
            return None
        try:
            return int(str(value))
        except ValueError:
            raise ShapeParseError(
                f"{predicate.n3()} on {node.n3()} must be an integer, got {value.n3()}"
            )

    def _parse_boolean(self, value: Term) -> bool:
        return str(value).lower() in ("true", "1")

    def _parse_list(self, head: Term) -> list[Term]:
        """Parse an RDF list."""
        result = []
        current = head
        seen = set()

        while current != RDF_NIL and current not in seen:
            seen.add(current)
            first = self.graph.value(current, RDF_FIRST)
            if first is None:
                break
            result.append(first)
            current = self.graph.value(current, RDF_REST)
            if current is None:
                break

        return result


def read_shapes(graph: Graph) -> list[NodeShape]:
    """Read all node shapes from a parsed shapes graph."""
    return ShapesReader(graph).read()


def read_shapes_turtle(turtle: str) -> list[NodeShape]:
    """
    Parse Turtle text and read its node shapes.

    Raises:
        ShapeParseError: If the text is not Turtle or a shape is malformed
    """
    try:
        graph = Graph.from_turtle(turtle)
    except SyntaxError as e:
        raise ShapeParseError(f"Invalid shapes Turtle: {e}") from e
    return read_shapes(graph)
