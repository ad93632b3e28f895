"""Tests for the shared validator helpers."""

import pytest
from rdf_shapes.graph import Graph
from rdf_shapes.results import Severity
from rdf_shapes.shapes import NodeKind, NodeShape, PropertyShape
from rdf_shapes.terms import (
    RDF_TYPE,
    SH,
    XSD,
    XSD_INTEGER,
    XSD_STRING,
    BlankNode,
    Iri,
    Literal,
)
from rdf_shapes.validators.helpers import (
    build_violation,
    constraint_component,
    extract_number,
    extract_string,
    get_property_values,
    is_datatype,
    is_instance_of,
    is_node_kind,
    unwrap_bound,
)

EX = "http://example.org/"


# ============================================================================
# Lookup Helpers
# ============================================================================

class TestLookups:
    """Tests for property values and class membership."""

    @pytest.fixture
    def graph(self):
        return Graph([
            (Iri(f"{EX}m"), RDF_TYPE, Iri(f"{EX}Module")),
            (Iri(f"{EX}m"), Iri(f"{EX}hasFunction"), Iri(f"{EX}f1")),
            (Iri(f"{EX}m"), Iri(f"{EX}hasFunction"), Iri(f"{EX}f2")),
            (Iri(f"{EX}f1"), RDF_TYPE, Iri(f"{EX}Function")),
            (Iri(f"{EX}PublicFunction"), Iri(f"http://www.w3.org/2000/01/rdf-schema#subClassOf"),
             Iri(f"{EX}Function")),
            (Iri(f"{EX}f2"), RDF_TYPE, Iri(f"{EX}PublicFunction")),
        ])

    def test_get_property_values(self, graph):
        """Test values follow the path in graph order."""
        values = get_property_values(graph, Iri(f"{EX}m"), Iri(f"{EX}hasFunction"))
        assert values == [Iri(f"{EX}f1"), Iri(f"{EX}f2")]

    def test_get_property_values_missing(self, graph):
        """Test an absent property yields an empty list."""
        assert get_property_values(graph, Iri(f"{EX}m"), Iri(f"{EX}name")) == []

    def test_is_instance_of_direct(self, graph):
        """Test a direct rdf:type assertion counts."""
        assert is_instance_of(graph, Iri(f"{EX}f1"), Iri(f"{EX}Function"))

    def test_is_instance_of_no_subclass_reasoning(self, graph):
        """Test subclass membership is not inferred."""
        assert not is_instance_of(graph, Iri(f"{EX}f2"), Iri(f"{EX}Function"))

    def test_literal_is_never_an_instance(self, graph):
        """Test literals are not instances of any class."""
        assert not is_instance_of(graph, Literal("f1"), Iri(f"{EX}Function"))


# ============================================================================
# Term Checks
# ============================================================================

class TestTermChecks:
    """Tests for datatype and node kind checks."""

    def test_is_datatype(self):
        """Test datatype comparison on literals only."""
        assert is_datatype(Literal("1", XSD_INTEGER), XSD_INTEGER)
        assert not is_datatype(Literal("1"), XSD_INTEGER)
        assert not is_datatype(Iri(f"{EX}a"), XSD_STRING)

    @pytest.mark.parametrize("kind,iri,blank,literal", [
        (NodeKind.IRI, True, False, False),
        (NodeKind.BLANK_NODE, False, True, False),
        (NodeKind.LITERAL, False, False, True),
        (NodeKind.BLANK_NODE_OR_IRI, True, True, False),
        (NodeKind.BLANK_NODE_OR_LITERAL, False, True, True),
        (NodeKind.IRI_OR_LITERAL, True, False, True),
    ])
    def test_is_node_kind(self, kind, iri, blank, literal):
        """Test every node kind against every kind of term."""
        assert is_node_kind(Iri(f"{EX}a"), kind) is iri
        assert is_node_kind(BlankNode("b"), kind) is blank
        assert is_node_kind(Literal("x"), kind) is literal


# ============================================================================
# Extractors
# ============================================================================

class TestExtractors:
    """Tests for string and number extraction."""

    def test_extract_string(self):
        """Test lexical forms are extracted from literals only."""
        assert extract_string(Literal("abc")) == "abc"
        assert extract_string(Literal("5", XSD_INTEGER)) == "5"
        assert extract_string(Iri(f"{EX}a")) is None

    def test_extract_integer(self):
        """Test integer-family literals become ints."""
        assert extract_number(Literal("42", XSD_INTEGER)) == 42
        assert extract_number(Literal("7", Iri(f"{XSD}nonNegativeInteger"))) == 7

    def test_extract_decimal(self):
        """Test decimal-family literals become floats."""
        assert extract_number(Literal("2.5", Iri(f"{XSD}decimal"))) == 2.5
        assert extract_number(Literal("1e3", Iri(f"{XSD}double"))) == 1000.0

    def test_extract_number_rejects_non_numeric(self):
        """Test strings, IRIs and malformed numbers yield None."""
        assert extract_number(Literal("42")) is None
        assert extract_number(Iri(f"{EX}a")) is None
        assert extract_number(Literal("abc", XSD_INTEGER)) is None

    @pytest.mark.parametrize("lexical,datatype", [
        ("1_000", "integer"),
        ("١٢", "integer"),
        ("1.5", "integer"),
        ("1e5", "decimal"),
        ("INF", "decimal"),
        ("1_0.5", "double"),
        ("infinity", "double"),
    ])
    def test_extract_number_rejects_non_xsd_forms(self, lexical, datatype):
        """Test forms outside the XSD lexical space yield None."""
        assert extract_number(Literal(lexical, Iri(f"{XSD}{datatype}"))) is None

    def test_extract_double_special_forms(self):
        """Test exponents and INF are valid for double and float."""
        assert extract_number(Literal("1e5", Iri(f"{XSD}double"))) == 100000.0
        assert extract_number(Literal("-INF", Iri(f"{XSD}float"))) == float("-inf")
        assert extract_number(Literal(" +7 ", XSD_INTEGER)) == 7

    def test_unwrap_bound(self):
        """Test bounds given as literals are unwrapped."""
        assert unwrap_bound(255) == 255
        assert unwrap_bound(Literal("255", XSD_INTEGER)) == 255
        assert unwrap_bound(None) is None


# ============================================================================
# Violation Builder
# ============================================================================

class TestBuildViolation:
    """Tests for building violation results."""

    def test_property_shape_violation(self):
        """Test property shape violations carry path and source shape."""
        shape = PropertyShape(id=Iri(f"{EX}NameShape"), path=Iri(f"{EX}name"))
        details = {"constraint_component": constraint_component("Pattern")}
        result = build_violation(Iri(f"{EX}a"), shape, "bad", details, value=Literal("x"))

        assert result.result_path == Iri(f"{EX}name")
        assert result.source_shape == Iri(f"{EX}NameShape")
        assert result.message == "bad"
        assert result.severity == Severity.VIOLATION
        assert result.value == Literal("x")
        assert result.constraint_component == Iri(f"{SH}PatternConstraintComponent")

    def test_node_shape_violation_has_no_path(self):
        """Test node shape violations have no result path."""
        shape = NodeShape(id=Iri(f"{EX}Shape"))
        result = build_violation(Iri(f"{EX}a"), shape, "bad", {})
        assert result.result_path is None
        assert result.constraint_component is None

    def test_shape_message_overrides_default(self):
        """Test the shape's own message wins."""
        shape = PropertyShape(
            id=Iri(f"{EX}S"), path=Iri(f"{EX}p"), message="Custom message"
        )
        result = build_violation(Iri(f"{EX}a"), shape, "default", {})
        assert result.message == "Custom message"
