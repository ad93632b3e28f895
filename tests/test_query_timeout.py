"""
Tests for query timeout and statistics.
"""

import pytest
import time

from rdf_shapes.graph import Graph
from rdf_shapes.query_context import (
    QueryState,
    QueryStats,
    QueryTimeoutException,
    execute_with_timeout,
    run_select,
)
from rdf_shapes.terms import Iri, Literal

EX = "http://example.org/"


class TestQueryStats:
    """Test query statistics."""

    def test_duration_before_start(self):
        """Test duration is zero before the query starts."""
        assert QueryStats().duration_ms == 0.0

    def test_duration(self):
        """Test duration calculation."""
        stats = QueryStats(start_time=10.0, end_time=10.25)
        assert stats.duration_ms == pytest.approx(250.0)

    def test_to_dict(self):
        """Test conversion to dictionary."""
        stats = QueryStats(state=QueryState.COMPLETED, rows_returned=3)
        d = stats.to_dict()
        assert d["state"] == "COMPLETED"
        assert d["rows_returned"] == 3
        assert d["error"] is None


class TestExecuteWithTimeout:
    """Test execute_with_timeout."""

    def test_fast_function(self):
        """Test a function that finishes in time."""
        result, stats = execute_with_timeout(lambda x: x * 2, 1.0, 21)
        assert result == 42
        assert stats.state == QueryState.COMPLETED

    def test_no_timeout(self):
        """Test None runs the function inline."""
        result, stats = execute_with_timeout(lambda: "done", None)
        assert result == "done"
        assert stats.state == QueryState.COMPLETED

    def test_timeout(self):
        """Test a slow function raises QueryTimeoutException."""
        start = time.time()
        with pytest.raises(QueryTimeoutException):
            execute_with_timeout(time.sleep, 0.05, 1.0)
        # The caller does not wait for the abandoned worker
        assert time.time() - start < 0.9

    def test_error_propagates(self):
        """Test errors raised by the function propagate."""
        def boom():
            raise ValueError("bad")

        with pytest.raises(ValueError):
            execute_with_timeout(boom, 1.0)


class TestRunSelect:
    """Test SELECT evaluation."""

    @pytest.fixture
    def graph(self):
        return Graph([
            (Iri(f"{EX}a"), Iri(f"{EX}name"), Literal("A")),
            (Iri(f"{EX}b"), Iri(f"{EX}age"), Literal("3")),
        ])

    def test_rows(self, graph):
        """Test rows map variable names to terms."""
        rows, stats = run_select(
            graph, "SELECT ?s ?n WHERE { ?s <http://example.org/name> ?n }"
        )
        assert rows == [{"s": Iri(f"{EX}a"), "n": Literal("A")}]
        assert stats.rows_returned == 1
        assert stats.state == QueryState.COMPLETED

    def test_unbound_variables_omitted(self, graph):
        """Test unbound OPTIONAL variables are left out of the row."""
        rows, _ = run_select(
            graph,
            "SELECT ?s ?n WHERE { ?s <http://example.org/age> ?age "
            "OPTIONAL { ?s <http://example.org/name> ?n } }",
        )
        assert rows == [{"s": Iri(f"{EX}b")}]

    def test_syntax_error(self, graph):
        """Test a malformed query raises."""
        with pytest.raises(SyntaxError):
            run_select(graph, "SELECT WHERE {", timeout_seconds=5.0)
