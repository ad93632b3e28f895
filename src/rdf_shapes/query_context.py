"""
Query execution with timeout support.

Provides:
- Query timeout (per call, ``None`` = unbounded)
- Query statistics (state, duration, rows returned)
- SELECT evaluation against a graph's Oxigraph store
"""

from __future__ import annotations
from concurrent.futures import ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from dataclasses import dataclass
from enum import IntEnum, auto
from typing import Any, Callable, Optional, TypeVar
import logging
import time

from rdf_shapes.graph import Graph, from_oxigraph_term
from rdf_shapes.terms import Term

logger = logging.getLogger(__name__)


class QueryState(IntEnum):
    """Query execution states."""
    PENDING = auto()     # Created but not started
    RUNNING = auto()     # Currently executing
    COMPLETED = auto()   # Finished successfully
    TIMEOUT = auto()     # Exceeded timeout
    FAILED = auto()      # Failed with error


@dataclass
class QueryStats:
    """Statistics for query execution."""
    start_time: Optional[float] = None
    end_time: Optional[float] = None
    state: QueryState = QueryState.PENDING
    rows_returned: int = 0
    error: Optional[str] = None

    @property
    def duration_ms(self) -> float:
        """Query duration in milliseconds."""
        if self.start_time is None:
            return 0.0
        end = self.end_time or time.time()
        return (end - self.start_time) * 1000

    def to_dict(self) -> dict:
        """Convert to dictionary."""
        return {
            "duration_ms": self.duration_ms,
            "state": self.state.name,
            "rows_returned": self.rows_returned,
            "error": self.error,
        }


class QueryTimeoutException(Exception):
    """Exception raised when a query times out."""
    pass


T = TypeVar('T')


def execute_with_timeout(
    func: Callable[..., T],
    timeout_seconds: Optional[float],
    *args,
    **kwargs
) -> tuple[T, QueryStats]:
    """
    Execute a function with timeout.

    Args:
        func: Function to execute
        timeout_seconds: Maximum execution time in seconds (None = no timeout)
        *args: Positional arguments for func
        **kwargs: Keyword arguments for func

    Returns:
        Tuple of (result, stats)

    Raises:
        QueryTimeoutException: If execution exceeds timeout
    """
    stats = QueryStats()
    stats.start_time = time.time()
    stats.state = QueryState.RUNNING

    if timeout_seconds is None:
        try:
            result = func(*args, **kwargs)
        except Exception as e:
            stats.end_time = time.time()
            stats.state = QueryState.FAILED
            stats.error = str(e)
            raise
        stats.end_time = time.time()
        stats.state = QueryState.COMPLETED
        return result, stats

    # Not a context manager: leaving the with-block would wait for a
    # timed-out worker. The abandoned thread finishes on its own.
    executor = ThreadPoolExecutor(max_workers=1)
    future = executor.submit(func, *args, **kwargs)
    try:
        result = future.result(timeout=timeout_seconds)
        stats.end_time = time.time()
        stats.state = QueryState.COMPLETED
        return result, stats
    except FuturesTimeoutError:
        stats.end_time = time.time()
        stats.state = QueryState.TIMEOUT
        raise QueryTimeoutException(
            f"Query exceeded timeout of {timeout_seconds}s"
        )
    except Exception as e:
        stats.end_time = time.time()
        stats.state = QueryState.FAILED
        stats.error = str(e)
        raise
    finally:
        executor.shutdown(wait=False, cancel_futures=True)


def _select_rows(graph: Graph, query: str) -> list[dict[str, Term]]:
    solutions = graph.to_store().query(query)
    variables = [v.value for v in solutions.variables]
    rows = []
    for solution in solutions:
        row: dict[str, Term] = {}
        for name in variables:
            bound = solution[name]
            if bound is not None:
                row[name] = from_oxigraph_term(bound)
        rows.append(row)
    return rows


def run_select(
    graph: Graph, query: str, timeout_seconds: Optional[float] = None
) -> tuple[list[dict[str, Any]], QueryStats]:
    """
    Evaluate a SELECT query and materialize its rows.

    Each row maps variable names (without ``?``) to the bound terms;
    unbound variables are left out. Rows are read inside the worker so the
    timeout covers lazy evaluation too.

    Raises:
        QueryTimeoutException: If evaluation exceeds ``timeout_seconds``
        SyntaxError: If the query does not parse
    """
    rows, stats = execute_with_timeout(_select_rows, timeout_seconds, graph, query)
    stats.rows_returned = len(rows)
    logger.debug(f"SELECT returned {len(rows)} rows in {stats.duration_ms:.1f}ms")
    return rows, stats
