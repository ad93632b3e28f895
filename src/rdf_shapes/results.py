"""
Validation results and conformance reports.

A ``ValidationResult`` is created once per detected non-conformance and is
never changed afterwards. A ``Report`` groups results by severity; it is
built fresh for every validation run or reconstructed by the report parser.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, Mapping

import polars as pl

from rdf_shapes.terms import SH, BlankNode, Iri, Literal, Term


class Severity(Enum):
    """SHACL validation severity levels."""

    VIOLATION = f"{SH}Violation"
    WARNING = f"{SH}Warning"
    INFO = f"{SH}Info"

    @classmethod
    def from_iri(cls, value: Term | str | None) -> "Severity":
        """
        Map a severity IRI to a level.

        Anything that is not one of the three SHACL severities is treated
        as a violation.
        """
        text = value.value if isinstance(value, Iri) else value
        for severity in cls:
            if severity.value == text:
                return severity
        return cls.VIOLATION

    @property
    def iri(self) -> Iri:
        return Iri(self.value)


def _plain(value: Any) -> Any:
    """Render a term or detail value for dict/dataframe output."""
    if isinstance(value, (Iri, BlankNode, Literal)):
        return str(value)
    if isinstance(value, (list, tuple)):
        return [_plain(v) for v in value]
    return value


@dataclass(frozen=True)
class ValidationResult:
    """A single validation result."""

    focus_node: Term | None
    message: str = ""
    severity: Severity = Severity.VIOLATION
    result_path: Iri | None = None
    value: Term | None = None
    source_shape: Term | None = None
    constraint_component: Iri | None = None
    details: Mapping[str, Any] = field(default_factory=dict, hash=False)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "focusNode": _plain(self.focus_node),
            "resultPath": _plain(self.result_path),
            "value": _plain(self.value),
            "sourceShape": _plain(self.source_shape),
            "sourceConstraintComponent": _plain(self.constraint_component),
            "resultMessage": self.message,
            "resultSeverity": self.severity.value,
            "details": {k: _plain(v) for k, v in self.details.items()},
        }


@dataclass(frozen=True)
class Report:
    """SHACL validation report."""

    conforms: bool = True
    violations: tuple[ValidationResult, ...] = ()
    warnings: tuple[ValidationResult, ...] = ()
    info: tuple[ValidationResult, ...] = ()

    @classmethod
    def from_results(cls, results: Iterable[ValidationResult]) -> "Report":
        """Partition results by severity; conforms iff there are no violations."""
        buckets: dict[Severity, list[ValidationResult]] = {s: [] for s in Severity}
        for result in results:
            buckets[result.severity].append(result)
        return cls(
            conforms=not buckets[Severity.VIOLATION],
            violations=tuple(buckets[Severity.VIOLATION]),
            warnings=tuple(buckets[Severity.WARNING]),
            info=tuple(buckets[Severity.INFO]),
        )

    @property
    def results(self) -> tuple[ValidationResult, ...]:
        """All results: violations, then warnings, then info."""
        return self.violations + self.warnings + self.info

    @property
    def issue_count(self) -> int:
        return len(self.violations) + len(self.warnings) + len(self.info)

    @property
    def has_violations(self) -> bool:
        return bool(self.violations)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dictionary representation."""
        return {
            "conforms": self.conforms,
            "results": [r.to_dict() for r in self.results],
            "violationCount": len(self.violations),
            "warningCount": len(self.warnings),
            "infoCount": len(self.info),
        }

    def to_turtle(self) -> str:
        """Serialize to a SHACL validation report in Turtle."""
        from rdf_shapes.writer import to_turtle

        return to_turtle(self)

    def to_dataframe(self) -> pl.DataFrame:
        """One row per result, for filtering and grouping with Polars."""
        rows = [r.to_dict() for r in self.results]
        return pl.DataFrame(
            {
                "focus_node": [r["focusNode"] for r in rows],
                "result_path": [r["resultPath"] for r in rows],
                "value": [
                    None if r["value"] is None else str(r["value"]) for r in rows
                ],
                "source_shape": [r["sourceShape"] for r in rows],
                "constraint_component": [r["sourceConstraintComponent"] for r in rows],
                "severity": [r["resultSeverity"].rsplit("#", 1)[-1] for r in rows],
                "message": [r["resultMessage"] for r in rows],
            },
            schema={
                "focus_node": pl.Utf8,
                "result_path": pl.Utf8,
                "value": pl.Utf8,
                "source_shape": pl.Utf8,
                "constraint_component": pl.Utf8,
                "severity": pl.Utf8,
                "message": pl.Utf8,
            },
        )
