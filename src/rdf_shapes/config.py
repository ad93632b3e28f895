"""
Validator configuration.

Provides:
- Query timeout for SPARQL constraints
- Parallel fan-out of (focus node, shape) pairs
- Log level for the ``rdf_shapes`` logger
"""
from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Optional


@dataclass
class ValidatorConfig:
    """Configuration for a validation run."""
    query_timeout_seconds: Optional[float] = 30.0  # None = unbounded
    parallel: bool = False
    max_workers: Optional[int] = None               # None = executor default
    log_level: Optional[str] = None                 # None = leave logger untouched

    def __post_init__(self) -> None:
        if self.query_timeout_seconds is not None and self.query_timeout_seconds <= 0:
            raise ValueError(
                f"query_timeout_seconds must be positive, got {self.query_timeout_seconds}"
            )
        if self.max_workers is not None and self.max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {self.max_workers}")
        if self.log_level is not None:
            self.log_level = self.log_level.upper()
            if not isinstance(logging.getLevelName(self.log_level), int):
                raise ValueError(f"Unknown log level: {self.log_level}")

    def apply_logging(self) -> None:
        """Set the level of the package logger, if a level is configured."""
        if self.log_level is None:
            return
        logging.getLogger("rdf_shapes").setLevel(self.log_level)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "query_timeout_seconds": self.query_timeout_seconds,
            "parallel": self.parallel,
            "max_workers": self.max_workers,
            "log_level": self.log_level,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "ValidatorConfig":
        return cls(
            query_timeout_seconds=data.get("query_timeout_seconds", 30.0),
            parallel=data.get("parallel", False),
            max_workers=data.get("max_workers"),
            log_level=data.get("log_level"),
        )
