# -*- coding: utf-8 -*-
"""
Pydantic v2 models for validation output.

Three types cover the public surface:
  SyntaxDiagnostic  – one structured syntax error from the grammar validator
  ValidationResult  – outcome for one statement: valid flag + joined error
  ValidationReport  – whole-run summary rendered by the presentation layer
"""

from __future__ import annotations

from typing import Any, Dict, List, Optional

from pydantic import BaseModel, Field, computed_field, model_validator


class SyntaxDiagnostic(BaseModel):
    """A single syntax error reported by the grammar validator."""

    line: int
    column: int
    message: str

    def format(self) -> str:
        return f"line {self.line}:{self.column} {self.message}"

    model_config = {"extra": "forbid", "frozen": True}


def join_diagnostics(diagnostics: List[SyntaxDiagnostic]) -> str:
    """Format every diagnostic and join them with '; '."""
    return "; ".join(d.format() for d in diagnostics)


class ValidationResult(BaseModel):
    """Validation outcome for one statement (or one routine body)."""

    valid: bool
    error: Optional[str] = None
    query: str = ""
    line_number: int

    @model_validator(mode="after")
    def check_error_matches_validity(self) -> "ValidationResult":
        if self.valid and self.error is not None:
            raise ValueError("a valid result cannot carry an error")
        if not self.valid and not self.error:
            raise ValueError("an invalid result must carry an error")
        return self

    @classmethod
    def ok(cls, query: str, line_number: int) -> "ValidationResult":
        return cls(valid=True, query=query, line_number=line_number)

    @classmethod
    def failed(cls, error: str, query: str, line_number: int) -> "ValidationResult":
        return cls(valid=False, error=error, query=query, line_number=line_number)

    def to_dict(self) -> Dict[str, Any]:
        d: Dict[str, Any] = {
            "lineNumber": self.line_number,
            "query": self.query,
            "valid": self.valid,
        }
        if not self.valid:
            d["error"] = self.error
        return d

    def __repr__(self) -> str:
        if self.valid:
            return f"ValidationResult(valid=True, line={self.line_number}, query={self.query[:50]!r})"
        return (
            f"ValidationResult(valid=False, line={self.line_number}, "
            f"error={self.error!r}, query={self.query[:50]!r})"
        )

    model_config = {"extra": "forbid"}


class ValidationReport(BaseModel):
    """Ordered per-statement results plus the run-level counters."""

    results: List[ValidationResult] = Field(default_factory=list)

    @computed_field  # type: ignore[misc]
    @property
    def success(self) -> bool:
        """True when every statement validated (vacuously true for no statements)."""
        return all(r.valid for r in self.results)

    @computed_field  # type: ignore[misc]
    @property
    def total_queries(self) -> int:
        return len(self.results)

    @computed_field  # type: ignore[misc]
    @property
    def valid_queries(self) -> int:
        return sum(1 for r in self.results if r.valid)

    @property
    def failures(self) -> List[ValidationResult]:
        return [r for r in self.results if not r.valid]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "success": self.success,
            "totalQueries": self.total_queries,
            "validQueries": self.valid_queries,
            "results": [r.to_dict() for r in self.results],
        }

    model_config = {"extra": "forbid"}


def read_failure(message: str) -> Dict[str, Any]:
    """Response body for a run that failed before any statement was read."""
    return {"success": False, "error": message}
