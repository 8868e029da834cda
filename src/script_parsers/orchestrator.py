# -*- coding: utf-8 -*-
"""
Validation orchestrator: statements in, ordered ValidationResults out.

    orchestrator = ValidationOrchestrator()             # sqlglot grammar
    report = orchestrator.validate_script(script_text)  # split + validate
    results = orchestrator.validate(statements)         # already split

Routine boundaries are taken from ``Statement.kind`` as classified by the
splitter; the orchestrator never re-derives them from raw text.  Every
failure is scoped to its own statement, so a run always completes.
"""

from __future__ import annotations

import logging
from typing import Iterable, List, Optional

from script_parsers.errors import (
    INCOMPLETE_ROUTINE_MESSAGE,
    UNEXPECTED_ERROR_PREFIX,
    GrammarError,
)
from script_parsers.grammar import GrammarValidator, SqlglotGrammar
from script_parsers.result import ValidationReport, ValidationResult, join_diagnostics
from script_parsers.splitter import Entry, split, split_entries
from script_parsers.statement import DEFAULT_DELIMITER, Statement, StatementKind

logger = logging.getLogger(__name__)


class ValidationOrchestrator:
    """Classifies statements and runs the grammar validator on each one."""

    def __init__(
        self,
        grammar: Optional[GrammarValidator] = None,
        delimiter: str = DEFAULT_DELIMITER,
    ):
        self.grammar = grammar if grammar is not None else SqlglotGrammar()
        self.delimiter = delimiter

    # ── Entry points ─────────────────────────────────────────────────────────

    def validate(self, statements: Iterable[Statement]) -> List[ValidationResult]:
        """
        Validate statements in order, one result per non-blank statement.

        Args:
            statements: Statement records as emitted by the splitter.

        Returns:
            ValidationResults in input order.
        """
        results: List[ValidationResult] = []

        for statement in statements:
            text = statement.text.strip()
            if not text:
                continue

            if statement.kind == StatementKind.DELIMITER_DIRECTIVE:
                # Directives are never grammar-checked
                logger.debug(f"Line {statement.start_line}: directive {text!r}")
                results.append(ValidationResult.ok(text, statement.start_line))
                continue

            if statement.is_incomplete_routine:
                logger.warning(
                    f"Line {statement.start_line}: {INCOMPLETE_ROUTINE_MESSAGE}"
                )
                results.append(
                    ValidationResult.failed(
                        INCOMPLETE_ROUTINE_MESSAGE, text, statement.start_line
                    )
                )
                continue

            results.append(self._check(text, statement.start_line))

        return results

    def validate_entries(self, entries: Iterable[Entry]) -> List[ValidationResult]:
        """Validate pre-split entries (strings or ``(text, line_number)`` pairs)."""
        return self.validate(split_entries(entries, self.delimiter))

    def validate_script(self, script: str) -> ValidationReport:
        """Split a whole script and validate every statement."""
        statements = split(script, self.delimiter)
        logger.info(f"Split script into {len(statements)} statement(s)")
        report = ValidationReport(results=self.validate(statements))
        logger.info(
            f"{report.valid_queries}/{report.total_queries} statement(s) valid"
        )
        return report

    def validate_query(self, query: str) -> ValidationReport:
        """Validate an inline query string; it may hold several statements."""
        return self.validate_script(query)

    # ── Internal ─────────────────────────────────────────────────────────────

    def _check(self, text: str, line_number: int) -> ValidationResult:
        """One grammar call; never raises."""
        try:
            diagnostics = self.grammar.validate(text)
        except GrammarError as exc:
            logger.info(f"Line {line_number}: grammar error: {exc}")
            return ValidationResult.failed(
                str(exc) or type(exc).__name__, text, line_number
            )
        except Exception as exc:
            logger.exception(f"Line {line_number}: grammar validator failed")
            return ValidationResult.failed(
                f"{UNEXPECTED_ERROR_PREFIX}{exc}", text, line_number
            )

        if diagnostics:
            error = join_diagnostics(list(diagnostics))
            logger.info(f"Line {line_number}: {error}")
            return ValidationResult.failed(error, text, line_number)
        return ValidationResult.ok(text, line_number)


def validate_script(
    script: str, grammar: Optional[GrammarValidator] = None
) -> ValidationReport:
    """Convenience wrapper: split and validate ``script`` in one call."""
    return ValidationOrchestrator(grammar).validate_script(script)
