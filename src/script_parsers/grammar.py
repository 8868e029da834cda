# -*- coding: utf-8 -*-
"""
Grammar validators: the single capability the orchestrator needs.

    diagnostics = grammar.validate(statement_text)

A grammar validator returns a (possibly empty) list of SyntaxDiagnostic, or
raises GrammarError when it cannot produce diagnostics at all.  Any engine
implementing that contract can be plugged into the orchestrator; the one
shipped here delegates to sqlglot.
"""

from __future__ import annotations

import logging
import re
from typing import List, Optional, Protocol, runtime_checkable

import sqlglot
from sqlglot.errors import ErrorLevel, ParseError, TokenError

from script_parsers.config import DEFAULT_DIALECT, MAX_ERRORS
from script_parsers.errors import GrammarError
from script_parsers.result import SyntaxDiagnostic

logger = logging.getLogger(__name__)

# sqlglot has no grammar for procedural routine bodies
_ROUTINE_HEADER = re.compile(
    r"^\s*(?:(?:--|#)[^\n]*\n\s*)*(CREATE|ALTER)\b[^;]*?\b(PROCEDURE|FUNCTION|TRIGGER|EVENT)\b",
    re.IGNORECASE,
)


@runtime_checkable
class GrammarValidator(Protocol):
    """Parse one statement and report its syntax errors."""

    def validate(self, text: str) -> List[SyntaxDiagnostic]:
        ...


class SqlglotGrammar:
    """
    Grammar validator backed by sqlglot.

    Ordinary statements are fully parsed; every entry of
    ``ParseError.errors`` becomes one diagnostic.  Routine definitions are
    only tokenized, since sqlglot parses their bodies as opaque commands.
    """

    def __init__(self, dialect: str = DEFAULT_DIALECT, max_errors: int = MAX_ERRORS):
        self.dialect = dialect
        self.max_errors = max_errors

    def validate(self, text: str) -> List[SyntaxDiagnostic]:
        if _ROUTINE_HEADER.match(text):
            self._tokenize(text)
            return []

        try:
            sqlglot.parse(
                text,
                read=self.dialect,
                error_level=ErrorLevel.RAISE,
                max_errors=self.max_errors,
            )
        except ParseError as exc:
            return _diagnostics_from_parse_error(exc)
        except TokenError as exc:
            raise GrammarError(str(exc)) from exc
        return []

    def _tokenize(self, text: str) -> None:
        try:
            sqlglot.tokenize(text, read=self.dialect)
        except TokenError as exc:
            raise GrammarError(str(exc)) from exc

    def __repr__(self) -> str:
        return f"SqlglotGrammar(dialect={self.dialect!r})"


def _diagnostics_from_parse_error(exc: ParseError) -> List[SyntaxDiagnostic]:
    """Map sqlglot's structured error entries to diagnostics."""
    diagnostics: List[SyntaxDiagnostic] = []
    for entry in exc.errors or []:
        diagnostics.append(
            SyntaxDiagnostic(
                line=_as_int(entry.get("line"), default=1),
                column=_as_int(entry.get("col"), default=0),
                message=str(entry.get("description") or "syntax error"),
            )
        )
    if not diagnostics:
        # ParseError raised without structured entries
        diagnostics.append(SyntaxDiagnostic(line=1, column=0, message=str(exc)))
    return diagnostics


def _as_int(value: Optional[object], default: int) -> int:
    try:
        return int(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
