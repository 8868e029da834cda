# -*- coding: utf-8 -*-
"""
script_parsers — SQL script splitting and per-statement validation.

Public API
----------
Main entry points::

    from script_parsers import split, validate_script
    statements = split(script)            # Statement records, no validation
    report = validate_script(script)      # split + grammar check per statement

Orchestrator with a custom grammar::

    from script_parsers import ValidationOrchestrator
    orchestrator = ValidationOrchestrator(grammar=my_grammar)
    results = orchestrator.validate(statements)

Result types::

    from script_parsers import ValidationResult, ValidationReport, SyntaxDiagnostic
"""

from script_parsers.errors import GrammarError, ScriptValidationError
from script_parsers.grammar import GrammarValidator, SqlglotGrammar
from script_parsers.orchestrator import ValidationOrchestrator, validate_script
from script_parsers.result import (
    SyntaxDiagnostic,
    ValidationReport,
    ValidationResult,
    join_diagnostics,
)
from script_parsers.splitter import StatementSplitter, split, split_entries
from script_parsers.statement import ScannerState, Statement, StatementKind

__all__ = [
    # ── Main entry points ─────────────────────────────────────────────────
    "split",
    "split_entries",
    "validate_script",
    # ── Components ────────────────────────────────────────────────────────
    "StatementSplitter",
    "ValidationOrchestrator",
    "GrammarValidator",
    "SqlglotGrammar",
    # ── Data types ────────────────────────────────────────────────────────
    "Statement",
    "StatementKind",
    "ScannerState",
    "SyntaxDiagnostic",
    "ValidationResult",
    "ValidationReport",
    "join_diagnostics",
    # ── Errors ────────────────────────────────────────────────────────────
    "ScriptValidationError",
    "GrammarError",
]
