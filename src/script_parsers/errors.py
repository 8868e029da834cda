# -*- coding: utf-8 -*-
"""Exception types and the fixed messages attached to failing results."""

INCOMPLETE_ROUTINE_MESSAGE = "Incomplete procedure definition"
UNEXPECTED_ERROR_PREFIX = "Unexpected error: "
READ_FAILURE_PREFIX = "Failed to read file: "


class ScriptValidationError(Exception):
    """Base class for errors raised by script_parsers."""


class GrammarError(ScriptValidationError):
    """
    Raised by a grammar validator when it cannot produce diagnostics at all,
    e.g. the parse was cancelled or the input could not be tokenized.

    The orchestrator reports the message on the offending statement only.
    """
