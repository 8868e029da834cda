# -*- coding: utf-8 -*-
"""
Line-based statement splitter for SQL scripts.

    statements = split(script)                    # whole script
    statements = split_entries([("SELECT 1", 1)]) # pre-split entries

The scanner reads one physical line at a time and keeps just enough state to
find statement boundaries:

* the active delimiter (changed by ``DELIMITER <token>`` lines),
* whether it is inside an unterminated ``/* ... */`` comment,
* whether it is inside a ``CREATE PROCEDURE|FUNCTION|TRIGGER|EVENT`` body and
  how many ``BEGIN`` blocks in that body are still open.

It never validates SQL and never rejects input; the worst case is a single
trailing statement holding everything that was never terminated.
"""

from __future__ import annotations

import logging
import re
from typing import Iterable, List, Tuple, Union

from script_parsers.statement import (
    DEFAULT_DELIMITER,
    ScannerState,
    Statement,
    StatementKind,
)

logger = logging.getLogger(__name__)

_DELIMITER_DIRECTIVE = re.compile(r"^DELIMITER\s+(\S+)\s*$", re.IGNORECASE)

_ROUTINE_START = re.compile(
    r"\b(CREATE|ALTER)\s+"
    r"(?:OR\s+REPLACE\s+)?"
    r"(?:DEFINER\s*=\s*\S+\s+)?"
    r"(?:AGGREGATE\s+)?"
    r"(PROCEDURE|FUNCTION|TRIGGER|EVENT)\b",
    re.IGNORECASE,
)

_LINE_COMMENT = re.compile(r"^(--|#)")

# BEGIN opens a compound block, CASE opens an END-terminated expression or
# statement.  END IF / END LOOP / END WHILE / END REPEAT close flow-control
# constructs whose opening keyword is never counted.  The word after END is
# part of the closer, so END CASE closes once and never reopens.
_BLOCK_OPEN = re.compile(r"\b(BEGIN|CASE)\b", re.IGNORECASE)
_BLOCK_CLOSE = re.compile(
    r"\bEND\b(?!\s+(?:IF|LOOP|WHILE|REPEAT)\b)(?:\s+\w+)?",
    re.IGNORECASE,
)

# Literals and comments are masked before keyword counting and termination
# checks.  Masking keeps column positions, so a masked line lines up with
# the raw one.
_QUOTED = re.compile(
    r"'(?:[^'\\]|\\.|'')*'"
    r'|"(?:[^"\\]|\\.|"")*"'
    r"|`[^`]*`"
)
_INLINE_BLOCK_COMMENT = re.compile(r"/\*.*?\*/")
_BLOCK_COMMENT_SPAN = re.compile(r"/\*.*?(?:\*/|\Z)", re.DOTALL)
_TRAILING_COMMENT = re.compile(r"(--(?:\s|$)|#).*$")

Entry = Union[str, Tuple[str, int]]


def _blank(match: re.Match) -> str:
    return " " * len(match.group(0))


def _mask_quotes(text: str) -> str:
    return _QUOTED.sub(
        lambda m: m.group(0)[0] + " " * (len(m.group(0)) - 2) + m.group(0)[-1],
        text,
    )


def _code_only(line: str) -> str:
    """
    Mask quoted literals and comments so keywords inside them are ignored.

    The result is a prefix of the line with the same column positions; a
    trailing comment is cut off.
    """
    code = _INLINE_BLOCK_COMMENT.sub(_blank, _mask_quotes(line))
    return _TRAILING_COMMENT.sub("", code)


def _count_blocks(code: str) -> Tuple[int, int]:
    """(openers, closers) on one masked line."""
    closed = len(_BLOCK_CLOSE.findall(code))
    opened = len(_BLOCK_OPEN.findall(_BLOCK_CLOSE.sub(" ", code)))
    return opened, closed


def _opens_block_comment(code: str) -> bool:
    """True when masked code starts a /* comment that is not closed on the same line."""
    return "/*" in code


def _is_comment_only(text: str) -> bool:
    code = _BLOCK_COMMENT_SPAN.sub(" ", _mask_quotes(text))
    for line in code.splitlines():
        line = line.strip()
        if line and not _LINE_COMMENT.match(line) and _TRAILING_COMMENT.sub("", line).strip():
            return False
    return True


def _ends_with_delimiter(line: str, delimiter: str) -> bool:
    return bool(delimiter) and _code_only(line).rstrip().endswith(delimiter)


def _strip_delimiter(text: str, delimiter: str) -> str:
    """Remove the delimiter ending the last line along with any comment after it."""
    head, _, last = text.rpartition("\n")
    if not _ends_with_delimiter(last, delimiter):
        return text
    code = _code_only(last).rstrip()
    kept = last[: len(code) - len(delimiter)].rstrip()
    return f"{head}\n{kept}".rstrip() if head else kept


class StatementSplitter:
    """
    Streaming splitter.  Feed lines with ``feed()``; completed statements are
    collected in ``statements``.  Call ``finish()`` once input is exhausted.
    """

    def __init__(self, delimiter: str = DEFAULT_DELIMITER):
        self.state = ScannerState(current_delimiter=delimiter)
        self.statements: List[Statement] = []

    # ── Public API ───────────────────────────────────────────────────────────

    def feed(self, line: str, line_number: int) -> None:
        """Consume one physical line (line ending already removed)."""
        state = self.state
        stripped = line.strip()

        # ── 1. Blank line ─────────────────────────────────────────────────────
        if not stripped:
            if state.buffer:
                state.buffer.append("")
            return

        # ── 2. Inside a multi-line block comment ──────────────────────────────
        if state.in_block_comment:
            state.append(stripped, line_number)
            end = stripped.find("*/")
            if end < 0:
                return
            state.in_block_comment = False
            remainder = stripped[end + 2 :].strip()
            if remainder:
                self._scan_boundaries(remainder, line_number)
            return

        # ── 3. Line comment ───────────────────────────────────────────────────
        if _LINE_COMMENT.match(stripped):
            state.append(stripped, line_number)
            return

        # ── 4. Block comment left open on this line ───────────────────────────
        if _opens_block_comment(_code_only(stripped)):
            state.append(stripped, line_number)
            state.in_block_comment = True
            return

        # ── 5. DELIMITER directive ────────────────────────────────────────────
        match = _DELIMITER_DIRECTIVE.match(stripped)
        if match:
            self._handle_directive(stripped, match.group(1), line_number)
            return

        state.append(stripped, line_number)
        self._scan_boundaries(stripped, line_number)

    def flush(self) -> None:
        """
        Emit a buffered partial statement unless a routine body is open.

        Used at the end of a pre-split entry: the entry is complete even if it
        does not end with the delimiter.
        """
        if not self.state.in_routine_body:
            self._emit(StatementKind.ORDINARY, terminated=False)

    def finish(self) -> List[Statement]:
        """End of input: flush whatever is left and return all statements."""
        state = self.state
        if state.in_routine_body:
            if state.has_content:
                logger.debug(
                    f"Routine body opened at line {state.routine_start_line} "
                    "was never closed"
                )
            self._emit(StatementKind.ROUTINE_BODY, terminated=False)
            state.reset_routine()
        else:
            self._emit(StatementKind.ORDINARY, terminated=False)
        state.in_block_comment = False
        return self.statements

    # ── Internal: per-line rules ─────────────────────────────────────────────

    def _handle_directive(self, line: str, token: str, line_number: int) -> None:
        state = self.state
        if state.in_routine_body:
            # Tooling sometimes leaves DELIMITER lines inside routine sources
            state.append(line, line_number)
        else:
            self._emit(StatementKind.ORDINARY, terminated=False)
            self.statements.append(
                Statement(
                    text=line,
                    start_line=line_number,
                    kind=StatementKind.DELIMITER_DIRECTIVE,
                    terminated=True,
                )
            )
        logger.debug(
            f"Line {line_number}: delimiter {state.current_delimiter!r} -> {token!r}"
        )
        state.current_delimiter = token

    def _scan_boundaries(self, content: str, line_number: int) -> None:
        """Routine entry, BEGIN/END tracking and termination for one line."""
        state = self.state
        code = _code_only(content)

        if not state.in_routine_body and _ROUTINE_START.search(code):
            state.in_routine_body = True
            state.begin_depth = 0
            state.routine_start_line = line_number

        ends_with_delimiter = _ends_with_delimiter(content, state.current_delimiter)

        if state.in_routine_body:
            opened, closed = _count_blocks(code)
            state.begin_depth = max(0, state.begin_depth + opened - closed)
            if state.begin_depth == 0 and ends_with_delimiter:
                self._emit(StatementKind.ROUTINE_BODY, terminated=True)
                state.reset_routine()
            return

        if ends_with_delimiter:
            self._emit(StatementKind.ORDINARY, terminated=True)

    def _emit(self, kind: StatementKind, terminated: bool) -> None:
        state = self.state
        start_line = state.buffer_start_line
        text = state.take_buffer()
        delimiter = state.current_delimiter if terminated else ""
        text = _strip_delimiter(text, delimiter)
        if not text:
            return
        if kind == StatementKind.ORDINARY and _is_comment_only(text):
            logger.debug(f"Line {start_line}: dropped comment-only text")
            return
        statement = Statement(
            text=text,
            start_line=start_line,
            kind=kind,
            delimiter=delimiter,
            terminated=terminated,
        )
        logger.debug(f"Emitted {statement!r}")
        self.statements.append(statement)


# ─── Module-level helpers ─────────────────────────────────────────────────────


def split(script: str, delimiter: str = DEFAULT_DELIMITER) -> List[Statement]:
    """
    Split a SQL script into ordered statements.

    Args:
        script:    Decoded script text.
        delimiter: Initial statement delimiter (default ``";"``).

    Returns:
        List of Statement records in input order.
    """
    splitter = StatementSplitter(delimiter)
    for line_number, line in enumerate(script.splitlines(), start=1):
        splitter.feed(line, line_number)
    return splitter.finish()


def split_entries(
    entries: Iterable[Entry], delimiter: str = DEFAULT_DELIMITER
) -> List[Statement]:
    """
    Run the splitter over pre-split query entries.

    Each entry is either a string (numbered by its 1-based position) or a
    ``(text, line_number)`` pair.  An entry boundary ends an ordinary
    statement, while an open routine body keeps accumulating across entries.
    """
    splitter = StatementSplitter(delimiter)
    for index, entry in enumerate(entries, start=1):
        if isinstance(entry, str):
            text, line_number = entry, index
        else:
            text, line_number = entry
        for offset, line in enumerate(text.splitlines()):
            splitter.feed(line, line_number + offset)
        splitter.flush()
    return splitter.finish()
