# -*- coding: utf-8 -*-
"""
Statement records emitted by the splitter, plus the scanner state they are
assembled from.

    StatementKind  – ordinary / delimiter_directive / routine_body
    Statement      – one emitted unit of SQL text with its start line
    ScannerState   – mutable state threaded through one line-by-line scan
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List

from script_parsers.config import DEFAULT_DELIMITER


class StatementKind(str, Enum):
    """
    Classification of an emitted statement.

    Inherits from str so members compare equal to their values:
        StatementKind.ROUTINE_BODY == "routine_body"  # True
    """

    ORDINARY = "ordinary"
    DELIMITER_DIRECTIVE = "delimiter_directive"
    ROUTINE_BODY = "routine_body"


@dataclass(frozen=True)
class Statement:
    """One statement: trimmed text, first contributing line, kind."""

    text: str
    start_line: int
    kind: StatementKind = StatementKind.ORDINARY
    # Delimiter that ended the statement; "" when it was flushed without one.
    delimiter: str = ""
    terminated: bool = False

    @property
    def is_incomplete_routine(self) -> bool:
        return self.kind == StatementKind.ROUTINE_BODY and not self.terminated

    def to_dict(self) -> dict:
        return {
            "text": self.text,
            "start_line": self.start_line,
            "kind": self.kind.value,
            "delimiter": self.delimiter,
            "terminated": self.terminated,
        }

    def __repr__(self) -> str:
        return (
            f"Statement(kind={self.kind.value}, line={self.start_line}, "
            f"text={self.text[:50]!r})"
        )


@dataclass
class ScannerState:
    """Mutable state for a single splitting run."""

    current_delimiter: str = DEFAULT_DELIMITER
    buffer: List[str] = field(default_factory=list)
    buffer_start_line: int = 0
    in_block_comment: bool = False
    in_routine_body: bool = False
    begin_depth: int = 0
    routine_start_line: int = 0

    @property
    def has_content(self) -> bool:
        return any(line.strip() for line in self.buffer)

    def append(self, line: str, line_number: int) -> None:
        if not self.buffer:
            self.buffer_start_line = line_number
        self.buffer.append(line)

    def take_buffer(self) -> str:
        """Return the buffered text and clear the buffer."""
        text = "\n".join(self.buffer).strip()
        self.buffer = []
        self.buffer_start_line = 0
        return text

    def reset_routine(self) -> None:
        self.in_routine_body = False
        self.begin_depth = 0
        self.routine_start_line = 0
