"""
Character scanner for jsonsax - a cursor over the input text.
"""

from dataclasses import dataclass
from typing import Optional

import regex

from .constants import END_OF_INPUT, LINE_BREAK, WHITESPACE_RUN


@dataclass
class Position:
    """Position in source text (line and column)."""

    line: int
    column: int


class Scanner:
    """Character-level cursor with line tracking and whitespace skipping.

    ``consume`` advances past one character and, unless ``skip_space`` is
    off, past any whitespace that follows it. String bodies turn
    ``skip_space`` off so that their whitespace is kept.
    """

    def __init__(self, text: str = "") -> None:
        self.reset(text)

    def reset(self, text: str) -> None:
        """Point the scanner at new input and rewind to its start."""
        self.text = text
        self.pos = 0
        self.line = 1
        self.line_start = 0
        self.skip_space = True

    @property
    def column(self) -> int:
        """1-based column of the current character."""
        return self.pos - self.line_start + 1

    def current_position(self) -> Position:
        """Get current position in the text."""
        return Position(self.line, self.column)

    def at_end(self) -> bool:
        """True once every character of the input has been consumed."""
        return self.pos >= len(self.text)

    def peek(self) -> str:
        """Return the current character without consuming it."""
        if self.pos >= len(self.text):
            return END_OF_INPUT
        return self.text[self.pos]

    def consume(self) -> str:
        """Return the current character and advance past it."""
        if self.pos >= len(self.text):
            return END_OF_INPUT

        char = self.text[self.pos]
        self.pos += 1
        if char == "\n" or (char == "\r" and self.peek() != "\n"):
            self._new_line()

        if self.skip_space:
            self.skip_whitespace()
        return char

    def consume_span(self, length: int) -> str:
        """Advance past a literal of known length, then skip whitespace."""
        span = self.text[self.pos:self.pos + length]
        self.pos += len(span)
        if self.skip_space:
            self.skip_whitespace()
        return span

    def match(self, pattern: "regex.Pattern[str]") -> Optional[str]:
        """Consume the run matched by ``pattern`` at the cursor, if any.

        The run must not contain line terminators; no whitespace is skipped
        afterwards.
        """
        found = pattern.match(self.text, self.pos)
        if not found or not found.group():
            return None
        self.pos = found.end()
        return found.group()

    def skip_whitespace(self) -> None:
        """Skip spaces, tabs and line terminators, counting lines."""
        run = WHITESPACE_RUN.match(self.text, self.pos)
        if run is None or run.end() == self.pos:
            return

        breaks = list(LINE_BREAK.finditer(self.text, self.pos, run.end()))
        if breaks:
            self.line += len(breaks)
            self.line_start = breaks[-1].end()
        self.pos = run.end()

    def _new_line(self) -> None:
        self.line += 1
        self.line_start = self.pos
