"""
Error channel for the grammar engine.

``ErrorChannel.fail`` records a message together with the scanner's current
position and raises a single ``ParseError``. Nothing between the point of
failure and the parse entry point catches it; partial results are left for
the arena to reclaim.
"""

from typing import NoReturn, Optional

from ..security.exceptions import (
    ErrorKind,
    ErrorReporter,
    ErrorSuggestionEngine,
    ParseError,
)
from .constants import BARE_WORD, END_OF_INPUT
from .scanner import Scanner


def describe_char(char: str) -> str:
    """Render a character for an error message: 'x' or \\xHH."""
    if len(char) == 1 and char.isprintable() and not char.isspace():
        return f"'{char}'"
    return "\\x" + "".join(f"{byte:02x}" for byte in char.encode("utf-8"))


class ErrorChannel:
    """Formats parse failures and aborts the parse in progress."""

    def __init__(self, scanner: Scanner) -> None:
        self.scanner = scanner
        self.reporter: Optional[ErrorReporter] = None
        self.include_position = True

    def attach_reporter(self, reporter: Optional[ErrorReporter]) -> None:
        """Use ``reporter`` to add source context to subsequent errors."""
        self.reporter = reporter

    def fail(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN,
        suggestions: Optional[list[str]] = None,
    ) -> NoReturn:
        """Abort the current parse with ``message`` at the current position."""
        position = self.scanner.current_position() if self.include_position else None
        if self.reporter and position:
            raise self.reporter.create_parse_error(message, position, suggestions, kind)
        raise ParseError(message, position, suggestions=suggestions, kind=kind)

    def unexpected_token(
        self, expected: Optional[str] = None, structure: Optional[str] = None
    ) -> NoReturn:
        """Fail on the current character, or on end of input."""
        if self.scanner.at_end():
            suggestions = (
                ErrorSuggestionEngine.suggest_for_unclosed_structure(structure)
                if structure
                else None
            )
            self.fail(
                "unexpected end of input",
                ErrorKind.UNEXPECTED_END_OF_INPUT,
                suggestions,
            )

        char = self.scanner.peek()
        message = f"unexpected token {describe_char(char)}"
        if expected is not None and expected != END_OF_INPUT:
            message += f", expected {describe_char(expected)}"

        suggestions = ErrorSuggestionEngine.suggest_for_unexpected_token(char)
        word = BARE_WORD.match(self.scanner.text, self.scanner.pos)
        if word:
            suggestions = (
                ErrorSuggestionEngine.suggest_for_invalid_value(word.group()) + suggestions
            )
        self.fail(message, ErrorKind.UNEXPECTED_TOKEN, suggestions)

    def expect(self, char: str, structure: Optional[str] = None) -> None:
        """Consume ``char`` or fail with an unexpected-token error."""
        if self.scanner.peek() != char:
            self.unexpected_token(char, structure)
        self.scanner.consume()
