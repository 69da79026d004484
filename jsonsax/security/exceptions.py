"""
Exception hierarchy and error reporting for jsonsax.

Every failure inside a parse is a ``ParseError`` (or its ``SecurityError``
subclass). It is raised once at the point of failure and caught once at the
parse entry point; nothing in between handles it.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Optional

from ..core.scanner import Position


class ErrorKind(Enum):
    """Categories of parse failure reported through the error channel."""

    UNEXPECTED_TOKEN = "unexpected_token"
    UNEXPECTED_END_OF_INPUT = "unexpected_end_of_input"
    INVALID_HEX_DIGIT = "invalid_hex_digit"
    INVALID_CONTROL_CHARACTER = "invalid_control_character"
    INVALID_UNICODE_CODEPOINT = "invalid_unicode_codepoint"
    TOO_LARGE = "too_large"
    ALLOCATION_FAILURE = "allocation_failure"
    NESTING_TOO_DEEP = "nesting_too_deep"
    LIMIT_EXCEEDED = "limit_exceeded"


@dataclass
class ErrorContext:
    """Source text surrounding an error."""

    text: str
    position: Position
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonSaxError(Exception):
    """Base exception for all jsonsax errors."""

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        parts = [self.message]

        if self.position:
            parts[0] += f" at line {self.position.line}, column {self.position.column}"

        if self.context:
            parts.append("Context:")
            parts.append(f"  {self.context.line_text}")
            parts.append(f"  {self.context.column_indicator}")

        if self.suggestions:
            parts.append("Suggestions:")
            parts.extend(f"  - {suggestion}" for suggestion in self.suggestions)

        return "\n".join(parts)


class ParseError(JsonSaxError):
    """Raised when the input is not valid JSON."""

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN,
    ):
        self.kind = kind
        super().__init__(message, position, context, suggestions)

    @property
    def line(self) -> Optional[int]:
        """1-based line number of the failure, if known."""
        return self.position.line if self.position else None


class SecurityError(ParseError):
    """Raised when a configured resource limit is exceeded."""

    def __init__(
        self,
        message: str,
        position: Optional[Position] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        kind: ErrorKind = ErrorKind.LIMIT_EXCEEDED,
    ):
        super().__init__(message, position, context, suggestions, kind)


class InternalParserError(RuntimeError):
    """An internal invariant of the parser was violated.

    This signals a defect in jsonsax itself, not bad input, and is therefore
    never reported through the caller's error callback.
    """


JSONDecodeError = ParseError


class ErrorReporter:
    """Builds ``ParseError`` instances enriched with source context."""

    def __init__(self, text: str, max_context: int = 50):
        self.text = text
        self.max_context = max_context
        self.lines = text.splitlines() or [""]

    def _build_context(self, position: Position) -> ErrorContext:
        line_index = min(max(position.line - 1, 0), len(self.lines) - 1)
        line_text = self.lines[line_index]
        column = min(max(position.column - 1, 0), len(line_text))

        half = self.max_context // 2
        context_before = line_text[max(0, column - half):column]
        context_after = line_text[column:column + half]
        error_char = line_text[column] if column < len(line_text) else ""

        return ErrorContext(
            text=self.text,
            position=position,
            context_before=context_before,
            context_after=context_after,
            error_char=error_char,
            line_text=line_text,
            column_indicator=" " * column + "^",
        )

    def create_parse_error(
        self,
        message: str,
        position: Position,
        suggestions: Optional[list[str]] = None,
        kind: ErrorKind = ErrorKind.UNEXPECTED_TOKEN,
    ) -> ParseError:
        """Create a ParseError carrying context around ``position``."""
        return ParseError(
            message,
            position,
            self._build_context(position),
            suggestions,
            kind,
        )

    def create_security_error(
        self,
        message: str,
        position: Optional[Position] = None,
        kind: ErrorKind = ErrorKind.LIMIT_EXCEEDED,
    ) -> SecurityError:
        """Create a SecurityError, with context when a position is known."""
        context = self._build_context(position) if position else None
        return SecurityError(message, position, context, kind=kind)


class ErrorSuggestionEngine:
    """Suggests fixes for the most common JSON mistakes."""

    @staticmethod
    def suggest_for_unexpected_token(token: str) -> list[str]:
        """Suggestions when an unexpected character is found."""
        if not token:
            return []
        if token == "'":
            return ["JSON strings must use double quotes, not single quotes"]
        if token == '"':
            return [
                "Check for a missing comma or colon before this quote",
                "Make sure the previous string's closing quote is escaped correctly",
            ]
        if token in "}]":
            return [
                "Trailing commas are not permitted in JSON",
                "Remove the comma before the closing bracket",
            ]
        if token == "/":
            return ["Comments are not permitted in JSON"]
        if token.isdigit():
            return ["Numbers must not have leading zeros"]
        if token.isalpha() or token == "_":
            return [
                "Object keys must be double-quoted strings",
                "Only true, false and null are valid bare words",
            ]
        return []

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        """Suggestions when input ends inside an object or array."""
        if structure_type == "object":
            return [
                "Add the missing closing brace '}'",
                "Check for an unterminated string inside the object",
            ]
        if structure_type == "array":
            return [
                "Add the missing closing bracket ']'",
                "Check for an unterminated string inside the array",
            ]
        return ["Check that every opened structure is closed"]

    @staticmethod
    def suggest_for_invalid_value(value: str) -> list[str]:
        """Suggestions for bare words that look like misspelled literals."""
        lowered = value.lower()
        if lowered in ("true", "false", "null") and value != lowered:
            return [f"JSON literals are lower case: use '{lowered}'"]
        if lowered in ("none", "nil", "undefined"):
            return ["Use 'null' for missing values"]
        if lowered in ("nan", "infinity", "-infinity"):
            return ["NaN and Infinity are not valid JSON numbers"]
        return []
