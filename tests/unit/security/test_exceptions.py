"""
Test cases for security exceptions and error reporting.

Tests focus on error context creation, message formatting, and error reporting accuracy.
"""

import unittest

from jsonsax.core.scanner import Position
from jsonsax.security.exceptions import (
    ErrorContext,
    ErrorKind,
    ErrorReporter,
    ErrorSuggestionEngine,
    InternalParserError,
    JSONDecodeError,
    JsonSaxError,
    ParseError,
    SecurityError,
)


class TestErrorContext(unittest.TestCase):
    """Test ErrorContext dataclass functionality."""

    def test_error_context_creation(self):
        """Test ErrorContext creation with all fields."""
        position = Position(line=5, column=10)
        context = ErrorContext(
            text="test json content",
            position=position,
            context_before="test ",
            context_after=" content",
            error_char="j",
            line_text="test json content",
            column_indicator="     ^"
        )

        self.assertEqual(context.position, position)
        self.assertEqual(context.context_before, "test ")
        self.assertEqual(context.error_char, "j")
        self.assertEqual(context.column_indicator, "     ^")


class TestJsonSaxError(unittest.TestCase):
    """Test base JsonSaxError exception class."""

    def test_basic_error_creation(self):
        """Test basic error creation with message only."""
        error = JsonSaxError("Test error message")

        self.assertEqual(error.message, "Test error message")
        self.assertIsNone(error.position)
        self.assertIsNone(error.context)
        self.assertEqual(error.suggestions, [])
        self.assertEqual(str(error), "Test error message")

    def test_error_with_position(self):
        """Test error creation with position information."""
        error = JsonSaxError("Parse error", position=Position(line=3, column=15))
        self.assertIn("at line 3, column 15", str(error))

    def test_error_with_suggestions(self):
        """Test error creation with suggestions."""
        suggestions = ["Check for missing quotes", "Verify JSON syntax"]
        error = JsonSaxError("Syntax error", suggestions=suggestions)

        error_str = str(error)
        self.assertIn("Suggestions:", error_str)
        self.assertIn("  - Check for missing quotes", error_str)
        self.assertIn("  - Verify JSON syntax", error_str)

    def test_error_with_context(self):
        """Test error creation with full context."""
        position = Position(line=2, column=9)
        context = ErrorContext(
            text='{"key": value}',
            position=position,
            context_before='{"key": ',
            context_after="value}",
            error_char="v",
            line_text='{"key": value}',
            column_indicator="        ^"
        )
        error = JsonSaxError("Unquoted value", position=position, context=context)

        self.assertEqual(
            str(error),
            'Unquoted value at line 2, column 9\n'
            'Context:\n'
            '  {"key": value}\n'
            '          ^',
        )


class TestParseError(unittest.TestCase):
    """Test ParseError specific functionality."""

    def test_parse_error_inheritance(self):
        """Test that ParseError inherits from JsonSaxError."""
        error = ParseError("Parse failure")
        self.assertIsInstance(error, JsonSaxError)
        self.assertEqual(error.kind, ErrorKind.UNEXPECTED_TOKEN)
        self.assertIs(JSONDecodeError, ParseError)

    def test_parse_error_line(self):
        """Test the line shortcut."""
        self.assertEqual(ParseError("x", Position(4, 20)).line, 4)
        self.assertIsNone(ParseError("x").line)

    def test_parse_error_kind(self):
        """Test that the failure category is kept."""
        error = ParseError("unexpected end of input", kind=ErrorKind.UNEXPECTED_END_OF_INPUT)
        self.assertEqual(error.kind, ErrorKind.UNEXPECTED_END_OF_INPUT)


class TestSecurityError(unittest.TestCase):
    """Test SecurityError specific functionality."""

    def test_security_error_inheritance(self):
        """Test that SecurityError is a ParseError."""
        error = SecurityError("Security violation")
        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.kind, ErrorKind.LIMIT_EXCEEDED)

    def test_security_error_custom_kind(self):
        error = SecurityError("too deep", kind=ErrorKind.NESTING_TOO_DEEP)
        self.assertEqual(error.kind, ErrorKind.NESTING_TOO_DEEP)


class TestInternalParserError(unittest.TestCase):

    def test_not_a_parse_error(self):
        """Internal failures are outside the ParseError hierarchy."""
        error = InternalParserError("broken invariant")
        self.assertIsInstance(error, RuntimeError)
        self.assertNotIsInstance(error, ParseError)


class TestErrorReporter(unittest.TestCase):
    """Test ErrorReporter functionality."""

    def setUp(self):
        """Set up test ErrorReporter."""
        self.test_text = '{"key": "value", "number": 123}'
        self.reporter = ErrorReporter(self.test_text)

    def test_create_parse_error(self):
        """Test creating ParseError through ErrorReporter."""
        position = Position(line=1, column=10)
        error = self.reporter.create_parse_error(
            "Test parse error", position, ["Check syntax"], ErrorKind.INVALID_HEX_DIGIT
        )

        self.assertIsInstance(error, ParseError)
        self.assertEqual(error.position, position)
        self.assertEqual(error.suggestions, ["Check syntax"])
        self.assertEqual(error.kind, ErrorKind.INVALID_HEX_DIGIT)

    def test_create_security_error(self):
        """Test creating SecurityError through ErrorReporter."""
        error = self.reporter.create_security_error("Security issue")

        self.assertIsInstance(error, SecurityError)
        self.assertIsNone(error.context)

    def test_error_context_generation(self):
        """Test error context generation."""
        position = Position(line=1, column=10)
        error = self.reporter.create_parse_error("Test error", position)

        self.assertEqual(error.context.text, self.test_text)
        self.assertEqual(error.context.error_char, "v")
        self.assertEqual(error.context.context_before, '{"key": "')
        self.assertEqual(error.context.column_indicator, " " * 9 + "^")

    def test_multiline_text_handling(self):
        """Test error reporting with multiline text."""
        reporter = ErrorReporter('{\n  "key": "value",\n  "error": here\n}')
        error = reporter.create_parse_error("Unquoted value", Position(line=3, column=12))

        self.assertEqual(error.context.line_text, '  "error": here')
        self.assertEqual(error.context.error_char, "h")

    def test_edge_position_handling(self):
        """Test error reporting with edge case positions."""
        error = self.reporter.create_parse_error("End of input", Position(1, 1000))
        self.assertEqual(error.context.error_char, "")

        error = ErrorReporter("").create_parse_error("Empty", Position(1, 1))
        self.assertEqual(error.context.line_text, "")

    def test_context_is_bounded(self):
        """Test that context is clipped to max_context characters."""
        reporter = ErrorReporter("x" * 200, max_context=10)
        error = reporter.create_parse_error("Long line", Position(1, 100))
        self.assertEqual(len(error.context.context_before), 5)
        self.assertEqual(len(error.context.context_after), 5)


class TestErrorSuggestionEngine(unittest.TestCase):
    """Test ErrorSuggestionEngine functionality."""

    def test_suggest_for_unexpected_token(self):
        """Test suggestions for unexpected tokens."""
        suggestions = ErrorSuggestionEngine.suggest_for_unexpected_token('"')
        self.assertTrue(any("quote" in s.lower() for s in suggestions))

        self.assertTrue(
            any("Trailing commas" in s
                for s in ErrorSuggestionEngine.suggest_for_unexpected_token("}"))
        )
        self.assertEqual(ErrorSuggestionEngine.suggest_for_unexpected_token(""), [])

    def test_suggest_for_unclosed_structure(self):
        """Test suggestions for unclosed structures."""
        obj_suggestions = ErrorSuggestionEngine.suggest_for_unclosed_structure("object")
        self.assertTrue(any("}" in s for s in obj_suggestions))

        arr_suggestions = ErrorSuggestionEngine.suggest_for_unclosed_structure("array")
        self.assertTrue(any("]" in s for s in arr_suggestions))

    def test_suggest_for_invalid_value(self):
        """Test suggestions for invalid values."""
        self.assertGreater(len(ErrorSuggestionEngine.suggest_for_invalid_value("True")), 0)
        self.assertGreater(len(ErrorSuggestionEngine.suggest_for_invalid_value("None")), 0)
        self.assertEqual(ErrorSuggestionEngine.suggest_for_invalid_value("@"), [])


if __name__ == '__main__':
    unittest.main()
