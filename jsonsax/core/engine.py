"""
Parser for jsonsax - recursive-descent grammar engine and parse entry points.
"""

import dataclasses
import sys
from typing import IO, Any, Callable, NoReturn, Optional, Union

from ..security.exceptions import (
    ErrorKind,
    ErrorReporter,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ParseConfig
from .arena import Arena
from .constants import KEYWORDS, NUMBER_START
from .decoders import NumberDecoder, StringDecoder
from .error_handling import ErrorChannel
from .interfaces import CallbackSink, EventRecorder, EventSink
from .scanner import Position, Scanner
from .tree_builder import TreeBuilder
from .values import Value

ErrorCallback = Callable[[int, str], None]
TextInput = Union[str, bytes, bytearray]

# Largest element or property count a container may reach.
MAX_CONTAINER_SIZE = sys.maxsize


class GrammarEngine:
    """Recursive-descent JSON grammar reporting to an ``EventSink``."""

    def __init__(
        self,
        scanner: Scanner,
        channel: ErrorChannel,
        arena: Arena,
        validator: LimitValidator,
    ) -> None:
        self.scanner = scanner
        self.channel = channel
        self.validator = validator
        self.strings = StringDecoder(scanner, channel, arena, validator)
        self.numbers = NumberDecoder(scanner, channel, validator)
        self.sink = EventSink()

    def parse_document(self, sink: EventSink) -> None:
        """Parse exactly one value followed by end of input."""
        self.sink = sink
        self.scanner.skip_whitespace()
        self.parse_value()
        if not self.scanner.at_end():
            self.channel.unexpected_token()

    def parse_value(self) -> None:
        """Parse any JSON value, dispatching on the lookahead character."""
        char = self.scanner.peek()
        if char == "{":
            self.parse_object()
        elif char == "[":
            self.parse_array()
        elif char == '"':
            self.sink.on_string(self.strings.decode())
        elif char in NUMBER_START:
            self.sink.on_number(self.numbers.decode())
        elif char in KEYWORDS:
            self.parse_keyword(char)
        else:
            self.channel.unexpected_token()
        self.validator.count_item()

    def parse_keyword(self, first: str) -> None:
        """Match ``true``, ``false`` or ``null`` exactly."""
        word, value = KEYWORDS[first]
        scanner = self.scanner

        if scanner.text.startswith(word, scanner.pos):
            scanner.consume_span(len(word))
        else:
            # Move to the first mismatching character so the error points at it.
            scanner.skip_space = False
            matched = 0
            while scanner.peek() == word[matched]:
                scanner.consume()
                matched += 1
            scanner.skip_space = True
            self.channel.unexpected_token(word[matched])

        if value is None:
            self.sink.on_null()
        else:
            self.sink.on_boolean(value)

    def parse_object(self) -> None:
        """Parse an object, reporting each key before its value."""
        scanner = self.scanner
        self.channel.expect("{")
        self.validator.enter_structure()
        self.sink.on_object_start()

        if scanner.peek() == "}":
            scanner.consume()
        else:
            count = 0
            while True:
                if scanner.peek() != '"':
                    self.channel.unexpected_token('"', "object")
                key = self.strings.decode()
                self.channel.expect(":", "object")

                if count == MAX_CONTAINER_SIZE:
                    self.channel.fail("too big object", ErrorKind.TOO_LARGE)
                count += 1
                self.validator.validate_object_keys(count)

                self.sink.on_key(key)
                self.parse_value()

                if scanner.peek() == "}":
                    break
                self.channel.expect(",", "object")
            scanner.consume()

        self.validator.exit_structure()
        self.sink.on_object_end()

    def parse_array(self) -> None:
        """Parse an array of comma-separated values."""
        scanner = self.scanner
        self.channel.expect("[")
        self.validator.enter_structure()
        self.sink.on_array_start()

        if scanner.peek() == "]":
            scanner.consume()
        else:
            count = 0
            while True:
                if count == MAX_CONTAINER_SIZE:
                    self.channel.fail("too big array", ErrorKind.TOO_LARGE)
                count += 1
                self.validator.validate_array_items(count)

                self.parse_value()

                if scanner.peek() == "]":
                    break
                self.channel.expect(",", "array")
            scanner.consume()

        self.validator.exit_structure()
        self.sink.on_array_end()


class Parser:
    """A reusable parser instance.

    Each call resets the scanner and runs one parse to completion. Memory
    allocated by a successful parse stays attached to ``arena`` until
    ``release`` or ``close``; a failed parse releases it immediately.
    """

    def __init__(self, config: Optional[ParseConfig] = None) -> None:
        self.config = config or ParseConfig()
        self.logger = self.config.get_logger(__name__)
        assert self.config.limits is not None
        self.scanner = Scanner()
        self.channel = ErrorChannel(self.scanner)
        self.arena = Arena(
            self.config.limits.max_allocation_size,
            self._allocation_failed,
            self.logger,
        )
        self.validator = LimitValidator(self.config.limits)
        self.engine = GrammarEngine(
            self.scanner, self.channel, self.arena, self.validator
        )
        self.last_error: Optional[ParseError] = None
        self._running = False
        self._closed = False

    def __enter__(self) -> "Parser":
        return self

    def __exit__(self, *exc_info: Any) -> None:
        self.close()

    def _allocation_failed(self, message: str, out_of_memory: bool) -> NoReturn:
        kind = ErrorKind.ALLOCATION_FAILURE if out_of_memory else ErrorKind.TOO_LARGE
        self.channel.fail(message, kind)

    def parse_events(self, text: TextInput, sink: EventSink) -> bool:
        """Parse ``text`` reporting events to ``sink``; True on success.

        With ``buffer_events`` enabled (the default) events are held in the
        arena and delivered only once the whole document has validated, so
        a failed parse reports nothing but ``on_error``.
        """
        if not self.config.buffer_events:
            return self._run(text, sink, sink.on_error)

        recorder = EventRecorder(self.arena)
        if not self._run(text, recorder, sink.on_error):
            return False
        try:
            recorder.replay(sink)
        except BaseException:
            self.arena.release()
            raise
        return True

    def parse_tree(
        self, text: TextInput, on_error: Optional[ErrorCallback] = None
    ) -> Optional[Value]:
        """Parse ``text`` into a ``Value`` tree, or None on failure."""
        builder = TreeBuilder(self.arena)
        if not self._run(text, builder, on_error):
            return None
        return builder.result()

    def release(self) -> int:
        """Release every block still held by the arena."""
        return self.arena.release()

    def close(self) -> None:
        """Destroy the parser, releasing all arena memory."""
        self.release()
        self._closed = True

    def _run(
        self, text: TextInput, sink: EventSink, on_error: Optional[ErrorCallback]
    ) -> bool:
        if self._closed:
            raise RuntimeError("parser has been destroyed")
        if self._running:
            raise RuntimeError("parser is not reentrant; a parse is already running")

        self._running = True
        self.last_error = None
        try:
            try:
                self._start(text)
                self.engine.parse_document(sink)
            except ParseError as error:
                self._fail(error, on_error)
                return False
            except RecursionError:
                error = SecurityError(
                    "nesting too deep for the interpreter stack",
                    self.scanner.current_position(),
                    kind=ErrorKind.NESTING_TOO_DEEP,
                )
                self._fail(error, on_error)
                return False
            except BaseException:
                self.arena.release()
                raise
        finally:
            self._running = False

        self.logger.debug(f"Parse finished at line {self.scanner.line}")
        return True

    def _start(self, text: TextInput) -> None:
        self.scanner.reset("")
        self.validator.reset()
        text = self._decode_input(text)
        self.scanner.reset(text)
        self.logger.debug(f"Parsing {len(text)} characters")

        reporter = None
        if self.config.include_position and self.config.include_context:
            reporter = ErrorReporter(text, self.config.max_error_context)
        self.channel.attach_reporter(reporter)
        self.channel.include_position = self.config.include_position
        self.validator.validate_input_size(text)

    @staticmethod
    def _decode_input(text: TextInput) -> str:
        if isinstance(text, str):
            return text
        if not isinstance(text, (bytes, bytearray)):
            raise TypeError(
                f"JSON input must be str, bytes or bytearray, not {type(text).__name__}"
            )
        try:
            return bytes(text).decode("utf-8")
        except UnicodeDecodeError as exc:
            head = bytes(text[:exc.start])
            line = head.count(b"\n") + 1
            column = exc.start - (head.rfind(b"\n") + 1) + 1
            bad = bytes(text[exc.start:exc.start + 1]).hex()
            raise ParseError(
                f"invalid UTF-8 byte \\x{bad}",
                Position(line, column),
                kind=ErrorKind.UNEXPECTED_TOKEN,
            ) from exc

    def _fail(self, error: ParseError, on_error: Optional[ErrorCallback]) -> None:
        if error.position is None and self.config.include_position:
            error = self._locate(error)
        self.last_error = error

        line = error.line if error.line is not None else self.scanner.line
        self.logger.debug(f"Parse failed at line {line}: {error.message}")
        try:
            if on_error is not None:
                on_error(line, error.message)
        finally:
            self.arena.release()

    def _locate(self, error: ParseError) -> ParseError:
        """Attach the scanner position to an error raised without one."""
        position = self.scanner.current_position()
        if self.channel.reporter:
            located = self.channel.reporter.create_security_error(
                error.message, position, error.kind
            )
        else:
            located = SecurityError(error.message, position, kind=error.kind)
        located.__cause__ = error
        return located


def create_parser(config: Optional[ParseConfig] = None) -> Parser:
    """Create a parser instance."""
    return Parser(config)


def destroy_parser(parser: Parser) -> None:
    """Destroy ``parser``, releasing everything its arena still holds."""
    parser.close()


def parse_events(
    parser: Parser, text: TextInput, sink: EventSink, context: Any = None
) -> bool:
    """SAX entry point; ``context`` is handed to a ``CallbackSink``'s slots."""
    if context is not None:
        if not isinstance(sink, CallbackSink):
            raise TypeError("a user context can only be passed to a CallbackSink")
        sink = dataclasses.replace(sink, context=context)
    return parser.parse_events(text, sink)


def parse_tree(
    parser: Parser, text: TextInput, error_callback: Optional[ErrorCallback] = None
) -> Optional[Value]:
    """DOM entry point; returns None after reporting to ``error_callback``."""
    return parser.parse_tree(text, error_callback)


def loads(s: TextInput, *, config: Optional[ParseConfig] = None) -> Any:
    """
    Deserialize a JSON document to plain Python data.

    Numbers always become floats. For duplicate object keys the last value
    wins in the returned dict; use ``Parser.parse_tree`` to see every
    property.

    Raises:
        ParseError: If the input is not valid JSON
        SecurityError: If a configured limit is exceeded
    """
    with Parser(config) as parser:
        tree = parser.parse_tree(s)
        if tree is None:
            assert parser.last_error is not None
            raise parser.last_error
        return tree.to_python()


def load(fp: IO[Any], *, config: Optional[ParseConfig] = None) -> Any:
    """Same as ``loads`` but reads the document from a file-like object."""
    return loads(fp.read(), config=config)
