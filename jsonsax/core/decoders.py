"""
Lexical decoders for string and number literals.

The string decoder turns a quoted literal into Unicode code units, combines
surrogate pairs, and transcodes the result to UTF-8 in an arena-owned
buffer. The number decoder validates the strict JSON number grammar before
handing the exact span to ``float``.
"""

from typing import Optional

from ..security.exceptions import ErrorKind, InternalParserError
from ..security.limits import LimitValidator
from .arena import Arena, Block
from .constants import (
    DIGIT_RUN,
    DIGITS,
    HEX_DIGITS,
    HIGH_SURROGATES,
    JSON_ESCAPE_MAP,
    LOW_SURROGATES,
    MAX_CODE_POINT,
    PLAIN_STRING_RUN,
    REPLACEMENT_CHARACTER,
    SURROGATE_OFFSET,
)
from .error_handling import ErrorChannel, describe_char
from .scanner import Scanner

INITIAL_STRING_CAPACITY = 16
# Longest UTF-8 encoding of a single code point.
MAX_UTF8_WIDTH = 4


def encode_utf8(code_point: int) -> bytes:
    """Encode one scalar value as 1-4 UTF-8 bytes."""
    if code_point < 0x80:
        return bytes((code_point,))
    if code_point < 0x800:
        return bytes((0xC0 | (code_point >> 6), 0x80 | (code_point & 0x3F)))
    if code_point < 0x10000:
        return bytes((
            0xE0 | (code_point >> 12),
            0x80 | ((code_point >> 6) & 0x3F),
            0x80 | (code_point & 0x3F),
        ))
    return bytes((
        0xF0 | (code_point >> 18),
        0x80 | ((code_point >> 12) & 0x3F),
        0x80 | ((code_point >> 6) & 0x3F),
        0x80 | (code_point & 0x3F),
    ))


class StringDecoder:
    """Decodes a double-quoted JSON string literal."""

    def __init__(
        self,
        scanner: Scanner,
        channel: ErrorChannel,
        arena: Arena,
        validator: Optional[LimitValidator] = None,
    ) -> None:
        self.scanner = scanner
        self.channel = channel
        self.arena = arena
        self.validator = validator

    def decode(self) -> str:
        """Parse a string literal at the cursor and return its content."""
        scanner = self.scanner
        buffer = self.arena.allocate(INITIAL_STRING_CAPACITY)
        length = 0

        self.channel.expect('"')
        scanner.skip_space = False
        while scanner.peek() != '"':
            char = scanner.peek()
            if char == "\\":
                code_points = self._decode_escape()
            elif scanner.at_end():
                self.channel.unexpected_token()
            else:
                run = scanner.match(PLAIN_STRING_RUN)
                if run is None:
                    self.channel.fail(
                        f"invalid control character {describe_char(char)} in string",
                        ErrorKind.INVALID_CONTROL_CHARACTER,
                    )
                code_points = [
                    REPLACEMENT_CHARACTER if 0xD800 <= ord(c) < 0xE000 else ord(c)
                    for c in run
                ]

            buffer, length = self._append(buffer, length, code_points)
            if self.validator:
                self.validator.validate_string_length(length)

        scanner.skip_space = True
        scanner.consume()
        return buffer.data[:length].decode("utf-8")

    def _append(
        self, buffer: Block, length: int, code_points: list[int]
    ) -> tuple[Block, int]:
        needed = length + MAX_UTF8_WIDTH * len(code_points)
        if needed > buffer.size:
            capacity = buffer.size
            while capacity < needed:
                if capacity > self.arena.max_block_size // 3:
                    self.channel.fail("too long string", ErrorKind.TOO_LARGE)
                # grow by 150%
                capacity = (capacity * 3) >> 1
            buffer = self.arena.reallocate(buffer, capacity)

        for code_point in code_points:
            encoded = encode_utf8(code_point)
            buffer.data[length:length + len(encoded)] = encoded
            length += len(encoded)
        return buffer, length

    def _decode_escape(self) -> list[int]:
        """Decode one escape, pairing surrogates; returns code points."""
        decoded = []
        unit = self._read_escaped_unit()
        while unit in HIGH_SURROGATES:
            if self.scanner.peek() != "\\":
                decoded.append(REPLACEMENT_CHARACTER)
                return decoded

            low = self._read_escaped_unit()
            if low in LOW_SURROGATES:
                combined = (unit << 10) + low - SURROGATE_OFFSET
                if combined > MAX_CODE_POINT:
                    self.channel.fail(
                        f"invalid unicode codepoint U+{combined:X}",
                        ErrorKind.INVALID_UNICODE_CODEPOINT,
                    )
                decoded.append(combined)
                return decoded

            # Unpaired high surrogate; the escape just read may start a pair.
            decoded.append(REPLACEMENT_CHARACTER)
            unit = low

        decoded.append(REPLACEMENT_CHARACTER if unit in LOW_SURROGATES else unit)
        return decoded

    def _read_escaped_unit(self) -> int:
        scanner = self.scanner
        self.channel.expect("\\")

        char = scanner.peek()
        if char == "u":
            scanner.consume()
            return self._read_hex_quad()
        if char not in JSON_ESCAPE_MAP:
            self.channel.unexpected_token()
        scanner.consume()
        return ord(JSON_ESCAPE_MAP[char])

    def _read_hex_quad(self) -> int:
        value = 0
        for _ in range(4):
            char = self.scanner.peek()
            if char not in HEX_DIGITS:
                if self.scanner.at_end():
                    self.channel.unexpected_token()
                self.channel.fail(
                    f"invalid hex digit {describe_char(char)} in unicode escape",
                    ErrorKind.INVALID_HEX_DIGIT,
                )
            value = (value << 4) | int(self.scanner.consume(), 16)
        return value


class NumberDecoder:
    """Decodes a JSON number literal into a float."""

    def __init__(
        self,
        scanner: Scanner,
        channel: ErrorChannel,
        validator: Optional[LimitValidator] = None,
    ) -> None:
        self.scanner = scanner
        self.channel = channel
        self.validator = validator

    def decode(self) -> float:
        """Parse a number literal at the cursor."""
        scanner = self.scanner
        start = scanner.pos
        scanner.skip_space = False

        if scanner.peek() == "-":
            scanner.consume()

        self._require_digit()
        if scanner.consume() != "0":
            scanner.match(DIGIT_RUN)
        elif scanner.peek() in DIGITS:
            self.channel.fail(
                "unexpected token "
                f"{describe_char(scanner.peek())}, leading zeros are not permitted",
                ErrorKind.UNEXPECTED_TOKEN,
                ["Numbers must not have leading zeros"],
            )

        if scanner.peek() == ".":
            scanner.consume()
            self._require_digit()
            scanner.match(DIGIT_RUN)

        if scanner.peek() in ("e", "E"):
            scanner.consume()
            if scanner.peek() in ("+", "-"):
                scanner.consume()
            self._require_digit()
            scanner.match(DIGIT_RUN)

        literal = scanner.text[start:scanner.pos]
        scanner.skip_space = True
        scanner.skip_whitespace()

        if self.validator:
            self.validator.validate_number_length(literal)
        try:
            return float(literal)
        except ValueError as exc:
            raise InternalParserError(
                f"number literal {literal!r} passed validation but did not convert"
            ) from exc

    def _require_digit(self) -> None:
        if self.scanner.peek() not in DIGITS:
            self.channel.unexpected_token()
