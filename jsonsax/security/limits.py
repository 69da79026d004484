"""
Resource limits enforced while a document is decoded.

The grammar engine and the literal decoders report sizes and counts as they
go; a ``LimitValidator`` compares them against ``ParseLimits`` and aborts the
parse with a ``SecurityError`` on the first one that is over.
"""

from ..utils.config import ParseLimits
from .exceptions import ErrorKind, SecurityError


def _check(what: str, amount: int, limit: int, kind: ErrorKind = ErrorKind.LIMIT_EXCEEDED) -> None:
    if amount > limit:
        raise SecurityError(f"{what} exceeds limit {limit}", kind=kind)


class LimitValidator:
    """Per-parse counters checked against a fixed ``ParseLimits``."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.nesting_depth = 0
        self.total_items = 0

    def validate_input_size(self, text: str) -> None:
        _check(f"input of {len(text)} characters", len(text), self.limits.max_input_size)

    def validate_string_length(self, length: int) -> None:
        """``length`` is the UTF-8 byte count decoded so far."""
        _check(f"string of {length} UTF-8 bytes", length, self.limits.max_string_length)

    def validate_number_length(self, literal: str) -> None:
        _check(
            f"number literal of {len(literal)} characters",
            len(literal),
            self.limits.max_number_length,
        )

    def enter_structure(self) -> None:
        self.nesting_depth += 1
        _check(
            f"nesting depth {self.nesting_depth}",
            self.nesting_depth,
            self.limits.max_nesting_depth,
            ErrorKind.NESTING_TOO_DEEP,
        )

    def exit_structure(self) -> None:
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def validate_object_keys(self, key_count: int) -> None:
        _check(f"object with {key_count} properties", key_count, self.limits.max_object_keys)

    def validate_array_items(self, item_count: int) -> None:
        _check(f"array with {item_count} elements", item_count, self.limits.max_array_items)

    def count_item(self) -> None:
        # Counts every value, containers included.
        self.total_items += 1
        _check(f"value count {self.total_items}", self.total_items, self.limits.max_total_items)

    def reset(self) -> None:
        self.nesting_depth = 0
        self.total_items = 0
