"""
Configuration and limits for jsonsax parsing.

This module defines the security limits, parsing behaviour and error
reporting options shared by the SAX and DOM entry points.
"""

import logging
import sys
from dataclasses import dataclass
from typing import Any, Optional

_SIZE_LIMIT_ARGS = (
    "max_input_size",
    "max_string_length",
    "max_number_length",
    "max_allocation_size",
)
_STRUCTURE_LIMIT_ARGS = (
    "max_nesting_depth",
    "max_object_keys",
    "max_array_items",
    "max_total_items",
)
_CONFIG_OPTION_ARGS = (
    "buffer_events",
    "include_position",
    "include_context",
    "max_error_context",
)


@dataclass
class SizeLimits:
    """Input and content size limits."""
    max_input_size: int = sys.maxsize
    max_string_length: int = sys.maxsize
    max_number_length: int = sys.maxsize
    max_allocation_size: int = sys.maxsize // 3


@dataclass
class StructureLimits:
    """JSON structure complexity limits."""
    max_nesting_depth: int = 100
    max_object_keys: int = sys.maxsize
    max_array_items: int = sys.maxsize
    max_total_items: int = sys.maxsize


@dataclass
class ParseLimits:
    """Security limits for JSON parsing to prevent abuse."""

    size_limits: Optional[SizeLimits] = None
    structure_limits: Optional[StructureLimits] = None

    def __init__(
        self,
        *,
        size_limits: Optional[SizeLimits] = None,
        structure_limits: Optional[StructureLimits] = None,
        **flat_limits: Any,
    ):
        unknown = set(flat_limits) - set(_SIZE_LIMIT_ARGS) - set(_STRUCTURE_LIMIT_ARGS)
        if unknown:
            raise TypeError(f"Unknown limit(s): {', '.join(sorted(unknown))}")

        if size_limits is not None:
            self.size_limits = size_limits
        else:
            self.size_limits = SizeLimits(
                **{k: v for k, v in flat_limits.items() if k in _SIZE_LIMIT_ARGS}
            )

        if structure_limits is not None:
            self.structure_limits = structure_limits
        else:
            self.structure_limits = StructureLimits(
                **{k: v for k, v in flat_limits.items() if k in _STRUCTURE_LIMIT_ARGS}
            )

        if self.size_limits.max_input_size <= 0:
            raise ValueError("max_input_size must be positive")
        if self.structure_limits.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")

    @property
    def max_input_size(self) -> int:
        """Maximum input size in characters."""
        assert self.size_limits is not None
        return self.size_limits.max_input_size

    @property
    def max_string_length(self) -> int:
        """Maximum length for individual decoded strings."""
        assert self.size_limits is not None
        return self.size_limits.max_string_length

    @property
    def max_number_length(self) -> int:
        """Maximum length for number literals."""
        assert self.size_limits is not None
        return self.size_limits.max_number_length

    @property
    def max_allocation_size(self) -> int:
        """Largest single arena block the parser may request."""
        assert self.size_limits is not None
        return self.size_limits.max_allocation_size

    @property
    def max_nesting_depth(self) -> int:
        """Maximum nesting depth for JSON structures."""
        assert self.structure_limits is not None
        return self.structure_limits.max_nesting_depth

    @property
    def max_object_keys(self) -> int:
        """Maximum number of properties in an object."""
        assert self.structure_limits is not None
        return self.structure_limits.max_object_keys

    @property
    def max_array_items(self) -> int:
        """Maximum number of elements in an array."""
        assert self.structure_limits is not None
        return self.structure_limits.max_array_items

    @property
    def max_total_items(self) -> int:
        """Maximum total values across the whole document."""
        assert self.structure_limits is not None
        return self.structure_limits.max_total_items


@dataclass
class ParsingBehavior:
    """Core parsing behavior settings."""
    buffer_events: bool = True


@dataclass
class ErrorReporting:
    """Error reporting and context settings."""
    include_position: bool = True
    include_context: bool = True
    max_error_context: int = 50


@dataclass
class ParseConfig:
    """Configuration options for jsonsax parsing."""

    limits: Optional[ParseLimits] = None
    behavior: Optional[ParsingBehavior] = None
    error_reporting: Optional[ErrorReporting] = None
    logger: Optional[logging.Logger] = None

    def __init__(
        self,
        *,
        limits: Optional[ParseLimits] = None,
        behavior: Optional[ParsingBehavior] = None,
        error_reporting: Optional[ErrorReporting] = None,
        logger: Optional[logging.Logger] = None,
        **config_options: Any,
    ):
        flat_limits = {
            k: v
            for k, v in config_options.items()
            if k in _SIZE_LIMIT_ARGS or k in _STRUCTURE_LIMIT_ARGS
        }
        unknown = set(config_options) - set(flat_limits) - set(_CONFIG_OPTION_ARGS)
        if unknown:
            raise TypeError(f"Unknown option(s): {', '.join(sorted(unknown))}")
        if limits is not None and flat_limits:
            raise TypeError("Pass limits either as a ParseLimits or as keywords, not both")

        self.limits = limits or ParseLimits(**flat_limits)
        self.logger = logger

        if behavior is not None:
            self.behavior = behavior
        else:
            self.behavior = ParsingBehavior(
                buffer_events=config_options.get("buffer_events", True),
            )

        if error_reporting is not None:
            self.error_reporting = error_reporting
        else:
            self.error_reporting = ErrorReporting(
                include_position=config_options.get("include_position", True),
                include_context=config_options.get("include_context", True),
                max_error_context=config_options.get("max_error_context", 50),
            )

    @property
    def buffer_events(self) -> bool:
        """Whether SAX events are held back until the document validates."""
        assert self.behavior is not None
        return self.behavior.buffer_events

    @buffer_events.setter
    def buffer_events(self, value: bool) -> None:
        """Set SAX event buffering."""
        assert self.behavior is not None
        self.behavior.buffer_events = value

    @property
    def include_position(self) -> bool:
        """Whether to include position information in errors."""
        assert self.error_reporting is not None
        return self.error_reporting.include_position

    @include_position.setter
    def include_position(self, value: bool) -> None:
        """Set position information inclusion."""
        assert self.error_reporting is not None
        self.error_reporting.include_position = value

    @property
    def include_context(self) -> bool:
        """Whether to include context information in errors."""
        assert self.error_reporting is not None
        return self.error_reporting.include_context

    @include_context.setter
    def include_context(self, value: bool) -> None:
        """Set context information inclusion."""
        assert self.error_reporting is not None
        self.error_reporting.include_context = value

    @property
    def max_error_context(self) -> int:
        """Maximum characters of context to include in errors."""
        assert self.error_reporting is not None
        return self.error_reporting.max_error_context

    @max_error_context.setter
    def max_error_context(self, value: int) -> None:
        """Set maximum error context length."""
        assert self.error_reporting is not None
        self.error_reporting.max_error_context = value

    def get_logger(self, name: str) -> logging.Logger:
        """Return the configured logger, or the module logger for ``name``."""
        return self.logger or logging.getLogger(name)
