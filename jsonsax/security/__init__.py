"""
jsonsax Security and Validation System.

This module provides security limits and exception handling.
"""

from .exceptions import (
    ErrorKind,
    ErrorReporter,
    InternalParserError,
    ParseError,
    SecurityError,
)
from .limits import LimitValidator

__all__ = [
    'ErrorKind', 'ErrorReporter', 'InternalParserError',
    'ParseError', 'SecurityError', 'LimitValidator',
]
