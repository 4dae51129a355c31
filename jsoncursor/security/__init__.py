"""
jsoncursor Security and Validation System.

This module provides resource limits and the exception hierarchy.
"""

from .exceptions import ErrorContext, ErrorKind, JsonCursorError, ParseError, SecurityError
from .limits import LimitValidator

__all__ = [
    'ErrorContext', 'ErrorKind', 'JsonCursorError', 'ParseError', 'SecurityError',
    'LimitValidator',
]
