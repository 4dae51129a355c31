"""
Security limits and validation for jsoncursor.
This module provides security validation to prevent resource exhaustion attacks.
"""

from ..utils.config import ParseLimits
from .exceptions import SecurityError


class LimitValidator:
    """Validates parsing limits to prevent resource exhaustion attacks."""

    def __init__(self, limits: ParseLimits):
        self.limits = limits
        self.nesting_depth = 0

    def validate_string_length(self, length: int) -> None:
        """Validate that a decoded string length is within limits."""
        if length > self.limits.max_string_length:
            raise SecurityError(
                f"String length {length} exceeds limit "
                f"{self.limits.max_string_length}"
            )

    def validate_number_length(self, length: int) -> None:
        """Validate that a numeric literal length is within limits."""
        if length > self.limits.max_number_length:
            raise SecurityError(
                f"Number length {length} exceeds limit "
                f"{self.limits.max_number_length}"
            )

    def enter_structure(self) -> None:
        """Track entering a nested structure and validate depth."""
        self.nesting_depth += 1
        if self.nesting_depth > self.limits.max_nesting_depth:
            raise SecurityError(
                f"Nesting depth {self.nesting_depth} exceeds limit "
                f"{self.limits.max_nesting_depth}"
            )

    def exit_structure(self) -> None:
        """Track exiting a nested structure."""
        if self.nesting_depth > 0:
            self.nesting_depth -= 1

    def reset(self) -> None:
        """Reset validator state for reuse."""
        self.nesting_depth = 0
