"""
Configuration and limits for jsoncursor readers.
"""

import logging
from dataclasses import dataclass
from typing import Optional


@dataclass
class ParseLimits:
    """Resource limits that keep a hostile document from exhausting memory or stack."""

    max_nesting_depth: int = 256
    max_string_length: int = 1024 * 1024
    max_number_length: int = 100

    def __post_init__(self) -> None:
        if self.max_nesting_depth <= 0:
            raise ValueError("max_nesting_depth must be positive")
        if self.max_string_length <= 0:
            raise ValueError("max_string_length must be positive")
        if self.max_number_length <= 0:
            raise ValueError("max_number_length must be positive")


@dataclass
class ReaderConfig:
    """Behaviour switches for a JsonReader.

    ``strict_commas`` rejects missing, doubled and trailing separators; turning
    it off accepts documents from producers that omit commas between
    elements. ``lenient_numbers`` additionally accepts a leading ``+``, a
    leading ``.`` and leading zeros.
    """

    strict_commas: bool = True
    lenient_numbers: bool = False

    # Size of the reader-owned buffer behind read_string()/read_key()
    string_buffer_size: int = 8 * 1024

    # Diagnostics
    diagnostics: bool = True
    context_radius: int = 40

    limits: Optional[ParseLimits] = None
    logger: Optional[logging.Logger] = None

    def __post_init__(self) -> None:
        if self.limits is None:
            self.limits = ParseLimits()
        if self.string_buffer_size <= 0:
            raise ValueError("string_buffer_size must be positive")
        if self.context_radius < 0:
            raise ValueError("context_radius must not be negative")
