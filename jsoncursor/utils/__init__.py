"""Configuration for jsoncursor readers."""

from .config import ParseLimits, ReaderConfig

__all__ = ["ParseLimits", "ReaderConfig"]
