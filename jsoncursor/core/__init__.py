"""
jsoncursor Core Decoding Engine.

This module provides the stream cursor, scalar decoders and the pull reader.
"""

from .cursor import PeekSnapshot, Position, SeparatorState, StreamCursor, ValueType
from .reader import JsonReader
from .strings import DecodeContinuation, DecodeStatus
from .structure import ArrayCursor, TableCursor
from .writer import JsonWriter

__all__ = [
    'JsonReader', 'JsonWriter',
    'StreamCursor', 'PeekSnapshot', 'Position', 'SeparatorState', 'ValueType',
    'DecodeContinuation', 'DecodeStatus',
    'TableCursor', 'ArrayCursor',
]
