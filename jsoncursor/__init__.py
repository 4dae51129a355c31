"""
jsoncursor - pull-style JSON decoding straight off a byte stream.

jsoncursor reads a JSON document one byte at a time and never builds a tree.
Callers walk tables and arrays themselves, decide per key what to read or
skip, and can peek ahead and rewind before committing to a decision.

Key Features:
- Cursor API: table_begin()/table_can_read(), array_begin()/array_can_read()
- Non-destructive key inspection with peek/rewind over seekable streams
- Resumable string decoding into caller-owned buffers
- Generic skipping of any subtree without allocating
- Sticky error latch with line/column diagnostics
- Strict or lenient comma handling for older producers
- A matching forward-only writer

Quick Start:
    import jsoncursor

    with jsoncursor.open_reader(b'{"version": 1, "name": "demo"}') as reader:
        for _ in reader.iter_table():
            if reader.key_matches_and_consume("version"):
                version = reader.read_integer()
            else:
                reader.skip_entry()
        reader.finish()
        reader.raise_for_error()
"""

from .core.cursor import PeekSnapshot, Position, ValueType
from .core.reader import JsonReader
from .core.strings import DecodeContinuation, DecodeStatus
from .core.structure import ArrayCursor, TableCursor
from .core.writer import JsonWriter
from .security.exceptions import ErrorKind, JsonCursorError, ParseError, SecurityError
from .streaming.sources import as_byte_stream, open_reader
from .utils.config import ParseLimits, ReaderConfig

__version__ = "0.1.0"
__author__ = "jsoncursor contributors"

__all__ = [
    # Reading and writing
    "JsonReader", "JsonWriter", "open_reader", "as_byte_stream",
    # Cursor types
    "ValueType", "Position", "PeekSnapshot", "TableCursor", "ArrayCursor",
    "DecodeContinuation", "DecodeStatus",
    # Configuration classes
    "ReaderConfig", "ParseLimits",
    # Exception classes
    "JsonCursorError", "ParseError", "SecurityError", "ErrorKind",
]
