"""
Stream cursor for jsoncursor - one byte of lazy lookahead over a byte stream.
"""

from dataclasses import dataclass
from enum import Enum

from .constants import EOF, NEWLINE, WHITESPACE
from .interfaces import ByteStream


class ValueType(Enum):
    """Kind of JSON value under the cursor, judged from the lookahead byte only."""

    INVALID = "invalid"
    NUMBER = "number"
    ARRAY = "array"
    TABLE = "table"
    STRING = "string"
    BOOL = "bool"
    NULL = "null"


class SeparatorState(Enum):
    """Comma bookkeeping for the innermost open table or array."""

    OPENED = "opened"  # just consumed '{' or '['
    COMMA = "comma"  # last element was followed by ','
    NONE = "none"  # last element was not followed by ','


@dataclass
class Position:
    """Position in the source (line from 1, column from 0 before the first byte)."""

    line: int
    column: int


@dataclass(frozen=True)
class PeekSnapshot:
    """Saved cursor state that peek_end() restores."""

    lookahead: int
    line: int
    column: int
    pending: bool
    separator: SeparatorState
    depth: int
    offset: int
    line_end_column: int


class StreamCursor:
    """Owns the stream, the lookahead slot and the line/column counters.

    ``lookahead`` is only valid after ensure(); advance() marks it consumed
    and the next byte is fetched lazily by the following ensure().
    """

    def __init__(self, stream: ByteStream) -> None:
        self.stream = stream
        self.lookahead = EOF
        self.pending = True
        self.line = 1
        self.column = 0
        # Column a fetched newline occupies on the line it ends
        self.line_end_column = 0
        self.separator = SeparatorState.NONE

    def ensure(self) -> int:
        """Fetch the lookahead byte if the previous one was consumed."""
        if self.pending:
            self.pending = False
            data = self.stream.read(1)
            if not data:
                self.lookahead = EOF
                return EOF

            self.lookahead = data[0]
            if self.lookahead == NEWLINE:
                self.line_end_column = self.column + 1
                self.line += 1
                self.column = 0
            else:
                self.column += 1

        return self.lookahead

    def advance(self) -> None:
        """Consume the lookahead byte without reading the next one."""
        self.pending = True

    def skip_whitespace(self) -> int:
        """Consume JSON whitespace and return the first significant byte."""
        while self.ensure() in WHITESPACE:
            self.advance()
        return self.lookahead

    def current_position(self) -> Position:
        """Get current position in the stream."""
        return Position(self.line, self.column)

    def error_position(self) -> Position:
        """Position of the lookahead byte itself.

        Same as current_position() except for a fetched newline, which is
        reported at the end of the line it terminates.
        """
        if not self.pending and self.lookahead == NEWLINE:
            return Position(self.line - 1, self.line_end_column)
        return self.current_position()

    def offset(self) -> int:
        """Byte offset of the lookahead (or of the next byte when pending)."""
        position = self.stream.tell()
        if not self.pending and self.lookahead != EOF:
            return position - 1
        return position

    def snapshot(self, depth: int) -> PeekSnapshot:
        """Capture the full cursor state; raises OSError if tell() is unsupported."""
        return PeekSnapshot(
            lookahead=self.lookahead,
            line=self.line,
            column=self.column,
            pending=self.pending,
            separator=self.separator,
            depth=depth,
            offset=self.stream.tell(),
            line_end_column=self.line_end_column,
        )

    def restore(self, snapshot: PeekSnapshot) -> None:
        """Return to a snapshot; raises OSError if seek() is unsupported."""
        self.stream.seek(snapshot.offset)
        self.lookahead = snapshot.lookahead
        self.line = snapshot.line
        self.column = snapshot.column
        self.pending = snapshot.pending
        self.separator = snapshot.separator
        self.line_end_column = snapshot.line_end_column
