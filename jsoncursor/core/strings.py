"""
Resumable string decoder.

A string is decoded into a caller-supplied ``bytearray`` whose length is the
capacity. When the string does not fit, decode_chunk() stops *before*
consuming the byte it could not store and reports WANTS_MORE_MEMORY; the
caller then either grows the same buffer and calls again with the same
continuation, or hands over a fresh buffer after calling
``continuation.rebase()``.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable

from ..security.exceptions import ErrorKind, ErrorSuggestionEngine, ParseError
from .constants import (
    BACKSLASH,
    EOF,
    FORBIDDEN_IN_STRING,
    JSON_ESCAPE_MAP,
    QUOTE,
    describe_byte,
)
from .cursor import StreamCursor

ErrorFactory = Callable[..., ParseError]


class DecodeStatus(Enum):
    """Outcome of one decode_chunk() call."""

    WANTS_MORE_MEMORY = "wants_more_memory"
    DONE = "done"


@dataclass
class DecodeContinuation:
    """Progress of a string decode threaded across decode_chunk() calls."""

    written: int = 0
    escaped: bool = False

    def rebase(self) -> None:
        """Restart writing at offset 0 of a fresh buffer.

        Only valid once the bytes written so far have been consumed or
        discarded by the caller.
        """
        self.written = 0


class StringDecoder:
    """Decodes the body of a quoted string from a cursor."""

    def __init__(self, cursor: StreamCursor, make_error: ErrorFactory):
        self.cursor = cursor
        self.make_error = make_error

    def begin(self) -> None:
        """Skip whitespace and consume the opening quote."""
        c = self.cursor.skip_whitespace()
        if c != QUOTE:
            raise self.make_error(
                f"Expected quote to start string, found {describe_byte(c)}",
                ErrorKind.STRING,
            )
        self.cursor.advance()

    def decode_chunk(
        self, buffer: bytearray, continuation: DecodeContinuation
    ) -> DecodeStatus:
        """Decode into ``buffer`` from ``continuation.written`` on."""
        capacity = len(buffer)

        while True:
            c = self._next_byte()

            if continuation.escaped:
                value = JSON_ESCAPE_MAP.get(c, c)
            elif c == BACKSLASH:
                continuation.escaped = True
                self.cursor.advance()
                continue
            elif c == QUOTE:
                self.cursor.advance()
                return DecodeStatus.DONE
            else:
                value = c

            if continuation.written >= capacity:
                return DecodeStatus.WANTS_MORE_MEMORY

            buffer[continuation.written] = value
            continuation.written += 1
            continuation.escaped = False
            self.cursor.advance()

    def skip_rest(self, continuation: DecodeContinuation) -> None:
        """Consume the remainder of the string without storing anything."""
        while True:
            c = self._next_byte()
            self.cursor.advance()

            if continuation.escaped:
                continuation.escaped = False
            elif c == BACKSLASH:
                continuation.escaped = True
            elif c == QUOTE:
                return

    def _next_byte(self) -> int:
        c = self.cursor.ensure()
        if c == EOF:
            raise self.make_error(
                "Unterminated string: reached end of input before closing quote",
                ErrorKind.STRING,
            )
        if c in FORBIDDEN_IN_STRING:
            escape = FORBIDDEN_IN_STRING[c]
            raise self.make_error(
                f"Illegal unescaped control character in string ({escape})",
                ErrorKind.STRING,
                ErrorSuggestionEngine.suggest_for_control_character(escape),
            )
        return c
