"""
Pull-style JSON reader.

JsonReader walks a document straight off a byte stream: callers open tables
and arrays, ask whether another element follows, inspect keys (optionally
without consuming them) and read or skip each value. Nothing is built in
memory beyond the reader-owned string buffer.

Errors latch. The first failure is stored on the reader and every later
call returns a neutral default without touching the stream, so a decode
loop can run to completion and be checked once via ``failed`` or
``raise_for_error()``.
"""

import functools
import logging
from collections.abc import Iterator
from types import TracebackType
from typing import TYPE_CHECKING, Any, Callable, Optional, TypeVar, Union

from ..security.exceptions import (
    ErrorKind,
    ErrorSuggestionEngine,
    JsonCursorError,
    ParseError,
    SecurityError,
)
from ..security.limits import LimitValidator
from ..utils.config import ReaderConfig
from .constants import (
    COLON,
    COMMA,
    EOF,
    LBRACE,
    LBRACKET,
    RBRACE,
    RBRACKET,
    describe_byte,
    get_value_type_map,
)
from .cursor import PeekSnapshot, Position, SeparatorState, StreamCursor, ValueType
from .error_handling import ErrorReporter
from .interfaces import ByteStream
from .numbers import NumberScanner
from .strings import DecodeContinuation, DecodeStatus, StringDecoder

if TYPE_CHECKING:
    from .structure import ArrayCursor, TableCursor

T = TypeVar("T")

KeyLike = Union[str, bytes]


def _latching(default: Any) -> Callable[[Callable[..., T]], Callable[..., T]]:
    """Turn a public reader operation into a no-op once an error has latched."""

    def decorate(method: Callable[..., T]) -> Callable[..., T]:
        @functools.wraps(method)
        def wrapper(self: "JsonReader", *args: Any, **kwargs: Any) -> T:
            if self.error is not None:
                return default
            try:
                return method(self, *args, **kwargs)
            except JsonCursorError as exc:
                self._latch(exc)
                return default
            except RecursionError as exc:
                error = SecurityError(
                    f"Nesting depth {self.validator.nesting_depth} exceeds the interpreter stack"
                )
                error.__cause__ = exc
                self._latch(error)
                return default

        return wrapper

    return decorate


def _as_bytes(key: KeyLike) -> bytes:
    return key.encode("utf-8") if isinstance(key, str) else bytes(key)


class JsonReader:
    """Cursor-based JSON decoder over a seekable byte stream."""

    def __init__(
        self,
        stream: ByteStream,
        config: Optional[ReaderConfig] = None,
        *,
        owns_stream: bool = False,
    ):
        self.config = config or ReaderConfig()
        self.logger = self.config.logger or logging.getLogger(__name__)
        assert self.config.limits is not None
        self.validator = LimitValidator(self.config.limits)
        self.owns_stream = owns_stream
        self._buffer = bytearray(self.config.string_buffer_size)
        self._value_types = get_value_type_map()
        self.error: Optional[JsonCursorError] = None
        self.reset(stream)

    def reset(self, stream: Optional[ByteStream] = None) -> None:
        """Start a fresh decoding pass, clearing any latched error.

        Without ``stream`` the current stream is reused from wherever it is
        positioned now; seek it first to re-read from the start.
        """
        if stream is None:
            stream = self.cursor.stream

        self.cursor = StreamCursor(stream)
        self.error = None
        self.validator.reset()
        self.reporter = ErrorReporter(
            self.cursor, self.config.diagnostics, self.config.context_radius
        )
        self.strings = StringDecoder(self.cursor, self.reporter.create_parse_error)
        self.numbers = NumberScanner(
            self.cursor,
            self.validator,
            self.reporter.create_parse_error,
            self.config.lenient_numbers,
        )
        self.logger.debug(
            "Reader initialised (strict_commas=%s, lenient_numbers=%s)",
            self.config.strict_commas,
            self.config.lenient_numbers,
        )

    # ------------------------------------------------------------------
    # Error latch
    # ------------------------------------------------------------------

    @property
    def failed(self) -> bool:
        """True once any operation has latched an error."""
        return self.error is not None

    @property
    def diagnostic(self) -> Optional[str]:
        """Compiler-style description of the latched error, if any."""
        return self.error.diagnostic() if self.error else None

    @property
    def position(self) -> Position:
        return self.cursor.current_position()

    def raise_for_error(self) -> None:
        """Raise the latched error, if there is one."""
        if self.error is not None:
            raise self.error

    def report_error(self, message: str, kind: ErrorKind = ErrorKind.STRUCTURE) -> None:
        """Latch a caller-detected error (e.g. a missing key) at the cursor position.

        Does nothing if an error is already latched; the first one wins.
        """
        if self.error is None:
            self._latch(self._fail(message, kind))

    def _latch(self, error: JsonCursorError) -> None:
        self.error = self.reporter.locate(error)
        self.logger.debug("Latched decode error:\n%s", self.error.diagnostic())

    def _fail(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.STRUCTURE,
        suggestions: Optional[list[str]] = None,
    ) -> ParseError:
        return self.reporter.create_parse_error(message, kind, suggestions)

    # ------------------------------------------------------------------
    # Stream ownership
    # ------------------------------------------------------------------

    def close(self) -> None:
        """Close the stream if this reader opened it."""
        if self.owns_stream:
            close = getattr(self.cursor.stream, "close", None)
            if close is not None:
                close()

    def __enter__(self) -> "JsonReader":
        return self

    def __exit__(
        self,
        exc_type: Optional[type[BaseException]],
        exc_val: Optional[BaseException],
        exc_tb: Optional[TracebackType],
    ) -> None:
        self.close()

    # ------------------------------------------------------------------
    # Value inspection
    # ------------------------------------------------------------------

    @_latching(ValueType.INVALID)
    def value_type(self) -> ValueType:
        """Classify the next value from its first byte without consuming it."""
        return self._value_type()

    def _value_type(self) -> ValueType:
        c = self.cursor.skip_whitespace()
        return self._value_types.get(c, ValueType.INVALID)

    # ------------------------------------------------------------------
    # Scalars
    # ------------------------------------------------------------------

    @_latching(0.0)
    def read_number(self) -> float:
        """Read a number value and consume a trailing comma."""
        return float(self._read_number_text(integer=False))

    @_latching(0)
    def read_integer(self) -> int:
        """Read a number that has neither fraction nor exponent."""
        return int(self._read_number_text(integer=True))

    def _read_number_text(self, integer: bool) -> str:
        self.cursor.skip_whitespace()
        text, integral = self.numbers.scan()
        if integer and not integral:
            raise self._fail(
                f"Expected an integer, found {text.decode('ascii')}",
                ErrorKind.NUMBER,
            )
        self._comma()
        return text.decode("ascii")

    @_latching(False)
    def read_bool(self) -> bool:
        """Read ``true`` or ``false`` and consume a trailing comma."""
        return self._read_bool()

    def _read_bool(self) -> bool:
        c = self.cursor.skip_whitespace()
        if c == ord("t"):
            self._expect_literal(b"true")
            return True
        if c == ord("f"):
            self._expect_literal(b"false")
            return False
        raise self._fail(
            f"Expected 'true' or 'false', found {describe_byte(c)}", ErrorKind.LITERAL
        )

    @_latching(None)
    def read_null(self) -> None:
        """Read ``null`` and consume a trailing comma."""
        self._read_null()

    def _read_null(self) -> None:
        c = self.cursor.skip_whitespace()
        if c != ord("n"):
            raise self._fail(f"Expected 'null', found {describe_byte(c)}", ErrorKind.LITERAL)
        self._expect_literal(b"null")

    def _expect_literal(self, word: bytes) -> None:
        for expected in word:
            c = self.cursor.ensure()
            if c != expected:
                raise self._fail(
                    f"Unexpected character {describe_byte(c)}, expected '{chr(expected)}'",
                    ErrorKind.LITERAL,
                )
            self.cursor.advance()
        self._comma()

    def _comma(self) -> None:
        """Consume the separator that may follow a finished value."""
        if self.cursor.skip_whitespace() == COMMA:
            self.cursor.advance()
            self.cursor.separator = SeparatorState.COMMA
        else:
            self.cursor.separator = SeparatorState.NONE

    # ------------------------------------------------------------------
    # Strings
    # ------------------------------------------------------------------

    @_latching(None)
    def begin_string(self) -> None:
        """Consume the opening quote of a string for use with decode_chunk()."""
        self.strings.begin()

    @_latching(DecodeStatus.DONE)
    def decode_chunk(
        self, buffer: bytearray, continuation: DecodeContinuation
    ) -> DecodeStatus:
        """Decode as much of the current string as fits into ``buffer``.

        Returns WANTS_MORE_MEMORY when ``buffer`` filled up first. Grow the
        same buffer and call again with the same ``continuation``, or call
        skip_string_rest() to discard the remainder. After DONE, call
        end_string() when the string was a value.
        """
        return self.strings.decode_chunk(buffer, continuation)

    @_latching(None)
    def skip_string_rest(self, continuation: DecodeContinuation) -> None:
        """Consume the rest of the current string without storing it."""
        self.strings.skip_rest(continuation)

    @_latching(None)
    def end_string(self) -> None:
        """Finish a string value read with the low-level protocol."""
        self._comma()

    @_latching(b"")
    def read_string(self) -> bytes:
        """Read a string value into the reader's fixed buffer.

        Strings longer than ``string_buffer_size`` are truncated; the cursor
        still moves past the whole string.
        """
        value = self._read_bounded_string()
        self._comma()
        return value

    @_latching(b"")
    def read_long_string(self) -> bytes:
        """Read a string value in full, bounded only by ``max_string_length``."""
        value = self._read_unbounded_string()
        self._comma()
        return value

    @_latching("")
    def read_text(self, encoding: str = "utf-8", errors: str = "replace") -> str:
        """read_long_string() decoded to ``str``."""
        value = self._read_unbounded_string()
        self._comma()
        try:
            return value.decode(encoding, errors)
        except UnicodeDecodeError as exc:
            raise self._fail(
                f"Cannot decode string as {encoding}: {exc.reason}", ErrorKind.STRING
            ) from exc

    def _read_bounded_string(self) -> bytes:
        self.strings.begin()
        continuation = DecodeContinuation()
        status = self.strings.decode_chunk(self._buffer, continuation)
        if status is DecodeStatus.WANTS_MORE_MEMORY:
            self.logger.debug(
                "Truncating string at %d bytes (line %d)",
                continuation.written,
                self.cursor.line,
            )
            self.strings.skip_rest(continuation)
        return bytes(self._buffer[: continuation.written])

    def _read_unbounded_string(self) -> bytes:
        self.strings.begin()
        limit = self.validator.limits.max_string_length
        buffer = bytearray(min(self.config.string_buffer_size, limit))
        continuation = DecodeContinuation()

        while (
            self.strings.decode_chunk(buffer, continuation)
            is DecodeStatus.WANTS_MORE_MEMORY
        ):
            self.validator.validate_string_length(len(buffer) + 1)
            # Grow in place so continuation.written stays valid
            buffer.extend(bytes(min(len(buffer), limit - len(buffer))))

        del buffer[continuation.written :]
        return bytes(buffer)

    # ------------------------------------------------------------------
    # Tables and arrays
    # ------------------------------------------------------------------

    @_latching(False)
    def table_begin(self) -> bool:
        """Consume the '{' that opens a table."""
        self._begin(LBRACE, "table")
        return True

    @_latching(False)
    def table_can_read(self) -> bool:
        """Report whether another key/value pair follows; consumes the closing '}'."""
        return self._can_read(RBRACE, "table")

    @_latching(False)
    def array_begin(self) -> bool:
        """Consume the '[' that opens an array."""
        self._begin(LBRACKET, "array")
        return True

    @_latching(False)
    def array_can_read(self) -> bool:
        """Report whether another element follows; consumes the closing ']'."""
        return self._can_read(RBRACKET, "array")

    def _begin(self, opener: int, name: str) -> None:
        c = self.cursor.skip_whitespace()
        if c != opener:
            if c == EOF:
                raise self._fail(
                    f"Unexpected end of input, expected '{chr(opener)}' to open {name}"
                )
            raise self._fail(
                f"Expected '{chr(opener)}' to open {name}, found {describe_byte(c)}"
            )
        self.validator.enter_structure()
        self.cursor.advance()
        self.cursor.separator = SeparatorState.OPENED

    def _can_read(self, closer: int, name: str) -> bool:
        c = self.cursor.skip_whitespace()
        strict = self.config.strict_commas

        if c == EOF:
            raise self._fail(
                f"Unexpected end of input, expected '{chr(closer)}' to close {name}",
                suggestions=ErrorSuggestionEngine.suggest_for_unclosed_structure(name),
            )

        if c == closer:
            if strict and self.cursor.separator is SeparatorState.COMMA:
                raise self._fail(
                    f"Trailing comma before '{chr(closer)}'",
                    suggestions=ErrorSuggestionEngine.suggest_for_trailing_comma(),
                )
            self.cursor.advance()
            self.validator.exit_structure()
            self._comma()
            return False

        if strict and self.cursor.separator is SeparatorState.NONE:
            raise self._fail(
                f"Expected ',' or '{chr(closer)}', found {describe_byte(c)}",
                suggestions=ErrorSuggestionEngine.suggest_for_missing_comma(),
            )
        return True

    def iter_table(self) -> Iterator[int]:
        """Open a table and yield once per entry; the caller consumes each entry.

        Breaking out early leaves the rest of the table unread.
        """
        if not self.table_begin():
            return
        index = 0
        while self.table_can_read():
            yield index
            index += 1

    def iter_array(self) -> Iterator[int]:
        """Open an array and yield each element index; the caller consumes each element."""
        if not self.array_begin():
            return
        index = 0
        while self.array_can_read():
            yield index
            index += 1

    def iter_items(self) -> Iterator[bytes]:
        """Open a table and yield each key, already consumed; the caller reads the value."""
        for _ in self.iter_table():
            yield self.read_key()

    def table(self) -> "TableCursor":
        # Import here to avoid circular imports
        from .structure import TableCursor  # pylint: disable=import-outside-toplevel

        return TableCursor(self)

    def array(self) -> "ArrayCursor":
        from .structure import ArrayCursor  # pylint: disable=import-outside-toplevel

        return ArrayCursor(self)

    # ------------------------------------------------------------------
    # Keys
    # ------------------------------------------------------------------

    @_latching(b"")
    def read_key(self) -> bytes:
        """Read a key and the ':' after it."""
        return self._read_key()

    def _read_key(self) -> bytes:
        key = self._read_bounded_string()
        c = self.cursor.skip_whitespace()
        if c != COLON:
            raise self._fail(f"Expected ':' after key, found {describe_byte(c)}")
        self.cursor.advance()
        return key

    @_latching(False)
    def key_equals(self, want: KeyLike) -> bool:
        """Compare the key under the cursor with ``want`` without consuming it."""
        snapshot = self._peek_begin()
        matches = self._read_key() == _as_bytes(want)
        self._peek_end(snapshot)
        return matches

    @_latching(False)
    def key_matches_and_consume(self, want: KeyLike) -> bool:
        """Consume the key under the cursor only if it equals ``want``."""
        snapshot = self._peek_begin()
        if self._read_key() == _as_bytes(want):
            return True
        self._peek_end(snapshot)
        return False

    @_latching(None)
    def skip_key(self) -> None:
        self._read_key()

    @_latching(None)
    def skip_entry(self) -> None:
        """Skip a whole key/value pair."""
        self._read_key()
        self._skip_value()

    # ------------------------------------------------------------------
    # Peek / rewind
    # ------------------------------------------------------------------

    @_latching(None)
    def peek_begin(self) -> Optional[PeekSnapshot]:
        """Record the cursor state so peek_end() can return to it."""
        return self._peek_begin()

    @_latching(None)
    def peek_end(self, snapshot: PeekSnapshot) -> None:
        """Restore the state recorded by peek_begin()."""
        self._peek_end(snapshot)

    def _peek_begin(self) -> PeekSnapshot:
        try:
            return self.cursor.snapshot(self.validator.nesting_depth)
        except OSError as exc:
            raise self._fail(
                f"Cannot record stream position: {exc}", ErrorKind.IO
            ) from exc

    def _peek_end(self, snapshot: PeekSnapshot) -> None:
        try:
            self.cursor.restore(snapshot)
        except OSError as exc:
            raise self._fail(
                f"Cannot restore stream position {snapshot.offset}: {exc}",
                ErrorKind.IO,
            ) from exc
        self.validator.nesting_depth = snapshot.depth

    # ------------------------------------------------------------------
    # Skipping
    # ------------------------------------------------------------------

    @_latching(None)
    def skip_value(self) -> None:
        """Consume the next value of any type, recursing into tables and arrays."""
        self._skip_value()

    def _skip_value(self) -> None:
        value_type = self._value_type()

        if value_type is ValueType.INVALID:
            raise self._fail(
                f"Expected a value, found {describe_byte(self.cursor.lookahead)}",
                ErrorKind.TYPE,
            )
        if value_type is ValueType.NUMBER:
            self._read_number_text(integer=False)
        elif value_type is ValueType.BOOL:
            self._read_bool()
        elif value_type is ValueType.NULL:
            self._read_null()
        elif value_type is ValueType.STRING:
            self.strings.begin()
            self.strings.skip_rest(DecodeContinuation())
            self._comma()
        elif value_type is ValueType.ARRAY:
            self._begin(LBRACKET, "array")
            while self._can_read(RBRACKET, "array"):
                self._skip_value()
        else:
            self._begin(LBRACE, "table")
            while self._can_read(RBRACE, "table"):
                self._read_key()
                self._skip_value()

    # ------------------------------------------------------------------
    # End of document
    # ------------------------------------------------------------------

    @_latching(None)
    def finish(self) -> None:
        """Check that nothing but whitespace follows the root value."""
        if self.validator.nesting_depth > 0:
            raise self._fail(
                f"Document ends with {self.validator.nesting_depth} unclosed table(s)/array(s)"
            )
        if self.config.strict_commas and self.cursor.separator is SeparatorState.COMMA:
            raise self._fail(
                "Trailing comma after the document",
                suggestions=ErrorSuggestionEngine.suggest_for_trailing_comma(),
            )
        c = self.cursor.skip_whitespace()
        if c != EOF:
            raise self._fail(f"Unexpected {describe_byte(c)} after end of document")
