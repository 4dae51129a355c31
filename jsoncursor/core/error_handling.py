"""
Positional error reporting for the jsoncursor decoder.

Builds the context window shown in diagnostics by briefly seeking around in
the input stream, then puts the stream back where it was.
"""

from typing import Optional, TypeVar

from ..security.exceptions import ErrorContext, ErrorKind, JsonCursorError, ParseError
from .constants import CARRIAGE_RETURN
from .cursor import Position, StreamCursor
from .interfaces import ByteStream

E = TypeVar("E", bound=JsonCursorError)


class ErrorContextBuilder:
    """Builds error context information from the input stream."""

    @staticmethod
    def build_context(
        stream: ByteStream, offset: int, position: Position, radius: int = 40
    ) -> Optional[ErrorContext]:
        """Read up to ``radius`` bytes either side of ``offset``, cut at line breaks.

        Returns None when the stream cannot report or change its position.
        """
        try:
            saved = stream.tell()
        except OSError:
            return None

        start = max(0, offset - radius)
        try:
            stream.seek(start)
        except OSError:
            return None
        try:
            window = stream.read(offset - start + radius + 1)
        finally:
            stream.seek(saved)

        index = offset - start
        line_start = window.rfind(b"\n", 0, index) + 1
        line_end = window.find(b"\n", index)
        if line_end == -1:
            line_end = len(window)
        if line_end > index + 1 and window[line_end - 1] == CARRIAGE_RETURN:
            line_end -= 1

        # One display character per input byte keeps the caret aligned
        before = window[line_start:index].decode("ascii", "replace")
        after = window[index:line_end].decode("ascii", "replace")
        line_text = before + after

        return ErrorContext(
            text=window.decode("ascii", "replace"),
            position=position,
            context_before=before,
            context_after=after,
            error_char=after[:1],
            line_text=line_text,
            column_indicator=" " * len(before) + "^",
        )


class ErrorReporter:
    """Creates positioned errors for the current cursor location."""

    def __init__(
        self, cursor: StreamCursor, include_context: bool = True, radius: int = 40
    ):
        self.cursor = cursor
        self.include_context = include_context
        self.radius = radius

    def create_parse_error(
        self,
        message: str,
        kind: ErrorKind = ErrorKind.STRUCTURE,
        suggestions: Optional[list[str]] = None,
    ) -> ParseError:
        """Create a ParseError positioned at the lookahead byte."""
        position = self.cursor.error_position()
        return ParseError(
            message,
            position,
            self._build_context(position),
            suggestions=suggestions,
            kind=kind,
        )

    def locate(self, error: E) -> E:
        """Attach cursor position and context to an error raised without them."""
        if error.position is None:
            error.position = self.cursor.error_position()
            error.context = self._build_context(error.position)
            error.args = (error._format_message(),)
        return error

    def _build_context(self, position: Position) -> Optional[ErrorContext]:
        if not self.include_context:
            return None
        try:
            offset = self.cursor.offset()
        except OSError:
            return None
        return ErrorContextBuilder.build_context(
            self.cursor.stream, offset, position, self.radius
        )
