"""
Exception hierarchy and error context for jsoncursor.

Decoder internals raise these exceptions; the reader catches them at its
public boundary and latches the first one it sees.
"""

from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, Optional

if TYPE_CHECKING:
    from ..core.cursor import Position


class ErrorKind(Enum):
    """Category of a decoding failure."""

    STRUCTURE = "structure"
    STRING = "string"
    NUMBER = "number"
    LITERAL = "literal"
    IO = "io"
    TYPE = "type"
    LIMIT = "limit"


@dataclass
class ErrorContext:
    """Textual window around the byte that caused an error."""

    text: str
    position: "Position"
    context_before: str
    context_after: str
    error_char: str
    line_text: str
    column_indicator: str


class JsonCursorError(Exception):
    """Base exception for jsoncursor errors."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
    ):
        self.message = message
        self.position = position
        self.context = context
        self.suggestions = suggestions or []
        super().__init__(self._format_message())

    def _format_message(self) -> str:
        msg = self.message

        if self.position:
            msg += f" at line {self.position.line}, column {self.position.column}"

        if self.context:
            msg += (
                f"\nContext:\n  {self.context.line_text}"
                f"\n  {self.context.column_indicator}"
            )

        if self.suggestions:
            msg += "\nSuggestions:"
            for suggestion in self.suggestions:
                msg += f"\n  - {suggestion}"

        return msg

    def diagnostic(self) -> str:
        """Compiler-style rendering: ``line:column: error: message`` plus context."""
        line = self.position.line if self.position else 0
        column = self.position.column if self.position else 0
        header = f"{line}:{column}: error: {self.message}"
        if self.context is None:
            return header

        prefix = f"  {line} | "
        return (
            f"{header}\n{prefix}{self.context.line_text}\n"
            f"{' ' * len(prefix)}{self.context.column_indicator}"
        )


class ParseError(JsonCursorError):
    """Raised when the input violates the JSON grammar or the stream fails."""

    def __init__(
        self,
        message: str,
        position: Optional["Position"] = None,
        context: Optional[ErrorContext] = None,
        suggestions: Optional[list[str]] = None,
        kind: ErrorKind = ErrorKind.STRUCTURE,
    ):
        self.kind = kind
        super().__init__(message, position, context, suggestions)


class SecurityError(JsonCursorError):
    """Raised when a configured resource limit is exceeded."""

    kind = ErrorKind.LIMIT


class ErrorSuggestionEngine:
    """Canned hints attached to common failures."""

    @staticmethod
    def suggest_for_unclosed_structure(structure_type: str) -> list[str]:
        closer = "}" if structure_type == "table" else "]"
        return [
            f"Add the missing '{closer}' to close the {structure_type}",
            "Check whether the input was truncated",
        ]

    @staticmethod
    def suggest_for_missing_comma() -> list[str]:
        return ["Separate elements with ','"]

    @staticmethod
    def suggest_for_trailing_comma() -> list[str]:
        return ["Remove the ',' before the closing bracket"]

    @staticmethod
    def suggest_for_control_character(char: str) -> list[str]:
        return [f"Escape the control character as {char}"]
