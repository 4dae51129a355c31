"""
Byte constants and lookup tables shared across the jsoncursor decoder.
"""

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .cursor import ValueType

EOF = -1

QUOTE = ord('"')
BACKSLASH = ord("\\")
COLON = ord(":")
COMMA = ord(",")
LBRACE = ord("{")
RBRACE = ord("}")
LBRACKET = ord("[")
RBRACKET = ord("]")
MINUS = ord("-")
PLUS = ord("+")
DOT = ord(".")
NEWLINE = ord("\n")
CARRIAGE_RETURN = ord("\r")

WHITESPACE = frozenset(b" \t\n\r")
DIGITS = frozenset(b"0123456789")
EXPONENT = frozenset(b"eE")

# Raw control bytes that must be escaped inside a string
FORBIDDEN_IN_STRING = {
    ord("\b"): "\\b",
    ord("\f"): "\\f",
    ord("\n"): "\\n",
    ord("\r"): "\\r",
    ord("\t"): "\\t",
}

# Escape letter -> decoded byte; any other escaped byte decodes to itself
JSON_ESCAPE_MAP = {
    QUOTE: QUOTE,
    BACKSLASH: BACKSLASH,
    ord("b"): ord("\b"),
    ord("f"): ord("\f"),
    ord("n"): ord("\n"),
    ord("r"): ord("\r"),
    ord("t"): ord("\t"),
}

# Decoded byte -> escape sequence written by JsonWriter
JSON_REVERSE_ESCAPE_MAP = {
    QUOTE: b'\\"',
    BACKSLASH: b"\\\\",
    ord("\b"): b"\\b",
    ord("\f"): b"\\f",
    ord("\n"): b"\\n",
    ord("\r"): b"\\r",
    ord("\t"): b"\\t",
}


def get_value_type_map() -> dict[int, "ValueType"]:
    """Get the mapping of leading bytes to ValueType enums."""
    # Import here to avoid circular imports
    from .cursor import ValueType  # pylint: disable=import-outside-toplevel

    mapping = {
        QUOTE: ValueType.STRING,
        ord("t"): ValueType.BOOL,
        ord("f"): ValueType.BOOL,
        ord("n"): ValueType.NULL,
        LBRACE: ValueType.TABLE,
        LBRACKET: ValueType.ARRAY,
        MINUS: ValueType.NUMBER,
        PLUS: ValueType.NUMBER,
        DOT: ValueType.NUMBER,
    }
    mapping.update(dict.fromkeys(DIGITS, ValueType.NUMBER))
    return mapping


def describe_byte(value: int) -> str:
    """Printable form of a lookahead byte for error messages."""
    if value == EOF:
        return "end of input"
    if 0x20 <= value < 0x7F:
        return f"'{chr(value)}'"
    return f"byte 0x{value:02x}"
