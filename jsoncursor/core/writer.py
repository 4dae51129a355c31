"""
Forward-only JSON writer.

Emits compact JSON straight to a binary stream with the same escape table
JsonReader decodes, so anything written here reads back unchanged.
"""

import math
from typing import Union

from .constants import JSON_REVERSE_ESCAPE_MAP
from .interfaces import WritableByteStream

TextLike = Union[str, bytes]


def escape_bytes(value: bytes) -> bytes:
    """Escape the bytes the reader refuses to see raw inside a string."""
    if not any(byte in JSON_REVERSE_ESCAPE_MAP for byte in value):
        return value
    out = bytearray()
    for byte in value:
        escape = JSON_REVERSE_ESCAPE_MAP.get(byte)
        if escape is None:
            out.append(byte)
        else:
            out += escape
    return bytes(out)


def _as_bytes(value: TextLike) -> bytes:
    return value.encode("utf-8") if isinstance(value, str) else bytes(value)


class JsonWriter:
    """Writes tables, arrays, keys and scalars, inserting commas as needed."""

    def __init__(self, stream: WritableByteStream):
        self.stream = stream
        self.table_depth = 0
        self.array_depth = 0
        self.needs_comma = False

    def _separate(self) -> None:
        if self.needs_comma:
            self.stream.write(b",")
            self.needs_comma = False

    def _scalar(self, text: bytes) -> None:
        self._separate()
        self.stream.write(text)
        self.needs_comma = True

    def table_begin(self) -> None:
        self._separate()
        self.table_depth += 1
        self.stream.write(b"{")

    def table_end(self) -> None:
        if self.table_depth <= 0:
            raise ValueError("table_end() without a matching table_begin()")
        self.table_depth -= 1
        self.stream.write(b"}")
        self.needs_comma = True

    def array_begin(self) -> None:
        self._separate()
        self.array_depth += 1
        self.stream.write(b"[")

    def array_end(self) -> None:
        if self.array_depth <= 0:
            raise ValueError("array_end() without a matching array_begin()")
        self.array_depth -= 1
        self.stream.write(b"]")
        self.needs_comma = True

    def key(self, name: TextLike) -> None:
        """Write ``"name":``; the next write supplies the value."""
        self._separate()
        self.stream.write(b'"' + escape_bytes(_as_bytes(name)) + b'":')

    def write_int(self, value: int) -> None:
        self._scalar(str(int(value)).encode("ascii"))

    def write_float(self, value: float) -> None:
        if not math.isfinite(value):
            raise ValueError(f"Cannot write non-finite number {value!r}")
        self._scalar(repr(float(value)).encode("ascii"))

    def write_bool(self, value: bool) -> None:
        self._scalar(b"true" if value else b"false")

    def write_null(self) -> None:
        self._scalar(b"null")

    def write_string(self, value: TextLike) -> None:
        self._scalar(b'"' + escape_bytes(_as_bytes(value)) + b'"')

    def write_kv_int(self, name: TextLike, value: int) -> None:
        self.key(name)
        self.write_int(value)

    def write_kv_float(self, name: TextLike, value: float) -> None:
        self.key(name)
        self.write_float(value)

    def write_kv_bool(self, name: TextLike, value: bool) -> None:
        self.key(name)
        self.write_bool(value)

    def write_kv_string(self, name: TextLike, value: TextLike) -> None:
        self.key(name)
        self.write_string(value)
