"""
Explicit handles for walking tables and arrays.

    table = reader.table().begin()
    while table.has_next():
        if reader.key_matches_and_consume("version"):
            version = reader.read_integer()
        else:
            reader.skip_entry()
"""

from collections.abc import Iterator
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .reader import JsonReader


class TableCursor:
    """begin()/has_next() pair over one table."""

    def __init__(self, reader: "JsonReader"):
        self.reader = reader
        self.started = False
        self.opened = False
        self.count = 0

    def begin(self) -> "TableCursor":
        self.started = True
        self.opened = self.reader.table_begin()
        return self

    def has_next(self) -> bool:
        if not self.opened:
            return False
        if self.reader.table_can_read():
            self.count += 1
            return True
        self.opened = False
        return False

    def __iter__(self) -> Iterator[bytes]:
        """Yield each key, already consumed."""
        if not self.started:
            self.begin()
        while self.has_next():
            yield self.reader.read_key()


class ArrayCursor:
    """begin()/has_next() pair over one array."""

    def __init__(self, reader: "JsonReader"):
        self.reader = reader
        self.started = False
        self.opened = False
        self.count = 0

    def begin(self) -> "ArrayCursor":
        self.started = True
        self.opened = self.reader.array_begin()
        return self

    def has_next(self) -> bool:
        if not self.opened:
            return False
        if self.reader.array_can_read():
            self.count += 1
            return True
        self.opened = False
        return False

    def __iter__(self) -> Iterator[int]:
        """Yield each element index; the caller consumes the element."""
        if not self.started:
            self.begin()
        while self.has_next():
            yield self.count - 1
