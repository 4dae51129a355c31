"""
Core interfaces and protocols for the jsoncursor decoder.

The decoder only ever talks to its input through ByteStream, so any byte
source with these three methods can be read. Peek/rewind and positional
diagnostics additionally require tell() and seek() to work.
"""

from typing import Protocol


class ByteStream(Protocol):
    """Random-access binary source consumed one byte at a time."""

    def read(self, size: int = -1, /) -> bytes:
        """Read up to ``size`` bytes; an empty result means end of stream."""
        ...

    def tell(self) -> int:
        """Return the current absolute byte offset."""
        ...

    def seek(self, offset: int, whence: int = 0, /) -> int:
        """Reposition the stream to an absolute byte offset."""
        ...


class WritableByteStream(Protocol):
    """Forward-only binary sink used by JsonWriter."""

    def write(self, data: bytes, /) -> int:
        """Write ``data`` and return the number of bytes written."""
        ...
