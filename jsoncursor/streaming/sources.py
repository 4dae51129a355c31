"""
Byte sources for JsonReader.

Readers only need read/tell/seek on bytes. These helpers turn the inputs
callers usually have (bytes, str, paths, open binary files) into such a
stream.
"""

import io
import os
from typing import Any, Optional, Union

from ..core.interfaces import ByteStream
from ..core.reader import JsonReader
from ..utils.config import ReaderConfig

Source = Union[bytes, bytearray, memoryview, str, ByteStream]


def as_byte_stream(source: Source) -> ByteStream:
    """Wrap in-memory data in a BytesIO; pass binary streams through unchanged."""
    if isinstance(source, (bytes, bytearray, memoryview)):
        return io.BytesIO(bytes(source))
    if isinstance(source, str):
        return io.BytesIO(source.encode("utf-8"))
    if isinstance(source, io.TextIOBase):
        raise TypeError(
            "JsonReader needs a binary stream; open the file in 'rb' mode"
        )
    if all(hasattr(source, name) for name in ("read", "tell", "seek")):
        return source
    raise TypeError(f"Cannot read JSON from {type(source).__name__}")


def open_reader(
    source: Union[Source, "os.PathLike[Any]"],
    config: Optional[ReaderConfig] = None,
) -> JsonReader:
    """Create a JsonReader for ``source``.

    A path is opened in binary mode and closed again by the reader's
    close() (or by leaving its ``with`` block).
    """
    if isinstance(source, os.PathLike):
        return JsonReader(open(source, "rb"), config, owns_stream=True)  # pylint: disable=consider-using-with
    return JsonReader(as_byte_stream(source), config)
