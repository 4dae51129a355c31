"""Helpers that turn common inputs into streams a JsonReader can pull from."""

from .sources import as_byte_stream, open_reader

__all__ = ["as_byte_stream", "open_reader"]
