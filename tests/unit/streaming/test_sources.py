"""
Test cases for byte sources and open_reader().
"""

import io
import os
import tempfile
import unittest
from pathlib import Path

from jsoncursor import as_byte_stream, open_reader


class TestAsByteStream(unittest.TestCase):
    """Test conversion of caller inputs into byte streams."""

    def test_in_memory_inputs(self):
        for source in [b"[1]", bytearray(b"[1]"), memoryview(b"[1]"), "[1]"]:
            with self.subTest(source=type(source).__name__):
                stream = as_byte_stream(source)
                self.assertEqual(stream.read(), b"[1]")

    def test_binary_stream_passes_through(self):
        stream = io.BytesIO(b"{}")
        self.assertIs(as_byte_stream(stream), stream)

    def test_text_stream_rejected(self):
        with self.assertRaises(TypeError) as cm:
            as_byte_stream(io.StringIO("{}"))
        self.assertIn("'rb'", str(cm.exception))

    def test_unsupported_source(self):
        with self.assertRaises(TypeError):
            as_byte_stream(42)


class TestOpenReader(unittest.TestCase):
    """Test open_reader() with paths and streams."""

    def setUp(self):
        handle, self.path = tempfile.mkstemp(suffix=".json")
        with os.fdopen(handle, "wb") as f:
            f.write(b'{"name": "demo", "values": [1, 2, 3]}')

    def tearDown(self):
        os.remove(self.path)

    def test_path_is_opened_and_closed(self):
        with open_reader(Path(self.path)) as reader:
            values = []
            for key in reader.iter_items():
                if key == b"values":
                    values = [reader.read_integer() for _ in reader.iter_array()]
                else:
                    reader.skip_value()
            reader.finish()
            stream = reader.cursor.stream

        self.assertEqual(values, [1, 2, 3])
        self.assertFalse(reader.failed)
        self.assertTrue(stream.closed)

    def test_open_file_is_borrowed(self):
        with open(self.path, "rb") as f:
            with open_reader(f) as reader:
                reader.table_begin()
                reader.table_can_read()
                self.assertTrue(reader.key_equals("name"))
            self.assertFalse(f.closed)


if __name__ == '__main__':
    unittest.main()
