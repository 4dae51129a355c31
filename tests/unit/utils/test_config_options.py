"""
Test cases for ReaderConfig.
"""

import logging
import unittest

from jsoncursor import ReaderConfig, open_reader
from jsoncursor.utils.config import ParseLimits


class TestReaderConfig(unittest.TestCase):
    """Test defaults and validation."""

    def test_defaults(self):
        config = ReaderConfig()
        self.assertTrue(config.strict_commas)
        self.assertFalse(config.lenient_numbers)
        self.assertEqual(config.string_buffer_size, 8 * 1024)
        self.assertTrue(config.diagnostics)
        self.assertEqual(config.context_radius, 40)
        self.assertEqual(config.limits, ParseLimits())
        self.assertIsNone(config.logger)

    def test_invalid_values(self):
        with self.assertRaises(ValueError):
            ReaderConfig(string_buffer_size=0)
        with self.assertRaises(ValueError):
            ReaderConfig(context_radius=-1)

    def test_custom_limits_are_kept(self):
        limits = ParseLimits(max_nesting_depth=4)
        self.assertIs(ReaderConfig(limits=limits).limits, limits)

    def test_context_radius_applies(self):
        reader = open_reader(b"[" + b"1," * 20 + b"x]", ReaderConfig(context_radius=5))
        reader.skip_value()
        self.assertEqual(reader.error.context.context_before, ",1,1,")


class TestReaderLogging(unittest.TestCase):
    """Test the logger hook."""

    def test_custom_logger_receives_debug_messages(self):
        logger = logging.getLogger("jsoncursor.tests.custom")
        with self.assertLogs(logger, level="DEBUG") as logs:
            reader = open_reader(b"[x]", ReaderConfig(logger=logger))
            reader.skip_value()

        output = "\n".join(logs.output)
        self.assertIn("Reader initialised", output)
        self.assertIn("Latched decode error", output)

    def test_truncation_is_logged(self):
        with self.assertLogs("jsoncursor.core.reader", level="DEBUG") as logs:
            reader = open_reader(b'"abcdef"', ReaderConfig(string_buffer_size=2))
            self.assertEqual(reader.read_string(), b"ab")
        self.assertTrue(any("Truncating string" in line for line in logs.output))


if __name__ == '__main__':
    unittest.main()
