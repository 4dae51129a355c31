"""
Integration tests driven by the JSON_checker conformance documents.

Every document is consumed with skip_value() followed by finish(), the
generic path any caller can fall back on.
"""

import unittest

from jsoncursor import open_reader

PASS_DOCUMENTS = {
    "pass1": b"""[
    "JSON Test Pattern pass1",
    {"object with 1 member":["array with 1 element"]},
    {},
    [],
    -42,
    true,
    false,
    null,
    {
        "integer": 1234567890,
        "real": -9876.543210,
        "e": 0.123456789e-12,
        "E": 1.234567890E+34,
        "":  23456789012E66,
        "zero": 0,
        "one": 1,
        "space": " ",
        "quote": "\\"",
        "backslash": "\\\\",
        "controls": "\\b\\f\\n\\r\\t",
        "slash": "/ & \\/",
        "alpha": "abcdefghijklmnopqrstuvwyz",
        "ALPHA": "ABCDEFGHIJKLMNOPQRSTUVWYZ",
        "digit": "0123456789",
        "0123456789": "digit",
        "special": "`1~!@#$%^&*()_+-={':[,]}|;.</>?",
        "hex": "\\u0123\\u4567\\u89AB\\uCDEF\\uabcd\\uef4A",
        "true": true,
        "false": false,
        "null": null,
        "array":[  ],
        "object":{  },
        "address": "50 St. James Street",
        "url": "http://www.JSON.org/",
        "comment": "// /* <!-- --",
        "# -- --> */": " ",
        " s p a c e d " :[1,2 , 3

,

4 , 5        ,          6           ,7        ],"compact":[1,2,3,4,5,6,7],
        "jsontext": "{\\"object with 1 member\\":[\\"array with 1 element\\"]}",
        "quotes": "&#34; \\u0022 %22 0x22 034 &#x22;",
        "\\/\\\\\\"\\uCAFE\\uBABE\\uAB98\\uFCDE\\ubcda\\uef4A\\b\\f\\n\\r\\t`1~!@#$%^&*()_+-=[]{}|;:',./<>?"
: "A key can be any string"
    },
    0.5 ,98.6
,
99.44
,

1066,
1e1,
0.1e1,
1e-1,
1e00,2e+00,2e-00
,"rosebud"]""",
    "pass2": b'[[[[[[[[[[[[[[[[[[["Not too deep"]]]]]]]]]]]]]]]]]]]',
    "pass3": b"""{
    "JSON Test Pattern pass3": {
        "The outermost value": "must be an object or array.",
        "In this test": "It is an object."
    }
}
""",
}

FAIL_DOCUMENTS = {
    "fail2": b'["Unclosed array"',
    "fail3": b'{unquoted_key: "keys must be quoted"}',
    "fail4": b'["extra comma",]',
    "fail5": b'["double extra comma",,]',
    "fail6": b'[   , "<-- missing value"]',
    "fail7": b'["Comma after the close"],',
    "fail8": b'["Extra close"]]',
    "fail9": b'{"Extra comma": true,}',
    "fail10": b'{"Extra value after close": true} "misplaced quoted value"',
    "fail11": b'{"Illegal expression": 1 + 2}',
    "fail12": b'{"Illegal invocation": alert()}',
    "fail13": b'{"Numbers cannot have leading zeroes": 013}',
    "fail14": b'{"Numbers cannot be hex": 0x14}',
    "fail16": b"[\\naked]",
    "fail19": b'{"Missing colon" null}',
    "fail20": b'{"Double colon":: null}',
    "fail21": b'{"Comma instead of colon", null}',
    "fail22": b'["Colon instead of comma": false]',
    "fail23": b'["Bad value", truth]',
    "fail24": b"['single quote']",
    "fail25": b'["\ttab\tcharacter\tin\tstring\t"]',
    "fail27": b'["line\nbreak"]',
    "fail28": b'["line\\\nbreak"]',
    "fail29": b"[0e]",
    "fail30": b"[0e+]",
    "fail31": b"[0e+-1]",
    "fail32": b'{"Comma instead if closing brace": true,',
    "fail33": b'["mismatch"}',
}

# Documents the checker rejects but this decoder accepts: any root value is
# allowed, escapes are not validated, raw control bytes other than
# BS/FF/LF/CR/TAB pass through and the default depth limit is 256.
ACCEPTED_DOCUMENTS = {
    "fail1": b'"A JSON payload should be an object or array, not a string."',
    "fail15": b'["Illegal backslash escape: \\x15"]',
    "fail17": b'["Illegal backslash escape: \\017"]',
    "fail18": b'[[[[[[[[[[[[[[[[[[[["Too deep"]]]]]]]]]]]]]]]]]]]]',
    "fail26": b'["tab\\   character\\   in\\  string\\  "]',
    "raw_unit_separator": b'["\x1f"]',
}


def consume(data):
    reader = open_reader(data)
    reader.skip_value()
    reader.finish()
    return reader


class TestJsonChecker(unittest.TestCase):
    """Run the conformance documents through skip_value()."""

    def test_pass_documents(self):
        for name, data in PASS_DOCUMENTS.items():
            with self.subTest(name=name):
                reader = consume(data)
                self.assertFalse(reader.failed, reader.diagnostic)

    def test_fail_documents(self):
        for name, data in FAIL_DOCUMENTS.items():
            with self.subTest(name=name):
                reader = consume(data)
                self.assertTrue(reader.failed, name)
                self.assertIsNotNone(reader.error.position)

    def test_documents_accepted_by_design(self):
        for name, data in ACCEPTED_DOCUMENTS.items():
            with self.subTest(name=name):
                reader = consume(data)
                self.assertFalse(reader.failed, reader.diagnostic)

    def test_skip_stops_after_value(self):
        """Nested skipping leaves the cursor after the value and its comma."""
        reader = open_reader(b'[{"a": [1, {"b": []}]}, 42]')
        reader.array_begin()
        self.assertTrue(reader.array_can_read())
        reader.skip_value()
        self.assertTrue(reader.array_can_read())
        self.assertEqual(reader.read_integer(), 42)
        self.assertFalse(reader.array_can_read())
        reader.finish()
        self.assertFalse(reader.failed)


if __name__ == '__main__':
    unittest.main()
