"""
Numeric literal scanner.

Consumes the number directly from the cursor, starting with the byte that is
already sitting in the lookahead slot, so the stream never needs push-back.
The byte that terminates the number is left unconsumed in the lookahead.
"""

from typing import Callable

from ..security.exceptions import ErrorKind, ParseError
from ..security.limits import LimitValidator
from .constants import DIGITS, DOT, EOF, EXPONENT, MINUS, PLUS, describe_byte
from .cursor import StreamCursor

ErrorFactory = Callable[[str, ErrorKind], ParseError]


class NumberScanner:
    """Scans ``-? (0 | [1-9][0-9]*) (. [0-9]+)? ([eE] [+-]? [0-9]+)?``.

    In lenient mode a leading ``+``, a missing integer part (``.5``) and
    leading zeros are accepted as well.
    """

    def __init__(
        self,
        cursor: StreamCursor,
        validator: LimitValidator,
        make_error: ErrorFactory,
        lenient: bool = False,
    ):
        self.cursor = cursor
        self.validator = validator
        self.make_error = make_error
        self.lenient = lenient
        self.text = bytearray()

    def scan(self) -> tuple[bytes, bool]:
        """Consume one numeric literal; return its text and whether it is integral."""
        self.text.clear()
        c = self.cursor.ensure()

        if c == MINUS or (self.lenient and c == PLUS):
            c = self._take()

        has_integer = c in DIGITS
        if c == ord("0"):
            c = self._take()
            if c in DIGITS and not self.lenient:
                raise self.make_error("Leading zeros not allowed", ErrorKind.NUMBER)
            c = self._take_digits()
        elif has_integer:
            c = self._take_digits()
        elif not (self.lenient and c == DOT):
            raise self._digit_expected(c)

        integral = True
        if c == DOT:
            integral = False
            c = self._take()
            if c not in DIGITS:
                raise self._digit_expected(c)
            c = self._take_digits()

        if c in EXPONENT:
            integral = False
            c = self._take()
            if c in (PLUS, MINUS):
                c = self._take()
            if c not in DIGITS:
                raise self._digit_expected(c)
            self._take_digits()

        return bytes(self.text), integral

    def _take(self) -> int:
        self.text.append(self.cursor.lookahead)
        self.validator.validate_number_length(len(self.text))
        self.cursor.advance()
        return self.cursor.ensure()

    def _take_digits(self) -> int:
        c = self.cursor.lookahead
        while c in DIGITS:
            c = self._take()
        return c

    def _digit_expected(self, c: int) -> ParseError:
        if c == EOF:
            return self.make_error("Unexpected end of input in number", ErrorKind.NUMBER)
        return self.make_error(
            f"Expected digit in number, found {describe_byte(c)}", ErrorKind.NUMBER
        )
