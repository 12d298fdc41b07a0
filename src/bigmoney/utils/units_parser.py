"""Parser turning human-entered decimal text into an integer count of minor units.

Accepted shape: optional sign (`+`/`-`), zero or more digits, an optional single separator
(`.` or `,`), then at most two further digits. The result always assumes exactly two minor-unit
digits; it does not consult any currency.
"""

from __future__ import annotations

from decimal import Decimal
from enum import Enum

from bigmoney.domain.monetary.errors import InvalidArgumentError

MINOR_UNIT_DIGITS = 2

_DIGITS = frozenset("0123456789")
_SIGNS = frozenset("+-")
_SEPARATORS = frozenset(".,")


class _ParserState(Enum):
    """Position of the parser within the accepted shape."""

    START = "START"  # Nothing consumed yet; a sign is still allowed
    INTEGER = "INTEGER"  # Consuming integer digits
    FRACTION = "FRACTION"  # Separator consumed; consuming fractional digits


def string_to_units(value: str) -> int:
    """Convert decimal text such as "-12,5" or ".99" into minor units (-1250, 99).

    Surrounding whitespace is ignored. Missing fractional digits count as zero and a missing sign
    means positive, so "1000" -> 100000, "0.01" -> 1 and "-.99" -> -99. Text made of nothing but
    a sign and/or separator (including "") yields 0.

    Args:
        value: Text to parse.

    Returns:
        Amount expressed in minor units.

    Raises:
        InvalidArgumentError: If $value is not a string or does not have the accepted shape.
    """
    if not isinstance(value, str):
        raise InvalidArgumentError(f"Cannot call `string_to_units` because $value must be a string, but provided value is: {value!r}")

    text = value.strip()
    state = _ParserState.START
    negative = False
    integer_digits: list[str] = []
    fraction_digits: list[str] = []

    for char in text:
        if state is _ParserState.START and char in _SIGNS:
            negative = char == "-"
            state = _ParserState.INTEGER
        elif state is not _ParserState.FRACTION and char in _DIGITS:
            integer_digits.append(char)
            state = _ParserState.INTEGER
        elif state is not _ParserState.FRACTION and char in _SEPARATORS:
            state = _ParserState.FRACTION
        elif state is _ParserState.FRACTION and char in _DIGITS and len(fraction_digits) < MINOR_UNIT_DIGITS:
            fraction_digits.append(char)
        else:
            # Raise: anything outside the accepted shape
            raise InvalidArgumentError(f"The value could not be parsed as money: {value!r}")

    fraction_digits.extend("0" * (MINOR_UNIT_DIGITS - len(fraction_digits)))
    # Decimal -> int conversion is exact and not capped by the int-from-str digit limit
    units = int(Decimal("".join(integer_digits) + "".join(fraction_digits)))
    return -units if negative else units
