from __future__ import annotations

import logging
import math
from decimal import Context, Decimal, Inexact, InvalidOperation, Rounded, DivisionByZero, Overflow, MAX_PREC, MAX_EMAX, MIN_EMIN
from fractions import Fraction
from typing import TypeAlias

logger = logging.getLogger(__name__)

# Accepted operand kinds for scaling operations (multiply, divide, allocation ratios)
NumericOperand: TypeAlias = int | float | Decimal

# Use where optimal type is `Decimal`, but other types are also acceptable (and will be converted to `Decimal`)
DecimalLike: TypeAlias = Decimal | int | str | float

# Context for exact addition and subtraction: any rounding would raise instead of losing digits.
# Never installed as the thread's current context.
EXACT_CONTEXT = Context(
    prec=MAX_PREC,
    Emax=MAX_EMAX,
    Emin=MIN_EMIN,
    traps=[Inexact, Rounded, InvalidOperation, DivisionByZero, Overflow],
)

HALF = Fraction(1, 2)


def as_decimal(value: DecimalLike) -> Decimal:
    """Converts input to `Decimal` safely.

    Ensures floats are converted via string to avoid precision noise.

    Args:
        value: Input value as `DecimalLike`.

    Returns:
        Value converted to `Decimal`.
    """
    if isinstance(value, Decimal):
        return value

    return Decimal(str(value))


def is_numeric_operand(value: object) -> bool:
    """Return True if $value is one of the `NumericOperand` kinds.

    `bool` is excluded although it is an `int` subclass.
    """
    if isinstance(value, bool):
        return False
    return isinstance(value, (int, float, Decimal))


def operand_to_decimal(value: NumericOperand) -> Decimal:
    """Convert a `NumericOperand` into an exact, finite `Decimal`.

    `int` and `Decimal` are taken as they are. A `float` goes through its shortest repr,
    so `1.1` becomes `Decimal("1.1")` rather than the binary approximation. Large floats
    are already approximations of what the caller typed; that loss happens before this
    function sees them.

    Raises:
        TypeError: If $value is not a `NumericOperand`.
        ValueError: If $value is NaN or infinite.
    """
    if not is_numeric_operand(value):
        raise TypeError(f"$value must be int, float or Decimal, but provided value is: {value!r} ({type(value).__name__})")

    if isinstance(value, float):
        logger.debug(f"Converting float operand {value!r} to Decimal via its shortest repr")

    result = as_decimal(value)
    if not result.is_finite():
        raise ValueError(f"$value must be finite, but provided value is: {value!r}")
    return result


def exact_add(a: Decimal, b: Decimal) -> Decimal:
    """Return $a + $b without any rounding."""
    return EXACT_CONTEXT.add(a, b)


def exact_subtract(a: Decimal, b: Decimal) -> Decimal:
    """Return $a - $b without any rounding."""
    return EXACT_CONTEXT.subtract(a, b)


def to_fraction(value: Decimal) -> Fraction:
    """Return the exact rational value of a finite Decimal."""
    return Fraction(value)


def floor_to_decimal(value: Fraction) -> Decimal:
    return Decimal(math.floor(value))


def ceil_to_decimal(value: Fraction) -> Decimal:
    return Decimal(math.ceil(value))


def fractional_part(value: Fraction) -> Fraction:
    """Return `abs(value) - floor(abs(value))`, always in [0, 1)."""
    magnitude = abs(value)
    return magnitude - math.floor(magnitude)


def is_integral(value: Decimal) -> bool:
    """Return True if finite $value has no fractional part (`1.00` counts as integral)."""
    return value.is_finite() and value == value.to_integral_value()
