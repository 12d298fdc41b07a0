from __future__ import annotations

import logging
import math
from collections.abc import Sequence
from decimal import Decimal, InvalidOperation
from fractions import Fraction

from bigmoney.domain.monetary import currency_registry  # noqa: F401  (registers predefined currencies)
from bigmoney.domain.monetary.currency import Currency
from bigmoney.domain.monetary.errors import InvalidArgumentError, UnimplementedRoundingError
from bigmoney.domain.monetary.rounding_mode import DEFAULT_ROUNDING_MODE, RoundingMode
from bigmoney.utils.decimal_tools import (
    HALF,
    NumericOperand,
    ceil_to_decimal,
    exact_add,
    exact_subtract,
    floor_to_decimal,
    fractional_part,
    is_integral,
    is_numeric_operand,
    operand_to_decimal,
    to_fraction,
)
from bigmoney.utils.units_parser import string_to_units

logger = logging.getLogger(__name__)


class MonetaryAmount:
    """Immutable monetary value: an exact Decimal $amount paired with a $currency.

    The type is unit-agnostic: $amount is expressed in whatever unit the caller chose
    (usually the currency's minor unit, e.g. cents). No rounding or quantization happens
    on construction and no operation ever goes through binary floating point.

    Every binary operation requires both operands to share the same currency and raises
    `InvalidArgumentError` otherwise. Arithmetic always returns a new instance.
    """

    __slots__ = ("_amount", "_currency")

    def __init__(self, amount: Decimal, currency: Currency):
        """Initialize MonetaryAmount with an exact amount and a currency.

        Args:
            amount (Decimal): Finite Decimal amount.
            currency (Currency): Currency tag.

        Raises:
            InvalidArgumentError: If $amount is not a finite Decimal or $currency is not a Currency.
        """
        # Raise: currency must be an instance of Currency
        if not isinstance(currency, Currency):
            raise InvalidArgumentError(f"$currency must be a Currency instance, but provided value is: {currency!r}")

        # Raise: amount must be an exact Decimal; use the factories for int, float and str
        if not isinstance(amount, Decimal):
            raise InvalidArgumentError(f"$amount must be a Decimal, but provided value is: {amount!r} ({type(amount).__name__})")
        if not amount.is_finite():
            raise InvalidArgumentError(f"$amount must be finite, but provided value is: {amount}")

        self._amount = amount
        self._currency = currency

    # region Factories

    @classmethod
    def from_int(cls, amount: int, currency: Currency) -> MonetaryAmount:
        """Create an amount from an integer count of units (e.g. cents).

        Raises:
            InvalidArgumentError: If $amount is not an `int` (`bool` is rejected too).
        """
        if isinstance(amount, bool) or not isinstance(amount, int):
            raise InvalidArgumentError(
                f"Cannot call `from_int` because $amount must be an integer expressed in the smallest units of currency (eg cents), but provided value is: {amount!r}"
            )
        return cls(Decimal(amount), currency)

    @classmethod
    def from_float(cls, amount: float, currency: Currency) -> MonetaryAmount:
        """Create an amount from a float that carries no fractional part.

        Floats above 2**53 cannot represent every integer, so the value received here may
        already differ from what the caller wrote. Prefer `from_int` or `from_decimal_str`.

        Raises:
            InvalidArgumentError: If $amount is not a finite float or has a fractional part.
        """
        if not isinstance(amount, float):
            raise InvalidArgumentError(f"Cannot call `from_float` because $amount must be a float, but provided value is: {amount!r}")
        if not math.isfinite(amount):
            raise InvalidArgumentError(f"Cannot call `from_float` because $amount must be finite, but provided value is: {amount!r}")
        if not amount.is_integer():
            raise InvalidArgumentError(f"Cannot call `from_float` because $amount can not contain decimals, but provided value is: {amount!r}")
        return cls(Decimal(int(amount)), currency)

    @classmethod
    def from_decimal_str(cls, amount: str, currency: Currency) -> MonetaryAmount:
        """Create an amount from decimal text already expressed in units, e.g. "2500" or "2500.00".

        Raises:
            InvalidArgumentError: If $amount is not a string, is not a finite decimal number
                or has a non-zero fractional part.
        """
        if not isinstance(amount, str):
            raise InvalidArgumentError(f"Cannot call `from_decimal_str` because $amount must be a string, but provided value is: {amount!r}")

        text = amount.strip()

        # Raise: only ASCII digits, as in `string_to_units`; Decimal would also take "1_000" and "٣"
        if "_" in text or not text.isascii():
            raise InvalidArgumentError(f"Cannot call `from_decimal_str` because $amount ('{amount}') contains characters other than ASCII digits, sign, point or exponent")

        try:
            decimal_amount = Decimal(text)
        except InvalidOperation as e:
            raise InvalidArgumentError(f"Cannot call `from_decimal_str` because $amount ('{amount}') is not a decimal number") from e

        if not decimal_amount.is_finite():
            raise InvalidArgumentError(f"Cannot call `from_decimal_str` because $amount ('{amount}') must be finite")
        if not is_integral(decimal_amount):
            raise InvalidArgumentError(f"Cannot call `from_decimal_str` because $amount ('{amount}') can not contain decimals")

        return cls(Decimal(int(decimal_amount)), currency)

    @classmethod
    def of(cls, currency_code: str, amount: int) -> MonetaryAmount:
        """Shorthand: `MonetaryAmount.of("EUR", 25)` is 25 units of the registered EUR currency.

        Raises:
            InvalidArgumentError: If $currency_code is unknown or $amount is not an integer.
        """
        try:
            currency = Currency.from_str(currency_code)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot call `of` because $currency_code ({currency_code!r}) is not a known currency") from e
        return cls.from_int(amount, currency)

    @staticmethod
    def string_to_units(value: str) -> int:
        """Parse text such as "12.50" into minor units (1250). See `units_parser.string_to_units`."""
        return string_to_units(value)

    # endregion

    # region Accessors

    @property
    def amount(self) -> Decimal:
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._currency

    # endregion

    # region Comparison

    def is_same_currency(self, other: MonetaryAmount) -> bool:
        self._check_amount("is_same_currency", other)
        return self._currency == other._currency

    def equals(self, other: MonetaryAmount) -> bool:
        """Return True when both currency and numeric amount are equal (`100` equals `100.00`)."""
        return self.is_same_currency(other) and self._amount == other._amount

    def compare(self, other: MonetaryAmount) -> int:
        """Return -1, 0 or 1 as this amount is less than, equal to or greater than $other.

        Raises:
            InvalidArgumentError: If $other is not a MonetaryAmount or has a different currency.
        """
        self._check_same_currency("compare", other)
        if self._amount < other._amount:
            return -1
        elif self._amount == other._amount:
            return 0
        else:
            return 1

    def greater_than(self, other: MonetaryAmount) -> bool:
        return self.compare(other) == 1

    def greater_than_or_equal(self, other: MonetaryAmount) -> bool:
        return self.compare(other) >= 0

    def less_than(self, other: MonetaryAmount) -> bool:
        return self.compare(other) == -1

    def less_than_or_equal(self, other: MonetaryAmount) -> bool:
        return self.compare(other) <= 0

    def is_zero(self) -> bool:
        return self._amount == 0

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_negative(self) -> bool:
        return self._amount < 0

    # endregion

    # region Arithmetic

    def add(self, addend: MonetaryAmount) -> MonetaryAmount:
        self._check_same_currency("add", addend)
        return self._with_amount(exact_add(self._amount, addend._amount))

    def subtract(self, subtrahend: MonetaryAmount) -> MonetaryAmount:
        self._check_same_currency("subtract", subtrahend)
        return self._with_amount(exact_subtract(self._amount, subtrahend._amount))

    def multiply(self, factor: NumericOperand, rounding_mode: RoundingMode = DEFAULT_ROUNDING_MODE) -> MonetaryAmount:
        """Multiply by $factor and round the exact product to a whole number of units.

        ROUND_HALF_UP takes the ceiling of the product, ROUND_HALF_DOWN the floor.

        Args:
            factor: int, float or Decimal multiplier.
            rounding_mode: How to bring the product back to whole units.

        Returns:
            MonetaryAmount: New instance in the same currency.

        Raises:
            InvalidArgumentError: If $factor is not a supported number or $rounding_mode is not a RoundingMode.
            UnimplementedRoundingError: For ROUND_HALF_EVEN and ROUND_HALF_ODD.
        """
        factor_value = self._to_operand("multiply", "factor", factor)
        self._check_rounding_mode("multiply", rounding_mode)

        product = to_fraction(self._amount) * to_fraction(factor_value)

        match rounding_mode:
            case RoundingMode.ROUND_HALF_UP:
                result = ceil_to_decimal(product)
            case RoundingMode.ROUND_HALF_DOWN:
                result = floor_to_decimal(product)
            case RoundingMode.ROUND_HALF_EVEN | RoundingMode.ROUND_HALF_ODD:
                raise UnimplementedRoundingError("multiply", rounding_mode)

        return self._with_amount(result)

    def divide(self, divisor: NumericOperand, rounding_mode: RoundingMode = DEFAULT_ROUNDING_MODE) -> MonetaryAmount:
        """Divide by $divisor and round the exact quotient to a whole number of units.

        The rounding looks only at the magnitude of the fractional part of the quotient,
        `abs(q) - floor(abs(q))`, and then picks `ceil(q)` or `floor(q)`:

        - ROUND_HALF_UP: ceil when that fraction is > 0.5, otherwise floor.
        - ROUND_HALF_DOWN: ceil when that fraction is < 0.5, otherwise floor.

        Because the test ignores the sign, negative quotients round differently from
        "half away from zero" (e.g. -10 / 3 with ROUND_HALF_UP gives -4).

        Raises:
            InvalidArgumentError: If $divisor is not a supported number or $rounding_mode is not a RoundingMode.
            UnimplementedRoundingError: For ROUND_HALF_EVEN and ROUND_HALF_ODD.
            ZeroDivisionError: If $divisor is zero.
        """
        divisor_value = self._to_operand("divide", "divisor", divisor)
        self._check_rounding_mode("divide", rounding_mode)

        # Raise: division by zero
        if divisor_value == 0:
            raise ZeroDivisionError(f"Cannot call `divide` because $divisor is zero for {self!r}")

        quotient = to_fraction(self._amount) / to_fraction(divisor_value)
        remainder = fractional_part(quotient)

        match rounding_mode:
            case RoundingMode.ROUND_HALF_UP:
                result = ceil_to_decimal(quotient) if remainder > HALF else floor_to_decimal(quotient)
            case RoundingMode.ROUND_HALF_DOWN:
                result = ceil_to_decimal(quotient) if remainder < HALF else floor_to_decimal(quotient)
            case RoundingMode.ROUND_HALF_EVEN | RoundingMode.ROUND_HALF_ODD:
                raise UnimplementedRoundingError("divide", rounding_mode)

        return self._with_amount(result)

    def allocate(self, ratios: Sequence[NumericOperand]) -> list[MonetaryAmount]:
        """Split this amount into parts proportional to $ratios, preserving the exact total.

        Each part first gets `floor(amount * ratio / total)`. The units lost to flooring
        (fewer than `len(ratios)`) are then handed out one by one starting with the first
        part, in the order of $ratios. Order matters: `[3, 7]` and `[7, 3]` give
        different results for 5 units.

        Args:
            ratios: Non-empty sequence of non-negative int, float or Decimal weights with a positive sum.

        Returns:
            list[MonetaryAmount]: One part per ratio, same order; parts always sum to this amount.

        Raises:
            InvalidArgumentError: If $ratios is invalid or this amount is not a whole number of units.
        """
        weights = self._to_weights(ratios)

        # Raise: leftover units are redistributed one at a time, so the total must be whole
        if not is_integral(self._amount):
            raise InvalidArgumentError(f"Cannot call `allocate` because $amount ({self._amount}) is not a whole number of units")

        total_weight = sum(weights)
        amount = to_fraction(self._amount)

        shares = [math.floor(amount * weight / total_weight) for weight in weights]
        remainder = int(self._amount) - sum(shares)

        logger.debug(f"Allocating {self} over {len(shares)} part(s); {remainder} leftover unit(s) go to the first parts")

        i = 0
        while remainder > 0:
            shares[i] += 1
            remainder -= 1
            i += 1

        return [self._with_amount(Decimal(share)) for share in shares]

    # endregion

    # region Validation helpers

    def _with_amount(self, amount: Decimal) -> MonetaryAmount:
        return self.__class__(amount, self._currency)

    @staticmethod
    def _check_amount(operation: str, other: object) -> None:
        if not isinstance(other, MonetaryAmount):
            raise InvalidArgumentError(f"Cannot call `{operation}` because $other must be a MonetaryAmount, but provided value is: {other!r}")

    def _check_same_currency(self, operation: str, other: MonetaryAmount) -> None:
        """Raise InvalidArgumentError unless $other is a MonetaryAmount in this currency."""
        self._check_amount(operation, other)
        if self._currency != other._currency:
            raise InvalidArgumentError(f"Cannot call `{operation}` on different currencies: {self._currency} and {other._currency}")

    @staticmethod
    def _to_operand(operation: str, name: str, value: NumericOperand) -> Decimal:
        try:
            return operand_to_decimal(value)
        except (TypeError, ValueError) as e:
            raise InvalidArgumentError(f"Cannot call `{operation}` because ${name} should be an integer, a float or a Decimal: {e}") from e

    @staticmethod
    def _check_rounding_mode(operation: str, rounding_mode: RoundingMode) -> None:
        if not isinstance(rounding_mode, RoundingMode):
            allowed = " | ".join(mode.name for mode in RoundingMode)
            raise InvalidArgumentError(f"Cannot call `{operation}` because $rounding_mode should be {allowed}, but provided value is: {rounding_mode!r}")

    @classmethod
    def _to_weights(cls, ratios: Sequence[NumericOperand]) -> list[Fraction]:
        # Raise: ratios must be a non-empty ordered sequence
        if isinstance(ratios, (str, bytes)) or not isinstance(ratios, Sequence):
            raise InvalidArgumentError(f"Cannot call `allocate` because $ratios must be a sequence of numbers, but provided value is: {ratios!r}")
        if len(ratios) == 0:
            raise InvalidArgumentError("Cannot call `allocate` because $ratios is empty")

        weights = [to_fraction(cls._to_operand("allocate", "ratios", ratio)) for ratio in ratios]

        # Raise: negative ratios or a zero total would make the shares meaningless
        if any(weight < 0 for weight in weights):
            raise InvalidArgumentError(f"Cannot call `allocate` because $ratios must not contain negative values: {list(ratios)}")
        if sum(weights) <= 0:
            raise InvalidArgumentError(f"Cannot call `allocate` because the sum of $ratios must be positive: {list(ratios)}")

        return weights

    # endregion

    # region Python protocol

    def __eq__(self, other) -> bool:
        if not isinstance(other, MonetaryAmount):
            return False
        return self.equals(other)

    def __hash__(self) -> int:
        return hash((self._amount, self._currency.code))

    def __lt__(self, other) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.less_than(other)

    def __le__(self, other) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.less_than_or_equal(other)

    def __gt__(self, other) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.greater_than(other)

    def __ge__(self, other) -> bool:
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.greater_than_or_equal(other)

    def __add__(self, other):
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.add(other)

    def __radd__(self, other):
        """Support `sum(amounts)`, whose implicit start value is the integer 0."""
        if isinstance(other, int) and not isinstance(other, bool) and other == 0:
            return self._with_amount(self._amount)
        return NotImplemented

    def __sub__(self, other):
        if not isinstance(other, MonetaryAmount):
            return NotImplemented
        return self.subtract(other)

    def __mul__(self, other):
        """Multiply by a number with the default rounding mode."""
        if not is_numeric_operand(other):
            return NotImplemented
        return self.multiply(other)

    def __rmul__(self, other):
        return self.__mul__(other)

    def __truediv__(self, other):
        """Divide by a number with the default rounding mode."""
        if not is_numeric_operand(other):
            return NotImplemented
        return self.divide(other)

    def __neg__(self):
        return self._with_amount(self._amount.copy_negate())

    def __pos__(self):
        return self._with_amount(self._amount)

    def __abs__(self):
        return self._with_amount(self._amount.copy_abs())

    def __str__(self) -> str:
        """Return string like '2500 EUR'."""
        return f"{self._amount} {self._currency.code}"

    def __repr__(self) -> str:
        """Return string like 'MonetaryAmount(2500, EUR)'."""
        return f"{self.__class__.__name__}({self._amount}, {self._currency.code})"

    # endregion
