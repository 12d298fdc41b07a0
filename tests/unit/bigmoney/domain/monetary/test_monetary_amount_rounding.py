from decimal import Decimal

import pytest

from bigmoney.domain.monetary.currency_registry import EUR
from bigmoney.domain.monetary.errors import InvalidArgumentError, UnimplementedRoundingError
from bigmoney.domain.monetary.monetary_amount import MonetaryAmount
from bigmoney.domain.monetary.rounding_mode import RoundingMode


def eur(units) -> MonetaryAmount:
    return MonetaryAmount(Decimal(units), EUR)


# region Multiplication


def test_multiplication():
    m = eur(1)

    assert m.multiply(1.5) == eur(2)
    assert m.multiply(1.5, RoundingMode.ROUND_HALF_UP) == eur(2)
    assert m.multiply(1.5, RoundingMode.ROUND_HALF_DOWN) == eur(1)
    assert m.multiply(2) is not m
    assert m.amount == Decimal(1)


def test_multiplication_with_negative_product():
    m = eur(-3)

    # Ceiling and floor, not "away from zero"
    assert m.multiply(Decimal("0.5"), RoundingMode.ROUND_HALF_UP) == eur(-1)
    assert m.multiply(Decimal("0.5"), RoundingMode.ROUND_HALF_DOWN) == eur(-2)


def test_multiplication_is_exact():
    # 10 * 0.1 is exactly 1: the float factor goes through its repr, not its binary value
    assert eur(10).multiply(0.1) == eur(1)
    assert eur(10).multiply(Decimal("0.1"), RoundingMode.ROUND_HALF_DOWN) == eur(1)

    big = MonetaryAmount.from_int(10**40 + 1, EUR)
    assert big.multiply(3).amount == Decimal(3 * 10**40 + 3)


def test_multiplication_operator_uses_default_rounding():
    assert eur(1) * 1.5 == eur(2)
    assert 1.5 * eur(1) == eur(2)
    with pytest.raises(TypeError):
        _ = eur(1) * eur(2)
    with pytest.raises(TypeError):
        _ = eur(1) * "2"


def test_multiplication_rejects_invalid_operand():
    for invalid in ("2", True, None, float("nan"), float("inf"), [2]):
        with pytest.raises(InvalidArgumentError):
            eur(1).multiply(invalid)  # type: ignore[arg-type]


def test_multiplication_rejects_invalid_rounding_mode():
    with pytest.raises(InvalidArgumentError):
        eur(1).multiply(2, "ROUND_HALF_UP")  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        eur(1).multiply(2, 1)  # type: ignore[arg-type]


def test_multiplication_unimplemented_rounding_modes():
    for mode in (RoundingMode.ROUND_HALF_EVEN, RoundingMode.ROUND_HALF_ODD):
        with pytest.raises(UnimplementedRoundingError) as exc_info:
            eur(1).multiply(2, mode)
        assert exc_info.value.rounding_mode is mode
        assert exc_info.value.operation == "multiply"
        assert isinstance(exc_info.value, NotImplementedError)


def test_multiplication_validates_operand_before_rounding_mode():
    with pytest.raises(InvalidArgumentError):
        eur(1).multiply("2", RoundingMode.ROUND_HALF_EVEN)  # type: ignore[arg-type]


# endregion

# region Division


def test_division():
    m = eur(10)

    assert m.divide(3) == eur(3)
    assert m.divide(2) is not m
    assert m.divide(2) == eur(5)
    assert m.amount == Decimal(10)


def test_division_round_half_up():
    # Ceiling only when the fractional part is strictly above one half
    assert eur(11).divide(4, RoundingMode.ROUND_HALF_UP) == eur(3)  # 2.75
    assert eur(10).divide(4, RoundingMode.ROUND_HALF_UP) == eur(2)  # 2.5
    assert eur(10).divide(3, RoundingMode.ROUND_HALF_UP) == eur(3)  # 3.33


def test_division_round_half_down():
    # Ceiling when the fractional part is strictly below one half, floor otherwise
    assert eur(10).divide(3, RoundingMode.ROUND_HALF_DOWN) == eur(4)  # 3.33
    assert eur(10).divide(4, RoundingMode.ROUND_HALF_DOWN) == eur(2)  # 2.5
    assert eur(11).divide(4, RoundingMode.ROUND_HALF_DOWN) == eur(2)  # 2.75
    assert eur(10).divide(2, RoundingMode.ROUND_HALF_DOWN) == eur(5)  # exact


def test_division_with_negative_quotient_uses_fraction_magnitude():
    # -3.33: fraction magnitude 0.33 <= 0.5 -> floor
    assert eur(-10).divide(3, RoundingMode.ROUND_HALF_UP) == eur(-4)
    # -2.75: fraction magnitude 0.75 > 0.5 -> ceil
    assert eur(-11).divide(4, RoundingMode.ROUND_HALF_UP) == eur(-2)
    # -3.33 with ROUND_HALF_DOWN: 0.33 < 0.5 -> ceil
    assert eur(10).divide(-3, RoundingMode.ROUND_HALF_DOWN) == eur(-3)


def test_division_by_fractional_divisors():
    assert eur(10).divide(Decimal("0.5")) == eur(20)
    assert eur(10).divide(0.4) == eur(25)
    assert eur(1).divide(Decimal("3E-30")).amount == Decimal(333333333333333333333333333333)


def test_division_operator_uses_default_rounding():
    assert eur(10) / 3 == eur(3)
    with pytest.raises(TypeError):
        _ = eur(10) / eur(3)
    with pytest.raises(TypeError):
        _ = 10 / eur(3)


def test_division_by_zero():
    with pytest.raises(ZeroDivisionError):
        eur(10).divide(0)
    with pytest.raises(ZeroDivisionError):
        eur(10).divide(Decimal("0.00"))


def test_division_rejects_invalid_arguments():
    with pytest.raises(InvalidArgumentError):
        eur(10).divide("3")  # type: ignore[arg-type]
    with pytest.raises(InvalidArgumentError):
        eur(10).divide(3, None)  # type: ignore[arg-type]


def test_division_unimplemented_rounding_modes():
    with pytest.raises(UnimplementedRoundingError):
        eur(10).divide(4, RoundingMode.ROUND_HALF_EVEN)
    with pytest.raises(UnimplementedRoundingError):
        eur(10).divide(3, RoundingMode.ROUND_HALF_ODD)


# endregion
