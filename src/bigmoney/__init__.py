__version__ = "0.0.1"

from bigmoney.domain.monetary.currency import Currency
from bigmoney.domain.monetary.errors import InvalidArgumentError, UnimplementedRoundingError
from bigmoney.domain.monetary.monetary_amount import MonetaryAmount
from bigmoney.domain.monetary.rounding_mode import RoundingMode
from bigmoney.utils.units_parser import string_to_units

__all__ = [
    "Currency",
    "InvalidArgumentError",
    "MonetaryAmount",
    "RoundingMode",
    "UnimplementedRoundingError",
    "string_to_units",
]
