from enum import Enum


class RoundingMode(Enum):
    """Rounding policies accepted by `MonetaryAmount.multiply` and `MonetaryAmount.divide`.

    Only ROUND_HALF_UP and ROUND_HALF_DOWN are implemented; the other two are recognized
    but rejected with `UnimplementedRoundingError`.
    """

    ROUND_HALF_UP = "ROUND_HALF_UP"
    ROUND_HALF_DOWN = "ROUND_HALF_DOWN"
    ROUND_HALF_EVEN = "ROUND_HALF_EVEN"
    ROUND_HALF_ODD = "ROUND_HALF_ODD"


DEFAULT_ROUNDING_MODE = RoundingMode.ROUND_HALF_UP
