from __future__ import annotations

from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from bigmoney.domain.monetary.rounding_mode import RoundingMode


class InvalidArgumentError(ValueError):
    """Raised for malformed input, mismatched currencies or an unrecognized rounding mode."""


class UnimplementedRoundingError(NotImplementedError):
    """Raised when a recognized rounding mode is not supported by the requested operation."""

    def __init__(self, operation: str, rounding_mode: RoundingMode):
        self.operation = operation
        self.rounding_mode = rounding_mode
        super().__init__(f"Cannot call `{operation}` because $rounding_mode ({rounding_mode.name}) is not implemented")
