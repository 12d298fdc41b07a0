from __future__ import annotations

import logging

from bidict import bidict

logger = logging.getLogger(__name__)


class Currency:
    """Opaque currency tag identified by its code (e.g., "EUR").

    Two currencies are equal when their codes are equal. A currency carries no
    minor-unit or rounding information; amounts are unit-agnostic.

    Attributes:
        code (str): Upper-cased currency code.
    """

    # Class-level registry of known currencies, code <-> Currency
    _registry: bidict[str, Currency] = bidict()

    __slots__ = ("_code",)

    def __init__(self, code: str):
        """Initialize a Currency instance.

        Args:
            code (str): Currency code; surrounding whitespace is dropped and letters are upper-cased.

        Raises:
            ValueError: If $code is not a non-empty string.
        """
        if not isinstance(code, str) or not code.strip():
            raise ValueError(f"$code must be a non-empty string, but provided value is: '{code}'")

        self._code = code.upper().strip()

    @property
    def code(self) -> str:
        return self._code

    # region Registry

    @classmethod
    def register(cls, currency: Currency, overwrite: bool = False) -> None:
        """Register a currency in the global registry.

        Args:
            currency (Currency): The currency to register.
            overwrite (bool): Whether to overwrite existing currency.

        Raises:
            ValueError: If currency already exists and overwrite is False.
            TypeError: If currency is not Currency instance.
        """
        if not isinstance(currency, Currency):
            raise TypeError(f"$currency must be a Currency instance, but provided value is: {currency}")

        if currency.code in cls._registry and not overwrite:
            raise ValueError(f"Currency with code '{currency.code}' already exists in registry. Use overwrite=True to replace it.")

        # Equal currencies share a code, so an existing entry is dropped instead of updated in place
        cls._registry.pop(currency.code, None)
        cls._registry.put(currency.code, currency)
        logger.debug(f"Registered currency {currency!r}")

    @classmethod
    def unregister(cls, code: str) -> Currency:
        """Remove the currency with $code from the registry and return it.

        Raises:
            ValueError: If no currency with $code is registered.
        """
        currency = cls.from_str(code)
        del cls._registry[currency.code]
        logger.debug(f"Unregistered currency {currency!r}")
        return currency

    @classmethod
    def from_str(cls, code: str) -> Currency:
        """Get currency from registry by code (case-insensitive).

        Args:
            code (str): Currency code to look up.

        Returns:
            Currency: The currency instance.

        Raises:
            TypeError: If $code is not a string.
            ValueError: If currency code is not found in registry.
        """
        if not isinstance(code, str):
            raise TypeError(f"$code must be a string, but provided value is: {code}")

        code = code.upper().strip()
        if code not in cls._registry:
            raise ValueError(f"Currency with code '{code}' not found in registry. Available currencies: {sorted(cls._registry.keys())}")

        return cls._registry[code]

    @classmethod
    def is_registered(cls, currency: Currency) -> bool:
        """Check whether $currency (by code) is present in the registry."""
        return currency in cls._registry.inverse

    # endregion

    def __eq__(self, other) -> bool:
        """Check equality with another Currency."""
        if not isinstance(other, Currency):
            return False
        return self.code == other.code

    def __hash__(self) -> int:
        """Hash based on currency code."""
        return hash(self.code)

    def __str__(self) -> str:
        return self.code

    def __repr__(self) -> str:
        return f"{self.__class__.__name__}('{self.code}')"
