#!/usr/bin/env python3
"""
Money Primitive Type

Immutable currency value that stores integer minor units alongside its
currency code. Prevents floating-point errors and refuses to mix currencies.
"""

from dataclasses import dataclass
from decimal import Decimal

from .currency import (
    AmountLike,
    amount_to_minor_units,
    format_amount,
    get_decimal_digits,
    minor_units_to_amount,
    normalize_currency_code,
)


class CurrencyMismatchError(ValueError):
    """Raised when Money values in different currencies are combined"""

    pass


@dataclass(frozen=True)
class Money:
    """
    Immutable money value in minor units of one currency.

    Supports positive and negative amounts. Arithmetic and ordering are only
    defined between values of the same currency.

    Examples:
        >>> lunch = Money.from_amount("45.99", "USD")
        >>> lunch.units
        4599
        >>> str(lunch)
        '$45.99'

        >>> share = Money.from_amount(33, "JPY")
        >>> (share * 2).to_amount()
        Decimal('66')

        >>> lunch + share
        Traceback (most recent call last):
        ...
        groupledger.core.money.CurrencyMismatchError: Cannot combine USD and JPY
    """

    units: int
    currency: str

    def __post_init__(self) -> None:
        object.__setattr__(self, "currency", normalize_currency_code(self.currency))
        # Validates the code against the catalog
        get_decimal_digits(self.currency)

    @classmethod
    def from_amount(cls, amount: AmountLike, currency: str) -> "Money":
        """
        Create Money from a major-unit amount, rounding to the currency's precision.

        Args:
            amount: Amount like Decimal("12.34"), "12.34" or 12
            currency: ISO currency code

        Returns:
            Money object
        """
        return cls(units=amount_to_minor_units(amount, currency), currency=currency)

    @classmethod
    def from_units(cls, units: int, currency: str) -> "Money":
        """Create Money from integer minor units."""
        return cls(units=int(units), currency=currency)

    @classmethod
    def zero(cls, currency: str) -> "Money":
        """Zero amount in a currency."""
        return cls(units=0, currency=currency)

    def to_amount(self) -> Decimal:
        """Get value as a major-unit Decimal at the currency's precision."""
        return minor_units_to_amount(self.units, self.currency)

    def abs(self) -> "Money":
        """Return absolute value of Money."""
        return Money(units=abs(self.units), currency=self.currency)

    def is_zero(self) -> bool:
        """Check for a zero amount."""
        return self.units == 0

    def _check_currency(self, other: "Money") -> None:
        if self.currency != other.currency:
            raise CurrencyMismatchError(f"Cannot combine {self.currency} and {other.currency}")

    def __add__(self, other: "Money") -> "Money":
        """Add two Money objects of the same currency."""
        self._check_currency(other)
        return Money(units=self.units + other.units, currency=self.currency)

    def __sub__(self, other: "Money") -> "Money":
        """Subtract two Money objects of the same currency."""
        self._check_currency(other)
        return Money(units=self.units - other.units, currency=self.currency)

    def __mul__(self, scalar: int) -> "Money":
        """Multiply Money by integer scalar."""
        return Money(units=self.units * scalar, currency=self.currency)

    def __neg__(self) -> "Money":
        return Money(units=-self.units, currency=self.currency)

    def __lt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.units < other.units

    def __le__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.units <= other.units

    def __gt__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.units > other.units

    def __ge__(self, other: "Money") -> bool:
        self._check_currency(other)
        return self.units >= other.units

    def __str__(self) -> str:
        """Format with the currency symbol."""
        return format_amount(self.to_amount(), self.currency)

    def __repr__(self) -> str:
        return f"Money(units={self.units}, currency={self.currency!r})"
