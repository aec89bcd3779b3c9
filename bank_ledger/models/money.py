"""Exact monetary amounts.

Money is an immutable, non-negative ``Decimal`` quantised to cents. It never
touches ``float``: binary floating point cannot represent most decimal
fractions, so floats are rejected outright instead of being converted.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from typing import Union

from bank_ledger.exceptions import (
    InsufficientFundsError,
    InvalidAmountError,
    LedgerOverflowError,
)

CENT = Decimal("0.01")
MAX_AMOUNT = Decimal("999999999999.99")

MoneyLike = Union["Money", Decimal, int, str]


@dataclass(frozen=True, order=True)
class Money:
    """Non-negative amount with exactly two fractional digits."""

    amount: Decimal

    def __post_init__(self) -> None:
        value = self.amount
        if isinstance(value, bool) or not isinstance(value, Decimal):
            raise InvalidAmountError(f"Amount must be a Decimal, got {type(value).__name__}")
        if not value.is_finite():
            raise InvalidAmountError(f"Amount must be finite: {value}")
        if value < 0:
            raise InvalidAmountError(f"Amount cannot be negative: {value}")
        if value.as_tuple().exponent < -2:
            raise InvalidAmountError(f"Amount has more than two fractional digits: {value}")
        if value > MAX_AMOUNT:
            raise InvalidAmountError(f"Amount exceeds the supported maximum: {value}")
        # -0 and 1E+2 both normalise to the canonical cent representation
        object.__setattr__(self, "amount", abs(value).quantize(CENT))

    @classmethod
    def zero(cls) -> "Money":
        return cls(Decimal("0"))

    @classmethod
    def parse(cls, text: str) -> "Money":
        """Build Money from a decimal string such as ``"12.50"``."""
        if not isinstance(text, str) or not text.strip():
            raise InvalidAmountError("Amount must be a non-empty decimal string")
        try:
            value = Decimal(text.strip())
        except InvalidOperation:
            raise InvalidAmountError(f"Cannot convert '{text}' to an amount") from None
        return cls(value)

    @classmethod
    def from_minor(cls, minor_units: int) -> "Money":
        """Build Money from an integer number of cents."""
        if isinstance(minor_units, bool) or not isinstance(minor_units, int):
            raise InvalidAmountError("Minor units must be an integer")
        return cls(Decimal(minor_units).scaleb(-2))

    @classmethod
    def of(cls, value: MoneyLike) -> "Money":
        """Coerce a driver-supplied value into Money.

        Accepts Money (returned as is), ``Decimal``, whole-unit ``int`` and
        decimal strings. ``float`` and ``bool`` are rejected.
        """
        if isinstance(value, Money):
            return value
        if isinstance(value, str):
            return cls.parse(value)
        if isinstance(value, bool):
            raise InvalidAmountError("Amount cannot be a boolean")
        if isinstance(value, int):
            return cls(Decimal(value))
        if isinstance(value, Decimal):
            return cls(value)
        raise InvalidAmountError(f"Unsupported amount type: {type(value).__name__}")

    def __add__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        total = self.amount + other.amount
        if total > MAX_AMOUNT:
            raise LedgerOverflowError(f"{self} + {other} exceeds the supported maximum")
        return Money(total)

    def __sub__(self, other: "Money") -> "Money":
        if not isinstance(other, Money):
            return NotImplemented
        difference = self.amount - other.amount
        if difference < 0:
            raise InsufficientFundsError(f"Cannot subtract {other} from {self}")
        return Money(difference)

    def is_zero(self) -> bool:
        return self.amount == 0

    def is_positive(self) -> bool:
        return self.amount > 0

    def to_minor(self) -> int:
        """Amount in cents."""
        return int(self.amount.scaleb(2))

    def __str__(self) -> str:
        return f"{self.amount:.2f}"
