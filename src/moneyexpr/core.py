"""
core.py — Currency and Money, the leaf of every expression tree

================================================================================
DESIGN PRINCIPLES
================================================================================

1. INTEGER AMOUNTS
   Money holds a plain int. Python ints are arbitrary precision, so scaling
   and summing never overflow; there is no width to saturate or wrap.

2. NO DIRECT CROSS-CURRENCY ARITHMETIC
   Money + Money builds a Sum expression, it does not add numbers.
   Numbers are only added after every leaf has been reduced to one target
   currency by a Bank. Ordering comparisons between currencies raise
   CurrencyMismatchError.

3. IMMUTABILITY
   Frozen dataclass. Every operation returns a new instance.

4. TRUNCATING CONVERSION
   Converting through a rate divides and truncates toward zero:
   7 CHF at CHF/USD = 2 is 3 USD, -7 CHF is -3 USD (not -4).

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING

from .errors import CurrencyMismatchError
from .expression import Expression, _check_multiplier

if TYPE_CHECKING:
    from .bank import Bank


# ==============================================================================
# CURRENCY DEFINITIONS (ISO 4217)
# ==============================================================================

class Currency(Enum):
    """Supported currencies: ISO 4217 code and display name."""
    USD = ("USD", "US Dollar")
    CHF = ("CHF", "Swiss Franc")
    EUR = ("EUR", "Euro")
    GBP = ("GBP", "British Pound")

    def __init__(self, code: str, display_name: str):
        self._code = code
        self._display_name = display_name

    @property
    def code(self) -> str:
        return self._code

    @property
    def display_name(self) -> str:
        return self._display_name

    @classmethod
    def from_code(cls, code: str) -> Currency:
        """Look up a currency by ISO code, case-insensitive."""
        try:
            return cls[code.strip().upper()]
        except KeyError:
            supported = ", ".join(c.code for c in cls)
            raise ValueError(f"Unknown currency code '{code}' (supported: {supported})") from None

    def __str__(self) -> str:
        return self._code


def _truncating_div(amount: int, rate: int) -> int:
    """Integer division rounding toward zero (// rounds toward -inf)."""
    quotient = abs(amount) // abs(rate)
    return quotient if (amount < 0) == (rate < 0) else -quotient


# ==============================================================================
# MONEY CLASS
# ==============================================================================

@dataclass(frozen=True, slots=True)
class Money(Expression):
    """
    An integer amount tagged with a Currency.

    INVARIANTS:
    1. _amount is always int (negative allowed: debt/credit)
    2. _currency is always Currency
    3. equal iff amount and currency are both equal

    USAGE:
        bank = Bank()
        bank.add_rate(Currency.CHF, Currency.USD, 2)
        bank.reduce(Money.dollar(5) + Money.franc(10), Currency.USD)   # 10 USD
    """
    _amount: int
    _currency: Currency

    def __post_init__(self) -> None:
        if not isinstance(self._amount, int) or isinstance(self._amount, bool):
            raise TypeError(
                f"Money amount must be int, not {type(self._amount).__name__}."
            )
        if not isinstance(self._currency, Currency):
            raise TypeError(
                f"Money currency must be Currency, not {type(self._currency).__name__}."
            )

    # -------------------------------------------------------------------------
    # Constructors
    # -------------------------------------------------------------------------

    @classmethod
    def of(cls, amount: int, currency: Currency) -> Money:
        return cls(amount, currency)

    @classmethod
    def zero(cls, currency: Currency) -> Money:
        return cls(0, currency)

    @classmethod
    def dollar(cls, amount: int) -> Money:
        return cls(amount, Currency.USD)

    @classmethod
    def franc(cls, amount: int) -> Money:
        return cls(amount, Currency.CHF)

    @classmethod
    def euro(cls, amount: int) -> Money:
        return cls(amount, Currency.EUR)

    @classmethod
    def pound(cls, amount: int) -> Money:
        return cls(amount, Currency.GBP)

    # -------------------------------------------------------------------------
    # Expression
    # -------------------------------------------------------------------------

    def reduce(self, bank: Bank, to: Currency) -> Money:
        """
        Convert to `to` using the bank's rate for (self.currency, to).

        Raises:
            MissingRateError: no rate registered for a non-identity pair
        """
        rate = bank.rate(self._currency, to)
        return Money(_truncating_div(self._amount, rate), to)

    def times(self, multiplier: int) -> Money:
        _check_multiplier(multiplier)
        return Money(self._amount * multiplier, self._currency)

    def __neg__(self) -> Money:
        return Money(-self._amount, self._currency)

    # -------------------------------------------------------------------------
    # Comparison
    # -------------------------------------------------------------------------

    def __lt__(self, other: Money) -> bool:
        return self._amount < self._comparable_amount(other)

    def __le__(self, other: Money) -> bool:
        return self._amount <= self._comparable_amount(other)

    def __gt__(self, other: Money) -> bool:
        return self._amount > self._comparable_amount(other)

    def __ge__(self, other: Money) -> bool:
        return self._amount >= self._comparable_amount(other)

    def _comparable_amount(self, other: object) -> int:
        """Amount of `other`, provided it is Money in this currency."""
        if not isinstance(other, Money):
            raise TypeError(f"Money is only ordered against Money, got {type(other).__name__}")
        if other.currency is not self._currency:
            raise CurrencyMismatchError(self._currency, other.currency, operation="compare")
        return other.amount

    # -------------------------------------------------------------------------
    # Properties and output
    # -------------------------------------------------------------------------

    @property
    def amount(self) -> int:
        return self._amount

    @property
    def currency(self) -> Currency:
        return self._currency

    def is_positive(self) -> bool:
        return self._amount > 0

    def is_negative(self) -> bool:
        return self._amount < 0

    def is_zero(self) -> bool:
        return self._amount == 0

    def __repr__(self) -> str:
        return f"{self._amount} {self._currency.code}"

    def __str__(self) -> str:
        return self.__repr__()

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_dict(self) -> dict:
        """Format: {"amount": int, "currency": str}"""
        return {
            "amount": self._amount,
            "currency": self._currency.code,
        }

    @classmethod
    def from_dict(cls, data: dict) -> Money:
        return cls(data["amount"], Currency.from_code(data["currency"]))
