"""
errors.py — Exception taxonomy for moneyexpr

Every error is raised at the point of computation (rate lookup, leaf
reduction, comparison) and propagates unchanged to the caller. Nothing in the
package catches these internally.

Each class also subclasses the builtin that matches its nature, so callers
that already handle LookupError / ValueError / TypeError keep working.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from .bank import Pair
    from .core import Currency


class MoneyError(Exception):
    """Base class for errors raised by the money core."""


class MissingRateError(MoneyError, LookupError):
    """
    No exchange rate is registered for a non-identity currency pair.

    This is a configuration error: register the rate with Bank.add_rate()
    and try again. It is never retried or defaulted.
    """

    def __init__(self, pair: Pair):
        self.pair = pair
        super().__init__(
            f"No rate registered for {pair}. "
            f"Register it with add_rate({pair.from_currency.code}, {pair.to_currency.code}, ...)."
        )


class InvalidRateError(MoneyError, ValueError):
    """Rate rejected at registration (zero, negative, or identity pair)."""


class CurrencyMismatchError(MoneyError, TypeError):
    """Amounts in two different currencies would be combined or compared."""

    def __init__(self, left: Currency, right: Currency, operation: str = "combine"):
        self.left = left
        self.right = right
        super().__init__(
            f"Cannot {operation} different currencies: {left.code} vs {right.code}. "
            f"Reduce through a Bank first."
        )


# ==============================================================================
# STRING CALCULATOR
# ==============================================================================

class CalculatorError(ValueError):
    """Base class for StringCalculator input errors."""


class InvalidInputError(CalculatorError):
    """A token could not be parsed as an integer, or the header is malformed."""


class NegativeInputError(CalculatorError):
    """A parsed number is not strictly positive."""
