"""
moneyexpr — Money expressions reduced through an exchange-rate Bank

================================================================================
QUICK START
================================================================================

    from moneyexpr import Bank, Currency, Money

    bank = Bank()
    bank.add_rate(Currency.CHF, Currency.USD, 2)

    five_bucks = Money.dollar(5)
    ten_francs = Money.franc(10)

    # Build an expression; nothing is converted yet
    expr = five_bucks.plus(ten_francs).times(2)

    # Reduce it to one currency
    bank.reduce(expr, Currency.USD)     # 20 USD

    # Missing directions fail loudly
    bank.reduce(five_bucks, Currency.CHF)   # MissingRateError

Input-validating summation:

    from moneyexpr import StringCalculator

    StringCalculator().add("//;\\n1;2,3")     # 6

================================================================================
"""

from .core import (
    Currency,
    Money,
)
from .expression import (
    Expression,
    Sum,
)
from .bank import (
    Bank,
    Pair,
)
from .calculator import StringCalculator
from .errors import (
    MoneyError,
    MissingRateError,
    InvalidRateError,
    CurrencyMismatchError,
    CalculatorError,
    InvalidInputError,
    NegativeInputError,
)

__version__ = "1.0.0"
__license__ = "MIT"

__all__ = [
    # Core
    "Currency",
    "Money",
    "Expression",
    "Sum",
    "Bank",
    "Pair",
    # Calculator
    "StringCalculator",
    # Errors
    "MoneyError",
    "MissingRateError",
    "InvalidRateError",
    "CurrencyMismatchError",
    "CalculatorError",
    "InvalidInputError",
    "NegativeInputError",
]
