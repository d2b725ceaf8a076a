"""
bank.py — Exchange-rate registry and reduction entry point

================================================================================
RATES
================================================================================

A rate is a positive integer multiplier keyed by an ordered currency pair:
dividing a `from` amount by it gives the equivalent `to` amount.

    bank = Bank()
    bank.add_rate(Currency.CHF, Currency.USD, 2)     # 2 CHF == 1 USD

    bank.rate(Currency.CHF, Currency.USD)            # 2
    bank.rate(Currency.USD, Currency.USD)            # 1, identity, never stored
    bank.rate(Currency.USD, Currency.CHF)            # MissingRateError

Pairs are directional. CHF/USD and USD/CHF are separate entries and neither
is derived from the other: every conversion direction a caller needs must be
registered explicitly.

================================================================================
"""

from __future__ import annotations
from dataclasses import dataclass
from threading import Lock
from typing import Dict, List, Mapping, Optional
import logging

from .core import Currency, Money
from .errors import InvalidRateError, MissingRateError
from .expression import Expression

logger = logging.getLogger(__name__)


def _check_currency(value: object, name: str) -> None:
    if not isinstance(value, Currency):
        raise TypeError(f"{name} must be Currency, not {type(value).__name__}.")


@dataclass(frozen=True, slots=True)
class Pair:
    """Ordered (from, to) lookup key. Hash and equality use both fields."""
    from_currency: Currency
    to_currency: Currency

    SEPARATOR = "/"

    def __post_init__(self) -> None:
        _check_currency(self.from_currency, "from_currency")
        _check_currency(self.to_currency, "to_currency")

    @classmethod
    def parse(cls, text: str) -> Pair:
        """Parse "CHF/USD" into Pair(CHF, USD)."""
        parts = text.split(cls.SEPARATOR)
        if len(parts) != 2:
            raise ValueError(f"Invalid currency pair '{text}', expected FROM{cls.SEPARATOR}TO")
        return cls(Currency.from_code(parts[0]), Currency.from_code(parts[1]))

    def __str__(self) -> str:
        return f"{self.from_currency.code}{self.SEPARATOR}{self.to_currency.code}"


class Bank:
    """
    Mutable registry of exchange rates.

    The bank is an explicit object owned by the caller and passed into every
    reduction. The rate table is guarded by a lock held only for the length
    of a single lookup or update, never across a whole reduce().

    PROPERTIES:
    - Upsert only: add_rate() overwrites, rates are never removed
    - Identity rate is implicit: rate(X, X) == 1 without registration
    - No implicit rate: a missing pair raises MissingRateError
    """

    def __init__(self, rates: Optional[Mapping[Pair, int]] = None):
        self._rates: Dict[Pair, int] = {}
        self._lock = Lock()
        for pair, multiplier in (rates or {}).items():
            if not isinstance(pair, Pair):
                raise TypeError(
                    f"Rate keys must be Pair, not {type(pair).__name__}. "
                    f"Use Bank.from_dict() for \"FROM/TO\" string keys."
                )
            self.add_rate(pair.from_currency, pair.to_currency, multiplier)

    # -------------------------------------------------------------------------
    # Rates
    # -------------------------------------------------------------------------

    def add_rate(self, from_currency: Currency, to_currency: Currency, multiplier: int) -> None:
        """
        Register (or overwrite) the rate for from_currency -> to_currency.

        Raises:
            TypeError: currencies are not Currency, or multiplier is not int
            InvalidRateError: multiplier <= 0, or from_currency == to_currency
        """
        _check_currency(from_currency, "from_currency")
        _check_currency(to_currency, "to_currency")
        if not isinstance(multiplier, int) or isinstance(multiplier, bool):
            raise TypeError(f"Rate multiplier must be int, not {type(multiplier).__name__}.")
        if multiplier <= 0:
            raise InvalidRateError(
                f"Rate multiplier must be > 0, got {multiplier} for "
                f"{from_currency.code}/{to_currency.code}."
            )
        if from_currency is to_currency:
            raise InvalidRateError(
                f"Identity rate for {from_currency.code} is always 1 and cannot be registered."
            )

        pair = Pair(from_currency, to_currency)
        with self._lock:
            previous = self._rates.get(pair)
            self._rates[pair] = multiplier

        if previous is not None and previous != multiplier:
            logger.info(f"Bank overwrote rate {pair}: {previous} -> {multiplier}")
        else:
            logger.debug(f"Bank registered rate {pair} = {multiplier}")

    def rate(self, from_currency: Currency, to_currency: Currency) -> int:
        """
        Rate for converting from_currency into to_currency.

        Raises:
            MissingRateError: no rate registered and the currencies differ
            TypeError: either argument is not a Currency
        """
        _check_currency(from_currency, "from_currency")
        _check_currency(to_currency, "to_currency")
        if from_currency is to_currency:
            return 1

        pair = Pair(from_currency, to_currency)
        with self._lock:
            multiplier = self._rates.get(pair)
        if multiplier is None:
            logger.debug(f"Bank has no rate for {pair}")
            raise MissingRateError(pair)
        return multiplier

    def has_rate(self, from_currency: Currency, to_currency: Currency) -> bool:
        _check_currency(from_currency, "from_currency")
        _check_currency(to_currency, "to_currency")
        if from_currency is to_currency:
            return True
        with self._lock:
            return Pair(from_currency, to_currency) in self._rates

    def pairs(self) -> List[Pair]:
        """Registered pairs (snapshot copy)."""
        with self._lock:
            return list(self._rates)

    # -------------------------------------------------------------------------
    # Reduction
    # -------------------------------------------------------------------------

    def reduce(self, expression: Expression, to: Currency) -> Money:
        """Evaluate `expression` into a single Money in `to`."""
        if not isinstance(expression, Expression):
            raise TypeError(f"Cannot reduce {type(expression).__name__}, expected Expression.")
        _check_currency(to, "to")
        return expression.reduce(self, to)

    # -------------------------------------------------------------------------
    # Configuration
    # -------------------------------------------------------------------------

    def to_dict(self) -> Dict[str, int]:
        """Format: {"CHF/USD": 2, ...}"""
        with self._lock:
            return {str(pair): multiplier for pair, multiplier in self._rates.items()}

    @classmethod
    def from_dict(cls, data: Mapping[str, int]) -> Bank:
        """
        Build a bank from a {"FROM/TO": multiplier} mapping.

        Every entry goes through add_rate(), so the same validation applies.
        """
        return cls({Pair.parse(key): value for key, value in data.items()})

    def __len__(self) -> int:
        with self._lock:
            return len(self._rates)

    def __repr__(self) -> str:
        return f"Bank(rates={len(self)})"
