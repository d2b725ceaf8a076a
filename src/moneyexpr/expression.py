"""
expression.py — Expression capability and the Sum composite

================================================================================
EXPRESSION TREES
================================================================================

An Expression is anything that, given a Bank and a target Currency, reduces
to exactly one Money in that currency. There are two implementations:

    Money   leaf        an amount tagged with a currency (core.py)
    Sum     composite   deferred addition of two sub-expressions

Trees are immutable. Composing never mutates the operands, it builds a new
tree on top of them:

    five_bucks = Money.dollar(5)
    ten_francs = Money.franc(10)

    expr = (five_bucks + ten_francs) * 2      # Sum(Sum(...)...), nothing computed
    bank.reduce(expr, Currency.USD)           # 20 USD with CHF/USD = 2

The Bank never needs to know whether it holds a Money or a Sum: it only
calls Expression.reduce().

================================================================================
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING, Iterator

from .errors import CurrencyMismatchError

if TYPE_CHECKING:
    from .bank import Bank
    from .core import Currency, Money


def _check_multiplier(multiplier: int) -> None:
    # bool is an int subclass; True * amount is never what the caller meant
    if not isinstance(multiplier, int) or isinstance(multiplier, bool):
        raise TypeError(
            f"Expressions can only be multiplied by int, "
            f"not {type(multiplier).__name__}."
        )


class Expression(ABC):
    """
    Capability shared by Money and Sum.

    Subclasses implement reduce() and times(). plus() is defined once here:
    adding any two expressions always yields a Sum.
    """

    __slots__ = ()

    @abstractmethod
    def reduce(self, bank: Bank, to: Currency) -> Money:
        """Reduce to a single Money in `to`, using `bank` for rates."""

    @abstractmethod
    def times(self, multiplier: int) -> Expression:
        """Scale every amount in the expression by `multiplier`."""

    def plus(self, addend: Expression) -> Sum:
        return Sum(self, addend)

    def __add__(self, other: object) -> Sum:
        if not isinstance(other, Expression):
            return NotImplemented
        return self.plus(other)

    def __mul__(self, multiplier: int) -> Expression:
        if not isinstance(multiplier, int) or isinstance(multiplier, bool):
            return NotImplemented
        return self.times(multiplier)

    def __rmul__(self, multiplier: int) -> Expression:
        return self.__mul__(multiplier)


@dataclass(frozen=True, slots=True)
class Sum(Expression):
    """
    Deferred addition of two expressions.

    INVARIANT:
        Sum(a, b).reduce(bank, C) == a.reduce(bank, C) + b.reduce(bank, C)
        where both sides are expressed in C before any amount is added.
    """
    augend: Expression
    addend: Expression

    def __post_init__(self) -> None:
        for name in ("augend", "addend"):
            value = getattr(self, name)
            if not isinstance(value, Expression):
                raise TypeError(
                    f"Sum.{name} must be an Expression, not {type(value).__name__}."
                )

    def leaves(self) -> Iterator[Expression]:
        """Yield the non-Sum leaves, left to right."""
        stack: list[Expression] = [self]
        while stack:
            node = stack.pop()
            if isinstance(node, Sum):
                stack.append(node.addend)
                stack.append(node.augend)
            else:
                yield node

    def reduce(self, bank: Bank, to: Currency) -> Money:
        """
        Reduce every leaf to `to` and add the amounts.

        The walk uses an explicit stack, so long chains like a + b + c + ...
        do not run into the interpreter recursion limit.

        Raises:
            MissingRateError: a leaf needs a rate the bank does not have
            CurrencyMismatchError: a leaf reduced to a currency other than `to`
        """
        from .core import Money

        total = 0
        for leaf in self.leaves():
            part = leaf.reduce(bank, to)
            if part.currency is not to:
                raise CurrencyMismatchError(part.currency, to, operation="add")
            total += part.amount
        return Money.of(total, to)

    def times(self, multiplier: int) -> Sum:
        _check_multiplier(multiplier)

        # Post-order rebuild: children are scaled before their parent Sum
        # is reassembled, keeping the original tree shape.
        stack: list[tuple[Expression, bool]] = [(self, False)]
        built: list[Expression] = []
        while stack:
            node, expanded = stack.pop()
            if not isinstance(node, Sum):
                built.append(node.times(multiplier))
            elif expanded:
                addend = built.pop()
                augend = built.pop()
                built.append(Sum(augend, addend))
            else:
                stack.append((node, True))
                stack.append((node.addend, False))
                stack.append((node.augend, False))
        return built.pop()

    def __repr__(self) -> str:
        return f"({self.augend!r} + {self.addend!r})"
