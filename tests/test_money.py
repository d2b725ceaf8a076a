"""
test_money.py — Test suite for Money, Sum and expression reduction

================================================================================
TEST LAYOUT
================================================================================

1. UNIT TESTS
   Deterministic tests for the concrete scenarios and edge cases.

2. PROPERTY-BASED TESTS (Hypothesis)
   Properties that must hold for ANY input: identity reduction of times(),
   truncating conversion, associativity of addition, distribution of
   times() over plus().

================================================================================
"""

import math
from fractions import Fraction

import pytest
from hypothesis import given, settings
from hypothesis import strategies as st

import sys
from pathlib import Path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moneyexpr import (
    Bank,
    Currency,
    CurrencyMismatchError,
    Expression,
    MissingRateError,
    Money,
    Sum,
)


# ==============================================================================
# TEST HELPERS
# ==============================================================================

amounts = st.integers(min_value=-1_000_000, max_value=1_000_000)
multipliers = st.integers(min_value=-1_000, max_value=1_000)
rates = st.integers(min_value=1, max_value=1_000)


@st.composite
def money_strategy(draw, currency=None):
    """Random Money in USD or CHF."""
    if currency is None:
        currency = draw(st.sampled_from([Currency.USD, Currency.CHF]))
    return Money.of(draw(amounts), currency)


@pytest.fixture
def bank():
    b = Bank()
    b.add_rate(Currency.CHF, Currency.USD, 2)
    return b


def _bank_with_rate(rate: int) -> Bank:
    b = Bank()
    b.add_rate(Currency.CHF, Currency.USD, rate)
    return b


# ==============================================================================
# UNIT TESTS: Money
# ==============================================================================

class TestMoney:
    """Construction, equality, currency."""

    def test_multiplication(self):
        five = Money.dollar(5)
        assert five.times(2).reduce(Bank(), Currency.USD) == Money.dollar(10)
        assert five.times(3).reduce(Bank(), Currency.USD) == Money.dollar(15)

    def test_times_keeps_operand_unchanged(self):
        five = Money.dollar(5)
        five.times(2)
        assert five == Money.dollar(5)

    def test_equality(self):
        assert Money.dollar(5) == Money.dollar(5)
        assert Money.dollar(5) != Money.dollar(6)
        assert Money.dollar(5) != Money.franc(5)

    def test_currency(self):
        assert Money.dollar(1).currency is Currency.USD
        assert Money.franc(1).currency is Currency.CHF
        assert Money.euro(1).currency is Currency.EUR
        assert Money.pound(1).currency is Currency.GBP

    def test_of_is_generic_factory(self):
        assert Money.of(7, Currency.CHF) == Money.franc(7)

    def test_zero(self):
        assert Money.zero(Currency.USD).is_zero()

    def test_negative_amounts_allowed(self):
        debt = Money.dollar(-5)
        assert debt.amount == -5
        assert debt.is_negative()
        assert -debt == Money.dollar(5)

    def test_money_is_hashable(self):
        assert len({Money.dollar(5), Money.dollar(5), Money.franc(5)}) == 2

    def test_money_is_an_expression(self):
        assert isinstance(Money.dollar(1), Expression)

    def test_float_amount_raises(self):
        with pytest.raises(TypeError):
            Money.of(1.5, Currency.USD)

    def test_bool_amount_raises(self):
        with pytest.raises(TypeError):
            Money.of(True, Currency.USD)

    def test_string_currency_raises(self):
        with pytest.raises(TypeError):
            Money.of(1, "USD")

    def test_times_by_float_raises(self):
        with pytest.raises(TypeError):
            Money.dollar(10).times(1.5)

    def test_repr(self):
        assert repr(Money.dollar(5)) == "5 USD"
        assert str(Money.franc(-3)) == "-3 CHF"


class TestComparison:

    def test_less_than_same_currency(self):
        assert Money.dollar(5) < Money.dollar(6)
        assert Money.dollar(6) >= Money.dollar(6)

    def test_compare_different_currency_raises(self):
        with pytest.raises(CurrencyMismatchError):
            Money.dollar(5) < Money.franc(6)

    def test_mismatch_is_also_type_error(self):
        with pytest.raises(TypeError):
            Money.dollar(5) > Money.franc(6)

    def test_compare_with_non_money_raises(self):
        with pytest.raises(TypeError):
            Money.dollar(5) <= 5

    def test_ordering_within_currency(self):
        assert sorted([Money.franc(3), Money.franc(-1), Money.franc(2)]) == [
            Money.franc(-1), Money.franc(2), Money.franc(3),
        ]


class TestCurrency:

    def test_from_code(self):
        assert Currency.from_code("chf") is Currency.CHF
        assert Currency.from_code(" USD ") is Currency.USD

    def test_from_code_unknown_raises(self):
        with pytest.raises(ValueError):
            Currency.from_code("XYZ")

    def test_str_is_code(self):
        assert str(Currency.USD) == "USD"


class TestSerialization:

    def test_to_dict(self):
        assert Money.franc(12).to_dict() == {"amount": 12, "currency": "CHF"}

    def test_from_dict(self):
        assert Money.from_dict({"amount": -4, "currency": "USD"}) == Money.dollar(-4)


# ==============================================================================
# UNIT TESTS: Reduction
# ==============================================================================

class TestReduce:
    """Reduction of single Money values and Sums."""

    def test_reduce_money_fresh_bank(self):
        assert Bank().reduce(Money.dollar(1), Currency.USD) == Money.dollar(1)

    def test_reduce_money_different_currency(self, bank):
        assert bank.reduce(Money.franc(2), Currency.USD) == Money.dollar(1)

    def test_reduce_truncates_toward_zero(self, bank):
        assert bank.reduce(Money.franc(7), Currency.USD) == Money.dollar(3)
        assert bank.reduce(Money.franc(-7), Currency.USD) == Money.dollar(-3)

    def test_reduce_missing_rate_raises(self, bank):
        with pytest.raises(MissingRateError):
            bank.reduce(Money.dollar(1), Currency.CHF)

    def test_simple_addition(self):
        total = Sum(Money.dollar(4), Money.dollar(3))
        assert Bank().reduce(total, Currency.USD) == Money.dollar(7)

    def test_plus_returns_sum(self):
        five = Money.dollar(5)
        result = five.plus(five)
        assert isinstance(result, Sum)
        assert result.augend == five
        assert result.addend == five

    def test_mixed_addition(self, bank):
        result = bank.reduce(Money.dollar(5).plus(Money.franc(10)), Currency.USD)
        assert result == Money.dollar(10)

    def test_sum_plus_money(self, bank):
        five_bucks = Money.dollar(5)
        ten_francs = Money.franc(10)
        expr = Sum(five_bucks, ten_francs).plus(five_bucks)
        assert bank.reduce(expr, Currency.USD) == Money.dollar(15)

    def test_sum_times(self, bank):
        expr = Sum(Money.dollar(5), Money.franc(10)).times(2)
        assert bank.reduce(expr, Currency.USD) == Money.dollar(20)

    def test_sum_times_scales_every_leaf(self):
        expr = Money.dollar(1).plus(Money.dollar(2)).plus(Money.dollar(3).plus(Money.dollar(4)))
        scaled = expr.times(10)
        assert [leaf.amount for leaf in scaled.leaves()] == [10, 20, 30, 40]
        assert Bank().reduce(scaled, Currency.USD) == Money.dollar(100)

    def test_sum_times_keeps_shape(self):
        expr = Sum(Sum(Money.dollar(1), Money.dollar(2)), Money.dollar(3))
        assert expr.times(2) == Sum(Sum(Money.dollar(2), Money.dollar(4)), Money.dollar(6))

    def test_operators(self, bank):
        expr = (Money.dollar(5) + Money.franc(10)) * 2
        assert isinstance(expr, Sum)
        assert bank.reduce(3 * Money.dollar(2), Currency.USD) == Money.dollar(6)
        assert bank.reduce(expr, Currency.USD) == Money.dollar(20)

    def test_add_non_expression_raises(self):
        with pytest.raises(TypeError):
            Money.dollar(5) + 5

    def test_sum_rejects_non_expression(self):
        with pytest.raises(TypeError):
            Sum(Money.dollar(1), 2)

    def test_sum_missing_rate_propagates(self):
        expr = Money.dollar(1).plus(Money.franc(2))
        with pytest.raises(MissingRateError):
            Bank().reduce(expr, Currency.USD)

    def test_sum_rejects_leaf_in_wrong_currency(self):
        class Stubborn(Expression):
            """Always reduces to CHF, whatever the target."""

            def reduce(self, bank, to):
                return Money.franc(1)

            def times(self, multiplier):
                return self

        with pytest.raises(CurrencyMismatchError):
            Bank().reduce(Money.dollar(1).plus(Stubborn()), Currency.USD)

    def test_deep_chain_reduces_without_recursion_error(self):
        depth = sys.getrecursionlimit() * 3
        expr = Money.dollar(1)
        for _ in range(depth):
            expr = expr.plus(Money.dollar(1))
        assert Bank().reduce(expr, Currency.USD) == Money.dollar(depth + 1)
        assert Bank().reduce(expr.times(2), Currency.USD) == Money.dollar(2 * (depth + 1))


# ==============================================================================
# PROPERTY-BASED TESTS (Hypothesis)
# ==============================================================================

class TestReduceProperties:

    @given(n=amounts, k=multipliers, currency=st.sampled_from(list(Currency)))
    @settings(max_examples=300)
    def test_times_then_reduce_same_currency(self, n, k, currency):
        """Money(n, C).times(k).reduce(bank, C) == Money(n*k, C)"""
        result = Money.of(n, currency).times(k).reduce(Bank(), currency)
        assert result == Money.of(n * k, currency)

    @given(a=amounts, b=amounts, rate=rates)
    @settings(max_examples=500)
    def test_mixed_addition_truncates(self, a, b, rate):
        """franc(a) + dollar(b) in USD == dollar(trunc(a / rate) + b)"""
        bank = _bank_with_rate(rate)
        result = bank.reduce(Money.franc(a).plus(Money.dollar(b)), Currency.USD)
        assert result == Money.dollar(math.trunc(Fraction(a, rate)) + b)

    @given(a=money_strategy(), b=money_strategy(), c=money_strategy(), rate=rates)
    @settings(max_examples=300)
    def test_addition_associative(self, a, b, c, rate):
        """(a + b) + c and a + (b + c) reduce to the same amount"""
        bank = _bank_with_rate(rate)
        left = bank.reduce(a.plus(b).plus(c), Currency.USD)
        right = bank.reduce(a.plus(b.plus(c)), Currency.USD)
        assert left == right

    @given(a=money_strategy(), b=money_strategy(), k=multipliers, rate=rates)
    @settings(max_examples=300)
    def test_times_distributes_over_plus(self, a, b, k, rate):
        """(a + b).times(k) reduces like a.times(k) + b.times(k)"""
        bank = _bank_with_rate(rate)
        left = bank.reduce(a.plus(b).times(k), Currency.USD)
        right = bank.reduce(a.times(k).plus(b.times(k)), Currency.USD)
        assert left == right

    @given(a=money_strategy(), b=money_strategy())
    @settings(max_examples=200)
    def test_composition_never_mutates_operands(self, a, b):
        before = (a.amount, a.currency, b.amount, b.currency)
        a.plus(b).times(3)
        assert (a.amount, a.currency, b.amount, b.currency) == before


if __name__ == "__main__":
    pytest.main([__file__, "-v", "--tb=short"])
