#!/usr/bin/env python3
"""
reduce_demo.py — Building and reducing money expressions

================================================================================
THE IDEA
================================================================================

    5 USD + 10 CHF = ?

There is no answer until someone says which currency the result should be
in, and at what rate. So instead of adding, we build an expression:

    expr = Money.dollar(5).plus(Money.franc(10))

and let a Bank, which knows the rates, reduce it:

    bank.reduce(expr, Currency.USD)     # 10 USD, with 2 CHF == 1 USD

================================================================================
"""

import logging
import sys
from pathlib import Path

# Add src to path
sys.path.insert(0, str(Path(__file__).parent.parent / "src"))

from moneyexpr import Bank, Currency, MissingRateError, Money, StringCalculator


def demonstrate_reduction(bank: Bank):
    print("=" * 60)
    print("REDUCTION")
    print("=" * 60)
    print()

    five_bucks = Money.dollar(5)
    ten_francs = Money.franc(10)

    expr = five_bucks.plus(ten_francs)
    print(f"Expression:        {expr!r}")
    print(f"Reduced to USD:    {bank.reduce(expr, Currency.USD)}")
    print()

    doubled = expr.times(2)
    print(f"Doubled:           {doubled!r}")
    print(f"Reduced to USD:    {bank.reduce(doubled, Currency.USD)}")
    print()

    print(f"2 CHF in USD:      {bank.reduce(Money.franc(2), Currency.USD)}")
    print(f"7 CHF in USD:      {bank.reduce(Money.franc(7), Currency.USD)}   (truncated)")
    print(f"1 USD, no rate:    {Bank().reduce(Money.dollar(1), Currency.USD)}   (identity)")
    print()


def demonstrate_missing_rate(bank: Bank):
    print("=" * 60)
    print("MISSING RATE")
    print("=" * 60)
    print()

    try:
        bank.reduce(Money.dollar(5), Currency.CHF)
    except MissingRateError as e:
        print(f"MissingRateError: {e}")
        print()
        print("Rates are directional: CHF/USD does not imply USD/CHF.")
    print()


def demonstrate_calculator():
    print("=" * 60)
    print("STRING CALCULATOR")
    print("=" * 60)
    print()

    calc = StringCalculator()
    for text in ["", "1,2", "1\n2,3", "//;\n1;2,3\n4"]:
        print(f"add({text!r:>18}) = {calc.add(text)}")
    print()


def main():
    logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    bank = Bank.from_dict({"CHF/USD": 2})

    demonstrate_reduction(bank)
    demonstrate_missing_rate(bank)
    demonstrate_calculator()


if __name__ == "__main__":
    main()
