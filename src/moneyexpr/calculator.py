"""
calculator.py — Input-validating summation of delimited numbers

Independent of the money core; the two only share the package.

    calc = StringCalculator()
    calc.add("")              # 0
    calc.add("1,2\\n3")        # 6
    calc.add("//;\\n1;2,3")     # 6, ';' added as delimiter for this call
    calc.add("1,-2")          # NegativeInputError
    calc.add("1,a")           # InvalidInputError
"""

from __future__ import annotations
import re
from typing import FrozenSet, Iterable

from .errors import InvalidInputError, NegativeInputError

_INTEGER = re.compile(r"[+-]?[0-9]+")


class StringCalculator:
    """Sums strictly positive integers separated by delimiters."""

    DEFAULT_DELIMITERS: FrozenSet[str] = frozenset({",", "\n"})
    HEADER_PREFIX = "//"

    def __init__(self, delimiters: Iterable[str] = DEFAULT_DELIMITERS):
        self.delimiters = frozenset(delimiters)
        if not self.delimiters or any(len(d) != 1 for d in self.delimiters):
            raise ValueError("delimiters must be a non-empty set of single characters")

    def add(self, numbers: str) -> int:
        if not isinstance(numbers, str):
            raise TypeError(f"numbers must be str, not {type(numbers).__name__}.")
        if numbers == "":
            return 0

        delimiters = self.delimiters
        body = numbers
        if numbers.startswith(self.HEADER_PREFIX):
            custom, body = self._split_header(numbers)
            delimiters = delimiters | {custom}

        return sum(self._parse(token) for token in self._tokenize(body, delimiters))

    def _split_header(self, numbers: str) -> tuple[str, str]:
        """Split "//X\\n<body>" into ("X", "<body>")."""
        header, newline, body = numbers[len(self.HEADER_PREFIX):].partition("\n")
        if not newline or len(header) != 1:
            raise InvalidInputError(
                f"Malformed delimiter header in {numbers!r}, expected '//X\\n...'"
            )
        return header, body

    @staticmethod
    def _tokenize(body: str, delimiters: FrozenSet[str]) -> list[str]:
        pattern = "[" + "".join(re.escape(d) for d in sorted(delimiters)) + "]"
        # consecutive delimiters yield empty tokens, which are skipped
        return [token for token in re.split(pattern, body) if token]

    @staticmethod
    def _parse(token: str) -> int:
        if not _INTEGER.fullmatch(token):
            raise InvalidInputError(f"Not an integer: {token!r}")
        value = int(token)
        if value <= 0:
            raise NegativeInputError(f"Numbers must be positive, got {value}")
        return value
