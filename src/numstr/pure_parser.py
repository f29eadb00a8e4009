"""
Pure number string parser.

A pure number string is: an optional leading '+' or '-', a run of decimal
digits, at most one decimal separator, a run of decimal digits. No grouping
separators, currency symbols or surrounding text.

- parse() is strict: the whole string must match.
- parse_prefix() accepts the longest matching prefix and reports how many
  characters it consumed.

A decimal separator only counts when at least one digit follows it, so
"12." is malformed for parse() and consumes 2 characters in parse_prefix().
An empty integer part (".5", "-.5") is read as "0".
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Tuple

from .core.constants import DEFAULT_DECIMAL_SEPARATOR, DIGIT_CHARS
from .core.datatypes import NumericSign
from .core.exc import EmptyInput, MalformedNumber, ValidationError
from .core.kernel import NumericKernel


def _scan_digits(text: str, i: int) -> int:
    n = len(text)
    while i < n and text[i] in DIGIT_CHARS:
        i += 1
    return i


@dataclass(frozen=True)
class PureNumberParser:
    """Parser for pure number strings with a configurable decimal separator."""

    decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR

    def __post_init__(self):
        sep = self.decimal_separator
        if not isinstance(sep, str) or not sep:
            raise ValidationError("decimal separator must be a non-empty str", operation="PureNumberParser", snippet=sep)
        if any(ch in DIGIT_CHARS or ch in "+-" for ch in sep):
            raise ValidationError(
                "decimal separator may not contain digits or signs", operation="PureNumberParser", snippet=sep
            )

    def _scan(self, text: str, operation: str) -> Tuple[NumericKernel, int]:
        if not isinstance(text, str):
            raise ValidationError("expected str", operation=operation, snippet=text)
        if not any(ch in DIGIT_CHARS for ch in text):
            raise EmptyInput("no digits found", operation=operation, snippet=text)

        sep = self.decimal_separator
        n = len(text)
        i = 0
        sign = NumericSign.POSITIVE
        if i < n and text[i] in "+-":
            if text[i] == "-":
                sign = NumericSign.NEGATIVE
            i += 1

        int_start = i
        i = _scan_digits(text, i)
        integer = text[int_start:i]

        fractional = ""
        after_sep = i + len(sep)
        if text.startswith(sep, i) and after_sep < n and text[after_sep] in DIGIT_CHARS:
            j = _scan_digits(text, after_sep)
            fractional = text[after_sep:j]
            i = j

        if not integer and not fractional:
            raise MalformedNumber("text does not start with a number", operation=operation, snippet=text)
        return NumericKernel(integer or "0", fractional, sign), i

    def parse(self, text: str) -> NumericKernel:
        """Parse the whole string or raise EmptyInput / MalformedNumber."""
        kernel, consumed = self._scan(text, "PureNumberParser.parse")
        if consumed != len(text):
            raise MalformedNumber(
                f"unexpected character at index {consumed}", operation="PureNumberParser.parse", snippet=text
            )
        return kernel

    def parse_prefix(self, text: str) -> Tuple[NumericKernel, int]:
        """Parse the longest valid prefix; returns (kernel, characters consumed)."""
        return self._scan(text, "PureNumberParser.parse_prefix")


def parse_pure_number(text: str, decimal_separator: str = DEFAULT_DECIMAL_SEPARATOR) -> NumericKernel:
    return PureNumberParser(decimal_separator).parse(text)


__all__ = [
    "PureNumberParser",
    "parse_pure_number",
]
