"""
Core datatypes shared by the parsers and the kernel.

These datatypes are intentionally minimal and immutable so that parse
results can be handed around and compared in tests.

Notes:
- Spans are half-open [start, end) indices into the original input.
- `ParseProvenance.next_index` is the resume cursor for repeated scanning;
  NO_FURTHER_CONTENT (-1) means the buffer is exhausted.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import IntEnum
from typing import Optional

from .exc import ValidationError

#: Sentinel resume index meaning "no further content".
NO_FURTHER_CONTENT: int = -1


# ---------------------------------------------------------------------------
# Sign
# ---------------------------------------------------------------------------

class NumericSign(IntEnum):
    """Sign of a numeric value. Integer values multiply magnitudes directly."""
    NEGATIVE = -1
    ZERO = 0
    POSITIVE = 1

    @classmethod
    def of(cls, value) -> "NumericSign":
        """Sign of any value supporting comparison with 0."""
        if value > 0:
            return cls.POSITIVE
        if value < 0:
            return cls.NEGATIVE
        return cls.ZERO


# ---------------------------------------------------------------------------
# Spans
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class Span:
    """Half-open index range of a recognised token."""

    start: int
    end: int

    def __post_init__(self):
        if self.start < 0 or self.end < self.start:
            raise ValidationError(f"invalid span [{self.start}, {self.end})", operation="Span")

    def __len__(self) -> int:
        return self.end - self.start

    def text(self, source: str) -> str:
        return source[self.start:self.end]


# ---------------------------------------------------------------------------
# Parse provenance
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class ParseProvenance:
    """Where each recognised token of a single parse call was found.

    Fields:
    - leading_sign / trailing_sign: the sign marker tokens (negative or explicit positive).
    - leading_keyword / trailing_keyword: adjacent non-sign symbols such as currency.
    - integer_digits: from the first to the last integer digit, including skipped
      grouping separators.
    - decimal_separator / fractional_digits: the fraction, when present.
    - trailing_delimiter: the terminator that stopped the scan, if any.
    - negative: whether a negative marker was recognised.
    - next_index: resume cursor, or NO_FURTHER_CONTENT.
    """

    start_index: int = 0
    leading_sign: Optional[Span] = None
    leading_keyword: Optional[Span] = None
    integer_digits: Optional[Span] = None
    decimal_separator: Optional[Span] = None
    fractional_digits: Optional[Span] = None
    trailing_sign: Optional[Span] = None
    trailing_keyword: Optional[Span] = None
    trailing_delimiter: Optional[Span] = None
    negative: bool = False
    next_index: int = NO_FURTHER_CONTENT

    @staticmethod
    def not_found(
        start_index: int,
        delimiter: Optional[Span] = None,
        next_index: int = NO_FURTHER_CONTENT,
    ) -> "ParseProvenance":
        return ParseProvenance(start_index=start_index, trailing_delimiter=delimiter, next_index=next_index)

    @property
    def found_integer_digits(self) -> bool:
        return self.integer_digits is not None

    @property
    def found_fractional_digits(self) -> bool:
        return self.fractional_digits is not None

    @property
    def found_number(self) -> bool:
        return self.found_integer_digits or self.found_fractional_digits

    @property
    def found_leading_sign(self) -> bool:
        return self.leading_sign is not None

    @property
    def found_trailing_sign(self) -> bool:
        return self.trailing_sign is not None

    @property
    def has_more(self) -> bool:
        return self.next_index != NO_FURTHER_CONTENT


__all__ = [
    "NO_FURTHER_CONTENT",
    "NumericSign",
    "Span",
    "ParseProvenance",
]
