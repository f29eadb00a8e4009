"""
DigitRun: an ordered, mutable run of decimal digit characters.

- Used for both the integer run (most-significant digit first) and the
  fractional run (left to right after the decimal separator).
- Every element is one of '0'..'9'. An empty integer run reads as 0.
- Every mutation validates first and only then changes state, so a failed
  call never leaves a partially modified run behind.

Extension semantics:
- extend_left() inserts at the most-significant end. For an integer run
  with '0' filler this preserves magnitude; any other filler changes it.
- extend_right() appends at the least-significant end. For a fractional
  run with '0' filler this preserves magnitude.
"""

from __future__ import annotations

from typing import Iterable, Iterator, List

from .constants import DIGIT_CHARS
from .exc import ValidationError


def _check_digit(ch: str, operation: str) -> None:
    if not isinstance(ch, str) or len(ch) != 1 or ch not in DIGIT_CHARS:
        raise ValidationError("expected a single decimal digit", operation=operation, snippet=ch)


def _check_count(n: int, operation: str) -> None:
    if not isinstance(n, int) or n < 0:
        raise ValidationError(f"count must be a non-negative int, got {n!r}", operation=operation)


class DigitRun:
    """Mutable sequence of decimal digit characters."""

    __slots__ = ("_digits",)

    def __init__(self, digits: Iterable[str] = ()):
        buf: List[str] = []
        for ch in digits:
            _check_digit(ch, "DigitRun")
            buf.append(ch)
        self._digits = buf

    # ------------- constructors -------------

    @classmethod
    def from_str(cls, text: str) -> "DigitRun":
        return cls(text)

    @classmethod
    def from_int(cls, value: int) -> "DigitRun":
        """Digits of a non-negative int; 0 becomes the one-digit run '0'."""
        if value < 0:
            raise ValidationError("negative value", operation="DigitRun.from_int", snippet=value)
        return cls(str(value))

    def copy(self) -> "DigitRun":
        run = DigitRun()
        run._digits = list(self._digits)
        return run

    # ------------- queries -------------

    def __len__(self) -> int:
        return len(self._digits)

    def __iter__(self) -> Iterator[str]:
        return iter(self._digits)

    def __getitem__(self, index: int) -> str:
        return self._digits[index]

    def __setitem__(self, index: int, digit: str) -> None:
        _check_digit(digit, "DigitRun.__setitem__")
        self._digits[index] = digit

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, DigitRun):
            return NotImplemented
        return self._digits == other._digits

    __hash__ = None  # mutable

    def __str__(self) -> str:
        return "".join(self._digits)

    def __repr__(self) -> str:
        return f"DigitRun({str(self)!r})"

    def to_str(self) -> str:
        return "".join(self._digits)

    def to_int(self) -> int:
        """Integer value of the run read as a decimal literal (empty -> 0)."""
        return int(self.to_str()) if self._digits else 0

    def is_zero(self) -> bool:
        """True when the run is empty or holds only '0' digits."""
        return all(ch == "0" for ch in self._digits)

    def leading_zero_count(self) -> int:
        n = 0
        for ch in self._digits:
            if ch != "0":
                break
            n += 1
        return n

    def trailing_zero_count(self) -> int:
        n = 0
        for ch in reversed(self._digits):
            if ch != "0":
                break
            n += 1
        return n

    # ------------- mutators -------------

    def append(self, digit: str) -> None:
        _check_digit(digit, "DigitRun.append")
        self._digits.append(digit)

    def extend_left(self, n: int, filler: str = "0") -> None:
        """Insert `n` copies of `filler` at the most-significant end."""
        _check_count(n, "DigitRun.extend_left")
        _check_digit(filler, "DigitRun.extend_left")
        if n:
            self._digits[0:0] = [filler] * n

    def extend_right(self, n: int, filler: str = "0") -> None:
        """Append `n` copies of `filler` at the least-significant end."""
        _check_count(n, "DigitRun.extend_right")
        _check_digit(filler, "DigitRun.extend_right")
        if n:
            self._digits.extend([filler] * n)

    def truncate_right(self, n: int) -> None:
        """Drop the last `n` digits. `n` greater than the length is an error."""
        _check_count(n, "DigitRun.truncate_right")
        if n > len(self._digits):
            raise ValidationError(
                f"cannot truncate {n} digits from a run of length {len(self._digits)}",
                operation="DigitRun.truncate_right",
                snippet=self.to_str(),
            )
        if n:
            del self._digits[-n:]

    def strip_leading_zeros(self, keep: int = 0) -> None:
        """Remove leading '0' digits, keeping at least `keep` digits."""
        drop = min(self.leading_zero_count(), max(len(self._digits) - keep, 0))
        if drop:
            del self._digits[:drop]

    def strip_trailing_zeros(self) -> None:
        drop = self.trailing_zero_count()
        if drop:
            del self._digits[-drop:]


__all__ = ["DigitRun"]
