"""
Precision estimation between decimal digits and binary mantissa bits.

- digits_to_bits(d): ceil(d x BITS_PER_DECIMAL_DIGIT), rounded up to a whole
  number of bytes. Deterministic and monotonic; digits_to_bits(150) == 504.
- bits_to_digits(b): floor(b / BITS_PER_DECIMAL_DIGIT). Lossy convenience
  only; the result may be off by up to BITS_TO_DIGITS_ERROR_MARGIN digits
  and is not an exact inverse of digits_to_bits().

The ratio is evaluated with Decimal and integer ceiling/floor so that the
result never depends on binary float rounding.
"""

from __future__ import annotations

from decimal import Decimal, ROUND_CEILING, ROUND_FLOOR

from .constants import BITS_PER_DECIMAL_DIGIT, MIN_PRECISION_BITS, PRECISION_BIT_ALIGNMENT
from .exc import ValidationError


def _check_non_negative(name: str, value: int, operation: str) -> None:
    if not isinstance(value, int) or isinstance(value, bool) or value < 0:
        raise ValidationError(f"{name} must be a non-negative int", operation=operation, snippet=value)


def digits_to_bits(decimal_digits: int) -> int:
    """Mantissa bits sufficient for `decimal_digits` significant decimal digits."""
    _check_non_negative("decimal_digits", decimal_digits, "digits_to_bits")
    raw = int((Decimal(decimal_digits) * BITS_PER_DECIMAL_DIGIT).to_integral_value(rounding=ROUND_CEILING))
    rem = raw % PRECISION_BIT_ALIGNMENT
    if rem:
        raw += PRECISION_BIT_ALIGNMENT - rem
    return raw


def bits_to_digits(bits: int) -> int:
    """Approximate decimal digits representable in `bits` mantissa bits."""
    _check_non_negative("bits", bits, "bits_to_digits")
    if bits < MIN_PRECISION_BITS:
        raise ValidationError(
            f"bits must be >= {MIN_PRECISION_BITS}", operation="bits_to_digits", snippet=bits
        )
    return int((Decimal(bits) / BITS_PER_DECIMAL_DIGIT).to_integral_value(rounding=ROUND_FLOOR))


def precision_bits_from_required_digits(
    integer_digits: int,
    fractional_digits: int,
    buffer_digits: int = 0,
) -> int:
    """Bits for a value with the given integer/fractional digit counts plus a safety buffer."""
    _check_non_negative("integer_digits", integer_digits, "precision_bits_from_required_digits")
    _check_non_negative("fractional_digits", fractional_digits, "precision_bits_from_required_digits")
    _check_non_negative("buffer_digits", buffer_digits, "precision_bits_from_required_digits")
    return digits_to_bits(integer_digits + fractional_digits + buffer_digits)


__all__ = [
    "digits_to_bits",
    "bits_to_digits",
    "precision_bits_from_required_digits",
]
