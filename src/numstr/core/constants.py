"""
numstr Core Constants
=====================

Numeric constants shared by the kernel, the rounding engine and the
binary-float bridges. Presets for separators and symbols live next to the
spec types that use them (grouping.py, formatter.py).
"""

# NOTE: The digit/bit ratio is deliberately a little above log2(10) so that
# digits_to_bits() always errs on the side of extra mantissa bits.

from decimal import Decimal

# ---------------------------------------------------------------------------
# Decimal digit <-> binary bit estimation
# ---------------------------------------------------------------------------

#: Binary mantissa bits required per decimal digit (log2(10) plus margin).
BITS_PER_DECIMAL_DIGIT: Decimal = Decimal("3.3219789132197891321978913219789")

#: Precision bit counts are rounded up to a whole number of bytes.
PRECISION_BIT_ALIGNMENT: int = 8

#: bits_to_digits() is meaningless below this many bits.
MIN_PRECISION_BITS: int = 4

#: Documented margin of error (in digits) of bits_to_digits().
BITS_TO_DIGITS_ERROR_MARGIN: int = 3


# ---------------------------------------------------------------------------
# Text defaults
# ---------------------------------------------------------------------------

#: Decimal separator used when none is configured.
DEFAULT_DECIMAL_SEPARATOR: str = "."

#: Characters accepted as decimal digits.
DIGIT_CHARS: str = "0123456789"


# ---------------------------------------------------------------------------
# Exponentiation defaults
# ---------------------------------------------------------------------------

#: Extra decimal digits carried by intermediate products when no buffer is given.
DEFAULT_BUFFER_DIGITS: int = 20

#: Guard digits always added to binary repeated squaring on top of the caller's buffer.
EXPONENT_GUARD_DIGITS: int = 2

#: Floor for the Decimal context precision used by fractional exponents.
MIN_DECIMAL_CONTEXT_PRECISION: int = 28


# ---------------------------------------------------------------------------
# Metadata
# ---------------------------------------------------------------------------

__all__ = [
    "BITS_PER_DECIMAL_DIGIT",
    "PRECISION_BIT_ALIGNMENT",
    "MIN_PRECISION_BITS",
    "BITS_TO_DIGITS_ERROR_MARGIN",
    "DEFAULT_DECIMAL_SEPARATOR",
    "DIGIT_CHARS",
    "DEFAULT_BUFFER_DIGITS",
    "EXPONENT_GUARD_DIGITS",
    "MIN_DECIMAL_CONTEXT_PRECISION",
]
