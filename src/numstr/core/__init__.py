"""
numstr Core
===========

Unified exports for the digit-run primitives, rounding, grouping, the
NumericKernel and its binary bridges.

All arithmetic is exact (int / Fraction) until an explicit rounding step.
Decimal is used only as an I/O bridge and for fractional exponents.
"""

# NOTE:
#   The `core` package holds everything that works on digits and values.
#   Text-level concerns (parsing human-formatted strings, rendering with
#   symbols and fields) live one level up in numstr.pure_parser,
#   numstr.locale_parser and numstr.formatter.

# Constants
from .constants import (
    BITS_PER_DECIMAL_DIGIT,
    PRECISION_BIT_ALIGNMENT,
    MIN_PRECISION_BITS,
    BITS_TO_DIGITS_ERROR_MARGIN,
    DEFAULT_DECIMAL_SEPARATOR,
    DEFAULT_BUFFER_DIGITS,
)

# Digit runs and datatypes
from .digits import DigitRun
from .datatypes import (
    NO_FURTHER_CONTENT,
    NumericSign,
    Span,
    ParseProvenance,
)

# Rounding
from .rounding import (
    RoundingType,
    DEFAULT_ROUNDING_TYPE,
    RoundingSpec,
    round_digits,
    round_ratio,
)

# Grouping
from .grouping import (
    IntegerGroupingType,
    IntegerGroupingSpec,
)

# Kernel
from .kernel import (
    NumericKernel,
    SciNotationStyle,
    ScientificNotation,
)

# Precision estimation and binary bridges
from .precision import (
    digits_to_bits,
    bits_to_digits,
    precision_bits_from_required_digits,
)
from .bigfloat import BigFloat
from .bridges import (
    kernel_to_big_float,
    big_float_to_kernel,
    kernel_to_big_int,
    big_int_to_kernel,
    raise_to_integer_exponent,
    raise_to_real_exponent,
)

# Core exceptions
from .exc import NumStrError, ValidationError, MalformedNumber, EmptyInput, PrecisionLossError

__all__ = [
    # constants
    "BITS_PER_DECIMAL_DIGIT",
    "PRECISION_BIT_ALIGNMENT",
    "MIN_PRECISION_BITS",
    "BITS_TO_DIGITS_ERROR_MARGIN",
    "DEFAULT_DECIMAL_SEPARATOR",
    "DEFAULT_BUFFER_DIGITS",
    # digits / datatypes
    "DigitRun",
    "NO_FURTHER_CONTENT",
    "NumericSign",
    "Span",
    "ParseProvenance",
    # rounding
    "RoundingType",
    "DEFAULT_ROUNDING_TYPE",
    "RoundingSpec",
    "round_digits",
    "round_ratio",
    # grouping
    "IntegerGroupingType",
    "IntegerGroupingSpec",
    # kernel
    "NumericKernel",
    "SciNotationStyle",
    "ScientificNotation",
    # precision / bridges
    "digits_to_bits",
    "bits_to_digits",
    "precision_bits_from_required_digits",
    "BigFloat",
    "kernel_to_big_float",
    "big_float_to_kernel",
    "kernel_to_big_int",
    "big_int_to_kernel",
    "raise_to_integer_exponent",
    "raise_to_real_exponent",
    # exceptions
    "NumStrError",
    "ValidationError",
    "MalformedNumber",
    "EmptyInput",
    "PrecisionLossError",
]
