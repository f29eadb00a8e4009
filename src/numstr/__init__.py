"""
Top-level API for numstr.

This module exposes the stable interface of the numeric string kernel:
  - NumericKernel and its digit runs, rounding and grouping specs
  - PureNumberParser / LocaleNumberParser for text input
  - NumberFormatSpec / format_kernel for text output
  - BigFloat / big-int bridges and exponentiation

Everything is exact until an explicit rounding step; see numstr.core for the
primitives.
"""

# NOTE:
#   Debug tracing is switched on per module via the DEBUG_* flags
#   (numstr.core.rounding.DEBUG_ROUNDING, numstr.core.bigfloat.DEBUG_BIGFLOAT,
#   numstr.core.bridges.DEBUG_BRIDGES, numstr.locale_parser.DEBUG_PARSER,
#   numstr.formatter.DEBUG_FMT).

from __future__ import annotations

from .core import (
    DigitRun,
    NumericSign,
    Span,
    ParseProvenance,
    NO_FURTHER_CONTENT,
    RoundingType,
    RoundingSpec,
    IntegerGroupingType,
    IntegerGroupingSpec,
    NumericKernel,
    SciNotationStyle,
    ScientificNotation,
    digits_to_bits,
    bits_to_digits,
    precision_bits_from_required_digits,
    BigFloat,
    kernel_to_big_float,
    big_float_to_kernel,
    kernel_to_big_int,
    big_int_to_kernel,
    raise_to_integer_exponent,
    raise_to_real_exponent,
    NumStrError,
    ValidationError,
    MalformedNumber,
    EmptyInput,
    PrecisionLossError,
)

# Text input
from .pure_parser import PureNumberParser, parse_pure_number
from .sign_search import SignSearchPosition, NegativeNumberSearchSpec, NegativeSearchCollection
from .locale_parser import LocaleNumberParser, parse_locale_number

# Text output
from .formatter import (
    SymbolPosition,
    TextJustify,
    CurrencySignRelativePosition,
    NumberSymbolSpec,
    NumberFieldSpec,
    NumberFormatSpec,
    format_kernel,
)

__all__ = [
    # core values
    "DigitRun",
    "NumericSign",
    "Span",
    "ParseProvenance",
    "NO_FURTHER_CONTENT",
    "RoundingType",
    "RoundingSpec",
    "IntegerGroupingType",
    "IntegerGroupingSpec",
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
    # parsing
    "PureNumberParser",
    "parse_pure_number",
    "SignSearchPosition",
    "NegativeNumberSearchSpec",
    "NegativeSearchCollection",
    "LocaleNumberParser",
    "parse_locale_number",
    # formatting
    "SymbolPosition",
    "TextJustify",
    "CurrencySignRelativePosition",
    "NumberSymbolSpec",
    "NumberFieldSpec",
    "NumberFormatSpec",
    "format_kernel",
    # exceptions
    "NumStrError",
    "ValidationError",
    "MalformedNumber",
    "EmptyInput",
    "PrecisionLossError",
]
