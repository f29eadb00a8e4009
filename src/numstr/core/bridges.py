"""
Bridges between NumericKernel and BigFloat / Python int, plus exponentiation.

- kernel_to_big_float(): precision = digits_to_bits(significant digits +
  guard digits). Binary-representable values are stored exactly; the rest
  are rounded half-to-even at that precision. With one or more guard digits
  the error stays below a tenth of the last decimal place, so
  big_float_to_kernel() at the original fractional digit count gives back
  the original digits.
- kernel_to_big_int(): fractional digits are rounded away with the rounding
  type of the supplied spec; NO_ROUNDING/NONE on a value with a nonzero
  fraction is a PrecisionLossError.
- raise_to_integer_exponent(): exact integer exponentiation of all digits,
  with the decimal point re-inserted at fractional_len x exponent.
- raise_to_real_exponent(): integral exponents go through BigFloat repeated
  squaring at a precision covering every digit of the exact result plus the
  buffer, then snap to that exact decimal grid; non-integral exponents go
  through Decimal.__pow__ in a local context. For integral exponents both
  functions therefore agree after rounding to the same digit count.
"""

from __future__ import annotations

import math
from decimal import Decimal, localcontext
from fractions import Fraction
from typing import Optional, Union

from .bigfloat import BigFloat, DEFAULT_BINARY_ROUNDING
from .constants import DEFAULT_BUFFER_DIGITS, EXPONENT_GUARD_DIGITS, MIN_DECIMAL_CONTEXT_PRECISION
from .datatypes import NumericSign
from .exc import PrecisionLossError, ValidationError
from .kernel import NumericKernel
from .precision import digits_to_bits, precision_bits_from_required_digits
from .rounding import RandomSource, RoundingSpec, RoundingType

# Debug printing control
DEBUG_BRIDGES = False

def _dbg(msg: str) -> None:
    if DEBUG_BRIDGES:
        print(msg)


Exponent = Union[int, Decimal, Fraction, NumericKernel]


def _check_kernel(value, operation: str) -> None:
    if not isinstance(value, NumericKernel):
        raise ValidationError("expected NumericKernel", operation=operation, snippet=value)


def _check_buffer(buffer_digits: int, operation: str) -> None:
    if not isinstance(buffer_digits, int) or isinstance(buffer_digits, bool) or buffer_digits < 0:
        raise ValidationError("buffer digits must be a non-negative int", operation=operation, snippet=buffer_digits)


def _finish(result: NumericKernel, rounding: Optional[RoundingSpec], rng: Optional[RandomSource]) -> NumericKernel:
    if rounding is not None and not rounding.is_no_op:
        result.round(rounding, rng)
    return result


# ----------------------------
# BigFloat bridge
# ----------------------------

def kernel_to_big_float(
    kernel: NumericKernel,
    extra_guard_digits: int = 0,
    rounding_type: RoundingType = DEFAULT_BINARY_ROUNDING,
) -> BigFloat:
    """Encode a kernel as a BigFloat sized for its significant digits plus guard digits."""
    _check_kernel(kernel, "kernel_to_big_float")
    _check_buffer(extra_guard_digits, "kernel_to_big_float")
    precision = digits_to_bits(kernel.significant_digit_count + extra_guard_digits)
    _dbg(f"kernel_to_big_float: {kernel} digits={kernel.significant_digit_count} prec={precision}")
    return BigFloat.from_fraction(kernel.to_fraction(), precision, rounding_type)


def big_float_to_kernel(
    value: BigFloat,
    rounding: Optional[RoundingSpec] = None,
    rng: Optional[RandomSource] = None,
) -> NumericKernel:
    """Decimal expansion of a BigFloat, rounded per `rounding` (None/NO_ROUNDING keeps every digit)."""
    if not isinstance(value, BigFloat):
        raise ValidationError("expected BigFloat", operation="big_float_to_kernel", snippet=value)
    return value.to_kernel(rounding, rng)


# ----------------------------
# BigInt bridge
# ----------------------------

def kernel_to_big_int(
    kernel: NumericKernel,
    rounding: RoundingSpec,
    rng: Optional[RandomSource] = None,
) -> int:
    """Integer value of `kernel`; the fraction is rounded away with `rounding.rounding_type`."""
    _check_kernel(kernel, "kernel_to_big_int")
    if not isinstance(rounding, RoundingSpec):
        raise ValidationError("expected RoundingSpec", operation="kernel_to_big_int", snippet=rounding)
    if not kernel.has_fraction():
        return kernel.to_int()
    if rounding.is_no_op:
        raise PrecisionLossError(
            "nonzero fractional digits with no rounding selected",
            operation="kernel_to_big_int",
            snippet=kernel.to_native_str(),
        )
    return kernel.copy().round(rounding.with_digits(0), rng).to_int()


def big_int_to_kernel(value: int) -> NumericKernel:
    return NumericKernel.from_int(value)


# ----------------------------
# Exponentiation
# ----------------------------

def _exponent_fraction(exponent: Exponent, operation: str) -> Fraction:
    if isinstance(exponent, bool):
        raise ValidationError("exponent must be numeric", operation=operation, snippet=exponent)
    if isinstance(exponent, NumericKernel):
        return exponent.to_fraction()
    if isinstance(exponent, Decimal):
        if not exponent.is_finite():
            raise ValidationError("exponent must be finite", operation=operation, snippet=exponent)
        return Fraction(exponent)
    if isinstance(exponent, (int, Fraction)):
        return Fraction(exponent)
    raise ValidationError("unsupported exponent type", operation=operation, snippet=exponent)


def raise_to_integer_exponent(
    base: NumericKernel,
    exponent: int,
    extra_buffer_digits: int = DEFAULT_BUFFER_DIGITS,
    rounding: Optional[RoundingSpec] = None,
    rng: Optional[RandomSource] = None,
) -> NumericKernel:
    """base ** exponent computed exactly on the digits, then rounded per `rounding`.

    The result is exact before rounding, so the buffer only has to be a
    valid (non-negative) digit count.
    """
    _check_kernel(base, "raise_to_integer_exponent")
    _check_buffer(extra_buffer_digits, "raise_to_integer_exponent")
    if not isinstance(exponent, int) or isinstance(exponent, bool):
        raise ValidationError("exponent must be an int", operation="raise_to_integer_exponent", snippet=exponent)
    if exponent < 0:
        raise ValidationError("exponent must be >= 0", operation="raise_to_integer_exponent", snippet=exponent)
    if exponent == 0:
        return _finish(NumericKernel.from_int(1), rounding, rng)
    scaled = base.scaled_int ** exponent
    result = NumericKernel.from_scaled_int(scaled, base.fractional_len * exponent)
    _dbg(f"raise_to_integer_exponent: {base}^{exponent} -> {result}")
    return _finish(result, rounding, rng)


def _big_float_power(base: BigFloat, n: int, precision: int) -> BigFloat:
    """Left-to-right binary exponentiation at a fixed precision."""
    result = BigFloat.from_int(1, precision)
    for bit in bin(n)[2:]:
        result = result.mul(result, precision)
        if bit == "1":
            result = result.mul(base, precision)
    return result


def raise_to_real_exponent(
    base: NumericKernel,
    exponent: Exponent,
    extra_buffer_digits: int = DEFAULT_BUFFER_DIGITS,
    rounding: Optional[RoundingSpec] = None,
    rng: Optional[RandomSource] = None,
) -> NumericKernel:
    """base ** exponent for a non-negative real exponent.

    Non-integral exponents need a positive base and produce a result with
    the precision of the Decimal context (all required digits plus buffer).
    """
    _check_kernel(base, "raise_to_real_exponent")
    _check_buffer(extra_buffer_digits, "raise_to_real_exponent")
    exp = _exponent_fraction(exponent, "raise_to_real_exponent")
    if exp < 0:
        raise ValidationError("exponent must be >= 0", operation="raise_to_real_exponent", snippet=exponent)
    if exp == 0:
        return _finish(NumericKernel.from_int(1), rounding, rng)

    int_len = max(base.integer_len, 1)
    frac_len = base.fractional_len

    if exp.denominator == 1:
        n = exp.numerator
        buffer = extra_buffer_digits + EXPONENT_GUARD_DIGITS
        precision = precision_bits_from_required_digits(int_len * n, frac_len * n, buffer)
        bf = BigFloat.from_fraction(base.to_fraction(), precision, DEFAULT_BINARY_ROUNDING)
        power = _big_float_power(bf, n, precision)
        _dbg(f"raise_to_real_exponent: {base}^{n} prec={precision} -> {power}")
        # snap to the decimal grid of the exact result
        snapped = power.to_kernel(RoundingSpec(RoundingType.HALF_TO_EVEN, frac_len * n))
        return _finish(snapped, rounding, rng)

    if base.sign is not NumericSign.POSITIVE:
        raise ValidationError(
            "non-integral exponent requires a positive base",
            operation="raise_to_real_exponent",
            snippet=base.to_native_str(),
        )
    whole = math.ceil(exp)
    digits = (int_len + frac_len) * whole + extra_buffer_digits
    with localcontext() as ctx:
        ctx.prec = max(digits, MIN_DECIMAL_CONTEXT_PRECISION)
        d_exp = Decimal(exp.numerator) / Decimal(exp.denominator)
        value = base.to_decimal() ** d_exp
    _dbg(f"raise_to_real_exponent: {base}^{exp} prec={ctx.prec} -> {value}")
    return _finish(NumericKernel.from_decimal(value), rounding, rng)


__all__ = [
    "DEBUG_BRIDGES",
    "kernel_to_big_float",
    "big_float_to_kernel",
    "kernel_to_big_int",
    "big_int_to_kernel",
    "raise_to_integer_exponent",
    "raise_to_real_exponent",
]
