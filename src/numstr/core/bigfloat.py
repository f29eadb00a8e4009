"""
BigFloat: arbitrary-precision binary floating-point value.

value = sign x mantissa x 2^exponent, with mantissa < 2^precision.

Alignment notes:
- Canonical form: mantissa is odd (trailing zero bits folded into the
  exponent); zero is (ZERO, 0, 0). Two BigFloats with equal value and
  precision therefore compare equal field by field.
- Construction from an exact rational rounds to `precision` significant
  bits with the shared rounding decision table (round_ratio), so FLOOR,
  CEILING, HALF_TO_EVEN and friends mean the same thing in binary as they
  do on decimal digit runs. NO_ROUNDING demands an exact fit.
- All intermediate values are exact Fractions; only the final fit to
  `precision` bits can round.
"""

from __future__ import annotations

from dataclasses import dataclass
from fractions import Fraction
from typing import Optional, Tuple, Union

from .datatypes import NumericSign
from .exc import ValidationError
from .kernel import NumericKernel
from .rounding import RandomSource, RoundingSpec, RoundingType, round_ratio

# Debug printing control
DEBUG_BIGFLOAT = False

def _dbg(msg: str) -> None:
    if DEBUG_BIGFLOAT:
        print(msg)


#: Rounding applied by arithmetic when the caller does not choose one.
DEFAULT_BINARY_ROUNDING = RoundingType.HALF_TO_EVEN


def _check_precision(precision: int, operation: str) -> None:
    if not isinstance(precision, int) or isinstance(precision, bool) or precision < 1:
        raise ValidationError("precision must be a positive int (bits)", operation=operation, snippet=precision)


def _fold_trailing_zeros(m: int, e: int) -> Tuple[int, int]:
    if m == 0:
        return 0, 0
    tz = (m & -m).bit_length() - 1
    return m >> tz, e + tz


@dataclass(frozen=True)
class BigFloat:
    """Binary float with an explicit precision in bits."""

    sign: NumericSign
    mantissa: int
    exponent: int
    precision: int

    def __post_init__(self):
        _check_precision(self.precision, "BigFloat")
        if self.mantissa < 0:
            raise ValidationError("mantissa must be >= 0", operation="BigFloat", snippet=self.mantissa)
        if self.mantissa.bit_length() > self.precision:
            raise ValidationError(
                f"mantissa needs {self.mantissa.bit_length()} bits, precision is {self.precision}",
                operation="BigFloat",
            )
        if (self.mantissa == 0) != (self.sign is NumericSign.ZERO):
            raise ValidationError("sign/mantissa mismatch", operation="BigFloat", snippet=self.sign)
        m, e = _fold_trailing_zeros(self.mantissa, self.exponent)
        object.__setattr__(self, "mantissa", m)
        object.__setattr__(self, "exponent", e)

    # ------------- constructors -------------

    @staticmethod
    def zero(precision: int) -> "BigFloat":
        return BigFloat(NumericSign.ZERO, 0, 0, precision)

    @classmethod
    def from_fraction(
        cls,
        value: Union[Fraction, int],
        precision: int,
        rounding_type: RoundingType = DEFAULT_BINARY_ROUNDING,
        rng: Optional[RandomSource] = None,
    ) -> "BigFloat":
        """Round an exact rational to `precision` significant bits."""
        _check_precision(precision, "BigFloat.from_fraction")
        value = Fraction(value)
        if value == 0:
            return cls.zero(precision)
        n, d = abs(value.numerator), value.denominator
        e = n.bit_length() - d.bit_length() - precision

        def scaled(exp: int) -> Tuple[int, int]:
            return (n, d << exp) if exp >= 0 else (n << -exp, d)

        num, den = scaled(e)
        while num >= den << precision:
            e += 1
            num, den = scaled(e)
        while num < den << (precision - 1):
            e -= 1
            num, den = scaled(e)

        negative = value < 0
        m = abs(round_ratio(-num if negative else num, den, rounding_type, rng))
        if m.bit_length() > precision:
            m >>= 1
            e += 1
        _dbg(f"BigFloat.from_fraction: value={value} prec={precision} -> m={m} e={e}")
        if m == 0:
            return cls.zero(precision)
        return cls(NumericSign.NEGATIVE if negative else NumericSign.POSITIVE, m, e, precision)

    @classmethod
    def from_int(cls, value: int, precision: Optional[int] = None) -> "BigFloat":
        """Exact when `precision` is omitted (uses the bit length of value)."""
        if precision is None:
            precision = max(abs(value).bit_length(), 1)
        return cls.from_fraction(Fraction(value), precision, RoundingType.NO_ROUNDING)

    # ------------- predicates / queries -------------

    def is_zero(self) -> bool:
        return self.sign is NumericSign.ZERO

    def is_int(self) -> bool:
        return self.is_zero() or self.exponent >= 0

    def min_precision(self) -> int:
        """Smallest precision that represents this value exactly."""
        return max(self.mantissa.bit_length(), 1)

    # ------------- conversions -------------

    def to_fraction(self) -> Fraction:
        if self.is_zero():
            return Fraction(0)
        signed = int(self.sign) * self.mantissa
        if self.exponent >= 0:
            return Fraction(signed << self.exponent)
        return Fraction(signed, 1 << -self.exponent)

    def to_kernel(self, rounding: Optional[RoundingSpec] = None, rng: Optional[RandomSource] = None) -> NumericKernel:
        """Decimal view; without a rounding spec the complete (finite) expansion is kept."""
        return NumericKernel.from_fraction(self.to_fraction(), rounding, rng)

    def text(self, fractional_digits: int, rounding_type: RoundingType = DEFAULT_BINARY_ROUNDING) -> str:
        """Fixed-point text with exactly `fractional_digits` digits."""
        return self.to_kernel(RoundingSpec(rounding_type, fractional_digits)).to_native_str()

    def __str__(self) -> str:
        return self.to_kernel().to_native_str()

    # ------------- arithmetic -------------

    def with_precision(
        self,
        precision: int,
        rounding_type: RoundingType = DEFAULT_BINARY_ROUNDING,
        rng: Optional[RandomSource] = None,
    ) -> "BigFloat":
        return BigFloat.from_fraction(self.to_fraction(), precision, rounding_type, rng)

    def mul(
        self,
        other: "BigFloat",
        precision: Optional[int] = None,
        rounding_type: RoundingType = DEFAULT_BINARY_ROUNDING,
        rng: Optional[RandomSource] = None,
    ) -> "BigFloat":
        """Product rounded to `precision` bits (default: the larger operand precision)."""
        if not isinstance(other, BigFloat):
            raise ValidationError("BigFloat arithmetic requires BigFloat operands", operation="BigFloat.mul")
        prec = precision if precision is not None else max(self.precision, other.precision)
        if self.is_zero() or other.is_zero():
            return BigFloat.zero(prec)
        m = self.mantissa * other.mantissa
        e = self.exponent + other.exponent
        s = int(self.sign) * int(other.sign)
        exact = Fraction(s * m << e) if e >= 0 else Fraction(s * m, 1 << -e)
        return BigFloat.from_fraction(exact, prec, rounding_type, rng)

    def __mul__(self, other: "BigFloat") -> "BigFloat":
        if not isinstance(other, BigFloat):
            return NotImplemented
        return self.mul(other)

    def __neg__(self) -> "BigFloat":
        if self.is_zero():
            return self
        return BigFloat(NumericSign(-int(self.sign)), self.mantissa, self.exponent, self.precision)

    def compare(self, other: "BigFloat") -> int:
        a, b = self.to_fraction(), other.to_fraction()
        return (a > b) - (a < b)


__all__ = [
    "DEBUG_BIGFLOAT",
    "DEFAULT_BINARY_ROUNDING",
    "BigFloat",
]
