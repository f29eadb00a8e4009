"""
NumericKernel: sign + integer DigitRun + fractional DigitRun.

- The value is sign x (integer . fractional) read as a decimal literal.
- Digits are kept exactly as given; leading integer zeros and trailing
  fractional zeros survive until an explicit trim, round or extend call.
- All-zero digits force the sign to ZERO. A ZERO sign with nonzero digits
  is rejected.
- Comparisons are by value: runs are aligned by magnitude, so "001.50" and
  "1.5" compare equal while still rendering differently.

Decimal and Fraction bridges are exact. Float input goes through repr()
so that 0.1 becomes "0.1", not the full binary expansion.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from decimal import Decimal
from enum import Enum
from fractions import Fraction
from typing import Optional, Union

from .datatypes import NumericSign
from .digits import DigitRun
from .exc import PrecisionLossError, ValidationError
from .rounding import RandomSource, RoundingSpec, round_digits, round_ratio

DigitsLike = Union[str, DigitRun]


def _run(digits: Optional[DigitsLike], operation: str) -> DigitRun:
    if digits is None:
        return DigitRun()
    if isinstance(digits, DigitRun):
        return digits.copy()
    if isinstance(digits, str):
        try:
            return DigitRun.from_str(digits)
        except ValidationError:
            raise ValidationError("digit runs may only contain 0-9", operation=operation, snippet=digits) from None
    raise ValidationError("expected str or DigitRun", operation=operation, snippet=digits)


def _coerce_sign(sign: Union[NumericSign, int], operation: str) -> NumericSign:
    try:
        return NumericSign(sign)
    except ValueError:
        raise ValidationError("sign must be -1, 0 or 1", operation=operation, snippet=sign) from None


def _finite_decimal_places(denominator: int) -> Optional[int]:
    """Places needed to write 1/denominator exactly in decimal, or None if it never terminates."""
    twos = fives = 0
    while denominator % 2 == 0:
        denominator //= 2
        twos += 1
    while denominator % 5 == 0:
        denominator //= 5
        fives += 1
    if denominator != 1:
        return None
    return max(twos, fives)


class NumericKernel:
    """Arbitrary-precision signed decimal number held as digit runs."""

    __slots__ = ("_sign", "_integer", "_fractional")

    def __init__(
        self,
        integer: Optional[DigitsLike] = None,
        fractional: Optional[DigitsLike] = None,
        sign: Union[NumericSign, int] = NumericSign.POSITIVE,
    ):
        self._integer = _run(integer, "NumericKernel")
        self._fractional = _run(fractional, "NumericKernel")
        self._sign = NumericSign.ZERO
        self.set_sign(sign)

    # ------------- constructors -------------

    @staticmethod
    def zero() -> "NumericKernel":
        return NumericKernel("0", "", NumericSign.ZERO)

    @classmethod
    def from_scaled_int(cls, value: int, fractional_digits: int) -> "NumericKernel":
        """Build value / 10**fractional_digits, keeping exactly `fractional_digits` digits."""
        if fractional_digits < 0:
            raise ValidationError(
                "fractional_digits must be >= 0", operation="NumericKernel.from_scaled_int", snippet=fractional_digits
            )
        text = str(abs(value)).rjust(fractional_digits + 1, "0")
        if fractional_digits:
            integer, fractional = text[:-fractional_digits], text[-fractional_digits:]
        else:
            integer, fractional = text, ""
        return cls(integer, fractional, NumericSign.of(value))

    @classmethod
    def from_int(cls, value: int) -> "NumericKernel":
        if not isinstance(value, int) or isinstance(value, bool):
            raise ValidationError("expected int", operation="NumericKernel.from_int", snippet=value)
        return cls.from_scaled_int(value, 0)

    @classmethod
    def from_decimal(cls, value: Decimal) -> "NumericKernel":
        """Exact bridge from a finite Decimal (exponent and trailing zeros preserved)."""
        if not isinstance(value, Decimal):
            raise ValidationError("expected Decimal", operation="NumericKernel.from_decimal", snippet=value)
        if not value.is_finite():
            raise ValidationError("Decimal must be finite", operation="NumericKernel.from_decimal", snippet=value)
        tup = value.as_tuple()
        digits = "".join(str(d) for d in tup.digits)
        exp = tup.exponent
        if exp >= 0:
            integer, fractional = digits + "0" * exp, ""
        else:
            k = -exp
            if len(digits) <= k:
                integer, fractional = "0", digits.rjust(k, "0")
            else:
                integer, fractional = digits[:-k], digits[-k:]
        sign = NumericSign.NEGATIVE if tup.sign else NumericSign.POSITIVE
        return cls(integer, fractional, sign)

    @classmethod
    def from_float(cls, value: float) -> "NumericKernel":
        """Bridge from float via its shortest repr ("0.1" stays 0.1)."""
        if not math.isfinite(value):
            raise ValidationError("float must be finite", operation="NumericKernel.from_float", snippet=value)
        return cls.from_decimal(Decimal(repr(float(value))))

    @classmethod
    def from_fraction(
        cls,
        value: Fraction,
        rounding: Optional[RoundingSpec] = None,
        rng: Optional[RandomSource] = None,
    ) -> "NumericKernel":
        """Bridge from an exact rational.

        Without rounding (None, NONE or NO_ROUNDING) the decimal expansion must
        terminate, otherwise PrecisionLossError. With rounding the value is
        rounded exactly to the target number of fractional digits.
        """
        value = Fraction(value)
        if rounding is None or rounding.is_no_op:
            places = _finite_decimal_places(value.denominator)
            if places is None:
                raise PrecisionLossError(
                    "non-terminating decimal expansion needs a rounding spec",
                    operation="NumericKernel.from_fraction",
                    snippet=value,
                )
            return cls.from_scaled_int(value.numerator * 10 ** places // value.denominator, places)
        t = rounding.target_fractional_digits
        scaled = round_ratio(value.numerator * 10 ** t, value.denominator, rounding.rounding_type, rng)
        return cls.from_scaled_int(scaled, t)

    def copy(self) -> "NumericKernel":
        k = NumericKernel.__new__(NumericKernel)
        k._integer = self._integer.copy()
        k._fractional = self._fractional.copy()
        k._sign = self._sign
        return k

    # ------------- accessors -------------

    @property
    def sign(self) -> NumericSign:
        return self._sign

    @property
    def integer_digits(self) -> DigitRun:
        """A copy of the integer run."""
        return self._integer.copy()

    @property
    def fractional_digits(self) -> DigitRun:
        """A copy of the fractional run."""
        return self._fractional.copy()

    @property
    def integer_str(self) -> str:
        return self._integer.to_str()

    @property
    def fractional_str(self) -> str:
        return self._fractional.to_str()

    @property
    def integer_len(self) -> int:
        return len(self._integer)

    @property
    def fractional_len(self) -> int:
        return len(self._fractional)

    def is_zero(self) -> bool:
        return self._sign is NumericSign.ZERO

    def is_negative(self) -> bool:
        return self._sign is NumericSign.NEGATIVE

    def has_fraction(self) -> bool:
        """True when any fractional digit is nonzero."""
        return not self._fractional.is_zero()

    @property
    def significant_digit_count(self) -> int:
        """Digits from the first nonzero digit through the last stored digit (at least 1)."""
        digits = self._integer.to_str() + self._fractional.to_str()
        stripped = digits.lstrip("0")
        return max(len(stripped), 1)

    @property
    def scaled_int(self) -> int:
        """Signed integer formed by all digits (value x 10**fractional_len)."""
        return int(self._sign) * int(self._integer.to_str() + self._fractional.to_str() or "0")

    # ------------- conversions -------------

    def to_decimal(self) -> Decimal:
        digits = tuple(int(ch) for ch in self._integer.to_str() + self._fractional.to_str()) or (0,)
        return Decimal((1 if self.is_negative() else 0, digits, -len(self._fractional)))

    def to_fraction(self) -> Fraction:
        return Fraction(self.scaled_int, 10 ** len(self._fractional))

    def to_int(self) -> int:
        """Integer part with the sign applied (truncates toward zero)."""
        return int(self._sign) * self._integer.to_int()

    def to_native_str(self) -> str:
        """Plain "-1234.56" rendering; no grouping, '.' separator."""
        return self.to_pure_str(".", leading_minus=True)

    def to_pure_str(self, decimal_separator: str = ".", leading_minus: bool = True) -> str:
        """Sign, digits and one decimal separator. A trailing '-' when leading_minus is False."""
        body = self._integer.to_str() or "0"
        if len(self._fractional):
            body += decimal_separator + self._fractional.to_str()
        if not self.is_negative():
            return body
        return "-" + body if leading_minus else body + "-"

    def __str__(self) -> str:
        return self.to_native_str()

    def __repr__(self) -> str:
        return f"NumericKernel({self.to_native_str()!r})"

    # ------------- mutators -------------

    def set_sign(self, sign: Union[NumericSign, int]) -> None:
        """Set the sign. All-zero digits always force ZERO."""
        sign = _coerce_sign(sign, "NumericKernel.set_sign")
        all_zero = self._integer.is_zero() and self._fractional.is_zero()
        if all_zero:
            self._sign = NumericSign.ZERO
            return
        if sign is NumericSign.ZERO:
            raise ValidationError(
                "ZERO sign with nonzero digits", operation="NumericKernel.set_sign", snippet=self.to_native_str()
            )
        self._sign = sign

    def negate(self) -> None:
        if self._sign is not NumericSign.ZERO:
            self._sign = NumericSign(-int(self._sign))

    def copy_abs(self) -> "NumericKernel":
        k = self.copy()
        if k._sign is NumericSign.NEGATIVE:
            k._sign = NumericSign.POSITIVE
        return k

    def append_integer_digit(self, digit: str) -> None:
        self._integer.append(digit)
        self._refresh_sign()

    def append_fractional_digit(self, digit: str) -> None:
        self._fractional.append(digit)
        self._refresh_sign()

    def _refresh_sign(self) -> None:
        if self._integer.is_zero() and self._fractional.is_zero():
            self._sign = NumericSign.ZERO
        elif self._sign is NumericSign.ZERO:
            self._sign = NumericSign.POSITIVE

    def round(self, spec: RoundingSpec, rng: Optional[RandomSource] = None) -> "NumericKernel":
        """Round in place per `spec`; returns self for chaining."""
        if not isinstance(spec, RoundingSpec):
            raise ValidationError("expected RoundingSpec", operation="NumericKernel.round", snippet=spec)
        self._sign = round_digits(self._integer, self._fractional, self._sign, spec, rng)
        return self

    def extend_fractional(self, n: int) -> None:
        """Append `n` trailing '0' fractional digits (value unchanged)."""
        self._fractional.extend_right(n)

    def extend_integer(self, n: int) -> None:
        """Prepend `n` leading '0' integer digits (value unchanged)."""
        self._integer.extend_left(n)

    def trim_trailing_zeros(self) -> None:
        self._fractional.strip_trailing_zeros()

    def trim_leading_zeros(self) -> None:
        """Strip leading integer zeros, keeping a single '0' for |value| < 1."""
        self._integer.strip_leading_zeros(keep=1)

    # ------------- comparisons (value domain) -------------

    def _magnitude_cmp(self, other: "NumericKernel") -> int:
        a_int = self._integer.to_str().lstrip("0")
        b_int = other._integer.to_str().lstrip("0")
        if len(a_int) != len(b_int):
            return (len(a_int) > len(b_int)) - (len(a_int) < len(b_int))
        if a_int != b_int:
            return (a_int > b_int) - (a_int < b_int)
        a_frac = self._fractional.to_str()
        b_frac = other._fractional.to_str()
        width = max(len(a_frac), len(b_frac))
        a_frac, b_frac = a_frac.ljust(width, "0"), b_frac.ljust(width, "0")
        return (a_frac > b_frac) - (a_frac < b_frac)

    def compare(self, other: "NumericKernel") -> int:
        """Return -1, 0 or 1 as self is less than, equal to or greater than other."""
        if not isinstance(other, NumericKernel):
            raise ValidationError("expected NumericKernel", operation="NumericKernel.compare", snippet=other)
        s1, s2 = int(self._sign), int(other._sign)
        if s1 != s2:
            return (s1 > s2) - (s1 < s2)
        if s1 == 0:
            return 0
        return s1 * self._magnitude_cmp(other)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NumericKernel):
            return NotImplemented
        return self.compare(other) == 0

    def __lt__(self, other: "NumericKernel") -> bool:
        if not isinstance(other, NumericKernel):
            return NotImplemented
        return self.compare(other) < 0

    def __le__(self, other: "NumericKernel") -> bool:
        if not isinstance(other, NumericKernel):
            return NotImplemented
        return self.compare(other) <= 0

    def __gt__(self, other: "NumericKernel") -> bool:
        if not isinstance(other, NumericKernel):
            return NotImplemented
        return self.compare(other) > 0

    def __ge__(self, other: "NumericKernel") -> bool:
        if not isinstance(other, NumericKernel):
            return NotImplemented
        return self.compare(other) >= 0

    __hash__ = None  # mutable

    def same_digits(self, other: "NumericKernel") -> bool:
        """Representation equality: identical sign and digit runs."""
        return (
            self._sign is other._sign
            and self._integer == other._integer
            and self._fractional == other._fractional
        )

    # ------------- scientific notation -------------

    def to_scientific(
        self,
        rounding: Optional[RoundingSpec] = None,
        rng: Optional[RandomSource] = None,
    ) -> "ScientificNotation":
        """Normalised d.ddd x 10^e form; `rounding` applies to the significand's fractional digits."""
        if self.is_zero():
            return ScientificNotation(NumericSign.ZERO, "0", 0)
        int_digits = self._integer.to_str().lstrip("0")
        frac_digits = self._fractional.to_str()
        if int_digits:
            exponent = len(int_digits) - 1
            digits = int_digits + frac_digits
        else:
            stripped = frac_digits.lstrip("0")
            exponent = -(len(frac_digits) - len(stripped) + 1)
            digits = stripped
        significand = NumericKernel(digits[0], digits[1:], NumericSign.POSITIVE)
        if rounding is not None:
            significand.round(rounding, rng)
            if significand.integer_len > 1:
                # carry produced 10.xxx
                carried = significand.integer_str + significand.fractional_str
                significand = NumericKernel(carried[0], carried[1:significand.fractional_len + 1])
                exponent += 1
        if rounding is None or rounding.is_no_op:
            significand.trim_trailing_zeros()
        return ScientificNotation(self._sign, significand.integer_str + significand.fractional_str, exponent)


# ---------------------------------------------------------------------------
# Scientific notation
# ---------------------------------------------------------------------------

class SciNotationStyle(Enum):
    """Rendering styles for ScientificNotation."""
    EXPONENTIAL = "Exponential"             # 1.2345678901E+6
    MANTISSA_EXPONENT = "MantissaExponent"  # 1.23456789 x 10^6


@dataclass(frozen=True)
class ScientificNotation:
    """sign x d.ddd x 10^exponent; `digits` holds the significand digits without the point."""

    sign: NumericSign
    digits: str
    exponent: int

    def __post_init__(self):
        if not self.digits or any(ch not in "0123456789" for ch in self.digits):
            raise ValidationError("significand must be decimal digits", operation="ScientificNotation", snippet=self.digits)

    @property
    def significand(self) -> str:
        d = self.digits
        return d[0] + ("." + d[1:] if len(d) > 1 else "")

    def to_kernel(self) -> NumericKernel:
        """Exact value as a NumericKernel."""
        if self.sign is NumericSign.ZERO:
            return NumericKernel.zero()
        frac_len = len(self.digits) - 1 - self.exponent
        value = int(self.digits)
        if frac_len < 0:
            return NumericKernel.from_scaled_int(int(self.sign) * value * 10 ** -frac_len, 0)
        return NumericKernel.from_scaled_int(int(self.sign) * value, frac_len)

    def to_str(self, style: SciNotationStyle = SciNotationStyle.MANTISSA_EXPONENT) -> str:
        prefix = "-" if self.sign is NumericSign.NEGATIVE else ""
        if style is SciNotationStyle.EXPONENTIAL:
            return f"{prefix}{self.significand}E{self.exponent:+d}"
        return f"{prefix}{self.significand} x 10^{self.exponent}"

    def __str__(self) -> str:
        return self.to_str()


__all__ = [
    "NumericKernel",
    "SciNotationStyle",
    "ScientificNotation",
]
