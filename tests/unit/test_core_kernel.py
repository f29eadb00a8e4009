from decimal import Decimal
from fractions import Fraction

import pytest

from numstr.core.datatypes import NumericSign
from numstr.core.exc import PrecisionLossError, ValidationError
from numstr.core.kernel import NumericKernel, SciNotationStyle, ScientificNotation
from numstr.core.rounding import RoundingSpec, RoundingType
from numstr.pure_parser import parse_pure_number


# -----------------------------
# Construction & sign invariant
# -----------------------------

def test_constructor_keeps_digits_verbatim():
    print("[kernel-ctor] '0012'.'3400' keeps leading and trailing zeros")
    k = NumericKernel("0012", "3400", NumericSign.NEGATIVE)
    assert k.integer_str == "0012"
    assert k.fractional_str == "3400"
    assert k.sign is NumericSign.NEGATIVE
    assert k.to_native_str() == "-0012.3400"


def test_all_zero_digits_force_zero_sign():
    print("[kernel-zero] '000'.'00' with NEGATIVE sign -> ZERO")
    k = NumericKernel("000", "00", NumericSign.NEGATIVE)
    assert k.sign is NumericSign.ZERO
    assert k.is_zero()
    assert k.to_native_str() == "000.00"


def test_zero_sign_with_nonzero_digits_rejected():
    with pytest.raises(ValidationError):
        NumericKernel("1", "", NumericSign.ZERO)
    k = NumericKernel("1", "5")
    with pytest.raises(ValidationError):
        k.set_sign(NumericSign.ZERO)


@pytest.mark.parametrize(
    "integer,fractional,sign",
    [("12a", "", 1), ("1", "-5", 1), ("1", "", 5)],
)
def test_invalid_components_rejected(integer, fractional, sign):
    with pytest.raises(ValidationError):
        NumericKernel(integer, fractional, sign)


def test_append_digits_updates_sign():
    k = NumericKernel.zero()
    k.append_fractional_digit("0")
    assert k.is_zero()
    k.append_fractional_digit("5")
    assert k.sign is NumericSign.POSITIVE
    assert k.to_native_str() == "0.05"


def test_negate_and_copy_abs():
    k = parse_pure_number("12.5")
    k.negate()
    assert k.to_native_str() == "-12.5"
    assert k.copy_abs().to_native_str() == "12.5"
    assert k.is_negative()
    z = NumericKernel.zero()
    z.negate()
    assert z.sign is NumericSign.ZERO


def test_copy_is_independent():
    a = parse_pure_number("1.25")
    b = a.copy()
    b.round(RoundingSpec(RoundingType.TRUNCATE, 1))
    assert a.to_native_str() == "1.25"
    assert b.to_native_str() == "1.2"


def test_trim_and_extend():
    k = NumericKernel("00123", "4500")
    k.trim_leading_zeros()
    k.trim_trailing_zeros()
    assert k.to_native_str() == "123.45"
    k.extend_fractional(2)
    k.extend_integer(1)
    assert k.to_native_str() == "0123.4500"
    z = NumericKernel("000", "")
    z.trim_leading_zeros()
    assert z.integer_str == "0"


# -----------------------------
# Bridges to Python numbers
# -----------------------------

@pytest.mark.parametrize(
    "value,expected",
    [
        (Decimal("1.2300"), "1.2300"),
        (Decimal("-0.005"), "-0.005"),
        (Decimal("1E+3"), "1000"),
        (Decimal("-0"), "0"),
        (Decimal("42"), "42"),
    ],
)
def test_from_decimal(value, expected):
    k = NumericKernel.from_decimal(value)
    print(f"[kernel-from_decimal] {value!r} -> {k}")
    assert k.to_native_str() == expected
    assert k.to_decimal() == value


def test_from_decimal_rejects_non_finite():
    with pytest.raises(ValidationError):
        NumericKernel.from_decimal(Decimal("NaN"))
    with pytest.raises(ValidationError):
        NumericKernel.from_decimal(Decimal("-Infinity"))


def test_from_float_uses_shortest_repr():
    assert NumericKernel.from_float(0.1).to_native_str() == "0.1"
    assert NumericKernel.from_float(-2.5).to_native_str() == "-2.5"
    with pytest.raises(ValidationError):
        NumericKernel.from_float(float("nan"))


def test_from_int_and_scaled_int():
    assert NumericKernel.from_int(-1234).to_native_str() == "-1234"
    assert NumericKernel.from_int(0).sign is NumericSign.ZERO
    assert NumericKernel.from_scaled_int(-5, 3).to_native_str() == "-0.005"
    assert NumericKernel.from_scaled_int(123456, 2).to_native_str() == "1234.56"
    with pytest.raises(ValidationError):
        NumericKernel.from_int(True)  # type: ignore[arg-type]


def test_from_fraction_exact_and_rounded():
    print("[kernel-from_fraction] 1/8 exact; 1/3 needs a spec; -2/3 -> 3 digits")
    assert NumericKernel.from_fraction(Fraction(1, 8)).to_native_str() == "0.125"
    with pytest.raises(PrecisionLossError):
        NumericKernel.from_fraction(Fraction(1, 3))
    spec = RoundingSpec(RoundingType.HALF_AWAY_FROM_ZERO, 5)
    assert NumericKernel.from_fraction(Fraction(1, 3), spec).to_native_str() == "0.33333"
    spec3 = RoundingSpec(RoundingType.HALF_AWAY_FROM_ZERO, 3)
    assert NumericKernel.from_fraction(Fraction(-2, 3), spec3).to_native_str() == "-0.667"


def test_to_fraction_and_int():
    k = parse_pure_number("-12.75")
    assert k.to_fraction() == Fraction(-51, 4)
    assert k.to_int() == -12
    assert k.scaled_int == -1275
    assert parse_pure_number("12.000").has_fraction() is False


def test_significant_digit_count():
    assert parse_pure_number("0.00123").significant_digit_count == 3
    assert parse_pure_number("1200.00").significant_digit_count == 6
    assert NumericKernel.zero().significant_digit_count == 1


def test_pure_string_trailing_minus():
    print("[kernel-pure] -1234.568 with ',' and trailing minus -> '1234,568-'")
    k = parse_pure_number("-1234.568")
    assert k.to_pure_str(",", leading_minus=False) == "1234,568-"
    assert k.to_pure_str() == "-1234.568"


# -----------------------------
# Comparison law
# -----------------------------

_VALUES = [
    "1234.5678",
    "5234.5678",
    "-234.5678",
    "-1234.5678",
    "0",
    "0.0001",
    "-0.0001",
    "1234.56780",
    "001234.5678",
    "99",
    "100.0",
    "-99.999",
]


@pytest.mark.parametrize("a", _VALUES)
@pytest.mark.parametrize("b", _VALUES)
def test_compare_matches_sign_of_difference(a, b):
    ka, kb = parse_pure_number(a), parse_pure_number(b)
    diff = Decimal(a) - Decimal(b)
    expected = (diff > 0) - (diff < 0)
    assert ka.compare(kb) == expected
    assert (ka == kb) == (expected == 0)
    assert (ka < kb) == (expected < 0)
    assert (ka >= kb) == (expected >= 0)


def test_value_equality_vs_same_digits():
    a, b = parse_pure_number("1.50"), parse_pure_number("1.5")
    assert a == b
    assert not a.same_digits(b)
    assert a.same_digits(a.copy())


def test_compare_rejects_other_types():
    with pytest.raises(ValidationError):
        parse_pure_number("1").compare(1)  # type: ignore[arg-type]
    assert (parse_pure_number("1") == 1) is False


# -----------------------------
# Scientific notation
# -----------------------------

@pytest.mark.parametrize(
    "value,style,expected",
    [
        ("1234567.890", SciNotationStyle.MANTISSA_EXPONENT, "1.23456789 x 10^6"),
        ("1234567.8901", SciNotationStyle.EXPONENTIAL, "1.2345678901E+6"),
        ("0.00123", SciNotationStyle.MANTISSA_EXPONENT, "1.23 x 10^-3"),
        ("-0.5", SciNotationStyle.EXPONENTIAL, "-5E-1"),
        ("0.000", SciNotationStyle.MANTISSA_EXPONENT, "0 x 10^0"),
        ("7", SciNotationStyle.EXPONENTIAL, "7E+0"),
    ],
)
def test_scientific_notation(value, style, expected):
    sci = parse_pure_number(value).to_scientific()
    print(f"[kernel-sci] {value} -> {sci.to_str(style)}")
    assert sci.to_str(style) == expected


def test_scientific_notation_rounding_carry():
    print("[kernel-sci-carry] 9.996 significand rounded to 2 digits -> 1.00E+1")
    sci = parse_pure_number("9.996").to_scientific(RoundingSpec(RoundingType.HALF_AWAY_FROM_ZERO, 2))
    assert sci.to_str(SciNotationStyle.EXPONENTIAL) == "1.00E+1"


def test_scientific_notation_back_to_kernel():
    sci = parse_pure_number("1234567.8901").to_scientific()
    assert sci.to_kernel() == parse_pure_number("1234567.8901")
    assert ScientificNotation(NumericSign.POSITIVE, "12", 3).to_kernel().to_native_str() == "1200"
    with pytest.raises(ValidationError):
        ScientificNotation(NumericSign.POSITIVE, "", 0)
