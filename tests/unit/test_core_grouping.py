import pytest

from numstr.core.digits import DigitRun
from numstr.core.exc import ValidationError
from numstr.core.grouping import IntegerGroupingSpec, IntegerGroupingType


@pytest.mark.parametrize(
    "digits,sizes,restart,expected",
    [
        ("6789000000000000", (3,), False, "6,789,000,000,000,000"),
        ("6789000000000000", (3, 2), False, "6,78,90,00,00,00,00,000"),
        ("6789000000000000", (3, 2), True, "6,78,900,00,000,00,000"),
        ("12345678902345", (4,), False, "12,3456,7890,2345"),
        ("1234567", (1, 2, 3), False, "1,234,56,7"),
    ],
)
def test_grouping_patterns(digits, sizes, restart, expected):
    spec = IntegerGroupingSpec(",", sizes, restart)
    out = spec.apply(digits)
    print(f"[grouping] {digits} sizes={sizes} restart={restart} -> {out}")
    assert out == expected


@pytest.mark.parametrize(
    "digits,expected",
    [("", ""), ("1", "1"), ("123", "123"), ("1234", "1,234"), ("0001234", "0,001,234")],
)
def test_thousands_short_inputs(digits, expected):
    assert IntegerGroupingSpec.thousands().apply(digits) == expected


def test_apply_accepts_digit_run():
    assert IntegerGroupingSpec.thousands(".").apply(DigitRun.from_str("1234567")) == "1.234.567"


def test_presets():
    print("[grouping-presets] india / chinese / none")
    india = IntegerGroupingSpec.india()
    assert india.grouping_type is IntegerGroupingType.INDIA_NUMBERING
    assert india.apply("12345678") == "1,23,45,678"
    chinese = IntegerGroupingSpec.chinese()
    assert chinese.group_sizes == (4,)
    assert chinese.apply("123456789") == "1,2345,6789"
    assert IntegerGroupingSpec.none().apply("123456789") == "123456789"


@pytest.mark.parametrize(
    "spec",
    [
        IntegerGroupingSpec.none(),
        IntegerGroupingSpec(",", ()),
        IntegerGroupingSpec(",", (0,)),
        IntegerGroupingSpec(",", (0, 0)),
        IntegerGroupingSpec("", (3,)),
    ],
)
def test_no_op_specs(spec):
    assert spec.is_no_op
    assert spec.apply("1234567") == "1234567"


@pytest.mark.parametrize(
    "sizes",
    [(-1,), (3, -2), (0, 3), (3, 0), ("3",), (True,)],
)
def test_invalid_sizes_rejected(sizes):
    print(f"[grouping-invalid] sizes={sizes!r} -> ValidationError")
    with pytest.raises(ValidationError):
        IntegerGroupingSpec(",", sizes)


@pytest.mark.parametrize("separator", ["7", "0", " 1", 5])
def test_invalid_separator_rejected(separator):
    print(f"[grouping-invalid] separator={separator!r} -> ValidationError")
    with pytest.raises(ValidationError):
        IntegerGroupingSpec(separator, (3,))


def test_sizes_normalised_to_tuple():
    spec = IntegerGroupingSpec(" ", [3, 2])
    assert spec.group_sizes == (3, 2)
    with pytest.raises(ValidationError):
        IntegerGroupingSpec.from_type(IntegerGroupingType.CUSTOM)
    with pytest.raises(ValidationError):
        IntegerGroupingSpec(5, (3,))  # type: ignore[arg-type]
