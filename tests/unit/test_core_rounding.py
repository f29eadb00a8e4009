import pytest

from numstr.core.datatypes import NumericSign
from numstr.core.exc import PrecisionLossError, ValidationError
from numstr.core.rounding import RoundingSpec, RoundingType, round_ratio
from numstr.pure_parser import parse_pure_number


def _round(text: str, digits: int, rounding_type: RoundingType, rng=None) -> str:
    k = parse_pure_number(text)
    k.round(RoundingSpec(rounding_type, digits), rng)
    return k.to_native_str()


RT = RoundingType


# -----------------------------
# Tie-break table (round to integer)
# -----------------------------

@pytest.mark.parametrize(
    "rounding_type,value,expected",
    [
        (RT.HALF_UP_WITH_NEG_NUMS, "7.5", "8"),
        (RT.HALF_UP_WITH_NEG_NUMS, "-7.5", "-7"),
        (RT.HALF_UP_WITH_NEG_NUMS, "7.4", "7"),
        (RT.HALF_UP_WITH_NEG_NUMS, "-7.6", "-8"),
        (RT.HALF_DOWN_WITH_NEG_NUMS, "7.5", "7"),
        (RT.HALF_DOWN_WITH_NEG_NUMS, "-7.5", "-8"),
        (RT.HALF_DOWN_WITH_NEG_NUMS, "7.6", "8"),
        (RT.HALF_AWAY_FROM_ZERO, "7.5", "8"),
        (RT.HALF_AWAY_FROM_ZERO, "-7.5", "-8"),
        (RT.HALF_AWAY_FROM_ZERO, "7.4", "7"),
        (RT.HALF_TOWARDS_ZERO, "7.5", "7"),
        (RT.HALF_TOWARDS_ZERO, "-7.5", "-7"),
        (RT.HALF_TOWARDS_ZERO, "7.6", "8"),
        (RT.HALF_TO_EVEN, "7.5", "8"),
        (RT.HALF_TO_EVEN, "8.5", "8"),
        (RT.HALF_TO_EVEN, "-8.5", "-8"),
        (RT.HALF_TO_EVEN, "-7.5", "-8"),
        (RT.HALF_TO_ODD, "7.5", "7"),
        (RT.HALF_TO_ODD, "8.5", "9"),
        (RT.HALF_TO_ODD, "-8.5", "-9"),
        (RT.FLOOR, "7.5", "7"),
        (RT.FLOOR, "-7.5", "-8"),
        (RT.FLOOR, "-7.1", "-8"),
        (RT.FLOOR, "7.9", "7"),
        (RT.CEILING, "7.1", "8"),
        (RT.CEILING, "-7.9", "-7"),
        (RT.TRUNCATE, "7.9", "7"),
        (RT.TRUNCATE, "-7.9", "-7"),
    ],
)
def test_rounding_table(rounding_type, value, expected):
    print(f"[round-table] {rounding_type.value}({value}, 0) -> expect {expected}")
    assert _round(value, 0, rounding_type) == expected


@pytest.mark.parametrize(
    "rounding_type,value,expected",
    [
        (RT.HALF_TO_EVEN, "2.50001", "3"),
        (RT.HALF_TO_EVEN, "2.5000", "2"),
        (RT.HALF_TO_ODD, "3.50001", "4"),
        (RT.HALF_TOWARDS_ZERO, "-2.5001", "-3"),
        (RT.HALF_DOWN_WITH_NEG_NUMS, "2.51", "3"),
    ],
)
def test_five_followed_by_nonzero_is_above_half(rounding_type, value, expected):
    print(f"[round-beyond] {value} is above the tie -> {expected}")
    assert _round(value, 0, rounding_type) == expected


# -----------------------------
# Carry, padding, zero results
# -----------------------------

@pytest.mark.parametrize(
    "value,digits,expected",
    [
        ("9.96", 1, "10.0"),
        ("-9.96", 1, "-10.0"),
        ("99.999", 2, "100.00"),
        ("0.96", 1, "1.0"),
        ("123456.78125", 4, "123456.7813"),
    ],
)
def test_carry_propagates_into_integer_run(value, digits, expected):
    print(f"[round-carry] {value} -> {digits} digits -> {expected}")
    assert _round(value, digits, RT.HALF_AWAY_FROM_ZERO) == expected


def test_halfawayfromzero_boundary_shown_with_five_digits():
    print("[round-boundary] 123456.78125 -> 4 digits -> padded to 5: 123456.78130")
    k = parse_pure_number("123456.78125")
    k.round(RoundingSpec(RT.HALF_AWAY_FROM_ZERO, 4))
    k.round(RoundingSpec(RT.HALF_AWAY_FROM_ZERO, 5))
    assert k.to_native_str() == "123456.78130"


def test_target_longer_than_fraction_pads_zeros():
    assert _round("1.5", 3, RT.HALF_AWAY_FROM_ZERO) == "1.500"
    assert _round("2", 2, RT.TRUNCATE) == "2.00"


def test_no_rounding_keeps_digits():
    for rt in (RT.NONE, RT.NO_ROUNDING):
        assert _round("1.23456", 2, rt) == "1.23456"


def test_rounding_to_zero_sets_zero_sign():
    print("[round-zero] -0.004 -> 2 digits -> 0.00 with ZERO sign")
    k = parse_pure_number("-0.004")
    k.round(RoundingSpec(RT.HALF_AWAY_FROM_ZERO, 2))
    assert k.sign is NumericSign.ZERO
    assert k.to_native_str() == "0.00"


def test_floor_and_ceiling_on_tiny_values():
    assert _round("-0.001", 2, RT.FLOOR) == "-0.01"
    assert _round("0.001", 2, RT.CEILING) == "0.01"
    assert _round("0.001", 2, RT.FLOOR) == "0.00"
    assert _round("-0.001", 2, RT.CEILING) == "0.00"


# -----------------------------
# Randomly
# -----------------------------

def test_randomly_uses_injected_source_only_on_ties(rng_up, rng_down):
    print("[round-random] tie consults rng; non-tie does not")
    assert _round("2.5", 0, RT.RANDOMLY, rng_up) == "3"
    assert _round("2.5", 0, RT.RANDOMLY, rng_down) == "2"
    assert rng_up.calls == 1 and rng_down.calls == 1
    assert _round("2.6", 0, RT.RANDOMLY, rng_down) == "3"
    assert _round("2.51", 0, RT.RANDOMLY, rng_down) == "3"
    assert _round("2.4", 0, RT.RANDOMLY, rng_up) == "2"
    assert rng_up.calls == 1 and rng_down.calls == 1


def test_randomly_with_seeded_rng_stays_within_neighbours(seeded_rng):
    results = {_round("4.5", 0, RT.RANDOMLY, seeded_rng) for _ in range(50)}
    print("[round-random-seeded] outcomes ->", sorted(results))
    assert results <= {"4", "5"}


def test_randomly_without_source_keeps_no_module_state():
    import random

    from numstr.core import rounding

    results = {_round("4.5", 0, RT.RANDOMLY) for _ in range(50)}
    print("[round-random-default] outcomes ->", sorted(results))
    assert results <= {"4", "5"}
    assert not any(isinstance(v, random.Random) for v in vars(rounding).values())


# -----------------------------
# Idempotence
# -----------------------------

@pytest.mark.parametrize("rounding_type", [rt for rt in RT if rt is not RT.RANDOMLY])
@pytest.mark.parametrize("value", ["123456.78125", "-0.0449", "9.995", "-2.5", "0.5"])
def test_rounding_is_idempotent(rounding_type, value):
    k = parse_pure_number(value)
    k.round(RoundingSpec(rounding_type, 2))
    once = k.to_native_str()
    k.round(RoundingSpec(rounding_type, 2))
    assert k.to_native_str() == once
    k.round(RoundingSpec(rounding_type, 1))
    twice = k.to_native_str()
    k.round(RoundingSpec(rounding_type, 1))
    assert k.to_native_str() == twice


# -----------------------------
# Spec validation & lookup
# -----------------------------

@pytest.mark.parametrize("bad", [-1, -10])
def test_negative_target_rejected(bad):
    print(f"[round-spec] target={bad} -> ValidationError")
    with pytest.raises(ValidationError):
        RoundingSpec(RT.HALF_AWAY_FROM_ZERO, bad)


def test_spec_rejects_non_enum_type():
    with pytest.raises(ValidationError):
        RoundingSpec("HalfToEven", 2)  # type: ignore[arg-type]


@pytest.mark.parametrize(
    "name,expected",
    [
        ("HalfAwayFromZero", RT.HALF_AWAY_FROM_ZERO),
        ("halfawayfromzero", RT.HALF_AWAY_FROM_ZERO),
        ("HALF_TO_EVEN", RT.HALF_TO_EVEN),
        ("NoRounding", RT.NO_ROUNDING),
        (" truncate ", RT.TRUNCATE),
    ],
)
def test_rounding_type_from_name(name, expected):
    assert RoundingType.from_name(name) is expected


def test_rounding_type_from_unknown_name():
    with pytest.raises(ValidationError):
        RoundingType.from_name("bankers")


# -----------------------------
# Ratio rounding
# -----------------------------

@pytest.mark.parametrize(
    "num,den,rounding_type,expected",
    [
        (15, 10, RT.HALF_TO_EVEN, 2),
        (25, 10, RT.HALF_TO_EVEN, 2),
        (-25, 10, RT.HALF_AWAY_FROM_ZERO, -3),
        (-15, 10, RT.FLOOR, -2),
        (-15, 10, RT.CEILING, -1),
        (8, 2, RT.NO_ROUNDING, 4),
        (1, -3, RT.TRUNCATE, 0),
        (2, 3, RT.HALF_TOWARDS_ZERO, 1),
    ],
)
def test_round_ratio(num, den, rounding_type, expected):
    assert round_ratio(num, den, rounding_type) == expected


def test_round_ratio_inexact_without_rounding():
    with pytest.raises(PrecisionLossError):
        round_ratio(7, 2, RT.NO_ROUNDING)
    with pytest.raises(ZeroDivisionError):
        round_ratio(1, 0, RT.TRUNCATE)
