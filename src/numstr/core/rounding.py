"""
Rounding engine for digit runs and exact ratios.

One decision table serves every rounding algorithm. It is fed with
{round-from comparison against one half, sign, parity of the last retained
digit, whether anything nonzero is dropped} and answers a single question:
does the retained magnitude move up by one unit?

Two front ends share that table:
- round_digits(): in-place rounding of an (integer, fractional) DigitRun pair,
  with carry propagation from the fractional run into the integer run.
- round_ratio(): rounding of an exact rational numerator/denominator to an
  integer (used by the binary float bridges).

Alignment notes:
- A round-from digit of 5 is a tie only when nothing nonzero follows it;
  5 followed by any nonzero digit is above half for every half-* algorithm.
- HALF_UP_WITH_NEG_NUMS breaks ties toward +infinity (7.5 -> 8, -7.5 -> -7).
- HALF_DOWN_WITH_NEG_NUMS breaks ties toward -infinity (7.5 -> 7, -7.5 -> -8).
- A target longer than the fractional run pads it with '0'.
"""

from __future__ import annotations

import random
from dataclasses import dataclass
from enum import Enum
from typing import Optional, Protocol

from .datatypes import NumericSign
from .digits import DigitRun
from .exc import PrecisionLossError, ValidationError

# Debug printing control
DEBUG_ROUNDING = False

def _dbg(msg: str) -> None:
    if DEBUG_ROUNDING:
        print(msg)


class RandomSource(Protocol):
    def random(self) -> float: ...


# ---------------------------------------------------------------------------
# Rounding type
# ---------------------------------------------------------------------------

class RoundingType(Enum):
    """Rounding algorithms. Values are the canonical display names."""
    NONE = "None"
    NO_ROUNDING = "NoRounding"
    HALF_UP_WITH_NEG_NUMS = "HalfUpWithNegNums"
    HALF_DOWN_WITH_NEG_NUMS = "HalfDownWithNegNums"
    HALF_AWAY_FROM_ZERO = "HalfAwayFromZero"
    HALF_TOWARDS_ZERO = "HalfTowardsZero"
    HALF_TO_EVEN = "HalfToEven"
    HALF_TO_ODD = "HalfToOdd"
    RANDOMLY = "Randomly"
    FLOOR = "Floor"
    CEILING = "Ceiling"
    TRUNCATE = "Truncate"

    @property
    def is_no_op(self) -> bool:
        return self in (RoundingType.NONE, RoundingType.NO_ROUNDING)

    @classmethod
    def from_name(cls, name: str) -> "RoundingType":
        """Case-insensitive lookup by display name ("HalfToEven") or member name ("HALF_TO_EVEN")."""
        key = name.strip().replace("_", "").replace(" ", "").lower()
        for member in cls:
            if member.value.lower() == key or member.name.replace("_", "").lower() == key:
                return member
        raise ValidationError("unknown rounding type", operation="RoundingType.from_name", snippet=name)


#: Rounding type used when a caller does not choose one.
DEFAULT_ROUNDING_TYPE = RoundingType.HALF_AWAY_FROM_ZERO


@dataclass(frozen=True)
class RoundingSpec:
    """Rounding algorithm plus the number of fractional digits to keep."""

    rounding_type: RoundingType = DEFAULT_ROUNDING_TYPE
    target_fractional_digits: int = 0

    def __post_init__(self):
        if not isinstance(self.rounding_type, RoundingType):
            raise ValidationError(
                "rounding_type must be a RoundingType", operation="RoundingSpec", snippet=self.rounding_type
            )
        if not isinstance(self.target_fractional_digits, int) or isinstance(self.target_fractional_digits, bool):
            raise ValidationError(
                "target_fractional_digits must be an int",
                operation="RoundingSpec",
                snippet=self.target_fractional_digits,
            )
        if self.target_fractional_digits < 0:
            raise ValidationError(
                "target_fractional_digits must be >= 0",
                operation="RoundingSpec",
                snippet=self.target_fractional_digits,
            )

    @staticmethod
    def no_rounding() -> "RoundingSpec":
        return RoundingSpec(RoundingType.NO_ROUNDING, 0)

    @property
    def is_no_op(self) -> bool:
        return self.rounding_type.is_no_op

    def with_digits(self, target_fractional_digits: int) -> "RoundingSpec":
        return RoundingSpec(self.rounding_type, target_fractional_digits)


# ---------------------------------------------------------------------------
# Decision table
# ---------------------------------------------------------------------------

def _bump_magnitude(
    rounding_type: RoundingType,
    *,
    negative: bool,
    retained_odd: bool,
    half_cmp: int,
    dropped_nonzero: bool,
    rng: Optional[RandomSource],
) -> bool:
    """Return True when the retained magnitude must grow by one unit.

    half_cmp compares the dropped part with one half of a retained unit:
    -1 below, 0 exactly half, +1 above.
    """
    if not dropped_nonzero:
        return False
    if rounding_type is RoundingType.TRUNCATE:
        return False
    if rounding_type is RoundingType.FLOOR:
        return negative
    if rounding_type is RoundingType.CEILING:
        return not negative
    if half_cmp > 0:
        return True
    if half_cmp < 0:
        return False

    # exact tie
    if rounding_type is RoundingType.HALF_AWAY_FROM_ZERO:
        return True
    if rounding_type is RoundingType.HALF_TOWARDS_ZERO:
        return False
    if rounding_type is RoundingType.HALF_UP_WITH_NEG_NUMS:
        return not negative
    if rounding_type is RoundingType.HALF_DOWN_WITH_NEG_NUMS:
        return negative
    if rounding_type is RoundingType.HALF_TO_EVEN:
        return retained_odd
    if rounding_type is RoundingType.HALF_TO_ODD:
        return not retained_odd
    if rounding_type is RoundingType.RANDOMLY:
        # no shared default source; an unseeded generator per decision
        return (rng if rng is not None else random.Random()).random() < 0.5
    raise ValidationError("rounding type has no decision rule", operation="round", snippet=rounding_type)


# ---------------------------------------------------------------------------
# Digit-run rounding
# ---------------------------------------------------------------------------

def _increment(integer: DigitRun, fractional: DigitRun) -> None:
    """Add one unit in the last place of `fractional` (or `integer` if empty), carrying left."""
    for run in (fractional, integer):
        i = len(run) - 1
        while i >= 0:
            d = run[i]
            if d != "9":
                run[i] = str(int(d) + 1)
                return
            run[i] = "0"
            i -= 1
    # carry exhausted the integer run
    integer.extend_left(1, "1")


def round_digits(
    integer: DigitRun,
    fractional: DigitRun,
    sign: NumericSign,
    spec: RoundingSpec,
    rng: Optional[RandomSource] = None,
) -> NumericSign:
    """Round the digit pair in place and return the resulting sign.

    The sign only changes to ZERO when every remaining digit is '0'.
    """
    if spec.is_no_op:
        return sign
    target = spec.target_fractional_digits
    n = len(fractional)
    if target >= n:
        fractional.extend_right(target - n)
        return sign

    round_from = int(fractional[target])
    beyond_nonzero = any(ch != "0" for ch in list(fractional)[target + 1:])
    if target > 0:
        retained = int(fractional[target - 1])
    else:
        retained = int(integer[-1]) if len(integer) else 0

    if round_from > 5 or (round_from == 5 and beyond_nonzero):
        half_cmp = 1
    elif round_from == 5:
        half_cmp = 0
    else:
        half_cmp = -1

    bump = _bump_magnitude(
        spec.rounding_type,
        negative=sign is NumericSign.NEGATIVE,
        retained_odd=retained % 2 == 1,
        half_cmp=half_cmp,
        dropped_nonzero=round_from != 0 or beyond_nonzero,
        rng=rng,
    )
    _dbg(
        f"round_digits: {integer}.{fractional} type={spec.rounding_type.value} "
        f"target={target} round_from={round_from} beyond={beyond_nonzero} bump={bump}"
    )
    fractional.truncate_right(n - target)
    if bump:
        _increment(integer, fractional)

    if integer.is_zero() and fractional.is_zero():
        return NumericSign.ZERO
    return sign


# ---------------------------------------------------------------------------
# Ratio rounding
# ---------------------------------------------------------------------------

def round_ratio(
    numerator: int,
    denominator: int,
    rounding_type: RoundingType,
    rng: Optional[RandomSource] = None,
) -> int:
    """Round the exact ratio numerator/denominator to an integer.

    NONE/NO_ROUNDING demand an exact quotient and raise PrecisionLossError otherwise.
    """
    if denominator == 0:
        raise ZeroDivisionError("round_ratio: zero denominator")
    if denominator < 0:
        numerator, denominator = -numerator, -denominator
    negative = numerator < 0
    q, r = divmod(abs(numerator), denominator)
    if r == 0:
        return -q if negative else q
    if rounding_type.is_no_op:
        raise PrecisionLossError(
            "inexact quotient with no rounding selected",
            operation="round_ratio",
            snippet=f"{numerator}/{denominator}",
        )
    twice = 2 * r
    half_cmp = (twice > denominator) - (twice < denominator)
    if _bump_magnitude(
        rounding_type,
        negative=negative,
        retained_odd=q % 2 == 1,
        half_cmp=half_cmp,
        dropped_nonzero=True,
        rng=rng,
    ):
        q += 1
    return -q if negative else q


__all__ = [
    "DEBUG_ROUNDING",
    "RandomSource",
    "RoundingType",
    "DEFAULT_ROUNDING_TYPE",
    "RoundingSpec",
    "round_digits",
    "round_ratio",
]
