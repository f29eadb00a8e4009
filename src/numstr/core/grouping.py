"""
Integer digit grouping (thousands, Indian lakh/crore, Chinese myriads, custom).

Grouping scans the integer digits from the least-significant end: the first
group takes group_sizes[0] digits, the next group_sizes[1], and so on. Once
the sizes are exhausted the last size repeats, or, with restart_sequence,
the whole sequence starts again from group_sizes[0].

    "6789000000000000", [3]            -> "6,789,000,000,000,000"
    "6789000000000000", [3, 2]         -> "6,78,90,00,00,00,00,000"
    "6789000000000000", [3, 2] restart -> "6,78,900,00,000,00,000"
    "12345678902345",   [4]            -> "12,3456,7890,2345"
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterator, List, Tuple, Union

from .constants import DIGIT_CHARS
from .digits import DigitRun
from .exc import ValidationError


class IntegerGroupingType(Enum):
    """Named grouping patterns."""
    NONE = "None"
    THOUSANDS = "Thousands"
    INDIA_NUMBERING = "IndiaNumbering"
    CHINESE_NUMBERING = "ChineseNumbering"
    CUSTOM = "Custom"


_PRESET_SIZES = {
    IntegerGroupingType.NONE: (),
    IntegerGroupingType.THOUSANDS: (3,),
    IntegerGroupingType.INDIA_NUMBERING: (3, 2),
    IntegerGroupingType.CHINESE_NUMBERING: (4,),
}


@dataclass(frozen=True)
class IntegerGroupingSpec:
    """Separator text, group sizes and the restart flag.

    - Negative sizes, or zero mixed with positive sizes, are rejected.
    - No sizes, all-zero sizes, or an empty separator make grouping a no-op.
    - A separator containing digits is rejected.
    """

    separator: str = ","
    group_sizes: Tuple[int, ...] = (3,)
    restart_sequence: bool = False
    grouping_type: IntegerGroupingType = IntegerGroupingType.CUSTOM

    def __post_init__(self):
        if not isinstance(self.separator, str):
            raise ValidationError("separator must be a str", operation="IntegerGroupingSpec", snippet=self.separator)
        if any(ch in DIGIT_CHARS for ch in self.separator):
            raise ValidationError(
                "separator may not contain digits", operation="IntegerGroupingSpec", snippet=self.separator
            )
        sizes = tuple(self.group_sizes)
        for s in sizes:
            if not isinstance(s, int) or isinstance(s, bool):
                raise ValidationError("group sizes must be ints", operation="IntegerGroupingSpec", snippet=sizes)
            if s < 0:
                raise ValidationError("group sizes must be >= 0", operation="IntegerGroupingSpec", snippet=sizes)
        if any(s == 0 for s in sizes) and any(s > 0 for s in sizes):
            raise ValidationError(
                "zero group size mixed with positive sizes", operation="IntegerGroupingSpec", snippet=sizes
            )
        object.__setattr__(self, "group_sizes", sizes)

    # ------------- presets -------------

    @classmethod
    def from_type(cls, grouping_type: IntegerGroupingType, separator: str = ",") -> "IntegerGroupingSpec":
        if grouping_type is IntegerGroupingType.CUSTOM:
            raise ValidationError("CUSTOM grouping needs explicit sizes", operation="IntegerGroupingSpec.from_type")
        return cls(separator, _PRESET_SIZES[grouping_type], False, grouping_type)

    @classmethod
    def none(cls) -> "IntegerGroupingSpec":
        return cls.from_type(IntegerGroupingType.NONE, "")

    @classmethod
    def thousands(cls, separator: str = ",") -> "IntegerGroupingSpec":
        return cls.from_type(IntegerGroupingType.THOUSANDS, separator)

    @classmethod
    def india(cls, separator: str = ",") -> "IntegerGroupingSpec":
        return cls.from_type(IntegerGroupingType.INDIA_NUMBERING, separator)

    @classmethod
    def chinese(cls, separator: str = ",") -> "IntegerGroupingSpec":
        return cls.from_type(IntegerGroupingType.CHINESE_NUMBERING, separator)

    # ------------- predicates -------------

    @property
    def is_no_op(self) -> bool:
        return not self.separator or not any(s > 0 for s in self.group_sizes)

    # ------------- grouping -------------

    def _sizes(self) -> Iterator[int]:
        """Infinite stream of group sizes, least-significant group first."""
        sizes = self.group_sizes
        i = 0
        while True:
            if i < len(sizes):
                yield sizes[i]
                i += 1
            elif self.restart_sequence:
                i = 0
            else:
                yield sizes[-1]

    def apply(self, digits: Union[str, DigitRun]) -> str:
        """Insert separators into an integer digit string."""
        text = str(digits)
        if self.is_no_op or not text:
            return text
        groups: List[str] = []
        end = len(text)
        for size in self._sizes():
            start = max(end - size, 0)
            groups.append(text[start:end])
            end = start
            if end == 0:
                break
        return self.separator.join(reversed(groups))


__all__ = [
    "IntegerGroupingType",
    "IntegerGroupingSpec",
]
