"""
Negative number sign search specs.

A spec declares where a negative marker sits relative to the digits:
BEFORE ("-123"), AFTER ("123-") or BEFORE_AND_AFTER ("(123)"). Markers are
matched with fixed windows anchored at the edges of the number, never by a
general search through the text. For BEFORE_AND_AFTER both parts must match.

Collections hold the specs for one convention and try longer markers first,
so "--" wins over "-" when both are configured.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, Optional, Tuple

from .core.datatypes import Span
from .core.exc import ValidationError


class SignSearchPosition(Enum):
    """Placement of a negative marker relative to the number."""
    BEFORE = "Before"
    AFTER = "After"
    BEFORE_AND_AFTER = "BeforeAndAfter"


def match_ending_at(text: str, symbol: str, end: int, floor: int = 0) -> Optional[Span]:
    """Span of `symbol` if it occupies text[end - len(symbol):end] without crossing `floor`."""
    start = end - len(symbol)
    if not symbol or start < floor or end > len(text):
        return None
    if text[start:end] == symbol:
        return Span(start, end)
    return None


def match_starting_at(text: str, symbol: str, start: int) -> Optional[Span]:
    """Span of `symbol` if it occupies text[start:start + len(symbol)]."""
    if not symbol or start < 0:
        return None
    if text.startswith(symbol, start):
        return Span(start, start + len(symbol))
    return None


@dataclass(frozen=True)
class NegativeNumberSearchSpec:
    """One negative marker: leading text, trailing text, or both."""

    leading: str = ""
    trailing: str = ""
    position: SignSearchPosition = SignSearchPosition.BEFORE

    def __post_init__(self):
        if not isinstance(self.position, SignSearchPosition):
            raise ValidationError(
                "position must be a SignSearchPosition", operation="NegativeNumberSearchSpec", snippet=self.position
            )
        needs_leading = self.position in (SignSearchPosition.BEFORE, SignSearchPosition.BEFORE_AND_AFTER)
        needs_trailing = self.position in (SignSearchPosition.AFTER, SignSearchPosition.BEFORE_AND_AFTER)
        if needs_leading != bool(self.leading) or needs_trailing != bool(self.trailing):
            raise ValidationError(
                f"{self.position.value} spec has leading={self.leading!r} trailing={self.trailing!r}",
                operation="NegativeNumberSearchSpec",
            )
        for sym in (self.leading, self.trailing):
            if any(ch.isdigit() for ch in sym):
                raise ValidationError("sign symbols may not contain digits", operation="NegativeNumberSearchSpec", snippet=sym)

    # ------------- constructors -------------

    @classmethod
    def before(cls, symbol: str) -> "NegativeNumberSearchSpec":
        return cls(symbol, "", SignSearchPosition.BEFORE)

    @classmethod
    def after(cls, symbol: str) -> "NegativeNumberSearchSpec":
        return cls("", symbol, SignSearchPosition.AFTER)

    @classmethod
    def before_and_after(cls, leading: str, trailing: str) -> "NegativeNumberSearchSpec":
        return cls(leading, trailing, SignSearchPosition.BEFORE_AND_AFTER)

    # ------------- matching -------------

    @property
    def has_leading(self) -> bool:
        return bool(self.leading)

    @property
    def has_trailing(self) -> bool:
        return bool(self.trailing)

    def match_leading(self, text: str, end: int, floor: int = 0) -> Optional[Span]:
        return match_ending_at(text, self.leading, end, floor)

    def match_trailing(self, text: str, start: int) -> Optional[Span]:
        return match_starting_at(text, self.trailing, start)

    def symbol_length(self) -> int:
        return len(self.leading) + len(self.trailing)


@dataclass(frozen=True)
class NegativeSearchCollection:
    """Ordered set of negative specs for one number convention."""

    specs: Tuple[NegativeNumberSearchSpec, ...] = ()

    def __post_init__(self):
        specs = tuple(self.specs)
        for s in specs:
            if not isinstance(s, NegativeNumberSearchSpec):
                raise ValidationError("expected NegativeNumberSearchSpec", operation="NegativeSearchCollection", snippet=s)
        ordered = tuple(sorted(specs, key=lambda s: -s.symbol_length()))
        object.__setattr__(self, "specs", ordered)

    @classmethod
    def of(cls, specs: Iterable[NegativeNumberSearchSpec]) -> "NegativeSearchCollection":
        return cls(tuple(specs))

    # ------------- presets -------------

    @classmethod
    def united_states(cls) -> "NegativeSearchCollection":
        return cls((
            NegativeNumberSearchSpec.before("-"),
            NegativeNumberSearchSpec.before_and_after("(", ")"),
        ))

    @classmethod
    def united_kingdom(cls) -> "NegativeSearchCollection":
        return cls.united_states()

    @classmethod
    def france(cls) -> "NegativeSearchCollection":
        return cls((NegativeNumberSearchSpec.before("-"),))

    @classmethod
    def germany(cls) -> "NegativeSearchCollection":
        return cls((
            NegativeNumberSearchSpec.after("-"),
            NegativeNumberSearchSpec.before("-"),
        ))

    # ------------- queries -------------

    def __iter__(self):
        return iter(self.specs)

    def __len__(self) -> int:
        return len(self.specs)

    def leading_symbols(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(s.leading for s in self.specs if s.has_leading))

    def trailing_symbols(self) -> Tuple[str, ...]:
        return tuple(dict.fromkeys(s.trailing for s in self.specs if s.has_trailing))

    def resolve(
        self,
        text: str,
        leading: Optional[Span],
        trailing_start: int,
    ) -> Tuple[Optional[NegativeNumberSearchSpec], Optional[Span]]:
        """Decide which spec (if any) makes the number negative.

        `leading` is the sign token already found in the leading window (or None);
        `trailing_start` is where the trailing window begins. Returns the matched
        spec and the trailing span it consumed.
        """
        lead_text = leading.text(text) if leading is not None else None
        for spec in self.specs:
            if spec.position is SignSearchPosition.BEFORE_AND_AFTER:
                if lead_text == spec.leading:
                    tail = spec.match_trailing(text, trailing_start)
                    if tail is not None:
                        return spec, tail
            elif spec.position is SignSearchPosition.BEFORE:
                if lead_text == spec.leading:
                    return spec, None
            else:
                tail = spec.match_trailing(text, trailing_start)
                if tail is not None:
                    return spec, tail
        return None, None


__all__ = [
    "SignSearchPosition",
    "NegativeNumberSearchSpec",
    "NegativeSearchCollection",
    "match_ending_at",
    "match_starting_at",
]
