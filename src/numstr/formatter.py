"""
Number string formatter.

Renders a NumericKernel as text in four steps:
1. round a copy of the kernel (the caller's kernel is never touched);
2. group the integer digits (IntegerGroupingSpec) and join the fraction with
   the decimal separator;
3. attach sign and currency symbols. Symbols marked INSIDE_FIELD are
   attached before justification, OUTSIDE_FIELD symbols after it;
4. justify inside the number field. A field narrower than the text is
   widened; numeric text is never truncated.

Reference layouts for -1234.56 in a right-justified field of 15:
  France       "    -1 234,56 €"
  Germany      "    1.234,56- €"
  UK (inside)  "    £ -1,234.56"
  UK (outside) "    -£ 1,234.56"
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from .core.constants import DIGIT_CHARS
from .core.datatypes import NumericSign
from .core.exc import ValidationError
from .core.grouping import IntegerGroupingSpec
from .core.kernel import NumericKernel
from .core.rounding import RandomSource, RoundingSpec

# Debug printing control (formatting layer)
DEBUG_FMT = False

def _dbg(msg: str) -> None:
    if DEBUG_FMT:
        print(msg)


# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------

class SymbolPosition(Enum):
    """Whether a symbol counts toward the justified field."""
    INSIDE_FIELD = "InsideField"
    OUTSIDE_FIELD = "OutsideField"


class TextJustify(Enum):
    LEFT = "Left"
    RIGHT = "Right"
    CENTER = "Center"


class CurrencySignRelativePosition(Enum):
    """Order of currency and sign symbols on the same side of the number.

    OUTSIDE_NUM_SIGN: the currency symbol is farther from the digits ("£ -1,234.56").
    INSIDE_NUM_SIGN: the currency symbol is between sign and digits ("-£ 1,234.56").
    """
    OUTSIDE_NUM_SIGN = "OutsideNumSign"
    INSIDE_NUM_SIGN = "InsideNumSign"


# ---------------------------------------------------------------------------
# Symbol and field specs
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class NumberSymbolSpec:
    """Leading and trailing symbol text, each placed inside or outside the field."""

    leading: str = ""
    trailing: str = ""
    leading_position: SymbolPosition = SymbolPosition.INSIDE_FIELD
    trailing_position: SymbolPosition = SymbolPosition.INSIDE_FIELD

    def __post_init__(self):
        for sym in (self.leading, self.trailing):
            if not isinstance(sym, str):
                raise ValidationError("symbols must be str", operation="NumberSymbolSpec", snippet=sym)
            if any(ch.isdigit() for ch in sym):
                raise ValidationError("symbols may not contain digits", operation="NumberSymbolSpec", snippet=sym)
        for pos in (self.leading_position, self.trailing_position):
            if not isinstance(pos, SymbolPosition):
                raise ValidationError("position must be a SymbolPosition", operation="NumberSymbolSpec", snippet=pos)

    @staticmethod
    def none() -> "NumberSymbolSpec":
        return NumberSymbolSpec()

    @classmethod
    def leading_symbol(cls, symbol: str, position: SymbolPosition = SymbolPosition.INSIDE_FIELD) -> "NumberSymbolSpec":
        return cls(symbol, "", position, SymbolPosition.INSIDE_FIELD)

    @classmethod
    def trailing_symbol(cls, symbol: str, position: SymbolPosition = SymbolPosition.INSIDE_FIELD) -> "NumberSymbolSpec":
        return cls("", symbol, SymbolPosition.INSIDE_FIELD, position)

    @classmethod
    def parentheses(cls, position: SymbolPosition = SymbolPosition.INSIDE_FIELD) -> "NumberSymbolSpec":
        return cls("(", ")", position, position)


@dataclass(frozen=True)
class NumberFieldSpec:
    """Field width (<= 0 means natural width) and justification."""

    width: int = 0
    justify: TextJustify = TextJustify.RIGHT

    def __post_init__(self):
        if not isinstance(self.width, int) or isinstance(self.width, bool):
            raise ValidationError("width must be an int", operation="NumberFieldSpec", snippet=self.width)
        if not isinstance(self.justify, TextJustify):
            raise ValidationError("justify must be a TextJustify", operation="NumberFieldSpec", snippet=self.justify)

    def apply(self, text: str) -> str:
        pad = self.width - len(text)
        if pad <= 0:
            return text
        if self.justify is TextJustify.LEFT:
            return text + " " * pad
        if self.justify is TextJustify.RIGHT:
            return " " * pad + text
        left = pad // 2
        return " " * left + text + " " * (pad - left)


# ---------------------------------------------------------------------------
# Format spec
# ---------------------------------------------------------------------------

_MINUS = NumberSymbolSpec.leading_symbol("-")


@dataclass(frozen=True)
class NumberFormatSpec:
    """Everything needed to turn a kernel into display text."""

    decimal_separator: str = "."
    grouping: IntegerGroupingSpec = field(default_factory=IntegerGroupingSpec.none)
    positive_symbols: NumberSymbolSpec = field(default_factory=NumberSymbolSpec.none)
    negative_symbols: NumberSymbolSpec = _MINUS
    zero_symbols: NumberSymbolSpec = field(default_factory=NumberSymbolSpec.none)
    currency: NumberSymbolSpec = field(default_factory=NumberSymbolSpec.none)
    currency_position: CurrencySignRelativePosition = CurrencySignRelativePosition.OUTSIDE_NUM_SIGN
    field_spec: NumberFieldSpec = field(default_factory=NumberFieldSpec)
    rounding: RoundingSpec = field(default_factory=RoundingSpec.no_rounding)

    def __post_init__(self):
        op = "NumberFormatSpec"
        if not isinstance(self.decimal_separator, str) or not self.decimal_separator:
            raise ValidationError("decimal separator must be a non-empty str", operation=op, snippet=self.decimal_separator)
        if any(ch in DIGIT_CHARS for ch in self.decimal_separator):
            raise ValidationError("decimal separator may not contain digits", operation=op, snippet=self.decimal_separator)
        if not isinstance(self.grouping, IntegerGroupingSpec):
            raise ValidationError("grouping must be an IntegerGroupingSpec", operation=op, snippet=self.grouping)
        if not self.grouping.is_no_op and self.grouping.separator == self.decimal_separator:
            raise ValidationError(
                "grouping separator equals decimal separator", operation=op, snippet=self.decimal_separator
            )
        for name in ("positive_symbols", "negative_symbols", "zero_symbols", "currency"):
            if not isinstance(getattr(self, name), NumberSymbolSpec):
                raise ValidationError(f"{name} must be a NumberSymbolSpec", operation=op)
        if not isinstance(self.rounding, RoundingSpec):
            raise ValidationError("rounding must be a RoundingSpec", operation=op, snippet=self.rounding)

    # ------------- presets -------------

    @classmethod
    def pure(cls, decimal_separator: str = ".", leading_minus: bool = True, **overrides) -> "NumberFormatSpec":
        minus = NumberSymbolSpec.leading_symbol("-") if leading_minus else NumberSymbolSpec.trailing_symbol("-")
        opts = dict(decimal_separator=decimal_separator, negative_symbols=minus)
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def us_signed(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(decimal_separator=".", grouping=IntegerGroupingSpec.thousands(","))
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def us_currency(cls, parentheses: bool = False, **overrides) -> "NumberFormatSpec":
        opts = dict(
            decimal_separator=".",
            grouping=IntegerGroupingSpec.thousands(","),
            negative_symbols=NumberSymbolSpec.parentheses() if parentheses else _MINUS,
            currency=NumberSymbolSpec.leading_symbol("$ "),
            currency_position=(
                CurrencySignRelativePosition.INSIDE_NUM_SIGN if parentheses
                else CurrencySignRelativePosition.OUTSIDE_NUM_SIGN
            ),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def uk_currency(cls, minus_inside: bool = True, **overrides) -> "NumberFormatSpec":
        opts = dict(
            decimal_separator=".",
            grouping=IntegerGroupingSpec.thousands(","),
            currency=NumberSymbolSpec.leading_symbol("£ "),
            currency_position=(
                CurrencySignRelativePosition.OUTSIDE_NUM_SIGN if minus_inside
                else CurrencySignRelativePosition.INSIDE_NUM_SIGN
            ),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def france_signed(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(decimal_separator=",", grouping=IntegerGroupingSpec.thousands(" "))
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def france_currency(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(
            decimal_separator=",",
            grouping=IntegerGroupingSpec.thousands(" "),
            currency=NumberSymbolSpec.trailing_symbol(" €"),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def germany_signed(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(
            decimal_separator=",",
            grouping=IntegerGroupingSpec.thousands("."),
            negative_symbols=NumberSymbolSpec.trailing_symbol("-"),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def germany_currency(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(
            decimal_separator=",",
            grouping=IntegerGroupingSpec.thousands("."),
            negative_symbols=NumberSymbolSpec.trailing_symbol("-"),
            currency=NumberSymbolSpec.trailing_symbol(" €"),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def india(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(decimal_separator=".", grouping=IntegerGroupingSpec.india(","))
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def chinese(cls, **overrides) -> "NumberFormatSpec":
        opts = dict(decimal_separator=".", grouping=IntegerGroupingSpec.chinese(","))
        opts.update(overrides)
        return cls(**opts)

    # ------------- helpers -------------

    def symbols_for(self, sign: NumericSign) -> NumberSymbolSpec:
        if sign is NumericSign.NEGATIVE:
            return self.negative_symbols
        if sign is NumericSign.POSITIVE:
            return self.positive_symbols
        return self.zero_symbols

    def format(self, kernel: NumericKernel, rng: Optional[RandomSource] = None) -> str:
        return format_kernel(kernel, self, rng)


# ---------------------------------------------------------------------------
# Rendering
# ---------------------------------------------------------------------------

def _side(
    sign_sym: str,
    sign_pos: SymbolPosition,
    cur_sym: str,
    cur_pos: SymbolPosition,
    currency_outside: bool,
) -> Tuple[List[str], List[str]]:
    """Split one side's symbols into (inside, outside) lists ordered nearest-to-digits first."""
    ordered = [(sign_sym, sign_pos), (cur_sym, cur_pos)]
    if not currency_outside:
        ordered.reverse()
    inside = [s for s, p in ordered if s and p is SymbolPosition.INSIDE_FIELD]
    outside = [s for s, p in ordered if s and p is SymbolPosition.OUTSIDE_FIELD]
    return inside, outside


def format_body(kernel: NumericKernel, decimal_separator: str, grouping: IntegerGroupingSpec) -> str:
    """Grouped integer digits plus the fraction; no symbols."""
    body = grouping.apply(kernel.integer_str or "0")
    if kernel.fractional_len:
        body += decimal_separator + kernel.fractional_str
    return body


def format_kernel(kernel: NumericKernel, spec: NumberFormatSpec, rng: Optional[RandomSource] = None) -> str:
    """Render `kernel` per `spec`. The kernel itself is not modified."""
    if not isinstance(kernel, NumericKernel):
        raise ValidationError("expected NumericKernel", operation="format_kernel", snippet=kernel)
    k = kernel.copy().round(spec.rounding, rng)
    body = format_body(k, spec.decimal_separator, spec.grouping)

    sym = spec.symbols_for(k.sign)
    cur = spec.currency
    currency_outside = spec.currency_position is CurrencySignRelativePosition.OUTSIDE_NUM_SIGN
    lead_in, lead_out = _side(sym.leading, sym.leading_position, cur.leading, cur.leading_position, currency_outside)
    trail_in, trail_out = _side(
        sym.trailing, sym.trailing_position, cur.trailing, cur.trailing_position, currency_outside
    )

    inner = "".join(reversed(lead_in)) + body + "".join(trail_in)
    fielded = spec.field_spec.apply(inner)
    text = "".join(reversed(lead_out)) + fielded + "".join(trail_out)
    _dbg(f"format_kernel: {kernel} -> inner={inner!r} text={text!r}")
    return text


__all__ = [
    "DEBUG_FMT",
    "SymbolPosition",
    "TextJustify",
    "CurrencySignRelativePosition",
    "NumberSymbolSpec",
    "NumberFieldSpec",
    "NumberFormatSpec",
    "format_body",
    "format_kernel",
]
