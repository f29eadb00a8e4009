"""
Locale-style number parser with parse provenance.

Scans a buffer from a caller-supplied start index for the first number:
grouped integer digits, an optional decimal separator and fractional
digits, plus the sign and currency symbols adjacent to it. Repeated calls
resume from `provenance.next_index`; the cursor lives with the caller.

Alignment notes:
- The candidate number is the first maximal digit run (grouping separators
  are skipped only between digits), optionally followed by one decimal
  separator and more digits.
- Symbols are only recognised in fixed windows at the edges of the digits.
  Leading side, reading leftwards from the first digit: [sign][keyword] or
  [keyword][sign]; trailing side, reading rightwards from the last digit:
  [sign][keyword] or [keyword][sign]. The configured keyword gap (one space
  by default) is allowed between a keyword and its neighbour
  ("£ -1,234.56", "1.234,56- €").
- A terminator ends the scan wherever it appears, even where it doubles as
  a grouping separator ("12,34" with terminator "," reads as 12 then 34).
- Tokens before `start` are never consulted.
- "No number" is a result (zero kernel, found_number False), not an error.
  Bad configuration is a ValidationError at construction.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Iterator, List, Optional, Tuple

from .core.constants import DIGIT_CHARS
from .core.datatypes import NO_FURTHER_CONTENT, NumericSign, ParseProvenance, Span
from .core.exc import ValidationError
from .core.kernel import NumericKernel
from .sign_search import NegativeSearchCollection, match_ending_at, match_starting_at

# Debug printing control
DEBUG_PARSER = False

def _dbg(msg: str) -> None:
    if DEBUG_PARSER:
        print(msg)


def _by_length(symbols) -> Tuple[str, ...]:
    return tuple(sorted(dict.fromkeys(symbols), key=len, reverse=True))


@dataclass(frozen=True)
class _Edge:
    sign: Optional[Span] = None
    keyword: Optional[Span] = None


@dataclass(frozen=True)
class LocaleNumberParser:
    """Configurable parser for human-formatted numbers.

    Fields:
    - decimal_separator: required, non-empty.
    - integer_separators: grouping separators skipped between integer digits.
    - negative_specs: negative marker conventions.
    - positive_symbols: explicit positive markers recognised like signs.
    - keywords: non-sign symbols (currency) recognised next to the number.
    - terminators: substrings that end the scan, also inside a grouped integer.
    - keyword_gap: filler allowed between a keyword and its neighbour; "" disables it.
    """

    decimal_separator: str = "."
    integer_separators: Tuple[str, ...] = (",",)
    negative_specs: NegativeSearchCollection = field(default_factory=NegativeSearchCollection.united_states)
    positive_symbols: Tuple[str, ...] = ("+",)
    keywords: Tuple[str, ...] = ()
    terminators: Tuple[str, ...] = ()
    keyword_gap: str = " "

    def __post_init__(self):
        op = "LocaleNumberParser"
        dec = self.decimal_separator
        if not isinstance(dec, str) or not dec:
            raise ValidationError("decimal separator must be a non-empty str", operation=op, snippet=dec)
        if any(ch in DIGIT_CHARS for ch in dec):
            raise ValidationError("decimal separator may not contain digits", operation=op, snippet=dec)
        if not isinstance(self.negative_specs, NegativeSearchCollection):
            raise ValidationError("negative_specs must be a NegativeSearchCollection", operation=op)
        for name in ("integer_separators", "positive_symbols", "keywords", "terminators"):
            values = tuple(getattr(self, name))
            for v in values:
                if not isinstance(v, str) or not v:
                    raise ValidationError(f"{name} entries must be non-empty str", operation=op, snippet=v)
                if any(ch in DIGIT_CHARS for ch in v):
                    raise ValidationError(f"{name} entries may not contain digits", operation=op, snippet=v)
            object.__setattr__(self, name, values)
        if dec in self.integer_separators:
            raise ValidationError("integer separator equals decimal separator", operation=op, snippet=dec)
        if dec in self.terminators:
            raise ValidationError("terminator equals decimal separator", operation=op, snippet=dec)
        gap = self.keyword_gap
        if not isinstance(gap, str) or any(ch in DIGIT_CHARS for ch in gap):
            raise ValidationError("keyword gap must be a str without digits", operation=op, snippet=gap)

        # longest-first lookup tables, built once
        object.__setattr__(self, "_terminators_by_len", _by_length(self.terminators))
        object.__setattr__(self, "_keywords_by_len", _by_length(self.keywords))
        object.__setattr__(self, "_separators_by_len", _by_length(self.integer_separators))
        object.__setattr__(self, "_positive_by_len", _by_length(self.positive_symbols))
        object.__setattr__(
            self,
            "_leading_signs_by_len",
            _by_length(self.negative_specs.leading_symbols() + self.positive_symbols),
        )

    # ------------- presets -------------

    @classmethod
    def united_states(cls, **overrides) -> "LocaleNumberParser":
        opts = dict(
            decimal_separator=".",
            integer_separators=(",",),
            negative_specs=NegativeSearchCollection.united_states(),
            keywords=("$",),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def united_kingdom(cls, **overrides) -> "LocaleNumberParser":
        opts = dict(
            decimal_separator=".",
            integer_separators=(",",),
            negative_specs=NegativeSearchCollection.united_kingdom(),
            keywords=("£",),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def france(cls, **overrides) -> "LocaleNumberParser":
        opts = dict(
            decimal_separator=",",
            integer_separators=(" ", "\u00a0"),
            negative_specs=NegativeSearchCollection.france(),
            keywords=("€",),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def germany(cls, **overrides) -> "LocaleNumberParser":
        opts = dict(
            decimal_separator=",",
            integer_separators=(".",),
            negative_specs=NegativeSearchCollection.germany(),
            keywords=("€",),
        )
        opts.update(overrides)
        return cls(**opts)

    @classmethod
    def pure(cls, decimal_separator: str = ".", **overrides) -> "LocaleNumberParser":
        opts = dict(
            decimal_separator=decimal_separator,
            integer_separators=(),
            negative_specs=NegativeSearchCollection.france(),
        )
        opts.update(overrides)
        return cls(**opts)

    # ------------- token helpers -------------

    def _terminator_at(self, text: str, i: int) -> Optional[Span]:
        for t in self._terminators_by_len:
            span = match_starting_at(text, t, i)
            if span is not None:
                return span
        return None

    def _number_starts_at(self, text: str, i: int) -> bool:
        if text[i] in DIGIT_CHARS:
            return True
        j = i + len(self.decimal_separator)
        return text.startswith(self.decimal_separator, i) and j < len(text) and text[j] in DIGIT_CHARS

    def _ending_at(self, text: str, symbols, end: int, floor: int) -> Optional[Span]:
        for sym in symbols:
            span = match_ending_at(text, sym, end, floor)
            if span is not None:
                return span
        return None

    def _starting_at(self, text: str, symbols, start: int) -> Optional[Span]:
        for sym in symbols:
            span = match_starting_at(text, sym, start)
            if span is not None:
                return span
        return None

    def _keyword_ending_at(self, text: str, end: int, floor: int) -> Optional[Span]:
        keywords = self._keywords_by_len
        span = self._ending_at(text, keywords, end, floor)
        gap = self.keyword_gap
        if span is None and match_ending_at(text, gap, end, floor) is not None:
            span = self._ending_at(text, keywords, end - len(gap), floor)
        return span

    def _keyword_starting_at(self, text: str, start: int) -> Optional[Span]:
        keywords = self._keywords_by_len
        span = self._starting_at(text, keywords, start)
        gap = self.keyword_gap
        if span is None and match_starting_at(text, gap, start) is not None:
            span = self._starting_at(text, keywords, start + len(gap))
        return span

    def _sign_ending_at(self, text: str, end: int, floor: int) -> Optional[Span]:
        signs = self._leading_signs_by_len
        span = self._ending_at(text, signs, end, floor)
        gap = self.keyword_gap
        if span is None and self.keywords and match_ending_at(text, gap, end, floor) is not None:
            span = self._ending_at(text, signs, end - len(gap), floor)
        return span

    # ------------- edges -------------

    def _leading_edge(self, text: str, first: int, floor: int) -> _Edge:
        """Sign and keyword immediately left of the first digit."""
        signs = self._leading_signs_by_len
        sign = self._ending_at(text, signs, first, floor)
        if sign is not None:
            keyword = self._keyword_ending_at(text, sign.start, floor)
            return _Edge(sign, keyword)
        keyword = self._keyword_ending_at(text, first, floor)
        if keyword is not None:
            sign = self._sign_ending_at(text, keyword.start, floor)
            return _Edge(sign, keyword)
        return _Edge()

    def _trailing_sign(self, text: str, start: int, leading: Optional[Span]):
        """Negative spec and span for a trailing marker at `start`, else a plain trailing sign span."""
        spec, tail = self.negative_specs.resolve(text, leading, start)
        if spec is not None:
            return spec, tail
        return None, self._starting_at(text, self._positive_by_len, start)

    # ------------- parsing -------------

    def _find_start(self, text: str, start: int) -> Tuple[Optional[int], Optional[Span]]:
        for i in range(start, len(text)):
            term = self._terminator_at(text, i)
            if term is not None:
                return None, term
            if self._number_starts_at(text, i):
                return i, None
        return None, None

    def _scan_integer(self, text: str, i: int) -> Tuple[List[str], int]:
        digits: List[str] = []
        n = len(text)
        seps = self._separators_by_len
        while i < n:
            if text[i] in DIGIT_CHARS:
                digits.append(text[i])
                i += 1
                continue
            if not digits or self._terminator_at(text, i) is not None:
                break
            skipped = False
            for sep in seps:
                j = i + len(sep)
                if text.startswith(sep, i) and j < n and text[j] in DIGIT_CHARS:
                    i = j
                    skipped = True
                    break
            if not skipped:
                break
        return digits, i

    def parse(self, text: str, start: int = 0) -> Tuple[NumericKernel, ParseProvenance]:
        """Parse the first number at or after `start`.

        Returns (kernel, provenance). When no number is found the kernel is
        zero and provenance.found_number is False.
        """
        if not isinstance(text, str):
            raise ValidationError("expected str", operation="LocaleNumberParser.parse", snippet=text)
        if not isinstance(start, int) or start < 0:
            raise ValidationError("start must be a non-negative int", operation="LocaleNumberParser.parse", snippet=start)
        n = len(text)

        first, stop = self._find_start(text, start)
        if first is None:
            nxt = stop.end if stop is not None and stop.end < n else NO_FURTHER_CONTENT
            _dbg(f"parse: no number from {start} (stop={stop})")
            return NumericKernel.zero(), ParseProvenance.not_found(start, stop, nxt)

        int_digits, i = self._scan_integer(text, first)
        int_span = Span(first, i) if int_digits else None

        sep_span = frac_span = None
        frac_digits = ""
        dec = self.decimal_separator
        j = i + len(dec)
        if text.startswith(dec, i) and j < n and text[j] in DIGIT_CHARS:
            k = j
            while k < n and text[k] in DIGIT_CHARS:
                k += 1
            sep_span, frac_span = Span(i, j), Span(j, k)
            frac_digits = text[j:k]
            i = k
        last = i

        lead = self._leading_edge(text, first, start)

        # trailing: sign right after the digits, or after an adjacent keyword
        spec, tsign = self._trailing_sign(text, last, lead.sign)
        tkeyword = None
        if tsign is not None:
            tkeyword = self._keyword_starting_at(text, tsign.end)
        else:
            tkeyword = self._keyword_starting_at(text, last)
            if tkeyword is not None:
                spec, tsign = self._trailing_sign(text, tkeyword.end, lead.sign)
        if spec is None and lead.sign is not None:
            spec, _ = self.negative_specs.resolve(text, lead.sign, last)
        lead_sign = lead.sign
        if lead_sign is not None and spec is None and lead_sign.text(text) not in self.positive_symbols:
            # unmatched half of a paired marker, e.g. "(" without ")"
            lead_sign = None

        end = max(s.end for s in (tsign, tkeyword) if s is not None) if (tsign or tkeyword) else last
        delimiter = self._terminator_at(text, end)
        resume = delimiter.end if delimiter is not None else end
        negative = spec is not None

        digits = "".join(int_digits) or "0"
        kernel = NumericKernel(digits, frac_digits, NumericSign.NEGATIVE if negative else NumericSign.POSITIVE)
        prov = ParseProvenance(
            start_index=start,
            leading_sign=lead_sign,
            leading_keyword=lead.keyword,
            integer_digits=int_span,
            decimal_separator=sep_span,
            fractional_digits=frac_span,
            trailing_sign=tsign,
            trailing_keyword=tkeyword,
            trailing_delimiter=delimiter,
            negative=negative and not kernel.is_zero(),
            next_index=resume if resume < n else NO_FURTHER_CONTENT,
        )
        _dbg(f"parse: {text!r}[{start}:] -> {kernel} {prov}")
        return kernel, prov

    def parse_all(self, text: str, start: int = 0) -> Iterator[Tuple[NumericKernel, ParseProvenance]]:
        """Yield every number in `text`, threading the resume cursor."""
        cursor = start
        while True:
            kernel, prov = self.parse(text, cursor)
            if prov.found_number:
                yield kernel, prov
            if not prov.has_more:
                return
            cursor = prov.next_index


def parse_locale_number(text: str, start: int = 0, parser: Optional[LocaleNumberParser] = None):
    """Convenience wrapper using the United States conventions by default."""
    return (parser or LocaleNumberParser.united_states()).parse(text, start)


__all__ = [
    "DEBUG_PARSER",
    "LocaleNumberParser",
    "parse_locale_number",
]
