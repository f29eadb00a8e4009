import pytest

from numstr.core.datatypes import NumericSign
from numstr.core.exc import EmptyInput, MalformedNumber, NumStrError, ValidationError
from numstr.pure_parser import PureNumberParser, parse_pure_number


@pytest.mark.parametrize(
    "text,integer,fractional,sign",
    [
        ("1234.5678", "1234", "5678", NumericSign.POSITIVE),
        ("-1234.5678", "1234", "5678", NumericSign.NEGATIVE),
        ("+0012.3400", "0012", "3400", NumericSign.POSITIVE),
        ("42", "42", "", NumericSign.POSITIVE),
        (".5", "0", "5", NumericSign.POSITIVE),
        ("-.5", "0", "5", NumericSign.NEGATIVE),
        ("-0.000", "0", "000", NumericSign.ZERO),
    ],
)
def test_parse_keeps_digit_runs(pure_parser, text, integer, fractional, sign):
    k = pure_parser.parse(text)
    print(f"[pure-parse] {text!r} -> int={k.integer_str!r} frac={k.fractional_str!r} sign={k.sign.name}")
    assert k.integer_str == integer
    assert k.fractional_str == fractional
    assert k.sign is sign


@pytest.mark.parametrize("text", ["", "+", "-", "abc", ".", "-.", "$"])
def test_no_digits_is_empty_input(pure_parser, text):
    with pytest.raises(EmptyInput):
        pure_parser.parse(text)


@pytest.mark.parametrize(
    "text",
    ["1,234", "1.2.3", "12.", "--5", " 12", "12 ", "1e5", "+-1"],
)
def test_malformed_text(pure_parser, text):
    print(f"[pure-malformed] {text!r} -> MalformedNumber")
    with pytest.raises(MalformedNumber):
        pure_parser.parse(text)


def test_errors_carry_context(pure_parser):
    with pytest.raises(NumStrError) as info:
        pure_parser.parse("12x")
    assert info.value.operation == "PureNumberParser.parse"
    assert "12x" in str(info.value)
    # parse errors are also ValueErrors
    assert isinstance(info.value, ValueError)


def test_parse_prefix_reports_consumed(pure_parser):
    k, n = pure_parser.parse_prefix("-12.50 EUR")
    assert (k.to_native_str(), n) == ("-12.50", 6)
    k, n = pure_parser.parse_prefix("12.")
    assert (k.to_native_str(), n) == ("12", 2)
    k, n = pure_parser.parse_prefix("7,5")
    assert (k.to_native_str(), n) == ("7", 1)


def test_custom_decimal_separator():
    comma = PureNumberParser(",")
    assert comma.parse("1234,56").to_native_str() == "1234.56"
    with pytest.raises(MalformedNumber):
        comma.parse("1234.56")
    assert parse_pure_number("12<>5", "<>").to_native_str() == "12.5"


@pytest.mark.parametrize("sep", ["", "1", "-", "+", 5])
def test_invalid_separator_rejected(sep):
    with pytest.raises(ValidationError):
        PureNumberParser(sep)  # type: ignore[arg-type]


def test_non_str_input_rejected(pure_parser):
    with pytest.raises(ValidationError):
        pure_parser.parse(12)  # type: ignore[arg-type]
