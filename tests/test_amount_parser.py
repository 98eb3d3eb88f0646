"""Tests for amount parsing and minor-unit conversion."""

import pytest
from decimal import Decimal

from bankfeed.utils.amount_parser import (
    amount_to_integer,
    format_amount,
    integer_to_amount,
    parse_amount,
)


@pytest.mark.parametrize(
    "text,expected",
    [
        ("123.45", Decimal("123.45")),
        ("-123.45", Decimal("-123.45")),
        ("$1,234.56", Decimal("1234.56")),
        ("(50.00)", Decimal("-50.00")),
        ("+12.00", Decimal("12.00")),
        ("  7 ", Decimal("7")),
        ("-12,34", Decimal("-12.34")),
        ("12,5", Decimal("12.5")),
        ("1.234,56", Decimal("1234.56")),
        ("-1.234,56", Decimal("-1234.56")),
        ("1,234", Decimal("1234")),
        ("1,234,567.89", Decimal("1234567.89")),
        ("1.234.567", Decimal("1234567")),
    ],
)
def test_parse_amount_formats(text, expected):
    assert parse_amount(text) == expected


@pytest.mark.parametrize("text", ["", "   ", "abc", "NaN", "Infinity"])
def test_parse_amount_rejects_garbage(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_parse_amount_rejects_none():
    with pytest.raises(ValueError):
        parse_amount(None)


def test_amount_to_integer_uses_cents():
    assert amount_to_integer(Decimal("-12.34")) == -1234
    assert amount_to_integer(Decimal("1500")) == 150000


def test_amount_to_integer_rounds_half_away_from_zero():
    """Sub-cent amounts round half away from zero."""
    assert amount_to_integer(Decimal("0.005")) == 1
    assert amount_to_integer(Decimal("-0.005")) == -1
    assert amount_to_integer(Decimal("0.004")) == 0


def test_amount_to_integer_rejects_out_of_range():
    with pytest.raises(ValueError, match="out of range"):
        amount_to_integer(Decimal("1e30"))


def test_integer_to_amount_and_format():
    assert integer_to_amount(-1234) == Decimal("-12.34")
    assert format_amount(-1234) == "-12.34"
    assert format_amount(5) == "0.05"


@pytest.mark.parametrize("text", ["12,3456", "1.234.56", "1,234.567,8", "12,34.56", "1.2,3.4"])
def test_parse_amount_rejects_ambiguous_separators(text):
    with pytest.raises(ValueError):
        parse_amount(text)


def test_decimal_comma_converts_exactly_to_minor_units():
    assert amount_to_integer(parse_amount("-12,34")) == -1234
    assert amount_to_integer(parse_amount("-1.234,56")) == -123456
