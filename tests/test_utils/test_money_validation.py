"""
Tests for money formatting and amount parsing
"""
import pytest

from budgie.utils.money import format_money
from budgie.utils.validation import normalize_decimal_input, parse_amount, parse_cents


def test_format_money():
    assert format_money(123456) == "1234.56"
    assert format_money(-5) == "-0.05"
    assert format_money(0) == "0.00"
    assert format_money(100) == "1.00"


def test_normalize_decimal_input():
    assert normalize_decimal_input(" 100,50 ") == "100.50"


@pytest.mark.parametrize("text,cents", [
    ("12", 1200),
    ("12.5", 1250),
    ("12,50", 1250),
    ("-0.05", -5),
    (" 7.01 ", 701),
])
def test_parse_cents(text, cents):
    assert parse_cents(text) == cents


@pytest.mark.parametrize("text", ["", "abc", "1.234", "1.", "1e3", "--1"])
def test_parse_cents_rejects(text):
    with pytest.raises(ValueError):
        parse_cents(text)


def test_parse_amount_plain_is_unallocated():
    assert parse_amount("20") == {"_": 2000}


def test_parse_amount_itemization_sums_duplicates():
    assert parse_amount("groceries=12.50,_=3,groceries=1") == {"groceries": 1350, "_": 300}


@pytest.mark.parametrize("text", ["=5", "groceries=", "groceries=1,rent"])
def test_parse_amount_rejects(text):
    with pytest.raises(ValueError):
        parse_amount(text)
