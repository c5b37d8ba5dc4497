"""Tests for rate token and rate text parsing."""
import math

import pytest

from fxcalc.rates.parsing import parse_rate_text, parse_rate_token


@pytest.mark.parametrize(
    "token,expected",
    [
        ("16,200", 16200.0),
        ("1,234,567", 1234567.0),
        ("91,50", 91.5),
        ("0,0047", 0.0047),
        ("0,123", 0.123),
        ("91.50", 91.5),
        ("16,200.00", 16200.0),
        ("1.234,56", 1234.56),
        ("1 234,5", 1234.5),
        ("16 200", 16200.0),
        (" 34.5 ", 34.5),
        (90, 90.0),
        (0.011, 0.011),
    ],
)
def test_parse_rate_token(token, expected):
    assert parse_rate_token(token) == pytest.approx(expected)


@pytest.mark.parametrize("token", ["", "abc", "-5", "0", "0,00", "1.2.3", None, True, math.nan, math.inf, -1.0])
def test_parse_rate_token_rejects(token):
    assert parse_rate_token(token) is None


def test_parse_rate_text():
    text = "Today: USD/RUB: 91.50, USD IDR 16,200 and EUR-USD = 1.09"
    assert parse_rate_text(text) == {
        "USD/RUB": 91.5,
        "USD/IDR": 16200.0,
        "EUR/USD": 1.09,
    }


def test_parse_rate_text_skips_garbage():
    assert parse_rate_text("") == {}
    assert parse_rate_text("USD/RUB: n/a") == {}
