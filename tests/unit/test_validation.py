"""Tests for validation utilities."""
import pytest
from fxcalc.utils.validation import (
    validate_currency_code,
    validate_currency_pair,
    validate_amount,
    validate_side,
)
from fxcalc.utils.errors import ValidationError


def test_validate_currency_code_normalizes():
    assert validate_currency_code(" idr ") == "IDR"


@pytest.mark.parametrize("code", ["", "US", "USDT", "U5D"])
def test_validate_currency_code_invalid(code):
    with pytest.raises(ValidationError):
        validate_currency_code(code)


def test_validate_currency_pair_slash():
    """Test currency pair validation with slash."""
    assert validate_currency_pair("USD/EUR") == ("USD", "EUR")


def test_validate_currency_pair_no_separator():
    """Test currency pair validation without separator."""
    assert validate_currency_pair("usdrub") == ("USD", "RUB")


def test_validate_currency_pair_invalid():
    """Test invalid currency pair."""
    with pytest.raises(ValidationError):
        validate_currency_pair("INVALID")


def test_validate_amount():
    assert validate_amount(100.0) == 100.0
    with pytest.raises(ValidationError):
        validate_amount(0)
    with pytest.raises(ValidationError):
        validate_amount(-5)


def test_validate_side():
    assert validate_side(" Buy ") == "buy"
    with pytest.raises(ValidationError):
        validate_side("hold")
