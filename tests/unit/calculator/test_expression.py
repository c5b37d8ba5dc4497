"""Tests for expression evaluation and display formatting."""
import pytest

from fxcalc.calculator.expression import (
    evaluate,
    evaluate_number,
    format_display,
    format_number,
    is_expression,
    last_segment,
)


@pytest.mark.parametrize(
    "expr,expected",
    [
        ("12+3*2", "18"),
        ("2*3+4*5", "26"),
        ("10-4-3", "3"),
        ("100/4/5", "5"),
        ("7/2", "3.5"),
        ("-5+2", "-3"),
        ("2000000", "2000000"),
        ("1.50", "1.5"),
        ("0.0001", "0.0001"),
    ],
)
def test_evaluate(expr, expected):
    assert evaluate(expr) == expected


@pytest.mark.parametrize("expr", ["", "5/0", "1+2/0*3", "abc", "+", "1..2", "*3"])
def test_degenerate_input_evaluates_to_zero(expr):
    assert evaluate(expr) == "0"
    assert evaluate_number(expr) == 0.0


def test_whitespace_is_ignored():
    assert evaluate_number("6 * 7") == 42.0


def test_format_number():
    assert format_number(18.0) == "18"
    assert format_number(2.5) == "2.5"
    assert format_number(-0.25) == "-0.25"
    assert format_number(float("nan")) == "0"


def test_last_segment_and_is_expression():
    assert last_segment("12+3.5") == "3.5"
    assert last_segment("12+") == ""
    assert last_segment("250") == "250"
    assert is_expression("1*2")
    assert not is_expression("12.5")


@pytest.mark.parametrize(
    "buffer,expected",
    [
        ("", "0"),
        ("2000000", "2 000 000"),
        ("1234.5", "1 234.5"),
        ("999", "999"),
        ("12.", "12."),
        ("12*3", "12×3"),
        ("10/4-1", "10÷4-1"),
    ],
)
def test_format_display(buffer, expected):
    assert format_display(buffer) == expected
