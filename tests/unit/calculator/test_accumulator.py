"""Tests for the keypad accumulator."""
import pytest

from fxcalc.calculator.accumulator import ExpressionAccumulator, KeyKind, classify_key


def press_all(acc, keys):
    for key in keys:
        acc.press(key)
    return acc.buffer


@pytest.mark.parametrize(
    "key,kind",
    [
        ("7", KeyKind.DIGIT),
        (".", KeyKind.POINT),
        (",", KeyKind.POINT),
        ("000", KeyKind.TRIPLE_ZERO),
        ("×", KeyKind.OPERATOR),
        ("÷", KeyKind.OPERATOR),
        ("%", KeyKind.PERCENT),
        ("⌫", KeyKind.BACKSPACE),
        ("back", KeyKind.BACKSPACE),
        ("AC", KeyKind.CLEAR),
        ("=", KeyKind.EVALUATE),
    ],
)
def test_classify_key(key, kind):
    assert classify_key(key) is kind


def test_unknown_key():
    with pytest.raises(ValueError):
        classify_key("?")


def test_leading_zero_is_replaced():
    acc = ExpressionAccumulator()
    assert press_all(acc, "05") == "5"
    assert press_all(ExpressionAccumulator(), ["1", "+", "0", "7"]) == "1+7"


def test_single_point_per_operand():
    acc = ExpressionAccumulator()
    assert press_all(acc, ["1", ".", "5", ".", "+", ".", "5"]) == "1.5+.5"


def test_triple_zero():
    acc = ExpressionAccumulator()
    acc.press("000")
    assert acc.buffer == ""
    assert press_all(acc, ["2", "000", "000"]) == "2000000"
    assert press_all(ExpressionAccumulator(), ["0", "000"]) == "0"


def test_operator_replacement():
    acc = ExpressionAccumulator()
    assert press_all(acc, ["1", "2", "+", "*"]) == "12*"
    assert press_all(acc, ["-"]) == "12-"


def test_operator_on_empty_buffer():
    acc = ExpressionAccumulator()
    acc.press("*")
    assert acc.buffer == ""
    acc.press("-")
    assert acc.buffer == "-"


def test_percent():
    assert press_all(ExpressionAccumulator(), ["2", "5", "0", "%"]) == "2.5"
    assert press_all(ExpressionAccumulator(), ["2", "0", "0", "+", "5", "0", "%"]) == "200+0.5"
    acc = ExpressionAccumulator("12+")
    acc.press("%")
    assert acc.buffer == "12+"


def test_backspace_and_clear():
    acc = ExpressionAccumulator("123")
    acc.press("⌫")
    assert acc.buffer == "12"
    acc.press("C")
    assert acc.buffer == ""
    acc.press("BACK")
    assert acc.buffer == ""


def test_evaluate():
    acc = ExpressionAccumulator()
    press_all(acc, ["1", "2", "+", "3", "×", "2", "="])
    assert acc.buffer == "18"
    assert acc.value == 18.0


def test_fresh_entry_replaces_on_digit():
    acc = ExpressionAccumulator("100")
    acc.activate()
    acc.press("5")
    assert acc.buffer == "5"
    assert not acc.fresh


def test_fresh_entry_continues_on_operator():
    acc = ExpressionAccumulator("100")
    acc.activate()
    assert press_all(acc, ["+", "5"]) == "100+5"


def test_fresh_entry_replaces_on_point():
    acc = ExpressionAccumulator("100")
    acc.activate()
    assert press_all(acc, [".", "5"]) == ".5"


def test_display():
    acc = ExpressionAccumulator("2000000")
    assert acc.display == "2 000 000"
    assert ExpressionAccumulator().display == "0"
