"""Tests for A / B / USD synchronization."""
import pytest

from fxcalc.calculator.config import Precision
from fxcalc.calculator.sync import ConversionContext, Field, effective_rate, resync, round_to, sync
from fxcalc.rates.table import RateTable


@pytest.fixture
def context():
    return ConversionContext("IDR", "RUB")


@pytest.mark.parametrize(
    "value,places,expected",
    [
        (90000.00000000001, 2, "90000.00"),
        (2.675, 2, "2.68"),
        (0.5, 0, "1"),
        (-0.5, 0, "-1"),
        (-0.001, 2, "0.00"),
        (float("nan"), 2, "0.00"),
        (14999999.999999998, 0, "15000000"),
    ],
)
def test_round_to(value, places, expected):
    assert round_to(value, places) == expected


def test_effective_rate():
    assert effective_rate(0.006, 0) == 0.006
    assert effective_rate(100, 10) == pytest.approx(110)
    assert effective_rate(100, -5) == pytest.approx(95)


def test_edit_a(context, usd_rates):
    result = sync(Field.A, "15000000", context, usd_rates)
    assert result.a == "15000000"
    assert result.b == "90000.00"
    assert result.usd == "1000.00"
    assert result.base_rate == pytest.approx(0.006)
    assert result.usd_rate_a == 15000.0


def test_edit_b(context, usd_rates):
    result = sync(Field.B, "90000", context, usd_rates)
    assert result.a == "15000000"
    assert result.b == "90000"
    assert result.usd == "1000.00"


def test_edit_usd(context, usd_rates):
    result = sync(Field.USD, "1000", context, usd_rates)
    assert result.a == "15000000"
    assert result.b == "90000.00"
    assert result.usd == "1000"


def test_edited_field_keeps_raw_buffer(context, usd_rates):
    result = sync(Field.A, "10*1000+", context, usd_rates)
    assert result.a == "10*1000+"
    assert result.b == "0.00"


def test_edit_spread_rederives_from_a(context, usd_rates):
    result = sync(Field.SPREAD, "10", context, usd_rates, current_a="15000000")
    assert result.spread == "10"
    assert result.a == "15000000"
    assert result.effective_rate == pytest.approx(0.0066)
    assert result.b == "99000.00"
    assert result.usd == "1000.00"


def test_spread_applies_to_other_edits(usd_rates):
    context = ConversionContext("IDR", "RUB", "10")
    result = sync(Field.B, "99000", context, usd_rates)
    assert result.a == "15000000"
    assert result.spread == "10"


def test_precision_is_configurable(context, usd_rates):
    result = sync(Field.A, "1000", context, usd_rates, precision=Precision(a=0, b=4, usd=3))
    assert result.b == "6.0000"
    assert result.usd == "0.067"


def test_resync_is_idempotent(context, usd_rates):
    first = resync(context, usd_rates, "15000000")
    second = resync(context, usd_rates, first.a)
    assert first == second


def test_unknown_pair_uses_neutral_rate():
    context = ConversionContext("AAA", "BBB")
    result = sync(Field.A, "100", context, RateTable())
    assert result.base_rate == 1.0
    assert result.b == "100.00"
    assert result.usd == "100.00"


def test_same_currency(usd_rates):
    result = sync(Field.A, "500", ConversionContext("RUB", "RUB"), usd_rates)
    assert result.b == "500.00"


def test_huge_amounts_round_without_error(context, usd_rates):
    result = sync(Field.A, "9" * 30, context, usd_rates)
    assert result.b.endswith(".00")
    assert float(result.b) == pytest.approx(6e27)
    assert float(result.usd) == pytest.approx(1e30 / 15000)

    back = sync(Field.B, result.b, context, usd_rates)
    assert float(back.a) == pytest.approx(1e30)


def test_round_to_keeps_every_integer_digit():
    assert round_to(6.000000000000001e27, 2) == "6000000000000001000000000000.00"
    assert round_to(1e300, 0) == "1" + "0" * 300
