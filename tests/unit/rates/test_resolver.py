"""Tests for cross-rate resolution."""
import pytest

from fxcalc.rates.resolver import resolve, resolve_or_default, usd_rate
from fxcalc.rates.table import FALLBACK_RATES, RateTable


def test_cross_via_usd(usd_rates):
    assert resolve("IDR", "RUB", usd_rates) == pytest.approx(0.006)
    assert resolve("RUB", "IDR", usd_rates) == pytest.approx(15000 / 90)


@pytest.mark.parametrize("code", ["USD", "IDR", "RUB", "XYZ"])
@pytest.mark.parametrize("table", [RateTable(), RateTable({"USD/RUB": 90}), RateTable.with_fallback()])
def test_identity_is_one(code, table):
    assert resolve(code, code, table) == 1.0


def test_direct_beats_cross():
    table = RateTable({"IDR/RUB": 0.0055, "USD/RUB": 90, "USD/IDR": 15000})
    assert resolve("IDR", "RUB", table) == 0.0055


def test_inverse_entry():
    table = RateTable({"EUR/USD": 1.25})
    assert resolve("USD", "EUR", table) == pytest.approx(0.8)


@pytest.mark.parametrize(
    "rates",
    [
        {"IDR/RUB": 0.0055},
        {"USD/RUB": 90, "USD/IDR": 15000},
        {"RUB/USD": 0.011, "IDR/USD": 0.0000666},
    ],
)
def test_inverse_symmetry(rates):
    table = RateTable(rates)
    forward = resolve("IDR", "RUB", table, fallback={})
    backward = resolve("RUB", "IDR", table, fallback={})
    assert forward == pytest.approx(1 / backward)


def test_cross_uses_static_usd_legs_when_table_is_missing_one():
    table = RateTable({"USD/RUB": 90})
    expected = 90 / FALLBACK_RATES["USD/THB"]
    assert resolve("THB", "RUB", table) == pytest.approx(expected)


def test_static_fallback_for_exact_pair():
    fallback = {"AAA/BBB": 3.0}
    assert resolve("AAA", "BBB", RateTable(), fallback=fallback) == 3.0
    assert resolve("BBB", "AAA", RateTable(), fallback=fallback) == pytest.approx(1 / 3)


def test_unresolvable_pair():
    assert resolve("AAA", "BBB", RateTable(), fallback={}) is None
    assert resolve_or_default("AAA", "BBB", RateTable(), fallback={}) == 1.0


def test_usd_rate():
    table = RateTable({"USD/IDR": 15000, "RUB/USD": 0.0125})
    assert usd_rate("USD", table) == 1.0
    assert usd_rate("IDR", table) == 15000.0
    assert usd_rate("RUB", table) == pytest.approx(80.0)
    assert usd_rate("THB", table) == FALLBACK_RATES["USD/THB"]
    assert usd_rate("XYZ", table) == 1.0
