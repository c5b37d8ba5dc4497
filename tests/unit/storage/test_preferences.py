"""Tests for typed preference access."""
import json

from fxcalc.calculator.history import record_if_meaningful
from fxcalc.calculator.journal import DealJournal
from fxcalc.rates.table import RateTable
from fxcalc.storage import KeyValueStore, MemoryStore, PreferenceStore
from fxcalc.utils.errors import StorageError


class BrokenStore(KeyValueStore):
    def get(self, key):
        raise StorageError("disk on fire")

    def set(self, key, value):
        raise StorageError("disk on fire")

    def delete(self, key):
        raise StorageError("disk on fire")


def test_defaults_when_empty(preferences):
    assert preferences.currencies(("IDR", "RUB")) == ("IDR", "RUB")
    assert preferences.spread_text() == ""
    assert preferences.history() == []
    assert preferences.rate_cache() == {}
    assert preferences.journal().records == []


def test_round_trip(preferences):
    preferences.save_currencies("THB", "USD")
    preferences.save_spread_text("2+0.5")
    history = record_if_meaningful("THB", "100", "USD", "2.90", 0.0, [])
    preferences.save_history(history)
    preferences.save_rate_cache(RateTable({"USD/THB": 34.5}))
    journal = DealJournal()
    journal.add("sell", "THB", 100, 35.1)
    preferences.save_journal(journal)

    assert preferences.currencies(("IDR", "RUB")) == ("THB", "USD")
    assert preferences.spread_text() == "2+0.5"
    assert preferences.history() == history
    assert preferences.rate_cache() == {"USD/THB": 34.5}
    assert preferences.journal().records == journal.records


def test_corrupt_values_fall_back_per_key():
    store = MemoryStore(
        {
            "currency_a": "not-a-code",
            "currency_b": "usd",
            "history": "{broken json",
            "rate_cache": json.dumps({"USD/RUB": 90, "USD/IDR": -1, "junk": 3}),
            "deal_journal": json.dumps({"not": "a list"}),
            "spread_text": "1.5",
        }
    )
    preferences = PreferenceStore(store)

    assert preferences.currencies(("IDR", "RUB")) == ("IDR", "USD")
    assert preferences.history() == []
    assert preferences.rate_cache() == {"USD/RUB": 90.0}
    assert preferences.journal().records == []
    assert preferences.spread_text() == "1.5"


def test_history_cap_on_load(preferences):
    history = []
    for n in range(1, 6):
        history = record_if_meaningful("IDR", str(n), "RUB", "1", 0.0, history)
    preferences.save_history(history)
    assert len(preferences.history(max_entries=3)) == 3


def test_storage_failures_are_not_fatal():
    preferences = PreferenceStore(BrokenStore())
    preferences.save_currencies("IDR", "RUB")
    assert preferences.currencies(("EUR", "USD")) == ("EUR", "USD")
    assert preferences.history() == []
