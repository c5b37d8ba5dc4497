"""Typed access to stored preferences.

Each key is read independently: an absent or corrupt value falls back to
its default without affecting any other key.
"""
from __future__ import annotations

import json
from typing import Any, Callable, Dict, List, Optional, Tuple, TypeVar

from fxcalc.calculator.history import HistoryEntry, history_from_json, history_to_json
from fxcalc.calculator.journal import DealJournal
from fxcalc.rates.table import RateTable
from fxcalc.storage.store import KeyValueStore
from fxcalc.utils.errors import StorageError, ValidationError
from fxcalc.utils.logging import get_logger
from fxcalc.utils.validation import validate_currency_code

logger = get_logger(__name__)

T = TypeVar("T")

KEY_CURRENCY_A = "currency_a"
KEY_CURRENCY_B = "currency_b"
KEY_SPREAD = "spread_text"
KEY_HISTORY = "history"
KEY_RATES = "rate_cache"
KEY_JOURNAL = "deal_journal"


class PreferenceStore:
    def __init__(self, store: KeyValueStore):
        self.store = store

    def _read(self, key: str, parse: Callable[[str], T], default: T) -> T:
        try:
            raw = self.store.get(key)
        except StorageError as e:
            logger.warning(f"Could not read {key}: {e}")
            return default
        if raw is None:
            return default
        try:
            return parse(raw)
        except (ValueError, TypeError, KeyError, ValidationError) as e:
            logger.warning(f"Corrupt stored value for {key}, using default: {e}")
            return default

    def _write(self, key: str, value: str) -> None:
        try:
            self.store.set(key, value)
        except StorageError as e:
            logger.warning(f"Could not persist {key}: {e}")

    def currencies(self, default: Tuple[str, str]) -> Tuple[str, str]:
        a = self._read(KEY_CURRENCY_A, validate_currency_code, default[0])
        b = self._read(KEY_CURRENCY_B, validate_currency_code, default[1])
        return a, b

    def save_currencies(self, currency_a: str, currency_b: str) -> None:
        self._write(KEY_CURRENCY_A, currency_a)
        self._write(KEY_CURRENCY_B, currency_b)

    def spread_text(self, default: str = "") -> str:
        return self._read(KEY_SPREAD, str, default)

    def save_spread_text(self, spread_text: str) -> None:
        self._write(KEY_SPREAD, spread_text)

    def history(self, max_entries: Optional[int] = None) -> List[HistoryEntry]:
        def parse(raw: str) -> List[HistoryEntry]:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("history is not a JSON array")
            return history_from_json(data, max_entries)

        return self._read(KEY_HISTORY, parse, [])

    def save_history(self, history: List[HistoryEntry]) -> None:
        self._write(KEY_HISTORY, json.dumps(history_to_json(history)))

    def rate_cache(self) -> Dict[str, float]:
        def parse(raw: str) -> Dict[str, float]:
            data: Any = json.loads(raw)
            if not isinstance(data, dict):
                raise ValueError("rate cache is not a JSON object")
            # RateTable drops invalid pairs and values
            return RateTable(data).to_dict()

        return self._read(KEY_RATES, parse, {})

    def save_rate_cache(self, rates: RateTable) -> None:
        self._write(KEY_RATES, json.dumps(rates.to_dict()))

    def journal(self) -> DealJournal:
        def parse(raw: str) -> DealJournal:
            data = json.loads(raw)
            if not isinstance(data, list):
                raise ValueError("deal journal is not a JSON array")
            return DealJournal.from_json(data)

        return self._read(KEY_JOURNAL, parse, DealJournal())

    def save_journal(self, journal: DealJournal) -> None:
        self._write(KEY_JOURNAL, json.dumps(journal.to_json()))
