"""The calculator session: four linked fields over one rate table."""
from __future__ import annotations

import threading
from dataclasses import dataclass
from typing import Dict, List, Mapping, Optional

from fxcalc.calculator.accumulator import ExpressionAccumulator, KeyKind, classify_key
from fxcalc.calculator.config import CalculatorSettings
from fxcalc.calculator.expression import format_display
from fxcalc.calculator.history import (
    HistoryEntry,
    clear_history as cleared_history,
    delete_entry,
    record_if_meaningful,
)
from fxcalc.calculator.sync import ConversionContext, Field, SyncResult, resync, sync
from fxcalc.rates.table import RateTable
from fxcalc.storage.preferences import PreferenceStore
from fxcalc.utils.logging import get_logger
from fxcalc.utils.validation import validate_currency_code

logger = get_logger(__name__)


@dataclass(frozen=True)
class SessionSnapshot:
    currency_a: str
    currency_b: str
    a: str
    b: str
    usd: str
    spread: str
    active: Field
    base_rate: float
    effective_rate: float
    usd_rate_a: float

    @property
    def inverse_effective_rate(self) -> float:
        return 1 / self.effective_rate if self.effective_rate else 0.0


class CalculatorSession:
    """Owns the conversion context, field buffers, rate table and history.

    Every public operation holds ``lock`` for its whole read-evaluate-sync
    transaction, so a rate refresh delivered from another thread never sees
    a half-updated set of fields.
    """

    def __init__(
        self,
        settings: Optional[CalculatorSettings] = None,
        preferences: Optional[PreferenceStore] = None,
        rates: Optional[RateTable] = None,
    ) -> None:
        self.settings = settings or CalculatorSettings()
        self.preferences = preferences
        self.lock = threading.RLock()

        self.rates = rates if rates is not None else RateTable.with_fallback()
        currency_a, currency_b = self.settings.currency_a, self.settings.currency_b
        spread_text = ""
        self.history: List[HistoryEntry] = []

        if preferences is not None:
            self.rates.merge(preferences.rate_cache())
            currency_a, currency_b = preferences.currencies((currency_a, currency_b))
            spread_text = preferences.spread_text()
            self.history = preferences.history(self.settings.history_max_entries)

        self.context = ConversionContext(currency_a, currency_b, spread_text)
        self.fields: Dict[Field, ExpressionAccumulator] = {f: ExpressionAccumulator() for f in Field}
        self.fields[Field.SPREAD].set(spread_text)
        self.active = Field.A
        self._last: Optional[SyncResult] = None

        self._apply(resync(self.context, self.rates, self.settings.default_amount_a, self.settings.precision))

    # -- state ---------------------------------------------------------

    def _apply(self, result: SyncResult) -> None:
        self.fields[Field.A].set(result.a)
        self.fields[Field.B].set(result.b)
        self.fields[Field.USD].set(result.usd)
        self.fields[Field.SPREAD].set(result.spread)
        self._last = result

    def _sync_field(self, field: Field) -> None:
        buffer = self.fields[field].buffer
        result = sync(
            field,
            buffer,
            self.context,
            self.rates,
            current_a=self.fields[Field.A].buffer,
            precision=self.settings.precision,
        )
        if field is Field.SPREAD:
            self.context = self.context.with_spread(buffer)
            self._save_spread()
        self._apply(result)

    def _resync(self) -> None:
        self._apply(
            resync(self.context, self.rates, self.fields[Field.A].buffer, self.settings.precision)
        )

    def value(self, field: Field) -> str:
        with self.lock:
            return self.fields[field].buffer

    def display(self, field: Field) -> str:
        with self.lock:
            return format_display(self.fields[field].buffer)

    @property
    def base_rate(self) -> float:
        with self.lock:
            return self._last.base_rate

    @property
    def effective_rate(self) -> float:
        with self.lock:
            return self._last.effective_rate

    @property
    def usd_rate_a(self) -> float:
        with self.lock:
            return self._last.usd_rate_a

    def snapshot(self) -> SessionSnapshot:
        with self.lock:
            return SessionSnapshot(
                currency_a=self.context.currency_a,
                currency_b=self.context.currency_b,
                a=self.fields[Field.A].buffer,
                b=self.fields[Field.B].buffer,
                usd=self.fields[Field.USD].buffer,
                spread=self.fields[Field.SPREAD].buffer,
                active=self.active,
                base_rate=self._last.base_rate,
                effective_rate=self._last.effective_rate,
                usd_rate_a=self._last.usd_rate_a,
            )

    # -- input ---------------------------------------------------------

    def select_field(self, field: Field) -> None:
        with self.lock:
            self.active = Field(field)
            self.fields[self.active].activate()

    def press(self, key: str) -> KeyKind:
        """Feed one key to the active field and re-synchronize."""
        with self.lock:
            field = self.active
            accumulator = self.fields[field]
            if classify_key(key) is KeyKind.CLEAR:
                self.flush_history()
            saved = (accumulator.buffer, accumulator.fresh)
            kind = accumulator.press(key)
            try:
                self._sync_field(field)
            except Exception:
                accumulator.buffer, accumulator.fresh = saved
                raise

            if kind is KeyKind.EVALUATE:
                self.flush_history()
            return kind

    def enter(self, field: Field, text: str) -> None:
        """Replace a field's buffer with typed text, as a sequence of key presses."""
        keys = [ch for ch in text if not ch.isspace()]
        for ch in keys:
            classify_key(ch)

        with self.lock:
            self.select_field(field)
            accumulator = self.fields[self.active]
            saved = (accumulator.buffer, accumulator.fresh)
            accumulator.set("")
            accumulator.fresh = False
            try:
                for ch in keys:
                    accumulator.press(ch)
                self._sync_field(self.active)
            except Exception:
                accumulator.buffer, accumulator.fresh = saved
                raise

    def set_currency_a(self, code: str) -> None:
        with self.lock:
            self.context = ConversionContext(validate_currency_code(code), self.context.currency_b, self.context.spread_text)
            self._save_currencies()
            self._resync()

    def set_currency_b(self, code: str) -> None:
        with self.lock:
            self.context = ConversionContext(self.context.currency_a, validate_currency_code(code), self.context.spread_text)
            self._save_currencies()
            self._resync()

    def swap_currencies(self) -> None:
        with self.lock:
            self.context = ConversionContext(self.context.currency_b, self.context.currency_a, self.context.spread_text)
            self._save_currencies()
            self._resync()

    def apply_rates(self, rates: Mapping[str, float]) -> int:
        """Merge fresh readings and re-synchronize once from the A field."""
        with self.lock:
            accepted = self.rates.merge(rates)
            if accepted:
                if self.preferences is not None:
                    self.preferences.save_rate_cache(self.rates)
                self._resync()
            logger.info(f"Merged {accepted} of {len(rates)} rates")
            return accepted

    # -- history -------------------------------------------------------

    def flush_history(self) -> bool:
        """Record the current A -> B conversion. Returns True if it was added."""
        with self.lock:
            before = self.history
            self.history = record_if_meaningful(
                self.context.currency_a,
                self.fields[Field.A].buffer,
                self.context.currency_b,
                self.fields[Field.B].buffer,
                self.context.spread_percent,
                self.history,
                self.settings.history_max_entries,
            )
            added = bool(self.history) and (not before or self.history[0] is not before[0])
            if added:
                self._save_history()
            return added

    def delete_history_entry(self, entry_id: str) -> None:
        with self.lock:
            self.history = delete_entry(self.history, entry_id)
            self._save_history()

    def clear_history(self) -> None:
        with self.lock:
            self.history = cleared_history()
            self._save_history()

    def close(self) -> None:
        """Best-effort terminal flush of the last known conversion."""
        with self.lock:
            try:
                self.flush_history()
                self._save_currencies()
                self._save_spread()
            except Exception as e:
                logger.warning(f"Final flush failed: {e}")

    # -- persistence ---------------------------------------------------

    def _save_currencies(self) -> None:
        if self.preferences is not None:
            self.preferences.save_currencies(self.context.currency_a, self.context.currency_b)

    def _save_spread(self) -> None:
        if self.preferences is not None:
            self.preferences.save_spread_text(self.context.spread_text)

    def _save_history(self) -> None:
        if self.preferences is not None:
            self.preferences.save_history(self.history)
