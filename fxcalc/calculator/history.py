"""Conversion history: immutable entries in a bounded, newest-first list."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from typing import Any, Dict, Iterable, List, Optional, Sequence

from fxcalc.calculator.expression import evaluate_number
from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)

DEFAULT_MAX_ENTRIES = 50


@dataclass(frozen=True)
class HistoryEntry:
    from_currency: str
    from_amount: float
    to_currency: str
    to_amount: float
    spread_percent: float = 0.0
    timestamp: datetime = field(default_factory=lambda: datetime.now(timezone.utc))
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    def same_conversion(self, other: "HistoryEntry") -> bool:
        return (
            self.from_currency == other.from_currency
            and self.from_amount == other.from_amount
            and self.to_currency == other.to_currency
            and self.to_amount == other.to_amount
        )

    @property
    def rate(self) -> float:
        return self.to_amount / self.from_amount if self.from_amount else 0.0

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["timestamp"] = self.timestamp.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "HistoryEntry":
        return cls(
            id=str(data["id"]),
            from_currency=str(data["from_currency"]),
            from_amount=float(data["from_amount"]),
            to_currency=str(data["to_currency"]),
            to_amount=float(data["to_amount"]),
            spread_percent=float(data.get("spread_percent", 0.0)),
            timestamp=datetime.fromisoformat(data["timestamp"]),
        )


def record_if_meaningful(
    from_currency: str,
    from_amount_raw: str,
    to_currency: str,
    to_amount_raw: str,
    spread_percent: float,
    history: Sequence[HistoryEntry],
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> List[HistoryEntry]:
    """Return ``history`` with a new entry prepended, when worth recording.

    Nothing is recorded when either amount evaluates to 0 or when the
    newest entry already describes the same conversion.
    """
    from_amount = evaluate_number(from_amount_raw)
    to_amount = evaluate_number(to_amount_raw)
    if not from_amount or not to_amount:
        return list(history)

    entry = HistoryEntry(
        from_currency=from_currency,
        from_amount=from_amount,
        to_currency=to_currency,
        to_amount=to_amount,
        spread_percent=spread_percent,
    )
    if history and history[0].same_conversion(entry):
        return list(history)

    logger.debug(f"Recorded {from_amount} {from_currency} -> {to_amount} {to_currency}")
    return [entry, *history][:max(max_entries, 0)]


def delete_entry(history: Sequence[HistoryEntry], entry_id: str) -> List[HistoryEntry]:
    return [e for e in history if e.id != entry_id]


def clear_history() -> List[HistoryEntry]:
    return []


def history_to_json(history: Iterable[HistoryEntry]) -> List[Dict[str, Any]]:
    return [e.to_dict() for e in history]


def history_from_json(data: Any, max_entries: Optional[int] = None) -> List[HistoryEntry]:
    """Rebuild entries from stored JSON, skipping malformed items."""
    if not isinstance(data, list):
        return []
    entries: List[HistoryEntry] = []
    for item in data:
        try:
            entries.append(HistoryEntry.from_dict(item))
        except (KeyError, TypeError, ValueError) as e:
            logger.warning(f"Skipping malformed history entry: {e}")
    if max_entries is not None:
        entries = entries[:max_entries]
    return entries
