"""Manual log of USD buy/sell deals with average-rate statistics."""
from __future__ import annotations

import uuid
from dataclasses import asdict, dataclass, field
from datetime import date
from typing import Any, Dict, List, Optional

from fxcalc.utils.errors import ValidationError
from fxcalc.utils.logging import get_logger
from fxcalc.utils.validation import validate_amount, validate_currency_code, validate_side

logger = get_logger(__name__)


@dataclass(frozen=True)
class DealRecord:
    side: str  # buy | sell
    currency: str
    amount_usd: float
    rate: float  # units of currency per 1 USD
    reference_rate: float = 0.0
    deal_date: date = field(default_factory=date.today)
    id: str = field(default_factory=lambda: uuid.uuid4().hex)

    @property
    def currency_pair(self) -> str:
        return f"USD/{self.currency}"

    @property
    def amount_to(self) -> float:
        return self.amount_usd * self.rate

    @property
    def deviation_percent(self) -> float:
        """Deal rate versus the reference rate at the time, in percent."""
        if not self.reference_rate:
            return 0.0
        return (self.rate - self.reference_rate) / self.reference_rate * 100

    def to_dict(self) -> Dict[str, Any]:
        data = asdict(self)
        data["deal_date"] = self.deal_date.isoformat()
        return data

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "DealRecord":
        return cls(
            id=str(data["id"]),
            side=validate_side(data["side"]),
            currency=str(data["currency"]),
            amount_usd=float(data["amount_usd"]),
            rate=float(data["rate"]),
            reference_rate=float(data.get("reference_rate", 0.0)),
            deal_date=date.fromisoformat(data["deal_date"]),
        )


@dataclass(frozen=True)
class DealStats:
    avg_buy: float = 0.0
    avg_sell: float = 0.0
    spread_percent: float = 0.0


class DealJournal:
    def __init__(self, records: Optional[List[DealRecord]] = None):
        self.records: List[DealRecord] = list(records or [])

    def add(
        self,
        side: str,
        currency: str,
        amount_usd: float,
        rate: float,
        reference_rate: float = 0.0,
    ) -> DealRecord:
        record = DealRecord(
            side=validate_side(side),
            currency=validate_currency_code(currency),
            amount_usd=validate_amount(float(amount_usd)),
            rate=validate_amount(float(rate)),
            reference_rate=float(reference_rate or 0.0),
        )
        self.records.insert(0, record)
        logger.info(f"Logged {record.side} of {record.amount_usd} USD at {record.rate} {record.currency}")
        return record

    def remove(self, record_id: str) -> bool:
        before = len(self.records)
        self.records = [r for r in self.records if r.id != record_id]
        return len(self.records) != before

    def stats(self, currency: Optional[str] = None) -> DealStats:
        records = [r for r in self.records if currency is None or r.currency == currency]
        buys = [r.rate for r in records if r.side == "buy"]
        sells = [r.rate for r in records if r.side == "sell"]
        avg_buy = sum(buys) / len(buys) if buys else 0.0
        avg_sell = sum(sells) / len(sells) if sells else 0.0
        spread = (avg_sell - avg_buy) / avg_buy * 100 if avg_buy and avg_sell else 0.0
        return DealStats(avg_buy=avg_buy, avg_sell=avg_sell, spread_percent=spread)

    def to_json(self) -> List[Dict[str, Any]]:
        return [r.to_dict() for r in self.records]

    @classmethod
    def from_json(cls, data: Any) -> "DealJournal":
        if not isinstance(data, list):
            return cls()
        records = []
        for item in data:
            try:
                records.append(DealRecord.from_dict(item))
            except (KeyError, TypeError, ValueError, ValidationError) as e:
                logger.warning(f"Skipping malformed deal record: {e}")
        return cls(records)
