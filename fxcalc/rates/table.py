"""In-memory table of known currency-pair rates."""
from __future__ import annotations

import math
from typing import Dict, Iterator, Mapping, Optional, Tuple

from fxcalc.utils.errors import ValidationError
from fxcalc.utils.logging import get_logger
from fxcalc.utils.validation import validate_currency_pair

logger = get_logger(__name__)

USD = "USD"

# Reference rates used until a rate source delivers fresher readings.
FALLBACK_RATES: Dict[str, float] = {
    "USD/RUB": 91.50,
    "USD/IDR": 16200.00,
    "RUB/IDR": 210.00,
    "IDR/RUB": 0.0047,
    "USD/THB": 34.50,
    "USD/TRY": 34.20,
    "USD/GEL": 2.72,
    "EUR/USD": 1.09,
}


def pair_key(base: str, quote: str) -> str:
    return f"{base}/{quote}"


def split_pair_key(key: str) -> Tuple[str, str]:
    """Split "BASE/QUOTE" (or "BASE-QUOTE", "BASEQUOTE") into codes."""
    return validate_currency_pair(key)


def is_valid_rate(value: object) -> bool:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return False
    return math.isfinite(value) and value > 0


class RateTable:
    """Mapping of (base, quote) to "1 base = rate quote".

    Only strictly positive finite rates are ever stored. Entries are
    overwritten by merges but never removed.
    """

    def __init__(self, rates: Optional[Mapping[str, float]] = None):
        self._rates: Dict[Tuple[str, str], float] = {}
        if rates:
            self.merge(rates)

    @classmethod
    def with_fallback(cls) -> "RateTable":
        return cls(FALLBACK_RATES)

    def get(self, base: str, quote: str) -> Optional[float]:
        return self._rates.get((base, quote))

    def set(self, base: str, quote: str, rate: float) -> bool:
        """Store a rate. Returns False (and stores nothing) for invalid values."""
        if not is_valid_rate(rate):
            logger.debug(f"Rejected rate for {pair_key(base, quote)}: {rate!r}")
            return False
        self._rates[(base, quote)] = float(rate)
        return True

    def merge(self, rates: Mapping[str, float]) -> int:
        """Overlay readings keyed by "BASE/QUOTE". Returns the number accepted."""
        accepted = 0
        for key, rate in rates.items():
            try:
                base, quote = split_pair_key(key)
            except ValidationError:
                logger.debug(f"Skipping malformed pair key: {key!r}")
                continue
            if self.set(base, quote, rate):
                accepted += 1
        return accepted

    def to_dict(self) -> Dict[str, float]:
        return {pair_key(b, q): r for (b, q), r in self._rates.items()}

    def copy(self) -> "RateTable":
        return RateTable(self.to_dict())

    def __contains__(self, key: object) -> bool:
        if isinstance(key, str):
            try:
                key = split_pair_key(key)
            except ValidationError:
                return False
        return key in self._rates

    def __iter__(self) -> Iterator[str]:
        return iter(self.to_dict())

    def __len__(self) -> int:
        return len(self._rates)

    def __repr__(self) -> str:
        return f"RateTable({self.to_dict()!r})"
