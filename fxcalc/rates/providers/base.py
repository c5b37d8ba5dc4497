"""Rate source base class."""
from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Dict, Iterable, List

from fxcalc.rates.table import USD
from fxcalc.utils.validation import validate_currency_code


class BaseRateSource(ABC):
    """Abstract base class for live rate sources.

    ``fetch_rates`` returns a possibly partial ``{"BASE/QUOTE": rate}``
    mapping and raises ``DataProviderError`` on total failure.
    """

    NAME: str = "base"

    @abstractmethod
    async def fetch_rates(self, currency_a: str, currency_b: str) -> Dict[str, float]:
        """Fetch fresh readings relevant to the pair being converted."""

    async def health_check(self) -> bool:
        """Return True when the upstream service looks reachable/healthy."""
        try:
            return bool(await self.fetch_rates(USD, "EUR"))
        except Exception:
            return False

    @staticmethod
    def quote_currencies(codes: Iterable[str]) -> List[str]:
        """Distinct non-USD codes, validated and in first-seen order."""
        seen: List[str] = []
        for code in codes:
            normalized = validate_currency_code(code)
            if normalized != USD and normalized not in seen:
                seen.append(normalized)
        return seen
