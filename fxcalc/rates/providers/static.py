"""Offline rate source serving the built-in reference table."""
from __future__ import annotations

from typing import Dict, Mapping, Optional

from fxcalc.rates.providers.base import BaseRateSource
from fxcalc.rates.table import FALLBACK_RATES


class StaticRateSource(BaseRateSource):
    NAME = "static"

    def __init__(self, rates: Optional[Mapping[str, float]] = None) -> None:
        self.rates = dict(rates if rates is not None else FALLBACK_RATES)

    async def fetch_rates(self, currency_a: str, currency_b: str) -> Dict[str, float]:
        return dict(self.rates)

    async def health_check(self) -> bool:
        return True
