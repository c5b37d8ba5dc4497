"""Plain-text rate feed source ("USD/RUB: 91.50" per line or inline)."""
from __future__ import annotations

from typing import Dict

import httpx

from fxcalc.rates.parsing import parse_rate_text
from fxcalc.rates.providers.base import BaseRateSource
from fxcalc.utils.decorators import log_execution, retry
from fxcalc.utils.errors import DataNotFoundError, DataProviderError
from fxcalc.utils.logging import get_logger


logger = get_logger(__name__)


class TextFeedSource(BaseRateSource):
    NAME = "text_feed"

    def __init__(self, url: str, timeout: float = 10.0) -> None:
        self.url = url
        self.timeout = float(timeout)

    @retry(max_attempts=2, delay=1.0, exceptions=(httpx.HTTPError,))
    async def _get_text(self) -> str:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(self.url)
            resp.raise_for_status()
            return resp.text

    @log_execution(log_args=False, log_result=False)
    async def fetch_rates(self, currency_a: str, currency_b: str) -> Dict[str, float]:
        try:
            text = await self._get_text()
        except Exception as e:
            logger.error(f"Text feed request failed: {e}")
            raise DataProviderError(str(e))

        rates = parse_rate_text(text)
        if not rates:
            raise DataNotFoundError(f"No rates found in feed {self.url}")
        logger.debug(f"Text feed returned {len(rates)} pairs for {currency_a}/{currency_b}")
        return rates
