"""ExchangeRate.host rate source."""
from __future__ import annotations

import os
from typing import Dict, Iterable, Optional

import httpx

from fxcalc.rates.parsing import parse_rate_token
from fxcalc.rates.providers.base import BaseRateSource
from fxcalc.rates.table import USD, pair_key
from fxcalc.utils.decorators import log_execution, retry
from fxcalc.utils.errors import DataProviderError, RateLimitError
from fxcalc.utils.logging import get_logger


logger = get_logger(__name__)


class ExchangeRateHostSource(BaseRateSource):
    """Fetches USD-based quotes and returns them as ``USD/XXX`` pairs."""

    NAME = "exchange_rate_host"

    def __init__(
        self,
        base_url: str = "https://api.exchangerate.host",
        timeout: float = 10.0,
        api_key: Optional[str] = None,
        extra_currencies: Iterable[str] = (),
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.timeout = float(timeout)
        self.api_key = api_key if api_key is not None else os.getenv("EXCHANGE_RATE_HOST_API_KEY", "")
        self.extra_currencies = list(extra_currencies)

    @retry(max_attempts=3, delay=1.0, exceptions=(httpx.HTTPError,))
    async def _get(self, params: Dict[str, str]) -> dict:
        async with httpx.AsyncClient(timeout=self.timeout) as client:
            resp = await client.get(f"{self.base_url}/live", params=params)
            if resp.status_code == 429:
                raise RateLimitError("ExchangeRate.host rate limit exceeded")
            resp.raise_for_status()
            return resp.json() or {}

    @log_execution(log_args=False, log_result=False)
    async def fetch_rates(self, currency_a: str, currency_b: str) -> Dict[str, float]:
        quotes_wanted = self.quote_currencies([currency_a, currency_b, *self.extra_currencies])
        if not quotes_wanted:
            return {}

        params = {"source": USD, "currencies": ",".join(quotes_wanted)}
        if self.api_key:
            params["access_key"] = self.api_key

        try:
            data = await self._get(params)
        except DataProviderError:
            raise
        except Exception as e:
            logger.error(f"ExchangeRate.host request failed: {e}")
            raise DataProviderError(str(e))

        if not isinstance(data, dict):
            raise DataProviderError("Invalid response from ExchangeRate.host")

        if not data.get("success", True):
            error_info = data.get("error") or {}
            error_msg = f"API error: {error_info.get('type', 'unknown')} - {error_info.get('info', 'no details')}"
            logger.error(f"ExchangeRate.host API error: {error_msg}")
            raise DataProviderError(error_msg)

        # {"quotes": {"USDRUB": 91.5, "USDIDR": "16,200.00"}}
        quotes = data.get("quotes") or {}
        rates: Dict[str, float] = {}
        for code in quotes_wanted:
            raw = quotes.get(f"{USD}{code}")
            value = parse_rate_token(raw)
            if value is None:
                logger.warning(f"ExchangeRate.host response missing or malformed rate for {USD}{code}: {raw!r}")
                continue
            rates[pair_key(USD, code)] = value

        if not rates:
            raise DataProviderError(f"No usable quotes in response. Available quotes: {list(quotes.keys())}")
        return rates
