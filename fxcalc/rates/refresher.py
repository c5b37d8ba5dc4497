"""Periodic, non-overlapping rate refresh."""
from __future__ import annotations

import asyncio
import concurrent.futures
import threading
from typing import Callable, Dict, Optional, Tuple

from fxcalc.rates.providers.base import BaseRateSource
from fxcalc.utils.decorators import timeout
from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)

RatesCallback = Callable[[Dict[str, float]], None]
PairProvider = Callable[[], Tuple[str, str]]


class RateRefresher:
    """Fetches rates from a source on a fixed interval.

    At most one fetch is in flight at a time. A successful, non-empty fetch
    hands the readings to ``on_rates`` exactly once; failures are logged and
    the caller's rate table is left untouched.
    """

    def __init__(
        self,
        source: BaseRateSource,
        on_rates: RatesCallback,
        pair_provider: PairProvider,
        interval_seconds: float = 600.0,
        fetch_timeout: float = 30.0,
    ) -> None:
        self.source = source
        self.on_rates = on_rates
        self.pair_provider = pair_provider
        self.interval_seconds = float(interval_seconds)
        self.fetch_timeout = float(fetch_timeout)
        self._in_flight = False
        self._task: Optional[asyncio.Task] = None
        self.last_error: Optional[str] = None

    @property
    def in_flight(self) -> bool:
        return self._in_flight

    @property
    def running(self) -> bool:
        return self._task is not None and not self._task.done()

    async def refresh_once(self) -> bool:
        """Run one fetch. Returns True only when new rates were delivered."""
        if self._in_flight:
            logger.debug("Rate fetch already in flight, skipping")
            return False

        self._in_flight = True
        try:
            currency_a, currency_b = self.pair_provider()
            fetch = timeout(self.fetch_timeout)(self.source.fetch_rates)
            rates = await fetch(currency_a, currency_b)
        except asyncio.CancelledError:
            raise
        except Exception as e:
            self.last_error = str(e)
            logger.warning(f"Rate refresh from {self.source.NAME} failed: {e}")
            return False
        finally:
            self._in_flight = False

        if not rates:
            logger.info(f"Rate source {self.source.NAME} returned no readings")
            return False

        logger.info(f"Fetched {len(rates)} rates from {self.source.NAME}")
        try:
            self.on_rates(rates)
        except Exception as e:
            self.last_error = str(e)
            logger.error(f"Applying rates from {self.source.NAME} failed: {e}", exc_info=True)
            return False
        self.last_error = None
        return True

    async def _run(self) -> None:
        while True:
            try:
                await self.refresh_once()
            except asyncio.CancelledError:
                raise
            except Exception as e:
                logger.error(f"Rate refresh cycle failed: {e}", exc_info=True)
            await asyncio.sleep(self.interval_seconds)

    def start(self) -> asyncio.Task:
        """Schedule the periodic loop on the running event loop."""
        if self.running:
            return self._task
        self._task = asyncio.get_running_loop().create_task(self._run())
        logger.info(f"Rate refresh started (every {self.interval_seconds:.0f}s)")
        return self._task

    async def stop(self) -> None:
        """Cancel the periodic loop and wait for it to finish."""
        task, self._task = self._task, None
        if task is None:
            return
        task.cancel()
        try:
            await task
        except asyncio.CancelledError:
            pass
        logger.info("Rate refresh stopped")


class ThreadedRefresher:
    """Runs a RateRefresher on a private event loop in a daemon thread.

    Used by the synchronous terminal UI so that blocking prompts never hold
    up rate fetches.
    """

    def __init__(self, refresher: RateRefresher) -> None:
        self.refresher = refresher
        self._loop: Optional[asyncio.AbstractEventLoop] = None
        self._thread: Optional[threading.Thread] = None

    def start(self) -> None:
        if self._thread is not None:
            return
        self._loop = asyncio.new_event_loop()
        self._thread = threading.Thread(target=self._serve, name="rate-refresh", daemon=True)
        self._thread.start()
        asyncio.run_coroutine_threadsafe(self._start_refresher(), self._loop).result(timeout=5)

    def _serve(self) -> None:
        asyncio.set_event_loop(self._loop)
        self._loop.run_forever()

    async def _start_refresher(self) -> None:
        self.refresher.start()

    def refresh_now(self, wait: float = 30.0) -> bool:
        if self._loop is None:
            return False
        future = asyncio.run_coroutine_threadsafe(self.refresher.refresh_once(), self._loop)
        try:
            return future.result(timeout=wait)
        except concurrent.futures.TimeoutError:
            logger.warning("Manual rate refresh still running in background")
            return False

    def stop(self) -> None:
        if self._loop is None or self._thread is None:
            return
        try:
            asyncio.run_coroutine_threadsafe(self.refresher.stop(), self._loop).result(timeout=5)
        except concurrent.futures.TimeoutError:
            logger.warning("Timed out stopping rate refresh")
        self._loop.call_soon_threadsafe(self._loop.stop)
        self._thread.join(timeout=5)
        if not self._thread.is_alive():
            self._loop.close()
        self._loop, self._thread = None, None
