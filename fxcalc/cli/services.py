"""Wiring shared by CLI commands: config, store, session and rate source."""
from __future__ import annotations

import asyncio
from dataclasses import dataclass
from typing import Optional

from fxcalc.calculator.config import CalculatorSettings
from fxcalc.calculator.session import CalculatorSession
from fxcalc.config import Config, load_config
from fxcalc.rates.providers import BaseRateSource, get_rate_source
from fxcalc.rates.refresher import RateRefresher
from fxcalc.storage import PreferenceStore, SqlStore
from fxcalc.utils.errors import ConfigurationError
from fxcalc.utils.logging import get_logger, setup_logging
from fxcalc.utils.paths import resolve_project_path

logger = get_logger(__name__)


@dataclass
class AppContext:
    settings: CalculatorSettings
    preferences: PreferenceStore
    store: SqlStore
    config: Optional[Config] = None

    def session(self) -> CalculatorSession:
        return CalculatorSession(self.settings, preferences=self.preferences)

    def rate_source(self) -> BaseRateSource:
        return get_rate_source(self.settings.rate_source, self.settings.rate_source_options)

    def close(self) -> None:
        self.store.close()


def bootstrap(config_path: str = "config.yaml", console_logging: bool = True) -> AppContext:
    """Load configuration (falling back to defaults when absent) and open the store."""
    cfg: Optional[Config]
    try:
        cfg = load_config(str(resolve_project_path(config_path)), console_logging=console_logging)
    except ConfigurationError as e:
        setup_logging(level="WARNING", format_type="text", console=console_logging)
        logger.warning(f"{e}; using built-in defaults")
        cfg = None

    settings = CalculatorSettings.from_config(cfg)
    db_path = settings.database_path
    if db_path != ":memory:":
        db_path = str(resolve_project_path(db_path))
    store = SqlStore.from_path(db_path)
    return AppContext(settings=settings, preferences=PreferenceStore(store), store=store, config=cfg)


def fetch_live_rates(ctx: AppContext, session: CalculatorSession) -> bool:
    """One blocking refresh into ``session``; False when the source failed."""
    refresher = RateRefresher(
        ctx.rate_source(),
        on_rates=session.apply_rates,
        pair_provider=lambda: (session.context.currency_a, session.context.currency_b),
        fetch_timeout=ctx.settings.fetch_timeout_seconds,
    )
    return asyncio.run(refresher.refresh_once())
