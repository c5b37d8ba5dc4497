from dataclasses import dataclass, field
from typing import Any, Dict, Optional

from fxcalc.config import Config


@dataclass(frozen=True)
class Precision:
    """Decimal places shown for each amount field."""

    a: int = 0  # currency A is usually a high-denomination unit (e.g. IDR)
    b: int = 2
    usd: int = 2


@dataclass
class CalculatorSettings:
    currency_a: str = "IDR"
    currency_b: str = "RUB"
    default_amount_a: str = "2000000"
    precision: Precision = field(default_factory=Precision)
    history_max_entries: int = 50
    refresh_interval_seconds: float = 600.0
    fetch_timeout_seconds: float = 30.0
    rate_source: str = "exchange_rate_host"
    rate_source_options: Dict[str, Any] = field(default_factory=dict)
    database_path: str = "data/fxcalc.db"

    @classmethod
    def from_config(cls, cfg: Optional[Config]) -> "CalculatorSettings":
        if cfg is None:
            return cls()
        defaults = cls()
        p = cfg.get("calculator.precision") or {}
        precision = Precision(
            a=int(p.get("a", defaults.precision.a)),
            b=int(p.get("b", defaults.precision.b)),
            usd=int(p.get("usd", defaults.precision.usd)),
        )
        source = cfg.get("rates.source", defaults.rate_source)
        return cls(
            currency_a=str(cfg.get("calculator.currency_a", defaults.currency_a)).upper(),
            currency_b=str(cfg.get("calculator.currency_b", defaults.currency_b)).upper(),
            default_amount_a=str(cfg.get("calculator.default_amount_a", defaults.default_amount_a)),
            precision=precision,
            history_max_entries=int(cfg.get("calculator.history_max_entries", defaults.history_max_entries)),
            refresh_interval_seconds=float(cfg.get("rates.refresh_interval_seconds", defaults.refresh_interval_seconds)),
            fetch_timeout_seconds=float(cfg.get("rates.fetch_timeout_seconds", defaults.fetch_timeout_seconds)),
            rate_source=source,
            rate_source_options=dict(cfg.get(f"rates.{source}", {}) or {}),
            database_path=cfg.database_path,
        )
