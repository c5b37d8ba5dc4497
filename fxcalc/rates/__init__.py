"""Rate table, resolution and live rate sources."""

from .table import FALLBACK_RATES, RateTable, pair_key, split_pair_key
from .resolver import resolve, resolve_or_default, usd_rate

__all__ = [
    "FALLBACK_RATES",
    "RateTable",
    "pair_key",
    "split_pair_key",
    "resolve",
    "resolve_or_default",
    "usd_rate",
]
