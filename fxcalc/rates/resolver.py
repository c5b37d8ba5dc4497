"""Cross-rate resolution over a sparse rate table.

Resolution order for ``resolve(base, quote)``, first success wins:

1. identity (``base == quote``) resolves to 1
2. direct entry ``base/quote``
3. inverse entry ``1 / (quote/base)``
4. cross via USD when neither side is USD: ``usd(quote) / usd(base)``
5. the static fallback table for the exact pair

``resolve`` returns None when nothing matches; ``resolve_or_default`` is the
UI-facing variant that substitutes a neutral 1.
"""
from __future__ import annotations

from typing import Mapping, Optional

from fxcalc.rates.table import FALLBACK_RATES, USD, RateTable, pair_key
from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)


def _lookup(table: RateTable, base: str, quote: str) -> Optional[float]:
    direct = table.get(base, quote)
    if direct:
        return direct
    inverse = table.get(quote, base)
    if inverse:
        return 1.0 / inverse
    return None


def _lookup_static(fallback: Mapping[str, float], base: str, quote: str) -> Optional[float]:
    direct = fallback.get(pair_key(base, quote))
    if direct:
        return float(direct)
    inverse = fallback.get(pair_key(quote, base))
    if inverse:
        return 1.0 / float(inverse)
    return None


def _usd_leg(code: str, table: RateTable, fallback: Mapping[str, float]) -> Optional[float]:
    """Units of ``code`` per 1 USD, or None when unknown."""
    if code == USD:
        return 1.0
    rate = _lookup(table, USD, code)
    if rate is not None:
        return rate
    return _lookup_static(fallback, USD, code)


def usd_rate(code: str, table: RateTable, fallback: Mapping[str, float] = FALLBACK_RATES) -> float:
    """Units of ``code`` per 1 USD; unknown codes degrade to 1."""
    rate = _usd_leg(code, table, fallback)
    return rate if rate is not None else 1.0


def resolve(
    base: str,
    quote: str,
    table: RateTable,
    fallback: Mapping[str, float] = FALLBACK_RATES,
) -> Optional[float]:
    """Best-known rate for "1 base = rate quote", or None."""
    if base == quote:
        return 1.0

    rate = _lookup(table, base, quote)
    if rate is not None:
        return rate

    if base != USD and quote != USD:
        usd_base = _usd_leg(base, table, fallback)
        usd_quote = _usd_leg(quote, table, fallback)
        if usd_base and usd_quote:
            return usd_quote / usd_base

    return _lookup_static(fallback, base, quote)


def resolve_or_default(
    base: str,
    quote: str,
    table: RateTable,
    fallback: Mapping[str, float] = FALLBACK_RATES,
    default: float = 1.0,
) -> float:
    rate = resolve(base, quote, table, fallback)
    if rate is None:
        logger.warning(f"No rate path for {pair_key(base, quote)}, using {default}")
        return default
    return rate
