"""Three-way A / B / USD synchronization under a spread markup."""
from __future__ import annotations

from dataclasses import dataclass
from decimal import ROUND_HALF_UP, Decimal, localcontext
from enum import Enum
import math

from fxcalc.calculator.config import Precision
from fxcalc.calculator.expression import evaluate_number
from fxcalc.rates.resolver import resolve_or_default, usd_rate
from fxcalc.rates.table import RateTable


class Field(str, Enum):
    A = "A"
    B = "B"
    USD = "USD"
    SPREAD = "SPREAD"


@dataclass(frozen=True)
class ConversionContext:
    currency_a: str
    currency_b: str
    spread_text: str = ""

    @property
    def spread_percent(self) -> float:
        return evaluate_number(self.spread_text)

    def with_spread(self, spread_text: str) -> "ConversionContext":
        return ConversionContext(self.currency_a, self.currency_b, spread_text)


@dataclass(frozen=True)
class SyncResult:
    a: str
    b: str
    usd: str
    spread: str
    base_rate: float
    effective_rate: float
    usd_rate_a: float

    def value_of(self, field: Field) -> str:
        return {Field.A: self.a, Field.B: self.b, Field.USD: self.usd, Field.SPREAD: self.spread}[field]


def round_to(value: float, places: int) -> str:
    """Fixed-point string rounded half away from zero ("90000.00")."""
    if not math.isfinite(value):
        value = 0.0
    exact = Decimal(repr(value))
    with localcontext() as ctx:
        # quantize needs room for every integer digit plus the fraction
        ctx.prec = max(ctx.prec, exact.adjusted() + places + 2)
        rounded = exact.quantize(Decimal(1).scaleb(-places), rounding=ROUND_HALF_UP)
    if rounded == 0:
        rounded = abs(rounded)
    return format(rounded, "f")


def effective_rate(base_rate: float, spread_percent: float) -> float:
    return base_rate * (1 + spread_percent / 100)


def sync(
    edited: Field,
    raw_value: str,
    context: ConversionContext,
    rates: RateTable,
    current_a: str = "",
    precision: Precision = Precision(),
) -> SyncResult:
    """Recompute every field from an edit to ``edited``.

    The edited field keeps its raw buffer verbatim. For a spread edit the
    amounts are re-derived from ``current_a``.
    """
    if edited is Field.SPREAD:
        context = context.with_spread(raw_value)

    base = resolve_or_default(context.currency_a, context.currency_b, rates)
    usd_a = usd_rate(context.currency_a, rates)
    rate = effective_rate(base, context.spread_percent)

    a_text, spread_text = current_a, context.spread_text

    if edited in (Field.A, Field.SPREAD):
        if edited is Field.A:
            a_text = raw_value
        n = evaluate_number(a_text)
        b_text = round_to(n * rate, precision.b)
        usd_text = round_to(n / usd_a, precision.usd)
    elif edited is Field.B:
        n = evaluate_number(raw_value)
        a_exact = n / rate if rate else 0.0
        a_text = round_to(a_exact, precision.a)
        b_text = raw_value
        usd_text = round_to(a_exact / usd_a, precision.usd)
    elif edited is Field.USD:
        n = evaluate_number(raw_value)
        a_exact = n * usd_a
        a_text = round_to(a_exact, precision.a)
        b_text = round_to(a_exact * rate, precision.b)
        usd_text = raw_value
    else:
        raise ValueError(f"Unknown field: {edited!r}")

    return SyncResult(
        a=a_text,
        b=b_text,
        usd=usd_text,
        spread=spread_text,
        base_rate=base,
        effective_rate=rate,
        usd_rate_a=usd_a,
    )


def resync(
    context: ConversionContext,
    rates: RateTable,
    current_a: str,
    precision: Precision = Precision(),
) -> SyncResult:
    """Re-derive B and USD from the A field after an external change."""
    return sync(Field.A, current_a, context, rates, current_a=current_a, precision=precision)
