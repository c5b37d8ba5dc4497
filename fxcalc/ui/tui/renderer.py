from __future__ import annotations

"""Formatting helpers for the TUI."""

from datetime import datetime
from typing import Optional

from fxcalc.currencies import flag_for


def format_rate(rate: Optional[float], decimals: int = 4) -> str:
    if rate is None:
        return "—"
    try:
        return f"{float(rate):.{decimals}f}"
    except (TypeError, ValueError):
        return str(rate)


def format_amount(amount: Optional[float], currency: Optional[str] = None) -> str:
    if amount is None:
        return "—"
    text = f"{amount:,.2f}".replace(",", " ")
    if text.endswith(".00"):
        text = text[:-3]
    return f"{text} {currency}" if currency else text


def format_percentage(value: Optional[float], decimals: int = 2) -> str:
    if value is None:
        return "—"
    try:
        return f"{float(value):.{decimals}f}%"
    except (TypeError, ValueError):
        return str(value)


def format_currency_label(code: str) -> str:
    return f"{flag_for(code)} {code}"


def format_timestamp(ts: datetime) -> str:
    return ts.astimezone().strftime("%d.%m %H:%M")


def format_spread_text(spread_text: str) -> str:
    return spread_text or "0"
