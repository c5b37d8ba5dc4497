from __future__ import annotations

"""Rich display components for the TUI."""

from typing import List, Optional, Sequence

from rich import box
from rich.panel import Panel
from rich.table import Table

from fxcalc.calculator.expression import format_display
from fxcalc.calculator.history import HistoryEntry
from fxcalc.calculator.journal import DealJournal
from fxcalc.calculator.session import SessionSnapshot
from fxcalc.calculator.sync import Field
from fxcalc.rates.table import RateTable

from .config import BOX, HELP_TEXT, THEME, WELCOME_TEXT
from .renderer import (
    format_amount,
    format_currency_label,
    format_percentage,
    format_rate,
    format_spread_text,
    format_timestamp,
)


def create_welcome_panel() -> Panel:
    return Panel(WELCOME_TEXT, title="Welcome", border_style=THEME.primary, box=getattr(box, BOX.welcome))


def create_help_panel() -> Panel:
    return Panel(HELP_TEXT, title="Commands", border_style=THEME.muted, box=getattr(box, BOX.panel))


def create_error_panel(message: str) -> Panel:
    return Panel(f"[{THEME.error}]{message}[/]", border_style=THEME.error, box=getattr(box, BOX.error))


def create_calculator_panel(snap: SessionSnapshot) -> Panel:
    table = Table(box=box.SIMPLE, show_header=False, expand=True)
    table.add_column("Amount", justify="right", ratio=3)
    table.add_column("Currency", width=10)
    table.add_column("Rate", style=THEME.muted, ratio=4)

    spread = format_spread_text(snap.spread)
    rows = [
        (Field.SPREAD, format_display(snap.spread), "%", "bank card rate"),
        (
            Field.A,
            format_display(snap.a),
            format_currency_label(snap.currency_a),
            f"1 {snap.currency_a} = {format_rate(snap.effective_rate)} {snap.currency_b} (incl {spread}%)",
        ),
        (
            Field.B,
            format_display(snap.b),
            format_currency_label(snap.currency_b),
            f"1 {snap.currency_b} = {format_rate(snap.inverse_effective_rate)} {snap.currency_a} (incl {spread}%)",
        ),
        (
            Field.USD,
            format_display(snap.usd),
            format_currency_label("USD"),
            f"1 USD = {format_rate(snap.usd_rate_a, 2)} {snap.currency_a}",
        ),
    ]
    for field, amount, label, sub in rows:
        style = THEME.active if field is snap.active else None
        table.add_row(amount, label, sub, style=style)

    return Panel(
        table,
        title=f"{snap.currency_a} → {snap.currency_b}",
        subtitle=f"base {format_rate(snap.base_rate, 6)}",
        border_style=THEME.primary,
        box=getattr(box, BOX.panel),
    )


def create_history_table(history: Sequence[HistoryEntry]) -> Table:
    table = Table(title="History", box=box.SIMPLE_HEAVY)
    table.add_column("#", justify="right", style=THEME.muted)
    table.add_column("When", style=THEME.muted)
    table.add_column("From", justify="right")
    table.add_column("To", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Spread", justify="right", style=THEME.muted)

    if not history:
        table.add_row("", "—", "No conversions yet", "", "", "")
        return table

    for i, entry in enumerate(history, start=1):
        table.add_row(
            str(i),
            format_timestamp(entry.timestamp),
            format_amount(entry.from_amount, entry.from_currency),
            format_amount(entry.to_amount, entry.to_currency),
            format_rate(entry.rate),
            format_percentage(entry.spread_percent),
        )
    return table


def create_rates_table(rates: RateTable, highlight: Optional[List[str]] = None) -> Table:
    highlight = highlight or []
    table = Table(title="Rates", box=box.SIMPLE)
    table.add_column("Pair", style=f"{THEME.primary} bold")
    table.add_column("Rate", justify="right")
    for key, rate in sorted(rates.to_dict().items()):
        style = THEME.success if any(code in key for code in highlight) else None
        table.add_row(key, format_rate(rate, 6), style=style)
    return table


def create_journal_table(journal: DealJournal) -> Table:
    stats = journal.stats()
    caption = (
        f"avg buy {format_rate(stats.avg_buy, 2)} · avg sell {format_rate(stats.avg_sell, 2)}"
        f" · spread {format_percentage(stats.spread_percent)}"
    )
    table = Table(title="Deals", caption=caption, box=box.SIMPLE_HEAVY)
    table.add_column("Id", style=THEME.muted)
    table.add_column("Date", style=THEME.muted)
    table.add_column("Side")
    table.add_column("Pair")
    table.add_column("USD", justify="right")
    table.add_column("Rate", justify="right")
    table.add_column("Total", justify="right")
    table.add_column("vs ref", justify="right", style=THEME.muted)
    for r in journal.records:
        side_style = THEME.success if r.side == "buy" else THEME.warning
        table.add_row(
            r.id[:8],
            r.deal_date.strftime("%d.%m"),
            f"[{side_style}]{r.side.title()}[/]",
            r.currency_pair,
            format_amount(r.amount_usd),
            format_rate(r.rate, 2),
            format_amount(r.amount_to, r.currency),
            format_percentage(r.deviation_percent) if r.reference_rate else "—",
        )
    return table
