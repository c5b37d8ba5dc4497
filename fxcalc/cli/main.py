from __future__ import annotations

from typing import Optional

import typer
from rich.console import Console

from fxcalc.calculator.sync import Field
from fxcalc.cli.services import AppContext, bootstrap, fetch_live_rates
from fxcalc.ui.tui.display import (
    create_calculator_panel,
    create_history_table,
    create_journal_table,
    create_rates_table,
)
from fxcalc.utils.errors import FxCalcError


app = typer.Typer(add_completion=False, help="fxcalc: three-field currency calculator")
history_app = typer.Typer(help="Browse and prune conversion history")
journal_app = typer.Typer(help="Log USD buy/sell deals")
app.add_typer(history_app, name="history")
app.add_typer(journal_app, name="journal")

console = Console()

ConfigOption = typer.Option("config.yaml", "--config", "-c", help="Path to YAML configuration")


def _context(config_path: str, console_logging: bool = True) -> AppContext:
    try:
        return bootstrap(config_path, console_logging=console_logging)
    except FxCalcError as e:
        typer.secho(f"Failed to start: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)


@app.command("run")
def run(
    config_path: str = ConfigOption,
    offline: bool = typer.Option(False, "--offline", help="Do not fetch live rates"),
):
    """Start the interactive calculator."""
    from fxcalc.ui.tui.app import FxCalcTUI

    ctx = _context(config_path, console_logging=False)
    try:
        session = ctx.session()
        source = None if offline else ctx.rate_source()
        FxCalcTUI(
            session,
            source=source,
            interval_seconds=ctx.settings.refresh_interval_seconds,
            fetch_timeout=ctx.settings.fetch_timeout_seconds,
        ).run()
    finally:
        ctx.close()


@app.command("convert")
def convert(
    amount: str = typer.Argument(..., help="Amount or expression, e.g. 2000000 or 150*12"),
    field: Field = typer.Option(Field.A, "--field", "-f", case_sensitive=False, help="Which field the amount is for"),
    currency_a: Optional[str] = typer.Option(None, "--a", help="Currency A"),
    currency_b: Optional[str] = typer.Option(None, "--b", help="Currency B"),
    spread: Optional[str] = typer.Option(None, "--spread", "-s", help="Spread percent"),
    live: bool = typer.Option(False, "--live", help="Fetch live rates first"),
    config_path: str = ConfigOption,
):
    """Convert one amount and record it in history."""
    ctx = _context(config_path)
    try:
        session = ctx.session()
        if currency_a:
            session.set_currency_a(currency_a)
        if currency_b:
            session.set_currency_b(currency_b)
        if spread is not None:
            session.enter(Field.SPREAD, spread)
        if live and not fetch_live_rates(ctx, session):
            typer.secho("Live rates unavailable; using cached rates", fg=typer.colors.YELLOW)
        session.enter(field, amount)
        session.select_field(field)
        session.press("=")
        console.print(create_calculator_panel(session.snapshot()))
        session.close()
    except (FxCalcError, ValueError) as e:
        typer.secho(f"Conversion failed: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    finally:
        ctx.close()


@app.command("rates")
def rates(
    live: bool = typer.Option(False, "--live", help="Fetch live rates first"),
    config_path: str = ConfigOption,
):
    """Show the rate table and the resolved rate for the selected pair."""
    ctx = _context(config_path)
    try:
        session = ctx.session()
        if live and not fetch_live_rates(ctx, session):
            typer.secho("Live rates unavailable; showing cached rates", fg=typer.colors.YELLOW)
        snap = session.snapshot()
        console.print(create_rates_table(session.rates, [snap.currency_a, snap.currency_b]))
        typer.echo(
            f"{snap.currency_a}/{snap.currency_b}: base {snap.base_rate:.6f}, "
            f"effective {snap.effective_rate:.6f} (spread {snap.spread or '0'}%)"
        )
    finally:
        ctx.close()


@history_app.command("list")
def history_list(config_path: str = ConfigOption):
    """List recorded conversions, newest first."""
    ctx = _context(config_path)
    try:
        console.print(create_history_table(ctx.preferences.history(ctx.settings.history_max_entries)))
    finally:
        ctx.close()


@history_app.command("delete")
def history_delete(
    row: int = typer.Argument(..., help="Row number as shown by 'history list'"),
    config_path: str = ConfigOption,
):
    """Delete one history row."""
    ctx = _context(config_path)
    try:
        session = ctx.session()
        if not 1 <= row <= len(session.history):
            typer.secho(f"No history row {row}", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        session.delete_history_entry(session.history[row - 1].id)
        typer.echo(f"Deleted row {row}")
    finally:
        ctx.close()


@history_app.command("clear")
def history_clear(config_path: str = ConfigOption):
    """Delete all history."""
    ctx = _context(config_path)
    try:
        if typer.confirm("Delete all history?", default=False):
            ctx.session().clear_history()
            typer.echo("History cleared")
    finally:
        ctx.close()


@journal_app.command("add")
def journal_add(
    side: str = typer.Argument(..., help="buy or sell"),
    currency: str = typer.Argument(..., help="Local currency, e.g. RUB"),
    amount_usd: float = typer.Argument(..., help="USD amount"),
    rate: float = typer.Argument(..., help="Deal rate in local currency per USD"),
    config_path: str = ConfigOption,
):
    """Log a USD deal against the reference rate."""
    ctx = _context(config_path)
    try:
        session = ctx.session()
        journal = ctx.preferences.journal()
        reference = session.rates.get("USD", currency.upper()) or 0.0
        record = journal.add(side, currency, amount_usd, rate, reference_rate=reference)
        ctx.preferences.save_journal(journal)
        typer.echo(f"Logged {record.side} {record.amount_usd:g} USD at {record.rate:g} {record.currency}")
    except FxCalcError as e:
        typer.secho(f"Invalid deal: {e}", fg=typer.colors.RED)
        raise typer.Exit(code=1)
    finally:
        ctx.close()


@journal_app.command("list")
def journal_list(config_path: str = ConfigOption):
    """Show logged deals with average buy/sell rates."""
    ctx = _context(config_path)
    try:
        console.print(create_journal_table(ctx.preferences.journal()))
    finally:
        ctx.close()


@journal_app.command("remove")
def journal_remove(
    record_id: str = typer.Argument(..., help="Deal id prefix as shown by 'journal list'"),
    config_path: str = ConfigOption,
):
    """Remove a logged deal."""
    ctx = _context(config_path)
    try:
        journal = ctx.preferences.journal()
        matches = [r.id for r in journal.records if r.id.startswith(record_id)]
        if len(matches) != 1:
            typer.secho(f"Id prefix {record_id!r} matches {len(matches)} deals", fg=typer.colors.RED)
            raise typer.Exit(code=1)
        journal.remove(matches[0])
        ctx.preferences.save_journal(journal)
        typer.echo("Deal removed")
    finally:
        ctx.close()


if __name__ == "__main__":
    app()
