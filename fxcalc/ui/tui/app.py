from __future__ import annotations

from typing import Optional

from rich.console import Console

from fxcalc.calculator.session import CalculatorSession
from fxcalc.rates.providers.base import BaseRateSource
from fxcalc.rates.refresher import RateRefresher, ThreadedRefresher
from fxcalc.utils.errors import FxCalcError
from fxcalc.utils.logging import get_logger

from .display import (
    create_calculator_panel,
    create_error_panel,
    create_help_panel,
    create_history_table,
    create_rates_table,
    create_welcome_panel,
)
from .input_handler import Command, ask_yes_no, get_user_input, parse_command


console = Console()
logger = get_logger(__name__)


class FxCalcTUI:
    """Terminal User Interface for the calculator."""

    def __init__(
        self,
        session: CalculatorSession,
        source: Optional[BaseRateSource] = None,
        interval_seconds: float = 600.0,
        fetch_timeout: float = 30.0,
    ) -> None:
        self.session = session
        self.background: Optional[ThreadedRefresher] = None
        if source is not None:
            refresher = RateRefresher(
                source,
                on_rates=session.apply_rates,
                pair_provider=lambda: (session.context.currency_a, session.context.currency_b),
                interval_seconds=interval_seconds,
                fetch_timeout=fetch_timeout,
            )
            self.background = ThreadedRefresher(refresher)

    def run(self) -> None:
        """Main entry point (sync)."""
        console.print(create_welcome_panel())
        if self.background is not None:
            self.background.start()
        try:
            self._loop()
        except (KeyboardInterrupt, EOFError):
            console.print("\n[yellow]Interrupted. Goodbye![/]")
        finally:
            if self.background is not None:
                self.background.stop()
            self.session.close()

    def _loop(self) -> None:
        while True:
            console.print(create_calculator_panel(self.session.snapshot()))
            command = parse_command(get_user_input())
            if command.name == "quit":
                console.print("[bold green]Goodbye![/]")
                return
            try:
                self.handle(command)
            except (FxCalcError, ValueError) as e:
                console.print(create_error_panel(str(e)))

    def handle(self, command: Command) -> None:
        session = self.session
        if command.name == "noop":
            return
        if command.name == "help":
            console.print(create_help_panel())
        elif command.name == "select":
            session.select_field(command.field)
        elif command.name == "enter":
            session.enter(command.field, command.args[0])
        elif command.name == "keys":
            for key in command.args:
                session.press(key)
        elif command.name == "currency":
            which, code = command.args
            if which == "a":
                session.set_currency_a(code)
            else:
                session.set_currency_b(code)
        elif command.name == "swap":
            session.swap_currencies()
        elif command.name == "rates":
            snap = session.snapshot()
            console.print(create_rates_table(session.rates, [snap.currency_a, snap.currency_b]))
        elif command.name == "refresh":
            self._refresh()
        elif command.name == "history":
            console.print(create_history_table(session.history))
        elif command.name == "delete":
            self._delete(command.args[0])
        elif command.name == "clear_history":
            if ask_yes_no("Delete all history?", default=False):
                session.clear_history()
                console.print("[green]History cleared[/]")
        else:
            raise ValueError(f"Unknown command: {command.name}")

    def _refresh(self) -> None:
        if self.background is None:
            console.print("[yellow]No live rate source configured[/]")
            return
        with console.status("[cyan]Fetching rates..."):
            updated = self.background.refresh_now()
        if updated:
            console.print("[green]Rates updated[/]")
        else:
            console.print("[yellow]Rates unchanged (fetch failed or already running)[/]")

    def _delete(self, index_text: str) -> None:
        history = self.session.history
        try:
            index = int(index_text)
        except ValueError:
            raise ValueError(f"Not a row number: {index_text}")
        if not 1 <= index <= len(history):
            raise ValueError(f"No history row {index}")
        self.session.delete_history_entry(history[index - 1].id)
        console.print(f"[green]Deleted row {index}[/]")
