from __future__ import annotations

"""TUI configuration and style constants."""

from dataclasses import dataclass


@dataclass(frozen=True)
class Theme:
    primary: str = "cyan"
    active: str = "bold black on bright_white"
    success: str = "green"
    warning: str = "yellow"
    error: str = "red"
    muted: str = "grey50"


@dataclass(frozen=True)
class BoxStyles:
    welcome: str = "DOUBLE"
    panel: str = "ROUNDED"
    error: str = "HEAVY"


THEME = Theme()
BOX = BoxStyles()

WELCOME_TEXT = (
    """
[bold cyan]fxcalc[/bold cyan]
Three-field currency calculator with a bank card spread

Type [bold]help[/bold] for commands. Keys can be chained: [bold]12+3*2=[/bold]
    """
    .strip()
)

HELP_TEXT = (
    """
[bold]Fields[/bold]    a | b | usd | spread       select the field that receives keys
[bold]Keys[/bold]      0-9 . 000 + - * / % =      calculator keys (chain them: 2000000*3=)
          c                          clear the active field (records history)
          back                       delete one character
[bold]Setup[/bold]     cur a EUR | cur b THB      change a currency
          swap                       swap currencies A and B
          rates                      show the rate table
          refresh                    fetch live rates now
[bold]History[/bold]   h                          list conversions
          del N                      delete history row N
          clear-history              delete all history
[bold]Other[/bold]     help | q
    """
    .strip()
)
