from __future__ import annotations

"""Prompt helpers and command parsing for the TUI."""

from dataclasses import dataclass, field
from typing import List, Optional

from rich.prompt import Confirm, Prompt

from fxcalc.calculator.sync import Field

FIELD_ALIASES = {
    "a": Field.A,
    "b": Field.B,
    "usd": Field.USD,
    "$": Field.USD,
    "s": Field.SPREAD,
    "spread": Field.SPREAD,
}

WORD_KEYS = {"c": "C", "ac": "C", "back": "BACK", "bs": "BACK", "000": "000"}


@dataclass
class Command:
    name: str
    args: List[str] = field(default_factory=list)
    field: Optional[Field] = None


def get_user_input(prompt: str = "›") -> str:
    return Prompt.ask(f"[cyan]{prompt}[/]", default="", show_default=False)


def ask_yes_no(question: str, default: bool = True) -> bool:
    return Confirm.ask(f"[bold]{question}[/]", default=default)


def parse_command(line: str) -> Command:
    """Turn one input line into a command.

    Anything that is not a known word is treated as a run of calculator keys.
    """
    text = (line or "").strip()
    if not text:
        return Command("noop")

    parts = text.split()
    head = parts[0].lower()

    if head in ("q", "quit", "exit"):
        return Command("quit")
    if head in ("help", "?"):
        return Command("help")
    if head in FIELD_ALIASES and len(parts) == 1:
        return Command("select", field=FIELD_ALIASES[head])
    if head in FIELD_ALIASES and len(parts) > 1:
        return Command("enter", args=["".join(parts[1:])], field=FIELD_ALIASES[head])
    if head in ("cur", "currency") and len(parts) == 3 and parts[1].lower() in ("a", "b"):
        return Command("currency", args=[parts[1].lower(), parts[2].upper()])
    if head == "swap":
        return Command("swap")
    if head == "rates":
        return Command("rates")
    if head == "refresh":
        return Command("refresh")
    if head in ("h", "history"):
        return Command("history")
    if head == "del" and len(parts) == 2:
        return Command("delete", args=[parts[1]])
    if head == "clear-history":
        return Command("clear_history")
    if head in WORD_KEYS and len(parts) == 1:
        return Command("keys", args=[WORD_KEYS[head]])

    return Command("keys", args=list("".join(parts)))
