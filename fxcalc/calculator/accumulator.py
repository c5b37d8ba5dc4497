"""Keypad-driven text buffer for one calculator field."""
from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from fxcalc.calculator.expression import (
    OPERATORS,
    ends_with_operator,
    evaluate,
    evaluate_number,
    format_display,
    format_number,
    last_segment,
)

DIGITS = "0123456789"

# Display glyphs accepted as operator aliases.
_ALIASES = {"×": "*", "x": "*", "÷": "/", "−": "-"}


class KeyKind(str, Enum):
    DIGIT = "digit"
    POINT = "point"
    TRIPLE_ZERO = "triple_zero"
    OPERATOR = "operator"
    PERCENT = "percent"
    BACKSPACE = "backspace"
    CLEAR = "clear"
    EVALUATE = "evaluate"


def normalize_key(key: str) -> str:
    key = (key or "").strip()
    key = _ALIASES.get(key, key)
    upper = key.upper()
    if upper in ("BACK", "BACKSPACE", "DEL", "⌫"):
        return "BACK"
    if upper in ("C", "AC", "CLEAR"):
        return "C"
    if key == ",":
        return "."
    return key


def classify_key(key: str) -> KeyKind:
    """Map a key token to its kind; raises ValueError for unknown tokens."""
    key = normalize_key(key)
    if len(key) == 1 and key in DIGITS:
        return KeyKind.DIGIT
    if key == ".":
        return KeyKind.POINT
    if key == "000":
        return KeyKind.TRIPLE_ZERO
    if len(key) == 1 and key in OPERATORS:
        return KeyKind.OPERATOR
    if key == "%":
        return KeyKind.PERCENT
    if key == "BACK":
        return KeyKind.BACKSPACE
    if key == "C":
        return KeyKind.CLEAR
    if key == "=":
        return KeyKind.EVALUATE
    raise ValueError(f"Unknown key: {key!r}")


@dataclass
class ExpressionAccumulator:
    """One field's input buffer plus its fresh-entry flag.

    While ``fresh`` is set, the next digit or point starts a new number and
    the next operator continues from the existing value. The flag is
    cleared by whatever key comes first.
    """

    buffer: str = ""
    fresh: bool = False

    def activate(self) -> None:
        self.fresh = True

    def press(self, key: str) -> KeyKind:
        kind = classify_key(key)
        key = normalize_key(key)

        if self.fresh:
            self.fresh = False
            if kind in (KeyKind.DIGIT, KeyKind.POINT):
                self.buffer = ""

        handler = getattr(self, f"_on_{kind.value}")
        handler(key)
        return kind

    def _on_digit(self, key: str) -> None:
        segment = last_segment(self.buffer)
        if segment == "0":
            self.buffer = self.buffer[:-1] + key
        else:
            self.buffer += key

    def _on_point(self, key: str) -> None:
        if "." not in last_segment(self.buffer):
            self.buffer += "."

    def _on_triple_zero(self, key: str) -> None:
        segment = last_segment(self.buffer)
        if segment not in ("", "0"):
            self.buffer += "000"

    def _on_operator(self, key: str) -> None:
        if not self.buffer:
            if key == "-":
                self.buffer = "-"
            return
        if ends_with_operator(self.buffer):
            self.buffer = self.buffer[:-1] + key
        else:
            self.buffer += key

    def _on_percent(self, key: str) -> None:
        segment = last_segment(self.buffer)
        if not segment or segment == ".":
            return
        value = float(segment.rstrip(".") or "0") / 100
        self.buffer = self.buffer[: -len(segment)] + format_number(value)

    def _on_backspace(self, key: str) -> None:
        self.buffer = self.buffer[:-1]

    def _on_clear(self, key: str) -> None:
        self.buffer = ""

    def _on_evaluate(self, key: str) -> None:
        self.buffer = evaluate(self.buffer)

    def set(self, value: str) -> None:
        self.buffer = value

    @property
    def value(self) -> float:
        return evaluate_number(self.buffer)

    @property
    def display(self) -> str:
        return format_display(self.buffer)
