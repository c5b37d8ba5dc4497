"""Arithmetic evaluation and display formatting for calculator buffers.

Expressions are evaluated by a small recursive-descent parser over decimal
literals, unary minus and the four binary operators. ``*`` and ``/`` bind
tighter than ``+`` and ``-``; operators of equal precedence associate left.
"""
from __future__ import annotations

import math
import re
from decimal import Decimal
from typing import List

from fxcalc.utils.errors import ValidationError

OPERATORS = "+-*/"

_DISALLOWED = re.compile(r"[^-0-9+*/.]")
_PLAIN_NUMBER = re.compile(r"^\d*\.?\d*$")
_SEGMENT_SPLIT = re.compile(r"[+\-*/]")
_THOUSANDS = re.compile(r"\B(?=(\d{3})+(?!\d))")


class ExpressionError(ValidationError):
    """Raised by the parser for malformed input."""


class _Parser:
    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    def parse(self) -> float:
        value = self._expr()
        if self.pos != len(self.text):
            raise ExpressionError(f"Unexpected {self.text[self.pos]!r} at {self.pos}")
        return value

    def _peek(self) -> str:
        return self.text[self.pos] if self.pos < len(self.text) else ""

    def _expr(self) -> float:
        value = self._term()
        while self._peek() in ("+", "-"):
            op = self.text[self.pos]
            self.pos += 1
            rhs = self._term()
            value = value + rhs if op == "+" else value - rhs
        return value

    def _term(self) -> float:
        value = self._unary()
        while self._peek() in ("*", "/"):
            op = self.text[self.pos]
            self.pos += 1
            rhs = self._unary()
            if op == "*":
                value = value * rhs
            else:
                value = value / rhs if rhs != 0 else math.nan
        return value

    def _unary(self) -> float:
        ch = self._peek()
        if ch == "-":
            self.pos += 1
            return -self._unary()
        if ch == "+":
            self.pos += 1
            return self._unary()
        return self._number()

    def _number(self) -> float:
        start = self.pos
        seen_point = False
        while self.pos < len(self.text):
            ch = self.text[self.pos]
            if ch.isdigit():
                self.pos += 1
            elif ch == "." and not seen_point:
                seen_point = True
                self.pos += 1
            else:
                break
        literal = self.text[start:self.pos]
        if literal in ("", "."):
            raise ExpressionError(f"Expected a number at {start}")
        return float(literal)


def clean_expression(expr: str) -> str:
    return _DISALLOWED.sub("", expr or "")


def evaluate_number(expr: str) -> float:
    """Evaluate ``expr``; empty, malformed or non-finite input gives 0."""
    cleaned = clean_expression(expr)
    if not cleaned:
        return 0.0
    try:
        value = _Parser(cleaned).parse()
    except (ExpressionError, OverflowError, RecursionError):
        return 0.0
    return value if math.isfinite(value) else 0.0


def format_number(value: float) -> str:
    """Shortest plain decimal string for ``value`` ("18", "2.5", "0.0001")."""
    if not math.isfinite(value):
        return "0"
    if value == int(value) and abs(value) < 1e16:
        return str(int(value))
    text = format(Decimal(repr(value)), "f")
    if "." in text:
        text = text.rstrip("0").rstrip(".")
    return text


def evaluate(expr: str) -> str:
    """Evaluate a buffer to the decimal string that replaces it on "="."""
    return format_number(evaluate_number(expr))


def last_segment(buffer: str) -> str:
    """The operand after the last operator ("12+3.5" -> "3.5")."""
    segments: List[str] = _SEGMENT_SPLIT.split(buffer)
    return segments[-1]


def ends_with_operator(buffer: str) -> bool:
    return bool(buffer) and buffer[-1] in OPERATORS


def is_expression(buffer: str) -> bool:
    return any(op in buffer for op in OPERATORS)


def format_display(buffer: str) -> str:
    """Group plain numbers by thousands; show operators as calculator glyphs."""
    if not buffer:
        return "0"
    if _PLAIN_NUMBER.match(buffer):
        integer, point, fraction = buffer.partition(".")
        grouped = _THOUSANDS.sub(" ", integer)
        return f"{grouped}{point}{fraction}"
    return buffer.replace("*", "×").replace("/", "÷")
