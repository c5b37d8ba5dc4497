"""Parsing of loosely formatted rate readings.

Rate feeds mix "," and "." as decimal and grouping separators. When only
commas are present a comma is read as a thousands separator if every group
after the first has exactly three digits and the leading group is a
non-zero 1-3 digit run ("16,200" -> 16200). Everything else reads the comma
as a decimal point ("91,50" -> 91.5, "0,123" -> 0.123). This is a lossy
heuristic: a genuine three-digit fraction such as "1,234" meaning 1.234 is
misread as 1234. Sources that deliver JSON numbers never go through it.
"""
from __future__ import annotations

import math
import re
from typing import Dict, Optional, Union

from fxcalc.rates.table import pair_key
from fxcalc.utils.logging import get_logger

logger = get_logger(__name__)

_GROUP_SPACES = ("\u00a0", "\u202f", " ", "'", "_")
_NUMERIC_RE = re.compile(r"^\d+(?:[.,]\d+)*$")
_PAIR_RE = re.compile(
    r"\b([A-Z]{3})(?:\s*[/\-]\s*|\s+)([A-Z]{3})\b\s*[:=]?\s*(\d[\d.,\u00a0\u202f]*)",
    re.IGNORECASE,
)


def _is_grouped(groups: list) -> bool:
    head, tail = groups[0], groups[1:]
    return (
        bool(tail)
        and 1 <= len(head) <= 3
        and head != "0"
        and all(len(g) == 3 for g in tail)
    )


def _normalize(text: str) -> Optional[str]:
    has_comma, has_dot = "," in text, "." in text

    if has_comma and has_dot:
        if text.rfind(",") > text.rfind("."):
            return text.replace(".", "").replace(",", ".")
        return text.replace(",", "")

    if has_comma:
        groups = text.split(",")
        if _is_grouped(groups):
            return "".join(groups)
        if len(groups) == 2:
            return text.replace(",", ".")
        return None

    if text.count(".") > 1:
        groups = text.split(".")
        return "".join(groups) if _is_grouped(groups) else None

    return text


def parse_rate_token(token: Union[str, int, float, None]) -> Optional[float]:
    """Parse one rate reading; None for anything not a positive finite number."""
    if token is None or isinstance(token, bool):
        return None

    if isinstance(token, (int, float)):
        value = float(token)
    else:
        text = str(token).strip().rstrip(".,")
        for ch in _GROUP_SPACES:
            text = text.replace(ch, "")
        if not text or not _NUMERIC_RE.match(text):
            return None
        normalized = _normalize(text)
        if normalized is None:
            return None
        try:
            value = float(normalized)
        except ValueError:
            return None

    if not math.isfinite(value) or value <= 0:
        return None
    return value


def parse_rate_text(text: str) -> Dict[str, float]:
    """Extract ``{"BASE/QUOTE": rate}`` from free text like "USD/RUB: 91.50"."""
    rates: Dict[str, float] = {}
    for match in _PAIR_RE.finditer(text or ""):
        base, quote, raw = match.group(1).upper(), match.group(2).upper(), match.group(3)
        value = parse_rate_token(raw)
        if value is None:
            logger.debug(f"Unparseable rate token for {base}/{quote}: {raw!r}")
            continue
        rates[pair_key(base, quote)] = value
    return rates
