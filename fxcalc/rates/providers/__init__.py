"""Rate source factory and exports."""
from typing import Any, Mapping, Optional

from .base import BaseRateSource
from .exchange_rate_host import ExchangeRateHostSource
from .static import StaticRateSource
from .text_feed import TextFeedSource


def get_rate_source(source_name: str, options: Optional[Mapping[str, Any]] = None) -> BaseRateSource:
    """Get rate source by canonical name.

    Canonical names:
    - "exchange_rate_host"
    - "text_feed" (requires ``url``)
    - "static"
    """
    options = dict(options or {})
    if source_name == "exchange_rate_host":
        return ExchangeRateHostSource(
            base_url=options.get("base_url", "https://api.exchangerate.host"),
            timeout=options.get("timeout", 10),
            extra_currencies=options.get("extra_currencies", ()),
        )
    if source_name == "text_feed":
        if not options.get("url"):
            raise ValueError("text_feed source requires a url")
        return TextFeedSource(url=options["url"], timeout=options.get("timeout", 10))
    if source_name == "static":
        return StaticRateSource()
    raise ValueError(f"Unknown rate source: {source_name}")


__all__ = [
    "BaseRateSource",
    "ExchangeRateHostSource",
    "StaticRateSource",
    "TextFeedSource",
    "get_rate_source",
]
