"""Static currency metadata used for rendering only."""
from dataclasses import dataclass
from typing import Dict, List, Optional


@dataclass(frozen=True)
class Currency:
    code: str
    name: str
    symbol: str
    flag: str


SUPPORTED_CURRENCIES: List[Currency] = [
    Currency("RUB", "Russian Ruble", "₽", "🇷🇺"),
    Currency("IDR", "Indonesian Rupiah", "Rp", "🇮🇩"),
    Currency("USD", "US Dollar", "$", "🇺🇸"),
    Currency("EUR", "Euro", "€", "🇪🇺"),
    Currency("THB", "Thai Baht", "฿", "🇹🇭"),
    Currency("TRY", "Turkish Lira", "₺", "🇹🇷"),
    Currency("GEL", "Georgian Lari", "₾", "🇬🇪"),
    Currency("AED", "UAE Dirham", "د.إ", "🇦🇪"),
]

_BY_CODE: Dict[str, Currency] = {c.code: c for c in SUPPORTED_CURRENCIES}


def get_currency(code: str) -> Optional[Currency]:
    return _BY_CODE.get((code or "").upper())


def flag_for(code: str) -> str:
    """Flag glyph for a code; unknown codes fall back to the USD flag."""
    currency = get_currency(code)
    return currency.flag if currency else _BY_CODE["USD"].flag


def supported_codes() -> List[str]:
    return [c.code for c in SUPPORTED_CURRENCIES]
