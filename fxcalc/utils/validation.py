"""Input validation utilities."""
from typing import Tuple

from fxcalc.utils.errors import ValidationError


def validate_currency_code(code: str) -> str:
    """
    Validate and normalize a 3-letter currency code.
    
    Args:
        code: Currency code (e.g., "idr", " RUB ")
    
    Returns:
        Upper-cased code
    
    Raises:
        ValidationError: If the code is not three letters
    """
    if code is None:
        raise ValidationError("Currency code is required")
    normalized = code.strip().upper()
    if len(normalized) != 3 or not normalized.isalpha():
        raise ValidationError(
            f"Invalid currency code: {code}. Expect 3-letter ISO code."
        )
    return normalized


def validate_currency_pair(pair: str) -> Tuple[str, str]:
    """
    Validate and parse currency pair.
    
    Args:
        pair: Currency pair string (e.g., "USD/EUR", "USD-EUR", "USDEUR")
    
    Returns:
        Tuple of (base_currency, quote_currency)
    
    Raises:
        ValidationError: If pair format is invalid
    """
    pair = pair.strip().upper()
    
    for sep in ['/', '-', '_']:
        if sep in pair:
            parts = pair.split(sep)
            if len(parts) == 2:
                base, quote = parts
                if len(base) == 3 and len(quote) == 3 and base.isalpha() and quote.isalpha():
                    return base, quote
    
    if len(pair) == 6 and pair.isalpha():
        return pair[:3], pair[3:]
    
    raise ValidationError(f"Invalid currency pair format: {pair}")


def validate_amount(amount: float) -> float:
    """Validate a deal amount or rate: must be positive."""
    if amount is None or amount <= 0:
        raise ValidationError(f"Amount must be positive, got: {amount}")
    
    if amount > 1e15:
        raise ValidationError(f"Amount too large: {amount}")
    
    return amount


def validate_side(side: str) -> str:
    """Validate deal side."""
    valid_sides = ["buy", "sell"]
    side = (side or "").lower().strip()
    
    if side not in valid_sides:
        raise ValidationError(
            f"Invalid side: {side}. Must be one of {valid_sides}"
        )
    
    return side
