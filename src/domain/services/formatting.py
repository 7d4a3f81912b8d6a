"""Presentation formatting for ledger exports."""

from datetime import date
from decimal import Decimal

from src.domain.constants import CURRENCY_SYMBOLS
from src.utils.decimal_utils import quantize_currency

DEFAULT_SYMBOL = CURRENCY_SYMBOLS["EUR"]


def currency_symbol(code: str | None) -> str:
    """Return the display symbol of an ISO currency code.

    Unknown codes are displayed as the code itself (``CHF`` -> ``CHF``).
    """
    if not code:
        return DEFAULT_SYMBOL
    normalized = code.strip().upper()
    return CURRENCY_SYMBOLS.get(normalized, normalized)


def format_currency(value: Decimal, symbol: str = DEFAULT_SYMBOL) -> str:
    """Format an amount the Spanish way, e.g. ``1.234,56 €``.

    Args:
        value: Exact amount; rounded half-up to cents here.
        symbol: Currency symbol appended after the amount.

    Returns:
        str: Display string.
    """
    rounded = quantize_currency(value)
    grouped = f"{abs(rounded):,.2f}"
    localized = grouped.replace(",", "_").replace(".", ",").replace("_", ".")
    sign = "-" if rounded < 0 else ""
    return f"{sign}{localized} {symbol}"


def format_date(value: date | None) -> str:
    """Format a date as ``dd/mm/yyyy``; missing dates render empty."""
    if value is None:
        return ""
    return value.strftime("%d/%m/%Y")


__all__ = ["DEFAULT_SYMBOL", "currency_symbol", "format_currency", "format_date"]
