"""Tests for ledger display formatting."""

from datetime import date
from decimal import Decimal

from src.domain.services.formatting import (
    currency_symbol,
    format_currency,
    format_date,
)


def test_format_currency_uses_spanish_separators() -> None:
    """Thousands use dots, decimals use a comma, rounding is half-up."""
    assert format_currency(Decimal("1234.565")) == "1.234,57 €"
    assert format_currency(Decimal("1234567.8")) == "1.234.567,80 €"
    assert format_currency(Decimal("0")) == "0,00 €"


def test_format_currency_negative_and_symbol() -> None:
    """Negative amounts keep a leading minus sign."""
    assert format_currency(Decimal("-5")) == "-5,00 €"
    assert format_currency(Decimal("12.3"), symbol="EUR") == "12,30 EUR"


def test_format_date_handles_missing_values() -> None:
    """Dates render as dd/mm/yyyy and None as an empty string."""
    assert format_date(date(2025, 6, 1)) == "01/06/2025"
    assert format_date(None) == ""


def test_currency_symbol_maps_known_codes() -> None:
    """Known ISO codes map to symbols and unknown ones display as the code."""
    assert currency_symbol("EUR") == "€"
    assert currency_symbol(" usd ") == "$"
    assert currency_symbol("CHF") == "CHF"
    assert currency_symbol(None) == "€"
