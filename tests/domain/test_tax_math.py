"""Tests for tax split helpers."""

from decimal import Decimal

from src.domain.services.tax_math import base_from_amounts, base_from_rates


def test_base_from_amounts_adds_back_withholding() -> None:
    """The base is the total minus VAT plus withheld IRPF."""
    assert base_from_amounts("1060", "210", "150") == Decimal("1000")
    assert base_from_amounts(1060, 210, -150) == Decimal("1000")
    assert base_from_amounts("1210", "210") == Decimal("1000")


def test_base_from_rates_without_irpf() -> None:
    """VAT is the remainder so base plus VAT equals the total."""
    breakdown = base_from_rates("100", 21)

    assert breakdown.base == Decimal("82.64")
    assert breakdown.vat == Decimal("17.36")
    assert breakdown.irpf == Decimal("0.00")


def test_base_from_rates_with_irpf_reproduces_total() -> None:
    """With IRPF the parts recompose the original total."""
    breakdown = base_from_rates("1060", "21", "-15")

    assert breakdown.base == Decimal("1000.00")
    assert breakdown.vat == Decimal("210.00")
    assert breakdown.irpf == Decimal("150.00")
    assert breakdown.base + breakdown.vat - breakdown.irpf == Decimal("1060")
