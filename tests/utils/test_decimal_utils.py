"""Tests for Decimal helpers."""

from decimal import Decimal

import pytest

from src.utils.decimal_utils import coerce_decimal, parse_decimal, quantize_currency


@pytest.mark.parametrize(
    ("raw", "expected"),
    [
        ("1210.50", Decimal("1210.50")),
        ("1.210,50", Decimal("1210.50")),
        ("1,210.50", Decimal("1210.50")),
        ("42,00 €", Decimal("42.00")),
        (7, Decimal("7")),
        (0.1, Decimal("0.1")),
        (None, Decimal("0")),
    ],
)
def test_parse_decimal_accepts_loose_formats(raw, expected) -> None:
    """Upstream amount formats are parsed exactly."""
    assert parse_decimal(raw) == expected


@pytest.mark.parametrize("raw", ["abc", "", True, "NaN", float("inf"), [1]])
def test_parse_decimal_rejects_non_amounts(raw) -> None:
    """Non-numeric and non-finite values raise ValueError."""
    with pytest.raises(ValueError):
        parse_decimal(raw)


def test_quantize_currency_rounds_half_up() -> None:
    """Cents are rounded half-up, not banker's rounding."""
    assert quantize_currency(Decimal("2.345")) == Decimal("2.35")
    assert quantize_currency(Decimal("-2.345")) == Decimal("-2.35")
    assert quantize_currency(Decimal("2.344")) == Decimal("2.34")


def test_coerce_decimal_defaults_none_to_zero() -> None:
    """None is treated as zero when coercing SQL values."""
    assert coerce_decimal(None) == Decimal("0")
    assert coerce_decimal("1.5") == Decimal("1.5")
