"""Helpers to split document totals into base, VAT and IRPF.

Used when a document only carries its gross total (scanned expenses, quick
entries). Results are rounded to cents since they become stored amounts.
"""

from dataclasses import dataclass
from decimal import Decimal

from src.utils.decimal_utils import coerce_decimal, quantize_currency

HUNDRED = Decimal("100")


@dataclass(frozen=True)
class TaxBreakdown:
    """Base imponible, VAT and IRPF parts of a document total."""

    base: Decimal
    vat: Decimal
    irpf: Decimal


def base_from_amounts(total, vat, irpf=0) -> Decimal:
    """Return the taxable base from a total and known tax amounts.

    ``total`` already has VAT added and IRPF withheld, so
    ``base = total - vat + irpf``.

    Args:
        total: Document total.
        vat: VAT amount.
        irpf: IRPF amount withheld (positive).

    Returns:
        Decimal: Taxable base.
    """
    return coerce_decimal(total) - coerce_decimal(vat) + abs(coerce_decimal(irpf))


def base_from_rates(total, vat_rate, irpf_rate=0) -> TaxBreakdown:
    """Split a document total using VAT and IRPF percentages.

    Args:
        total: Document total (VAT added, IRPF withheld).
        vat_rate: VAT percentage, e.g. ``21``.
        irpf_rate: IRPF percentage, e.g. ``15``; the sign is ignored.

    Returns:
        TaxBreakdown: Base, VAT and IRPF rounded to cents.
    """
    total_value = coerce_decimal(total)
    vat_factor = coerce_decimal(vat_rate) / HUNDRED
    irpf_factor = abs(coerce_decimal(irpf_rate)) / HUNDRED

    if irpf_factor != 0:
        base = quantize_currency(
            total_value / (1 + vat_factor - irpf_factor)
        )
        return TaxBreakdown(
            base=base,
            vat=quantize_currency(base * vat_factor),
            irpf=quantize_currency(base * irpf_factor),
        )

    base = quantize_currency(total_value / (1 + vat_factor))
    return TaxBreakdown(
        base=base,
        vat=quantize_currency(total_value - base),
        irpf=Decimal("0.00"),
    )


__all__ = ["TaxBreakdown", "base_from_amounts", "base_from_rates"]
