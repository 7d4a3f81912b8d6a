"""Domain models for upstream invoicing records.

These mirror the rows owned by the invoicing application. Amount fields keep
whatever the upstream store handed over (Decimal, float or string); the
classifier is the only place that interprets them.
"""

from dataclasses import dataclass
from datetime import date, datetime
from decimal import Decimal
from typing import Any, Union

Amount = Union[Decimal, int, float, str, None]
RecordId = Union[int, str]
RecordDate = Union[date, datetime, str, None]


@dataclass(frozen=True)
class AdditionalTax:
    """Extra tax line attached to a document (IVA, IRPF, ...).

    Attributes:
        name: Tax label, e.g. ``IVA`` or ``IRPF``.
        rate: Percentage rate; IRPF lines are usually negative (``-15``).
        amount: Fixed amount when the line is not a percentage.
        is_percentage: Whether ``rate`` applies to the document base.
    """

    name: str
    rate: Amount = None
    amount: Amount = None
    is_percentage: bool = True


@dataclass(frozen=True)
class Invoice:
    """Invoice issued to a client."""

    id: RecordId
    issue_date: RecordDate
    client_id: RecordId | None
    subtotal: Amount
    tax: Amount
    total: Amount
    status: str
    number: str | None = None
    client_name: str | None = None
    due_date: RecordDate = None
    additional_taxes: Any = None


@dataclass(frozen=True)
class Transaction:
    """Standalone income or expense entry."""

    id: RecordId
    date: RecordDate
    type: str
    amount: Amount
    category_id: RecordId | None = None
    tax_rate: Amount = None
    tax_amount: Amount = None
    irpf_rate: Amount = None
    irpf_amount: Amount = None
    description: str | None = None
    additional_taxes: Any = None
    invoice_id: RecordId | None = None


@dataclass(frozen=True)
class Category:
    """Income or expense category."""

    id: RecordId
    type: str
    name: str | None = None
    deductible: bool = True


@dataclass(frozen=True)
class Quote:
    """Quote (presupuesto) sent to a client."""

    id: RecordId
    issue_date: RecordDate
    client_id: RecordId | None
    total: Amount
    status: str
    number: str | None = None
    client_name: str | None = None
    subtotal: Amount = None
    tax: Amount = None


__all__ = [
    "Amount",
    "RecordId",
    "RecordDate",
    "AdditionalTax",
    "Invoice",
    "Transaction",
    "Category",
    "Quote",
]
