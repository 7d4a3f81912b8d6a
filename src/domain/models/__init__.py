"""Domain models package."""

from .fiscal import (
    PERIOD_FIELDS,
    ZERO,
    AggregateResult,
    FiscalPeriodSelector,
    FiscalRecord,
    ResolvedPeriod,
)
from .records import AdditionalTax, Category, Invoice, Quote, Transaction
from .reports import (
    CategoryAmount,
    DashboardSummary,
    InvoiceLedgerRow,
    LedgerExport,
    QuoteLedgerRow,
    QuoteStats,
    TransactionLedgerRow,
)

__all__ = [
    "AdditionalTax",
    "Invoice",
    "Transaction",
    "Category",
    "Quote",
    "ZERO",
    "PERIOD_FIELDS",
    "FiscalPeriodSelector",
    "ResolvedPeriod",
    "FiscalRecord",
    "AggregateResult",
    "CategoryAmount",
    "QuoteStats",
    "DashboardSummary",
    "InvoiceLedgerRow",
    "TransactionLedgerRow",
    "QuoteLedgerRow",
    "LedgerExport",
]
