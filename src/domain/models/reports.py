"""Domain models for dashboard summaries and ledger exports."""

from dataclasses import dataclass
from datetime import date
from decimal import Decimal

from src.domain.models.fiscal import AggregateResult, FiscalPeriodSelector
from src.domain.models.records import RecordId
from src.utils.decimal_utils import quantize_currency


@dataclass(frozen=True)
class CategoryAmount:
    """Expense base aggregated for a category."""

    category_id: RecordId
    category: str
    amount: Decimal


@dataclass(frozen=True)
class QuoteStats:
    """Quote counters used by the dashboard.

    Attributes:
        total: Number of quotes.
        pending: Quotes awaiting an answer.
        accepted: Accepted quotes.
        rejected: Rejected quotes.
        pending_amount: Sum of pending quote totals.
        last_quote_date: Issue date of the most recent quote.
    """

    total: int
    pending: int
    accepted: int
    rejected: int
    pending_amount: Decimal
    last_quote_date: date | None = None

    @property
    def acceptance_rate(self) -> Decimal:
        """Return accepted / total, or zero when there are no quotes."""
        if self.total == 0:
            return Decimal("0")
        return Decimal(self.accepted) / Decimal(self.total)


@dataclass(frozen=True)
class DashboardSummary:
    """Flat dashboard view built from an aggregate and quote stats."""

    selector: FiscalPeriodSelector
    aggregate: AggregateResult
    quotes: QuoteStats
    issued_count: int
    paid_count: int
    overdue_count: int
    expenses_by_category: list[CategoryAmount]
    year_options: list[int]

    @property
    def pending_quotes(self) -> Decimal:
        return self.quotes.pending_amount

    @property
    def pending_quotes_count(self) -> int:
        return self.quotes.pending

    def as_payload(self, rounded: bool = True) -> dict:
        """Return the published dashboard payload.

        Args:
            rounded: Round currency values to cents.

        Returns:
            dict: Stable keys consumed by the UI and export layers.
        """
        payload = dict(self.aggregate.as_payload(rounded=rounded))
        pending_quotes = self.pending_quotes
        if rounded:
            pending_quotes = quantize_currency(pending_quotes)
        payload.update(
            {
                "pendingQuotes": pending_quotes,
                "pendingQuotesCount": self.pending_quotes_count,
                "acceptedQuotes": self.quotes.accepted,
                "rejectedQuotes": self.quotes.rejected,
                "allQuotes": self.quotes.total,
                "acceptanceRate": self.quotes.acceptance_rate,
                "issuedCount": self.issued_count,
                "paidCount": self.paid_count,
                "overdueCount": self.overdue_count,
                "year": self.selector.year,
                "quarter": self.selector.quarter,
                "month": self.selector.month,
            }
        )
        return payload


@dataclass(frozen=True)
class InvoiceLedgerRow:
    """Display-ready invoice line of the ledger export."""

    id: RecordId
    number: str
    date: str
    client: str
    subtotal: str
    tax: str
    total: str
    status: str


@dataclass(frozen=True)
class TransactionLedgerRow:
    """Display-ready transaction line of the ledger export."""

    id: RecordId
    date: str
    description: str
    category: str
    type: str
    amount: str
    tax: str


@dataclass(frozen=True)
class QuoteLedgerRow:
    """Display-ready quote line of the ledger export."""

    id: RecordId
    number: str
    date: str
    client: str
    total: str
    status: str


@dataclass(frozen=True)
class LedgerExport:
    """Libro de Registros: filtered record lists plus period totals."""

    selector: FiscalPeriodSelector
    period_label: str
    invoices: list[InvoiceLedgerRow]
    transactions: list[TransactionLedgerRow]
    quotes: list[QuoteLedgerRow]
    totals: dict


__all__ = [
    "CategoryAmount",
    "QuoteStats",
    "DashboardSummary",
    "InvoiceLedgerRow",
    "TransactionLedgerRow",
    "QuoteLedgerRow",
    "LedgerExport",
]
