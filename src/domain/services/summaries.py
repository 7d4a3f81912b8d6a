"""Dashboard summary and ledger export builders."""

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
import logging
from logging import Logger

from src.domain.constants import (
    INVOICE_OVERDUE,
    INVOICE_PAID,
    INVOICE_STATUS_LABELS,
    PENDING_QUOTE_STATUSES,
    QUOTE_ACCEPTED,
    QUOTE_REJECTED,
    QUOTE_STATUS_LABELS,
    TRANSACTION_EXPENSE,
    TRANSACTION_TYPE_LABELS,
    UNCATEGORIZED,
)
from src.domain.models.fiscal import (
    ZERO,
    AggregateResult,
    FiscalPeriodSelector,
    FiscalRecord,
)
from src.domain.models.records import Invoice, Quote, RecordId, Transaction
from src.domain.models.reports import (
    CategoryAmount,
    DashboardSummary,
    InvoiceLedgerRow,
    LedgerExport,
    QuoteLedgerRow,
    QuoteStats,
    TransactionLedgerRow,
)
from src.domain.services.formatting import (
    DEFAULT_SYMBOL,
    format_currency,
    format_date,
)
from src.domain.services.normalization import coerce_date, normalize_status
from src.domain.services.periods import (
    available_years,
    filter_by_period,
    resolve_period,
)
from src.utils.decimal_utils import parse_decimal


def compute_quote_stats(
    quotes: Iterable[Quote],
    logger: Logger | None = None,
) -> QuoteStats:
    """Count quotes by status and sum the pending ones.

    Args:
        quotes: Quotes of the user, independent of the period.
        logger: Logger used for malformed totals.

    Returns:
        QuoteStats: Quote counters and pending amount.
    """
    resolved_logger = logger or logging.getLogger(__name__)
    total = pending = accepted = rejected = 0
    pending_amount = ZERO
    last_quote_date: date | None = None
    for quote in quotes:
        total += 1
        status = normalize_status(quote.status)
        if status in PENDING_QUOTE_STATUSES:
            pending += 1
            pending_amount += _safe_amount(
                quote.total,
                f"Quote {quote.id} total",
                resolved_logger,
            )
        elif status == QUOTE_ACCEPTED:
            accepted += 1
        elif status == QUOTE_REJECTED:
            rejected += 1
        issued = _safe_date(quote.issue_date)
        if issued is not None and (
            last_quote_date is None or issued > last_quote_date
        ):
            last_quote_date = issued
    return QuoteStats(
        total=total,
        pending=pending,
        accepted=accepted,
        rejected=rejected,
        pending_amount=pending_amount,
        last_quote_date=last_quote_date,
    )


def expense_breakdown(records: Iterable[FiscalRecord]) -> list[CategoryAmount]:
    """Aggregate expense base by category.

    Uncategorized expenses count toward fiscal totals but are left out of
    the breakdown.

    Args:
        records: Classified, period-filtered records.

    Returns:
        list[CategoryAmount]: Amounts sorted by amount desc, then name.
    """
    totals: dict[RecordId, tuple[str, Decimal]] = {}
    for record in records:
        if record.status != TRANSACTION_EXPENSE:
            continue
        if record.category_name == UNCATEGORIZED or record.category_id is None:
            continue
        name, amount = totals.get(
            record.category_id,
            (record.category_name, ZERO),
        )
        totals[record.category_id] = (name, amount + record.expense_base)
    breakdown = [
        CategoryAmount(category_id=category_id, category=name, amount=amount)
        for category_id, (name, amount) in totals.items()
    ]
    return sorted(breakdown, key=lambda item: (-item.amount, item.category))


def build_dashboard_summary(
    selector: FiscalPeriodSelector,
    aggregate: AggregateResult,
    records: Iterable[FiscalRecord],
    quotes: Iterable[Quote],
    *,
    today: date | None = None,
    logger: Logger | None = None,
) -> DashboardSummary:
    """Assemble the dashboard view for a period.

    Args:
        selector: Requested fiscal window.
        aggregate: Aggregate computed for the window.
        records: All classified records of the user.
        quotes: All quotes of the user.
        today: Reference date for the year options.
        logger: Logger used for malformed quote totals.

    Returns:
        DashboardSummary: Dashboard figures.
    """
    all_records = list(records)
    period_records = filter_by_period(all_records, selector)
    invoice_records = [r for r in period_records if r.source == "invoice"]
    return DashboardSummary(
        selector=selector,
        aggregate=aggregate,
        quotes=compute_quote_stats(quotes, logger),
        issued_count=len(invoice_records),
        paid_count=sum(1 for r in invoice_records if r.status == INVOICE_PAID),
        overdue_count=sum(
            1 for r in invoice_records if r.status == INVOICE_OVERDUE
        ),
        expenses_by_category=expense_breakdown(period_records),
        year_options=available_years(
            (r.record_date for r in all_records),
            today=today,
        ),
    )


def build_ledger_export(
    selector: FiscalPeriodSelector,
    invoices: Iterable[Invoice],
    transactions: Iterable[Transaction],
    quotes: Iterable[Quote],
    records: Iterable[FiscalRecord],
    aggregate: AggregateResult,
    logger: Logger | None = None,
    symbol: str = DEFAULT_SYMBOL,
) -> LedgerExport:
    """Build the Libro de Registros for a period.

    Each list holds the records dated inside the window, most recent first
    with ties broken by ascending id.

    Args:
        selector: Requested fiscal window.
        invoices: Raw invoices of the user.
        transactions: Raw transactions of the user.
        quotes: Raw quotes of the user.
        records: Classified records, used for categories and tax amounts.
        aggregate: Aggregate computed for the window.
        logger: Logger used for malformed display amounts.
        symbol: Currency symbol of the display amounts.

    Returns:
        LedgerExport: Display rows and rounded totals.
    """
    resolved_logger = logger or logging.getLogger(__name__)
    period = resolve_period(selector)
    classified = {
        (record.source, record.record_id): record for record in records
    }

    def in_period(raw_date) -> date | None:
        value = _safe_date(raw_date)
        if value is None:
            return None
        if value.year == period.year and value.month in period.months:
            return value
        return None

    invoice_rows: list[tuple[date, RecordId, InvoiceLedgerRow]] = []
    for invoice in invoices:
        issued = in_period(invoice.issue_date)
        if issued is None:
            continue
        status = normalize_status(invoice.status) or ""
        invoice_rows.append(
            (
                issued,
                invoice.id,
                InvoiceLedgerRow(
                    id=invoice.id,
                    number=invoice.number or str(invoice.id),
                    date=format_date(issued),
                    client=invoice.client_name or "",
                    subtotal=_display(invoice.subtotal, resolved_logger, symbol),
                    tax=_display(invoice.tax, resolved_logger, symbol),
                    total=_display(invoice.total, resolved_logger, symbol),
                    status=INVOICE_STATUS_LABELS.get(status, status),
                ),
            )
        )

    transaction_rows: list[tuple[date, RecordId, TransactionLedgerRow]] = []
    for transaction in transactions:
        booked = in_period(transaction.date)
        if booked is None:
            continue
        record = classified.get(("transaction", transaction.id))
        kind = normalize_status(transaction.type) or ""
        tax = ZERO
        if record is not None:
            tax = record.vat_input if kind == TRANSACTION_EXPENSE else record.vat_output
        transaction_rows.append(
            (
                booked,
                transaction.id,
                TransactionLedgerRow(
                    id=transaction.id,
                    date=format_date(booked),
                    description=transaction.description or "",
                    category=record.category_name if record else UNCATEGORIZED,
                    type=TRANSACTION_TYPE_LABELS.get(kind, kind),
                    amount=_display(transaction.amount, resolved_logger, symbol),
                    tax=format_currency(tax, symbol),
                ),
            )
        )

    quote_rows: list[tuple[date, RecordId, QuoteLedgerRow]] = []
    for quote in quotes:
        issued = in_period(quote.issue_date)
        if issued is None:
            continue
        status = normalize_status(quote.status) or ""
        quote_rows.append(
            (
                issued,
                quote.id,
                QuoteLedgerRow(
                    id=quote.id,
                    number=quote.number or str(quote.id),
                    date=format_date(issued),
                    client=quote.client_name or "",
                    total=_display(quote.total, resolved_logger, symbol),
                    status=QUOTE_STATUS_LABELS.get(status, status),
                ),
            )
        )

    return LedgerExport(
        selector=selector,
        period_label=selector.label,
        invoices=_ordered(invoice_rows),
        transactions=_ordered(transaction_rows),
        quotes=_ordered(quote_rows),
        totals=aggregate.as_payload(rounded=True),
    )


def _ordered(rows: list[tuple[date, RecordId, object]]) -> list:
    by_id = sorted(rows, key=lambda row: _id_key(row[1]))
    by_date = sorted(by_id, key=lambda row: row[0], reverse=True)
    return [row[2] for row in by_date]


def _id_key(record_id: RecordId) -> tuple[int, int | str]:
    if isinstance(record_id, int):
        return (0, record_id)
    text = str(record_id)
    if text.isdigit():
        return (0, int(text))
    return (1, text)


def _safe_date(value) -> date | None:
    try:
        return coerce_date(value)
    except ValueError:
        return None


def _safe_amount(value, label: str, logger: Logger) -> Decimal:
    try:
        return parse_decimal(value)
    except ValueError:
        logger.warning(f"{label}: malformed amount {value!r} treated as 0")
        return ZERO


def _display(value, logger: Logger, symbol: str) -> str:
    return format_currency(_safe_amount(value, "Ledger amount", logger), symbol)


__all__ = [
    "compute_quote_stats",
    "expense_breakdown",
    "build_dashboard_summary",
    "build_ledger_export",
]
