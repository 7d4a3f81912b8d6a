"""Record classification.

Invoices and transactions arrive with inconsistent shapes (string amounts,
JSON encoded tax lines, missing categories). ``classify`` turns each one into
a ``FiscalRecord`` once, so aggregation never has to guess field meaning.
"""

from collections.abc import Iterable, Mapping
from decimal import Decimal
import logging
from logging import Logger

from src.domain.constants import (
    INVOICE_PAID,
    IRPF_TAX_NAME,
    IVA_TAX_NAME,
    PENDING_INVOICE_STATUSES,
    TRANSACTION_EXPENSE,
    TRANSACTION_INCOME,
    UNCATEGORIZED,
)
from src.domain.errors import MalformedInputError
from src.domain.models.fiscal import ZERO, FiscalRecord
from src.domain.models.records import (
    AdditionalTax,
    Category,
    Invoice,
    RecordId,
    Transaction,
)
from src.domain.services.normalization import (
    coerce_date,
    normalize_status,
    parse_additional_taxes,
)
from src.utils.decimal_utils import parse_decimal

HUNDRED = Decimal("100")


class _Warnings:
    """Collects classification warnings for one record."""

    def __init__(self, label: str, logger: Logger) -> None:
        self._label = label
        self._logger = logger
        self.messages: list[str] = []

    def add(self, message: str) -> None:
        self.messages.append(message)
        self._logger.warning(f"{self._label}: {message}")


def classify(
    raw: Invoice | Transaction | FiscalRecord,
    categories: Mapping[RecordId, Category] | None = None,
    logger: Logger | None = None,
) -> FiscalRecord:
    """Normalize an invoice or transaction into a fiscal record.

    Malformed numeric fields are treated as zero and reported as warnings.
    Already classified records are returned unchanged.

    Args:
        raw: Invoice, transaction or previously classified record.
        categories: Categories keyed by id, used for deductibility.
        logger: Logger used for classification warnings.

    Returns:
        FiscalRecord: Classified record.

    Raises:
        MalformedInputError: If ``raw`` is not a supported record type.
    """
    resolved_logger = logger or logging.getLogger(__name__)
    if isinstance(raw, FiscalRecord):
        return raw
    if isinstance(raw, Invoice):
        return _classify_invoice(raw, resolved_logger)
    if isinstance(raw, Transaction):
        category_map = (
            categories
            if isinstance(categories, Mapping)
            else index_categories(categories)
        )
        return _classify_transaction(raw, category_map, resolved_logger)
    raise MalformedInputError(
        f"Cannot classify record of type {type(raw).__name__}"
    )


def classify_all(
    invoices: Iterable[Invoice],
    transactions: Iterable[Transaction],
    categories: Iterable[Category] | Mapping[RecordId, Category] | None = None,
    logger: Logger | None = None,
) -> list[FiscalRecord]:
    """Classify every invoice and transaction of a user.

    Args:
        invoices: Invoices to classify.
        transactions: Transactions to classify.
        categories: Categories as a mapping by id or a plain iterable.
        logger: Logger used for classification warnings.

    Returns:
        list[FiscalRecord]: Invoices first, then transactions.

    Raises:
        MalformedInputError: If one of the collections is not iterable.
    """
    category_map = index_categories(categories)
    records: list[FiscalRecord] = []
    for collection, name in ((invoices, "invoices"), (transactions, "transactions")):
        for raw in _iterate(collection, name):
            records.append(classify(raw, category_map, logger))
    return records


def index_categories(
    categories: Iterable[Category] | Mapping[RecordId, Category] | None,
) -> dict[RecordId, Category]:
    """Return categories keyed by id.

    Args:
        categories: Mapping by id or iterable of categories.

    Returns:
        dict[RecordId, Category]: Categories keyed by id.
    """
    if categories is None:
        return {}
    if isinstance(categories, Mapping):
        return dict(categories)
    return {category.id: category for category in _iterate(categories, "categories")}


def _classify_invoice(invoice: Invoice, logger: Logger) -> FiscalRecord:
    warnings = _Warnings(f"Invoice {invoice.id}", logger)
    status = normalize_status(invoice.status)
    record_date = _record_date(invoice.issue_date, warnings)
    subtotal = _amount(invoice.subtotal, "subtotal", warnings)
    tax = _amount(invoice.tax, "tax", warnings)
    total = _amount(invoice.total, "total", warnings)
    tax_lines = _tax_lines(invoice.additional_taxes, warnings)
    irpf = _invoice_irpf(tax_lines, subtotal, warnings)

    expected_total = subtotal + tax - irpf
    if total != expected_total and total != subtotal + tax:
        warnings.add(
            f"total {total} does not match subtotal {subtotal} + tax {tax}"
        )

    realized = status == INVOICE_PAID
    pending = status in PENDING_INVOICE_STATUSES
    return FiscalRecord(
        record_id=invoice.id,
        source="invoice",
        record_date=record_date,
        status=status,
        income_base=subtotal if realized else ZERO,
        vat_output=tax if realized else ZERO,
        irpf_withheld=irpf if realized else ZERO,
        pending_amount=total if pending else ZERO,
        is_pending=pending,
        warnings=tuple(warnings.messages),
    )


def _classify_transaction(
    transaction: Transaction,
    categories: Mapping[RecordId, Category],
    logger: Logger,
) -> FiscalRecord:
    warnings = _Warnings(f"Transaction {transaction.id}", logger)
    record_date = _record_date(transaction.date, warnings)
    amount = _amount(transaction.amount, "amount", warnings)
    tax_lines = _tax_lines(transaction.additional_taxes, warnings)
    vat = _resolve_tax(
        transaction.tax_amount,
        transaction.tax_rate,
        amount,
        _find_line(tax_lines, IVA_TAX_NAME),
        "tax",
        warnings,
    )
    irpf = abs(
        _resolve_tax(
            transaction.irpf_amount,
            transaction.irpf_rate,
            amount,
            _find_line(tax_lines, IRPF_TAX_NAME),
            "irpf",
            warnings,
        )
    )

    category = _lookup_category(categories, transaction.category_id)
    category_name = (
        (category.name or str(category.id)) if category else UNCATEGORIZED
    )
    kind = normalize_status(transaction.type)
    base = {
        "record_id": transaction.id,
        "source": "transaction",
        "record_date": record_date,
        "status": kind,
        "category_id": category.id if category else None,
        "category_name": category_name,
    }
    if kind == TRANSACTION_INCOME:
        return FiscalRecord(
            **base,
            income_base=amount,
            vat_output=vat,
            irpf_withheld=irpf,
            warnings=tuple(warnings.messages),
        )
    if kind == TRANSACTION_EXPENSE:
        return FiscalRecord(
            **base,
            expense_base=amount,
            vat_input=vat,
            irpf_expense=irpf,
            deductible=_is_deductible(category),
            warnings=tuple(warnings.messages),
        )
    warnings.add(f"unknown transaction type {transaction.type!r} ignored")
    return FiscalRecord(**base, warnings=tuple(warnings.messages))


def _amount(value, field: str, warnings: _Warnings) -> Decimal:
    try:
        return parse_decimal(value)
    except ValueError:
        warnings.add(f"malformed {field} {value!r} treated as 0")
        return ZERO


def _record_date(value, warnings: _Warnings):
    try:
        return coerce_date(value)
    except ValueError:
        warnings.add(f"unparseable date {value!r}; excluded from periods")
        return None


def _tax_lines(raw, warnings: _Warnings) -> list[AdditionalTax]:
    try:
        return parse_additional_taxes(raw)
    except ValueError as exc:
        warnings.add(f"additional taxes ignored: {exc}")
        return []


def _find_line(lines: list[AdditionalTax], name: str) -> AdditionalTax | None:
    for line in lines:
        if name in (line.name or ""):
            return line
    return None


def _resolve_tax(
    explicit_amount,
    explicit_rate,
    base: Decimal,
    line: AdditionalTax | None,
    field: str,
    warnings: _Warnings,
) -> Decimal:
    if explicit_amount is not None:
        return _amount(explicit_amount, f"{field}_amount", warnings)
    if line is not None and line.amount is not None:
        return _amount(line.amount, f"{field} line amount", warnings)
    rate = explicit_rate
    if rate is None and line is not None and line.is_percentage:
        rate = line.rate
    if rate is None:
        return ZERO
    return base * abs(_amount(rate, f"{field}_rate", warnings)) / HUNDRED


def _invoice_irpf(
    lines: list[AdditionalTax],
    subtotal: Decimal,
    warnings: _Warnings,
) -> Decimal:
    irpf = ZERO
    for line in lines:
        if IRPF_TAX_NAME not in (line.name or ""):
            continue
        if line.is_percentage and line.rate is not None:
            rate = abs(_amount(line.rate, "irpf rate", warnings))
            irpf += subtotal * rate / HUNDRED
        elif line.amount is not None:
            irpf += abs(_amount(line.amount, "irpf amount", warnings))
    return irpf


def _lookup_category(
    categories: Mapping[RecordId, Category],
    category_id: RecordId | None,
) -> Category | None:
    if category_id is None:
        return None
    category = categories.get(category_id)
    if category is not None:
        return category
    wanted = str(category_id)
    for key, candidate in categories.items():
        if str(key) == wanted:
            return candidate
    return None


def _is_deductible(category: Category | None) -> bool:
    if category is None or category.deductible is None:
        return True
    if isinstance(category.deductible, str):
        return category.deductible.strip().lower() not in ("false", "0", "no")
    return bool(category.deductible)


def _iterate(collection, name: str):
    if isinstance(collection, (str, bytes, Mapping)):
        raise MalformedInputError(f"{name} must be a collection of records")
    try:
        return iter(collection)
    except TypeError as exc:
        raise MalformedInputError(f"{name} is not iterable") from exc


__all__ = ["classify", "classify_all", "index_categories"]
