"""Tests for record classification."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.constants import UNCATEGORIZED
from src.domain.errors import MalformedInputError
from src.domain.models import Category, FiscalRecord, Invoice, Transaction
from src.domain.services.classification import classify, classify_all


def _invoice(**overrides) -> Invoice:
    values = {
        "id": 1,
        "issue_date": "2025-05-10",
        "client_id": 1,
        "subtotal": "1000.00",
        "tax": "210.00",
        "total": "1210.00",
        "status": "paid",
    }
    values.update(overrides)
    return Invoice(**values)


def _expense(**overrides) -> Transaction:
    values = {
        "id": 10,
        "date": date(2025, 4, 20),
        "type": "expense",
        "amount": "200.00",
        "category_id": 1,
        "tax_amount": "42.00",
    }
    values.update(overrides)
    return Transaction(**values)


def test_paid_invoice_with_irpf_line_is_realized_income() -> None:
    """Paid invoices contribute base, VAT and withheld IRPF."""
    logger = MagicMock()
    invoice = _invoice(
        total="1060.00",
        additional_taxes='[{"name": "IRPF", "amount": -15, "isPercentage": true}]',
    )

    record = classify(invoice, logger=logger)

    assert record.source == "invoice"
    assert record.record_date == date(2025, 5, 10)
    assert record.income_base == Decimal("1000")
    assert record.vat_output == Decimal("210")
    assert record.irpf_withheld == Decimal("150")
    assert record.is_pending is False
    assert record.warnings == ()
    logger.warning.assert_not_called()


def test_pending_invoice_only_feeds_pending_bucket() -> None:
    """Unpaid invoices carry their total as pending amount only."""
    record = classify(_invoice(status="Overdue"), logger=MagicMock())

    assert record.status == "overdue"
    assert record.income_base == Decimal("0")
    assert record.vat_output == Decimal("0")
    assert record.is_pending is True
    assert record.pending_amount == Decimal("1210")


def test_canceled_invoice_contributes_nothing() -> None:
    """Canceled invoices are neither income nor pending."""
    record = classify(_invoice(status="canceled"), logger=MagicMock())

    assert record.income_base == Decimal("0")
    assert record.is_pending is False
    assert record.pending_amount == Decimal("0")


def test_malformed_amount_is_zero_with_warning() -> None:
    """Unparseable numbers become zero and are logged."""
    logger = MagicMock()

    record = classify(_invoice(subtotal="abc", total="210.00"), logger=logger)

    assert record.income_base == Decimal("0")
    assert any("subtotal" in message for message in record.warnings)
    logger.warning.assert_called()


def test_total_mismatch_is_reported_not_raised() -> None:
    """A total that does not match its parts is only a warning."""
    record = classify(_invoice(total="999.00"), logger=MagicMock())

    assert record.income_base == Decimal("1000")
    assert any("does not match" in message for message in record.warnings)


def test_unparseable_date_is_kept_without_period() -> None:
    """Records with bad dates stay classified but undated."""
    record = classify(_invoice(issue_date="not-a-date"), logger=MagicMock())

    assert record.record_date is None
    assert any("unparseable date" in message for message in record.warnings)


def test_expense_uses_explicit_tax_and_category_deductibility() -> None:
    """Expenses read the tax amount and category deductibility."""
    categories = [Category(id=1, type="expense", name="Ocio", deductible="false")]

    record = classify_all([], [_expense()], categories, logger=MagicMock())[0]

    assert record.expense_base == Decimal("200")
    assert record.vat_input == Decimal("42")
    assert record.deductible is False
    assert record.category_name == "Ocio"


def test_transaction_tax_line_rate_applies_to_amount() -> None:
    """A percentage IVA line is applied to the transaction amount."""
    transaction = _expense(
        tax_amount=None,
        amount="100",
        additional_taxes=[{"name": "iva", "amount": 21, "isPercentage": True}],
    )

    record = classify(transaction, {}, logger=MagicMock())

    assert record.vat_input == Decimal("21")


def test_income_transaction_irpf_is_positive() -> None:
    """Withheld IRPF is stored as a positive amount."""
    transaction = Transaction(
        id=11,
        date="2025-02-01",
        type="income",
        amount="500",
        irpf_rate="-15",
    )

    record = classify(transaction, logger=MagicMock())

    assert record.income_base == Decimal("500")
    assert record.irpf_withheld == Decimal("75")


def test_missing_category_defaults_to_deductible_uncategorized() -> None:
    """Unknown categories fall back to the Uncategorized bucket."""
    record = classify(_expense(category_id=99), {}, logger=MagicMock())

    assert record.category_name == UNCATEGORIZED
    assert record.category_id is None
    assert record.deductible is True


def test_category_lookup_matches_string_ids() -> None:
    """Category ids stored as strings still match integer keys."""
    categories = {7: Category(id=7, type="expense", name="Software")}

    record = classify(_expense(category_id="7"), categories, logger=MagicMock())

    assert record.category_id == 7
    assert record.category_name == "Software"


def test_unknown_transaction_type_is_ignored_with_warning() -> None:
    """Unknown transaction types produce an empty record."""
    record = classify(_expense(type="transfer"), logger=MagicMock())

    assert record.expense_base == Decimal("0")
    assert record.income_base == Decimal("0")
    assert any("unknown transaction type" in m for m in record.warnings)


def test_classify_returns_fiscal_records_unchanged() -> None:
    """Already classified records pass through."""
    record = FiscalRecord(record_id=1, source="invoice", record_date=None)

    assert classify(record) is record


def test_classify_rejects_unsupported_types() -> None:
    """Arbitrary objects cannot be classified."""
    with pytest.raises(MalformedInputError):
        classify({"id": 1})


def test_classify_all_rejects_non_collections() -> None:
    """Missing collections are structural errors."""
    with pytest.raises(MalformedInputError):
        classify_all(None, [])
    with pytest.raises(MalformedInputError):
        classify_all([], "transactions")
