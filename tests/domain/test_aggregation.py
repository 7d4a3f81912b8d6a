"""Tests for the tax aggregator."""

from datetime import date
from decimal import Decimal
from unittest.mock import MagicMock

import pytest

from src.domain.errors import MalformedInputError
from src.domain.models import (
    PERIOD_FIELDS,
    AggregateResult,
    Category,
    FiscalPeriodSelector,
    FiscalRecord,
    Invoice,
    Transaction,
)
from src.domain.services.aggregation import aggregate, aggregate_period
from src.domain.services.classification import classify_all
from src.domain.services.summaries import expense_breakdown


def _scenario_records(category_id=1, categories=None):
    invoices = [
        Invoice(
            id=1,
            issue_date=date(2025, 5, 10),
            client_id=1,
            subtotal="1000",
            tax="210",
            total="1210",
            status="paid",
        )
    ]
    transactions = [
        Transaction(
            id=2,
            date=date(2025, 4, 20),
            type="expense",
            amount="200",
            tax_amount="42",
            category_id=category_id,
        )
    ]
    if categories is None:
        categories = [Category(id=1, type="expense", name="Material")]
    return classify_all(invoices, transactions, categories, logger=MagicMock())


def _expense(record_id, day, base, vat, deductible=True) -> FiscalRecord:
    return FiscalRecord(
        record_id=record_id,
        source="transaction",
        record_date=day,
        status="expense",
        expense_base=Decimal(base),
        vat_input=Decimal(vat),
        deductible=deductible,
        category_id=1,
        category_name="Material",
    )


def _income(record_id, day, base, vat, irpf="0") -> FiscalRecord:
    return FiscalRecord(
        record_id=record_id,
        source="invoice",
        record_date=day,
        status="paid",
        income_base=Decimal(base),
        vat_output=Decimal(vat),
        irpf_withheld=Decimal(irpf),
    )


def test_paid_invoice_and_deductible_expense_in_quarter() -> None:
    """One paid invoice and one deductible expense in Q2."""
    records = _scenario_records()

    result = aggregate_period(records, FiscalPeriodSelector(year="2025", quarter="Q2"))
    payload = result.as_payload()

    assert payload["income"] == Decimal("1000")
    assert payload["ivaRepercutido"] == Decimal("210")
    assert payload["gastosDeducibles"] == Decimal("200")
    assert payload["ivaDeducible"] == Decimal("42")
    assert payload["ivaALiquidar"] == Decimal("168")
    assert payload["resultadoFiscal"] == Decimal("800")


def test_empty_quarter_yields_zero_totals() -> None:
    """A quarter without records returns zeros, never an error."""
    records = _scenario_records()

    result = aggregate_period(records, FiscalPeriodSelector(year="2025", quarter="Q1"))

    assert result.record_count == 0
    assert all(value == 0 for value in result.as_payload().values())


def test_expense_only_period_yields_negative_vat_payable() -> None:
    """VAT payable is not clamped when input VAT exceeds output VAT."""
    records = classify_all(
        [],
        [
            Transaction(
                id=7,
                date=date(2025, 8, 3),
                type="expense",
                amount="100",
                tax_amount="21",
                category_id=1,
            )
        ],
        [Category(id=1, type="expense", name="Material")],
        logger=MagicMock(),
    )

    result = aggregate_period(records, FiscalPeriodSelector(year="2025", quarter="Q3"))

    assert result.iva_a_liquidar == Decimal("-21")
    assert result.iva_a_liquidar == result.iva_repercutido - result.iva_deducible
    assert result.as_payload(rounded=True)["ivaALiquidar"] == Decimal("-21.00")
    assert result.resultado_fiscal == Decimal("-100")


def test_expense_with_missing_category_counts_but_is_not_broken_down() -> None:
    """Expenses pointing at a deleted category stay in the totals."""
    records = _scenario_records(category_id=42)
    selector = FiscalPeriodSelector(year="2025", quarter="Q2")

    result = aggregate_period(records, selector)

    assert result.expenses == Decimal("200")
    assert result.gastos_deducibles == Decimal("200")
    assert expense_breakdown(records) == []


def test_month_selector_wins_over_quarter() -> None:
    """Quarter Q1 with month 6 aggregates June only."""
    records = [
        _income(1, date(2025, 6, 3), "300", "63"),
        _income(2, date(2025, 2, 3), "500", "105"),
    ]

    result = aggregate_period(
        records,
        FiscalPeriodSelector(year="2025", quarter="Q1", month=6),
    )

    assert result.income == Decimal("300")
    assert result.record_count == 1


def test_non_deductible_expense_splits_expense_fields() -> None:
    """Non-deductible expenses count in expenses but not deductions."""
    records = [
        _income(1, date(2025, 1, 5), "1000", "210", irpf="150"),
        _expense(2, date(2025, 1, 6), "200", "42"),
        _expense(3, date(2025, 1, 7), "100", "21", deductible=False),
    ]

    result = aggregate(records)

    assert result.expenses == Decimal("300")
    assert result.gastos_deducibles == Decimal("200")
    assert result.iva_soportado == Decimal("63")
    assert result.iva_deducible == Decimal("42")
    assert result.iva_a_liquidar == result.iva_repercutido - result.iva_deducible
    assert result.resultado_fiscal == Decimal("800")
    assert result.final_result == Decimal("700")
    assert result.net_income == Decimal("850")
    assert result.irpf_total == Decimal("150")


def test_pending_bucket_ignores_the_period() -> None:
    """Outstanding invoices from other years are still reported."""
    pending = FiscalRecord(
        record_id=9,
        source="invoice",
        record_date=date(2024, 11, 2),
        status="pending",
        pending_amount=Decimal("605"),
        is_pending=True,
    )
    undated = FiscalRecord(
        record_id=10,
        source="invoice",
        record_date=None,
        status="overdue",
        pending_amount=Decimal("100"),
        is_pending=True,
    )

    result = aggregate_period(
        [pending, undated, _income(1, date(2025, 1, 5), "10", "2.1")],
        FiscalPeriodSelector(year="2025", quarter="Q1"),
    )

    assert result.income == Decimal("10")
    assert result.pending_invoices == Decimal("705")
    assert result.pending_count == 2


def test_quarters_and_months_add_up_to_the_year() -> None:
    """Summing the four quarters reproduces the year aggregate."""
    records = [
        _income(1, date(2025, 1, 31), "1000.10", "210.02", irpf="150.02"),
        _income(2, date(2025, 4, 1), "333.33", "69.99"),
        _expense(3, date(2025, 6, 30), "45.55", "9.57"),
        _expense(4, date(2025, 9, 15), "12.01", "2.52", deductible=False),
        _income(5, date(2025, 12, 31), "0.01", "0.00"),
        _income(6, date(2024, 12, 31), "999", "209.79"),
    ]
    year = aggregate_period(records, FiscalPeriodSelector(year="2025"))

    quarters = AggregateResult()
    for quarter in ("Q1", "Q2", "Q3", "Q4"):
        quarters = quarters + aggregate_period(
            records,
            FiscalPeriodSelector(year="2025", quarter=quarter),
        )
    months = AggregateResult()
    for month in range(1, 13):
        months = months + aggregate_period(
            records,
            FiscalPeriodSelector(year="2025", month=month),
        )

    for field in PERIOD_FIELDS:
        assert getattr(quarters, field) == getattr(year, field)
        assert getattr(months, field) == getattr(year, field)


def test_aggregation_is_idempotent_and_order_independent() -> None:
    """Repeated and reordered inputs produce identical results."""
    records = _scenario_records()

    first = aggregate(records)
    second = aggregate(records)
    reversed_result = aggregate(list(reversed(records)))

    assert first == second == reversed_result


def test_rounding_only_happens_in_the_payload() -> None:
    """Exact sums are kept; rounded payload uses half-up cents."""
    records = [
        _income(1, date(2025, 1, 1), "0.005", "0"),
        _income(2, date(2025, 1, 2), "0.0001", "0"),
    ]

    result = aggregate(records)

    assert result.income == Decimal("0.0051")
    assert result.as_payload(rounded=True)["income"] == Decimal("0.01")


@pytest.mark.parametrize("records", ["abc", {"a": 1}, None, [object()]])
def test_aggregate_rejects_malformed_input(records) -> None:
    """Only iterables of classified records are accepted."""
    with pytest.raises(MalformedInputError):
        aggregate(records)
