"""Tax aggregation over classified fiscal records."""

from collections.abc import Iterable, Mapping

from src.domain.errors import MalformedInputError
from src.domain.models.fiscal import (
    ZERO,
    AggregateResult,
    FiscalPeriodSelector,
    FiscalRecord,
)
from src.domain.services.periods import filter_by_period


def aggregate(
    records: Iterable[FiscalRecord],
    *,
    pending_records: Iterable[FiscalRecord] | None = None,
) -> AggregateResult:
    """Fold classified records into period totals.

    Sums are exact Decimals; nothing is rounded here. The pending bucket is
    taken from ``pending_records`` when provided, since outstanding invoices
    are reported independently of the requested period.

    Args:
        records: Classified, period-filtered records.
        pending_records: Optional records feeding the pending bucket.

    Returns:
        AggregateResult: Totals for the records.

    Raises:
        MalformedInputError: If an input is not an iterable of FiscalRecord.
    """
    period_records = _materialize(records, "records")
    pending_source = (
        period_records
        if pending_records is None
        else _materialize(pending_records, "pending_records")
    )

    income = ZERO
    expenses = ZERO
    gastos_deducibles = ZERO
    iva_repercutido = ZERO
    iva_soportado = ZERO
    iva_deducible = ZERO
    irpf_retenido_ingresos = ZERO
    irpf_gastos = ZERO
    for record in period_records:
        income += record.income_base
        iva_repercutido += record.vat_output
        irpf_retenido_ingresos += record.irpf_withheld
        expenses += record.expense_base
        iva_soportado += record.vat_input
        irpf_gastos += record.irpf_expense
        if record.deductible:
            gastos_deducibles += record.expense_base
            iva_deducible += record.vat_input

    pending_total = ZERO
    pending_count = 0
    for record in pending_source:
        if record.is_pending:
            pending_total += record.pending_amount
            pending_count += 1

    return AggregateResult(
        income=income,
        expenses=expenses,
        gastos_deducibles=gastos_deducibles,
        iva_repercutido=iva_repercutido,
        iva_soportado=iva_soportado,
        iva_deducible=iva_deducible,
        irpf_retenido_ingresos=irpf_retenido_ingresos,
        irpf_gastos=irpf_gastos,
        pending_invoices=pending_total,
        pending_count=pending_count,
        record_count=len(period_records),
    )


def aggregate_period(
    records: Iterable[FiscalRecord],
    selector: FiscalPeriodSelector,
) -> AggregateResult:
    """Aggregate the records of one fiscal window.

    Period totals use the records inside the window; the pending bucket uses
    every record, reflecting what is outstanding as of now.

    Args:
        records: All classified records of a user.
        selector: Requested fiscal window.

    Returns:
        AggregateResult: Totals for the window.
    """
    all_records = _materialize(records, "records")
    return aggregate(
        filter_by_period(all_records, selector),
        pending_records=all_records,
    )


def _materialize(records, name: str) -> list[FiscalRecord]:
    if isinstance(records, (str, bytes, Mapping)):
        raise MalformedInputError(f"{name} must be an iterable of FiscalRecord")
    try:
        materialized = list(records)
    except TypeError as exc:
        raise MalformedInputError(f"{name} is not iterable") from exc
    for record in materialized:
        if not isinstance(record, FiscalRecord):
            raise MalformedInputError(
                f"{name} contains {type(record).__name__}, expected FiscalRecord"
            )
    return materialized


__all__ = ["aggregate", "aggregate_period"]
