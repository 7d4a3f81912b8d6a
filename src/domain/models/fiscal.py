"""Domain models for fiscal periods, classified records and aggregates."""

from dataclasses import dataclass, fields
from datetime import date
from decimal import Decimal

from src.domain.constants import ALL_PERIODS, UNCATEGORIZED
from src.domain.models.records import RecordId
from src.utils.decimal_utils import quantize_currency

ZERO = Decimal("0")


@dataclass(frozen=True)
class FiscalPeriodSelector:
    """Filter under which an aggregate is requested.

    Attributes:
        year: Four digit year as a string, e.g. ``"2025"``.
        quarter: ``"all"`` or one of ``Q1``..``Q4``.
        month: ``"all"`` or a month number 1..12.
    """

    year: str
    quarter: str = ALL_PERIODS
    month: int | str = ALL_PERIODS

    @classmethod
    def from_query(
        cls,
        year,
        quarter=None,
        month=None,
    ) -> "FiscalPeriodSelector":
        """Build a selector from loosely typed query values.

        Quarter labels are upper-cased (``q2`` -> ``Q2``) and numeric month
        strings become integers (``"06"`` -> ``6``). Values that cannot be
        normalized are kept as-is so validation reports them.

        Args:
            year: Year value (string or integer).
            quarter: Optional quarter label.
            month: Optional month label or number.

        Returns:
            FiscalPeriodSelector: Normalized selector.
        """
        raw_year = "" if year is None else str(year).strip()
        raw_quarter = (
            ALL_PERIODS
            if quarter in (None, "")
            else str(quarter).strip()
        )
        if raw_quarter.lower() == ALL_PERIODS:
            raw_quarter = ALL_PERIODS
        else:
            raw_quarter = raw_quarter.upper()

        raw_month: int | str = ALL_PERIODS
        if month not in (None, ""):
            cleaned = str(month).strip()
            if cleaned.lower() == ALL_PERIODS:
                raw_month = ALL_PERIODS
            elif cleaned.isdigit():
                raw_month = int(cleaned)
            else:
                raw_month = cleaned
        return cls(year=raw_year, quarter=raw_quarter, month=raw_month)

    @property
    def label(self) -> str:
        """Human readable period label, e.g. ``2025 Q2`` or ``2025-06``."""
        if self.month != ALL_PERIODS:
            return f"{self.year}-{str(self.month).zfill(2)}"
        if self.quarter != ALL_PERIODS:
            return f"{self.year} {self.quarter}"
        return str(self.year)


@dataclass(frozen=True)
class ResolvedPeriod:
    """Validated selector: a year and the set of months it covers."""

    year: int
    months: frozenset[int]


@dataclass(frozen=True)
class FiscalRecord:
    """Uniform classified shape for invoices and transactions.

    Amounts are exact Decimals; a record that does not contribute to a
    bucket carries zero there.
    """

    record_id: RecordId
    source: str
    record_date: date | None
    status: str | None = None
    income_base: Decimal = ZERO
    vat_output: Decimal = ZERO
    irpf_withheld: Decimal = ZERO
    expense_base: Decimal = ZERO
    vat_input: Decimal = ZERO
    irpf_expense: Decimal = ZERO
    deductible: bool = True
    category_id: RecordId | None = None
    category_name: str = UNCATEGORIZED
    pending_amount: Decimal = ZERO
    is_pending: bool = False
    warnings: tuple[str, ...] = ()


@dataclass(frozen=True)
class AggregateResult:
    """Engine output for a set of classified records.

    Derived figures are properties so that identities such as
    ``iva_a_liquidar == iva_repercutido - iva_deducible`` hold exactly.
    """

    income: Decimal = ZERO
    expenses: Decimal = ZERO
    gastos_deducibles: Decimal = ZERO
    iva_repercutido: Decimal = ZERO
    iva_soportado: Decimal = ZERO
    iva_deducible: Decimal = ZERO
    irpf_retenido_ingresos: Decimal = ZERO
    irpf_gastos: Decimal = ZERO
    pending_invoices: Decimal = ZERO
    pending_count: int = 0
    record_count: int = 0

    @property
    def iva_a_liquidar(self) -> Decimal:
        """VAT payable; negative values are a refund position."""
        return self.iva_repercutido - self.iva_deducible

    @property
    def resultado_fiscal(self) -> Decimal:
        """Net taxable result: income minus deductible expenses."""
        return self.income - self.gastos_deducibles

    @property
    def final_result(self) -> Decimal:
        """Gross cash-flow result: income minus all expenses."""
        return self.income - self.expenses

    @property
    def irpf_total(self) -> Decimal:
        return self.irpf_retenido_ingresos + self.irpf_gastos

    @property
    def net_income(self) -> Decimal:
        """Income actually received after withholding."""
        return self.income - self.irpf_retenido_ingresos

    def __add__(self, other: "AggregateResult") -> "AggregateResult":
        if not isinstance(other, AggregateResult):
            return NotImplemented
        return AggregateResult(
            **{
                item.name: getattr(self, item.name) + getattr(other, item.name)
                for item in fields(self)
            }
        )

    def as_payload(self, rounded: bool = False) -> dict[str, Decimal | int]:
        """Return the stable consumer payload.

        Args:
            rounded: Round currency values to cents (presentation only).

        Returns:
            dict[str, Decimal | int]: Values keyed by their published names.
        """
        money = {
            "income": self.income,
            "expenses": self.expenses,
            "gastosDeducibles": self.gastos_deducibles,
            "ivaRepercutido": self.iva_repercutido,
            "ivaSoportado": self.iva_soportado,
            "ivaDeducible": self.iva_deducible,
            "ivaALiquidar": self.iva_a_liquidar,
            "irpfRetenidoIngresos": self.irpf_retenido_ingresos,
            "irpfGastos": self.irpf_gastos,
            "irpfTotal": self.irpf_total,
            "resultadoFiscal": self.resultado_fiscal,
            "finalResult": self.final_result,
            "netResult": self.final_result,
            "netIncome": self.net_income,
            "pendingInvoices": self.pending_invoices,
        }
        if rounded:
            money = {key: quantize_currency(value) for key, value in money.items()}
        payload: dict[str, Decimal | int] = dict(money)
        payload["pendingCount"] = self.pending_count
        return payload


PERIOD_FIELDS = (
    "income",
    "expenses",
    "gastos_deducibles",
    "iva_repercutido",
    "iva_soportado",
    "iva_deducible",
    "iva_a_liquidar",
    "irpf_retenido_ingresos",
    "irpf_gastos",
    "resultado_fiscal",
    "final_result",
)


__all__ = [
    "ZERO",
    "FiscalPeriodSelector",
    "ResolvedPeriod",
    "FiscalRecord",
    "AggregateResult",
    "PERIOD_FIELDS",
]
