"""Domain package for fiscal rules and core models."""

from .errors import FiscalEngineError, InvalidSelectorError, MalformedInputError
from .models import (
    AggregateResult,
    Category,
    DashboardSummary,
    FiscalPeriodSelector,
    FiscalRecord,
    Invoice,
    LedgerExport,
    Quote,
    ResolvedPeriod,
    Transaction,
)
from .services import (
    aggregate,
    aggregate_period,
    build_dashboard_summary,
    build_ledger_export,
    classify,
    classify_all,
    filter_by_period,
    includes,
    resolve_period,
)

__all__ = [
    "FiscalEngineError",
    "InvalidSelectorError",
    "MalformedInputError",
    "Invoice",
    "Transaction",
    "Category",
    "Quote",
    "FiscalPeriodSelector",
    "ResolvedPeriod",
    "FiscalRecord",
    "AggregateResult",
    "DashboardSummary",
    "LedgerExport",
    "resolve_period",
    "includes",
    "filter_by_period",
    "classify",
    "classify_all",
    "aggregate",
    "aggregate_period",
    "build_dashboard_summary",
    "build_ledger_export",
]
