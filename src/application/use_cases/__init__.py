"""Application use cases package."""

from .check_period_additivity import (
    CheckPeriodAdditivityUseCase,
    FieldDeviation,
    PeriodAdditivityReport,
)
from .fiscal_records import FiscalRecordSet, load_fiscal_records
from .get_dashboard_summary import DashboardSummary, GetDashboardSummaryUseCase
from .get_ledger_export import GetLedgerExportUseCase, LedgerExport
from .invalidate_summaries import InvalidateSummariesOnMutation

__all__ = [
    "GetDashboardSummaryUseCase",
    "DashboardSummary",
    "GetLedgerExportUseCase",
    "LedgerExport",
    "CheckPeriodAdditivityUseCase",
    "PeriodAdditivityReport",
    "FieldDeviation",
    "InvalidateSummariesOnMutation",
    "FiscalRecordSet",
    "load_fiscal_records",
]
