"""Domain services package."""

from .aggregation import aggregate, aggregate_period
from .classification import classify, classify_all, index_categories
from .formatting import currency_symbol, format_currency, format_date
from .normalization import coerce_date, normalize_status, parse_additional_taxes
from .periods import (
    available_years,
    filter_by_period,
    includes,
    period_bounds,
    quarter_of,
    resolve_period,
)
from .summaries import (
    build_dashboard_summary,
    build_ledger_export,
    compute_quote_stats,
    expense_breakdown,
)
from .tax_math import TaxBreakdown, base_from_amounts, base_from_rates

__all__ = [
    "resolve_period",
    "includes",
    "filter_by_period",
    "quarter_of",
    "period_bounds",
    "available_years",
    "classify",
    "classify_all",
    "index_categories",
    "aggregate",
    "aggregate_period",
    "compute_quote_stats",
    "expense_breakdown",
    "build_dashboard_summary",
    "build_ledger_export",
    "coerce_date",
    "normalize_status",
    "parse_additional_taxes",
    "currency_symbol",
    "format_currency",
    "format_date",
    "TaxBreakdown",
    "base_from_amounts",
    "base_from_rates",
]
