"""Fiscal period resolution.

A selector names a year plus an optional quarter and month. When both a
quarter and a month are given and disagree, the month takes precedence.
"""

import calendar
from collections.abc import Iterable
from datetime import date, datetime
from decimal import Decimal

from src.domain.constants import ALL_PERIODS, QUARTER_MONTHS
from src.domain.errors import InvalidSelectorError, MalformedInputError
from src.domain.models.fiscal import FiscalPeriodSelector, ResolvedPeriod

ALL_MONTHS = frozenset(range(1, 13))


def resolve_period(selector: FiscalPeriodSelector) -> ResolvedPeriod:
    """Validate a selector and return the months it covers.

    Args:
        selector: Requested fiscal window.

    Returns:
        ResolvedPeriod: Integer year and covered months.

    Raises:
        InvalidSelectorError: If the year is not an integer, the quarter is
            unknown or the month is outside 1..12.
    """
    year = _resolve_year(selector.year)

    quarter = selector.quarter
    if quarter != ALL_PERIODS and quarter not in QUARTER_MONTHS:
        raise InvalidSelectorError("quarter", quarter)

    month = selector.month
    if month != ALL_PERIODS:
        return ResolvedPeriod(year=year, months=frozenset({_resolve_month(month)}))
    if quarter != ALL_PERIODS:
        return ResolvedPeriod(year=year, months=frozenset(QUARTER_MONTHS[quarter]))
    return ResolvedPeriod(year=year, months=ALL_MONTHS)


def includes(record_date: date, selector: FiscalPeriodSelector) -> bool:
    """Return whether a dated record belongs to the selected window.

    Args:
        record_date: Record date; datetimes are compared on their date.
        selector: Requested fiscal window.

    Returns:
        bool: True when the record falls inside the window.

    Raises:
        InvalidSelectorError: If the selector is invalid.
        MalformedInputError: If ``record_date`` is not a date.
    """
    period = resolve_period(selector)
    return _in_period(record_date, period)


def filter_by_period(records: Iterable, selector: FiscalPeriodSelector) -> list:
    """Keep the classified records whose date falls inside the window.

    Records without a usable date never belong to a period.

    Args:
        records: Classified records exposing ``record_date``.
        selector: Requested fiscal window.

    Returns:
        list: Records inside the window, in input order.
    """
    period = resolve_period(selector)
    return [
        record
        for record in records
        if record.record_date is not None
        and _in_period(record.record_date, period)
    ]


def quarter_of(value: date) -> int:
    """Return the calendar quarter (1..4) of a date."""
    return (value.month - 1) // 3 + 1


def period_bounds(selector: FiscalPeriodSelector) -> tuple[date, date]:
    """Return the first and last day covered by a selector.

    Args:
        selector: Requested fiscal window.

    Returns:
        tuple[date, date]: Inclusive start and end dates.
    """
    period = resolve_period(selector)
    first_month = min(period.months)
    last_month = max(period.months)
    last_day = calendar.monthrange(period.year, last_month)[1]
    return (
        date(period.year, first_month, 1),
        date(period.year, last_month, last_day),
    )


def available_years(
    dates: Iterable[date | None],
    today: date | None = None,
) -> list[int]:
    """Return distinct record years plus the current year, newest first.

    Args:
        dates: Record dates; missing dates are ignored.
        today: Reference date for the current year.

    Returns:
        list[int]: Sorted year options.
    """
    reference = today or date.today()
    years = {value.year for value in dates if value is not None}
    years.add(reference.year)
    return sorted(years, reverse=True)


def _in_period(record_date: date, period: ResolvedPeriod) -> bool:
    if isinstance(record_date, datetime):
        record_date = record_date.date()
    if not isinstance(record_date, date):
        raise MalformedInputError(
            f"Record date must be a date, got {type(record_date).__name__}"
        )
    return record_date.year == period.year and record_date.month in period.months


def _resolve_year(raw_year) -> int:
    if isinstance(raw_year, bool):
        raise InvalidSelectorError("year", raw_year)
    text = str(raw_year).strip()
    if not text.isdecimal():
        raise InvalidSelectorError("year", raw_year)
    try:
        return int(text)
    except ValueError as exc:
        raise InvalidSelectorError("year", raw_year) from exc


def _resolve_month(raw_month) -> int:
    if isinstance(raw_month, bool):
        raise InvalidSelectorError("month", raw_month)
    try:
        month = int(raw_month)
    except (TypeError, ValueError, OverflowError) as exc:
        raise InvalidSelectorError("month", raw_month) from exc
    if isinstance(raw_month, (float, Decimal)) and month != raw_month:
        raise InvalidSelectorError("month", raw_month)
    if month not in ALL_MONTHS:
        raise InvalidSelectorError("month", raw_month)
    return month


__all__ = [
    "resolve_period",
    "includes",
    "filter_by_period",
    "quarter_of",
    "period_bounds",
    "available_years",
]
