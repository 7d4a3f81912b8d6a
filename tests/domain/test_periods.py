"""Tests for fiscal period resolution."""

from datetime import date, datetime
from types import SimpleNamespace

import pytest

from src.domain.errors import InvalidSelectorError, MalformedInputError
from src.domain.models import FiscalPeriodSelector
from src.domain.services.periods import (
    available_years,
    filter_by_period,
    includes,
    period_bounds,
    quarter_of,
    resolve_period,
)


def test_resolve_period_quarter_covers_three_months() -> None:
    """A quarter selector should resolve to its three calendar months."""
    period = resolve_period(FiscalPeriodSelector(year="2025", quarter="Q2"))

    assert period.year == 2025
    assert period.months == frozenset({4, 5, 6})


def test_resolve_period_all_covers_whole_year() -> None:
    """Without quarter or month the whole year is selected."""
    period = resolve_period(FiscalPeriodSelector(year="2024"))

    assert period.months == frozenset(range(1, 13))


def test_month_takes_precedence_over_conflicting_quarter() -> None:
    """Month 6 with quarter Q1 should select June only."""
    selector = FiscalPeriodSelector(year="2025", quarter="Q1", month=6)

    assert resolve_period(selector).months == frozenset({6})
    assert includes(date(2025, 6, 15), selector) is True
    assert includes(date(2025, 2, 1), selector) is False


@pytest.mark.parametrize(
    ("selector", "field"),
    [
        (FiscalPeriodSelector(year="20x5"), "year"),
        (FiscalPeriodSelector(year=""), "year"),
        (FiscalPeriodSelector(year="2025", quarter="Q5"), "quarter"),
        (FiscalPeriodSelector(year="2025", month=13), "month"),
        (FiscalPeriodSelector(year="2025", month="June"), "month"),
        (FiscalPeriodSelector(year="2025\u00b2"), "year"),
        (FiscalPeriodSelector(year="2025", month=6.7), "month"),
        (FiscalPeriodSelector(year="2025", month=float("inf")), "month"),
    ],
)
def test_invalid_selector_reports_field(selector, field) -> None:
    """Invalid selector values should name the offending field."""
    with pytest.raises(InvalidSelectorError) as excinfo:
        resolve_period(selector)

    assert excinfo.value.field == field


def test_integral_float_month_is_accepted() -> None:
    """A float month with no fractional part resolves like the integer."""
    period = resolve_period(FiscalPeriodSelector(year="2025", month=6.0))

    assert period.months == frozenset({6})


def test_includes_accepts_datetimes_and_checks_year() -> None:
    """Datetimes compare on their date and other years are excluded."""
    selector = FiscalPeriodSelector(year="2025", month=3)

    assert includes(datetime(2025, 3, 31, 23, 59), selector) is True
    assert includes(date(2024, 3, 10), selector) is False


def test_includes_rejects_non_date_values() -> None:
    """Strings are not dates; classification must parse them first."""
    with pytest.raises(MalformedInputError):
        includes("2025-03-01", FiscalPeriodSelector(year="2025"))


def test_filter_by_period_skips_undated_records() -> None:
    """Records without a usable date never belong to a period."""
    records = [
        SimpleNamespace(record_date=date(2025, 1, 5), name="jan"),
        SimpleNamespace(record_date=None, name="undated"),
        SimpleNamespace(record_date=date(2025, 4, 1), name="apr"),
    ]

    result = filter_by_period(records, FiscalPeriodSelector(year="2025", quarter="Q1"))

    assert [record.name for record in result] == ["jan"]


def test_quarter_of_and_period_bounds() -> None:
    """Quarter lookup and inclusive bounds follow the calendar."""
    assert quarter_of(date(2025, 1, 1)) == 1
    assert quarter_of(date(2025, 12, 31)) == 4
    assert period_bounds(FiscalPeriodSelector(year="2024", quarter="Q1")) == (
        date(2024, 1, 1),
        date(2024, 3, 31),
    )
    assert period_bounds(FiscalPeriodSelector(year="2024", month=2)) == (
        date(2024, 2, 1),
        date(2024, 2, 29),
    )


def test_available_years_includes_current_year_newest_first() -> None:
    """Year options list distinct record years plus the current year."""
    years = available_years(
        [date(2023, 5, 1), None, date(2021, 1, 1), date(2023, 9, 9)],
        today=date(2025, 1, 1),
    )

    assert years == [2025, 2023, 2021]


def test_selector_from_query_normalizes_values() -> None:
    """Query values are upper-cased and month strings become integers."""
    selector = FiscalPeriodSelector.from_query(2025, "q2", "06")

    assert selector == FiscalPeriodSelector(year="2025", quarter="Q2", month=6)
    assert selector.label == "2025-06"
    assert FiscalPeriodSelector.from_query("2025", "ALL", None).label == "2025"
    assert FiscalPeriodSelector.from_query("2025", "Q3", "all").label == "2025 Q3"
