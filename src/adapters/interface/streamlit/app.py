"""Streamlit dashboard entry point."""

from collections.abc import Sequence
from dataclasses import asdict
from datetime import date
from decimal import Decimal
import os

import streamlit as st
import altair as alt

from src.application.use_cases.get_dashboard_summary import DashboardSummary
from src.application.use_cases.get_ledger_export import LedgerExport
from src.domain.constants import ALL_PERIODS, QUARTER_MONTHS
from src.domain.errors import InvalidSelectorError
from src.domain.models import FiscalPeriodSelector
from src.domain.models.reports import CategoryAmount
from src.domain.services import (
    format_currency,
    format_date,
    period_bounds,
    quarter_of,
)
from src.domain.services.formatting import DEFAULT_SYMBOL
from src.infrastructure.container import (
    build_currency_symbol,
    build_dashboard_summary_use_case,
    build_ledger_export_use_case,
)
from src.infrastructure.logging.logger import get_usage_logger

MONTH_NAMES = (
    "Enero",
    "Febrero",
    "Marzo",
    "Abril",
    "Mayo",
    "Junio",
    "Julio",
    "Agosto",
    "Septiembre",
    "Octubre",
    "Noviembre",
    "Diciembre",
)
OTHER_CATEGORY = "Otros"


def _fetch_dashboard_summary(
    user_id: str,
    year: str,
    quarter: str,
    month: int | str,
) -> DashboardSummary:
    """Fetch the dashboard summary for a period."""
    use_case = build_dashboard_summary_use_case()
    selector = FiscalPeriodSelector.from_query(year, quarter, month)
    return use_case.execute(user_id, selector)


@st.cache_data(show_spinner=False)
def _load_dashboard_summary(
    user_id: str,
    year: str,
    quarter: str,
    month: int | str,
    schema_version: int = 1,
) -> DashboardSummary:
    """Cached wrapper around _fetch_dashboard_summary."""
    _ = schema_version
    return _fetch_dashboard_summary(user_id, year, quarter, month)


def _fetch_ledger_export(
    user_id: str,
    year: str,
    quarter: str,
    month: int | str,
) -> LedgerExport:
    """Fetch the Libro de Registros for a period."""
    use_case = build_ledger_export_use_case()
    selector = FiscalPeriodSelector.from_query(year, quarter, month)
    return use_case.execute(user_id, selector)


@st.cache_data(show_spinner=False)
def _load_ledger_export(
    user_id: str,
    year: str,
    quarter: str,
    month: int | str,
    schema_version: int = 1,
) -> LedgerExport:
    """Cached wrapper around _fetch_ledger_export."""
    _ = schema_version
    return _fetch_ledger_export(user_id, year, quarter, month)


def _check_altair_dependencies() -> tuple[bool, str | None]:
    """Check that numpy and pandas are importable for Altair charts.

    Returns:
        Tuple with a success flag and an error message when unavailable.
    """
    import numpy
    import pandas

    if not hasattr(numpy, "ndarray"):
        return False, "numpy is installed but incomplete (missing ndarray)."
    if not hasattr(pandas, "Timestamp"):
        return False, "pandas is installed but incomplete (missing Timestamp)."
    return True, None


def _format_month(value: int | str) -> str:
    """Return the display label of a month option."""
    if value == ALL_PERIODS:
        return "Todo el año"
    return MONTH_NAMES[int(value) - 1]


def _format_quarter(value: str) -> str:
    """Return the display label of a quarter option."""
    if value == ALL_PERIODS:
        return "Todos"
    return f"{value[1]}T"


def _period_caption(selector: FiscalPeriodSelector) -> str:
    """Return the covered date range, plus the quarter for a single month."""
    start, end = period_bounds(selector)
    caption = f"{format_date(start)} - {format_date(end)}"
    if selector.month != ALL_PERIODS:
        caption = f"{caption} ({quarter_of(start)}T)"
    return caption


def _month_options(quarter: str) -> list[int | str]:
    """Return the months selectable under a quarter."""
    if quarter == ALL_PERIODS:
        return [ALL_PERIODS, *range(1, 13)]
    return [ALL_PERIODS, *QUARTER_MONTHS[quarter]]


def _prepare_donut_chart_data(
    categories: Sequence[CategoryAmount],
    max_categories: int = 6,
    symbol: str = DEFAULT_SYMBOL,
) -> tuple[list[dict[str, str | float]], Decimal]:
    """Prepare donut chart data with a Top-N + Other grouping.

    Args:
        categories: Expense totals by category.
        max_categories: Maximum categories to keep before grouping into Other.
        symbol: Currency symbol of the amount labels.

    Returns:
        Tuple with Altair-ready chart data and the total amount.
    """
    sorted_items = sorted(
        categories,
        key=lambda item: item.amount,
        reverse=True,
    )
    top_items = sorted_items[:max_categories]
    other_items = sorted_items[max_categories:]
    other_amount = sum(
        (item.amount for item in other_items),
        start=Decimal("0"),
    )
    if other_items and other_amount != 0:
        top_items = [
            *top_items,
            CategoryAmount(
                category_id=OTHER_CATEGORY,
                category=OTHER_CATEGORY,
                amount=other_amount,
            ),
        ]
    total_amount = sum(
        (item.amount for item in sorted_items),
        start=Decimal("0"),
    )
    data: list[dict[str, str | float]] = []
    for item in top_items:
        share = (
            (item.amount / total_amount) * Decimal("100")
            if total_amount
            else Decimal("0")
        )
        data.append(
            {
                "category": item.category,
                "amount": float(item.amount),
                "amount_label": format_currency(item.amount, symbol),
                "share_label": f"{share:.1f}%",
            }
        )
    return data, total_amount


def _render_expenses_chart(
    summary: DashboardSummary,
    title: str,
    max_categories: int = 6,
    chart_size: int = 320,
    symbol: str = DEFAULT_SYMBOL,
) -> None:
    """Render a donut chart of expenses by category."""
    if not summary.expenses_by_category:
        st.info("No hay gastos categorizados en este periodo.")
        return
    ok, message = _check_altair_dependencies()
    if not ok:
        st.warning(message)
        return
    data, _ = _prepare_donut_chart_data(
        summary.expenses_by_category,
        max_categories=max_categories,
        symbol=symbol,
    )
    hover = alt.selection_point(
        name="hover",
        fields=["category"],
        on="view:mouseover",
        clear="view:mouseout",
        empty=False,
    )
    base = alt.Chart(alt.Data(values=data)).mark_arc(
        innerRadius=chart_size * 0.4,
        cornerRadius=8,
        padAngle=0.02,
    ).encode(
        theta=alt.Theta("amount:Q"),
        color=alt.Color(
            "category:N",
            legend=alt.Legend(orient="bottom", title=None, columns=2),
        ),
        opacity=alt.condition(hover, alt.value(1.0), alt.value(0.35)),
        order=alt.Order("amount:Q", sort="descending"),
        tooltip=[
            alt.Tooltip("category:N"),
            alt.Tooltip("amount_label:N"),
            alt.Tooltip("share_label:N"),
        ],
    )
    hover_text = alt.Chart(alt.Data(values=data)).transform_filter(
        hover
    ).mark_text(
        align="center",
        baseline="middle",
        fontSize=16,
        fontWeight="bold",
    ).encode(
        text="amount_label:N"
    )
    chart = alt.layer(base, hover_text).add_params(hover).properties(
        width=chart_size,
        height=chart_size,
    ).configure_view(stroke=None)
    st.subheader(title)
    st.altair_chart(chart, width="stretch")


def _render_metrics(
    summary: DashboardSummary,
    symbol: str = DEFAULT_SYMBOL,
) -> None:
    """Render the headline figures of the period."""
    result = summary.aggregate
    income_col, expenses_col, result_col = st.columns(3)
    income_col.metric("Ingresos", format_currency(result.income, symbol))
    expenses_col.metric("Gastos", format_currency(result.expenses, symbol))
    result_col.metric("Resultado", format_currency(result.final_result, symbol))

    vat_col, irpf_col, pending_col = st.columns(3)
    vat_col.metric(
        "IVA a liquidar",
        format_currency(result.iva_a_liquidar, symbol),
    )
    irpf_col.metric("IRPF retenido", format_currency(result.irpf_total, symbol))
    pending_col.metric(
        "Pendiente de cobro",
        format_currency(result.pending_invoices, symbol),
        f"{result.pending_count} facturas",
        delta_color="off",
    )
    st.caption(
        "Presupuestos pendientes: "
        f"{format_currency(summary.pending_quotes, symbol)} "
        f"({summary.pending_quotes_count}) · "
        f"Facturas emitidas: {summary.issued_count}, "
        f"pagadas: {summary.paid_count}, vencidas: {summary.overdue_count}"
    )


def _render_ledger(export: LedgerExport) -> None:
    """Render the Libro de Registros tables."""
    st.subheader(f"Libro de registros · {export.period_label}")
    sections = (
        ("Facturas", export.invoices),
        ("Movimientos", export.transactions),
        ("Presupuestos", export.quotes),
    )
    for title, rows in sections:
        st.markdown(f"**{title}** ({len(rows)})")
        if not rows:
            st.caption("Sin registros en este periodo.")
            continue
        st.dataframe(
            [asdict(row) for row in rows],
            width="stretch",
            hide_index=True,
        )


def main() -> None:
    """Render the Streamlit app."""
    st.set_page_config(page_title="Dashboard fiscal", layout="wide")
    st.title("Dashboard fiscal")

    user_id = st.sidebar.text_input(
        "Usuario",
        value=os.getenv("FISCAL_USER_ID", ""),
    ).strip()
    if not user_id:
        st.warning("Introduce un usuario para ver su resumen fiscal.")
        return

    page = st.sidebar.selectbox("Página", ["Resumen", "Libro de registros"])
    today = date.today()
    overview = _load_dashboard_summary(
        user_id,
        str(today.year),
        ALL_PERIODS,
        ALL_PERIODS,
    )
    year = st.sidebar.selectbox("Año", overview.year_options, index=0)
    quarter = st.sidebar.selectbox(
        "Trimestre",
        [ALL_PERIODS, *QUARTER_MONTHS],
        format_func=_format_quarter,
    )
    month = st.sidebar.selectbox(
        "Mes",
        _month_options(quarter),
        format_func=_format_month,
    )
    get_usage_logger().info(
        f"{page} viewed by {user_id} for {year}/{quarter}/{month}"
    )
    symbol = build_currency_symbol()

    try:
        selector = FiscalPeriodSelector.from_query(str(year), quarter, month)
        st.caption(_period_caption(selector))
        if page == "Resumen":
            summary = _load_dashboard_summary(user_id, str(year), quarter, month)
            _render_metrics(summary, symbol)
            _render_expenses_chart(summary, "Gastos por categoría", symbol=symbol)
        else:
            export = _load_ledger_export(user_id, str(year), quarter, month)
            _render_ledger(export)
    except InvalidSelectorError as exc:
        st.error(str(exc))


if __name__ == "__main__":  # pragma: no cover
    main()
