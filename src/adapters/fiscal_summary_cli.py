"""CLI adapter printing the fiscal summary of a period."""

import os

from src.domain.errors import InvalidSelectorError
from src.domain.models import FiscalPeriodSelector
from src.domain.services import format_currency
from src.infrastructure.container import (
    build_currency_symbol,
    build_dashboard_summary_use_case,
)
from src.infrastructure.logging.logger import get_app_logger

SUMMARY_LINES = (
    ("Ingresos", "income"),
    ("Gastos", "expenses"),
    ("Gastos deducibles", "gastosDeducibles"),
    ("IVA repercutido", "ivaRepercutido"),
    ("IVA soportado", "ivaSoportado"),
    ("IVA deducible", "ivaDeducible"),
    ("IVA a liquidar", "ivaALiquidar"),
    ("IRPF retenido", "irpfRetenidoIngresos"),
    ("IRPF gastos", "irpfGastos"),
    ("Resultado fiscal", "resultadoFiscal"),
    ("Resultado final", "finalResult"),
    ("Facturas pendientes", "pendingInvoices"),
    ("Presupuestos pendientes", "pendingQuotes"),
)


def main() -> None:
    """Print the rounded dashboard figures for the configured period."""
    logger = get_app_logger()
    user_id = os.getenv("FISCAL_USER_ID")
    if not user_id:
        logger.warning("FISCAL_USER_ID is required to compute a summary.")
        return

    selector = FiscalPeriodSelector.from_query(
        os.getenv("FISCAL_YEAR", ""),
        os.getenv("FISCAL_QUARTER"),
        os.getenv("FISCAL_MONTH"),
    )
    use_case = build_dashboard_summary_use_case()
    try:
        summary = use_case.execute(user_id, selector)
    except InvalidSelectorError as exc:
        logger.error(str(exc))
        return

    payload = summary.as_payload(rounded=True)
    symbol = build_currency_symbol()
    print(f"Resumen fiscal {selector.label} (user={user_id})")
    for label, key in SUMMARY_LINES:
        print(f"{label}: {format_currency(payload[key], symbol)}")
    print(
        f"Facturas: emitidas={summary.issued_count}, "
        f"pagadas={summary.paid_count}, vencidas={summary.overdue_count}, "
        f"pendientes={payload['pendingCount']}"
    )
    print(
        f"Presupuestos: total={summary.quotes.total}, "
        f"pendientes={summary.pending_quotes_count}, "
        f"aceptados={summary.quotes.accepted}, "
        f"rechazados={summary.quotes.rejected}"
    )


if __name__ == "__main__":  # pragma: no cover
    main()
