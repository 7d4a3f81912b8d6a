"""Use case to build the Libro de Registros for a period."""

from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.application.ports.summary_cache import SummaryCachePort
from src.application.use_cases.fiscal_records import load_fiscal_records
from src.domain.models import FiscalPeriodSelector, LedgerExport
from src.domain.services import (
    aggregate_period,
    build_ledger_export,
    resolve_period,
)
from src.domain.services.formatting import DEFAULT_SYMBOL
from src.infrastructure.logging.logger import get_app_logger


class GetLedgerExportUseCase:
    """Build display-ready record lists and totals for a fiscal window."""

    def __init__(
        self,
        records_repository: FiscalRecordsRepositoryPort,
        cache: SummaryCachePort | None = None,
        logger=None,
        max_records: int | None = None,
        currency_symbol: str = DEFAULT_SYMBOL,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the raw records of a user.
            cache: Optional summary cache shared with the invalidation hook.
            logger: Optional logger compatible with logging.Logger-like API.
            max_records: Optional soft limit on records per user.
            currency_symbol: Symbol used in the display amounts.
        """
        self._records_repository = records_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._max_records = max_records
        self._currency_symbol = currency_symbol

    def execute(
        self,
        user_id: str,
        selector: FiscalPeriodSelector,
    ) -> LedgerExport:
        """Return the ledger export for the selected window.

        Args:
            user_id: Owner of the records.
            selector: Requested fiscal window.

        Returns:
            LedgerExport: Filtered rows and rounded totals.

        Raises:
            InvalidSelectorError: If the selector cannot be resolved.
        """
        resolve_period(selector)
        if self._cache is None:
            return self._compute(user_id, selector)
        return self._cache.get_or_compute(
            (user_id, ("ledger", selector)),
            lambda: self._compute(user_id, selector),
        )

    def _compute(
        self,
        user_id: str,
        selector: FiscalPeriodSelector,
    ) -> LedgerExport:
        record_set = load_fiscal_records(
            self._records_repository,
            user_id,
            self._logger,
            self._max_records,
        )
        export = build_ledger_export(
            selector,
            record_set.invoices,
            record_set.transactions,
            record_set.quotes,
            record_set.records,
            aggregate_period(record_set.records, selector),
            logger=self._logger,
            symbol=self._currency_symbol,
        )
        self._logger.info(
            f"Ledger export built for {export.period_label}: "
            f"{len(export.invoices)} invoices, "
            f"{len(export.transactions)} transactions, "
            f"{len(export.quotes)} quotes"
        )
        return export


__all__ = ["GetLedgerExportUseCase", "LedgerExport"]
