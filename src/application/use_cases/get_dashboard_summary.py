"""Use case to compute the fiscal dashboard for a period."""

from datetime import date

from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.application.ports.summary_cache import SummaryCachePort
from src.application.use_cases.fiscal_records import load_fiscal_records
from src.domain.models import DashboardSummary, FiscalPeriodSelector
from src.domain.services import (
    aggregate_period,
    build_dashboard_summary,
    resolve_period,
)
from src.infrastructure.logging.logger import get_app_logger


class GetDashboardSummaryUseCase:
    """Compute income, expense, VAT and IRPF figures for a fiscal window."""

    def __init__(
        self,
        records_repository: FiscalRecordsRepositoryPort,
        cache: SummaryCachePort | None = None,
        logger=None,
        max_records: int | None = None,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the raw records of a user.
            cache: Optional summary cache shared with the invalidation hook.
            logger: Optional logger compatible with logging.Logger-like API.
            max_records: Optional soft limit on records per user.
        """
        self._records_repository = records_repository
        self._cache = cache
        self._logger = logger or get_app_logger()
        self._max_records = max_records

    def execute(
        self,
        user_id: str,
        selector: FiscalPeriodSelector,
        today: date | None = None,
    ) -> DashboardSummary:
        """Return the dashboard summary for the selected window.

        Args:
            user_id: Owner of the records.
            selector: Requested fiscal window.
            today: Optional reference date for the year options.

        Returns:
            DashboardSummary: Aggregate, quote stats and breakdowns.

        Raises:
            InvalidSelectorError: If the selector cannot be resolved.
        """
        resolve_period(selector)
        reference = today or date.today()
        if self._cache is None:
            return self._compute(user_id, selector, reference)
        return self._cache.get_or_compute(
            (user_id, ("summary", selector, reference)),
            lambda: self._compute(user_id, selector, reference),
        )

    def _compute(
        self,
        user_id: str,
        selector: FiscalPeriodSelector,
        today: date,
    ) -> DashboardSummary:
        record_set = load_fiscal_records(
            self._records_repository,
            user_id,
            self._logger,
            self._max_records,
        )
        result = aggregate_period(record_set.records, selector)
        if result.record_count == 0:
            self._logger.warning(
                f"No records for user {user_id} in {selector.label}"
            )
        summary = build_dashboard_summary(
            selector,
            result,
            record_set.records,
            record_set.quotes,
            today=today,
            logger=self._logger,
        )
        self._logger.info(
            f"Dashboard computed for {selector.label}: "
            f"income={result.income}, expenses={result.expenses}, "
            f"iva_a_liquidar={result.iva_a_liquidar}"
        )
        return summary


__all__ = ["GetDashboardSummaryUseCase", "DashboardSummary"]
