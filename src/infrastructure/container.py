"""Composition root for wiring infrastructure adapters."""

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.application.ports.summary_cache import SummaryCachePort
from src.application.use_cases.check_period_additivity import (
    CheckPeriodAdditivityUseCase,
)
from src.application.use_cases.get_dashboard_summary import (
    GetDashboardSummaryUseCase,
)
from src.application.use_cases.get_ledger_export import GetLedgerExportUseCase
from src.application.use_cases.invalidate_summaries import (
    InvalidateSummariesOnMutation,
)
from src.domain.services.formatting import currency_symbol
from src.infrastructure.db import SqlAlchemyDatabaseEngineAdapter
from src.infrastructure.logging.logger import get_app_logger
from src.infrastructure.record_events import InMemoryRecordMutationPublisher
from src.infrastructure.records_repository import (
    SqlAlchemyFiscalRecordsRepository,
)
from src.infrastructure.settings import FiscalSettings
from src.infrastructure.summary_cache import InMemorySummaryCache


def build_database_adapter() -> DatabaseEnginePort:
    """Return the database adapter instance."""
    return SqlAlchemyDatabaseEngineAdapter()


def build_currency_symbol(settings: FiscalSettings | None = None) -> str:
    """Return the display symbol of the configured currency."""
    resolved_settings = settings or FiscalSettings.from_env()
    return currency_symbol(resolved_settings.currency)


def build_records_repository(
    db_port: DatabaseEnginePort | None = None,
) -> FiscalRecordsRepositoryPort:
    """Return the SQLAlchemy records repository."""
    resolved_db = db_port or build_database_adapter()
    return SqlAlchemyFiscalRecordsRepository(resolved_db)


def build_summary_cache(
    settings: FiscalSettings | None = None,
) -> SummaryCachePort | None:
    """Return the summary cache, or None when caching is disabled."""
    resolved_settings = settings or FiscalSettings.from_env()
    if not resolved_settings.cache_enabled:
        return None
    return InMemorySummaryCache(
        ttl_seconds=resolved_settings.cache_ttl_seconds,
        logger=get_app_logger(),
    )


def build_mutation_publisher(
    cache: SummaryCachePort | None,
) -> InMemoryRecordMutationPublisher:
    """Return a publisher that invalidates ``cache`` on every mutation."""
    publisher = InMemoryRecordMutationPublisher(logger=get_app_logger())
    if cache is not None:
        publisher.subscribe(
            InvalidateSummariesOnMutation(cache, logger=get_app_logger())
        )
    return publisher


def build_dashboard_summary_use_case(
    repository: FiscalRecordsRepositoryPort | None = None,
    cache: SummaryCachePort | None = None,
    settings: FiscalSettings | None = None,
) -> GetDashboardSummaryUseCase:
    """Return the dashboard summary use case."""
    resolved_settings = settings or FiscalSettings.from_env()
    return GetDashboardSummaryUseCase(
        records_repository=repository or build_records_repository(),
        cache=cache,
        logger=get_app_logger(),
        max_records=resolved_settings.max_records,
    )


def build_ledger_export_use_case(
    repository: FiscalRecordsRepositoryPort | None = None,
    cache: SummaryCachePort | None = None,
    settings: FiscalSettings | None = None,
) -> GetLedgerExportUseCase:
    """Return the ledger export use case."""
    resolved_settings = settings or FiscalSettings.from_env()
    return GetLedgerExportUseCase(
        records_repository=repository or build_records_repository(),
        cache=cache,
        logger=get_app_logger(),
        max_records=resolved_settings.max_records,
        currency_symbol=build_currency_symbol(resolved_settings),
    )


def build_period_additivity_use_case(
    repository: FiscalRecordsRepositoryPort | None = None,
) -> CheckPeriodAdditivityUseCase:
    """Return the period additivity check use case."""
    return CheckPeriodAdditivityUseCase(
        records_repository=repository or build_records_repository(),
        logger=get_app_logger(),
    )


__all__ = [
    "build_database_adapter",
    "build_currency_symbol",
    "build_records_repository",
    "build_summary_cache",
    "build_mutation_publisher",
    "build_dashboard_summary_use_case",
    "build_ledger_export_use_case",
    "build_period_additivity_use_case",
]
