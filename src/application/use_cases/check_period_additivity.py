"""Use case to check that quarter aggregates add up to the year."""

from dataclasses import dataclass
from decimal import Decimal

from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.application.use_cases.fiscal_records import load_fiscal_records
from src.domain.constants import QUARTER_MONTHS
from src.domain.models import PERIOD_FIELDS, AggregateResult, FiscalPeriodSelector
from src.domain.services import aggregate_period, resolve_period
from src.infrastructure.logging.logger import get_app_logger

DEFAULT_TOLERANCE = Decimal("0.01")


@dataclass(frozen=True)
class FieldDeviation:
    """Difference between the year value and the sum of its parts."""

    field: str
    year_value: Decimal
    parts_value: Decimal
    delta: Decimal


@dataclass(frozen=True)
class PeriodAdditivityReport:
    """Year aggregate compared with its quarters and months.

    Attributes:
        year: Checked year.
        year_aggregate: Aggregate for the whole year.
        quarter_aggregates: Aggregates keyed by quarter label.
        quarters_total: Sum of the quarter aggregates.
        months_total: Sum of the twelve month aggregates.
        deviations: Fields whose parts differ from the year beyond tolerance.
    """

    year: int
    year_aggregate: AggregateResult
    quarter_aggregates: dict[str, AggregateResult]
    quarters_total: AggregateResult
    months_total: AggregateResult
    deviations: list[FieldDeviation]

    @property
    def is_consistent(self) -> bool:
        return not self.deviations


class CheckPeriodAdditivityUseCase:
    """Verify that period totals are additive for a user and year."""

    def __init__(
        self,
        records_repository: FiscalRecordsRepositoryPort,
        logger=None,
        tolerance: Decimal = DEFAULT_TOLERANCE,
    ) -> None:
        """Initialize the use case.

        Args:
            records_repository: Port providing the raw records of a user.
            logger: Optional logger compatible with logging.Logger-like API.
            tolerance: Largest accepted absolute difference per field.
        """
        self._records_repository = records_repository
        self._logger = logger or get_app_logger()
        self._tolerance = tolerance

    def execute(self, user_id: str, year: int | str) -> PeriodAdditivityReport:
        """Return the additivity report for a year.

        Args:
            user_id: Owner of the records.
            year: Year to check.

        Returns:
            PeriodAdditivityReport: Aggregates and any deviations found.

        Raises:
            InvalidSelectorError: If the year is not a valid year.
        """
        year_selector = FiscalPeriodSelector(year=str(year))
        resolved_year = resolve_period(year_selector).year
        records = load_fiscal_records(
            self._records_repository,
            user_id,
            self._logger,
        ).records

        year_aggregate = aggregate_period(records, year_selector)
        quarter_aggregates = {
            quarter: aggregate_period(
                records,
                FiscalPeriodSelector(year=str(resolved_year), quarter=quarter),
            )
            for quarter in QUARTER_MONTHS
        }
        quarters_total = _sum_aggregates(quarter_aggregates.values())
        months_total = _sum_aggregates(
            aggregate_period(
                records,
                FiscalPeriodSelector(year=str(resolved_year), month=month),
            )
            for month in range(1, 13)
        )

        deviations = self._deviations(year_aggregate, quarters_total)
        seen = {deviation.field for deviation in deviations}
        deviations.extend(
            deviation
            for deviation in self._deviations(year_aggregate, months_total)
            if deviation.field not in seen
        )
        for deviation in deviations:
            self._logger.warning(
                f"Period totals not additive for {resolved_year}: "
                f"{deviation.field} year={deviation.year_value} "
                f"parts={deviation.parts_value} delta={deviation.delta}"
            )
        if not deviations:
            self._logger.info(f"Period totals additive for {resolved_year}")

        return PeriodAdditivityReport(
            year=resolved_year,
            year_aggregate=year_aggregate,
            quarter_aggregates=quarter_aggregates,
            quarters_total=quarters_total,
            months_total=months_total,
            deviations=deviations,
        )

    def _deviations(
        self,
        whole: AggregateResult,
        parts: AggregateResult,
    ) -> list[FieldDeviation]:
        deviations: list[FieldDeviation] = []
        for field in PERIOD_FIELDS:
            year_value = getattr(whole, field)
            parts_value = getattr(parts, field)
            delta = parts_value - year_value
            if abs(delta) > self._tolerance:
                deviations.append(
                    FieldDeviation(
                        field=field,
                        year_value=year_value,
                        parts_value=parts_value,
                        delta=delta,
                    )
                )
        return deviations


def _sum_aggregates(aggregates) -> AggregateResult:
    total = AggregateResult()
    for item in aggregates:
        total = total + item
    return total


__all__ = [
    "FieldDeviation",
    "PeriodAdditivityReport",
    "CheckPeriodAdditivityUseCase",
]
