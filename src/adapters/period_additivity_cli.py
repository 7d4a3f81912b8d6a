"""CLI adapter checking that quarter totals add up to the year."""

import os

from src.domain.errors import InvalidSelectorError
from src.infrastructure.container import build_period_additivity_use_case
from src.infrastructure.logging.logger import get_app_logger


def main() -> None:
    """Print the quarter-vs-year comparison for the configured year."""
    logger = get_app_logger()
    user_id = os.getenv("FISCAL_USER_ID")
    if not user_id:
        logger.warning("FISCAL_USER_ID is required to run the check.")
        return
    year = os.getenv("FISCAL_YEAR", "")

    use_case = build_period_additivity_use_case()
    try:
        report = use_case.execute(user_id, year)
    except InvalidSelectorError as exc:
        logger.error(str(exc))
        return

    print(f"Period additivity check (user={user_id}, year={report.year})")
    for quarter, result in report.quarter_aggregates.items():
        print(
            f"{quarter}: income={result.income}, expenses={result.expenses}, "
            f"iva_a_liquidar={result.iva_a_liquidar}"
        )
    print(
        f"Year: income={report.year_aggregate.income}, "
        f"expenses={report.year_aggregate.expenses}, "
        f"iva_a_liquidar={report.year_aggregate.iva_a_liquidar}"
    )
    if report.is_consistent:
        print("OK: quarters and months add up to the year.")
        return
    for deviation in report.deviations:
        print(
            f"MISMATCH {deviation.field}: year={deviation.year_value}, "
            f"parts={deviation.parts_value}, delta={deviation.delta}"
        )


if __name__ == "__main__":  # pragma: no cover
    main()
