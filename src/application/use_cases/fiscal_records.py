"""Shared loading step for fiscal use cases."""

from dataclasses import dataclass

from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.domain.models import Category, FiscalRecord, Invoice, Quote, Transaction
from src.domain.services import classify_all


@dataclass(frozen=True)
class FiscalRecordSet:
    """Raw records of a user together with their classification."""

    invoices: list[Invoice]
    transactions: list[Transaction]
    categories: list[Category]
    quotes: list[Quote]
    records: list[FiscalRecord]


def load_fiscal_records(
    repository: FiscalRecordsRepositoryPort,
    user_id: str,
    logger,
    max_records: int | None = None,
) -> FiscalRecordSet:
    """Fetch and classify every record of a user.

    Args:
        repository: Port providing the raw records.
        user_id: Owner of the records.
        logger: Logger compatible with logging.Logger-like API.
        max_records: Soft limit; exceeding it only logs a warning.

    Returns:
        FiscalRecordSet: Raw and classified records.
    """
    invoices = list(repository.fetch_invoices(user_id))
    transactions = list(repository.fetch_transactions(user_id))
    categories = list(repository.fetch_categories(user_id))
    quotes = list(repository.fetch_quotes(user_id))
    logger.info(
        f"Fetched {len(invoices)} invoices, {len(transactions)} transactions, "
        f"{len(categories)} categories and {len(quotes)} quotes "
        f"for user {user_id}"
    )

    total = len(invoices) + len(transactions)
    if max_records is not None and total > max_records:
        logger.warning(
            f"User {user_id} has {total} records, above the configured "
            f"limit of {max_records}"
        )

    records = classify_all(invoices, transactions, categories, logger)
    flagged = sum(1 for record in records if record.warnings)
    if flagged:
        logger.warning(f"{flagged} records classified with warnings")
    return FiscalRecordSet(
        invoices=invoices,
        transactions=transactions,
        categories=categories,
        quotes=quotes,
        records=records,
    )


__all__ = ["FiscalRecordSet", "load_fiscal_records"]
