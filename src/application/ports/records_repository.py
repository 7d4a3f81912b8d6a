"""Port for the fiscal records of a user."""

from typing import Protocol

from src.domain.models import Category, Invoice, Quote, Transaction


class FiscalRecordsRepositoryPort(Protocol):
    """Port exposing the raw records needed for fiscal aggregation.

    Implementations return every record of the user; period filtering is a
    domain concern.
    """

    def fetch_invoices(self, user_id: str) -> list[Invoice]:
        """Return the invoices issued by the user."""

    def fetch_transactions(self, user_id: str) -> list[Transaction]:
        """Return the income and expense transactions of the user."""

    def fetch_categories(self, user_id: str) -> list[Category]:
        """Return the transaction categories of the user."""

    def fetch_quotes(self, user_id: str) -> list[Quote]:
        """Return the quotes issued by the user."""


__all__ = ["FiscalRecordsRepositoryPort"]
