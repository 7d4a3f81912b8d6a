"""Fixtures shared by application tests."""

from datetime import date

import pytest

from src.domain.models import Category, Invoice, Quote, Transaction


class FakeRecordsRepository:
    """Repository returning fixed records and counting fetches."""

    def __init__(
        self,
        invoices=None,
        transactions=None,
        categories=None,
        quotes=None,
    ) -> None:
        self.invoices = list(invoices or [])
        self.transactions = list(transactions or [])
        self.categories = list(categories or [])
        self.quotes = list(quotes or [])
        self.fetch_count = 0

    def fetch_invoices(self, user_id: str) -> list[Invoice]:
        self.fetch_count += 1
        return list(self.invoices)

    def fetch_transactions(self, user_id: str) -> list[Transaction]:
        return list(self.transactions)

    def fetch_categories(self, user_id: str) -> list[Category]:
        return list(self.categories)

    def fetch_quotes(self, user_id: str) -> list[Quote]:
        return list(self.quotes)


@pytest.fixture
def records_repository() -> FakeRecordsRepository:
    """Return a repository with one paid invoice and one expense in Q2."""
    return FakeRecordsRepository(
        invoices=[
            Invoice(
                id=1,
                issue_date=date(2025, 5, 10),
                client_id=1,
                subtotal="1000",
                tax="210",
                total="1210",
                status="paid",
                number="F-1",
                client_name="Acme",
            ),
            Invoice(
                id=2,
                issue_date=date(2025, 2, 1),
                client_id=1,
                subtotal="500",
                tax="105",
                total="605",
                status="pending",
            ),
        ],
        transactions=[
            Transaction(
                id=3,
                date=date(2025, 4, 20),
                type="expense",
                amount="200",
                tax_amount="42",
                category_id=1,
            )
        ],
        categories=[Category(id=1, type="expense", name="Material")],
        quotes=[
            Quote(
                id=4,
                issue_date=date(2025, 3, 1),
                client_id=1,
                total="300",
                status="pending",
            )
        ],
    )
