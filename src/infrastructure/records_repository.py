"""SQLAlchemy-backed repository for the fiscal records of a user."""

from sqlalchemy import text

from src.application.ports.database import DatabaseEnginePort
from src.application.ports.records_repository import FiscalRecordsRepositoryPort
from src.domain.models import Category, Invoice, Quote, Transaction


class SqlAlchemyFiscalRecordsRepository(FiscalRecordsRepositoryPort):
    """Repository reading invoices, transactions, categories and quotes.

    Numeric columns are passed through untouched; the classifier owns
    coercion and reports malformed values.
    """

    def __init__(self, db_port: DatabaseEnginePort) -> None:
        """Initialize the repository.

        Args:
            db_port: Port providing access to the invoicing engine.
        """
        self._db_port = db_port

    def fetch_invoices(self, user_id: str) -> list[Invoice]:
        """Return the invoices of a user with their client names."""
        query = text(
            """
            SELECT i.id, i.invoice_number, i.client_id, c.name AS client_name,
                   i.issue_date, i.due_date, i.subtotal, i.tax, i.total,
                   i.additional_taxes, i.status
            FROM invoices i
            LEFT JOIN clients c ON c.id = i.client_id
            WHERE i.user_id = :user_id
            ORDER BY i.issue_date DESC, i.id
            """
        )
        rows = self._fetch_rows(query, user_id)
        return [
            Invoice(
                id=row.id,
                issue_date=row.issue_date,
                client_id=row.client_id,
                subtotal=row.subtotal,
                tax=row.tax,
                total=row.total,
                status=row.status,
                number=row.invoice_number,
                client_name=row.client_name,
                due_date=row.due_date,
                additional_taxes=row.additional_taxes,
            )
            for row in rows
        ]

    def fetch_transactions(self, user_id: str) -> list[Transaction]:
        """Return the income and expense transactions of a user."""
        query = text(
            """
            SELECT id, date, type, amount, category_id, description,
                   additional_taxes, invoice_id
            FROM transactions
            WHERE user_id = :user_id
            ORDER BY date DESC, id
            """
        )
        rows = self._fetch_rows(query, user_id)
        return [
            Transaction(
                id=row.id,
                date=row.date,
                type=row.type,
                amount=row.amount,
                category_id=row.category_id,
                description=row.description,
                additional_taxes=row.additional_taxes,
                invoice_id=row.invoice_id,
            )
            for row in rows
        ]

    def fetch_categories(self, user_id: str) -> list[Category]:
        """Return the categories of a user."""
        query = text(
            """
            SELECT id, name, type
            FROM categories
            WHERE user_id = :user_id
            ORDER BY name
            """
        )
        rows = self._fetch_rows(query, user_id)
        return [
            Category(id=row.id, type=row.type, name=row.name)
            for row in rows
        ]

    def fetch_quotes(self, user_id: str) -> list[Quote]:
        """Return the quotes of a user with their client names."""
        query = text(
            """
            SELECT q.id, q.quote_number, q.client_id, c.name AS client_name,
                   q.issue_date, q.subtotal, q.tax, q.total, q.status
            FROM quotes q
            LEFT JOIN clients c ON c.id = q.client_id
            WHERE q.user_id = :user_id
            ORDER BY q.issue_date DESC, q.id
            """
        )
        rows = self._fetch_rows(query, user_id)
        return [
            Quote(
                id=row.id,
                issue_date=row.issue_date,
                client_id=row.client_id,
                total=row.total,
                status=row.status,
                number=row.quote_number,
                client_name=row.client_name,
                subtotal=row.subtotal,
                tax=row.tax,
            )
            for row in rows
        ]

    def _fetch_rows(self, query, user_id: str):
        engine = self._db_port.get_fiscal_engine()
        with engine.connect() as conn:
            return conn.execute(query, {"user_id": user_id}).all()


__all__ = ["SqlAlchemyFiscalRecordsRepository"]
