"""Database ports for the fiscal engine.

This module defines the application-layer protocol for accessing the
database engine. Infrastructure implementations are expected to provide
concrete adapters that satisfy this port.
"""

from typing import Protocol

from sqlalchemy.engine import Engine


class DatabaseEnginePort(Protocol):
    """Port exposing the engine of the invoicing database.

    Repositories depend on this protocol instead of concrete database
    drivers or configuration details.
    """

    def get_fiscal_engine(self) -> Engine:
        """Get the engine for the invoicing database.

        Returns:
            Engine: SQLAlchemy engine connected to the records backend.
        """


__all__ = ["DatabaseEnginePort"]
