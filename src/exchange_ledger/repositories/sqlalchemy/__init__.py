"""SQLAlchemy repository implementations."""

from exchange_ledger.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from exchange_ledger.repositories.sqlalchemy.transaction_repo import SqlAlchemyExchangeRepository

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyExchangeRepository",
]
