"""SQLAlchemy repository implementations."""

from tradeleague.repositories.sqlalchemy.database import (
    get_engine,
    get_session_factory,
    get_db,
    init_db,
    reset_database,
    Base,
)
from tradeleague.repositories.sqlalchemy.account_repo import SqlAlchemyAccountRepository
from tradeleague.repositories.sqlalchemy.position_repo import SqlAlchemyPositionRepository
from tradeleague.repositories.sqlalchemy.transaction_repo import SqlAlchemyTransactionRepository
from tradeleague.repositories.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork

__all__ = [
    "get_engine",
    "get_session_factory",
    "get_db",
    "init_db",
    "reset_database",
    "Base",
    "SqlAlchemyAccountRepository",
    "SqlAlchemyPositionRepository",
    "SqlAlchemyTransactionRepository",
    "SqlAlchemyUnitOfWork",
]
