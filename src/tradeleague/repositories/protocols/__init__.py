"""Repository protocol definitions (interfaces)."""

from tradeleague.repositories.protocols.account_repo import AccountRepository
from tradeleague.repositories.protocols.position_repo import PositionRepository
from tradeleague.repositories.protocols.transaction_repo import TransactionRepository
from tradeleague.repositories.protocols.unit_of_work import UnitOfWork

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "UnitOfWork",
]
