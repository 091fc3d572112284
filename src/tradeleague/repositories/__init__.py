"""Repository layer - data access abstractions and implementations."""

from tradeleague.repositories.protocols import (
    AccountRepository,
    PositionRepository,
    TransactionRepository,
    UnitOfWork,
)

__all__ = [
    "AccountRepository",
    "PositionRepository",
    "TransactionRepository",
    "UnitOfWork",
]
