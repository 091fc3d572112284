"""Domain layer - pure business models with no external dependencies."""

from tradeleague.domain.models import (
    Account,
    Position,
    Transaction,
    TradeSide,
)

__all__ = [
    "Account",
    "Position",
    "Transaction",
    "TradeSide",
]
