"""Domain models package."""

from tradeleague.domain.models.enums import TradeSide
from tradeleague.domain.models.account import Account
from tradeleague.domain.models.position import Position
from tradeleague.domain.models.transaction import Transaction

__all__ = [
    "TradeSide",
    "Account",
    "Position",
    "Transaction",
]
