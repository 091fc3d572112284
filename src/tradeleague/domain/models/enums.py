"""Enumerations for domain models."""

from enum import Enum


class TradeSide(str, Enum):
    """Direction of a ledger transaction."""

    BUY = "BUY"
    SELL = "SELL"
