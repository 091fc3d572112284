"""Pydantic schemas for trade and transaction history endpoints."""

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel, Field, field_validator

from tradeleague.domain.models import TradeSide


class TradeRequest(BaseModel):
    """Request schema for a market buy or sell."""

    account_id: str = Field(..., min_length=1, max_length=64, description="Account ID")
    symbol: str = Field(..., min_length=1, max_length=10, description="Ticker symbol")
    quantity: int = Field(..., strict=True, description="Whole number of shares")

    @field_validator("symbol")
    @classmethod
    def uppercase_symbol(cls, v: str) -> str:
        return v.strip().upper()


class TransactionResponse(BaseModel):
    """Response schema for a single settled trade."""

    model_config = {"from_attributes": True}

    txn_id: str
    account_id: str
    symbol: str
    side: TradeSide
    quantity: int
    price: Decimal
    total_value: Decimal
    txn_time_est: datetime


class TransactionListResponse(BaseModel):
    """Response schema for transaction history."""

    transactions: list[TransactionResponse]
    count: int
