"""Pydantic schemas for quote endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class QuoteResponse(BaseModel):
    """Response schema for a market quote."""

    model_config = {"from_attributes": True}

    symbol: str
    price: Decimal
    as_of: datetime
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    name: Optional[str] = None


class QuoteBatchResponse(BaseModel):
    """Response schema for a multi-symbol lookup."""

    quotes: list[QuoteResponse]
    failed: list[str]
