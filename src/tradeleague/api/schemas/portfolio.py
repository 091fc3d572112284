"""Pydantic schemas for portfolio and analysis endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class PositionResponse(BaseModel):
    """Response schema for a single holding."""

    model_config = {"from_attributes": True}

    symbol: str
    quantity: int
    average_cost: Decimal
    total_invested: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_pnl_percent: Optional[Decimal] = None
    weight_percent: Optional[Decimal] = None


class PortfolioResponse(BaseModel):
    """Response schema for holdings plus valuation."""

    model_config = {"from_attributes": True}

    account_id: str
    positions: list[PositionResponse]
    cash: Decimal
    portfolio_value: Decimal
    net_worth: Decimal
    total_invested: Decimal
    missing_symbols: list[str]
    as_of: Optional[datetime] = None


class NetWorthResponse(BaseModel):
    """Response schema for a point-in-time valuation."""

    model_config = {"from_attributes": True}

    account_id: str
    cash: Decimal
    portfolio_value: Decimal
    net_worth: Decimal
    total_invested: Decimal
    missing_symbols: list[str]
    as_of: Optional[datetime] = None


class AllocationItemResponse(BaseModel):
    """Response schema for a single allocation item."""

    model_config = {"from_attributes": True}

    name: str
    market_value: Decimal
    percentage: Decimal
    positions: int


class AllocationResponse(BaseModel):
    """Response schema for allocation breakdown."""

    model_config = {"from_attributes": True}

    items: list[AllocationItemResponse]
    total_value: Decimal
    as_of: Optional[datetime] = None


class PerformanceResponse(BaseModel):
    """Response schema for aggregate gain/loss metrics."""

    model_config = {"from_attributes": True}

    total_invested: Decimal
    market_value: Decimal
    gain_loss: Decimal
    gain_loss_percent: Decimal
    best_performer: Optional[str] = None
    worst_performer: Optional[str] = None
    diversification_score: int
