"""Pydantic schemas for leaderboard endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel


class LeaderboardEntryResponse(BaseModel):
    """Response schema for one ranked account."""

    model_config = {"from_attributes": True}

    rank: int
    account_id: str
    display_name: str
    cash_balance: Decimal
    portfolio_value: Decimal
    net_worth: Decimal


class LeaderboardResponse(BaseModel):
    """Response schema for the full ranking."""

    entries: list[LeaderboardEntryResponse]
    count: int


class RefreshResponse(BaseModel):
    """Response schema for a bulk quote refresh."""

    model_config = {"from_attributes": True}

    refreshed: list[str]
    failed: list[str]
    refreshed_at: Optional[datetime] = None


class RefreshStatusResponse(BaseModel):
    """Response schema for the refresh cooldown state."""

    model_config = {"from_attributes": True}

    can_refresh: bool
    seconds_until_next: float
    cooldown_seconds: float
    last_refreshed_at: Optional[datetime] = None
