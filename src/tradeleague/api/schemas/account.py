"""Pydantic schemas for account endpoints."""

from datetime import datetime
from decimal import Decimal
from typing import Optional

from pydantic import BaseModel, Field


class AccountCreate(BaseModel):
    """Request schema for creating an account under a generated id."""

    display_name: str = Field(..., min_length=1, max_length=100, description="Public player name")
    initial_cash: Optional[Decimal] = Field(
        default=None,
        ge=0,
        description="Starting cash; defaults to the configured starting cash",
    )


class AccountEnsure(BaseModel):
    """Request schema for idempotent create-on-first-sign-in."""

    display_name: Optional[str] = Field(default=None, min_length=1, max_length=100)
    initial_cash: Optional[Decimal] = Field(default=None, ge=0)


class AccountUpdate(BaseModel):
    """Request schema for a profile update."""

    display_name: str = Field(..., min_length=1, max_length=100)


class AccountResponse(BaseModel):
    """Response schema for a single account."""

    model_config = {"from_attributes": True}

    account_id: str
    display_name: str
    cash_balance: Decimal
    starting_cash: Decimal
    created_at_est: Optional[datetime] = None


class AccountListResponse(BaseModel):
    """Response schema for listing accounts."""

    accounts: list[AccountResponse]
    count: int
