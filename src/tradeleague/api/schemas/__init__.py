"""Pydantic schemas for API request/response."""

from tradeleague.api.schemas.account import (
    AccountCreate,
    AccountEnsure,
    AccountUpdate,
    AccountResponse,
    AccountListResponse,
)
from tradeleague.api.schemas.trade import (
    TradeRequest,
    TransactionResponse,
    TransactionListResponse,
)
from tradeleague.api.schemas.portfolio import (
    PositionResponse,
    PortfolioResponse,
    NetWorthResponse,
    AllocationItemResponse,
    AllocationResponse,
    PerformanceResponse,
)
from tradeleague.api.schemas.quote import QuoteResponse, QuoteBatchResponse
from tradeleague.api.schemas.leaderboard import (
    LeaderboardEntryResponse,
    LeaderboardResponse,
    RefreshResponse,
    RefreshStatusResponse,
)

__all__ = [
    "AccountCreate",
    "AccountEnsure",
    "AccountUpdate",
    "AccountResponse",
    "AccountListResponse",
    "TradeRequest",
    "TransactionResponse",
    "TransactionListResponse",
    "PositionResponse",
    "PortfolioResponse",
    "NetWorthResponse",
    "AllocationItemResponse",
    "AllocationResponse",
    "PerformanceResponse",
    "QuoteResponse",
    "QuoteBatchResponse",
    "LeaderboardEntryResponse",
    "LeaderboardResponse",
    "RefreshResponse",
    "RefreshStatusResponse",
]
