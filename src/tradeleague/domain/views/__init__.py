"""View models for service outputs."""

from tradeleague.domain.views.portfolio import (
    Quote,
    QuoteBatch,
    PositionView,
    NetWorthView,
    PortfolioView,
    LeaderboardEntry,
    RefreshResult,
    RefreshStatus,
    AllocationItem,
    AllocationView,
    PerformanceView,
)

__all__ = [
    "Quote",
    "QuoteBatch",
    "PositionView",
    "NetWorthView",
    "PortfolioView",
    "LeaderboardEntry",
    "RefreshResult",
    "RefreshStatus",
    "AllocationItem",
    "AllocationView",
    "PerformanceView",
]
