"""View models for valuation, portfolio and analysis outputs."""

from dataclasses import dataclass, field
from datetime import datetime
from decimal import Decimal
from typing import Optional


@dataclass(frozen=True)
class Quote:
    """Market quote for a symbol as held by the price cache."""

    symbol: str
    price: Decimal
    as_of: datetime
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    name: Optional[str] = None


@dataclass
class QuoteBatch:
    """Result of a multi-symbol lookup: what succeeded and what did not."""

    quotes: dict[str, Quote] = field(default_factory=dict)
    failed: list[str] = field(default_factory=list)


@dataclass
class PositionView:
    """View model for a single open holding, optionally priced."""

    symbol: str
    quantity: int
    average_cost: Decimal
    total_invested: Decimal
    last_price: Optional[Decimal] = None
    market_value: Optional[Decimal] = None
    unrealized_pnl: Optional[Decimal] = None
    unrealized_pnl_percent: Optional[Decimal] = None
    weight_percent: Optional[Decimal] = None


@dataclass
class NetWorthView:
    """Point-in-time valuation of one account."""

    account_id: str
    cash: Decimal
    portfolio_value: Decimal
    net_worth: Decimal
    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    missing_symbols: list[str] = field(default_factory=list)
    as_of: Optional[datetime] = None


@dataclass
class PortfolioView:
    """Holdings plus valuation for one account."""

    account_id: str
    positions: list[PositionView]
    cash: Decimal
    portfolio_value: Decimal
    net_worth: Decimal
    total_invested: Decimal
    missing_symbols: list[str] = field(default_factory=list)
    as_of: Optional[datetime] = None


@dataclass
class LeaderboardEntry:
    """One ranked row of the leaderboard (derived, never stored)."""

    account_id: str
    display_name: str
    cash_balance: Decimal
    portfolio_value: Decimal
    net_worth: Decimal
    rank: int = 0


@dataclass
class RefreshResult:
    """Outcome of a bulk quote refresh."""

    refreshed: list[str] = field(default_factory=list)
    failed: list[str] = field(default_factory=list)
    refreshed_at: Optional[datetime] = None


@dataclass
class RefreshStatus:
    """Cooldown state of the bulk quote refresh."""

    can_refresh: bool
    seconds_until_next: float
    cooldown_seconds: float
    last_refreshed_at: Optional[datetime] = None


@dataclass
class AllocationItem:
    """Single item in allocation breakdown."""

    name: str
    market_value: Decimal
    percentage: Decimal
    positions: int = 1


@dataclass
class AllocationView:
    """Portfolio allocation breakdown."""

    items: list[AllocationItem] = field(default_factory=list)
    total_value: Decimal = field(default_factory=lambda: Decimal("0"))
    as_of: Optional[datetime] = None


@dataclass
class PerformanceView:
    """Aggregate gain/loss metrics for an account's open positions."""

    total_invested: Decimal = field(default_factory=lambda: Decimal("0"))
    market_value: Decimal = field(default_factory=lambda: Decimal("0"))
    gain_loss: Decimal = field(default_factory=lambda: Decimal("0"))
    gain_loss_percent: Decimal = field(default_factory=lambda: Decimal("0"))
    best_performer: Optional[str] = None
    worst_performer: Optional[str] = None
    diversification_score: int = 0
