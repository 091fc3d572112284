"""Analysis service for portfolio analytics."""

from decimal import Decimal

from tradeleague.domain.views import (
    AllocationItem,
    AllocationView,
    PerformanceView,
    PositionView,
)
from tradeleague.services.valuation_service import ValuationService

CENT = Decimal("0.01")

# Static symbol -> sector table; anything unlisted is "Other"
SECTOR_MAP: dict[str, str] = {
    "AAPL": "Technology",
    "MSFT": "Technology",
    "GOOGL": "Technology",
    "META": "Technology",
    "NVDA": "Technology",
    "AMZN": "Consumer Cyclical",
    "TSLA": "Automotive",
    "JPM": "Financial Services",
    "BAC": "Financial Services",
    "V": "Financial Services",
    "MA": "Financial Services",
    "XOM": "Energy",
    "CVX": "Energy",
    "JNJ": "Healthcare",
    "PFE": "Healthcare",
    "UNH": "Healthcare",
    "PG": "Consumer Defensive",
    "KO": "Consumer Defensive",
    "WMT": "Consumer Defensive",
}
DEFAULT_SECTOR = "Other"


def sector_for(symbol: str) -> str:
    return SECTOR_MAP.get(symbol.upper(), DEFAULT_SECTOR)


def _holding_value(position: PositionView) -> Decimal:
    # Unpriced holdings are weighted at cost
    if position.market_value is not None:
        return position.market_value
    return position.total_invested


class AnalysisService:
    """
    Read-only projections over an account's holdings.

    Computes symbol and sector allocation, a diversification score and
    aggregate gain/loss. Nothing here is stored.
    """

    def __init__(self, valuation: ValuationService):
        self._valuation = valuation

    def allocation(self, account_id: str) -> AllocationView:
        """
        Calculate portfolio allocation by symbol.

        Returns market value and percentage for each holding, largest first.
        """
        portfolio = self._valuation.get_portfolio(account_id)
        items = [
            AllocationItem(
                name=p.symbol,
                market_value=_holding_value(p).quantize(CENT),
                percentage=Decimal("0"),
            )
            for p in portfolio.positions
        ]
        return self._finish(items, portfolio.as_of)

    def sector_allocation(self, account_id: str) -> AllocationView:
        """Group holdings by sector; ``positions`` counts holdings per sector."""
        portfolio = self._valuation.get_portfolio(account_id)
        sectors: dict[str, AllocationItem] = {}
        for position in portfolio.positions:
            name = sector_for(position.symbol)
            item = sectors.get(name)
            if item is None:
                sectors[name] = AllocationItem(
                    name=name,
                    market_value=_holding_value(position),
                    percentage=Decimal("0"),
                )
            else:
                item.market_value += _holding_value(position)
                item.positions += 1

        items = list(sectors.values())
        for item in items:
            item.market_value = item.market_value.quantize(CENT)
        return self._finish(items, portfolio.as_of)

    def diversification_score(self, account_id: str) -> int:
        """10 points per open holding, capped at 100."""
        portfolio = self._valuation.get_portfolio(account_id)
        return self._score(len(portfolio.positions))

    def performance(self, account_id: str) -> PerformanceView:
        """
        Aggregate unrealized gain/loss over open positions.

        Best and worst performers are ranked by unrealized P/L percent among
        priced holdings.
        """
        portfolio = self._valuation.get_portfolio(account_id)
        if not portfolio.positions:
            return PerformanceView()

        priced = [p for p in portfolio.positions if p.unrealized_pnl_percent is not None]
        total_invested = sum((p.total_invested for p in portfolio.positions), Decimal("0"))
        market_value = sum((_holding_value(p) for p in portfolio.positions), Decimal("0"))
        gain_loss = market_value - total_invested

        gain_loss_percent = Decimal("0")
        if total_invested:
            gain_loss_percent = (gain_loss / total_invested * 100).quantize(CENT)

        best = worst = None
        if priced:
            # Symbol as secondary key keeps ties deterministic
            ordered = sorted(priced, key=lambda p: (-p.unrealized_pnl_percent, p.symbol))
            best = ordered[0].symbol
            worst = sorted(priced, key=lambda p: (p.unrealized_pnl_percent, p.symbol))[0].symbol

        return PerformanceView(
            total_invested=total_invested.quantize(CENT),
            market_value=market_value.quantize(CENT),
            gain_loss=gain_loss.quantize(CENT),
            gain_loss_percent=gain_loss_percent,
            best_performer=best,
            worst_performer=worst,
            diversification_score=self._score(len(portfolio.positions)),
        )

    @staticmethod
    def _score(holdings: int) -> int:
        return min(holdings * 10, 100)

    @staticmethod
    def _finish(items: list[AllocationItem], as_of) -> AllocationView:
        total_value = sum((item.market_value for item in items), Decimal("0"))
        if total_value != Decimal("0"):
            for item in items:
                item.percentage = (item.market_value / total_value * 100).quantize(CENT)

        # Sort by market value descending
        items.sort(key=lambda x: (-x.market_value, x.name))

        return AllocationView(
            items=items,
            total_value=total_value.quantize(CENT),
            as_of=as_of,
        )
