"""Valuation service: net worth of one account from ledger, cash and quotes."""

import logging
from decimal import Decimal
from typing import Optional

from tradeleague.core.timezone import now_eastern
from tradeleague.domain.models import Account, Position
from tradeleague.domain.views import (
    NetWorthView,
    PortfolioView,
    PositionView,
    Quote,
    QuoteBatch,
)
from tradeleague.services.ledger_service import PositionLedger
from tradeleague.services.price_cache import PriceCache

logger = logging.getLogger(__name__)

ZERO = Decimal("0")
CENT = Decimal("0.01")


class ValuationService:
    """
    Point-in-time valuation of accounts.

    Cash and positions are read as one snapshot under the account lock;
    quotes are fetched afterwards so a slow provider never holds the lock.
    A symbol without a quote counts as 0 and is reported in
    ``missing_symbols`` instead of failing the valuation.
    """

    def __init__(self, ledger: PositionLedger, price_cache: PriceCache):
        self._ledger = ledger
        self._prices = price_cache

    def value_of(self, account_id: str) -> NetWorthView:
        """Cash, portfolio value and net worth for one account."""
        account, positions = self._ledger.snapshot(account_id)
        quotes = self._quotes_for(positions)
        return self.value_snapshot(account, positions, quotes)

    def value_snapshot(
        self,
        account: Account,
        positions: list[Position],
        quotes: QuoteBatch,
    ) -> NetWorthView:
        """Value an already-read snapshot against already-fetched quotes."""
        portfolio_value = ZERO
        total_invested = ZERO
        missing: list[str] = []

        for position in positions:
            total_invested += position.total_invested
            quote = quotes.quotes.get(position.symbol)
            if quote is None:
                missing.append(position.symbol)
                continue
            portfolio_value += position.quantity * quote.price

        if missing:
            logger.warning(
                "Valuing %s without quotes for %s (counted as 0)",
                account.account_id, ", ".join(missing),
            )

        return NetWorthView(
            account_id=account.account_id,
            cash=account.cash_balance,
            portfolio_value=portfolio_value,
            net_worth=account.cash_balance + portfolio_value,
            total_invested=total_invested,
            missing_symbols=missing,
            as_of=now_eastern(),
        )

    def get_portfolio(self, account_id: str) -> PortfolioView:
        """
        Holdings enriched with current prices.

        Returns each open position with last price, market value, unrealized
        P/L, P/L percent and weight in the account (cash included).
        """
        account, positions = self._ledger.snapshot(account_id)
        quotes = self._quotes_for(positions)
        worth = self.value_snapshot(account, positions, quotes)

        views = [
            self._position_view(p, quotes.quotes.get(p.symbol), worth.net_worth)
            for p in positions
        ]
        # Largest holdings first, unpriced ones last
        views.sort(key=lambda v: (v.market_value is None, -(v.market_value or ZERO), v.symbol))

        return PortfolioView(
            account_id=account.account_id,
            positions=views,
            cash=worth.cash,
            portfolio_value=worth.portfolio_value,
            net_worth=worth.net_worth,
            total_invested=worth.total_invested,
            missing_symbols=worth.missing_symbols,
            as_of=worth.as_of,
        )

    def _quotes_for(self, positions: list[Position]) -> QuoteBatch:
        if not positions:
            return QuoteBatch()
        return self._prices.get_prices(p.symbol for p in positions)

    @staticmethod
    def _position_view(
        position: Position,
        quote: Optional[Quote],
        net_worth: Decimal,
    ) -> PositionView:
        view = PositionView(
            symbol=position.symbol,
            quantity=position.quantity,
            average_cost=position.average_cost,
            total_invested=position.total_invested,
        )
        if quote is None:
            return view

        market_value = position.quantity * quote.price
        pnl = market_value - position.total_invested
        view.last_price = quote.price
        view.market_value = market_value
        view.unrealized_pnl = pnl
        if position.total_invested:
            view.unrealized_pnl_percent = (pnl / position.total_invested * 100).quantize(CENT)
        if net_worth:
            view.weight_percent = (market_value / net_worth * 100).quantize(CENT)
        return view
