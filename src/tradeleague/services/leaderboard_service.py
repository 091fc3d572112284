"""Leaderboard ranking and the rate-limited bulk quote refresh."""

import logging

from tradeleague.core.cooldown import RefreshCooldown
from tradeleague.domain.models import Account, Position
from tradeleague.domain.views import LeaderboardEntry, RefreshResult, RefreshStatus
from tradeleague.repositories.protocols import AccountRepository, PositionRepository
from tradeleague.services.ledger_service import PositionLedger
from tradeleague.services.price_cache import PriceCache
from tradeleague.services.valuation_service import ValuationService

logger = logging.getLogger(__name__)


class LeaderboardService:
    """
    Ranks every account by net worth.

    Ranking is a read path and never consults the refresh cooldown; only
    ``refresh_all_quotes`` does.
    """

    def __init__(
        self,
        account_repo: AccountRepository,
        position_repo: PositionRepository,
        ledger: PositionLedger,
        valuation: ValuationService,
        price_cache: PriceCache,
        cooldown: RefreshCooldown,
    ):
        self._account_repo = account_repo
        self._position_repo = position_repo
        self._ledger = ledger
        self._valuation = valuation
        self._prices = price_cache
        self._cooldown = cooldown

    def rank(self) -> list[LeaderboardEntry]:
        """
        Value every account and order by net worth.

        Sorted by net worth descending, ties broken by account id ascending;
        rank is the 1-based position in that order.
        """
        snapshots: list[tuple[Account, list[Position]]] = [
            self._ledger.snapshot(account.account_id)
            for account in self._account_repo.list_all()
        ]

        # One batch for every held symbol, so each is fetched at most once
        symbols = sorted({p.symbol for _, positions in snapshots for p in positions})
        quotes = self._prices.get_prices(symbols)

        entries: list[LeaderboardEntry] = []
        for account, positions in snapshots:
            worth = self._valuation.value_snapshot(account, positions, quotes)
            entries.append(
                LeaderboardEntry(
                    account_id=account.account_id,
                    display_name=account.display_name,
                    cash_balance=worth.cash,
                    portfolio_value=worth.portfolio_value,
                    net_worth=worth.net_worth,
                )
            )

        entries.sort(key=lambda e: (-e.net_worth, e.account_id))
        for index, entry in enumerate(entries):
            entry.rank = index + 1
        return entries

    def refresh_all_quotes(self) -> RefreshResult:
        """
        Re-fetch quotes for every symbol held by anyone.

        Raises CooldownActiveError inside the cooldown window. Symbols that
        fail to refresh are reported, not raised; the attempt still starts
        a new window.
        """
        with self._cooldown.claim():
            symbols = self._position_repo.list_open_symbols()
            batch = self._prices.refresh(symbols)

        result = RefreshResult(
            refreshed=sorted(batch.quotes),
            failed=sorted(batch.failed),
            refreshed_at=self._cooldown.last_refreshed_at,
        )
        logger.info(
            "Refreshed %d quotes (%d failed)",
            len(result.refreshed), len(result.failed),
        )
        return result

    def refresh_status(self) -> RefreshStatus:
        remaining = self._cooldown.remaining()
        return RefreshStatus(
            can_refresh=remaining <= 0,
            seconds_until_next=remaining,
            cooldown_seconds=self._cooldown.window_seconds,
            last_refreshed_at=self._cooldown.last_refreshed_at,
        )
