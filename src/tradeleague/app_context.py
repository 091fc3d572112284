"""Application context for in-process service management.

Holds the process-scoped shared state (quote provider, price cache, account
locks, refresh cooldown) and builds session-bound services on top of it.
The HTTP layer and scripts both go through it.
"""

import threading
import time
from typing import Callable, Optional

from sqlalchemy.orm import Session

from tradeleague.config.settings import Settings, get_settings
from tradeleague.core.cooldown import RefreshCooldown
from tradeleague.core.locks import AccountLockRegistry
from tradeleague.providers import NinjaQuoteProvider, QuoteProvider, StubQuoteProvider
from tradeleague.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUnitOfWork,
)
from tradeleague.services import (
    AccountService,
    AnalysisService,
    LeaderboardService,
    PositionLedger,
    PriceCache,
    TradeValidator,
    TradingService,
    ValuationService,
)


def create_quote_provider(settings: Settings) -> QuoteProvider:
    """Build the configured upstream quote provider."""
    if settings.quote_provider == "ninja":
        if not settings.ninja_api_key:
            raise ValueError("TRADELEAGUE_NINJA_API_KEY is required for the ninja provider")
        return NinjaQuoteProvider(
            api_key=settings.ninja_api_key,
            base_url=settings.ninja_base_url,
            timeout_seconds=settings.quote_fetch_timeout_seconds,
        )
    return StubQuoteProvider()


class AppContext:
    """
    Application context providing in-process access to all services.

    State that must be shared across requests lives here exactly once.
    Services are cheap and built per database session.
    """

    def __init__(
        self,
        settings: Optional[Settings] = None,
        provider: Optional[QuoteProvider] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.settings = settings or get_settings()
        self.provider = provider or create_quote_provider(self.settings)
        self.locks = AccountLockRegistry()
        self.validator = TradeValidator(self.settings.max_price_per_share)
        self.price_cache = PriceCache(
            self.provider,
            ttl_seconds=self.settings.quote_cache_ttl_seconds,
            serve_stale=self.settings.serve_stale_quotes,
            fetch_timeout_seconds=self.settings.quote_fetch_timeout_seconds,
            max_workers=self.settings.quote_fetch_workers,
            clock=clock,
        )
        self.cooldown = RefreshCooldown(self.settings.refresh_cooldown_seconds, clock=clock)

    def ledger(self, db: Session) -> PositionLedger:
        return PositionLedger(
            account_repo=SqlAlchemyAccountRepository(db),
            position_repo=SqlAlchemyPositionRepository(db),
            transaction_repo=SqlAlchemyTransactionRepository(db),
            unit_of_work=SqlAlchemyUnitOfWork(db),
            locks=self.locks,
            validator=self.validator,
        )

    def accounts(self, db: Session) -> AccountService:
        return AccountService(
            account_repo=SqlAlchemyAccountRepository(db),
            unit_of_work=SqlAlchemyUnitOfWork(db),
            locks=self.locks,
            starting_cash=self.settings.starting_cash,
        )

    def valuation(self, db: Session) -> ValuationService:
        return ValuationService(self.ledger(db), self.price_cache)

    def trading(self, db: Session) -> TradingService:
        return TradingService(self.ledger(db), self.price_cache)

    def analysis(self, db: Session) -> AnalysisService:
        return AnalysisService(self.valuation(db))

    def leaderboard(self, db: Session) -> LeaderboardService:
        ledger = self.ledger(db)
        return LeaderboardService(
            account_repo=SqlAlchemyAccountRepository(db),
            position_repo=SqlAlchemyPositionRepository(db),
            ledger=ledger,
            valuation=ValuationService(ledger, self.price_cache),
            price_cache=self.price_cache,
            cooldown=self.cooldown,
        )

    def close(self) -> None:
        """Stop quote fetch workers and release the provider's client."""
        self.price_cache.close()
        close = getattr(self.provider, "close", None)
        if callable(close):
            close()


# Global context instance (created on first use, replaceable in tests)
_context: Optional[AppContext] = None
_context_lock = threading.Lock()


def get_app_context() -> AppContext:
    """Return the process-wide application context."""
    global _context
    with _context_lock:
        if _context is None:
            _context = AppContext()
        return _context


def set_app_context(context: AppContext) -> None:
    """Replace the process-wide application context."""
    global _context
    with _context_lock:
        _context = context


def reset_app_context() -> None:
    """Close and drop the process-wide context."""
    global _context
    with _context_lock:
        if _context is not None:
            _context.close()
        _context = None
