"""
Pytest configuration and fixtures for Trade League tests.

This module provides:
- In-memory SQLite database fixtures
- Deterministic, failing and slow quote providers
- A manual clock for TTL and cooldown tests
- Service and repository fixtures
- Factory helpers for accounts
"""

import threading
import uuid
from datetime import datetime
from decimal import Decimal
from typing import Callable, Optional

import pytest
from sqlalchemy import create_engine, StaticPool
from sqlalchemy.orm import sessionmaker, Session
from fastapi.testclient import TestClient

from tradeleague.main import app
from tradeleague.app_context import AppContext, set_app_context, reset_app_context
from tradeleague.repositories.sqlalchemy.database import Base, get_db, reset_database
# Import ORM models to register them with Base before creating tables
from tradeleague.repositories.sqlalchemy import orm_models  # noqa: F401
from tradeleague.repositories.sqlalchemy import (
    SqlAlchemyAccountRepository,
    SqlAlchemyPositionRepository,
    SqlAlchemyTransactionRepository,
    SqlAlchemyUnitOfWork,
)
from tradeleague.providers import ProviderQuote
from tradeleague.core.cooldown import RefreshCooldown
from tradeleague.core.exceptions import QuoteUnavailableError
from tradeleague.core.locks import AccountLockRegistry
from tradeleague.core.timezone import EASTERN_TZ
from tradeleague.config.settings import Settings, reset_settings, set_settings
from tradeleague.domain.models import Account
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


# =============================================================================
# TIME HELPERS
# =============================================================================


def eastern_datetime(
    year: int,
    month: int,
    day: int,
    hour: int = 10,
    minute: int = 0,
    second: int = 0,
) -> datetime:
    """Create a localized datetime in US/Eastern timezone."""
    return EASTERN_TZ.localize(datetime(year, month, day, hour, minute, second))


class FakeClock:
    """Manually advanced monotonic clock."""

    def __init__(self, start: float = 1000.0):
        self._now = start
        self._lock = threading.Lock()

    def __call__(self) -> float:
        with self._lock:
            return self._now

    def advance(self, seconds: float) -> None:
        with self._lock:
            self._now += seconds


@pytest.fixture
def fake_clock() -> FakeClock:
    """Provide a clock that only moves when told to."""
    return FakeClock()


# =============================================================================
# DATABASE FIXTURES
# =============================================================================


@pytest.fixture(scope="function")
def test_engine():
    """Create test database engine with shared in-memory SQLite."""
    # Reset settings for clean state
    reset_settings()

    engine = create_engine(
        "sqlite:///:memory:",
        connect_args={"check_same_thread": False},
        poolclass=StaticPool,
    )
    Base.metadata.create_all(bind=engine)
    yield engine
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def test_session(test_engine) -> Session:
    """Create test database session."""
    TestSessionLocal = sessionmaker(autoflush=False, bind=test_engine)
    session = TestSessionLocal()
    try:
        yield session
    finally:
        session.close()


# =============================================================================
# REPOSITORY FIXTURES
# =============================================================================


@pytest.fixture
def account_repo(test_session) -> SqlAlchemyAccountRepository:
    """Provide test AccountRepository."""
    return SqlAlchemyAccountRepository(test_session)


@pytest.fixture
def position_repo(test_session) -> SqlAlchemyPositionRepository:
    """Provide test PositionRepository."""
    return SqlAlchemyPositionRepository(test_session)


@pytest.fixture
def transaction_repo(test_session) -> SqlAlchemyTransactionRepository:
    """Provide test TransactionRepository."""
    return SqlAlchemyTransactionRepository(test_session)


@pytest.fixture
def unit_of_work(test_session) -> SqlAlchemyUnitOfWork:
    """Provide test UnitOfWork."""
    return SqlAlchemyUnitOfWork(test_session)


# =============================================================================
# QUOTE PROVIDER FIXTURES
# =============================================================================


class DeterministicQuoteProvider:
    """
    Deterministic quote provider for testing.

    Prices can be changed between calls; every fetch is recorded.
    Symbols listed in ``failing`` raise ConnectionError.
    """

    FIXED_PRICES = {
        "AAPL": Decimal("185.50"),
        "GOOGL": Decimal("142.75"),
        "MSFT": Decimal("378.25"),
        "TSLA": Decimal("248.75"),
        "JPM": Decimal("196.40"),
        "SPY": Decimal("485.25"),
    }

    def __init__(self, prices: Optional[dict[str, Decimal]] = None):
        self.prices = dict(self.FIXED_PRICES if prices is None else prices)
        self.failing: set[str] = set()
        self.calls: list[str] = []
        self._lock = threading.Lock()

    def set_price(self, symbol: str, price: Decimal) -> None:
        self.prices[symbol] = Decimal(str(price))

    def calls_for(self, symbol: str) -> int:
        with self._lock:
            return self.calls.count(symbol)

    def fetch_price(self, symbol: str) -> ProviderQuote:
        with self._lock:
            self.calls.append(symbol)
        if symbol in self.failing:
            raise ConnectionError("Network unavailable")
        if symbol not in self.prices:
            raise QuoteUnavailableError(symbol, "no data for symbol")
        return ProviderQuote(symbol=symbol, price=self.prices[symbol], name=f"{symbol} Inc.")


class FailingQuoteProvider:
    """Quote provider that always raises an exception."""

    def __init__(self):
        self.calls = 0

    def fetch_price(self, symbol: str) -> ProviderQuote:
        self.calls += 1
        raise ConnectionError("Network unavailable")


class SlowQuoteProvider:
    """
    Quote provider that blocks until released.

    Used to hold a fetch in flight while other callers pile up.
    """

    def __init__(self, price: Decimal = Decimal("100.00")):
        self.price = price
        self.release = threading.Event()
        self.started = threading.Event()
        self.calls = 0
        self._lock = threading.Lock()

    def fetch_price(self, symbol: str) -> ProviderQuote:
        with self._lock:
            self.calls += 1
        self.started.set()
        self.release.wait(timeout=10)
        return ProviderQuote(symbol=symbol, price=self.price)


@pytest.fixture
def quote_provider() -> DeterministicQuoteProvider:
    """Provide deterministic quote provider."""
    return DeterministicQuoteProvider()


@pytest.fixture
def failing_provider() -> FailingQuoteProvider:
    """Provide a quote provider that always fails."""
    return FailingQuoteProvider()


@pytest.fixture
def price_cache(quote_provider, fake_clock) -> PriceCache:
    """Provide PriceCache over the deterministic provider and a manual clock."""
    cache = PriceCache(
        quote_provider,
        ttl_seconds=60,
        serve_stale=True,
        fetch_timeout_seconds=5,
        clock=fake_clock,
    )
    yield cache
    cache.close()


# =============================================================================
# SERVICE FIXTURES
# =============================================================================


@pytest.fixture
def locks() -> AccountLockRegistry:
    """Provide a fresh account lock registry."""
    return AccountLockRegistry()


@pytest.fixture
def validator() -> TradeValidator:
    """Provide TradeValidator with the default price ceiling."""
    return TradeValidator()


@pytest.fixture
def ledger(
    account_repo,
    position_repo,
    transaction_repo,
    unit_of_work,
    locks,
    validator,
) -> PositionLedger:
    """Provide test PositionLedger."""
    return PositionLedger(
        account_repo=account_repo,
        position_repo=position_repo,
        transaction_repo=transaction_repo,
        unit_of_work=unit_of_work,
        locks=locks,
        validator=validator,
    )


@pytest.fixture
def account_service(account_repo, unit_of_work, locks) -> AccountService:
    """Provide test AccountService with $10,000 starting cash."""
    return AccountService(
        account_repo=account_repo,
        unit_of_work=unit_of_work,
        locks=locks,
        starting_cash=Decimal("10000.00"),
    )


@pytest.fixture
def valuation_service(ledger, price_cache) -> ValuationService:
    """Provide test ValuationService."""
    return ValuationService(ledger, price_cache)


@pytest.fixture
def trading_service(ledger, price_cache) -> TradingService:
    """Provide test TradingService."""
    return TradingService(ledger, price_cache)


@pytest.fixture
def analysis_service(valuation_service) -> AnalysisService:
    """Provide test AnalysisService."""
    return AnalysisService(valuation_service)


@pytest.fixture
def cooldown(fake_clock) -> RefreshCooldown:
    """Provide a one-hour refresh cooldown on the manual clock."""
    return RefreshCooldown(3600, clock=fake_clock)


@pytest.fixture
def leaderboard_service(
    account_repo,
    position_repo,
    ledger,
    valuation_service,
    price_cache,
    cooldown,
) -> LeaderboardService:
    """Provide test LeaderboardService."""
    return LeaderboardService(
        account_repo=account_repo,
        position_repo=position_repo,
        ledger=ledger,
        valuation=valuation_service,
        price_cache=price_cache,
        cooldown=cooldown,
    )


# =============================================================================
# FACTORY FIXTURES
# =============================================================================


@pytest.fixture
def account_factory(account_service) -> Callable[..., Account]:
    """Factory for creating test accounts."""

    def _create_account(
        account_id: Optional[str] = None,
        display_name: Optional[str] = None,
        initial_cash: Optional[Decimal] = None,
    ) -> Account:
        if account_id is None:
            account_id = f"user-{uuid.uuid4().hex[:8]}"
        return account_service.ensure_account(
            account_id,
            display_name=display_name,
            initial_cash=initial_cash,
        )

    return _create_account


@pytest.fixture
def sample_account(account_factory) -> Account:
    """Create a sample account with $10,000 cash."""
    return account_factory(account_id="alice", display_name="Alice")


# =============================================================================
# API TEST CLIENT FIXTURE
# =============================================================================


@pytest.fixture
def api_provider() -> DeterministicQuoteProvider:
    """Quote provider used behind the API test client."""
    return DeterministicQuoteProvider()


@pytest.fixture
def client(test_engine, api_provider, tmp_path) -> TestClient:
    """Provide FastAPI test client with test database and quote provider."""
    settings = Settings(data_dir=tmp_path, database_url=f"sqlite:///{tmp_path / 'app.db'}")
    set_settings(settings)
    reset_database()
    set_app_context(AppContext(settings=settings, provider=api_provider))

    TestSessionLocal = sessionmaker(autoflush=False, bind=test_engine)

    def override_get_db():
        session = TestSessionLocal()
        try:
            yield session
        finally:
            session.close()

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()
    reset_app_context()
    reset_database()
    reset_settings()


# =============================================================================
# HELPER FUNCTIONS (exported for use in tests)
# =============================================================================


def assert_decimal_equal(
    actual: Decimal,
    expected: Decimal,
    tolerance: Decimal = Decimal("0.01"),
) -> None:
    """Assert two Decimals are equal within tolerance."""
    diff = abs(Decimal(str(actual)) - expected)
    assert diff <= tolerance, f"Expected {expected}, got {actual} (diff={diff})"
