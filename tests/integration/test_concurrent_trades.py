"""
Integration tests for concurrent trading against a file-backed SQLite database.

Tests cover:
- Racing buys on one account never overdraw cash
- Racing sells never oversell a position
- Cash, position and log stay consistent after a burst of trades
- Concurrent first sign-in creates exactly one account
"""

import threading
from concurrent.futures import ThreadPoolExecutor
from decimal import Decimal

import pytest
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

from tradeleague.app_context import AppContext
from tradeleague.config.settings import Settings
from tradeleague.core.exceptions import InsufficientCashError, InsufficientSharesError
from tradeleague.repositories.sqlalchemy.database import Base
from tradeleague.repositories.sqlalchemy import orm_models  # noqa: F401

from tests.conftest import DeterministicQuoteProvider


@pytest.fixture
def file_session_factory(tmp_path):
    """Session factory over a SQLite file shared by every thread."""
    engine = create_engine(
        f"sqlite:///{tmp_path / 'concurrent.db'}",
        connect_args={"check_same_thread": False, "timeout": 30},
    )
    Base.metadata.create_all(bind=engine)
    yield sessionmaker(autoflush=False, bind=engine)
    engine.dispose()


@pytest.fixture
def context(tmp_path):
    provider = DeterministicQuoteProvider({"AAPL": Decimal("100.00")})
    ctx = AppContext(settings=Settings(data_dir=tmp_path), provider=provider)
    yield ctx
    ctx.close()


def _run_in_threads(factory, fn, count: int) -> list:
    """Run ``fn(session)`` once per thread, each with its own session."""
    barrier = threading.Barrier(count)

    def worker(_):
        session = factory()
        try:
            barrier.wait()
            return fn(session)
        except Exception as exc:  # collected for assertions
            return exc
        finally:
            session.close()

    with ThreadPoolExecutor(max_workers=count) as pool:
        return list(pool.map(worker, range(count)))


# =============================================================================
# RACING TRADES
# =============================================================================


class TestConcurrentTrades:
    """Per-account serialization across sessions and threads."""

    def test_racing_buys_never_overdraw(self, file_session_factory, context):
        """
        GIVEN an account with $500 and AAPL at $100
        WHEN 10 threads each try to buy 1 share at the same moment
        THEN exactly 5 succeed, the rest fail on cash, and nothing goes negative
        """
        setup = file_session_factory()
        context.accounts(setup).ensure_account("racer", initial_cash=Decimal("500"))
        setup.close()

        results = _run_in_threads(
            file_session_factory,
            lambda session: context.trading(session).buy("racer", "AAPL", 1),
            count=10,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 5
        assert all(isinstance(f, InsufficientCashError) for f in failures)

        check = file_session_factory()
        try:
            ledger = context.ledger(check)
            assert ledger.get_cash_balance("racer") == Decimal("0")
            assert ledger.get_position("racer", "AAPL").quantity == 5
            assert len(ledger.list_transactions("racer", limit=None)) == 5
        finally:
            check.close()

    def test_racing_sells_never_oversell(self, file_session_factory, context):
        """
        GIVEN an account holding 3 shares
        WHEN 8 threads each try to sell 1 share
        THEN exactly 3 succeed and the position closes at zero
        """
        setup = file_session_factory()
        context.accounts(setup).ensure_account("seller", initial_cash=Decimal("1000"))
        context.trading(setup).buy("seller", "AAPL", 3)
        setup.close()

        results = _run_in_threads(
            file_session_factory,
            lambda session: context.trading(session).sell("seller", "AAPL", 1),
            count=8,
        )

        failures = [r for r in results if isinstance(r, Exception)]
        assert len(failures) == 5
        assert all(isinstance(f, InsufficientSharesError) for f in failures)

        check = file_session_factory()
        try:
            ledger = context.ledger(check)
            assert ledger.get_position("seller", "AAPL") is None
            assert ledger.get_cash_balance("seller") == Decimal("1000")
        finally:
            check.close()

    def test_rebuild_matches_state_after_burst(self, file_session_factory, context):
        """
        GIVEN a burst of interleaved buys and sells
        WHEN the account is rebuilt from its log
        THEN the rebuilt cash and position equal the live ones
        """
        setup = file_session_factory()
        context.accounts(setup).ensure_account("mixer", initial_cash=Decimal("5000"))
        context.trading(setup).buy("mixer", "AAPL", 10)
        setup.close()

        def trade(session):
            trading = context.trading(session)
            trading.buy("mixer", "AAPL", 2)
            return trading.sell("mixer", "AAPL", 1)

        results = _run_in_threads(file_session_factory, trade, count=6)
        assert not [r for r in results if isinstance(r, Exception)]

        check = file_session_factory()
        try:
            ledger = context.ledger(check)
            live_cash = ledger.get_cash_balance("mixer")
            live_quantity = ledger.get_position("mixer", "AAPL").quantity

            rebuilt = ledger.rebuild_account("mixer")

            assert live_quantity == 16
            assert live_cash == Decimal("3400.00")
            assert rebuilt[0].quantity == live_quantity
            assert ledger.get_cash_balance("mixer") == live_cash
        finally:
            check.close()


# =============================================================================
# RACING SIGN-IN
# =============================================================================


class TestConcurrentSignIn:
    """Create-on-first-access under concurrency."""

    def test_one_account_created(self, file_session_factory, context):
        results = _run_in_threads(
            file_session_factory,
            lambda session: context.accounts(session).ensure_account("newbie"),
            count=8,
        )

        assert not [r for r in results if isinstance(r, Exception)]
        assert {r.account_id for r in results} == {"newbie"}

        check = file_session_factory()
        try:
            accounts = context.accounts(check).list_accounts()
            assert [a.account_id for a in accounts] == ["newbie"]
            assert accounts[0].cash_balance == Decimal("10000.00")
        finally:
            check.close()
