"""
Unit tests for ValuationService.

Tests cover:
- Net worth = cash + sum of quantity x current price
- Unavailable quotes counted as zero without raising
- Portfolio view with P/L and weights
"""

import pytest
from decimal import Decimal

from tradeleague.core.exceptions import AccountNotFoundError
from tradeleague.domain.models import Account
from tradeleague.services import PositionLedger, ValuationService

from tests.conftest import DeterministicQuoteProvider


class TestValueOf:
    """Tests for single-account valuation."""

    def test_cash_only_account(self, valuation_service: ValuationService, sample_account: Account):
        worth = valuation_service.value_of(sample_account.account_id)

        assert worth.cash == Decimal("10000")
        assert worth.portfolio_value == Decimal("0")
        assert worth.net_worth == Decimal("10000")
        assert worth.missing_symbols == []

    def test_net_worth_uses_current_prices(
        self,
        valuation_service: ValuationService,
        ledger: PositionLedger,
        sample_account: Account,
    ):
        """
        GIVEN 10 AAPL bought at 100 and 2 MSFT bought at 300
        WHEN AAPL quotes 185.50 and MSFT 378.25
        THEN portfolio value is 1855.00 + 756.50 and net worth adds remaining cash
        """
        account_id = sample_account.account_id
        ledger.apply_buy(account_id, "AAPL", 10, Decimal("100"))
        ledger.apply_buy(account_id, "MSFT", 2, Decimal("300"))

        worth = valuation_service.value_of(account_id)

        assert worth.cash == Decimal("8400")
        assert worth.portfolio_value == Decimal("2611.50")
        assert worth.net_worth == Decimal("11011.50")
        assert worth.total_invested == Decimal("1600")

    def test_missing_quote_counts_as_zero(
        self,
        valuation_service: ValuationService,
        ledger: PositionLedger,
        quote_provider: DeterministicQuoteProvider,
        sample_account: Account,
        caplog,
    ):
        """
        GIVEN a held symbol whose quote cannot be fetched
        WHEN valuing the account
        THEN that symbol contributes 0, is listed as missing, and a warning is logged
        """
        account_id = sample_account.account_id
        ledger.apply_buy(account_id, "AAPL", 10, Decimal("100"))
        ledger.apply_buy(account_id, "TSLA", 1, Decimal("200"))
        quote_provider.failing.add("TSLA")

        with caplog.at_level("WARNING"):
            worth = valuation_service.value_of(account_id)

        assert worth.portfolio_value == Decimal("1855.00")
        assert worth.missing_symbols == ["TSLA"]
        assert worth.net_worth == worth.cash + Decimal("1855.00")
        assert "TSLA" in caplog.text

    def test_unknown_account(self, valuation_service: ValuationService):
        with pytest.raises(AccountNotFoundError):
            valuation_service.value_of("ghost")


class TestPortfolioView:
    """Tests for the enriched holdings view."""

    def test_positions_enriched_and_sorted_by_value(
        self,
        valuation_service: ValuationService,
        ledger: PositionLedger,
        sample_account: Account,
    ):
        account_id = sample_account.account_id
        ledger.apply_buy(account_id, "AAPL", 10, Decimal("200"))
        ledger.apply_buy(account_id, "MSFT", 10, Decimal("300"))

        portfolio = valuation_service.get_portfolio(account_id)

        assert [p.symbol for p in portfolio.positions] == ["MSFT", "AAPL"]
        aapl = portfolio.positions[1]
        assert aapl.last_price == Decimal("185.50")
        assert aapl.market_value == Decimal("1855.00")
        assert aapl.unrealized_pnl == Decimal("-145.00")
        assert aapl.unrealized_pnl_percent == Decimal("-7.25")
        assert portfolio.net_worth == Decimal("5000") + Decimal("1855.00") + Decimal("3782.50")
        total_weight = sum(p.weight_percent for p in portfolio.positions)
        assert total_weight < Decimal("100")

    def test_unpriced_position_listed_last_without_price(
        self,
        valuation_service: ValuationService,
        ledger: PositionLedger,
        quote_provider: DeterministicQuoteProvider,
        sample_account: Account,
    ):
        account_id = sample_account.account_id
        ledger.apply_buy(account_id, "AAPL", 1, Decimal("100"))
        ledger.apply_buy(account_id, "SPY", 1, Decimal("400"))
        quote_provider.failing.add("AAPL")

        portfolio = valuation_service.get_portfolio(account_id)

        assert [p.symbol for p in portfolio.positions] == ["SPY", "AAPL"]
        assert portfolio.positions[1].market_value is None
        assert portfolio.missing_symbols == ["AAPL"]
