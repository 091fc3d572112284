"""Service layer - business logic orchestration."""

from tradeleague.services.validator import TradeValidator, ValidationResult, to_price
from tradeleague.services.ledger_service import PositionLedger
from tradeleague.services.price_cache import PriceCache
from tradeleague.services.valuation_service import ValuationService
from tradeleague.services.leaderboard_service import LeaderboardService
from tradeleague.services.account_service import AccountService
from tradeleague.services.trading_service import TradingService
from tradeleague.services.analysis_service import AnalysisService

__all__ = [
    "TradeValidator",
    "ValidationResult",
    "to_price",
    "PositionLedger",
    "PriceCache",
    "ValuationService",
    "LeaderboardService",
    "AccountService",
    "TradingService",
    "AnalysisService",
]
