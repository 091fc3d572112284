"""Dependency injection for FastAPI."""

from fastapi import Depends
from sqlalchemy.orm import Session

from tradeleague.app_context import AppContext, get_app_context
from tradeleague.repositories.sqlalchemy.database import get_db
from tradeleague.services import (
    AccountService,
    AnalysisService,
    LeaderboardService,
    PositionLedger,
    PriceCache,
    TradingService,
    ValuationService,
)


def get_context() -> AppContext:
    """Provide the process-wide AppContext."""
    return get_app_context()


def get_price_cache(context: AppContext = Depends(get_context)) -> PriceCache:
    """Provide the shared PriceCache instance."""
    return context.price_cache


def get_ledger(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> PositionLedger:
    """Provide PositionLedger instance."""
    return context.ledger(db)


def get_account_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> AccountService:
    """Provide AccountService instance."""
    return context.accounts(db)


def get_trading_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> TradingService:
    """Provide TradingService instance."""
    return context.trading(db)


def get_valuation_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> ValuationService:
    """Provide ValuationService instance."""
    return context.valuation(db)


def get_analysis_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> AnalysisService:
    """Provide AnalysisService instance."""
    return context.analysis(db)


def get_leaderboard_service(
    db: Session = Depends(get_db),
    context: AppContext = Depends(get_context),
) -> LeaderboardService:
    """Provide LeaderboardService instance."""
    return context.leaderboard(db)
