"""API routers package."""

from tradeleague.api.routers.accounts import router as accounts_router
from tradeleague.api.routers.trades import router as trades_router
from tradeleague.api.routers.portfolio import router as portfolio_router
from tradeleague.api.routers.quotes import router as quotes_router
from tradeleague.api.routers.leaderboard import router as leaderboard_router

__all__ = [
    "accounts_router",
    "trades_router",
    "portfolio_router",
    "quotes_router",
    "leaderboard_router",
]
