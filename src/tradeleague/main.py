"""FastAPI application entry point."""

import math
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse

from tradeleague.app_context import get_app_context, reset_app_context
from tradeleague.config.settings import get_settings
from tradeleague.config.logging_config import setup_logging
from tradeleague.repositories.sqlalchemy.database import init_db
from tradeleague.api.routers import (
    accounts_router,
    trades_router,
    portfolio_router,
    quotes_router,
    leaderboard_router,
)
from tradeleague.core.exceptions import (
    AppError,
    CooldownActiveError,
    NotFoundError,
    QuoteUnavailableError,
)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler."""
    # Startup
    setup_logging()
    init_db()
    get_app_context()
    yield
    # Shutdown
    reset_app_context()


settings = get_settings()

app = FastAPI(
    title=settings.app_name,
    description="Fantasy stock trading: positions, valuation and leaderboard",
    version=settings.app_version,
    lifespan=lifespan,
)

# Include routers
app.include_router(accounts_router)
app.include_router(trades_router)
app.include_router(portfolio_router)
app.include_router(quotes_router)
app.include_router(leaderboard_router)


def _status_for(exc: AppError) -> int:
    if isinstance(exc, NotFoundError):
        return 404
    if isinstance(exc, CooldownActiveError):
        return 429
    if isinstance(exc, QuoteUnavailableError):
        return 503
    return 400


@app.exception_handler(AppError)
async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
    """Global handler for application errors."""
    content = {"error": exc.code, "message": exc.message}
    headers = None
    if isinstance(exc, CooldownActiveError):
        retry_after = max(1, math.ceil(exc.remaining_seconds))
        content["retry_after_seconds"] = retry_after
        headers = {"Retry-After": str(retry_after)}
    elif isinstance(exc, QuoteUnavailableError):
        content["retryable"] = exc.retryable
    return JSONResponse(status_code=_status_for(exc), content=content, headers=headers)


@app.get("/health")
def health_check() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@app.get("/")
def root() -> dict[str, str]:
    """Root endpoint with API info."""
    return {
        "app": settings.app_name,
        "version": settings.app_version,
        "docs": "/docs",
    }
