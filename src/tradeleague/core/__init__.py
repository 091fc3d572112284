"""Core utilities and shared functionality."""

from tradeleague.core.timezone import (
    now_eastern,
    to_eastern,
    to_naive_eastern,
    parse_datetime_eastern,
    EASTERN_TZ,
)
from tradeleague.core.exceptions import (
    AppError,
    InvalidInputError,
    InvalidQuantityError,
    InvalidPriceError,
    InvalidSymbolError,
    NotFoundError,
    AccountNotFoundError,
    InsufficientSharesError,
    InsufficientCashError,
    QuoteUnavailableError,
    UpstreamUnavailableError,
    CooldownActiveError,
)

__all__ = [
    "now_eastern",
    "to_eastern",
    "to_naive_eastern",
    "parse_datetime_eastern",
    "EASTERN_TZ",
    "AppError",
    "InvalidInputError",
    "InvalidQuantityError",
    "InvalidPriceError",
    "InvalidSymbolError",
    "NotFoundError",
    "AccountNotFoundError",
    "InsufficientSharesError",
    "InsufficientCashError",
    "QuoteUnavailableError",
    "UpstreamUnavailableError",
    "CooldownActiveError",
]
