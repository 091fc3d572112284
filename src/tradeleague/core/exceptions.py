"""Application-level exceptions."""

from decimal import Decimal
from typing import Union


class AppError(Exception):
    """Base exception for application errors."""

    def __init__(self, message: str, code: str = "APP_ERROR"):
        self.message = message
        self.code = code
        super().__init__(message)


class InvalidInputError(AppError):
    """Raised when input validation fails."""

    def __init__(self, message: str, code: str = "INVALID_INPUT"):
        super().__init__(message, code=code)


class InvalidQuantityError(InvalidInputError):
    """Raised when a trade quantity is not a positive integer."""

    def __init__(self, quantity: object):
        super().__init__(
            f"Quantity must be a positive integer, got {quantity!r}",
            code="INVALID_QUANTITY",
        )
        self.quantity = quantity


class InvalidPriceError(InvalidInputError):
    """Raised when a price per share is missing, non-positive or implausible."""

    def __init__(self, price: object, reason: str = "must be a positive finite number"):
        super().__init__(f"Price per share {reason}, got {price!r}", code="INVALID_PRICE")
        self.price = price


class InvalidSymbolError(InvalidInputError):
    """Raised when a ticker symbol is malformed."""

    def __init__(self, symbol: object):
        super().__init__(f"Invalid symbol: {symbol!r}", code="INVALID_SYMBOL")
        self.symbol = symbol


class NotFoundError(AppError):
    """Raised when a requested resource is not found."""

    def __init__(self, resource: str, identifier: str, code: str = "NOT_FOUND"):
        super().__init__(f"{resource} not found: {identifier}", code=code)


class AccountNotFoundError(NotFoundError):
    """Raised when an account id is unknown to the account store."""

    def __init__(self, account_id: str):
        super().__init__("Account", account_id, code="ACCOUNT_NOT_FOUND")
        self.account_id = account_id


class InsufficientSharesError(AppError):
    """Raised when attempting to sell more shares than owned."""

    def __init__(self, symbol: str, requested: int, available: int):
        super().__init__(
            f"Insufficient shares of {symbol}: requested {requested}, available {available}",
            code="INSUFFICIENT_SHARES",
        )
        self.symbol = symbol
        self.requested = requested
        self.available = available


class InsufficientCashError(AppError):
    """Raised when a purchase costs more than the available cash."""

    def __init__(self, requested: Decimal, available: Decimal):
        super().__init__(
            f"Insufficient funds: requested {requested}, available {available}",
            code="INSUFFICIENT_FUNDS",
        )
        self.requested = requested
        self.available = available


class QuoteUnavailableError(AppError):
    """Raised when no usable quote exists for a symbol."""

    retryable = False

    def __init__(self, symbol: str, reason: str = "", code: str = "QUOTE_UNAVAILABLE"):
        message = f"Quote unavailable for {symbol}"
        if reason:
            message = f"{message}: {reason}"
        super().__init__(message, code=code)
        self.symbol = symbol
        self.reason = reason


class UpstreamUnavailableError(QuoteUnavailableError):
    """Raised on a transient quote provider failure; safe to retry later."""

    retryable = True

    def __init__(self, symbol: str, reason: str = ""):
        super().__init__(symbol, reason, code="UPSTREAM_UNAVAILABLE")


class CooldownActiveError(AppError):
    """Raised when a bulk quote refresh is requested inside the cooldown window."""

    def __init__(self, remaining_seconds: Union[int, float]):
        super().__init__(
            f"Refresh cooldown active, retry in {remaining_seconds:.0f}s",
            code="COOLDOWN_ACTIVE",
        )
        self.remaining_seconds = remaining_seconds
