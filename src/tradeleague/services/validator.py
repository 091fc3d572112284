"""Transaction validator guarding every trade entry point."""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from typing import Optional

from tradeleague.core.exceptions import (
    AppError,
    InsufficientCashError,
    InsufficientSharesError,
    InvalidPriceError,
    InvalidQuantityError,
)
from tradeleague.domain.models import TradeSide

PRICE_QUANTUM = Decimal("0.0001")
DEFAULT_MAX_PRICE = Decimal("1000000")


@dataclass(frozen=True)
class ValidationResult:
    """Ok when ``error`` is None, otherwise the rejection to surface."""

    error: Optional[AppError] = None

    @property
    def is_valid(self) -> bool:
        return self.error is None

    @property
    def reason(self) -> Optional[str]:
        return self.error.message if self.error else None


OK = ValidationResult()


def to_price(value: object) -> Decimal:
    """
    Coerce a price to a Decimal at execution precision (4 dp, half-up).

    Raises InvalidPriceError for anything that is not a finite number.
    """
    if isinstance(value, bool) or value is None:
        raise InvalidPriceError(value)
    try:
        price = value if isinstance(value, Decimal) else Decimal(str(value))
        if not price.is_finite():
            raise InvalidPriceError(value)
        return price.quantize(PRICE_QUANTUM, rounding=ROUND_HALF_UP)
    except (InvalidOperation, ValueError, TypeError):
        raise InvalidPriceError(value) from None


class TradeValidator:
    """
    Pure checks of a proposed trade against current account state.

    No side effects: callers pass in the cash balance and held quantity
    they read under the account lock.
    """

    def __init__(self, max_price_per_share: Decimal = DEFAULT_MAX_PRICE):
        self._max_price = max_price_per_share

    def validate(
        self,
        side: TradeSide,
        quantity: object,
        price: object,
        *,
        cash_balance: Decimal,
        held_quantity: int,
        symbol: str = "",
    ) -> ValidationResult:
        """Validate a trade; returns a result carrying the first rejection."""
        result = self.validate_order(quantity, price)
        if not result.is_valid:
            return result

        price = to_price(price)
        if side == TradeSide.SELL and quantity > held_quantity:
            return ValidationResult(
                InsufficientSharesError(symbol, requested=quantity, available=held_quantity)
            )
        if side == TradeSide.BUY:
            cost = quantity * price
            if cost > cash_balance:
                return ValidationResult(InsufficientCashError(cost, cash_balance))
        return OK

    def validate_order(self, quantity: object, price: object) -> ValidationResult:
        """Shape checks only: positive integer quantity, sane positive price."""
        if isinstance(quantity, bool) or not isinstance(quantity, int) or quantity <= 0:
            return ValidationResult(InvalidQuantityError(quantity))

        try:
            normalized = to_price(price)
        except InvalidPriceError as exc:
            return ValidationResult(exc)
        if normalized <= 0:
            return ValidationResult(InvalidPriceError(price))
        if normalized > self._max_price:
            return ValidationResult(
                InvalidPriceError(price, reason=f"exceeds the {self._max_price} ceiling")
            )
        return OK

    def ensure_valid(
        self,
        side: TradeSide,
        quantity: object,
        price: object,
        *,
        cash_balance: Decimal,
        held_quantity: int,
        symbol: str = "",
    ) -> None:
        """Raise the rejection carried by ``validate``, if any."""
        result = self.validate(
            side,
            quantity,
            price,
            cash_balance=cash_balance,
            held_quantity=held_quantity,
            symbol=symbol,
        )
        if not result.is_valid:
            raise result.error
