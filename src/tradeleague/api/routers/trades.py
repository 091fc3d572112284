"""Trade endpoints: market buys and sells at the cached price."""

from fastapi import APIRouter, Depends

from tradeleague.api.deps import get_trading_service
from tradeleague.api.schemas import TradeRequest, TransactionResponse
from tradeleague.services import TradingService

router = APIRouter(prefix="/trades", tags=["trades"])


@router.post("/buy", response_model=TransactionResponse, status_code=201)
def buy(
    data: TradeRequest,
    trading: TradingService = Depends(get_trading_service),
) -> TransactionResponse:
    """Buy shares at the current price."""
    txn = trading.buy(data.account_id, data.symbol, data.quantity)
    return TransactionResponse.model_validate(txn)


@router.post("/sell", response_model=TransactionResponse, status_code=201)
def sell(
    data: TradeRequest,
    trading: TradingService = Depends(get_trading_service),
) -> TransactionResponse:
    """Sell shares at the current price."""
    txn = trading.sell(data.account_id, data.symbol, data.quantity)
    return TransactionResponse.model_validate(txn)
