"""Quote endpoints backed by the shared price cache."""

from fastapi import APIRouter, Depends, Query

from tradeleague.api.deps import get_price_cache
from tradeleague.api.schemas import QuoteBatchResponse, QuoteResponse
from tradeleague.services import PriceCache

router = APIRouter(prefix="/quotes", tags=["quotes"])


@router.get("", response_model=QuoteBatchResponse)
def get_quotes(
    symbols: str = Query(..., description="Comma-separated symbols"),
    prices: PriceCache = Depends(get_price_cache),
) -> QuoteBatchResponse:
    """Quotes for several symbols; unpriceable ones are listed in ``failed``."""
    requested = [s for s in symbols.split(",") if s.strip()]
    batch = prices.get_prices(requested)
    return QuoteBatchResponse(
        quotes=[QuoteResponse.model_validate(q) for q in batch.quotes.values()],
        failed=batch.failed,
    )


@router.get("/{symbol}", response_model=QuoteResponse)
def get_quote(
    symbol: str,
    prices: PriceCache = Depends(get_price_cache),
) -> QuoteResponse:
    """Current quote for one symbol."""
    return QuoteResponse.model_validate(prices.get_price(symbol))
