"""Trading service: market orders priced from the quote cache."""

from tradeleague.domain.models import Transaction
from tradeleague.providers.market_data_provider import normalize_symbol
from tradeleague.services.ledger_service import PositionLedger
from tradeleague.services.price_cache import PriceCache


class TradingService:
    """
    Executes buys and sells at the current cached price.

    The quote is looked up before the account lock is taken; quote errors
    (QuoteUnavailableError, UpstreamUnavailableError) reach the caller and
    leave the account untouched.
    """

    def __init__(self, ledger: PositionLedger, price_cache: PriceCache):
        self._ledger = ledger
        self._prices = price_cache

    def buy(self, account_id: str, symbol: str, quantity: int) -> Transaction:
        symbol = normalize_symbol(symbol)
        quote = self._prices.get_price(symbol)
        return self._ledger.apply_buy(account_id, symbol, quantity, quote.price)

    def sell(self, account_id: str, symbol: str, quantity: int) -> Transaction:
        symbol = normalize_symbol(symbol)
        quote = self._prices.get_price(symbol)
        return self._ledger.apply_sell(account_id, symbol, quantity, quote.price)
