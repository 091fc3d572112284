"""Quote providers module."""

from tradeleague.providers.market_data_provider import (
    ProviderQuote,
    QuoteProvider,
    normalize_symbol,
)
from tradeleague.providers.stub_provider import StubQuoteProvider
from tradeleague.providers.ninja_provider import NinjaQuoteProvider

__all__ = [
    "ProviderQuote",
    "QuoteProvider",
    "normalize_symbol",
    "StubQuoteProvider",
    "NinjaQuoteProvider",
]
