"""Stub quote provider for offline/testing use."""

import random
import threading
from decimal import Decimal

from tradeleague.providers.market_data_provider import ProviderQuote


# Deterministic fake prices for common symbols: (price, change)
_STUB_PRICES: dict[str, tuple[Decimal, Decimal]] = {
    "AAPL": (Decimal("182.63"), Decimal("1.25")),
    "MSFT": (Decimal("336.82"), Decimal("1.45")),
    "AMZN": (Decimal("178.15"), Decimal("1.25")),
    "TSLA": (Decimal("248.50"), Decimal("-1.35")),
    "NVDA": (Decimal("924.79"), Decimal("12.40")),
    "GOOGL": (Decimal("142.56"), Decimal("1.06")),
    "META": (Decimal("298.73"), Decimal("2.75")),
    "NFLX": (Decimal("611.20"), Decimal("-3.10")),
    "JPM": (Decimal("196.40"), Decimal("0.85")),
    "SPY": (Decimal("485.25"), Decimal("1.15")),
}


class StubQuoteProvider:
    """
    Stub provider with deterministic fake data for offline operation.

    Uses predefined prices for common symbols; derives a stable pseudo-random
    price for unknown symbols from the seed and the symbol.
    """

    def __init__(self, seed: int = 42):
        """Initialize with optional random seed for reproducibility."""
        self._seed = seed
        self._lock = threading.Lock()
        self._generated: dict[str, tuple[Decimal, Decimal]] = {}

    def fetch_price(self, symbol: str) -> ProviderQuote:
        """Return a stub quote for the symbol."""
        upper_symbol = symbol.upper()
        if upper_symbol in _STUB_PRICES:
            price, change = _STUB_PRICES[upper_symbol]
        else:
            price, change = self._generate(upper_symbol)

        change_percent = (change / (price - change) * 100).quantize(Decimal("0.01"))
        return ProviderQuote(
            symbol=upper_symbol,
            price=price,
            change=change,
            change_percent=change_percent,
            name=f"{upper_symbol} Inc.",
        )

    def _generate(self, symbol: str) -> tuple[Decimal, Decimal]:
        with self._lock:
            if symbol not in self._generated:
                rng = random.Random(f"{self._seed}:{symbol}")
                price = Decimal(str(50 + rng.random() * 200)).quantize(Decimal("0.01"))
                change = Decimal(str((rng.random() - 0.5) * 4)).quantize(Decimal("0.01"))
                self._generated[symbol] = (price, change)
            return self._generated[symbol]
