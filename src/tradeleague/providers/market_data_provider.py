"""Quote provider protocol and base types."""

import re
from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Protocol

from tradeleague.core.exceptions import InvalidSymbolError

_SYMBOL_RE = re.compile(r"^[A-Z][A-Z0-9.\-]{0,9}$")


@dataclass(frozen=True)
class ProviderQuote:
    """Raw quote as returned by an upstream provider."""

    symbol: str
    price: Decimal
    change: Optional[Decimal] = None
    change_percent: Optional[Decimal] = None
    name: Optional[str] = None


class QuoteProvider(Protocol):
    """
    Protocol for upstream quote providers.

    Implementations raise UpstreamUnavailableError for transient failures
    (network, rate limiting, 5xx) and QuoteUnavailableError for responses
    that do not carry a usable price.
    """

    def fetch_price(self, symbol: str) -> ProviderQuote:
        """Fetch the current price for one symbol."""
        ...


def normalize_symbol(symbol: str) -> str:
    """Strip and upper-case a ticker, rejecting anything that is not one."""
    if not isinstance(symbol, str):
        raise InvalidSymbolError(symbol)
    normalized = symbol.strip().upper()
    if not _SYMBOL_RE.match(normalized):
        raise InvalidSymbolError(symbol)
    return normalized
