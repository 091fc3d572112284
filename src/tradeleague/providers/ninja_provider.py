"""API Ninjas stock price provider."""

import logging
from decimal import Decimal, InvalidOperation
from typing import Any, Optional

import httpx

from tradeleague.core.exceptions import QuoteUnavailableError, UpstreamUnavailableError
from tradeleague.providers.market_data_provider import ProviderQuote

logger = logging.getLogger(__name__)


class NinjaQuoteProvider:
    """
    Fetches live prices from ``GET {base_url}/stockprice?ticker=SYMBOL``.

    The httpx client is thread-safe and shared by the price cache's workers.
    """

    def __init__(
        self,
        api_key: str,
        base_url: str = "https://api.api-ninjas.com/v1",
        timeout_seconds: float = 10,
        client: Optional[httpx.Client] = None,
    ):
        self._client = client or httpx.Client(base_url=base_url, timeout=timeout_seconds)
        # Injected clients get the key too
        self._client.headers["X-Api-Key"] = api_key

    def fetch_price(self, symbol: str) -> ProviderQuote:
        """Fetch the current quote for one symbol."""
        try:
            response = self._client.get("/stockprice", params={"ticker": symbol})
        except httpx.HTTPError as exc:
            raise UpstreamUnavailableError(symbol, str(exc)) from exc

        if response.status_code == 429 or response.status_code >= 500:
            raise UpstreamUnavailableError(symbol, f"HTTP {response.status_code}")
        if response.status_code != 200:
            raise QuoteUnavailableError(symbol, f"HTTP {response.status_code}")

        try:
            payload = response.json()
        except ValueError as exc:
            raise QuoteUnavailableError(symbol, "response is not JSON") from exc

        return self._parse(symbol, payload)

    def close(self) -> None:
        self._client.close()

    @staticmethod
    def _parse(symbol: str, payload: Any) -> ProviderQuote:
        if not isinstance(payload, dict) or not payload.get("ticker"):
            raise QuoteUnavailableError(symbol, "no data for symbol")

        price = _to_decimal(payload.get("price"))
        if price is None or not price.is_finite() or price <= 0:
            raise QuoteUnavailableError(symbol, f"malformed price {payload.get('price')!r}")

        ticker = str(payload["ticker"]).upper()
        if ticker != symbol.upper():
            logger.warning("Provider answered %s for requested %s", ticker, symbol)

        return ProviderQuote(
            symbol=symbol.upper(),
            price=price,
            change=_to_decimal(payload.get("change")),
            change_percent=_to_decimal(payload.get("change_percent")),
            name=payload.get("name") or f"{ticker} Inc.",
        )


def _to_decimal(value: Any) -> Optional[Decimal]:
    if value is None or isinstance(value, bool):
        return None
    try:
        return Decimal(str(value))
    except (InvalidOperation, ValueError):
        return None
