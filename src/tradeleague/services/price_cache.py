"""Price cache: bounded-staleness quotes in front of the upstream provider."""

import logging
import threading
import time
from concurrent.futures import Future, ThreadPoolExecutor, TimeoutError as FuturesTimeoutError
from concurrent.futures import wait as wait_futures
from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Iterable, Optional, Union

from tradeleague.core.exceptions import (
    InvalidSymbolError,
    QuoteUnavailableError,
    UpstreamUnavailableError,
)
from tradeleague.core.timezone import now_eastern
from tradeleague.domain.views import Quote, QuoteBatch
from tradeleague.providers.market_data_provider import (
    ProviderQuote,
    QuoteProvider,
    normalize_symbol,
)

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class _CacheEntry:
    quote: Quote
    fetched_at: float


class PriceCache:
    """
    Per-symbol quote cache with a short TTL and single-flight fetching.

    * A quote younger than the TTL is served without contacting the provider.
    * Concurrent requests for the same missing or expired symbol share one
      upstream fetch: the first caller registers a Future for the symbol and
      later callers wait on it.
    * Fetches run on a small thread pool. A caller that gives up waiting does
      not cancel the fetch; its result still lands in the cache.
    * When a fetch fails and an older quote exists, the older quote is
      served if ``serve_stale`` is set; otherwise the failure is raised.

    The internal lock guards only the two maps and is never held while
    talking to the provider.
    """

    def __init__(
        self,
        provider: QuoteProvider,
        ttl_seconds: float = 60,
        serve_stale: bool = True,
        fetch_timeout_seconds: float = 10,
        max_workers: int = 8,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._provider = provider
        self._ttl = ttl_seconds
        self._serve_stale = serve_stale
        self._fetch_timeout = fetch_timeout_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._entries: dict[str, _CacheEntry] = {}
        self._inflight: dict[str, Future] = {}
        self._executor = ThreadPoolExecutor(
            max_workers=max_workers,
            thread_name_prefix="quote-fetch",
        )

    @property
    def ttl_seconds(self) -> float:
        return self._ttl

    def get_price(self, symbol: str) -> Quote:
        """
        Current quote for one symbol.

        Raises QuoteUnavailableError (UpstreamUnavailableError when the
        provider failed transiently) if no quote can be served.
        """
        symbol = normalize_symbol(symbol)
        hit = self._lookup(symbol, force=False)
        if isinstance(hit, Quote):
            return hit
        return self._resolve(symbol, hit, self._fetch_timeout)

    def get_prices(self, symbols: Iterable[str]) -> QuoteBatch:
        """
        Quotes for many symbols, fetching missing/expired ones concurrently.

        Never fails as a whole: symbols that cannot be priced are listed in
        ``failed``.
        """
        return self._batch(symbols, force=False)

    def refresh(self, symbols: Iterable[str]) -> QuoteBatch:
        """
        Re-fetch symbols regardless of age (still one fetch per symbol).

        A symbol whose fetch fails is listed in ``failed`` even when an older
        quote is cached; the older quote stays in the cache untouched.
        """
        return self._batch(symbols, force=True)

    def peek(self, symbol: str) -> Optional[Quote]:
        """Cached quote of any age, without contacting the provider."""
        symbol = normalize_symbol(symbol)
        with self._lock:
            entry = self._entries.get(symbol)
        return entry.quote if entry else None

    def is_fresh(self, symbol: str) -> bool:
        symbol = normalize_symbol(symbol)
        with self._lock:
            entry = self._entries.get(symbol)
            return entry is not None and self._is_fresh(entry)

    def clear(self) -> None:
        """Drop all cached quotes (in-flight fetches are left alone)."""
        with self._lock:
            self._entries.clear()

    def close(self) -> None:
        self._executor.shutdown(wait=False)

    def __len__(self) -> int:
        with self._lock:
            return len(self._entries)

    def _batch(self, symbols: Iterable[str], force: bool) -> QuoteBatch:
        batch = QuoteBatch()
        pending: dict[str, Future] = {}

        for raw_symbol in symbols:
            try:
                symbol = normalize_symbol(raw_symbol)
            except InvalidSymbolError:
                batch.failed.append(str(raw_symbol))
                continue
            if symbol in batch.quotes or symbol in pending:
                continue
            hit = self._lookup(symbol, force=force)
            if isinstance(hit, Quote):
                batch.quotes[symbol] = hit
            else:
                pending[symbol] = hit

        if pending:
            wait_futures(list(pending.values()), timeout=self._fetch_timeout)
            for symbol, future in pending.items():
                try:
                    batch.quotes[symbol] = self._resolve(
                        symbol, future, timeout=0, allow_stale=not force
                    )
                except QuoteUnavailableError as exc:
                    logger.warning("No quote for %s: %s", symbol, exc.message)
                    batch.failed.append(symbol)

        return batch

    def _lookup(self, symbol: str, force: bool) -> Union[Quote, Future]:
        """Return a fresh cached quote, or the (possibly shared) fetch future."""
        with self._lock:
            entry = self._entries.get(symbol)
            if entry is not None and not force and self._is_fresh(entry):
                return entry.quote

            future = self._inflight.get(symbol)
            if future is None:
                # Registered while holding the lock, so _load cannot unregister
                # before the future is visible to other callers.
                future = self._executor.submit(self._load, symbol)
                self._inflight[symbol] = future
            return future

    def _load(self, symbol: str) -> Quote:
        """Fetch one symbol from the provider and store it (runs on the pool)."""
        try:
            try:
                raw = self._provider.fetch_price(symbol)
            except QuoteUnavailableError:
                raise
            except Exception as exc:
                raise UpstreamUnavailableError(symbol, str(exc) or type(exc).__name__) from exc

            quote = self._to_quote(symbol, raw)
            with self._lock:
                self._entries[symbol] = _CacheEntry(quote=quote, fetched_at=self._clock())
            return quote
        finally:
            with self._lock:
                self._inflight.pop(symbol, None)

    def _resolve(
        self,
        symbol: str,
        future: Future,
        timeout: float,
        allow_stale: bool = True,
    ) -> Quote:
        try:
            return future.result(timeout=timeout)
        except FuturesTimeoutError:
            error: QuoteUnavailableError = UpstreamUnavailableError(
                symbol, "timed out waiting for provider"
            )
        except QuoteUnavailableError as exc:
            # The same exception instance is shared by every waiter
            error = type(exc)(symbol, exc.reason)

        stale = self.peek(symbol) if allow_stale and self._serve_stale else None
        if stale is not None:
            logger.warning(
                "Serving stale quote for %s from %s (%s)",
                symbol, stale.as_of.isoformat(), error.message,
            )
            return stale
        raise error

    @staticmethod
    def _to_quote(symbol: str, raw: ProviderQuote) -> Quote:
        if not isinstance(raw, ProviderQuote):
            raise QuoteUnavailableError(symbol, "malformed provider response")
        price = raw.price
        if not isinstance(price, Decimal) or not price.is_finite() or price <= 0:
            raise QuoteUnavailableError(symbol, f"malformed price {price!r}")
        return Quote(
            symbol=symbol,
            price=price,
            as_of=now_eastern(),
            change=raw.change,
            change_percent=raw.change_percent,
            name=raw.name,
        )

    def _is_fresh(self, entry: _CacheEntry) -> bool:
        return (self._clock() - entry.fetched_at) < self._ttl
