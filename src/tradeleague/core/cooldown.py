"""Minimum-interval gate for the bulk quote refresh."""

import threading
import time
from contextlib import contextmanager
from datetime import datetime
from typing import Callable, Iterator, Optional

from tradeleague.core.exceptions import CooldownActiveError
from tradeleague.core.timezone import now_eastern


class RefreshCooldown:
    """
    Process-scoped last-refresh timestamp with its own lock.

    Independent of the per-symbol quote TTL. The window is measured on a
    monotonic clock; ``last_refreshed_at`` keeps the wall-clock time for display.
    """

    def __init__(
        self,
        window_seconds: float,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._window = window_seconds
        self._clock = clock
        self._lock = threading.Lock()
        self._last_started: Optional[float] = None
        self._last_refreshed_at: Optional[datetime] = None

    @property
    def window_seconds(self) -> float:
        return self._window

    @property
    def last_refreshed_at(self) -> Optional[datetime]:
        with self._lock:
            return self._last_refreshed_at

    def remaining(self) -> float:
        """Seconds until the next refresh is allowed (0 when allowed now)."""
        with self._lock:
            return self._remaining_locked()

    def can_refresh(self) -> bool:
        return self.remaining() <= 0

    @contextmanager
    def claim(self) -> Iterator[None]:
        """
        Reserve the refresh slot for the duration of the block.

        Raises CooldownActiveError when inside the window. The slot is taken
        before the block runs so concurrent callers cannot both refresh; if
        the block raises, the previous state is restored.
        """
        with self._lock:
            remaining = self._remaining_locked()
            if remaining > 0:
                raise CooldownActiveError(remaining)
            previous = (self._last_started, self._last_refreshed_at)
            self._last_started = self._clock()

        try:
            yield
        except BaseException:
            with self._lock:
                self._last_started, self._last_refreshed_at = previous
            raise

        with self._lock:
            self._last_refreshed_at = now_eastern()

    def reset(self) -> None:
        with self._lock:
            self._last_started = None
            self._last_refreshed_at = None

    def _remaining_locked(self) -> float:
        if self._last_started is None:
            return 0.0
        elapsed = self._clock() - self._last_started
        return max(0.0, self._window - elapsed)
