"""Per-account mutual exclusion."""

import threading
from contextlib import contextmanager
from typing import Iterator


class AccountLockRegistry:
    """
    Hands out one lock per account id.

    All mutations of an account's cash, positions and transaction log run
    while holding that account's lock. Readers that need a consistent
    cash + positions snapshot take the same lock briefly.
    Locks for different accounts never contend with each other.
    """

    def __init__(self):
        self._guard = threading.Lock()
        self._locks: dict[str, threading.Lock] = {}

    def lock_for(self, account_id: str) -> threading.Lock:
        """Return the lock for an account, creating it on first use."""
        with self._guard:
            lock = self._locks.get(account_id)
            if lock is None:
                lock = threading.Lock()
                self._locks[account_id] = lock
            return lock

    @contextmanager
    def hold(self, account_id: str) -> Iterator[None]:
        """Hold the account's lock for the duration of the block."""
        lock = self.lock_for(account_id)
        with lock:
            yield

    def __len__(self) -> int:
        with self._guard:
            return len(self._locks)

