"""Unit tests for AccountLockRegistry."""

import threading

from tradeleague.core.locks import AccountLockRegistry


class TestAccountLockRegistry:
    """Tests for per-account mutual exclusion."""

    def test_same_account_same_lock(self, locks: AccountLockRegistry):
        assert locks.lock_for("a") is locks.lock_for("a")
        assert len(locks) == 1

    def test_different_accounts_do_not_contend(self, locks: AccountLockRegistry):
        """
        GIVEN account "a" locked by this thread
        WHEN another thread takes account "b"
        THEN it does not block
        """
        acquired = threading.Event()

        def other():
            with locks.hold("b"):
                acquired.set()

        with locks.hold("a"):
            t = threading.Thread(target=other)
            t.start()
            assert acquired.wait(timeout=2)
            t.join()

    def test_hold_serializes_same_account(self, locks: AccountLockRegistry):
        counter = {"value": 0}

        def bump():
            for _ in range(1000):
                with locks.hold("a"):
                    current = counter["value"]
                    counter["value"] = current + 1

        threads = [threading.Thread(target=bump) for _ in range(4)]
        for t in threads:
            t.start()
        for t in threads:
            t.join()

        assert counter["value"] == 4000
