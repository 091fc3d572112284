"""
Unit tests for RefreshCooldown.

Tests cover:
- Window enforcement on a monotonic clock
- Atomic claim under concurrent callers
- Restoring the previous state when the guarded block fails
"""

import threading
import pytest

from tradeleague.core.cooldown import RefreshCooldown
from tradeleague.core.exceptions import CooldownActiveError

from tests.conftest import FakeClock


class TestRefreshCooldown:
    """Tests for the minimum-interval gate."""

    def test_first_claim_allowed(self, cooldown: RefreshCooldown):
        assert cooldown.can_refresh()

        with cooldown.claim():
            pass

        assert not cooldown.can_refresh()
        assert cooldown.last_refreshed_at is not None

    def test_claim_inside_window_raises_with_remaining(
        self,
        cooldown: RefreshCooldown,
        fake_clock: FakeClock,
    ):
        with cooldown.claim():
            pass
        fake_clock.advance(1800)

        with pytest.raises(CooldownActiveError) as exc_info:
            with cooldown.claim():
                pass

        assert exc_info.value.remaining_seconds == pytest.approx(1800)
        assert exc_info.value.code == "COOLDOWN_ACTIVE"

    def test_claim_allowed_after_window(self, cooldown: RefreshCooldown, fake_clock: FakeClock):
        with cooldown.claim():
            pass
        fake_clock.advance(3600)

        with cooldown.claim():
            pass

    def test_failed_block_restores_previous_state(self, cooldown: RefreshCooldown):
        """
        GIVEN no prior refresh
        WHEN the guarded block raises
        THEN the cooldown is not consumed
        """
        with pytest.raises(RuntimeError):
            with cooldown.claim():
                raise RuntimeError("boom")

        assert cooldown.can_refresh()
        assert cooldown.last_refreshed_at is None

    def test_only_one_concurrent_claim_wins(self, fake_clock: FakeClock):
        """
        GIVEN 10 threads claiming at once
        WHEN the window is open
        THEN exactly one claim succeeds and the rest see CooldownActiveError
        """
        cooldown = RefreshCooldown(60, clock=fake_clock)
        barrier = threading.Barrier(10)
        outcomes: list[str] = []
        outcomes_lock = threading.Lock()

        def worker():
            barrier.wait()
            try:
                with cooldown.claim():
                    outcome = "ok"
            except CooldownActiveError:
                outcome = "blocked"
            with outcomes_lock:
                outcomes.append(outcome)

        threads = [threading.Thread(target=worker) for _ in range(10)]
        for t in threads:
            t.start()
        for t in threads:
            t.join(timeout=5)

        assert outcomes.count("ok") == 1
        assert outcomes.count("blocked") == 9

    def test_reset(self, cooldown: RefreshCooldown):
        with cooldown.claim():
            pass

        cooldown.reset()

        assert cooldown.remaining() == 0
