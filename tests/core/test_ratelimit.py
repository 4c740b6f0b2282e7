"""Tests for core/ratelimit.py (Helix budget tracking)."""

from __future__ import annotations

import httpx

from clipwatch.core.ratelimit import DEFAULT_RATE_LIMIT
from clipwatch.core.ratelimit import RateBudget
from clipwatch.core.ratelimit import RateLimiter


class TestRateBudget:
    """Tests for RateBudget defaults."""

    def test_defaults_to_platform_budget(self):
        """A fresh budget is full with no reset time."""
        budget = RateBudget()

        assert budget.limit == DEFAULT_RATE_LIMIT == 800
        assert budget.remaining == 800
        assert budget.reset_at == 0.0


class TestCanProceed:
    """Tests for RateLimiter.can_proceed."""

    def test_fresh_limiter_proceeds(self, clock):
        """A fresh limiter allows requests."""
        assert RateLimiter(clock=clock).can_proceed() is True

    def test_exhausted_before_reset_blocks(self, clock):
        """No requests while the budget is spent and the reset is ahead."""
        limiter = RateLimiter(
            RateBudget(remaining=0, reset_at=clock() + 30), clock=clock
        )

        assert limiter.can_proceed() is False

    def test_exhausted_after_reset_refills(self, clock):
        """Once the reset time passes the budget refills to its limit."""
        limiter = RateLimiter(
            RateBudget(limit=800, remaining=0, reset_at=clock() + 30), clock=clock
        )
        clock.advance(31)

        assert limiter.can_proceed() is True
        assert limiter.budget.remaining == 800

    def test_reset_exactly_now_proceeds(self, clock):
        """Reset time equal to now counts as rolled over."""
        limiter = RateLimiter(RateBudget(remaining=0, reset_at=clock()), clock=clock)

        assert limiter.can_proceed() is True


class TestObserve:
    """Tests for RateLimiter.observe."""

    def test_updates_remaining_and_reset(self, clock):
        """Valid header values replace the budget."""
        limiter = RateLimiter(clock=clock)

        limiter.observe("42", str(int(clock() + 60)))

        assert limiter.budget.remaining == 42
        assert limiter.budget.reset_at == int(clock() + 60)

    def test_missing_headers_leave_budget_unchanged(self, clock):
        """Absent headers never reset the budget to defaults."""
        limiter = RateLimiter(RateBudget(remaining=10, reset_at=5.0), clock=clock)

        limiter.observe(None, None)

        assert limiter.budget.remaining == 10
        assert limiter.budget.reset_at == 5.0

    def test_malformed_headers_are_ignored(self, clock):
        """Unparseable values are dropped."""
        limiter = RateLimiter(RateBudget(remaining=10, reset_at=5.0), clock=clock)

        limiter.observe("lots", "", "abc")

        assert limiter.budget == RateBudget(remaining=10, reset_at=5.0)

    def test_negative_remaining_clamped_to_zero(self, clock):
        """Remaining never goes below zero."""
        limiter = RateLimiter(clock=clock)

        limiter.observe("-3", None)

        assert limiter.budget.remaining == 0

    def test_limit_header_updates_refill_amount(self, clock):
        """A new limit is used when the window rolls over."""
        limiter = RateLimiter(clock=clock)
        limiter.observe("0", str(int(clock() + 10)), "30")
        clock.advance(11)

        assert limiter.can_proceed() is True
        assert limiter.budget.remaining == 30

    def test_observe_headers_reads_twitch_names(self, clock):
        """Response headers are matched case-insensitively."""
        limiter = RateLimiter(clock=clock)
        headers = httpx.Headers(
            {
                "ratelimit-limit": "800",
                "ratelimit-remaining": "0",
                "ratelimit-reset": str(int(clock() + 20)),
            }
        )

        limiter.observe_headers(headers)

        assert limiter.can_proceed() is False
        assert limiter.reset_in() == 20

    def test_budget_is_a_copy(self, clock):
        """Mutating the returned budget does not affect the limiter."""
        limiter = RateLimiter(clock=clock)

        limiter.budget.remaining = 0

        assert limiter.budget.remaining == DEFAULT_RATE_LIMIT


class TestResetIn:
    """Tests for RateLimiter.reset_in."""

    def test_none_when_reset_passed(self, clock):
        """No wait once the reset time is behind us."""
        limiter = RateLimiter(RateBudget(reset_at=clock() - 1), clock=clock)

        assert limiter.reset_in() is None

    def test_seconds_until_reset(self, clock):
        """Returns the remaining seconds."""
        limiter = RateLimiter(RateBudget(reset_at=clock() + 12.5), clock=clock)

        assert limiter.reset_in() == 12.5
