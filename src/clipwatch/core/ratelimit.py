"""Local tracking of the Twitch Helix rate-limit budget."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from collections.abc import Mapping
from dataclasses import dataclass
from dataclasses import replace

logger = logging.getLogger(__name__)

# Helix app tokens get 800 points per rolling minute.
DEFAULT_RATE_LIMIT = 800

LIMIT_HEADER = "Ratelimit-Limit"
REMAINING_HEADER = "Ratelimit-Remaining"
RESET_HEADER = "Ratelimit-Reset"


@dataclass
class RateBudget:
    """Remaining request budget and when it resets (POSIX seconds)."""

    limit: int = DEFAULT_RATE_LIMIT
    remaining: int = DEFAULT_RATE_LIMIT
    reset_at: float = 0.0


def _parse_int(value: str | None) -> int | None:
    if value is None or not value.strip():
        return None
    try:
        return int(float(value))
    except ValueError:
        return None


class RateLimiter:
    """Gates outgoing Helix calls on the last observed budget.

    The budget only changes through observe(); missing headers never
    reset it to defaults mid-session.
    """

    def __init__(
        self,
        budget: RateBudget | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._budget = budget or RateBudget()
        self._clock = clock

    @property
    def budget(self) -> RateBudget:
        return replace(self._budget)

    def can_proceed(self) -> bool:
        """Return False while the budget is exhausted and not yet reset."""
        if self._budget.remaining > 0:
            return True

        if self._clock() < self._budget.reset_at:
            return False

        # Window rolled over
        self._budget.remaining = self._budget.limit
        return True

    def reset_in(self) -> float | None:
        """Seconds until the budget resets, or None if it already has."""
        remaining = self._budget.reset_at - self._clock()
        if remaining <= 0:
            return None
        return remaining

    def observe(
        self,
        remaining_header: str | None,
        reset_header: str | None,
        limit_header: str | None = None,
    ) -> None:
        """Update the budget from rate-limit header values."""
        limit = _parse_int(limit_header)
        if limit is not None and limit > 0:
            self._budget.limit = limit

        remaining = _parse_int(remaining_header)
        if remaining is not None:
            self._budget.remaining = max(0, remaining)

        reset_at = _parse_int(reset_header)
        if reset_at is not None:
            self._budget.reset_at = float(reset_at)

        if self._budget.remaining == 0:
            logger.warning(
                "Rate limit budget exhausted, resets in %.0fs",
                self.reset_in() or 0,
            )

    def observe_headers(self, headers: Mapping[str, str]) -> None:
        """Update the budget from a response's headers."""
        self.observe(
            headers.get(REMAINING_HEADER),
            headers.get(RESET_HEADER),
            headers.get(LIMIT_HEADER),
        )
