"""Auto-clip trigger evaluation with a shared cooldown."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable
from dataclasses import dataclass
from dataclasses import replace

import msgspec

from clipwatch.config.settings import TriggerConfig
from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRequest
from clipwatch.models import TriggerKind

logger = logging.getLogger(__name__)


@dataclass
class TriggerState:
    """Baselines the triggers measure against, and the last clip time."""

    baseline_viewers: int = 0
    baseline_followers: int = 0
    last_clip_at: float | None = None  # POSIX seconds, None = never


class TriggerEvaluator:
    """Decides, once per poll, whether a snapshot warrants a clip.

    Triggers are checked in fixed priority order (followers, then viewers)
    and at most one fires per evaluation. Every fired trigger starts the
    cooldown, whatever its cause.
    """

    def __init__(
        self,
        config: TriggerConfig | None = None,
        *,
        state: TriggerState | None = None,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config or TriggerConfig()
        self._state = state or TriggerState()
        self._clock = clock
        self._enabled = False

    @property
    def config(self) -> TriggerConfig:
        return self._config

    @property
    def state(self) -> TriggerState:
        return replace(self._state)

    @property
    def enabled(self) -> bool:
        return self._enabled

    def enable(self) -> None:
        self._enabled = True

    def disable(self) -> None:
        self._enabled = False

    def update_config(self, **changes) -> TriggerConfig:
        """Change trigger toggles, thresholds or the cooldown.

        Raises:
            TypeError: If a key is not a TriggerConfig field
        """
        self._config = msgspec.structs.replace(self._config, **changes)
        logger.debug("Trigger config updated: %s", changes)
        return self._config

    def set_baseline(self, snapshot: ChannelSnapshot) -> None:
        """Measure future deltas from this snapshot."""
        self._state.baseline_viewers = snapshot.viewer_count
        self._state.baseline_followers = snapshot.follower_count

    def record_clip(self, at: float | None = None) -> None:
        """Start the cooldown for a clip created outside evaluate()."""
        self._state.last_clip_at = self._clock() if at is None else at

    def cooldown_remaining(self) -> float:
        """Seconds until triggers may fire again (0 when ready)."""
        if self._state.last_clip_at is None:
            return 0.0
        elapsed = self._clock() - self._state.last_clip_at
        return max(0.0, self._config.cooldown_seconds - elapsed)

    def evaluate(self, snapshot: ChannelSnapshot) -> ClipRequest | None:
        """Return a ClipRequest if a trigger fires for this snapshot.

        Returns None without touching state when disabled, offline or
        cooling down.
        """
        if not self._enabled or not snapshot.is_live:
            return None

        now = self._clock()
        if (
            self._state.last_clip_at is not None
            and now - self._state.last_clip_at < self._config.cooldown_seconds
        ):
            return None

        request = self._check_followers(snapshot) or self._check_viewers(snapshot)
        if request is None:
            return None

        self._state.last_clip_at = now
        logger.info("Trigger %s fired: %s", request.trigger, request.reason)
        return request

    def _check_followers(self, snapshot: ChannelSnapshot) -> ClipRequest | None:
        if not self._config.new_followers:
            return None

        delta = snapshot.follower_count - self._state.baseline_followers
        if delta < self._config.follower_threshold:
            return None

        self._state.baseline_followers = snapshot.follower_count
        return ClipRequest(
            trigger=TriggerKind.FOLLOWERS,
            delta=delta,
            reason=f"{delta} new followers!",
        )

    def _check_viewers(self, snapshot: ChannelSnapshot) -> ClipRequest | None:
        if not self._config.viewer_spikes:
            return None

        delta = snapshot.viewer_count - self._state.baseline_viewers
        if delta < self._config.viewer_threshold:
            return None

        self._state.baseline_viewers = snapshot.viewer_count
        return ClipRequest(
            trigger=TriggerKind.VIEWERS,
            delta=delta,
            reason=f"Viewer spike of {delta}!",
        )
