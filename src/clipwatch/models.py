"""Data models for clipwatch.

Defines the normalized structures built from Twitch Helix responses
(or from simulated data when Twitch is unreachable).
"""

from __future__ import annotations

from datetime import datetime
from datetime import timedelta
from datetime import timezone
from enum import StrEnum

import msgspec


class SnapshotSource(StrEnum):
    """Where a snapshot's data came from."""

    LIVE = "live"  # Helix responses
    SIMULATED = "simulated"  # Illustrative fallback data


class TriggerKind(StrEnum):
    """Auto-clip triggers, in evaluation priority order."""

    FOLLOWERS = "followers"
    VIEWERS = "viewers"


def _utc_now() -> datetime:
    return datetime.now(timezone.utc)


class ChannelSnapshot(msgspec.Struct, frozen=True):
    """One consistent view of channel and stream state."""

    id: str  # Broadcaster id ("simulated" for fallback data)
    login: str
    display_name: str
    is_live: bool
    viewer_count: int
    follower_count: int
    title: str
    game_name: str
    source: SnapshotSource
    started_at: datetime | None = None  # Stream start (UTC), None when offline
    profile_image_url: str | None = None
    fetched_at: datetime = msgspec.field(default_factory=_utc_now)

    @property
    def is_simulated(self) -> bool:
        return self.source == SnapshotSource.SIMULATED

    def uptime(self, now: datetime | None = None) -> timedelta | None:
        """Return how long the stream has been live."""
        if not self.is_live or self.started_at is None:
            return None
        now = now or datetime.now(self.started_at.tzinfo)
        return max(timedelta(0), now - self.started_at)


class ClipRequest(msgspec.Struct, frozen=True):
    """A decision to create a clip, produced by a fired trigger."""

    trigger: TriggerKind
    delta: int  # How far the metric moved past its baseline
    reason: str  # Human-readable, e.g. "7 new followers!"

    @property
    def title(self) -> str:
        return f"Auto-clip: {self.reason}"


class ClipRecord(msgspec.Struct, frozen=True):
    """A clip that Twitch accepted."""

    id: str
    edit_url: str
    title: str
    created_at: datetime
    broadcaster_name: str


def validate_snapshot(snapshot: ChannelSnapshot) -> list[str]:
    """Return list of validation errors, empty if valid."""
    errors = []
    if not snapshot.id:
        errors.append("broadcaster id required")
    if snapshot.viewer_count < 0:
        errors.append(f"viewer_count {snapshot.viewer_count} is negative")
    if snapshot.follower_count < 0:
        errors.append(f"follower_count {snapshot.follower_count} is negative")
    if snapshot.is_live and snapshot.started_at is None:
        errors.append("live snapshot without started_at")
    return errors


def format_time_ago(moment: datetime, now: datetime | None = None) -> str:
    """Format how long ago a moment was, for clip history display."""
    now = now or datetime.now(moment.tzinfo)
    minutes = int((now - moment).total_seconds() // 60)

    if minutes < 1:
        return "just now"
    if minutes < 60:
        return f"{minutes}m ago"

    hours = minutes // 60
    if hours < 24:
        return f"{hours}h ago"

    return f"{hours // 24}d ago"


def format_uptime(delta: timedelta | None) -> str:
    """Format stream uptime as a short duration string."""
    if delta is None:
        return ""

    total_seconds = int(delta.total_seconds())
    hours, remainder = divmod(total_seconds, 3600)
    minutes = remainder // 60

    if hours > 0:
        return f"{hours}h {minutes}m"
    return f"{minutes}m"
