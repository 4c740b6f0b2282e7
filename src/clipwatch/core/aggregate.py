"""Channel snapshot aggregation with simulated-data fallback."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable
from datetime import datetime

import msgspec

from clipwatch.core.pipeline import RequestPipeline
from clipwatch.core.simulate import SnapshotSimulator
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import AuthError
from clipwatch.models import ChannelSnapshot
from clipwatch.models import SnapshotSource

logger = logging.getLogger(__name__)

# Follower total endpoints, in order of preference: (endpoint, id parameter)
FOLLOWER_ENDPOINTS: tuple[tuple[str, str], ...] = (
    ("channels/followers", "broadcaster_id"),
    ("users/follows", "to_id"),
)


class UserInfo(msgspec.Struct, frozen=True):
    """Subset of a Helix ``users`` entry."""

    id: str
    login: str
    display_name: str
    profile_image_url: str = ""


class StreamInfo(msgspec.Struct, frozen=True):
    """Subset of a Helix ``streams`` entry."""

    viewer_count: int = 0
    title: str = ""
    game_name: str = ""
    started_at: datetime | None = None


class ChannelDataAggregator:
    """Builds one ChannelSnapshot per poll from several Helix calls.

    fetch_snapshot() never raises: when the channel cannot be resolved the
    snapshot is simulated, and partial failures degrade individual fields.
    """

    def __init__(
        self,
        pipeline: RequestPipeline,
        login: str,
        *,
        simulator: SnapshotSimulator | None = None,
        identity_ttl: float = 0.0,
        followers_ttl: float = 0.0,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._pipeline = pipeline
        self.login = login.strip().lower()
        self._simulator = simulator or SnapshotSimulator()
        self._identity_ttl = identity_ttl
        self._followers_ttl = followers_ttl
        self._clock = clock

        self._identity: UserInfo | None = None
        self._identity_at = 0.0
        self._followers: int | None = None
        self._followers_at = 0.0
        self._last_snapshot: ChannelSnapshot | None = None

    @property
    def last_snapshot(self) -> ChannelSnapshot | None:
        """The most recent snapshot returned by fetch_snapshot()."""
        return self._last_snapshot

    async def fetch_snapshot(self) -> ChannelSnapshot:
        """Fetch the current channel state, falling back to simulated data."""
        try:
            snapshot = await self._fetch_live_snapshot()
        except Exception:
            logger.exception("Failed to assemble snapshot for %s", self.login)
            snapshot = None

        if snapshot is None:
            logger.info("Using simulated data for %s", self.login)
            snapshot = self._simulator.snapshot(self.login)

        self._last_snapshot = snapshot
        return snapshot

    async def check_connection(self) -> bool:
        """Test token exchange, channel lookup and a full snapshot fetch."""
        try:
            await self._pipeline.credentials.refresh()
        except AuthError as e:
            logger.error("Token exchange failed: %s", e)
            return False

        if await self._resolve_identity(use_cache=False) is None:
            logger.error("Channel %r could not be resolved", self.login)
            return False

        snapshot = await self.fetch_snapshot()
        return snapshot.source == SnapshotSource.LIVE

    async def _fetch_live_snapshot(self) -> ChannelSnapshot | None:
        identity = await self._resolve_identity()
        if identity is None:
            return None

        stream, followers = await asyncio.gather(
            self._fetch_stream(identity.id),
            self._fetch_follower_total(identity.id),
        )

        viewer_count = stream.viewer_count if stream else 0
        if followers is None:
            followers = self._estimate_followers(viewer_count)

        return ChannelSnapshot(
            id=identity.id,
            login=identity.login,
            display_name=identity.display_name,
            is_live=stream is not None,
            viewer_count=max(0, viewer_count),
            follower_count=max(0, followers),
            title=stream.title if stream else "Stream offline",
            game_name=stream.game_name if stream else "",
            source=SnapshotSource.LIVE,
            started_at=stream.started_at if stream else None,
            profile_image_url=identity.profile_image_url or None,
        )

    async def _resolve_identity(self, use_cache: bool = True) -> UserInfo | None:
        now = self._clock()
        if (
            use_cache
            and self._identity is not None
            and now - self._identity_at < self._identity_ttl
        ):
            return self._identity

        try:
            data = await self._pipeline.call("users", params={"login": self.login})
        except ApiError as e:
            logger.warning("User lookup for %s failed: %s", self.login, e)
            return None

        users = data.get("data") or []
        if not users:
            logger.warning("Channel %r not found", self.login)
            return None

        try:
            identity = msgspec.convert(users[0], type=UserInfo)
        except msgspec.ValidationError as e:
            logger.warning("Unexpected user payload for %s: %s", self.login, e)
            return None

        self._identity = identity
        self._identity_at = now
        return identity

    async def _fetch_stream(self, user_id: str) -> StreamInfo | None:
        """Return the live stream, or None when offline or unavailable."""
        try:
            data = await self._pipeline.call("streams", params={"user_id": user_id})
        except ApiError as e:
            logger.warning("Stream lookup failed, treating channel as offline: %s", e)
            return None

        streams = data.get("data") or []
        if not streams:
            return None

        try:
            return msgspec.convert(streams[0], type=StreamInfo)
        except msgspec.ValidationError as e:
            logger.warning("Unexpected stream payload: %s", e)
            return None

    async def _fetch_follower_total(self, user_id: str) -> int | None:
        """Return the follower total from the first endpoint that answers."""
        now = self._clock()
        if self._followers is not None and now - self._followers_at < self._followers_ttl:
            return self._followers

        for endpoint, id_param in FOLLOWER_ENDPOINTS:
            try:
                data = await self._pipeline.call(
                    endpoint, params={id_param: user_id, "first": 1}
                )
            except ApiError as e:
                logger.debug("Follower lookup via %s failed: %s", endpoint, e)
                continue

            total = data.get("total")
            if isinstance(total, int) and not isinstance(total, bool):
                self._followers = total
                self._followers_at = now
                return total

            logger.debug("Follower lookup via %s returned no total", endpoint)

        return None

    def _estimate_followers(self, viewer_count: int) -> int:
        # Heuristic of last resort; never a real count
        if viewer_count > 0:
            estimate = self._simulator.follower_estimate(viewer_count)
            logger.warning(
                "Follower count unavailable, estimating %d from %d viewers",
                estimate,
                viewer_count,
            )
            return estimate

        baseline = self._simulator.follower_baseline()
        logger.warning("Follower count unavailable, using baseline %d", baseline)
        return baseline
