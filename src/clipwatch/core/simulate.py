"""Illustrative channel data for when Twitch cannot be reached."""

from __future__ import annotations

import random
from datetime import datetime
from datetime import timedelta
from datetime import timezone

from clipwatch.models import ChannelSnapshot
from clipwatch.models import SnapshotSource

SIMULATED_ID = "simulated"

TITLES = (
    "IRL - exploring the city!",
    "Hanging out with chat",
    "Relaxed gameplay",
    "Chill stream - come say hi!",
    "Trying out new things",
    "Hanging out with you all!",
    "Laid-back live",
    "Playing and chatting",
)

CATEGORIES = (
    "IRL",
    "Just Chatting",
    "Software and Game Development",
    "Talk Shows & Podcasts",
    "Music",
    "Art",
    "Retro",
)

LIVE_PROBABILITY = 0.7


class SnapshotSimulator:
    """Seedable generator of plausible channel data.

    Pass a seeded ``random.Random`` (or ``seed``) for reproducible output.
    """

    def __init__(
        self,
        rng: random.Random | None = None,
        *,
        seed: int | None = None,
    ) -> None:
        self._rng = rng or random.Random(seed)

    def snapshot(self, login: str, now: datetime | None = None) -> ChannelSnapshot:
        """Build a simulated snapshot for a channel login."""
        now = now or datetime.now(timezone.utc)
        login = login or "streamer"
        display_name = login[0].upper() + login[1:]

        followers = self.follower_baseline() + self._rng.randrange(0, 50)
        viewers = self._rng.randrange(10, 110) + self._rng.randrange(0, 30)
        is_live = self._rng.random() < LIVE_PROBABILITY
        started_at = now - timedelta(seconds=self._rng.random() * 3600)

        return ChannelSnapshot(
            id=SIMULATED_ID,
            login=login,
            display_name=display_name,
            is_live=is_live,
            viewer_count=viewers,
            follower_count=followers,
            title=self._rng.choice(TITLES),
            game_name=self._rng.choice(CATEGORIES),
            source=SnapshotSource.SIMULATED,
            started_at=started_at,
            profile_image_url=(
                "https://static-cdn.jtvnw.net/jtv_user_pictures/"
                f"{login}-profile_image-300x300.png"
            ),
            fetched_at=now,
        )

    def follower_estimate(self, viewer_count: int) -> int:
        """Guess a follower total from the current audience (10x to 50x)."""
        return int(viewer_count * self._rng.uniform(10, 50))

    def follower_baseline(self) -> int:
        """Random follower total in [500, 2500)."""
        return self._rng.randrange(500, 2500)
