"""Pytest configuration and shared fixtures for clipwatch tests."""

from __future__ import annotations

import random
from datetime import datetime, timedelta, timezone
from pathlib import Path
from typing import Callable
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest

from clipwatch.auth.credentials import CredentialManager
from clipwatch.config.settings import Config, TwitchConfig
from clipwatch.core.pipeline import RequestPipeline
from clipwatch.core.ratelimit import RateLimiter
from clipwatch.models import ChannelSnapshot, SnapshotSource

ENV_VARS = (
    "CLIPWATCH_CLIENT_ID",
    "CLIPWATCH_CLIENT_SECRET",
    "CLIPWATCH_CHANNEL",
    "CLIPWATCH_CONFIG_DIR",
    "CLIPWATCH_LOG_LEVEL",
    "TWITCH_CLIENT_ID",
    "TWITCH_CLIENT_SECRET",
)


class FakeClock:
    """Manually advanced stand-in for time.time."""

    def __init__(self, now: float = 1_700_000_000.0) -> None:
        self.now = now

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture(autouse=True)
def clean_env(monkeypatch: pytest.MonkeyPatch) -> None:
    """Keep the developer's environment out of config loading."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)


@pytest.fixture
def clock() -> FakeClock:
    """Fake clock starting at a fixed POSIX time."""
    return FakeClock()


@pytest.fixture
def rng() -> random.Random:
    """Seeded random generator for reproducible simulated data."""
    return random.Random(1234)


@pytest.fixture
def utc_now() -> datetime:
    """Fixed UTC datetime for consistent testing."""
    return datetime(2025, 1, 15, 12, 0, 0, tzinfo=timezone.utc)


@pytest.fixture
def live_snapshot(utc_now: datetime) -> ChannelSnapshot:
    """A live channel with known counts."""
    return ChannelSnapshot(
        id="141981764",
        login="twitchdev",
        display_name="TwitchDev",
        is_live=True,
        viewer_count=120,
        follower_count=1000,
        title="Building things",
        game_name="Software and Game Development",
        source=SnapshotSource.LIVE,
        started_at=utc_now - timedelta(hours=1, minutes=30),
        fetched_at=utc_now,
    )


@pytest.fixture
def offline_snapshot(utc_now: datetime) -> ChannelSnapshot:
    """An offline channel."""
    return ChannelSnapshot(
        id="141981764",
        login="twitchdev",
        display_name="TwitchDev",
        is_live=False,
        viewer_count=0,
        follower_count=1000,
        title="Stream offline",
        game_name="",
        source=SnapshotSource.LIVE,
        fetched_at=utc_now,
    )


@pytest.fixture
def simulated_snapshot(utc_now: datetime) -> ChannelSnapshot:
    """Live-looking simulated data."""
    return ChannelSnapshot(
        id="simulated",
        login="twitchdev",
        display_name="Twitchdev",
        is_live=True,
        viewer_count=80,
        follower_count=900,
        title="Hanging out with chat",
        game_name="Just Chatting",
        source=SnapshotSource.SIMULATED,
        started_at=utc_now - timedelta(minutes=10),
        fetched_at=utc_now,
    )


@pytest.fixture
def sample_config() -> Config:
    """Configuration with every Twitch setting present."""
    return Config(
        twitch=TwitchConfig(
            client_id="test-client-id",
            client_secret="test-client-secret",
            channel="twitchdev",
        )
    )


@pytest.fixture
def temp_config_dir(tmp_path: Path, monkeypatch: pytest.MonkeyPatch) -> Path:
    """Temporary config directory for testing."""
    config_dir = tmp_path / "config"
    config_dir.mkdir()
    monkeypatch.setenv("CLIPWATCH_CONFIG_DIR", str(config_dir))
    return config_dir


@pytest.fixture
def make_pipeline(clock: FakeClock) -> Callable[..., RequestPipeline]:
    """Factory for a real pipeline over the given httpx client."""

    def factory(
        client: httpx.AsyncClient, rate_limiter: RateLimiter | None = None
    ) -> RequestPipeline:
        credentials = CredentialManager(
            client, "test-client-id", "test-client-secret", clock=clock
        )
        return RequestPipeline(
            client, credentials, rate_limiter or RateLimiter(clock=clock)
        )

    return factory


@pytest.fixture
def mock_pipeline() -> MagicMock:
    """Pipeline stand-in whose call() is an AsyncMock."""
    pipeline = MagicMock(spec=RequestPipeline)
    pipeline.call = AsyncMock(return_value={})
    return pipeline


@pytest.fixture
def token_payload() -> dict:
    """Successful client-credentials response body."""
    return {"access_token": "app-token", "expires_in": 3600, "token_type": "bearer"}
