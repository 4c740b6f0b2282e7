"""Tests for models.py (snapshot, clip and formatting helpers)."""

from __future__ import annotations

from datetime import timedelta

import msgspec
import pytest

from clipwatch.models import ChannelSnapshot
from clipwatch.models import ClipRequest
from clipwatch.models import SnapshotSource
from clipwatch.models import TriggerKind
from clipwatch.models import format_time_ago
from clipwatch.models import format_uptime
from clipwatch.models import validate_snapshot


class TestChannelSnapshot:
    """Tests for ChannelSnapshot."""

    def test_is_frozen(self, live_snapshot):
        with pytest.raises(AttributeError):
            live_snapshot.viewer_count = 1

    def test_source_flags(self, live_snapshot, simulated_snapshot):
        assert live_snapshot.is_simulated is False
        assert simulated_snapshot.is_simulated is True

    def test_uptime(self, live_snapshot, utc_now):
        assert live_snapshot.uptime(utc_now) == timedelta(hours=1, minutes=30)

    def test_uptime_offline(self, offline_snapshot, utc_now):
        assert offline_snapshot.uptime(utc_now) is None

    def test_json_encoding(self, live_snapshot):
        data = msgspec.json.decode(msgspec.json.encode(live_snapshot))

        assert data["source"] == "live"
        assert data["started_at"] == "2025-01-15T10:30:00Z"
        assert data["follower_count"] == 1000


class TestValidateSnapshot:
    """Tests for validate_snapshot."""

    def test_valid(self, live_snapshot, offline_snapshot):
        assert validate_snapshot(live_snapshot) == []
        assert validate_snapshot(offline_snapshot) == []

    def test_collects_every_problem(self, live_snapshot):
        broken = msgspec.structs.replace(
            live_snapshot, id="", viewer_count=-1, follower_count=-2, started_at=None
        )

        errors = validate_snapshot(broken)

        assert len(errors) == 4


class TestClipRequest:
    """Tests for ClipRequest."""

    def test_title(self):
        request = ClipRequest(
            trigger=TriggerKind.VIEWERS, delta=75, reason="Viewer spike of 75!"
        )

        assert request.title == "Auto-clip: Viewer spike of 75!"


class TestFormatTimeAgo:
    """Tests for format_time_ago."""

    @pytest.mark.parametrize(
        ("elapsed", "expected"),
        [
            (timedelta(seconds=30), "just now"),
            (timedelta(minutes=5), "5m ago"),
            (timedelta(minutes=59, seconds=59), "59m ago"),
            (timedelta(hours=3, minutes=10), "3h ago"),
            (timedelta(days=2, hours=1), "2d ago"),
        ],
    )
    def test_buckets(self, utc_now, elapsed, expected):
        assert format_time_ago(utc_now - elapsed, utc_now) == expected


class TestFormatUptime:
    """Tests for format_uptime."""

    def test_hours_and_minutes(self):
        assert format_uptime(timedelta(hours=2, minutes=5)) == "2h 5m"

    def test_minutes_only(self):
        assert format_uptime(timedelta(minutes=42)) == "42m"

    def test_none(self):
        assert format_uptime(None) == ""


def test_snapshot_source_values():
    assert SnapshotSource.LIVE == "live"
    assert SnapshotSource.SIMULATED == "simulated"
