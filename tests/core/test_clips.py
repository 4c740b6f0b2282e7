"""Tests for core/clips.py (clip creation and history)."""

from __future__ import annotations

import msgspec
import pytest

from clipwatch.core.clips import ClipService
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import ApiErrorKind
from clipwatch.errors.types import ClipError
from clipwatch.errors.types import ClipErrorKind

CLIP_RESPONSE = {
    "data": [
        {
            "id": "FiveWordsForClipSlug",
            "edit_url": "https://clips.twitch.tv/FiveWordsForClipSlug/edit",
        }
    ]
}


class TestCreateClip:
    """Tests for ClipService.create_clip."""

    @pytest.mark.asyncio
    async def test_creates_clip(self, mock_pipeline, live_snapshot):
        mock_pipeline.call.return_value = CLIP_RESPONSE
        service = ClipService(mock_pipeline)

        record = await service.create_clip("Auto-clip: 5 new followers!", live_snapshot)

        assert record.id == "FiveWordsForClipSlug"
        assert record.edit_url.endswith("/edit")
        assert record.title == "Auto-clip: 5 new followers!"
        assert record.broadcaster_name == "TwitchDev"
        assert service.history == (record,)
        mock_pipeline.call.assert_awaited_once_with(
            "clips", method="POST", params={"broadcaster_id": "141981764"}
        )

    @pytest.mark.asyncio
    async def test_has_delay_forwarded(self, mock_pipeline, live_snapshot):
        mock_pipeline.call.return_value = CLIP_RESPONSE

        await ClipService(mock_pipeline).create_clip("t", live_snapshot, has_delay=True)

        _, kwargs = mock_pipeline.call.call_args
        assert kwargs["params"]["has_delay"] == "true"

    @pytest.mark.asyncio
    async def test_offline_rejected_without_request(
        self, mock_pipeline, offline_snapshot
    ):
        with pytest.raises(ClipError) as exc_info:
            await ClipService(mock_pipeline).create_clip("t", offline_snapshot)

        assert exc_info.value.kind is ClipErrorKind.NOT_LIVE
        mock_pipeline.call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_simulated_rejected(self, mock_pipeline, simulated_snapshot):
        with pytest.raises(ClipError) as exc_info:
            await ClipService(mock_pipeline).create_clip("t", simulated_snapshot)

        assert exc_info.value.kind is ClipErrorKind.INVALID_SNAPSHOT
        mock_pipeline.call.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_invalid_snapshot_rejected(self, mock_pipeline, live_snapshot):
        broken = msgspec.structs.replace(live_snapshot, started_at=None)

        with pytest.raises(ClipError) as exc_info:
            await ClipService(mock_pipeline).create_clip("t", broken)

        assert exc_info.value.kind is ClipErrorKind.INVALID_SNAPSHOT
        assert "started_at" in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_upstream_error_wrapped(self, mock_pipeline, live_snapshot):
        api_error = ApiError(ApiErrorKind.FORBIDDEN, status=403, endpoint="clips")
        mock_pipeline.call.side_effect = api_error
        service = ClipService(mock_pipeline)

        with pytest.raises(ClipError) as exc_info:
            await service.create_clip("t", live_snapshot)

        assert exc_info.value.kind is ClipErrorKind.UPSTREAM
        assert exc_info.value.cause is api_error
        assert service.history == ()

    @pytest.mark.asyncio
    async def test_empty_response_is_upstream_error(self, mock_pipeline, live_snapshot):
        mock_pipeline.call.return_value = {"data": []}

        with pytest.raises(ClipError) as exc_info:
            await ClipService(mock_pipeline).create_clip("t", live_snapshot)

        assert exc_info.value.kind is ClipErrorKind.UPSTREAM

    @pytest.mark.asyncio
    async def test_non_object_entry_is_upstream_error(
        self, mock_pipeline, live_snapshot
    ):
        mock_pipeline.call.return_value = {"data": ["oops"]}
        service = ClipService(mock_pipeline)

        with pytest.raises(ClipError) as exc_info:
            await service.create_clip("t", live_snapshot)

        assert exc_info.value.kind is ClipErrorKind.UPSTREAM
        assert isinstance(exc_info.value.__cause__, msgspec.ValidationError)
        assert service.history == ()

    @pytest.mark.asyncio
    async def test_entry_without_id_is_upstream_error(
        self, mock_pipeline, live_snapshot
    ):
        mock_pipeline.call.return_value = {"data": [{"edit_url": "x"}]}
        service = ClipService(mock_pipeline)

        with pytest.raises(ClipError) as exc_info:
            await service.create_clip("t", live_snapshot)

        assert exc_info.value.kind is ClipErrorKind.UPSTREAM
        assert service.history == ()


class TestHistory:
    """Tests for clip history ordering."""

    @pytest.mark.asyncio
    async def test_newest_first(self, mock_pipeline, live_snapshot):
        mock_pipeline.call.side_effect = [
            {"data": [{"id": f"clip{i}", "edit_url": f"https://e/{i}"}]}
            for i in range(7)
        ]
        service = ClipService(mock_pipeline)

        for i in range(7):
            await service.create_clip(f"clip {i}", live_snapshot)

        assert [r.id for r in service.history] == [f"clip{i}" for i in range(6, -1, -1)]
        assert [r.id for r in service.recent()] == ["clip6", "clip5", "clip4", "clip3", "clip2"]
        assert [r.id for r in service.recent(2)] == ["clip6", "clip5"]
        assert service.recent(0) == []
