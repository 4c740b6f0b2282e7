"""Tests for core/http.py."""

from __future__ import annotations

import httpx
import pytest

from clipwatch.config.settings import FetchConfig
from clipwatch.core.http import create_http_client
from clipwatch.core.http import get_timeout_config


def test_timeout_from_config():
    timeout = get_timeout_config(FetchConfig(timeout=12))

    assert timeout.read == 12
    assert timeout.connect == 10.0


def test_default_timeout():
    assert get_timeout_config().read == 30.0


@pytest.mark.asyncio
async def test_client_follows_redirects():
    async with create_http_client(FetchConfig(timeout=5)) as client:
        assert isinstance(client, httpx.AsyncClient)
        assert client.follow_redirects is True
        assert client.timeout.read == 5
