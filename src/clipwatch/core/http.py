"""HTTP client construction for clipwatch."""

import httpx

from clipwatch.config.settings import FetchConfig


def get_timeout_config(fetch: FetchConfig | None = None) -> httpx.Timeout:
    """Get timeout configuration from settings."""
    fetch = fetch or FetchConfig()
    return httpx.Timeout(fetch.timeout, connect=10.0)


def create_http_client(fetch: FetchConfig | None = None) -> httpx.AsyncClient:
    """Create the HTTP client shared by every clipwatch component.

    The caller owns the client and must close it:

        async with create_http_client(config.fetch) as client:
            watcher = build_watcher(config, client)
    """
    limits = httpx.Limits(
        max_connections=10,
        max_keepalive_connections=5,
    )
    return httpx.AsyncClient(
        timeout=get_timeout_config(fetch),
        limits=limits,
        follow_redirects=True,
    )
