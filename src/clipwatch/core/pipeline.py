"""Authenticated, rate-limited Helix request pipeline."""

from __future__ import annotations

import logging
from typing import Any

import httpx

from clipwatch.auth.credentials import CredentialManager
from clipwatch.config.settings import TWITCH_API_BASE_URL
from clipwatch.core.ratelimit import RateLimiter
from clipwatch.errors.http import auth_error_to_api_error
from clipwatch.errors.http import extract_error_message
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import ApiErrorKind
from clipwatch.errors.types import AuthError
from clipwatch.errors.types import classify_http_status

logger = logging.getLogger(__name__)

MAX_AUTH_RETRIES = 1


class RequestPipeline:
    """Issues Helix calls through the rate limiter and credential manager."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        credentials: CredentialManager,
        rate_limiter: RateLimiter,
        *,
        base_url: str = TWITCH_API_BASE_URL,
    ) -> None:
        self._client = client
        self.credentials = credentials
        self.rate_limiter = rate_limiter
        self._base_url = base_url.rstrip("/")

    async def call(
        self,
        endpoint: str,
        *,
        method: str = "GET",
        params: dict[str, Any] | None = None,
        max_auth_retries: int = MAX_AUTH_RETRIES,
    ) -> dict:
        """Call a Helix endpoint and return its decoded JSON body.

        A 401 invalidates the credential, refreshes it and repeats the call;
        this happens at most ``max_auth_retries`` times.

        Args:
            endpoint: Path below the Helix base URL, e.g. "users"
            method: HTTP method
            params: Query parameters
            max_auth_retries: Refresh-and-retry budget for 401 responses

        Returns:
            Decoded JSON object ({} for empty bodies)

        Raises:
            ApiError: RATE_LIMITED, FORBIDDEN, HTTP or NETWORK
        """
        auth_retries = 0

        while True:
            if not self.rate_limiter.can_proceed():
                raise ApiError(ApiErrorKind.RATE_LIMITED, endpoint=endpoint)

            if not self.credentials.is_valid():
                await self._refresh(endpoint)

            response = await self._send(method, endpoint, params)
            self.rate_limiter.observe_headers(response.headers)

            if response.status_code == 401:
                if auth_retries < max_auth_retries:
                    auth_retries += 1
                    logger.info("Access token rejected for %s, refreshing", endpoint)
                    self.credentials.invalidate()
                    await self._refresh(endpoint)
                    continue
                raise self._status_error(response, endpoint, ApiErrorKind.HTTP)

            if not response.is_success:
                kind = classify_http_status(response.status_code)
                raise self._status_error(response, endpoint, kind)

            return self._decode(response, endpoint)

    async def _refresh(self, endpoint: str) -> None:
        try:
            await self.credentials.refresh()
        except AuthError as e:
            raise auth_error_to_api_error(e, endpoint) from e

    async def _send(
        self, method: str, endpoint: str, params: dict[str, Any] | None
    ) -> httpx.Response:
        credential = self.credentials.credential
        token = credential.token if credential else ""
        headers = {
            "Client-ID": self.credentials.client_id,
            "Authorization": f"Bearer {token}",
        }

        try:
            return await self._client.request(
                method,
                f"{self._base_url}/{endpoint.lstrip('/')}",
                params=params,
                headers=headers,
            )
        except httpx.TransportError as e:
            logger.warning("%s %s failed: %s", method, endpoint, e)
            raise ApiError(ApiErrorKind.NETWORK, endpoint=endpoint) from e

    def _status_error(
        self, response: httpx.Response, endpoint: str, kind: ApiErrorKind
    ) -> ApiError:
        detail = extract_error_message(response)
        logger.warning("%s returned HTTP %s: %s", endpoint, response.status_code, detail)
        return ApiError(
            kind,
            status=response.status_code,
            body=response.text,
            endpoint=endpoint,
            message=f"HTTP {response.status_code} from {endpoint}: {detail}",
        )

    def _decode(self, response: httpx.Response, endpoint: str) -> dict:
        if not response.content:
            return {}
        try:
            data = response.json()
        except ValueError as e:
            raise ApiError(
                ApiErrorKind.HTTP,
                status=response.status_code,
                body=response.text,
                endpoint=endpoint,
                message=f"Invalid JSON from {endpoint}",
            ) from e
        if not isinstance(data, dict):
            raise ApiError(
                ApiErrorKind.HTTP,
                status=response.status_code,
                body=response.text,
                endpoint=endpoint,
                message=f"Unexpected response shape from {endpoint}",
            )
        return data
