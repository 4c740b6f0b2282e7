"""App access token lifecycle (client-credentials grant)."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable

import httpx
import msgspec

from clipwatch.config.settings import TWITCH_OAUTH_URL
from clipwatch.errors.http import extract_error_message
from clipwatch.errors.types import AuthError, AuthErrorReason

logger = logging.getLogger(__name__)

DEFAULT_EXPIRES_IN = 3600


class TokenResponse(msgspec.Struct, frozen=True):
    """Client-credentials grant response body."""

    access_token: str = ""
    expires_in: int = DEFAULT_EXPIRES_IN


class Credential(msgspec.Struct, frozen=True):
    """An app access token and its expiry (POSIX seconds, None if unknown)."""

    token: str
    expires_at: float | None = None

    def is_valid(self, now: float) -> bool:
        if not self.token:
            return False
        return self.expires_at is None or now < self.expires_at


class CredentialManager:
    """Owns the app access token; refreshes it on demand."""

    def __init__(
        self,
        client: httpx.AsyncClient,
        client_id: str,
        client_secret: str,
        *,
        token_url: str = TWITCH_OAUTH_URL,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._client = client
        self.client_id = client_id
        self._client_secret = client_secret
        self._token_url = token_url
        self._clock = clock
        self._credential: Credential | None = None

    @property
    def credential(self) -> Credential | None:
        return self._credential

    def is_valid(self) -> bool:
        """Check if the stored credential exists and has not expired."""
        if self._credential is None:
            return False
        return self._credential.is_valid(self._clock())

    def invalidate(self) -> None:
        """Drop the stored credential (e.g. after a 401)."""
        self._credential = None

    async def refresh(self) -> Credential:
        """Exchange client id and secret for a new app access token.

        Any previously stored credential is discarded first, so a failed
        refresh leaves no credential behind.

        Raises:
            AuthError: reason NETWORK on transport failure, HTTP on any
                non-2xx or malformed response
        """
        self._credential = None
        logger.debug("Requesting app access token")

        try:
            response = await self._client.post(
                self._token_url,
                data={
                    "client_id": self.client_id,
                    "client_secret": self._client_secret,
                    "grant_type": "client_credentials",
                },
            )
        except httpx.TransportError as e:
            logger.warning("Token request failed: %s", e)
            raise AuthError(AuthErrorReason.NETWORK) from e

        if not response.is_success:
            detail = extract_error_message(response)
            logger.warning(
                "Token request rejected: HTTP %s (%s)", response.status_code, detail
            )
            raise AuthError(
                AuthErrorReason.HTTP,
                status=response.status_code,
                body=response.text,
                message=f"Token request failed with HTTP {response.status_code}: {detail}",
            )

        try:
            payload = msgspec.json.decode(response.content, type=TokenResponse)
        except (msgspec.DecodeError, msgspec.ValidationError) as e:
            raise AuthError(
                AuthErrorReason.HTTP,
                status=response.status_code,
                body=response.text,
                message=f"Malformed token response: {e}",
            ) from e

        if not payload.access_token:
            raise AuthError(
                AuthErrorReason.HTTP,
                status=response.status_code,
                body=response.text,
                message="Token response missing access_token",
            )

        self._credential = Credential(
            token=payload.access_token,
            expires_at=self._clock() + payload.expires_in,
        )
        logger.info("App access token acquired (expires in %ss)", payload.expires_in)
        return self._credential
