"""HTTP response helpers for error handling.

This module turns Helix and token-endpoint responses into readable error
details on top of the classifications in errors/types.py.
"""

from __future__ import annotations

import httpx

from clipwatch.errors.types import (
    ApiError,
    ApiErrorKind,
    AuthError,
    AuthErrorReason,
)


def extract_error_message(response: httpx.Response) -> str:
    """Extract a meaningful error message from an HTTP response.

    Twitch error bodies look like
    ``{"error": "Unauthorized", "status": 401, "message": "Invalid OAuth token"}``.

    Args:
        response: HTTP response with error status

    Returns:
        Extracted error message
    """
    status = response.status_code

    try:
        body = response.json()
    except ValueError:
        body = None

    if isinstance(body, dict):
        for key in ("message", "error_description", "error"):
            value = body.get(key)
            if isinstance(value, str) and value:
                return value

    text = response.text.strip()
    if text and len(text) < 200:
        return text

    return f"HTTP {status}"


def auth_error_to_api_error(error: AuthError, endpoint: str) -> ApiError:
    """Map a failed token refresh onto the Helix error taxonomy."""
    if error.reason is AuthErrorReason.NETWORK:
        return ApiError(
            ApiErrorKind.NETWORK,
            endpoint=endpoint,
            message=f"Token refresh failed before {endpoint}: {error}",
        )
    return ApiError(
        ApiErrorKind.HTTP,
        status=error.status,
        body=error.body,
        endpoint=endpoint,
        message=f"Token refresh failed before {endpoint}: {error}",
    )
