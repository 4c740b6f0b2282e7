"""User-facing remediation hints for clipwatch errors."""

from __future__ import annotations

from clipwatch.errors.types import (
    ApiError,
    ApiErrorKind,
    AuthError,
    AuthErrorReason,
    ClipError,
    ClipErrorKind,
    ConfigurationError,
)

API_REMEDIATION: dict[ApiErrorKind, str] = {
    ApiErrorKind.RATE_LIMITED: (
        "Twitch rate limit reached. Wait for the budget to reset and try again."
    ),
    ApiErrorKind.FORBIDDEN: (
        "Access denied. Creating clips needs a token with the "
        "[cyan]clips:edit[/cyan] scope."
    ),
    ApiErrorKind.NETWORK: "Check your internet connection and try again.",
    ApiErrorKind.HTTP: "Twitch returned an error. Try again later.",
}

CLIP_REMEDIATION: dict[ClipErrorKind, str] = {
    ClipErrorKind.NOT_LIVE: "Clips can only be created while the channel is live.",
    ClipErrorKind.INVALID_SNAPSHOT: (
        "Twitch could not be reached, so only simulated data is available. "
        "Run [cyan]clipwatch check[/cyan] to test the connection."
    ),
}


def remediation_for(error: Exception) -> str | None:
    """Get a remediation hint for an error, or None when there is none."""
    if isinstance(error, ConfigurationError):
        return (
            "Set client_id, client_secret and channel in the config file "
            "or via CLIPWATCH_CLIENT_ID, CLIPWATCH_CLIENT_SECRET, CLIPWATCH_CHANNEL."
        )

    if isinstance(error, AuthError):
        if error.reason is AuthErrorReason.NETWORK:
            return API_REMEDIATION[ApiErrorKind.NETWORK]
        return "Check that the client id and client secret are correct."

    if isinstance(error, ClipError):
        if error.kind is ClipErrorKind.UPSTREAM and error.cause is not None:
            return remediation_for(error.cause)
        return CLIP_REMEDIATION.get(error.kind)

    if isinstance(error, ApiError):
        if error.kind is ApiErrorKind.HTTP and error.status == 401:
            return "Twitch rejected the access token twice. Check the client credentials."
        return API_REMEDIATION.get(error.kind)

    return None
