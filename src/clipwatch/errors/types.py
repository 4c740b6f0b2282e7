"""Error types and classifications."""

from __future__ import annotations

from enum import StrEnum


class AuthErrorReason(StrEnum):
    """Why a credential exchange failed."""

    NETWORK = "network"
    HTTP = "http"


class ApiErrorKind(StrEnum):
    """Error kinds for authenticated Helix calls."""

    RATE_LIMITED = "rate_limited"
    FORBIDDEN = "forbidden"
    HTTP = "http"
    NETWORK = "network"


class ClipErrorKind(StrEnum):
    """Error kinds for clip creation."""

    NOT_LIVE = "not_live"
    INVALID_SNAPSHOT = "invalid_snapshot"
    UPSTREAM = "upstream"


class ClipwatchError(Exception):
    """Base class for all clipwatch errors."""


class ConfigurationError(ClipwatchError):
    """Configuration is missing a value needed to talk to Twitch."""


class AuthError(ClipwatchError):
    """The client-credentials exchange failed."""

    def __init__(
        self,
        reason: AuthErrorReason,
        status: int | None = None,
        body: str | None = None,
        message: str | None = None,
    ) -> None:
        self.reason = reason
        self.status = status
        self.body = body
        if message is None:
            if reason is AuthErrorReason.NETWORK:
                message = "Could not reach the token endpoint"
            else:
                message = f"Token request failed with HTTP {status}"
        super().__init__(message)


class ApiError(ClipwatchError):
    """An authenticated Helix call failed."""

    def __init__(
        self,
        kind: ApiErrorKind,
        status: int | None = None,
        body: str | None = None,
        endpoint: str | None = None,
        message: str | None = None,
    ) -> None:
        self.kind = kind
        self.status = status
        self.body = body
        self.endpoint = endpoint
        if message is None:
            message = _default_api_message(kind, status, endpoint)
        super().__init__(message)


class ClipError(ClipwatchError):
    """A clip could not be created."""

    def __init__(
        self,
        kind: ClipErrorKind,
        message: str | None = None,
        cause: Exception | None = None,
    ) -> None:
        self.kind = kind
        self.cause = cause
        if message is None:
            message = {
                ClipErrorKind.NOT_LIVE: "Channel is not live",
                ClipErrorKind.INVALID_SNAPSHOT: "Snapshot cannot be clipped",
                ClipErrorKind.UPSTREAM: f"Clip creation failed: {cause}",
            }[kind]
        super().__init__(message)


def _default_api_message(
    kind: ApiErrorKind, status: int | None, endpoint: str | None
) -> str:
    target = endpoint or "request"
    match kind:
        case ApiErrorKind.RATE_LIMITED:
            return f"Rate limit exhausted for {target}"
        case ApiErrorKind.FORBIDDEN:
            return f"Forbidden: {target}"
        case ApiErrorKind.NETWORK:
            return f"Network error during {target}"
        case _:
            return f"HTTP {status} from {target}"


# Status codes with a dedicated kind; everything else non-2xx is HTTP.
# 401 is retried by the pipeline before it gets here.
HTTP_ERROR_KINDS: dict[int, ApiErrorKind] = {
    403: ApiErrorKind.FORBIDDEN,
    429: ApiErrorKind.RATE_LIMITED,
}


def classify_http_status(status_code: int) -> ApiErrorKind:
    """Classify a non-2xx Helix status code."""
    return HTTP_ERROR_KINDS.get(status_code, ApiErrorKind.HTTP)
