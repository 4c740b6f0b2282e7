"""Error handling for clipwatch."""

from clipwatch.errors.http import auth_error_to_api_error, extract_error_message
from clipwatch.errors.messages import remediation_for
from clipwatch.errors.types import (
    HTTP_ERROR_KINDS,
    ApiError,
    ApiErrorKind,
    AuthError,
    AuthErrorReason,
    ClipError,
    ClipErrorKind,
    ClipwatchError,
    ConfigurationError,
    classify_http_status,
)

__all__ = [
    # Core types
    "ClipwatchError",
    "ConfigurationError",
    "AuthError",
    "AuthErrorReason",
    "ApiError",
    "ApiErrorKind",
    "ClipError",
    "ClipErrorKind",
    "HTTP_ERROR_KINDS",
    # Classification
    "classify_http_status",
    # HTTP utilities
    "extract_error_message",
    "auth_error_to_api_error",
    # Messages
    "remediation_for",
]
