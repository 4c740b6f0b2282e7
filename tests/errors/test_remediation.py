"""Tests for errors/messages.py (remediation hints)."""

from __future__ import annotations

from clipwatch.errors.messages import API_REMEDIATION
from clipwatch.errors.messages import remediation_for
from clipwatch.errors.types import ApiError
from clipwatch.errors.types import ApiErrorKind
from clipwatch.errors.types import AuthError
from clipwatch.errors.types import AuthErrorReason
from clipwatch.errors.types import ClipError
from clipwatch.errors.types import ClipErrorKind
from clipwatch.errors.types import ConfigurationError


def test_configuration_error_names_env_vars():
    hint = remediation_for(ConfigurationError("missing"))

    assert "CLIPWATCH_CLIENT_ID" in hint


def test_auth_http_points_at_credentials():
    hint = remediation_for(AuthError(AuthErrorReason.HTTP, status=400))

    assert "client secret" in hint


def test_auth_network_matches_api_network():
    hint = remediation_for(AuthError(AuthErrorReason.NETWORK))

    assert hint == API_REMEDIATION[ApiErrorKind.NETWORK]


def test_repeated_401():
    hint = remediation_for(ApiError(ApiErrorKind.HTTP, status=401))

    assert "twice" in hint


def test_forbidden_mentions_scope():
    assert "clips:edit" in remediation_for(ApiError(ApiErrorKind.FORBIDDEN))


def test_upstream_clip_error_uses_cause():
    cause = ApiError(ApiErrorKind.RATE_LIMITED)

    hint = remediation_for(ClipError(ClipErrorKind.UPSTREAM, cause=cause))

    assert hint == API_REMEDIATION[ApiErrorKind.RATE_LIMITED]


def test_not_live():
    assert "live" in remediation_for(ClipError(ClipErrorKind.NOT_LIVE))


def test_unknown_error_has_no_hint():
    assert remediation_for(ValueError("x")) is None
