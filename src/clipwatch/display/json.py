"""JSON output utilities for clipwatch."""

from __future__ import annotations

import json
import sys
from datetime import datetime

import msgspec

__all__ = [
    "ErrorResponse",
    "ErrorData",
    "output_json",
    "output_json_pretty",
    "output_json_error",
    "error_response_from",
    "encode_json",
]


class ErrorData(msgspec.Struct, frozen=True, omit_defaults=True):
    """Error data with kind and remediation."""

    message: str
    type: str
    kind: str | None = None
    remediation: str | None = None
    timestamp: str = msgspec.field(
        default_factory=lambda: datetime.now().astimezone().isoformat()
    )


class ErrorResponse(msgspec.Struct, frozen=True):
    """Structured error response for JSON output."""

    error: ErrorData


def error_response_from(error: Exception) -> ErrorResponse:
    """Create an ErrorResponse from a clipwatch exception.

    Args:
        error: Any exception; ``kind`` or ``reason`` is included when present

    Returns:
        ErrorResponse struct for JSON output
    """
    from clipwatch.errors.messages import remediation_for

    kind = getattr(error, "kind", None) or getattr(error, "reason", None)
    return ErrorResponse(
        error=ErrorData(
            message=str(error),
            type=type(error).__name__,
            kind=str(kind) if kind is not None else None,
            remediation=remediation_for(error),
        )
    )


def output_json(data: object) -> None:
    """Output data as JSON to stdout.

    Args:
        data: Any msgspec-serializable object (Struct, dict, list, etc.)
    """
    sys.stdout.buffer.write(encode_json(data))
    sys.stdout.buffer.write(b"\n")
    sys.stdout.buffer.flush()


def output_json_pretty(data: object, indent: int = 2) -> None:
    """Output data as pretty-printed JSON to stdout.

    Args:
        data: Any msgspec-serializable object
        indent: Number of spaces for indentation
    """
    python_obj = msgspec.to_builtins(data)
    sys.stdout.write(json.dumps(python_obj, indent=indent))
    sys.stdout.write("\n")


def output_json_error(error: Exception, indent: int = 2) -> None:
    """Output an error in standardized JSON format."""
    output_json_pretty(error_response_from(error), indent=indent)


def encode_json(data: object) -> bytes:
    """Encode data as JSON bytes.

    Args:
        data: Any msgspec-serializable object

    Returns:
        JSON-encoded bytes
    """
    return msgspec.json.encode(data)
