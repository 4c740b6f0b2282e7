"""Output formatting for clipwatch."""

from clipwatch.display.json import (
    encode_json,
    error_response_from,
    output_json,
    output_json_error,
    output_json_pretty,
)

__all__ = [
    "encode_json",
    "error_response_from",
    "output_json",
    "output_json_error",
    "output_json_pretty",
]
