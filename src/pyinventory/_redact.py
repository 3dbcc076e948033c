"""Helpers for safe debug logging.

Requests to the document store may carry an API key in the query string and
a bearer token in the headers.  This module masks such values before they
reach DEBUG logs.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

_SENSITIVE_KEYS: frozenset[str] = frozenset(
    {
        "key",
        "api_key",
        "access_token",
        "token",
        "authorization",
        "cookie",
        "x-goog-api-key",
    }
)

_MASK = "<redacted>"


def _shorten(value: str, limit: int) -> str:
    if len(value) <= limit:
        return value
    return f"{value[:limit]}…<truncated>"


def redact_for_log(values: Mapping[str, Any], *, max_string: int = 256) -> dict[str, Any]:
    """Copy of a params/headers mapping with credentials masked.

    Key matching is case-insensitive.  Nested mappings are masked the same
    way; long strings are cut to *max_string* characters.
    """
    redacted: dict[str, Any] = {}
    for key, value in values.items():
        if key.lower() in _SENSITIVE_KEYS:
            redacted[key] = _MASK
        elif isinstance(value, Mapping):
            redacted[key] = redact_for_log(value, max_string=max_string)
        elif isinstance(value, str):
            redacted[key] = _shorten(value, max_string)
        else:
            redacted[key] = value
    return redacted
