"""Field access on loosely-typed error values.

Errors crossing an opaque boundary (third-party SDKs, plain mappings)
expose their status and codes under varying names. These helpers read
them uniformly from either attributes or mapping keys.
"""

from __future__ import annotations

import math
from collections.abc import Mapping
from typing import Any

STATUS_FIELDS = ("status", "status_code", "statusCode")


def get_field(error: Any, name: str) -> Any:
    """Read a field from an attribute or a mapping key.

    Args:
        error: Error value (exception, mapping, or anything else)
        name: Field name

    Returns:
        Field value, or None if absent
    """
    if isinstance(error, Mapping):
        return error.get(name)
    return getattr(error, name, None)


def _as_status(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, (int, float)):
        return None
    if not math.isfinite(value):
        return None
    return int(value)


def get_status(error: Any) -> int | None:
    """Return the first numeric HTTP status found on an error.

    Checks ``status``, ``status_code`` and ``statusCode``, then the same
    names on a nested ``response`` object.

    Args:
        error: Error value

    Returns:
        Status code as an int (floats such as 503.0 are truncated), or None
        if no numeric status is present
    """
    for name in STATUS_FIELDS:
        status = _as_status(get_field(error, name))
        if status is not None:
            return status

    response = get_field(error, "response")
    if response is not None and response is not error:
        for name in STATUS_FIELDS:
            status = _as_status(get_field(response, name))
            if status is not None:
                return status
    return None


def get_code(error: Any) -> str | None:
    """Return a string error code (e.g. ``ETIMEDOUT``) if present."""
    value = get_field(error, "code")
    return value if isinstance(value, str) else None


def get_message(error: Any) -> str:
    """Return the error message, falling back to ``str(error)`` for exceptions."""
    value = get_field(error, "message")
    if isinstance(value, str):
        return value
    if isinstance(error, BaseException):
        return str(error)
    return ""


def get_retry_after(error: Any) -> float | None:
    """Return retry-after seconds from ``retry_after`` or ``retryAfter``."""
    for name in ("retry_after", "retryAfter"):
        value = get_field(error, name)
        if isinstance(value, (int, float)) and not isinstance(value, bool):
            return value
    return None
