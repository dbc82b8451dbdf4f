"""Coercion of arbitrary caught values into raw failure variants.

Backend client libraries hand back errors of many shapes: mappings decoded
from a JSON error body, exceptions with ``code``/``status`` attributes,
httpx exceptions with a ``response``, bare strings, or nothing at all. This
module probes those shapes once, at the point the failure is caught, and
returns one of the explicit variants from ``models``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

import httpx

from .models import (
    RAW_FAILURE_TYPES,
    BackendDataError,
    GenericFailure,
    HttpFailure,
    NetworkFailure,
    RawFailure,
)

NETWORK_ERROR_NAME = "NetworkError"
"""Error name browsers and fetch polyfills use for transport failures."""

FETCH_FAILURE_MARKER = "fetch"
"""Substring present in fetch-layer failure messages ("Failed to fetch")."""


def _probe(value: Any, key: str) -> Any:
    """Read ``key`` from a mapping or attribute without ever raising."""
    try:
        if isinstance(value, Mapping):
            return value.get(key)
        return getattr(value, key, None)
    except Exception:
        return None


def _as_int(value: Any) -> int | None:
    if isinstance(value, bool) or not isinstance(value, int):
        return None
    return value


def _as_text(value: Any) -> str | None:
    if isinstance(value, str) and value:
        return value
    return None


def extract_message(value: Any) -> str | None:
    """Best-effort human message for a caught value.

    Returns None when the value carries no usable message.
    """
    if value is None:
        return None
    if isinstance(value, str):
        return value or None
    message = _as_text(_probe(value, "message"))
    if message is not None:
        return message
    if isinstance(value, BaseException):
        try:
            return str(value) or None
        except Exception:
            return None
    return None


def extract_status(value: Any) -> int | None:
    """Extract an HTTP-like status code.

    Checked in order: ``status`` (when non-zero), ``status_code``,
    ``statusCode``, then ``response.status_code``.
    """
    status = _as_int(_probe(value, "status"))
    if status:
        return status
    for key in ("status_code", "statusCode"):
        status = _as_int(_probe(value, key))
        if status is not None:
            return status
    response = _probe(value, "response")
    if response is not None:
        return _as_int(_probe(response, "status_code"))
    return None


def extract_code(value: Any) -> str | None:
    """Extract a backend data-error code.

    String and integer codes are accepted and returned as text; an empty
    string still counts as a code. Booleans and other types are ignored.
    """
    code = _probe(value, "code")
    if isinstance(code, str):
        return code
    if isinstance(code, int) and not isinstance(code, bool):
        return str(code)
    return None


def _error_name(value: Any) -> str | None:
    name = _as_text(_probe(value, "name"))
    if name is not None:
        return name
    if isinstance(value, BaseException):
        return type(value).__name__
    return None


def is_transport_failure(value: Any) -> bool:
    """True if the value looks like a transport-level failure."""
    if isinstance(value, (ConnectionError, httpx.TransportError)):
        return True
    if _error_name(value) == NETWORK_ERROR_NAME:
        return True
    message = extract_message(value)
    return message is not None and FETCH_FAILURE_MARKER in message


def to_raw_failure(value: Any) -> RawFailure:
    """Coerce any caught value into a raw failure variant.

    Probing order mirrors classification priority: backend code, HTTP
    status, transport markers, then a generic fallback. Never raises.

    Args:
        value: The caught value (exception, mapping, string, None, ...).

    Returns:
        The matching RawFailure variant.
    """
    if isinstance(value, RAW_FAILURE_TYPES):
        return value  # type: ignore[return-value]

    if value is None:
        return GenericFailure()

    code = extract_code(value)
    if code is not None:
        return BackendDataError(
            code=code,
            message=extract_message(value),
            details=_as_text(_probe(value, "details")),
            hint=_as_text(_probe(value, "hint")),
        )

    status = extract_status(value)
    if status is not None:
        return HttpFailure(status=status, message=extract_message(value))

    if is_transport_failure(value):
        return NetworkFailure(message=extract_message(value))

    return GenericFailure(message=extract_message(value), name=_error_name(value))


__all__ = [
    "FETCH_FAILURE_MARKER",
    "NETWORK_ERROR_NAME",
    "extract_code",
    "extract_message",
    "extract_status",
    "is_transport_failure",
    "to_raw_failure",
]
