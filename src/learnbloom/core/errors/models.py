"""Data models for error classification.

This module provides:
- ClassifiedError: The normalized, typed failure used for display and logging
- AppError: Exception carrying a ClassifiedError across call boundaries
- NetworkFailure / BackendDataError / HttpFailure / GenericFailure: the raw
  failure variants a caller constructs (or coerces) when a failure is caught
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Any, TypeAlias

from .codes import ErrorKind, get_error_title


@dataclass(frozen=True)
class ClassifiedError:
    """A failure with its kind and user-facing message.

    ClassifiedError is created the moment a raw failure is caught, handed to
    the presentation/logging boundary, then discarded. ``cause`` keeps the
    original value for diagnostics and is never shown to the user, so it is
    left out of equality and repr.
    """

    kind: ErrorKind
    message: str
    status_code: int | None = None
    cause: Any = field(default=None, compare=False, repr=False)

    @property
    def title(self) -> str:
        """Display title for this error's kind."""
        return get_error_title(self.kind)

    @property
    def is_network(self) -> bool:
        return self.kind == ErrorKind.NETWORK_ERROR

    def to_dict(self) -> dict[str, Any]:
        return {
            "kind": self.kind.value,
            "message": self.message,
            "status_code": self.status_code,
        }


class AppError(Exception):
    """Exception wrapper for a ClassifiedError.

    Service code raises this after classifying a failure so callers further
    up can show it without classifying again.
    """

    def __init__(self, error: ClassifiedError) -> None:
        super().__init__(error.message)
        self.error = error

    @property
    def kind(self) -> ErrorKind:
        return self.error.kind

    @property
    def status_code(self) -> int | None:
        return self.error.status_code

    @property
    def message(self) -> str:
        return self.error.message


# =============================================================================
# Raw failure variants
# =============================================================================


@dataclass(frozen=True)
class NetworkFailure:
    """Transport-level failure: the request never got a response."""

    message: str | None = None


@dataclass(frozen=True)
class BackendDataError:
    """Error returned by the relational-data backend with a short code.

    Attributes:
        code: Backend code such as "PGRST116" or a SQLSTATE like "23505".
        message: Backend-supplied message, when present.
        details: Backend-supplied details string.
        hint: Backend-supplied hint string.
    """

    code: str
    message: str | None = None
    details: str | None = None
    hint: str | None = None


@dataclass(frozen=True)
class HttpFailure:
    """Failure carrying an HTTP-like status."""

    status: int
    message: str | None = None


@dataclass(frozen=True)
class GenericFailure:
    """Anything else: an optional message and an optional error name."""

    message: str | None = None
    name: str | None = None


RawFailure: TypeAlias = NetworkFailure | BackendDataError | HttpFailure | GenericFailure

RAW_FAILURE_TYPES: tuple[type, ...] = (
    NetworkFailure,
    BackendDataError,
    HttpFailure,
    GenericFailure,
)


__all__ = [
    "AppError",
    "BackendDataError",
    "ClassifiedError",
    "GenericFailure",
    "HttpFailure",
    "NetworkFailure",
    "RAW_FAILURE_TYPES",
    "RawFailure",
]
