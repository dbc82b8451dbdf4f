"""Structured diagnostic records for caught errors.

``log_error`` accepts a raw exception, an AppError, or a ClassifiedError and
writes one ``error_logged`` event containing the message, stack (when a
traceback is available), ISO-8601 timestamp, caller context, client string,
and current location. In production the same record can be forwarded to an
external monitoring service through an ErrorReporter.
"""

from __future__ import annotations

import traceback
from dataclasses import asdict, dataclass, is_dataclass
from dataclasses import fields as dataclass_fields
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Any

from learnbloom.core.errors import AppError, ClassifiedError, extract_message
from learnbloom.core.logging import get_client_context, get_logger, redact

if TYPE_CHECKING:
    from learnbloom.notifications.reporter import ErrorReporter

TRUNCATE_DETAILS_CHARS = 2000
"""Maximum characters kept from the repr of an error's cause."""

_logger = get_logger("error_log")


@dataclass
class ErrorRecord:
    """One logged error.

    ``kind``, ``status_code`` and ``details`` are only set for classified
    errors. ``details`` holds the repr of the original cause, with sensitive
    keys masked, and is meant for diagnostics only.
    """

    message: str
    stack: str | None
    timestamp: str
    context: str | None
    client: str
    location: str
    kind: str | None = None
    status_code: int | None = None
    details: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return asdict(self)


def _format_stack(exc: Any) -> str | None:
    if not isinstance(exc, BaseException) or exc.__traceback__ is None:
        return None
    return "".join(traceback.format_exception(exc))


def _redacted_repr(cause: Any) -> str:
    if isinstance(cause, BaseException):
        args = ", ".join(repr(redact(arg)) for arg in cause.args)
        return f"{type(cause).__name__}({args})"
    if is_dataclass(cause) and not isinstance(cause, type):
        fields = {f.name: getattr(cause, f.name) for f in dataclass_fields(cause)}
    elif isinstance(getattr(cause, "__dict__", None), dict) and not isinstance(cause, type):
        fields = vars(cause)
    else:
        return repr(redact(cause))
    shown = ", ".join(f"{key}={value!r}" for key, value in redact(fields).items())
    return f"{type(cause).__name__}({shown})"


def _format_details(cause: Any) -> str | None:
    if cause is None:
        return None
    try:
        text = _redacted_repr(cause)
    except Exception:
        text = f"<unrepresentable {type(cause).__name__}>"
    return text[:TRUNCATE_DETAILS_CHARS]


def build_error_record(error: Any, context: str | None = None) -> ErrorRecord:
    """Build the diagnostic record for an error without logging it.

    Args:
        error: Raw exception, AppError, or ClassifiedError.
        context: Caller-supplied label such as the operation name.
    """
    client_ctx = get_client_context()
    timestamp = datetime.now(UTC).isoformat()

    classified: ClassifiedError | None = None
    stack_source: Any = error
    if isinstance(error, AppError):
        classified = error.error
    elif isinstance(error, ClassifiedError):
        classified = error
        stack_source = error.cause

    stack = _format_stack(stack_source)
    if stack is None and classified is not None:
        stack = _format_stack(classified.cause)

    if classified is not None:
        return ErrorRecord(
            message=classified.message,
            stack=stack,
            timestamp=timestamp,
            context=context,
            client=client_ctx.client,
            location=client_ctx.location,
            kind=classified.kind.value,
            status_code=classified.status_code,
            details=_format_details(classified.cause),
        )

    return ErrorRecord(
        message=extract_message(error) or type(error).__name__,
        stack=stack,
        timestamp=timestamp,
        context=context,
        client=client_ctx.client,
        location=client_ctx.location,
    )


def log_error(error: Any, context: str | None = None) -> ErrorRecord:
    """Record an error as a structured ``error_logged`` event.

    Args:
        error: Raw exception, AppError, or ClassifiedError.
        context: Caller-supplied label such as the operation name.

    Returns:
        The record that was logged.
    """
    record = build_error_record(error, context)
    _logger.error("error_logged", record=record.to_dict())
    return record


async def report_error(
    error: Any,
    context: str | None = None,
    *,
    reporter: ErrorReporter | None = None,
    environment: str = "development",
) -> ErrorRecord:
    """Log an error and, in production, forward it to the monitoring reporter.

    Forwarding failures are handled by the reporter itself; this function
    never raises because of them.
    """
    record = log_error(error, context)
    if reporter is not None and environment == "production":
        delivered = await reporter.report(record)
        if not delivered:
            _logger.warning("error_report_not_delivered", context=context)
    return record


__all__ = [
    "ErrorRecord",
    "build_error_record",
    "log_error",
    "report_error",
]
