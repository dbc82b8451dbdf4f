"""Structured logging infrastructure for learnbloom.

Provides structured logging using structlog with client context such as the
client identifier string and the current navigation location. Supports
console and JSON output, with optional rotating file output.

Example usage:
    from learnbloom.core.logging import get_logger, configure_logging, with_client_context

    # Configure once at startup
    configure_logging(level="DEBUG", format="console")

    # Get a component-specific logger
    logger = get_logger("classifier")

    # Log with auto-context
    logger.info("error_classified", kind="NETWORK_ERROR")

    # Attach the client context for a scope
    ctx = ClientContext(location="/admin/assignments")
    with with_client_context(ctx):
        logger.error("error_logged")  # Includes client and location automatically
"""

from __future__ import annotations

import logging
import platform
import sys
from collections.abc import Iterator, Mapping
from contextlib import contextmanager
from contextvars import ContextVar
from dataclasses import dataclass, field
from datetime import UTC, datetime
from logging.handlers import RotatingFileHandler
from pathlib import Path
from typing import Any, Literal

import structlog
from structlog.types import EventDict, Processor, WrappedLogger

from learnbloom import __version__

# Sensitive field patterns that should never be logged
SENSITIVE_PATTERNS = frozenset({
    "api_key",
    "apikey",
    "api-key",
    "token",
    "secret",
    "password",
    "credential",
    "bearer",
    "authorization",
    "anon_key",
    "service_role",
})

MAX_REDACT_DEPTH = 8


def default_client_string() -> str:
    """Identify this client the way a browser user agent would."""
    return (
        f"learnbloom/{__version__} "
        f"(Python {sys.version_info.major}.{sys.version_info.minor}; {platform.system()})"
    )


@dataclass(frozen=True)
class ClientContext:
    """Immutable context describing the client that produced a log entry.

    Attributes:
        client: Client identifying string (user agent equivalent).
        location: Current navigation location (route or URL) of the client.
    """

    client: str = field(default_factory=default_client_string)
    location: str = ""

    def to_dict(self) -> dict[str, Any]:
        """Convert context to a dictionary for logging."""
        return {"client": self.client, "location": self.location}


# Task-safe context variable; ContextVar keeps async callers isolated
_current_context: ContextVar[ClientContext | None] = ContextVar(
    "learnbloom_client_context", default=None
)


def get_current_context() -> ClientContext | None:
    """Get the current ClientContext if set."""
    return _current_context.get()


def get_client_context() -> ClientContext:
    """Get the current ClientContext, falling back to a default one."""
    return _current_context.get() or ClientContext()


def set_context(ctx: ClientContext) -> None:
    """Set the current ClientContext.

    Generally prefer using `with_client_context()` for automatic cleanup.
    """
    _current_context.set(ctx)


def clear_context() -> None:
    """Clear the current ClientContext."""
    _current_context.set(None)


@contextmanager
def with_client_context(ctx: ClientContext) -> Iterator[ClientContext]:
    """Context manager that sets ClientContext for the duration of a block.

    Args:
        ctx: The ClientContext to use for the block.

    Yields:
        The ClientContext that was set.
    """
    token = _current_context.set(ctx)
    try:
        yield ctx
    finally:
        _current_context.reset(token)


def _sanitize_value(key: str, value: Any) -> Any:
    """Return "[REDACTED]" for sensitive keys, the value otherwise."""
    key_lower = key.lower()
    for pattern in SENSITIVE_PATTERNS:
        if pattern in key_lower:
            return "[REDACTED]"
    return value


def redact(value: Any, _depth: int = 0) -> Any:
    """Return a copy of ``value`` with sensitive mapping keys masked.

    Mappings, lists and tuples are walked recursively; anything else is
    returned as is. Nesting beyond ``MAX_REDACT_DEPTH`` is replaced by a
    placeholder.
    """
    if _depth > MAX_REDACT_DEPTH:
        return "[...]"
    if isinstance(value, Mapping):
        return {
            key: _sanitize_value(str(key), redact(item, _depth + 1))
            for key, item in value.items()
        }
    if isinstance(value, list):
        return [redact(item, _depth + 1) for item in value]
    if isinstance(value, tuple):
        return tuple(redact(item, _depth + 1) for item in value)
    return value


def _sanitize_event_dict(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that sanitizes sensitive fields.

    Nested containers (such as a serialized error record) are sanitized
    recursively.
    """
    return {
        key: _sanitize_value(key, redact(value))
        for key, value in event_dict.items()
    }


def _add_timestamp(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds an ISO8601 UTC timestamp."""
    event_dict.setdefault("timestamp", datetime.now(UTC).isoformat())
    return event_dict


def _add_context(
    logger: WrappedLogger,
    method_name: str,
    event_dict: EventDict,
) -> EventDict:
    """Structlog processor that adds ClientContext fields to log entries.

    Fields from the context are only added if they are not already present
    in the event dict (explicit bindings take precedence).
    """
    ctx = get_current_context()
    if ctx is not None:
        for key, value in ctx.to_dict().items():
            if key not in event_dict:
                event_dict[key] = value
    return event_dict


class BloomLogger:
    """Logger wrapper around structlog bound to a component name.

    Uses lazy logger initialization so that loggers created at module import
    time still respect configuration set later via configure_logging().
    """

    def __init__(
        self,
        component: str,
        **initial_context: Any,
    ) -> None:
        self._component = component
        self._context: dict[str, Any] = {"component": component, **initial_context}

    def _get_logger(self) -> structlog.stdlib.BoundLogger:
        logger: structlog.stdlib.BoundLogger = structlog.get_logger().bind(**self._context)
        return logger

    def bind(self, **context: Any) -> BloomLogger:
        """Create a new logger with additional bound context."""
        new_logger = BloomLogger.__new__(BloomLogger)
        new_logger._component = self._component
        new_logger._context = {**self._context, **context}
        return new_logger

    def debug(self, event: str, **kw: Any) -> None:
        self._get_logger().debug(event, **kw)

    def info(self, event: str, **kw: Any) -> None:
        self._get_logger().info(event, **kw)

    def warning(self, event: str, **kw: Any) -> None:
        self._get_logger().warning(event, **kw)

    def error(self, event: str, **kw: Any) -> None:
        self._get_logger().error(event, **kw)

    def exception(self, event: str, **kw: Any) -> None:
        """Log an exception with traceback; call from within an exception handler."""
        self._get_logger().exception(event, **kw)


def _build_processors(
    renderer: Processor,
    include_timestamps: bool,
    include_context: bool,
) -> list[Processor]:
    processors: list[Processor] = [
        structlog.stdlib.filter_by_level,
        structlog.stdlib.add_log_level,
        _sanitize_event_dict,
    ]

    if include_context:
        processors.append(_add_context)

    if include_timestamps:
        processors.append(_add_timestamp)

    processors.extend([
        structlog.stdlib.PositionalArgumentsFormatter(),
        structlog.processors.StackInfoRenderer(),
        structlog.processors.format_exc_info,
        structlog.processors.UnicodeDecoder(),
        renderer,
    ])
    return processors


def configure_logging(
    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO",
    format: Literal["json", "console", "both"] = "console",  # noqa: A002
    file_path: Path | None = None,
    max_file_size_mb: int = 50,
    backup_count: int = 5,
    include_timestamps: bool = True,
    include_context: bool = True,
) -> None:
    """Configure learnbloom structured logging.

    This should be called once at application startup before any logging occurs.

    Args:
        level: Minimum log level to capture.
        format: "json" for structured, "console" for human-readable,
            "both" for console to stderr and a log file (requires file_path).
        file_path: Optional file path for log output. Required if format="both".
        max_file_size_mb: Maximum log file size before rotation (MB).
        backup_count: Number of rotated log files to keep.
        include_timestamps: Whether to include ISO8601 timestamps in log entries.
        include_context: Whether to include ClientContext fields in log entries.

    Raises:
        ValueError: If format="both" but file_path is not provided.
    """
    if format == "both" and file_path is None:
        raise ValueError("file_path is required when format='both'")

    log_level = getattr(logging, level)
    handlers: list[logging.Handler] = []

    if format in ("console", "both"):
        console_handler = logging.StreamHandler(sys.stderr)
        console_handler.setLevel(log_level)
        handlers.append(console_handler)

    if file_path is not None and format in ("json", "both"):
        file_path.parent.mkdir(parents=True, exist_ok=True)
        file_handler = RotatingFileHandler(
            file_path,
            maxBytes=max_file_size_mb * 1024 * 1024,
            backupCount=backup_count,
            encoding="utf-8",
        )
        file_handler.setLevel(log_level)
        handlers.append(file_handler)
    elif format == "json":
        json_handler = logging.StreamHandler(sys.stdout)
        json_handler.setLevel(log_level)
        handlers.append(json_handler)

    root_logger = logging.getLogger()
    root_logger.setLevel(log_level)
    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
    for handler in handlers:
        root_logger.addHandler(handler)

    renderer: Processor
    if format == "json":
        renderer = structlog.processors.JSONRenderer(ensure_ascii=False)
    else:
        renderer = structlog.dev.ConsoleRenderer(colors=format == "console")

    # cache_logger_on_first_use=False keeps module-level loggers in sync with
    # configuration applied after import
    structlog.configure(
        processors=_build_processors(renderer, include_timestamps, include_context),
        wrapper_class=structlog.stdlib.BoundLogger,
        context_class=dict,
        logger_factory=structlog.stdlib.LoggerFactory(),
        cache_logger_on_first_use=False,
    )


def get_logger(component: str, **initial_context: Any) -> BloomLogger:
    """Get a learnbloom logger for a component.

    Args:
        component: The component name (e.g., "classifier", "retry", "cli").
        **initial_context: Additional context to bind.
    """
    return BloomLogger(component, **initial_context)


__all__ = [
    "BloomLogger",
    "ClientContext",
    "SENSITIVE_PATTERNS",
    "clear_context",
    "configure_logging",
    "default_client_string",
    "get_client_context",
    "get_current_context",
    "get_logger",
    "redact",
    "set_context",
    "with_client_context",
]
