"""Execution helpers: retry and error boundaries."""

from learnbloom.execution.handler import (
    ErrorBoundary,
    call_with_error_boundary,
    handle_async_error,
    raise_classified,
)
from learnbloom.execution.retry import AttemptRecord, RetryExecutor, RetryState, retry

__all__ = [
    "AttemptRecord",
    "ErrorBoundary",
    "RetryExecutor",
    "RetryState",
    "call_with_error_boundary",
    "handle_async_error",
    "raise_classified",
    "retry",
]
