"""Bounded retry with linear backoff for async operations.

Every failure is retried the same way until the attempt bound is reached;
the last raw failure is then re-raised unchanged. Classification happens
later, at the presentation boundary, never inside the retry loop.

Example usage:
    from learnbloom.execution.retry import RetryExecutor, retry

    executor = RetryExecutor(max_retries=3, base_delay_ms=1000)
    sessions = await executor.run(lambda: api.get_training_sessions())

    # or, for a one-off call
    course = await retry(lambda: api.get_course(course_id))

State machine per run:
    PENDING -> ATTEMPTING -> SUCCESS
                          -> WAITING -> ATTEMPTING ...
                          -> FAILED
"""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
from enum import Enum
from typing import TYPE_CHECKING, TypeVar

from learnbloom.core.logging import get_logger

if TYPE_CHECKING:
    from learnbloom.core.config import RetryConfig

T = TypeVar("T")

DEFAULT_MAX_RETRIES = 3
DEFAULT_BASE_DELAY_MS = 1000.0

_logger = get_logger("retry")


class RetryState(str, Enum):
    """States a single retry run moves through."""

    PENDING = "pending"
    ATTEMPTING = "attempting"
    WAITING = "waiting"
    SUCCESS = "success"
    """Terminal: the operation returned a result."""

    FAILED = "failed"
    """Terminal: every attempt failed; the last failure was re-raised."""


@dataclass(frozen=True)
class AttemptRecord:
    """One state transition of a retry run.

    Attributes:
        attempt: 1-indexed attempt number the transition belongs to.
        state: State entered.
        delay_ms: Wait before the next attempt (WAITING only).
        error: Failure that caused WAITING or FAILED.
    """

    attempt: int
    state: RetryState
    delay_ms: float | None = None
    error: BaseException | None = None


AttemptCallback = Callable[[AttemptRecord], None]
SleepFunc = Callable[[float], Awaitable[object]]


class RetryExecutor:
    """Runs a zero-argument async operation with bounded linear-backoff retries.

    The executor holds only its configuration; each ``run`` call keeps its
    own attempt state, so one executor can serve concurrent callers.
    """

    def __init__(
        self,
        max_retries: int = DEFAULT_MAX_RETRIES,
        base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
        *,
        sleep: SleepFunc = asyncio.sleep,
        on_attempt: AttemptCallback | None = None,
        retry_on: tuple[type[Exception], ...] = (Exception,),
    ) -> None:
        """Initialize the executor.

        Args:
            max_retries: Total number of attempts (>= 1).
            base_delay_ms: Base delay in milliseconds (>= 0).
            sleep: Awaitable sleep taking seconds; injectable for tests.
            on_attempt: Optional observer called on every state transition.
            retry_on: Failure types worth another attempt. Any other
                failure ends the run immediately.

        Raises:
            ValueError: If max_retries < 1 or base_delay_ms < 0.
        """
        if max_retries < 1:
            raise ValueError(f"max_retries must be >= 1, got {max_retries}")
        if base_delay_ms < 0:
            raise ValueError(f"base_delay_ms must be >= 0, got {base_delay_ms}")
        self.max_retries = max_retries
        self.base_delay_ms = base_delay_ms
        self._sleep = sleep
        self._on_attempt = on_attempt
        self.retry_on = retry_on

    @classmethod
    def from_config(
        cls,
        config: RetryConfig,
        *,
        sleep: SleepFunc = asyncio.sleep,
        on_attempt: AttemptCallback | None = None,
    ) -> RetryExecutor:
        """Create an executor from a RetryConfig model."""
        return cls(
            max_retries=config.max_retries,
            base_delay_ms=config.base_delay_ms,
            sleep=sleep,
            on_attempt=on_attempt,
        )

    def delay_for(self, attempt_index: int) -> float:
        """Milliseconds to wait after the failed attempt at 0-based ``attempt_index``."""
        return self.base_delay_ms * (attempt_index + 1)

    def _emit(self, record: AttemptRecord) -> None:
        if self._on_attempt is not None:
            self._on_attempt(record)

    async def run(self, operation: Callable[[], Awaitable[T]]) -> T:
        """Run ``operation`` until it succeeds or the attempt bound is hit.

        Args:
            operation: Zero-argument callable returning an awaitable.

        Returns:
            The operation's result.

        Raises:
            Exception: The last failure, re-raised as the same object.
        """
        self._emit(AttemptRecord(attempt=0, state=RetryState.PENDING))

        for index in range(self.max_retries):
            attempt = index + 1
            self._emit(AttemptRecord(attempt=attempt, state=RetryState.ATTEMPTING))
            try:
                result = await operation()
            except Exception as exc:
                if attempt == self.max_retries or not isinstance(exc, self.retry_on):
                    self._emit(AttemptRecord(attempt=attempt, state=RetryState.FAILED, error=exc))
                    _logger.error(
                        "retry_exhausted",
                        attempts=attempt,
                        error_type=type(exc).__name__,
                        error=str(exc),
                    )
                    raise

                delay_ms = self.delay_for(index)
                self._emit(
                    AttemptRecord(
                        attempt=attempt,
                        state=RetryState.WAITING,
                        delay_ms=delay_ms,
                        error=exc,
                    )
                )
                _logger.warning(
                    "retry_attempt_failed",
                    attempt=attempt,
                    max_retries=self.max_retries,
                    delay_ms=delay_ms,
                    error_type=type(exc).__name__,
                )
                await self._sleep(delay_ms / 1000.0)
                continue

            self._emit(AttemptRecord(attempt=attempt, state=RetryState.SUCCESS))
            if attempt > 1:
                _logger.info("retry_succeeded_after_failures", attempts=attempt)
            return result

        # Unreachable: max_retries >= 1 guarantees the loop returns or raises.
        raise RuntimeError("retry loop exited without a result")

    __call__ = run


async def retry(
    operation: Callable[[], Awaitable[T]],
    max_retries: int = DEFAULT_MAX_RETRIES,
    base_delay_ms: float = DEFAULT_BASE_DELAY_MS,
    *,
    sleep: SleepFunc = asyncio.sleep,
) -> T:
    """Run ``operation`` with the default linear-backoff retry policy."""
    executor = RetryExecutor(max_retries=max_retries, base_delay_ms=base_delay_ms, sleep=sleep)
    return await executor.run(operation)


__all__ = [
    "AttemptRecord",
    "DEFAULT_BASE_DELAY_MS",
    "DEFAULT_MAX_RETRIES",
    "RetryExecutor",
    "RetryState",
    "retry",
]
