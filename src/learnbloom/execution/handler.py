"""Error boundaries around backend operations.

Raw failures are caught at the call boundary, classified, logged, and handed
to the presentation layer. When retries are involved the retry executor
wraps the raw operation first, so only the final failure is classified.

Example usage:
    from learnbloom.execution.handler import call_with_error_boundary

    sessions = await call_with_error_boundary(
        lambda: api.get_training_sessions(),
        notify=toast,
        context="getTrainingSessions",
    )
    if sessions is None:
        return  # the user has already seen a toast
"""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, NoReturn, TypeVar

from learnbloom.core.error_log import log_error, report_error
from learnbloom.core.logging import get_logger
from learnbloom.core.errors import AppError, ErrorClassifier
from learnbloom.core.errors.classifier import classify_error
from learnbloom.execution.retry import RetryExecutor
from learnbloom.notifications.toast import Notify, show_error

if TYPE_CHECKING:
    from learnbloom.core.config import AppConfig, RetryConfig
    from learnbloom.notifications.reporter import ErrorReporter

T = TypeVar("T")

_logger = get_logger("handler")


def handle_async_error(
    operation: Callable[[], Awaitable[T]],
    notify: Notify,
    context: str | None = None,
    *,
    classifier: ErrorClassifier | None = None,
    reporter: ErrorReporter | None = None,
    environment: str = "development",
) -> Callable[[], Awaitable[T | None]]:
    """Wrap an operation so failures become a toast and a None result.

    Args:
        operation: Zero-argument callable returning an awaitable.
        notify: Toast function used to show the classified error.
        context: Label recorded with the error (usually the operation name).
        classifier: Classifier to use; defaults to the process-wide one.
        reporter: Monitoring reporter used in production.
        environment: "production" enables forwarding to ``reporter``.

    Returns:
        Async callable returning the operation's result, or None on failure.
    """

    async def guarded() -> T | None:
        try:
            return await operation()
        except Exception as exc:
            classified = classifier.classify(exc) if classifier else classify_error(exc)
            await report_error(
                classified,
                context,
                reporter=reporter,
                environment=environment,
            )
            show_error(classified, notify)
            return None

    return guarded


async def call_with_error_boundary(
    operation: Callable[[], Awaitable[T]],
    notify: Notify,
    context: str | None = None,
    *,
    retry_config: RetryConfig | None = None,
    classifier: ErrorClassifier | None = None,
    reporter: ErrorReporter | None = None,
    environment: str = "development",
) -> T | None:
    """Run an operation with retries, classifying only the exhausted failure.

    Returns:
        The operation's result, or None once every attempt has failed and
        the user has been notified.
    """
    executor = RetryExecutor.from_config(retry_config) if retry_config else RetryExecutor()
    guarded = handle_async_error(
        lambda: executor.run(operation),
        notify,
        context,
        classifier=classifier,
        reporter=reporter,
        environment=environment,
    )
    return await guarded()


class ErrorBoundary:
    """Error boundaries sharing one environment, retry policy, and reporter.

    Build it once from the application config and use it for every guarded
    call, so the environment and reporting settings apply everywhere.

    Example usage:
        boundary = ErrorBoundary.from_config(AppConfig.from_yaml(path), notify=toast)
        courses = await boundary.call(lambda: api.get_courses(), "getCourses")
        await boundary.close()
    """

    def __init__(
        self,
        notify: Notify,
        *,
        environment: str = "development",
        retry_config: RetryConfig | None = None,
        classifier: ErrorClassifier | None = None,
        reporter: ErrorReporter | None = None,
    ) -> None:
        self.notify = notify
        self.environment = environment
        self.retry_config = retry_config
        self.classifier = classifier
        self.reporter = reporter

    @classmethod
    def from_config(
        cls,
        config: AppConfig,
        notify: Notify,
        *,
        classifier: ErrorClassifier | None = None,
    ) -> ErrorBoundary:
        """Create boundaries from an AppConfig.

        A webhook reporter is only created when reporting is enabled and the
        environment is production.
        """
        from learnbloom.notifications.reporter import WebhookErrorReporter

        reporter: ErrorReporter | None = None
        if config.reporting.enabled and config.is_production:
            reporter = WebhookErrorReporter.from_config(config.reporting)

        _logger.bind(environment=config.environment).debug(
            "error_boundary_configured",
            reporting=reporter is not None,
            max_retries=config.retry.max_retries,
        )
        return cls(
            notify,
            environment=config.environment,
            retry_config=config.retry,
            classifier=classifier,
            reporter=reporter,
        )

    def guard(
        self,
        operation: Callable[[], Awaitable[T]],
        context: str | None = None,
    ) -> Callable[[], Awaitable[T | None]]:
        """Wrap an operation without retries; see ``handle_async_error``."""
        return handle_async_error(
            operation,
            self.notify,
            context,
            classifier=self.classifier,
            reporter=self.reporter,
            environment=self.environment,
        )

    async def call(
        self,
        operation: Callable[[], Awaitable[T]],
        context: str | None = None,
    ) -> T | None:
        """Run an operation with the configured retries; see ``call_with_error_boundary``."""
        return await call_with_error_boundary(
            operation,
            self.notify,
            context,
            retry_config=self.retry_config,
            classifier=self.classifier,
            reporter=self.reporter,
            environment=self.environment,
        )

    async def close(self) -> None:
        """Release the reporter, if any."""
        if self.reporter is not None:
            await self.reporter.close()


def raise_classified(
    exc: BaseException,
    context: str | None = None,
    classifier: ErrorClassifier | None = None,
) -> NoReturn:
    """Classify, log, and re-raise a caught failure as AppError.

    Intended for service-layer ``except`` blocks:

        try:
            return await api.create_training_session(session)
        except Exception as exc:
            raise_classified(exc, "createTrainingSession")
    """
    classified = classifier.classify(exc) if classifier else classify_error(exc)
    log_error(classified, context)
    raise AppError(classified) from exc


__all__ = [
    "ErrorBoundary",
    "call_with_error_boundary",
    "handle_async_error",
    "raise_classified",
]
