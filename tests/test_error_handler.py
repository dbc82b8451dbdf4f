"""Tests for learnbloom.execution.handler."""

from __future__ import annotations

import pytest

from learnbloom.core.config import AppConfig, RetryConfig
from learnbloom.core.errors import AppError, ErrorClassifier, ErrorKind
from learnbloom.execution.handler import (
    ErrorBoundary,
    call_with_error_boundary,
    handle_async_error,
    raise_classified,
)
from learnbloom.network.connectivity import ConnectivityMonitor
from learnbloom.notifications.reporter import MockErrorReporter, WebhookErrorReporter
from learnbloom.notifications.toast import ToastRecorder


class TestHandleAsyncError:
    @pytest.mark.asyncio
    async def test_success_returns_result_without_toast(self, toasts: ToastRecorder):
        async def operation() -> list[str]:
            return ["course-1"]

        guarded = handle_async_error(operation, toasts, "getCourses")

        assert await guarded() == ["course-1"]
        assert toasts.toasts == []

    @pytest.mark.asyncio
    async def test_failure_returns_none_and_shows_toast(self, toasts: ToastRecorder):
        async def operation() -> None:
            raise ConnectionError("refused")

        result = await handle_async_error(operation, toasts, "getCourses")()

        assert result is None
        assert toasts.last.title == "网络错误"
        assert toasts.last.variant == "destructive"

    @pytest.mark.asyncio
    async def test_uses_given_classifier(self, toasts: ToastRecorder):
        async def operation() -> None:
            raise ValueError("ignored while offline")

        classifier = ErrorClassifier(connectivity=ConnectivityMonitor(initial_online=False))
        await handle_async_error(operation, toasts, classifier=classifier)()

        assert toasts.last.description == "网络连接已断开，请检查网络设置"

    @pytest.mark.asyncio
    async def test_reports_in_production(self, toasts: ToastRecorder):
        reporter = MockErrorReporter()

        async def operation() -> None:
            raise ValueError("boom")

        await handle_async_error(
            operation, toasts, "submitAssignment", reporter=reporter, environment="production"
        )()

        assert len(reporter.reports) == 1
        assert reporter.reports[0].context == "submitAssignment"
        assert reporter.reports[0].kind == "UNKNOWN_ERROR"


class TestCallWithErrorBoundary:
    @pytest.mark.asyncio
    async def test_retries_before_notifying(self, toasts: ToastRecorder):
        calls = 0

        async def operation() -> str:
            nonlocal calls
            calls += 1
            if calls < 3:
                raise ConnectionError("flaky")
            return "done"

        result = await call_with_error_boundary(
            operation, toasts, retry_config=RetryConfig(max_retries=3, base_delay_ms=0)
        )

        assert result == "done"
        assert calls == 3
        assert toasts.toasts == []

    @pytest.mark.asyncio
    async def test_only_final_failure_is_shown(self, toasts: ToastRecorder):
        calls = 0

        async def operation() -> None:
            nonlocal calls
            calls += 1
            raise {1: ConnectionError("a"), 2: ConnectionError("b")}.get(calls, ValueError("last"))

        result = await call_with_error_boundary(
            operation, toasts, retry_config=RetryConfig(max_retries=3, base_delay_ms=0)
        )

        assert result is None
        assert calls == 3
        assert len(toasts.toasts) == 1
        assert toasts.last.description == "last"


class TestErrorBoundary:
    def test_production_with_reporting_builds_webhook_reporter(self, toasts: ToastRecorder):
        config = AppConfig.from_yaml_string(
            "environment: production\n"
            "retry:\n"
            "  max_retries: 4\n"
            "reporting:\n"
            "  enabled: true\n"
            "  url: https://monitoring.example.com/hook\n"
        )

        boundary = ErrorBoundary.from_config(config, toasts)

        assert isinstance(boundary.reporter, WebhookErrorReporter)
        assert boundary.reporter._url == "https://monitoring.example.com/hook"
        assert boundary.environment == "production"
        assert boundary.retry_config.max_retries == 4

    @pytest.mark.parametrize(
        "yaml_text",
        [
            "environment: development\nreporting:\n  enabled: true\n  url: https://m.example.com\n",
            "environment: production\nreporting:\n  enabled: false\n  url: https://m.example.com\n",
        ],
    )
    def test_no_reporter_unless_enabled_in_production(self, toasts: ToastRecorder, yaml_text: str):
        boundary = ErrorBoundary.from_config(AppConfig.from_yaml_string(yaml_text), toasts)
        assert boundary.reporter is None

    @pytest.mark.asyncio
    async def test_call_retries_then_reports(self, toasts: ToastRecorder):
        reporter = MockErrorReporter()
        boundary = ErrorBoundary(
            toasts,
            environment="production",
            retry_config=RetryConfig(max_retries=2, base_delay_ms=0),
            reporter=reporter,
        )
        calls = 0

        async def operation() -> None:
            nonlocal calls
            calls += 1
            raise ConnectionError("refused")

        assert await boundary.call(operation, "getCourses") is None
        assert calls == 2
        assert [r.context for r in reporter.reports] == ["getCourses"]
        assert toasts.last.title == "网络错误"

        await boundary.close()
        assert reporter.closed

    @pytest.mark.asyncio
    async def test_guard_in_development_does_not_report(self, toasts: ToastRecorder):
        reporter = MockErrorReporter()
        boundary = ErrorBoundary(toasts, reporter=reporter)

        async def operation() -> None:
            raise ValueError("boom")

        assert await boundary.guard(operation, "gradeAssignment")() is None
        assert reporter.reports == []
        assert len(toasts.toasts) == 1


class TestRaiseClassified:
    def test_wraps_in_app_error(self):
        original = ConnectionError("refused")

        with pytest.raises(AppError) as exc_info:
            raise_classified(original, "createTrainingSession")

        assert exc_info.value.kind == ErrorKind.NETWORK_ERROR
        assert exc_info.value.__cause__ is original
        assert exc_info.value.error.cause is original
