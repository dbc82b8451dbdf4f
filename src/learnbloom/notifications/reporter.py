"""Error record forwarding to an external monitoring service.

Posts error records as JSON to a configurable HTTP endpoint using httpx.
Supports custom headers (for auth tokens), retries, and timeouts.
"""

from __future__ import annotations

import asyncio
import os
import re
from collections.abc import Awaitable, Callable
from typing import TYPE_CHECKING, Any, Protocol, runtime_checkable

import httpx

from learnbloom import __version__
from learnbloom.core.logging import get_logger
from learnbloom.execution.retry import RetryExecutor

if TYPE_CHECKING:
    from learnbloom.core.config import ReportingConfig
    from learnbloom.core.error_log import ErrorRecord

_logger = get_logger("notifications.reporter")

# ${VAR} syntax in header values
_ENV_VAR_PATTERN = re.compile(r"\$\{(\w+)\}")


class ReportDeliveryError(Exception):
    """A delivery attempt failed in a way another attempt may fix."""


@runtime_checkable
class ErrorReporter(Protocol):
    """Protocol for error record sinks.

    Implementations must not raise: delivery problems are reported through
    the boolean result.
    """

    async def report(self, record: ErrorRecord) -> bool: ...

    async def close(self) -> None: ...


class WebhookErrorReporter:
    """HTTP webhook error reporter.

    Example usage:
        reporter = WebhookErrorReporter(
            url="https://monitoring.example.com/hooks/client-errors",
            headers={"Authorization": "Bearer ${MONITORING_TOKEN}"},
        )
        await reporter.report(record)
        await reporter.close()
    """

    def __init__(
        self,
        url: str | None = None,
        url_env: str | None = None,
        headers: dict[str, str] | None = None,
        timeout: float = 10.0,
        max_retries: int = 2,
        retry_delay: float = 1.0,
        *,
        sleep: Callable[[float], Awaitable[object]] = asyncio.sleep,
    ) -> None:
        """Initialize the reporter.

        Args:
            url: Direct webhook URL.
            url_env: Environment variable containing the webhook URL.
            headers: HTTP headers; ``${VAR}`` references are expanded.
            timeout: HTTP request timeout in seconds.
            max_retries: Retries after the first attempt (0 = no retries).
            retry_delay: Base delay between retries in seconds; the wait
                grows linearly with each failed attempt.
            sleep: Awaitable sleep taking seconds; injectable for tests.
        """
        self._url = url
        if not self._url and url_env:
            self._url = os.environ.get(url_env, "")

        self._headers = self._expand_env_headers(headers or {})
        self._timeout = timeout
        self._max_retries = max_retries
        self._retry_delay = retry_delay
        self._sleep = sleep

        self._client: httpx.AsyncClient | None = None
        self._warned_no_url = False

    @staticmethod
    def _expand_env_headers(headers: dict[str, str]) -> dict[str, str]:
        expanded: dict[str, str] = {}
        for key, value in headers.items():
            if "${" in value:
                for var_name in _ENV_VAR_PATTERN.findall(value):
                    env_value = os.environ.get(var_name)
                    if env_value is None:
                        _logger.warning(
                            "reporter_env_var_missing",
                            header=key,
                            var_name=var_name,
                        )
                        env_value = ""
                    value = value.replace(f"${{{var_name}}}", env_value)
            expanded[key] = value
        return expanded

    @classmethod
    def from_config(cls, config: ReportingConfig) -> WebhookErrorReporter:
        """Create a reporter from a ReportingConfig model."""
        return cls(
            url=config.url,
            url_env=config.url_env,
            headers=config.headers,
            timeout=config.timeout,
            max_retries=config.max_retries,
            retry_delay=config.retry_delay,
        )

    async def _get_client(self) -> httpx.AsyncClient:
        if self._client is None or self._client.is_closed:
            self._client = httpx.AsyncClient(
                timeout=httpx.Timeout(self._timeout),
                headers=self._headers,
            )
        return self._client

    @staticmethod
    def _build_payload(record: ErrorRecord) -> dict[str, Any]:
        return {
            "event_type": "client_error",
            "record": record.to_dict(),
            "metadata": {
                "source": "learnbloom",
                "version": __version__,
            },
        }

    def _executor(self) -> RetryExecutor:
        return RetryExecutor(
            max_retries=self._max_retries + 1,
            base_delay_ms=self._retry_delay * 1000.0,
            sleep=self._sleep,
            retry_on=(ReportDeliveryError, httpx.RequestError),
        )

    async def _deliver(
        self,
        client: httpx.AsyncClient,
        url: str,
        payload: dict[str, Any],
    ) -> tuple[bool, str | None]:
        """Send the payload, retrying server errors and transport failures.

        Client errors (4xx) are final and returned without another attempt.

        Returns:
            Tuple of (success, error_message).
        """
        rejected: str | None = None

        async def attempt() -> bool:
            nonlocal rejected
            response = await client.post(url, json=payload)
            if response.is_success:
                return True
            detail = f"HTTP {response.status_code}: {response.text[:100]}"
            if response.status_code >= 500:
                raise ReportDeliveryError(detail)
            rejected = detail
            return False

        try:
            delivered = await self._executor().run(attempt)
        except httpx.TimeoutException:
            return False, "Request timed out"
        except (ReportDeliveryError, httpx.RequestError) as e:
            return False, str(e)
        return delivered, rejected

    async def report(self, record: ErrorRecord) -> bool:
        """Forward one error record.

        Returns:
            True if the record was accepted, False if unconfigured or failed.
        """
        if not self._url:
            if not self._warned_no_url:
                _logger.warning(
                    "reporter_url_missing",
                    hint="Set url or url_env in the reporting config",
                )
                self._warned_no_url = True
            return False

        try:
            client = await self._get_client()
            success, error = await self._deliver(client, self._url, self._build_payload(record))
        except Exception as e:
            _logger.warning("reporter_unexpected_error", error=str(e), exc_info=True)
            return False

        if success:
            _logger.debug("error_report_sent", context=record.context)
        else:
            _logger.warning("error_report_failed", error=error)
        return success

    async def close(self) -> None:
        """Release the HTTP client."""
        if self._client is not None and not self._client.is_closed:
            await self._client.aclose()
        self._client = None


class MockErrorReporter:
    """Reporter that records error records without making HTTP calls."""

    def __init__(self) -> None:
        self.reports: list[ErrorRecord] = []
        self._fail_next = False
        self.closed = False

    def set_fail_next(self, should_fail: bool = True) -> None:
        """Make the next report() call return False."""
        self._fail_next = should_fail

    async def report(self, record: ErrorRecord) -> bool:
        if self._fail_next:
            self._fail_next = False
            return False
        self.reports.append(record)
        return True

    async def close(self) -> None:
        self.closed = True


__all__ = [
    "ErrorReporter",
    "MockErrorReporter",
    "ReportDeliveryError",
    "WebhookErrorReporter",
]
