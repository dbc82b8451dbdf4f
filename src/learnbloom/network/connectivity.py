"""Connectivity signal and reachability probing.

ConnectivityMonitor is the process-wide "is the network reachable" signal
the classifier reads for its offline fast path. It notifies listeners and,
optionally, the user whenever the state flips. ``probe_connectivity`` checks
reachability with a HEAD request and feeds the result back into a monitor.
"""

from __future__ import annotations

import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Any

import httpx

from learnbloom.core.config import ConnectivityConfig, RetryConfig
from learnbloom.core.logging import get_logger
from learnbloom.execution.retry import RetryExecutor
from learnbloom.notifications.toast import Notify, Toast

_logger = get_logger("connectivity")

ONLINE_TOAST = Toast(
    title="网络已连接",
    description="网络连接已恢复，您可以继续使用应用",
    variant="default",
)
OFFLINE_TOAST = Toast(
    title="网络连接断开",
    description="请检查您的网络连接",
    variant="destructive",
)

OFFLINE_PROBE_ERROR = "设备处于离线状态"
TIMEOUT_PROBE_ERROR = "网络请求超时"
BASIC_CONNECTIVITY_TEST = "基本网络连接"

ConnectivityListener = Callable[[bool], None]


class ConnectivityMonitor:
    """Online/offline signal with change listeners.

    Listeners run synchronously on each state change, in registration
    order. A failing listener is logged and does not stop the others.
    """

    def __init__(self, initial_online: bool = True, notify: Notify | None = None) -> None:
        self._online = initial_online
        self._notify = notify
        self._listeners: list[ConnectivityListener] = []

    @property
    def is_online(self) -> bool:
        return self._online

    def add_listener(self, listener: ConnectivityListener) -> Callable[[], None]:
        """Register a listener; returns a function that unregisters it."""
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def set_online(self, online: bool) -> bool:
        """Update the signal.

        Returns:
            True if the state changed (and listeners were notified).
        """
        if online == self._online:
            return False
        self._online = online
        _logger.info("connectivity_changed", online=online)

        if self._notify is not None:
            self._notify(ONLINE_TOAST if online else OFFLINE_TOAST)

        for listener in list(self._listeners):
            try:
                listener(online)
            except Exception:
                _logger.exception("connectivity_listener_failed")
        return True


@dataclass
class NetworkProbeResult:
    """Outcome of one reachability probe."""

    test: str
    success: bool
    duration_ms: float
    error: str | None = None
    details: dict[str, Any] = field(default_factory=dict)

    def to_dict(self) -> dict[str, Any]:
        return {
            "test": self.test,
            "success": self.success,
            "duration_ms": round(self.duration_ms, 1),
            "error": self.error,
            "details": self.details,
        }


async def _head(url: str, timeout_seconds: float, client: httpx.AsyncClient | None) -> httpx.Response:
    if client is not None:
        return await client.head(url, timeout=timeout_seconds)
    async with httpx.AsyncClient(timeout=httpx.Timeout(timeout_seconds)) as owned:
        return await owned.head(url)


async def probe_connectivity(
    url: str,
    timeout_seconds: float = 8.0,
    *,
    client: httpx.AsyncClient | None = None,
    monitor: ConnectivityMonitor | None = None,
    device_online: bool = True,
) -> NetworkProbeResult:
    """Check whether ``url`` is reachable.

    Any HTTP response counts as reachable. A request is always sent while
    ``device_online`` is true, whatever the monitor currently says, so an
    offline monitor is flipped back once the network returns. Pass
    ``device_online=False`` when the platform reports no network interface
    to skip the request. The monitor, if given, is updated with the outcome.
    """
    started = time.monotonic()

    def elapsed_ms() -> float:
        return (time.monotonic() - started) * 1000.0

    if not device_online:
        result = NetworkProbeResult(
            test=BASIC_CONNECTIVITY_TEST,
            success=False,
            duration_ms=elapsed_ms(),
            error=OFFLINE_PROBE_ERROR,
            details={"online": False},
        )
        if monitor is not None:
            monitor.set_online(False)
        return result

    try:
        response = await _head(url, timeout_seconds, client)
    except httpx.TimeoutException as exc:
        result = NetworkProbeResult(
            test=BASIC_CONNECTIVITY_TEST,
            success=False,
            duration_ms=elapsed_ms(),
            error=TIMEOUT_PROBE_ERROR,
            details={"url": url, "original_error": type(exc).__name__},
        )
    except httpx.TransportError as exc:
        result = NetworkProbeResult(
            test=BASIC_CONNECTIVITY_TEST,
            success=False,
            duration_ms=elapsed_ms(),
            error=str(exc) or type(exc).__name__,
            details={"url": url, "original_error": type(exc).__name__},
        )
    else:
        result = NetworkProbeResult(
            test=BASIC_CONNECTIVITY_TEST,
            success=True,
            duration_ms=elapsed_ms(),
            details={"url": url, "status": response.status_code},
        )

    if monitor is not None:
        monitor.set_online(result.success)
    _logger.debug("connectivity_probed", **result.to_dict())
    return result


class ProbeFailedError(Exception):
    """Raised inside the retry loop when a probe attempt fails."""

    def __init__(self, result: NetworkProbeResult) -> None:
        super().__init__(result.error or "probe failed")
        self.result = result


async def probe_with_retry(
    config: ConnectivityConfig | None = None,
    *,
    client: httpx.AsyncClient | None = None,
    monitor: ConnectivityMonitor | None = None,
    executor: RetryExecutor | None = None,
) -> NetworkProbeResult:
    """Probe reachability, retrying failed probes with linear backoff.

    The monitor is only updated with the final outcome, so transient probe
    failures do not flip the signal back and forth.

    Returns:
        The successful probe result, or the last failed one with the
        number of attempts recorded in ``details["attempts"]``.
    """
    config = config or ConnectivityConfig()
    retry_config: RetryConfig = config.retry
    executor = executor or RetryExecutor.from_config(retry_config)
    attempts = 0

    async def attempt() -> NetworkProbeResult:
        nonlocal attempts
        attempts += 1
        result = await probe_connectivity(config.probe_url, config.timeout_seconds, client=client)
        if not result.success:
            raise ProbeFailedError(result)
        return result

    try:
        result = await executor.run(attempt)
    except ProbeFailedError as exc:
        result = exc.result

    result.details["attempts"] = attempts
    if monitor is not None:
        monitor.set_online(result.success)
    return result


__all__ = [
    "ConnectivityMonitor",
    "NetworkProbeResult",
    "OFFLINE_TOAST",
    "ONLINE_TOAST",
    "ProbeFailedError",
    "probe_connectivity",
    "probe_with_retry",
]
