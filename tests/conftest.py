"""Pytest fixtures for learnbloom tests."""

import logging
from pathlib import Path
from typing import Generator

import pytest
import structlog

from learnbloom.core.logging import clear_context
from learnbloom.notifications.toast import ToastRecorder


@pytest.fixture(autouse=True)
def reset_logging_state() -> Generator[None, None, None]:
    """Reset logging state before and after each test.

    This ensures test isolation for logging configuration.
    """
    from learnbloom.cli import helpers

    helpers.reset_logging_state()
    structlog.reset_defaults()
    clear_context()

    root_logger = logging.getLogger()
    original_handlers = root_logger.handlers[:]
    original_level = root_logger.level
    for handler in original_handlers:
        root_logger.removeHandler(handler)

    yield

    helpers.reset_logging_state()
    structlog.reset_defaults()
    clear_context()

    for handler in root_logger.handlers[:]:
        root_logger.removeHandler(handler)
        handler.close()
    for handler in original_handlers:
        root_logger.addHandler(handler)
    root_logger.setLevel(original_level)


@pytest.fixture
def toasts() -> ToastRecorder:
    """Notify function that records every toast it is given."""
    return ToastRecorder()


class SleepRecorder:
    """Async stand-in for asyncio.sleep that records requested delays."""

    def __init__(self) -> None:
        self.delays: list[float] = []

    async def __call__(self, seconds: float) -> None:
        self.delays.append(seconds)


@pytest.fixture
def sleep_recorder() -> SleepRecorder:
    return SleepRecorder()


@pytest.fixture
def sample_yaml_config(tmp_path: Path) -> Path:
    """Write a complete, valid configuration file."""
    config_path = tmp_path / "learnbloom.yaml"
    config_path.write_text(
        "environment: production\n"
        "retry:\n"
        "  max_retries: 4\n"
        "  base_delay_ms: 250\n"
        "logging:\n"
        "  level: INFO\n"
        "  format: json\n"
        "connectivity:\n"
        "  probe_url: https://example.supabase.co/rest/v1/\n"
        "  timeout_seconds: 5\n"
        "reporting:\n"
        "  enabled: true\n"
        "  url: https://monitoring.example.com/hooks/client-errors\n",
        encoding="utf-8",
    )
    return config_path
