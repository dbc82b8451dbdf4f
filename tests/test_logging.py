"""Tests for learnbloom.core.logging module."""

from __future__ import annotations

import asyncio
import json
import logging
from pathlib import Path

import pytest
import structlog
from structlog.testing import capture_logs

from learnbloom.core.logging import (
    SENSITIVE_PATTERNS,
    BloomLogger,
    ClientContext,
    _add_context,
    _add_timestamp,
    _sanitize_event_dict,
    _sanitize_value,
    clear_context,
    configure_logging,
    get_client_context,
    get_current_context,
    get_logger,
    redact,
    set_context,
    with_client_context,
)


class TestSensitivePatterns:
    """Tests for sensitive field detection and sanitization."""

    def test_known_sensitive_patterns(self):
        assert "password" in SENSITIVE_PATTERNS
        assert "token" in SENSITIVE_PATTERNS
        assert "anon_key" in SENSITIVE_PATTERNS
        assert "service_role" in SENSITIVE_PATTERNS

    def test_sanitize_value_redacts_mixed_case(self):
        assert _sanitize_value("Password", "hunter2") == "[REDACTED]"
        assert _sanitize_value("SUPABASE_ANON_KEY", "eyJ...") == "[REDACTED]"

    def test_sanitize_value_preserves_safe_values(self):
        assert _sanitize_value("status_code", 404) == 404
        assert _sanitize_value("context", "getCourses") == "getCourses"

    def test_sanitize_event_dict_handles_nested_dicts(self):
        event_dict = {
            "event": "login_failed",
            "form": {"email": "a@b.c", "password": "hunter2"},
            "access_token": "abc",
        }

        result = _sanitize_event_dict(None, "info", event_dict)

        assert result["form"] == {"email": "a@b.c", "password": "[REDACTED]"}
        assert result["access_token"] == "[REDACTED]"
        assert result["event"] == "login_failed"

    def test_redact_walks_nested_containers(self):
        value = {
            "rows": [{"id": 1, "api_key": "k"}],
            "pair": ("x", {"Authorization": "Bearer y"}),
        }

        assert redact(value) == {
            "rows": [{"id": 1, "api_key": "[REDACTED]"}],
            "pair": ("x", {"Authorization": "[REDACTED]"}),
        }
        assert redact("plain") == "plain"

    def test_sanitize_event_dict_handles_deep_nesting(self):
        event_dict = {"event": "x", "record": {"details": {"form": {"password": "p"}}}}

        result = _sanitize_event_dict(None, "info", event_dict)

        assert result["record"]["details"]["form"]["password"] == "[REDACTED]"


class TestProcessors:
    def test_add_timestamp_keeps_existing(self):
        assert _add_timestamp(None, "info", {"timestamp": "t"})["timestamp"] == "t"
        assert "timestamp" in _add_timestamp(None, "info", {})

    def test_add_context_without_context(self):
        assert _add_context(None, "info", {"event": "x"}) == {"event": "x"}

    def test_add_context_does_not_override_explicit_keys(self):
        ctx = ClientContext(client="agent", location="/courses")
        with with_client_context(ctx):
            result = _add_context(None, "info", {"event": "x", "location": "/explicit"})
        assert result == {
            "event": "x",
            "client": "agent",
            "location": "/explicit",
        }


class TestClientContext:
    def test_to_dict(self):
        assert ClientContext(client="agent").to_dict() == {"client": "agent", "location": ""}

    def test_set_and_clear(self):
        ctx = ClientContext(client="agent")
        set_context(ctx)
        assert get_current_context() is ctx
        clear_context()
        assert get_current_context() is None
        assert get_client_context().client.startswith("learnbloom/")

    def test_context_manager_restores_previous(self):
        outer = ClientContext(client="outer")
        set_context(outer)
        with with_client_context(ClientContext(client="inner")):
            assert get_current_context().client == "inner"
        assert get_current_context() is outer

    @pytest.mark.asyncio
    async def test_tasks_are_isolated(self):
        async def located(path: str) -> str:
            with with_client_context(ClientContext(client="agent", location=path)):
                await asyncio.sleep(0)
                return get_client_context().location

        assert await asyncio.gather(located("/a"), located("/b")) == ["/a", "/b"]


class TestBloomLogger:
    def test_component_is_bound(self):
        with capture_logs() as logs:
            get_logger("retry").info("retry_started", attempt=1)
        assert logs == [
            {"event": "retry_started", "log_level": "info", "component": "retry", "attempt": 1}
        ]

    def test_bind_does_not_change_original(self):
        base = BloomLogger("handler")
        logger = base.bind(context="getCourses")
        with capture_logs() as logs:
            logger.warning("a")
            base.warning("b")
        assert logs[0]["context"] == "getCourses"
        assert "context" not in logs[1]


class TestConfigureLogging:
    def test_both_without_file_raises(self):
        with pytest.raises(ValueError, match="file_path"):
            configure_logging(format="both")

    def test_json_file_output(self, tmp_path: Path):
        log_file = tmp_path / "logs" / "learnbloom.log"
        configure_logging(level="INFO", format="json", file_path=log_file)

        with with_client_context(ClientContext(client="agent", location="/courses")):
            get_logger("test").info("course_loaded", password="hunter2", course_id=7)
        for handler in logging.getLogger().handlers:
            handler.flush()

        entry = json.loads(log_file.read_text(encoding="utf-8").strip().splitlines()[-1])
        assert entry["event"] == "course_loaded"
        assert entry["password"] == "[REDACTED]"
        assert entry["course_id"] == 7
        assert entry["location"] == "/courses"
        assert entry["level"] == "info"
        assert "timestamp" in entry

    def test_level_filters(self, tmp_path: Path):
        log_file = tmp_path / "learnbloom.log"
        configure_logging(level="WARNING", format="json", file_path=log_file)

        get_logger("test").info("hidden")
        get_logger("test").warning("shown")
        for handler in logging.getLogger().handlers:
            handler.flush()

        content = log_file.read_text(encoding="utf-8")
        assert "hidden" not in content
        assert "shown" in content

    def test_configures_structlog(self):
        configure_logging(level="DEBUG", format="console")
        assert structlog.is_configured()
