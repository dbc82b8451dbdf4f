"""Shared utilities for learnbloom CLI commands.

Holds the global logging options collected by the app callback and the
config loading used by several commands.
"""

from __future__ import annotations

from dataclasses import dataclass
from pathlib import Path
from typing import Literal

import typer
import yaml
from pydantic import ValidationError
from rich.console import Console
from rich.markup import escape

from learnbloom.core.config import AppConfig
from learnbloom.core.logging import configure_logging, get_logger

_logger = get_logger("cli")


class ErrorMessages:
    """User-facing CLI error messages."""

    CONFIG_LOAD_ERROR = "Error loading config"
    CONFIG_READ_ERROR = "Cannot read config file"
    YAML_SYNTAX_ERROR = "YAML syntax error"
    SCHEMA_ERROR = "Schema validation failed"


# =============================================================================
# Logging configuration
# =============================================================================


@dataclass
class CliLoggingConfig:
    """Logging options gathered from the global CLI flags."""

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "WARNING"
    file: Path | None = None
    format: Literal["json", "console", "both"] = "console"
    configured: bool = False
    explicit: bool = False
    """True once any logging flag was given; config files then leave logging alone."""


_log_config = CliLoggingConfig()


def set_log_level(level: str) -> None:
    """Set the log level (DEBUG, INFO, WARNING, ERROR)."""
    _log_config.level = level.upper()  # type: ignore[assignment]
    _log_config.explicit = True


def set_log_file(path: Path | None) -> None:
    """Set the log file path.

    File output uses the console renderer unless a format is given
    explicitly afterwards.
    """
    _log_config.file = path
    _log_config.explicit = True
    if path:
        _log_config.format = "console"


def set_log_format(fmt: str) -> None:
    """Set the log format (json, console, both)."""
    _log_config.format = fmt  # type: ignore[assignment]
    _log_config.explicit = True


def configure_global_logging(console: Console) -> None:
    """Configure logging from the global CLI options, once per process.

    Raises:
        typer.Exit: If the logging options are inconsistent.
    """
    if _log_config.configured:
        return

    try:
        configure_logging(
            level=_log_config.level,
            format=_log_config.format,
            file_path=_log_config.file,
        )
        _log_config.configured = True
    except ValueError as e:
        console.print(f"[red]Logging configuration error:[/red] {e}")
        raise typer.Exit(1) from None


def apply_config_logging(config: AppConfig) -> None:
    """Reconfigure logging from a loaded config's ``logging`` section.

    Skipped when logging flags were given on the command line.
    """
    if _log_config.explicit:
        return
    log = config.logging
    configure_logging(
        level=log.level,
        format=log.format,
        file_path=log.file_path,
        max_file_size_mb=log.max_file_size_mb,
        backup_count=log.backup_count,
        include_timestamps=log.include_timestamps,
        include_context=log.include_context,
    )
    _log_config.configured = True
    _logger.debug("logging_configured_from_file", level=log.level, format=log.format)


def reset_logging_state() -> None:
    """Reset the CLI logging state (used by tests)."""
    global _log_config
    _log_config = CliLoggingConfig()


# =============================================================================
# Config loading
# =============================================================================


def load_app_config(config_file: Path | None, console: Console) -> AppConfig:
    """Load an AppConfig from YAML, or return defaults when no file is given.

    A loaded file also applies its ``logging`` section unless logging flags
    were passed.

    Raises:
        typer.Exit: With code 1 if the file cannot be read or is invalid.
    """
    if config_file is None:
        return AppConfig()

    try:
        config = AppConfig.from_yaml(config_file)
    except (OSError, yaml.YAMLError, ValidationError) as e:
        _logger.warning("config_load_failed", path=str(config_file), error=str(e))
        console.print(f"[red]{ErrorMessages.CONFIG_LOAD_ERROR}:[/red] {escape(str(e))}")
        raise typer.Exit(1) from None

    apply_config_logging(config)
    return config


__all__ = [
    "CliLoggingConfig",
    "ErrorMessages",
    "apply_config_logging",
    "configure_global_logging",
    "load_app_config",
    "reset_logging_state",
    "set_log_file",
    "set_log_format",
    "set_log_level",
]
