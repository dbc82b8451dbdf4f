"""Logging and error-reporting configuration models."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

from pydantic import BaseModel, Field, model_validator


class LogConfig(BaseModel):
    """Configuration for structured logging.

    Controls log level, output format, and file rotation settings.
    """

    level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO",
        description="Minimum log level to capture",
    )
    format: Literal["json", "console", "both"] = Field(
        default="console",
        description="Output format: json for structured, console for human-readable, "
        "both for console to stderr plus a log file",
    )
    file_path: Path | None = Field(
        default=None,
        description="Path for log file output (required if format='both')",
    )
    max_file_size_mb: int = Field(
        default=50,
        gt=0,
        le=1000,
        description="Maximum log file size before rotation (MB)",
    )
    backup_count: int = Field(
        default=5,
        ge=0,
        le=100,
        description="Number of rotated log files to keep",
    )
    include_timestamps: bool = Field(
        default=True,
        description="Include ISO8601 UTC timestamps in log entries",
    )
    include_context: bool = Field(
        default=True,
        description="Include client context (client string, location) in log entries",
    )

    @model_validator(mode="after")
    def _check_file_path_required(self) -> LogConfig:
        if self.format == "both" and self.file_path is None:
            raise ValueError(
                f"file_path is required when format='{self.format}'"
            )
        return self


class ReportingConfig(BaseModel):
    """Configuration for forwarding error records to a monitoring webhook.

    Example:
        reporting:
          enabled: true
          url_env: LEARNBLOOM_ERROR_WEBHOOK
          headers:
            Authorization: "Bearer ${MONITORING_TOKEN}"
    """

    enabled: bool = Field(default=False, description="Forward error records in production")
    url: str | None = Field(default=None, description="Webhook URL")
    url_env: str | None = Field(
        default=None,
        description="Environment variable holding the webhook URL (used if url is unset)",
    )
    headers: dict[str, str] = Field(
        default_factory=dict,
        description="HTTP headers; ${VAR} references are expanded from the environment",
    )
    timeout: float = Field(default=10.0, gt=0, description="Request timeout in seconds")
    max_retries: int = Field(default=2, ge=0, description="Retries on 5xx or transport errors")
    retry_delay: float = Field(default=1.0, ge=0, description="Seconds between retries")
