"""Top-level application configuration."""

from __future__ import annotations

from pathlib import Path
from typing import Literal

import yaml
from pydantic import BaseModel, Field

from learnbloom.core.config.execution import ConnectivityConfig, RetryConfig
from learnbloom.core.config.observability import LogConfig, ReportingConfig


class AppConfig(BaseModel):
    """Complete learnbloom configuration, usually loaded from YAML.

    Example:
        environment: production
        retry:
          max_retries: 3
          base_delay_ms: 1000
        logging:
          level: INFO
          format: json
        connectivity:
          probe_url: https://example.supabase.co/rest/v1/
        reporting:
          enabled: true
          url: https://monitoring.example.com/hooks/client-errors
    """

    environment: Literal["development", "production"] = Field(
        default="development",
        description="Deployment environment; error reporting only runs in production",
    )
    retry: RetryConfig = Field(default_factory=RetryConfig)
    logging: LogConfig = Field(default_factory=LogConfig)
    connectivity: ConnectivityConfig = Field(default_factory=ConnectivityConfig)
    reporting: ReportingConfig = Field(default_factory=ReportingConfig)

    @property
    def is_production(self) -> bool:
        return self.environment == "production"

    @classmethod
    def from_yaml(cls, path: Path) -> AppConfig:
        """Load configuration from a YAML file."""
        with open(path, encoding="utf-8") as f:
            data = yaml.safe_load(f)
        return cls.model_validate(data or {})

    @classmethod
    def from_yaml_string(cls, yaml_str: str) -> AppConfig:
        """Load configuration from a YAML string."""
        data = yaml.safe_load(yaml_str)
        return cls.model_validate(data or {})
