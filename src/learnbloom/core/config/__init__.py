"""Configuration models for learnbloom.

Pydantic models for loading and validating YAML configuration. All models
are re-exported here so ``from learnbloom.core.config import ...`` works.
"""

from learnbloom.core.config.app import AppConfig
from learnbloom.core.config.execution import (
    DEFAULT_PROBE_URL,
    ConnectivityConfig,
    RetryConfig,
)
from learnbloom.core.config.observability import LogConfig, ReportingConfig

__all__ = [
    "AppConfig",
    "ConnectivityConfig",
    "DEFAULT_PROBE_URL",
    "LogConfig",
    "ReportingConfig",
    "RetryConfig",
]
