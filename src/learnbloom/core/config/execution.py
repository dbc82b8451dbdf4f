"""Retry and connectivity configuration models."""

from __future__ import annotations

from pydantic import BaseModel, Field

DEFAULT_PROBE_URL = "https://1.1.1.1/"


class RetryConfig(BaseModel):
    """Configuration for retrying fallible backend operations.

    Delays grow linearly: the wait before attempt ``n + 1`` is
    ``base_delay_ms * n``.
    """

    max_retries: int = Field(
        default=3,
        ge=1,
        description="Total number of attempts, including the first one",
    )
    base_delay_ms: float = Field(
        default=1000.0,
        ge=0,
        description="Base delay between attempts in milliseconds",
    )


class ConnectivityConfig(BaseModel):
    """Configuration for the network reachability probe."""

    probe_url: str = Field(
        default=DEFAULT_PROBE_URL,
        description="URL requested with HEAD to decide whether the network is reachable",
    )
    timeout_seconds: float = Field(
        default=8.0,
        gt=0,
        le=120,
        description="Per-request timeout for the probe",
    )
    retry: RetryConfig = Field(
        default_factory=RetryConfig,
        description="Retry policy applied to failed probes",
    )
