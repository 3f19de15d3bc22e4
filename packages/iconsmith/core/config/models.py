"""Configuration models for iconsmith."""

from __future__ import annotations

from pathlib import Path

from pydantic import BaseModel, ConfigDict, Field

from iconsmith.core.generation.client import DEFAULT_MODEL
from iconsmith.core.generation.retry import RetryPolicy


class LoggingConfig(BaseModel):
    """Logging configuration."""

    level: str = Field(default="INFO", pattern="^(DEBUG|INFO|WARNING|ERROR|CRITICAL)$")
    format: str = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
    structured: bool = Field(default=False, description="Emit JSON log lines")


class RetrySettings(BaseModel):
    """Retry settings for image model calls."""

    max_retries: int = Field(default=3, ge=1, description="Total attempts per icon")
    initial_delay_ms: float = Field(
        default=1000.0, ge=0.0, description="Delay before the first retry (doubles each retry)"
    )

    def to_policy(self) -> RetryPolicy:
        return RetryPolicy(max_retries=self.max_retries, initial_delay_ms=self.initial_delay_ms)


class ProviderConfig(BaseModel):
    """Image model provider settings."""

    model: str = Field(default=DEFAULT_MODEL, description="Replicate model identifier")
    api_token: str | None = Field(
        default=None,
        repr=False,
        description="Replicate API token (falls back to REPLICATE_API_TOKEN)",
    )


class ValidatorConfig(BaseModel):
    """Image validation settings."""

    timeout_s: float = Field(default=30.0, gt=0.0, description="Download timeout in seconds")
    expected_width: int = Field(default=512, gt=0)
    expected_height: int = Field(default=512, gt=0)


class AppConfig(BaseModel):
    """Application-level configuration."""

    model_config = ConfigDict(extra="ignore")

    logging: LoggingConfig = LoggingConfig()
    retry: RetrySettings = RetrySettings()
    provider: ProviderConfig = ProviderConfig()
    validator: ValidatorConfig = ValidatorConfig()

    @classmethod
    def default_path(cls) -> Path:
        """Default path for application config."""
        return Path("iconsmith.yaml")
