"""Configuration management for iconsmith."""

from iconsmith.core.config.loader import (
    API_TOKEN_ENV_VAR,
    detect_format,
    get_replicate_api_token,
    load_app_config,
    load_config,
)
from iconsmith.core.config.models import (
    AppConfig,
    LoggingConfig,
    ProviderConfig,
    RetrySettings,
    ValidatorConfig,
)

__all__ = [
    "API_TOKEN_ENV_VAR",
    "AppConfig",
    "LoggingConfig",
    "ProviderConfig",
    "RetrySettings",
    "ValidatorConfig",
    "detect_format",
    "get_replicate_api_token",
    "load_app_config",
    "load_config",
]
