"""Configuration loading utilities with JSON and YAML support."""

from __future__ import annotations

import json
import logging
import os
from pathlib import Path
from typing import Any

import yaml

from iconsmith.core.config.models import AppConfig

logger = logging.getLogger(__name__)

API_TOKEN_ENV_VAR = "REPLICATE_API_TOKEN"


def detect_format(file_path: Path | str) -> str:
    """Detect config file format from extension.

    Args:
        file_path: Path to config file

    Returns:
        Format string: "json" or "yaml"

    Raises:
        ValueError: If format cannot be determined

    Example:
        >>> detect_format("iconsmith.json")
        'json'
        >>> detect_format("iconsmith.yml")
        'yaml'
    """
    suffix = Path(file_path).suffix.lower()

    if suffix == ".json":
        return "json"
    elif suffix in [".yaml", ".yml"]:
        return "yaml"
    else:
        raise ValueError(f"Unsupported config format: {suffix}")


def load_config(path: str | Path) -> dict[str, Any]:
    """Load and return raw configuration dictionary.

    Args:
        path: Path to config file (.json, .yaml, or .yml)

    Returns:
        Raw configuration dictionary

    Raises:
        FileNotFoundError: If config file does not exist
        ValueError: If format is not supported or file content is invalid
    """
    path = Path(path)

    if not path.exists():
        raise FileNotFoundError(f"Config file does not exist: {path}")

    fmt = detect_format(path)

    if fmt == "json":
        try:
            with path.open("r", encoding="utf-8") as f:
                content = json.load(f)
        except json.JSONDecodeError as e:
            raise ValueError(f"Invalid JSON in {path}: {e}") from e
    else:
        try:
            with path.open("r", encoding="utf-8") as f:
                content = yaml.safe_load(f)
        except yaml.YAMLError as e:
            raise ValueError(f"Invalid YAML in {path}: {e}") from e
        # safe_load returns None for empty files
        if content is None:
            content = {}

    if not isinstance(content, dict):
        raise ValueError(f"Config root must be a mapping in {path}")
    return content


def load_app_config(path: str | Path | None = None) -> AppConfig:
    """Load and validate application configuration.

    The provider API token is read from REPLICATE_API_TOKEN when the
    config file does not set one.

    Args:
        path: Path to app config file (.json, .yaml, or .yml).
              Defaults to AppConfig.default_path().

    Returns:
        Validated AppConfig with defaults for missing values

    Raises:
        ValidationError: If config is invalid
    """
    if path is None:
        path = AppConfig.default_path()

    if Path(path).exists():
        config = AppConfig.model_validate(load_config(path))
    else:
        logger.debug("Config file %s not found, using defaults", path)
        config = AppConfig()

    return _load_env_vars_into_config(config)


def get_replicate_api_token() -> str | None:
    """Get the Replicate API token from the environment."""
    return os.getenv(API_TOKEN_ENV_VAR)


def _load_env_vars_into_config(config: AppConfig) -> AppConfig:
    """Fill unset secrets from the environment.

    Args:
        config: Loaded configuration

    Returns:
        Config with environment values applied
    """
    if config.provider.api_token is not None:
        return config

    token = get_replicate_api_token()
    if not token:
        return config

    logger.debug("Loaded %s from environment", API_TOKEN_ENV_VAR)
    return config.model_copy(
        update={"provider": config.provider.model_copy(update={"api_token": token})}
    )
