#!/usr/bin/env python3
"""
Configuration management for Price Tracker.

This module handles loading, merging, and validating configuration from:
1. Default values
2. User config file (~/.pricetrack/config.toml)
3. Environment variables (prefixed with PRICETRACK_)
4. Explicit overrides (command-line options)
"""
from __future__ import annotations

import os
from decimal import Decimal
from enum import Enum
from pathlib import Path
from typing import Any, Dict, Optional, Union

import tomli
from pydantic import BaseModel, Field, ValidationError, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from pricetracker.errors import ConfigError


ENV_PREFIX = "PRICETRACK_"
ENV_NESTED_DELIMITER = "__"
DEFAULT_CONFIG_FILE = Path.home() / ".pricetrack" / "config.toml"

# Items the store holds when the server starts
DEFAULT_SEED_ITEMS = {"shoes": Decimal("50"), "socks": Decimal("5")}


class LogLevel(str, Enum):
    """Log levels for application logging."""
    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"
    CRITICAL = "critical"


class ServerConfig(BaseModel):
    """Server-related configuration settings."""
    host: str = "localhost"
    port: int = 8000

    model_config = {"extra": "forbid"}

    @field_validator("port")
    @classmethod
    def validate_port(cls, v: int) -> int:
        """Ensure port is within valid range."""
        if not 1 <= v <= 65535:
            raise ValueError(f"Port must be between 1-65535, got {v}")
        return v


class PriceTrackerConfig(BaseSettings):
    """Main configuration model for Price Tracker application."""
    # Application settings
    app_name: str = "Price Tracker"
    version: str = "0.1.0"

    # Store contents at startup
    seed_items: Dict[str, Decimal] = Field(default_factory=lambda: dict(DEFAULT_SEED_ITEMS))

    # Server settings
    server: ServerConfig = Field(default_factory=ServerConfig)

    # Logging settings
    log_level: LogLevel = LogLevel.INFO
    log_file: Optional[Path] = None
    log_backup_count: int = 5
    color_output: bool = True

    model_config = SettingsConfigDict(
        env_prefix=ENV_PREFIX,
        env_nested_delimiter=ENV_NESTED_DELIMITER,
        case_sensitive=False,
        extra="forbid",  # Raise error on unknown fields
    )

    @field_validator("log_level", mode="before")
    @classmethod
    def normalize_log_level(cls, v: Any) -> Any:
        if isinstance(v, str):
            return v.lower()
        return v

    @classmethod
    def settings_customise_sources(
        cls,
        settings_cls,
        init_settings,
        env_settings,
        dotenv_settings,
        file_secret_settings,
    ):
        # load_config merges file, environment and overrides itself
        return (init_settings,)


def deep_merge(base: Dict[str, Any], override: Dict[str, Any]) -> Dict[str, Any]:
    """
    Deep merge two dictionaries, with values from override taking precedence.

    If both values are dictionaries, they are deep-merged recursively.
    Otherwise, the value from override is used.
    """
    result = base.copy()

    for key, value in override.items():
        if key in result and isinstance(result[key], dict) and isinstance(value, dict):
            result[key] = deep_merge(result[key], value)
        else:
            result[key] = value

    return result


def load_toml_config(file_path: Union[str, Path]) -> Dict[str, Any]:
    """
    Load configuration from a TOML file.

    Returns an empty dict if the file doesn't exist.

    Raises:
        ConfigError: If the file exists but cannot be read or parsed
    """
    path = Path(file_path)
    if not path.exists():
        return {}

    try:
        with open(path, "rb") as f:
            return tomli.load(f)
    except (tomli.TOMLDecodeError, PermissionError, IsADirectoryError) as e:
        raise ConfigError(f"Error loading config file {file_path}: {str(e)}") from e


def env_to_config_dict(environ: Optional[Dict[str, str]] = None) -> Dict[str, Any]:
    """
    Convert environment variables with PRICETRACK_ prefix to a nested config dictionary.

    Example: PRICETRACK_SERVER__PORT=8080 becomes {'server': {'port': '8080'}}
    """
    if environ is None:
        environ = dict(os.environ)

    config_dict: Dict[str, Any] = {}

    for key, value in environ.items():
        if not key.upper().startswith(ENV_PREFIX):
            continue

        config_key = key[len(ENV_PREFIX):].lower()
        # Flags consumed by the logging setup, not config fields
        if config_key in ("debug", "loglevel"):
            continue

        parts = config_key.split(ENV_NESTED_DELIMITER)
        current = config_dict
        for part in parts[:-1]:
            current = current.setdefault(part, {})
        current[parts[-1]] = value

    return config_dict


def load_config(
    config_file: Optional[Path] = None,
    overrides: Optional[Dict[str, Any]] = None,
    environ: Optional[Dict[str, str]] = None,
) -> PriceTrackerConfig:
    """
    Load and merge configuration from all sources.

    Order of precedence (highest to lowest):
    1. Explicit overrides
    2. Environment variables
    3. User config file
    4. Default values from PriceTrackerConfig

    Args:
        config_file: Optional path to config file. If None, uses default location.
        overrides: Optional nested dict of values that win over every other source.
        environ: Environment mapping to read; defaults to os.environ.

    Returns:
        PriceTrackerConfig: The loaded and validated configuration.

    Raises:
        ConfigError: If configuration is invalid or contains unknown fields.
    """
    if config_file is None:
        config_file = DEFAULT_CONFIG_FILE

    merged_config: Dict[str, Any] = {}
    merged_config = deep_merge(merged_config, load_toml_config(config_file))
    merged_config = deep_merge(merged_config, env_to_config_dict(environ))
    merged_config = deep_merge(merged_config, overrides or {})

    try:
        return PriceTrackerConfig(**merged_config)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e

