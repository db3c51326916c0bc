"""Configuration for file utilities."""

from __future__ import annotations

import codecs
import logging
import os
from pathlib import Path
from typing import Any

import yaml
from pydantic import BaseModel, Field, ValidationError, field_validator

# Default config location
CONFIG_DIR = Path.home() / ".file-util-sync"
CONFIG_FILE = CONFIG_DIR / "config.yaml"
CONFIG_ENV_VAR = "FILE_UTIL_SYNC_CONFIG"


class ConfigError(Exception):
    """Error loading configuration."""

    pass


class FileUtilSettings(BaseModel):
    """Settings shared by file utility operations."""

    encoding: str = "utf-8"
    max_workers: int | None = Field(default=None, ge=1)
    log_level: str = "WARNING"

    @field_validator("log_level")
    @classmethod
    def _check_log_level(cls, value: str) -> str:
        level = value.upper()
        if not isinstance(logging.getLevelName(level), int):
            raise ValueError(f"Unknown log level: {value}")
        return level

    @field_validator("encoding")
    @classmethod
    def _check_encoding(cls, value: str) -> str:
        try:
            codecs.lookup(value)
        except LookupError as e:
            raise ValueError(f"Unknown encoding: {value}") from e
        return value


def default_config_path() -> Path:
    """Get the config file location, honoring the environment override."""
    override = os.environ.get(CONFIG_ENV_VAR)
    return Path(override) if override else CONFIG_FILE


def load_settings(path: Path | None = None) -> FileUtilSettings:
    """Load settings from a YAML file.

    A missing file yields default settings.

    Args:
        path: Config file. Defaults to `default_config_path()`.

    Returns:
        Parsed settings.

    Raises:
        ConfigError: If the file cannot be read or does not hold valid settings.
    """
    config_path = path or default_config_path()
    if not config_path.exists():
        return FileUtilSettings()

    try:
        text = config_path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise ConfigError(f"Cannot read {config_path}: {e}") from e

    try:
        data: Any = yaml.safe_load(text)
    except yaml.YAMLError as e:
        raise ConfigError(f"Invalid YAML in {config_path}: {e}") from e

    if data is None:
        return FileUtilSettings()
    if not isinstance(data, dict):
        raise ConfigError(f"Config file {config_path} must contain a mapping")

    try:
        return FileUtilSettings.model_validate(data)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration in {config_path}: {e}") from e
