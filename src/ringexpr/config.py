"""
Settings for the ringexpr command line.

Settings are read from the ``[ringexpr]`` table of ``ringexpr.toml`` and then
overridden by environment variables:

    RINGEXPR_RING        ring used for evaluation ("int")
    RINGEXPR_LOG_LEVEL   logging level name (DEBUG, INFO, WARNING, ...)
    RINGEXPR_CARET       "true"/"false": print the caret line under errors

Command-line flags override both.
"""

from __future__ import annotations

import logging
import os
import tomllib
from collections.abc import Mapping
from pathlib import Path
from typing import Any

from pydantic import BaseModel, ConfigDict, ValidationError, field_validator

from ringexpr.core.rings import available_rings

DEFAULT_CONFIG_FILE = "ringexpr.toml"
CONFIG_SECTION = "ringexpr"

ENV_PREFIX = "RINGEXPR_"

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class ConfigError(Exception):
    """Configuration could not be read or is invalid."""


class Settings(BaseModel):
    """Resolved CLI settings."""

    model_config = ConfigDict(frozen=True, extra="forbid")

    ring: str = "int"
    log_level: str = "WARNING"
    caret: bool = True

    @field_validator("ring")
    @classmethod
    def _known_ring(cls, value: str) -> str:
        if value not in available_rings():
            raise ValueError(f"unknown ring {value!r}")
        return value

    @field_validator("log_level")
    @classmethod
    def _known_level(cls, value: str) -> str:
        level = value.upper().strip()
        if level not in _LOG_LEVELS:
            raise ValueError(f"unknown log level {value!r}")
        return level

    @property
    def log_level_number(self) -> int:
        return logging.getLevelNamesMapping()[self.log_level]


def _read_toml(path: Path) -> dict[str, Any]:
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigError(f"Cannot read {path}: {e}") from e
    except tomllib.TOMLDecodeError as e:
        raise ConfigError(f"Invalid TOML in {path}: {e}") from e

    section = data.get(CONFIG_SECTION, {})
    if not isinstance(section, dict):
        raise ConfigError(f"[{CONFIG_SECTION}] in {path} must be a table")
    return section


def _env_overrides(environ: Mapping[str, str]) -> dict[str, Any]:
    overrides: dict[str, Any] = {}
    for field_name in Settings.model_fields:
        value = environ.get(ENV_PREFIX + field_name.upper())
        if value is not None:
            overrides[field_name] = value
    return overrides


def load_settings(
    path: Path | None = None,
    environ: Mapping[str, str] | None = None,
) -> Settings:
    """
    Load settings from TOML and the environment.

    Args:
        path: Config file. When omitted, ``ringexpr.toml`` in the current
            directory is used if it exists.
        environ: Environment mapping (defaults to ``os.environ``).

    Returns:
        Settings with file values, then environment values, applied over defaults.

    Raises:
        ConfigError: If an explicit path is missing, the file is not valid
            TOML, or a value fails validation.
    """
    values: dict[str, Any] = {}

    if path is not None:
        if not path.exists():
            raise ConfigError(f"Config file not found: {path}")
        values.update(_read_toml(path))
    else:
        default = Path.cwd() / DEFAULT_CONFIG_FILE
        if default.exists():
            values.update(_read_toml(default))

    values.update(_env_overrides(environ if environ is not None else os.environ))

    try:
        return Settings(**values)
    except ValidationError as e:
        raise ConfigError(f"Invalid configuration: {e}") from e
