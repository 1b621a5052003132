"""Configuration settings and loading."""

from __future__ import annotations

import logging
import os
from functools import lru_cache
from pathlib import Path
from typing import Any

import yaml
from pydantic import Field, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

from statewalk.errors import ConfigValidationError, ErrorContext

_LOG_LEVELS = {"CRITICAL", "ERROR", "WARNING", "INFO", "DEBUG"}


class StatewalkSettings(BaseSettings):
    """Tunables for walk generation, exploration and shrinking."""

    model_config = SettingsConfigDict(
        env_prefix="STATEWALK_",
        env_file=".env",
        env_file_encoding="utf-8",
        extra="ignore",
    )

    exploration_limit: int = Field(default=200, description="Walks to try before declaring success")
    walk_length_mean: float = 10.0
    walk_length_spread: float = 20.0
    min_walk_length: int = 3
    shrink: bool = Field(default=True, description="Minimize the first failing walk")
    log_level: str = "WARNING"

    @field_validator("exploration_limit")
    @classmethod
    def validate_exploration_limit(cls, v: int) -> int:
        if v <= 0:
            raise ConfigValidationError(
                message=f"exploration_limit must be positive, got {v}",
                field="exploration_limit",
                value=v,
            )
        return v

    @field_validator("walk_length_spread")
    @classmethod
    def validate_spread(cls, v: float) -> float:
        if v < 0:
            raise ConfigValidationError(
                message=f"walk_length_spread must not be negative, got {v}",
                field="walk_length_spread",
                value=v,
            )
        return v

    @field_validator("min_walk_length")
    @classmethod
    def validate_min_walk_length(cls, v: int) -> int:
        if v < 0:
            raise ConfigValidationError(
                message=f"min_walk_length must not be negative, got {v}",
                field="min_walk_length",
                value=v,
            )
        return v

    @field_validator("log_level", mode="before")
    @classmethod
    def validate_log_level(cls, v: str) -> str:
        level = str(v).upper()
        if level not in _LOG_LEVELS:
            raise ConfigValidationError(
                message=f"Invalid log_level: {v}. Valid: {sorted(_LOG_LEVELS)}",
                field="log_level",
                value=v,
                context=ErrorContext(extra={"valid_levels": sorted(_LOG_LEVELS)}),
            )
        return level

    @property
    def log_level_value(self) -> int:
        return logging.getLevelName(self.log_level)


def load_settings(config_path: str | Path | None = None) -> StatewalkSettings:
    """Load settings from an optional YAML file and the environment.

    Priority: env vars > config file > .env file > defaults
    """
    config_data: dict[str, Any] = {}

    if config_path is not None:
        config_path = Path(config_path)
        if not config_path.exists():
            raise ConfigValidationError(
                message=f"Configuration file not found: {config_path}",
                value=str(config_path),
            )
        with open(config_path) as f:
            loaded = yaml.safe_load(f) or {}
        if not isinstance(loaded, dict):
            raise ConfigValidationError(
                message=f"Configuration file must contain a mapping: {config_path}",
                value=str(config_path),
            )
        config_data.update(loaded)

    # Init kwargs outrank env vars in pydantic-settings, so drop file values
    # that the environment overrides.
    for key in list(config_data):
        if f"STATEWALK_{key.upper()}" in os.environ:
            del config_data[key]

    return StatewalkSettings(**config_data)


@lru_cache(maxsize=1)
def default_settings() -> StatewalkSettings:
    """Settings used when a caller does not pass any explicitly."""
    return StatewalkSettings()
