# pyright: reportExplicitAny=false, reportAny=false
"""Configuration models.

This module provides the Pydantic models for gtdcore configuration sections
and the main Config container.
"""

from enum import StrEnum
from pathlib import Path
from typing import Any, ClassVar, Self

from pydantic import BaseModel, ConfigDict, Field, ValidationError

from gtdcore.config._defaults import DEFAULT_CONFIG
from gtdcore.config._loader import deep_merge, parse_env_vars, read_toml_file
from gtdcore.exceptions import ConfigValidationError

__all__ = [
    "Config",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ReviewConfig",
]


class LogLevel(StrEnum):
    """Log level threshold values.

    Values are ordered from most verbose (debug) to least verbose (error).
    """

    DEBUG = "debug"
    INFO = "info"
    WARNING = "warning"
    ERROR = "error"


class LogFormat(StrEnum):
    """Log output format values."""

    JSON = "json"
    TEXT = "text"


class LoggingConfig(BaseModel):
    """Logging configuration section.

    Attributes:
        level: Log level threshold.
        format: Log output format.
        file: Path to log file (empty logs to stderr).
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    level: LogLevel = LogLevel.WARNING
    format: LogFormat = LogFormat.JSON
    file: str = ""


class ReviewConfig(BaseModel):
    """Thresholds used by the health check and the weekly rollup."""

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    interval_days: int = Field(
        default=7, gt=0, description="Days a review stays on schedule."
    )
    missing_review_days: int = Field(
        default=14,
        ge=0,
        description="Days since review assumed when no review was ever done.",
    )
    inbox_backlog_threshold: int = Field(
        default=10, ge=0, description="Inbox size above which processing is advised."
    )
    window_days: int = Field(
        default=7, gt=0, description="Trailing window for weekly counts."
    )
    overdue_warning_threshold: int = Field(
        default=5, gt=0, description="Overdue count from which overdue is no longer low."
    )


class Config(BaseModel):
    """Configuration container with typed access.

    Use the factory methods rather than the constructor so that defaults,
    files and environment overrides are merged consistently.
    """

    model_config: ClassVar[ConfigDict] = ConfigDict(frozen=True, extra="ignore")

    logging: LoggingConfig = Field(default_factory=LoggingConfig)
    review: ReviewConfig = Field(default_factory=ReviewConfig)

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> Self:
        """Create configuration from a dictionary merged over the defaults.

        Args:
            data: Dictionary of configuration values.

        Returns:
            The validated configuration.

        Raises:
            ConfigValidationError: If a value fails validation.
        """
        merged = deep_merge(DEFAULT_CONFIG, data)
        try:
            return cls.model_validate(merged)
        except ValidationError as e:
            error = e.errors()[0]
            key = ".".join(str(part) for part in error["loc"])
            msg = f"Invalid configuration value for {key}: {error['msg']}"
            raise ConfigValidationError(
                msg,
                key=key,
                value=error.get("input"),
                expected=error["type"],
            ) from e

    @classmethod
    def from_file(cls, path: Path) -> Self:
        """Create configuration from a TOML file.

        Raises:
            FileNotFoundError: If the file does not exist.
            ConfigLoadError: If the file cannot be parsed.
            ConfigValidationError: If a value fails validation.
        """
        return cls.from_dict(read_toml_file(path))

    @classmethod
    def load(
        cls,
        *,
        config_path: Path | None = None,
        include_env: bool = True,
        env_prefix: str = "GTDCORE_",
    ) -> Self:
        """Load configuration from all sources.

        Precedence, lowest to highest: defaults, the TOML file (when given
        and present), ``GTDCORE_*`` environment variables.

        Args:
            config_path: Optional TOML file.
            include_env: Whether to apply environment overrides.
            env_prefix: Environment variable prefix.

        Returns:
            The merged, validated configuration.
        """
        data: dict[str, Any] = {}
        if config_path is not None and config_path.exists():
            data = read_toml_file(config_path)
        if include_env:
            data = deep_merge(data, parse_env_vars(env_prefix))
        return cls.from_dict(data)
