"""gtdcore configuration.

This module provides the public API for configuration management,
including loading, validation, and typed access to configuration values.

Example:
    >>> from gtdcore.config import Config
    >>> config = Config.load()
    >>> config.review.interval_days
    7
"""

from gtdcore.exceptions import ConfigError, ConfigLoadError, ConfigValidationError

from ._defaults import DEFAULT_CONFIG
from ._load import safe_load_config
from ._loader import (
    copy_value,
    deep_merge,
    parse_env_vars,
    parse_string_value,
    read_toml_file,
    set_nested_key,
)
from ._models import Config, LogFormat, LoggingConfig, LogLevel, ReviewConfig

__all__ = [
    "DEFAULT_CONFIG",
    "Config",
    "ConfigError",
    "ConfigLoadError",
    "ConfigValidationError",
    "LogFormat",
    "LogLevel",
    "LoggingConfig",
    "ReviewConfig",
    "copy_value",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]
