# pyright: reportAny=false, reportUnknownVariableType=false, reportUnknownArgumentType=false
# pyright: reportExplicitAny=false
"""TOML configuration loading, environment overrides and merging."""

import os
import tomllib
from pathlib import Path
from typing import Any

import orjson

from gtdcore.exceptions import ConfigLoadError

__all__ = [
    "copy_value",
    "deep_merge",
    "parse_env_vars",
    "parse_string_value",
    "read_toml_file",
    "set_nested_key",
]


def read_toml_file(path: Path) -> dict[str, Any]:
    """Read and parse a TOML file.

    Args:
        path: Path to the TOML file.

    Returns:
        Parsed TOML content as dictionary.

    Raises:
        FileNotFoundError: If the file does not exist.
        ConfigLoadError: If the file cannot be parsed.
    """
    try:
        with path.open("rb") as f:
            return tomllib.load(f)
    except tomllib.TOMLDecodeError as e:
        msg = f"Failed to parse TOML file: {e}"
        raise ConfigLoadError(
            msg,
            path=path,
            line=getattr(e, "lineno", None),
            column=getattr(e, "colno", None),
        ) from e


def copy_value(value: Any) -> Any:
    """Create a deep copy of a configuration value.

    Recursively copies dicts and lists so the result is fully independent of
    the original.
    """
    if isinstance(value, dict):
        return {k: copy_value(v) for k, v in value.items()}
    if isinstance(value, list):
        return [copy_value(item) for item in value]
    return value


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """Deep merge two configuration dictionaries.

    Merges `override` into `base`, returning a new dictionary. Neither input
    is modified.

    Merge rules:
        - Dictionaries are recursively merged
        - Arrays are replaced entirely (no element-wise merge)
        - Scalars are replaced with override value
        - Missing keys in override preserve base values

    Args:
        base: Base configuration (lower precedence).
        override: Override configuration (higher precedence).

    Returns:
        Merged configuration dictionary.
    """
    result: dict[str, Any] = {}

    for key in base.keys() | override.keys():
        if key not in override:
            result[key] = copy_value(base[key])
        elif key not in base:
            result[key] = copy_value(override[key])
        elif isinstance(base[key], dict) and isinstance(override[key], dict):
            result[key] = deep_merge(base[key], override[key])
        else:
            result[key] = copy_value(override[key])

    return result


def parse_string_value(value: str) -> Any:
    """Parse a string value with automatic type inference.

    Precedence:
    1. Boolean: true/false (case-insensitive)
    2. Integer: parseable as int (no decimal)
    3. Float: parseable as float (with decimal)
    4. JSON array/object: starts with [ or {
    5. String: fallback

    Examples:
        >>> parse_string_value("true")
        True
        >>> parse_string_value("42")
        42
        >>> parse_string_value("[1, 2, 3]")
        [1, 2, 3]
    """
    lower_value = value.lower()
    if lower_value in ("true", "false"):
        return lower_value == "true"

    if "." not in value:
        try:
            return int(value)
        except ValueError:
            pass
    else:
        try:
            return float(value)
        except ValueError:
            pass

    if (value.startswith("[") and value.endswith("]")) or (
        value.startswith("{") and value.endswith("}")
    ):
        try:
            return orjson.loads(value)
        except orjson.JSONDecodeError:
            pass

    return value


def set_nested_key(d: dict[str, Any], key_path: str, value: Any) -> None:
    """Set a value at a dotted key path in a nested dictionary.

    Creates intermediate dictionaries as needed.

    Example:
        >>> d = {}
        >>> set_nested_key(d, "review.window_days", 14)
        >>> d
        {'review': {'window_days': 14}}
    """
    parts = key_path.split(".")
    current = d

    for part in parts[:-1]:
        if not isinstance(current.get(part), dict):
            current[part] = {}
        current = current[part]

    current[parts[-1]] = value


def parse_env_vars(prefix: str = "GTDCORE_") -> dict[str, Any]:
    """Parse environment variables into a config dictionary.

    Environment variable naming:
        - Add prefix (GTDCORE_)
        - Convert to uppercase
        - Replace dots with double underscores
        - Example: review.window_days -> GTDCORE_REVIEW__WINDOW_DAYS

    Args:
        prefix: Environment variable prefix.

    Returns:
        Dictionary of parsed config values with nested structure.
    """
    result: dict[str, Any] = {}

    for key, value in os.environ.items():
        if not key.startswith(prefix):
            continue

        config_key = key[len(prefix) :]
        if not config_key:
            continue

        config_path = config_key.replace("__", ".").lower()
        set_nested_key(result, config_path, parse_string_value(value))

    return result
