"""Logging utilities for gtdcore.

This module provides standalone structlog logger factories. Each logger is
self-contained and does not modify global structlog configuration, so the
engine can log without taking over the host application's logging setup.
"""

import logging
import sys
from functools import cache
from os import getenv
from pathlib import Path
from typing import TYPE_CHECKING, Literal, cast

import structlog

if TYPE_CHECKING:
    from structlog.typing import FilteringBoundLogger

LogFormatType = Literal["json", "text"]

# The engine is a library; it stays quiet unless asked.
_ENGINE_DEFAULT_LEVEL = "warning"


def _get_log_level(default: str = "info") -> int:
    """Get the log level from environment variables.

    Checks GTDCORE_DEBUG first (sets DEBUG if present), then GTDCORE_LOG_LEVEL.

    Args:
        default: Level name used when neither variable is set.

    Returns:
        The logging level as an integer.
    """
    if getenv("GTDCORE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(
        getenv("GTDCORE_LOG_LEVEL", default).upper(),
        log_levels.get(default.upper(), logging.INFO),
    )


def _log_level_from_string(level: str, *, respect_env: bool = False) -> int:
    """Convert a log level string to a logging level integer.

    Args:
        level: Log level string (debug, info, warning, error).
        respect_env: If True, GTDCORE_DEBUG overrides to DEBUG level.

    Returns:
        The logging level as an integer.
    """
    if respect_env and getenv("GTDCORE_DEBUG", None):
        return logging.DEBUG

    log_levels = logging.getLevelNamesMapping()
    return log_levels.get(level.upper(), logging.INFO)


def create_logger(
    level: str | None = None,
    *,
    log_format: LogFormatType = "json",
    log_file: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a standalone structlog logger.

    Writes to ``log_file`` (opened in append mode, parents created) when one
    is given, otherwise to stderr.

    The log level is determined by (in order of precedence):
    1. GTDCORE_DEBUG environment variable (if set, enables DEBUG level)
    2. The `level` parameter (if provided)
    3. GTDCORE_LOG_LEVEL environment variable
    4. Default: INFO

    Args:
        level: Optional log level string (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to the log file; empty writes to stderr.

    Returns:
        A configured FilteringBoundLogger instance.
    """
    effective_level = (
        _log_level_from_string(level, respect_env=True)
        if level is not None
        else _get_log_level()
    )

    if log_file:
        log_path = Path(log_file)
        log_path.parent.mkdir(parents=True, exist_ok=True)
        logger_factory = structlog.WriteLoggerFactory(file=log_path.open("a"))
    else:
        logger_factory = structlog.PrintLoggerFactory(file=sys.stderr)

    processors: list[structlog.typing.Processor] = [
        structlog.stdlib.add_log_level,
        structlog.processors.TimeStamper(fmt="iso"),
    ]

    if log_format == "json":
        processors.append(structlog.processors.dict_tracebacks)
        processors.append(structlog.processors.JSONRenderer())
    else:
        # Text format: "timestamp [level] event key=value ..."
        processors.append(structlog.dev.ConsoleRenderer(colors=False))

    wrapper_class = structlog.make_filtering_bound_logger(effective_level)

    return cast(
        "FilteringBoundLogger",
        structlog.wrap_logger(
            logger_factory(),
            processors=processors,
            wrapper_class=wrapper_class,
            context_class=dict,
        ),
    )


@cache
def get_engine_logger() -> "FilteringBoundLogger":  # noqa: UP037
    """Return the shared logger used by engine functions.

    The level follows GTDCORE_DEBUG / GTDCORE_LOG_LEVEL and defaults to
    warning. The logger is created once per process.

    Returns:
        A FilteringBoundLogger bound to ``component="engine"``.
    """
    level = _get_log_level(_ENGINE_DEFAULT_LEVEL)
    name = logging.getLevelName(level).lower()
    return create_logger(name, log_format="text").bind(component="engine")


def create_cli_logger(
    *,
    level: str = "info",
    log_format: LogFormatType = "json",
    log_file: str = "",
    command: str = "",
) -> "FilteringBoundLogger":  # noqa: UP037
    """Create a logger for CLI commands.

    The logger automatically binds the command name to all log entries.

    Args:
        level: Log level threshold (debug, info, warning, error).
        log_format: Output format, either "json" or "text".
        log_file: Path to log file; empty writes to stderr.
        command: Name of the CLI command for context (bound to all entries).

    Returns:
        A FilteringBoundLogger instance configured for CLI logging.
    """
    logger = create_logger(level, log_format=log_format, log_file=log_file)

    if command:
        return logger.bind(command=command)
    return logger
