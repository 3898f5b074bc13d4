"""Shared utilities for gtdcore."""

from ._logging import (
    LogFormatType,
    create_cli_logger,
    create_logger,
    get_engine_logger,
)
from ._time import days_between, resolve_now, round_half_up, utcnow

__all__ = [
    "LogFormatType",
    "create_cli_logger",
    "create_logger",
    "days_between",
    "get_engine_logger",
    "resolve_now",
    "round_half_up",
    "utcnow",
]
