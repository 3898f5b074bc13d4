# pyright: reportExplicitAny=false
"""Shared CLI utilities for commands.

- Standardized exit codes
- Output formatters (JSON, YAML)
- Error reporting
"""

from enum import IntEnum
from typing import Any, Never

import orjson
import yaml
from rich.console import Console

FormattableData = dict[str, Any] | list[Any]

__all__ = [
    "ExitCode",
    "FormattableData",
    "exit_with_error",
    "format_json",
    "format_yaml",
]


class ExitCode(IntEnum):
    """Standard exit codes for gtdcore CLI commands."""

    SUCCESS = 0
    LOAD_ERROR = 1
    VALIDATION_ERROR = 2


def format_json(data: FormattableData, *, indent: bool = True) -> str:
    """Format data as JSON.

    Args:
        data: Data to format as JSON.
        indent: Whether to pretty-print with indentation.

    Returns:
        JSON-formatted string representation.
    """
    options = orjson.OPT_INDENT_2 if indent else 0
    return orjson.dumps(data, option=options).decode("utf-8")


def format_yaml(data: FormattableData) -> str:
    """Format data as YAML."""
    return yaml.safe_dump(
        data, default_flow_style=False, allow_unicode=True, sort_keys=False
    )


def exit_with_error(
    message: str,
    code: ExitCode = ExitCode.LOAD_ERROR,
    *,
    console: Console | None = None,
) -> Never:
    """Print an error message and exit with the specified code.

    Args:
        message: The error message to display.
        code: The exit code to use.
        console: Optional Rich console for output. Defaults to a new stderr
            console.

    Raises:
        SystemExit: Always raised with the specified exit code.
    """
    if console is None:
        console = Console(stderr=True)

    console.print(f"[red]Error:[/red] {message}", highlight=False)
    raise SystemExit(code)
