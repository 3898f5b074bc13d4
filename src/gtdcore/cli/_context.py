# pyright: reportUnusedCallResult=false
# ruff: noqa: TC003
"""CLI context for global state management.

The CLIContext is set once when the CLI starts and made available to every
command via contextvars.
"""

import contextvars
from dataclasses import dataclass, field
from enum import StrEnum

from structlog.typing import FilteringBoundLogger

from gtdcore.config import Config


class OutputFormat(StrEnum):
    """Supported output formats for commands."""

    TABLE = "table"
    JSON = "json"
    YAML = "yaml"


_current_cli_context: contextvars.ContextVar["CLIContext | None"] = (
    contextvars.ContextVar("cli_context", default=None)
)


@dataclass(frozen=True, slots=True)
class CLIContext:
    """Global CLI context with configuration and logger.

    Attributes:
        config: Loaded configuration object.
        config_error: Error message if config loading failed.
        logger: Structured logger for CLI commands.
    """

    config: Config = field(repr=False)
    config_error: str | None = None
    logger: FilteringBoundLogger | None = field(default=None, repr=False)

    @classmethod
    def get_current(cls) -> "CLIContext":
        """Get the active CLIContext, or a default one if none is set."""
        ctx = _current_cli_context.get()
        if ctx is not None:
            return ctx
        return cls(config=Config.from_dict({}))

    @classmethod
    def set_current(cls, ctx: "CLIContext") -> None:
        """Set the active CLIContext."""
        _current_cli_context.set(ctx)

    @classmethod
    def reset(cls) -> None:
        """Reset to the default context."""
        _current_cli_context.set(None)
