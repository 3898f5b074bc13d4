"""Command-line interface for gtdcore."""

from ._app import app, create_app, main
from ._context import CLIContext, OutputFormat
from ._shared import ExitCode
from ._snapshot import Snapshot, load_snapshot

__all__ = [
    "CLIContext",
    "ExitCode",
    "OutputFormat",
    "Snapshot",
    "app",
    "create_app",
    "load_snapshot",
    "main",
]
