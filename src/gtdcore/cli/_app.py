"""The command-line interface for gtdcore."""
# ruff: noqa: TC003  # Path needed at runtime for cyclopts parameter parsing

from pathlib import Path
from typing import Annotated

from cyclopts import App, Parameter
from rich.console import Console

from gtdcore.config import safe_load_config
from gtdcore.utils import create_cli_logger

from ._commands import register_commands
from ._context import CLIContext

_HELP = "Decide what to do next in a Getting Things Done system."


def create_app(
    console: Console | None = None,
    error_console: Console | None = None,
    *,
    exit_on_error: bool = True,
) -> App:
    if console is None:
        console = Console()
    if error_console is None:
        error_console = Console(stderr=True)
    app = App(
        name="gtdcore",
        help=_HELP,
        help_on_error=True,
        console=console,
        error_console=error_console,
        exit_on_error=exit_on_error,
    )

    @app.meta.default
    def _default(  # pyright: ignore[reportUnusedFunction]
        *tokens: Annotated[str, Parameter(show=False, allow_leading_hyphen=True)],
        verbose: Annotated[bool, Parameter(help="Log debug events")] = False,
        config: Annotated[
            Path | None, Parameter(name="--config", help="Path to config file")
        ] = None,
    ) -> None:
        """Launch gtdcore with global options.

        Args:
            tokens: Command tokens to pass to subcommands.
            verbose: Log debug events to the configured log destination.
            config: Explicit path to config file.
        """
        loaded_config, config_error = safe_load_config(config_path=config)

        cli_logger = create_cli_logger(
            level="debug" if verbose else loaded_config.logging.level.value,
            log_format=loaded_config.logging.format.value,  # type: ignore[arg-type]
            log_file=loaded_config.logging.file,
            command=tokens[0] if tokens else "",
        )

        CLIContext.set_current(
            CLIContext(
                config=loaded_config,
                config_error=config_error,
                logger=cli_logger,
            )
        )
        try:
            app(tokens)
        finally:
            CLIContext.reset()

    register_commands(app)
    return app


app = create_app()


def main() -> None:
    """Default entrypoint for the `gtdcore` CLI."""
    create_app().meta()
