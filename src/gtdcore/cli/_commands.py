# pyright: reportUnusedCallResult=false, reportUnusedFunction=false
# ruff: noqa: A002, TC003
"""Read-only commands over a record snapshot."""

from datetime import datetime
from pathlib import Path
from typing import Annotated, Never

from cyclopts import App, Parameter
from rich.console import Console

from gtdcore.engage import make_query, rank_scored
from gtdcore.exceptions import MalformedQueryError, SnapshotError
from gtdcore.model import parse_timestamp
from gtdcore.review import score, weekly_metrics

from ._context import CLIContext, OutputFormat
from ._render import (
    health_data,
    metrics_data,
    ranked_data,
    render_health,
    render_metrics,
    render_ranked,
)
from ._shared import (
    ExitCode,
    FormattableData,
    exit_with_error,
    format_json,
    format_yaml,
)
from ._snapshot import Snapshot, load_snapshot

FormatOption = Annotated[
    OutputFormat,
    Parameter(name=["--format", "-f"], help="Output format (table, json, yaml)"),
]
NowOption = Annotated[
    str | None,
    Parameter(name="--now", help="Evaluate at this ISO-8601 time instead of now"),
]


def register_commands(app: App) -> None:
    def _consoles() -> tuple[Console, Console]:
        console = app.console or Console()
        error_console = app.error_console or Console(stderr=True)
        return console, error_console

    def _fail(message: str, code: ExitCode) -> Never:
        _, error_console = _consoles()
        ctx = CLIContext.get_current()
        if ctx.logger is not None:
            ctx.logger.warning("command_failed", reason=message, exit_code=int(code))
        exit_with_error(message, code, console=error_console)

    def _load(path: Path) -> Snapshot:
        try:
            return load_snapshot(path)
        except SnapshotError as e:
            _fail(str(e), ExitCode.LOAD_ERROR)

    def _now(value: str | None) -> datetime | None:
        try:
            return parse_timestamp(value)
        except SnapshotError as e:
            _fail(f"--now: {e}", ExitCode.VALIDATION_ERROR)

    def _emit(data: FormattableData, format: OutputFormat) -> None:
        console, _ = _consoles()
        if format is OutputFormat.JSON:
            console.out(format_json(data), highlight=False)
        else:
            console.out(format_yaml(data).rstrip(), highlight=False)

    @app.command(name="engage")
    def _engage(
        snapshot: Path,
        *,
        context: Annotated[
            list[str] | None,
            Parameter(name=["--context", "-c"], help="Acceptable context (repeatable)"),
        ] = None,
        minutes: Annotated[
            int | None,
            Parameter(name=["--minutes", "-m"], help="Minutes available"),
        ] = None,
        energy: Annotated[
            str | None,
            Parameter(name=["--energy", "-e"], help="Current energy level"),
        ] = None,
        now: NowOption = None,
        format: FormatOption = OutputFormat.TABLE,
    ) -> None:
        """List next actions that fit, highest priority first.

        Args:
            snapshot: JSON snapshot of ideas, projects and contexts.
            context: Acceptable contexts; none means any.
            minutes: Time available in minutes.
            energy: Current energy (high, medium, low, zombie).
            now: Evaluation time.
            format: Output format.
        """
        records = _load(snapshot)
        try:
            query = make_query(context or (), minutes, energy)
        except MalformedQueryError as e:
            _fail(str(e), ExitCode.VALIDATION_ERROR)

        ctx = CLIContext.get_current()
        ranked = rank_scored(
            records.ideas, query, now=_now(now), logger=ctx.logger
        )
        if format is OutputFormat.TABLE:
            render_ranked(ranked, _consoles()[0])
        else:
            _emit(ranked_data(ranked), format)
        raise SystemExit(ExitCode.SUCCESS)

    @app.command(name="health")
    def _health(
        snapshot: Path,
        *,
        now: NowOption = None,
        format: FormatOption = OutputFormat.TABLE,
    ) -> None:
        """Score the health of the system.

        Args:
            snapshot: JSON snapshot of ideas, projects and contexts.
            now: Evaluation time.
            format: Output format.
        """
        records = _load(snapshot)
        ctx = CLIContext.get_current()
        check = score(
            records.ideas,
            records.projects,
            records.last_review,
            now=_now(now),
            settings=ctx.config.review,
            logger=ctx.logger,
        )
        if format is OutputFormat.TABLE:
            render_health(check, _consoles()[0])
        else:
            _emit(health_data(check), format)
        raise SystemExit(ExitCode.SUCCESS)

    @app.command(name="metrics")
    def _metrics(
        snapshot: Path,
        *,
        now: NowOption = None,
        format: FormatOption = OutputFormat.TABLE,
    ) -> None:
        """Summarize activity over the review window.

        Args:
            snapshot: JSON snapshot of ideas, projects and contexts.
            now: End of the window.
            format: Output format.
        """
        records = _load(snapshot)
        ctx = CLIContext.get_current()
        metrics = weekly_metrics(
            records.ideas,
            records.projects,
            records.contexts,
            now=_now(now),
            settings=ctx.config.review,
            logger=ctx.logger,
        )
        if format is OutputFormat.TABLE:
            render_metrics(metrics, _consoles()[0])
        else:
            _emit(metrics_data(metrics), format)
        raise SystemExit(ExitCode.SUCCESS)
