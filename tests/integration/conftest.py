from collections.abc import Callable
from pathlib import Path
from typing import Any

import orjson
import pytest
from rich.console import Console

from gtdcore.cli import CLIContext, create_app


def pytest_collection_modifyitems(items: list[pytest.Item]) -> None:
    for item in items:
        if Path(item.path).is_relative_to(Path(__file__).parent):
            item.add_marker(pytest.mark.integration)


@pytest.fixture(autouse=True)
def _clean_cli_context() -> None:
    CLIContext.reset()


@pytest.fixture
def gtd_cli(console: Console) -> Callable[..., None]:
    """Create CLI app for testing.

    Returns a callable that runs the CLI and suppresses SystemExit.
    Use gtd_cli_with_exit_code when you need to check the exit code.
    """
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> None:
        try:
            app(args)
        except SystemExit:
            pass

    return _run


@pytest.fixture
def gtd_cli_with_exit_code(console: Console) -> Callable[..., int]:
    """Create CLI app for testing that returns the exit code."""
    app = create_app(console=console, error_console=console)

    def _run(*args: str) -> int:
        try:
            app(args)
        except SystemExit as e:
            return e.code if isinstance(e.code, int) else 1
        else:
            return 0

    return _run


def _idea(idea_id: str, content: str, **extra: Any) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    return {
        "id": idea_id,
        "content": content,
        "createdAt": "2025-06-14T09:00:00Z",
        "updatedAt": "2025-06-14T09:00:00Z",
        **extra,
    }


def _action(idea_id: str, content: str, **extra: Any) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    return _idea(
        idea_id,
        content,
        type="action",
        isActionable=True,
        isNextAction=True,
        **extra,
    )


@pytest.fixture
def snapshot_data() -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    """A small system: two inbox ideas, three next actions, two projects."""
    return {
        "ideas": [
            _idea("in-1", "Buy birthday card"),
            _idea("in-2", "Look into solar panels"),
            _action(
                "a-1",
                "Renew passport",
                dueDate="2025-06-10T00:00:00Z",
                contextId="errands",
                energyRequired="low",
                estimatedMinutes=30,
            ),
            _action(
                "a-2",
                "Call plumber",
                dueDate="2025-06-15T18:00:00Z",
                isUrgent=True,
                contextId="calls",
                energyRequired="medium",
                estimatedMinutes=10,
                projectId="p-1",
            ),
            _action(
                "a-3",
                "Sketch garden layout",
                contextId="home",
                energyRequired="high",
                estimatedMinutes=90,
            ),
        ],
        "projects": [
            {
                "id": "p-1",
                "title": "Fix bathroom",
                "outcome": "Bathroom has no leaks",
                "status": "active",
                "createdAt": "2025-06-01T09:00:00Z",
                "updatedAt": "2025-06-01T09:00:00Z",
            },
            {
                "id": "p-2",
                "title": "Plan holiday",
                "outcome": "Holiday booked",
                "status": "active",
                "createdAt": "2025-06-01T09:00:00Z",
                "updatedAt": "2025-06-01T09:00:00Z",
            },
        ],
        "contexts": [
            {"id": "calls", "name": "@calls", "type": "tool"},
            {"id": "errands", "name": "@errands"},
            {"id": "home", "name": "@home"},
        ],
        "lastReview": "2025-06-12T10:00:00Z",
    }


@pytest.fixture
def write_snapshot(tmp_path: Path) -> Callable[[object], Path]:
    """Return a function writing a snapshot file and returning its path."""

    def _write(data: object) -> Path:
        path = tmp_path / "snapshot.json"
        path.write_bytes(orjson.dumps(data))
        return path

    return _write


@pytest.fixture
def snapshot_file(
    write_snapshot: Callable[[object], Path],
    snapshot_data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
) -> Path:
    return write_snapshot(snapshot_data)
