"""Shared test fixtures for gtdcore tests."""

import itertools
from collections.abc import Callable

import pendulum
import pytest
from pendulum import DateTime
from rich.console import Console

from gtdcore.model import Idea, Project


@pytest.fixture
def now() -> DateTime:
    """A fixed reference time for engine calls."""
    return pendulum.datetime(2025, 6, 15, 12, 0, 0, tz="UTC")


@pytest.fixture
def make_idea(now: DateTime) -> Callable[..., Idea]:
    """Return a factory creating ideas with sensible defaults."""
    counter = itertools.count(1)

    def _make(**overrides: object) -> Idea:
        number = next(counter)
        defaults: dict[str, object] = {
            "id": f"idea-{number}",
            "content": f"Idea {number}",
            "created_at": now,
            "updated_at": now,
        }
        defaults.update(overrides)
        return Idea(**defaults)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def make_action(make_idea: Callable[..., Idea]) -> Callable[..., Idea]:
    """Return a factory creating active next actions."""
    from gtdcore.model import IdeaKind

    def _make(**overrides: object) -> Idea:
        defaults: dict[str, object] = {
            "kind": IdeaKind.ACTION,
            "is_actionable": True,
            "is_next_action": True,
        }
        defaults.update(overrides)
        return make_idea(**defaults)

    return _make


@pytest.fixture
def make_project(now: DateTime) -> Callable[..., Project]:
    """Return a factory creating projects with sensible defaults."""
    counter = itertools.count(1)

    def _make(**overrides: object) -> Project:
        number = next(counter)
        defaults: dict[str, object] = {
            "id": f"project-{number}",
            "title": f"Project {number}",
            "outcome": f"Outcome {number} is done",
            "created_at": now,
            "updated_at": now,
        }
        defaults.update(overrides)
        return Project(**defaults)  # pyright: ignore[reportArgumentType]

    return _make


@pytest.fixture
def console() -> Console:
    return Console(
        width=70,
        force_terminal=True,
        highlight=False,
        color_system=None,
        legacy_windows=False,
    )
