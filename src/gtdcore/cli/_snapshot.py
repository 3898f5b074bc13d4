# pyright: reportAny=false
# ruff: noqa: TC003
"""Reading record snapshots from JSON files."""

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime
from pathlib import Path
from typing import Any, TypeVar

import orjson

from gtdcore.exceptions import SnapshotError
from gtdcore.model import (
    DEFAULT_CONTEXTS,
    Context,
    Idea,
    Project,
    context_from_dict,
    idea_from_dict,
    parse_timestamp,
    project_from_dict,
)

T = TypeVar("T")


@dataclass(frozen=True, slots=True)
class Snapshot:
    """Records loaded from a snapshot file.

    Attributes:
        ideas: All ideas.
        projects: All projects.
        contexts: Contexts; the defaults when the file lists none.
        last_review: When the last weekly review was completed, if ever.
    """

    ideas: tuple[Idea, ...] = ()
    projects: tuple[Project, ...] = ()
    contexts: tuple[Context, ...] = DEFAULT_CONTEXTS
    last_review: datetime | None = None


def _records(
    data: dict[str, Any],  # pyright: ignore[reportExplicitAny]
    key: str,
    build: Callable[[dict[str, Any]], T],  # pyright: ignore[reportExplicitAny]
    path: Path,
) -> tuple[T, ...]:
    raw = data.get(key) or []
    if not isinstance(raw, list):
        msg = f"'{key}' must be a list"
        raise SnapshotError(msg, path=path)

    records: list[T] = []
    for index, item in enumerate(raw):
        if not isinstance(item, dict):
            msg = f"'{key}[{index}]' must be an object"
            raise SnapshotError(msg, path=path)
        try:
            records.append(build(item))
        except SnapshotError as e:
            msg = f"'{key}[{index}]': {e}"
            raise SnapshotError(msg, path=path) from e
    return tuple(records)


def load_snapshot(path: Path) -> Snapshot:
    """Load ideas, projects and contexts from a JSON snapshot.

    The file holds an object with optional ``ideas``, ``projects``,
    ``contexts`` and ``lastReview`` members. Keys may be camelCase.

    Raises:
        SnapshotError: If the file cannot be read or decoded.
    """
    try:
        data = orjson.loads(path.read_bytes())
    except FileNotFoundError:
        msg = f"Snapshot not found: {path}"
        raise SnapshotError(msg, path=path) from None
    except OSError as e:
        msg = f"Cannot read snapshot {path}: {e}"
        raise SnapshotError(msg, path=path) from e
    except orjson.JSONDecodeError as e:
        msg = f"Invalid JSON in {path}: {e}"
        raise SnapshotError(msg, path=path) from e

    if not isinstance(data, dict):
        msg = "Snapshot must be a JSON object"
        raise SnapshotError(msg, path=path)

    contexts = _records(data, "contexts", context_from_dict, path)
    try:
        last_review = parse_timestamp(data.get("lastReview", data.get("last_review")))
    except SnapshotError as e:
        raise SnapshotError(str(e), path=path) from e

    return Snapshot(
        ideas=_records(data, "ideas", idea_from_dict, path),
        projects=_records(data, "projects", project_from_dict, path),
        contexts=contexts or DEFAULT_CONTEXTS,
        last_review=last_review,
    )
