# pyright: reportAny=false, reportExplicitAny=false
"""Conversion between records and plain dictionaries.

Dictionaries coming in may use camelCase or snake_case keys; dictionaries
going out always use snake_case with ISO-8601 timestamps. Persistence
collaborators use these to store whatever the engine returns.
"""

import re
from collections.abc import Mapping
from dataclasses import MISSING, fields
from datetime import datetime
from enum import StrEnum
from typing import Any, Final

import pendulum

from gtdcore.exceptions import InvariantViolationError, SnapshotError
from gtdcore.model._ideas import check_idea_invariants
from gtdcore.model._records import Context, Idea, Project
from gtdcore.model._types import (
    MAX_HORIZON,
    MIN_HORIZON,
    ContextType,
    EnergyLevel,
    IdeaKind,
    IdeaStatus,
    ProjectStatus,
)

__all__ = [
    "context_from_dict",
    "idea_from_dict",
    "parse_timestamp",
    "project_from_dict",
    "to_dict",
]

_CAMEL_BOUNDARY: Final = re.compile(r"(?<!^)(?=[A-Z])")
_TIMESTAMP_FIELDS: Final = frozenset(
    {"created_at", "updated_at", "due_date", "completed_date"}
)
_BOOL_FIELDS: Final = frozenset(
    {"is_actionable", "is_next_action", "is_urgent", "is_important", "is_active"}
)
_INT_FIELDS: Final = frozenset({"horizon", "progress", "sort_order"})
_POSITIVE_INT_FIELDS: Final = frozenset({"estimated_minutes", "actual_minutes"})
_STRING_FIELDS: Final = frozenset(
    {
        "id",
        "content",
        "title",
        "outcome",
        "name",
        "context_id",
        "project_id",
        "next_action_id",
        "description",
        "notes",
    }
)

# Older records used "type" for the idea kind and "project" for project links.
_IDEA_ALIASES: Final = {"type": "kind"}
_LEGACY_KINDS: Final = {"project": IdeaKind.PROJECT_LINK.value}

_IDEA_ENUMS: Final[dict[str, type[StrEnum]]] = {
    "kind": IdeaKind,
    "status": IdeaStatus,
    "energy_required": EnergyLevel,
}
_PROJECT_ENUMS: Final[dict[str, type[StrEnum]]] = {"status": ProjectStatus}
_CONTEXT_ENUMS: Final[dict[str, type[StrEnum]]] = {"type": ContextType}


def _snake(key: str) -> str:
    return _CAMEL_BOUNDARY.sub("_", key).lower()


def parse_timestamp(value: Any) -> datetime | None:
    """Parse an ISO-8601 string (or pass through a datetime).

    Raises:
        SnapshotError: If the value is not a recognizable timestamp.
    """
    if value is None or value == "":
        return None
    if isinstance(value, datetime):
        return value
    try:
        parsed = pendulum.parse(str(value))
    except ValueError as e:
        msg = f"Invalid timestamp: {value!r}"
        raise SnapshotError(msg) from e
    if not isinstance(parsed, datetime):
        msg = f"Expected a date-time, got {value!r}"
        raise SnapshotError(msg)
    return parsed


def _check_type(key: str, value: Any, record_name: str) -> None:
    if value is None:
        return
    # bool is an int subclass and is never a valid count.
    is_int = isinstance(value, int) and not isinstance(value, bool)
    if key in _BOOL_FIELDS and not isinstance(value, bool):
        expected = "a boolean"
    elif key in _INT_FIELDS and not is_int:
        expected = "an integer"
    elif key in _POSITIVE_INT_FIELDS and not (is_int and value > 0):
        expected = "a positive integer"
    elif key in _STRING_FIELDS and not isinstance(value, str):
        expected = "a string"
    else:
        return
    msg = f"Invalid {key} for {record_name}: expected {expected}, got {value!r}"
    raise SnapshotError(msg)


def _normalize(
    data: Mapping[str, Any],
    record_type: type[Any],
    enums: Mapping[str, type[StrEnum]],
    aliases: Mapping[str, str] | None = None,
) -> dict[str, Any]:
    allowed = {f.name: f for f in fields(record_type)}
    result: dict[str, Any] = {}
    for raw_key, value in data.items():
        key = _snake(raw_key)
        if aliases:
            key = aliases.get(key, key)
        if key not in allowed:
            continue
        if value is None and key in _BOOL_FIELDS | _INT_FIELDS:
            continue
        if value is not None and key in enums:
            try:
                value = enums[key](value)
            except ValueError as e:
                msg = f"Invalid {key} for {record_type.__name__}: {value!r}"
                raise SnapshotError(msg) from e
        elif key in _TIMESTAMP_FIELDS:
            value = parse_timestamp(value)
        else:
            _check_type(key, value, record_type.__name__)
        result[key] = value

    missing = [
        f.name
        for f in fields(record_type)
        if result.get(f.name) is None
        and f.default is MISSING
        and f.default_factory is MISSING
    ]
    if missing:
        msg = f"{record_type.__name__} is missing {', '.join(missing)}"
        raise SnapshotError(msg)
    return result


def idea_from_dict(data: Mapping[str, Any]) -> Idea:
    """Build an :class:`Idea` from a dictionary.

    Raises:
        SnapshotError: If a field has the wrong type, a required field is
            missing or null, or the idea breaks the next-action invariants.
    """
    data = dict(data)
    kind = data.get("type", data.get("kind"))
    if kind in _LEGACY_KINDS:
        data.pop("type", None)
        data["kind"] = _LEGACY_KINDS[kind]
    values = _normalize(data, Idea, _IDEA_ENUMS, _IDEA_ALIASES)
    idea = Idea(**values)
    try:
        check_idea_invariants(idea)
    except InvariantViolationError as e:
        raise SnapshotError(str(e)) from e
    return idea


def project_from_dict(data: Mapping[str, Any]) -> Project:
    """Build a :class:`Project` from a dictionary.

    Raises:
        SnapshotError: If a field has the wrong type, the outcome is blank, or
            the horizon or progress is out of range.
    """
    values = _normalize(data, Project, _PROJECT_ENUMS)
    if not str(values["outcome"]).strip():
        msg = f"Project {values['id']} has no outcome"
        raise SnapshotError(msg)
    horizon = values.get("horizon", MIN_HORIZON)
    if not MIN_HORIZON <= horizon <= MAX_HORIZON:
        msg = f"Project {values['id']} has horizon {horizon}, expected 1-5"
        raise SnapshotError(msg)
    progress = values.get("progress", 0)
    if not 0 <= progress <= 100:
        msg = f"Project {values['id']} has progress {progress}, expected 0-100"
        raise SnapshotError(msg)
    return Project(**values)


def context_from_dict(data: Mapping[str, Any]) -> Context:
    """Build a :class:`Context` from a dictionary."""
    return Context(**_normalize(data, Context, _CONTEXT_ENUMS))


def _dump(value: Any) -> Any:
    if isinstance(value, datetime):
        return value.isoformat()
    if isinstance(value, StrEnum):
        return value.value
    return value


def to_dict(record: Idea | Project | Context) -> dict[str, Any]:
    """Convert a record to a JSON-ready dictionary."""
    return {f.name: _dump(getattr(record, f.name)) for f in fields(record)}
