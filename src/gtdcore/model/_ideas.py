"""Operations on individual ideas: capture, direct edits and completion."""

import uuid
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime
from typing import Any, Final

from gtdcore.exceptions import InvalidCaptureError, InvariantViolationError
from gtdcore.model._records import Idea
from gtdcore.model._types import EnergyLevel, IdeaKind, IdeaStatus
from gtdcore.utils import resolve_now

__all__ = [
    "CaptureHints",
    "capture_idea",
    "check_idea_invariants",
    "complete_idea",
    "new_id",
    "normalize_context_id",
    "update_idea",
]

_IMMUTABLE_FIELDS: Final = frozenset({"id", "created_at"})


def new_id() -> str:
    """Generate a new record identifier."""
    return uuid.uuid4().hex


def normalize_context_id(value: str) -> str:
    """Normalize a context hint such as ``"@Calls"`` to ``"calls"``."""
    return value.strip().lower().removeprefix("@")


@dataclass(frozen=True, slots=True)
class CaptureHints:
    """Optional hints supplied by a capture collaborator.

    Attributes:
        energy: Detected energy requirement.
        context: Detected context, with or without a leading ``@``.
        urgent: Whether the capture sounded urgent.
        project_id: Project the idea was captured for.
        estimated_minutes: Detected time estimate.
    """

    energy: EnergyLevel | None = None
    context: str | None = None
    urgent: bool = False
    project_id: str | None = None
    estimated_minutes: int | None = None


def capture_idea(
    content: str,
    hints: CaptureHints | None = None,
    *,
    now: datetime | None = None,
    id_factory: Callable[[], str] | None = None,
) -> Idea:
    """Create a new inbox idea from captured text.

    Args:
        content: The captured text. Surrounding whitespace is trimmed.
        hints: Optional capture hints.
        now: Capture time; defaults to the current UTC time.
        id_factory: Identifier generator; defaults to :func:`new_id`.

    Returns:
        A new active inbox idea.

    Raises:
        InvalidCaptureError: If the content is blank.
    """
    text = content.strip()
    if not text:
        msg = "Cannot capture an empty idea"
        raise InvalidCaptureError(msg)

    timestamp = resolve_now(now)
    hints = hints or CaptureHints()
    estimated = hints.estimated_minutes
    if estimated is not None and estimated <= 0:
        estimated = None

    return Idea(
        id=(id_factory or new_id)(),
        content=text,
        created_at=timestamp,
        updated_at=timestamp,
        energy_required=hints.energy or EnergyLevel.MEDIUM,
        context_id=normalize_context_id(hints.context) if hints.context else None,
        project_id=hints.project_id,
        estimated_minutes=estimated,
        is_urgent=hints.urgent,
    )


def check_idea_invariants(idea: Idea) -> None:
    """Check ``is_next_action => is_actionable => kind != inbox``.

    Args:
        idea: The idea to check.

    Raises:
        InvariantViolationError: If the idea breaks an invariant.
    """
    if idea.is_next_action and not idea.is_actionable:
        msg = f"Idea {idea.id} cannot be a next action without being actionable"
        raise InvariantViolationError(msg, idea_id=idea.id, project_id=idea.project_id)
    if idea.is_actionable and idea.kind is IdeaKind.INBOX:
        msg = f"Idea {idea.id} is actionable but still in the inbox"
        raise InvariantViolationError(msg, idea_id=idea.id, project_id=idea.project_id)
    if idea.estimated_minutes is not None and idea.estimated_minutes <= 0:
        msg = f"Idea {idea.id} has a non-positive estimate"
        raise InvariantViolationError(msg, idea_id=idea.id)


def update_idea(
    idea: Idea,
    *,
    now: datetime | None = None,
    **changes: Any,  # pyright: ignore[reportAny,reportExplicitAny]
) -> Idea:
    """Apply a direct edit to an idea.

    Args:
        idea: The idea to edit.
        now: Edit time; defaults to the current UTC time.
        **changes: Field values to replace.

    Returns:
        The edited idea with ``updated_at`` stamped.

    Raises:
        InvariantViolationError: If the edit touches an immutable field or
            the result breaks an invariant.
    """
    frozen = _IMMUTABLE_FIELDS.intersection(changes)
    if frozen:
        msg = f"Cannot change {', '.join(sorted(frozen))} of idea {idea.id}"
        raise InvariantViolationError(msg, idea_id=idea.id)

    updated = replace(idea, **changes, updated_at=resolve_now(now))
    check_idea_invariants(updated)
    return updated


def complete_idea(
    idea: Idea,
    *,
    now: datetime | None = None,
    actual_minutes: int | None = None,
) -> Idea:
    """Mark an idea completed.

    Completing releases the next-action slot. Completing an already completed
    idea keeps its original completion date.

    Args:
        idea: The idea to complete.
        now: Completion time; defaults to the current UTC time.
        actual_minutes: Time actually spent, if tracked.

    Returns:
        The completed idea.
    """
    timestamp = resolve_now(now)
    completed_date = idea.completed_date
    if idea.status is not IdeaStatus.COMPLETED or completed_date is None:
        completed_date = timestamp

    return replace(
        idea,
        status=IdeaStatus.COMPLETED,
        is_next_action=False,
        completed_date=completed_date,
        actual_minutes=actual_minutes if actual_minutes is not None else idea.actual_minutes,
        updated_at=timestamp,
    )
