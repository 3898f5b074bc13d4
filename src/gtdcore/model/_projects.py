"""Project operations and the one-next-action-per-project rule."""

from collections.abc import Iterable
from dataclasses import replace
from datetime import datetime

from gtdcore.exceptions import InvariantViolationError
from gtdcore.model._records import Idea, Project
from gtdcore.model._types import IdeaStatus, ProjectStatus
from gtdcore.utils import resolve_now

__all__ = [
    "assign_next_action",
    "clear_next_action",
    "complete_project",
    "current_next_action",
    "has_next_action",
    "link_idea",
    "set_project_progress",
    "unlink_idea",
]


def _is_live_next_action(idea: Idea, project_id: str) -> bool:
    return (
        idea.project_id == project_id
        and idea.is_next_action
        and idea.status is IdeaStatus.ACTIVE
    )


def current_next_action(project_id: str, ideas: Iterable[Idea]) -> Idea | None:
    """Return the active next action linked to a project, if any."""
    return next((i for i in ideas if _is_live_next_action(i, project_id)), None)


def has_next_action(project: Project, ideas: Iterable[Idea]) -> bool:
    """Whether a project has a linked, active next action."""
    return current_next_action(project.id, ideas) is not None


def assign_next_action(
    project: Project,
    idea: Idea,
    ideas: Iterable[Idea],
    *,
    now: datetime | None = None,
) -> tuple[Project, Idea]:
    """Designate ``idea`` as the next action of ``project``.

    The slot must be free: if another idea already holds it, call
    :func:`clear_next_action` first.

    Args:
        project: The project receiving a next action.
        idea: The idea to designate.
        ideas: The current idea pool, used to find an existing holder.
        now: Mutation time; defaults to the current UTC time.

    Returns:
        The updated project and idea.

    Raises:
        InvariantViolationError: If the idea is not actionable, belongs to a
            different project, or the project already has a next action.
    """
    if not idea.is_actionable:
        msg = f"Idea {idea.id} is not actionable and cannot be a next action"
        raise InvariantViolationError(msg, idea_id=idea.id, project_id=project.id)
    if idea.project_id is not None and idea.project_id != project.id:
        msg = f"Idea {idea.id} belongs to project {idea.project_id}"
        raise InvariantViolationError(msg, idea_id=idea.id, project_id=project.id)

    holder = current_next_action(project.id, ideas)
    if holder is not None and holder.id != idea.id:
        msg = (
            f"Project {project.id} already has next action {holder.id}; "
            "clear it before assigning another"
        )
        raise InvariantViolationError(msg, idea_id=idea.id, project_id=project.id)

    timestamp = resolve_now(now)
    updated_idea = replace(
        idea, project_id=project.id, is_next_action=True, updated_at=timestamp
    )
    updated_project = replace(project, next_action_id=idea.id, updated_at=timestamp)
    return updated_project, updated_idea


def clear_next_action(
    project: Project,
    ideas: Iterable[Idea],
    *,
    now: datetime | None = None,
) -> tuple[Project, tuple[Idea, ...]]:
    """Release a project's next-action slot.

    Args:
        project: The project to clear.
        ideas: The current idea pool.
        now: Mutation time; defaults to the current UTC time.

    Returns:
        The updated project and the ideas whose next-action flag was cleared.
    """
    timestamp = resolve_now(now)
    cleared = tuple(
        replace(idea, is_next_action=False, updated_at=timestamp)
        for idea in ideas
        if idea.project_id == project.id and idea.is_next_action
    )
    return replace(project, next_action_id=None, updated_at=timestamp), cleared


def link_idea(project: Project, idea: Idea, *, now: datetime | None = None) -> Idea:
    """Attach an idea to a project."""
    return replace(idea, project_id=project.id, updated_at=resolve_now(now))


def unlink_idea(project: Project, idea: Idea, *, now: datetime | None = None) -> Idea:
    """Detach an idea from a project; ideas of other projects are returned as-is."""
    if idea.project_id != project.id:
        return idea
    return replace(idea, project_id=None, updated_at=resolve_now(now))


def complete_project(project: Project, *, now: datetime | None = None) -> Project:
    """Mark a project completed at 100% progress."""
    timestamp = resolve_now(now)
    return replace(
        project,
        status=ProjectStatus.COMPLETED,
        completed_date=project.completed_date or timestamp,
        progress=100,
        updated_at=timestamp,
    )


def set_project_progress(
    project: Project, progress: int, *, now: datetime | None = None
) -> Project:
    """Set project progress, clamped to 0-100."""
    return replace(
        project,
        progress=max(0, min(100, progress)),
        updated_at=resolve_now(now),
    )
