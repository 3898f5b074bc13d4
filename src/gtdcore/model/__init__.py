"""Shared data model: ideas, projects, contexts and their operations."""

from gtdcore.model._codec import (
    context_from_dict,
    idea_from_dict,
    parse_timestamp,
    project_from_dict,
    to_dict,
)
from gtdcore.model._ideas import (
    CaptureHints,
    capture_idea,
    check_idea_invariants,
    complete_idea,
    new_id,
    normalize_context_id,
    update_idea,
)
from gtdcore.model._projects import (
    assign_next_action,
    clear_next_action,
    complete_project,
    current_next_action,
    has_next_action,
    link_idea,
    set_project_progress,
    unlink_idea,
)
from gtdcore.model._records import DEFAULT_CONTEXTS, Context, Idea, Project
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
    "DEFAULT_CONTEXTS",
    "MAX_HORIZON",
    "MIN_HORIZON",
    "CaptureHints",
    "Context",
    "ContextType",
    "EnergyLevel",
    "Idea",
    "IdeaKind",
    "IdeaStatus",
    "Project",
    "ProjectStatus",
    "assign_next_action",
    "capture_idea",
    "check_idea_invariants",
    "clear_next_action",
    "complete_idea",
    "complete_project",
    "context_from_dict",
    "current_next_action",
    "has_next_action",
    "idea_from_dict",
    "link_idea",
    "new_id",
    "normalize_context_id",
    "parse_timestamp",
    "project_from_dict",
    "set_project_progress",
    "to_dict",
    "unlink_idea",
    "update_idea",
]
