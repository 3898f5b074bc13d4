"""Record types for ideas, projects and contexts.

Records are immutable. Every engine operation takes records in and returns
new records out; callers persist whatever comes back.
"""

from dataclasses import dataclass
from datetime import datetime  # noqa: TC003 - dataclass fields resolve at runtime
from typing import Final

from gtdcore.model._types import (
    ContextType,
    EnergyLevel,
    IdeaKind,
    IdeaStatus,
    ProjectStatus,
)

__all__ = [
    "DEFAULT_CONTEXTS",
    "Context",
    "Idea",
    "Project",
]


@dataclass(frozen=True, slots=True)
class Idea:
    """The atomic unit of work.

    Attributes:
        id: Unique idea identifier.
        content: Free text as captured.
        kind: Classification (inbox until clarified).
        status: Lifecycle status.
        created_at: Capture time; never changes.
        updated_at: Time of the last mutation.
        is_actionable: Set when the idea is clarified.
        is_next_action: Whether the idea is the designated next step.
        context_id: Optional context back-reference.
        project_id: Optional project back-reference.
        estimated_minutes: Optional positive estimate.
        energy_required: Energy the work needs.
        due_date: Optional deadline.
        completed_date: When the idea was completed.
        is_urgent: Urgency flag, independent of the due date.
        is_important: Importance flag.
        actual_minutes: Time actually spent, when known.
        notes: Free-form notes.
    """

    id: str
    content: str
    created_at: datetime
    updated_at: datetime
    kind: IdeaKind = IdeaKind.INBOX
    status: IdeaStatus = IdeaStatus.ACTIVE
    is_actionable: bool = False
    is_next_action: bool = False
    context_id: str | None = None
    project_id: str | None = None
    estimated_minutes: int | None = None
    energy_required: EnergyLevel | None = EnergyLevel.MEDIUM
    due_date: datetime | None = None
    completed_date: datetime | None = None
    is_urgent: bool = False
    is_important: bool = False
    actual_minutes: int | None = None
    notes: str | None = None

    @property
    def is_active(self) -> bool:
        """Whether the idea is in the active status."""
        return self.status is IdeaStatus.ACTIVE

    @property
    def is_inbox(self) -> bool:
        """Whether the idea still awaits clarification."""
        return self.kind is IdeaKind.INBOX and self.status is IdeaStatus.ACTIVE

    def is_overdue(self, now: datetime) -> bool:
        """Whether the idea has a due date before ``now``."""
        return self.due_date is not None and self.due_date < now


@dataclass(frozen=True, slots=True)
class Project:
    """A multi-step commitment.

    Attributes:
        id: Unique project identifier.
        title: Short name.
        outcome: What done looks like.
        created_at: Creation time.
        updated_at: Time of the last mutation.
        status: Project status.
        horizon: Horizon of focus (1-5), informational only.
        progress: Percentage complete (0-100).
        next_action_id: The idea currently designated as next action.
        description: Optional longer description.
        due_date: Optional deadline.
        completed_date: When the project was completed.
    """

    id: str
    title: str
    outcome: str
    created_at: datetime
    updated_at: datetime
    status: ProjectStatus = ProjectStatus.ACTIVE
    horizon: int = 1
    progress: int = 0
    next_action_id: str | None = None
    description: str | None = None
    due_date: datetime | None = None
    completed_date: datetime | None = None

    @property
    def is_active(self) -> bool:
        """Whether the project is in the active status."""
        return self.status is ProjectStatus.ACTIVE


@dataclass(frozen=True, slots=True)
class Context:
    """A situational tag ideas can be filtered by."""

    id: str
    name: str
    type: ContextType = ContextType.LOCATION
    is_active: bool = True
    sort_order: int = 0
    description: str | None = None


DEFAULT_CONTEXTS: Final[tuple[Context, ...]] = (
    Context(id="calls", name="@calls", type=ContextType.TOOL, sort_order=1),
    Context(id="computer", name="@computer", type=ContextType.TOOL, sort_order=2),
    Context(id="errands", name="@errands", type=ContextType.LOCATION, sort_order=3),
    Context(id="home", name="@home", type=ContextType.LOCATION, sort_order=4),
    Context(id="office", name="@office", type=ContextType.LOCATION, sort_order=5),
    Context(id="anywhere", name="@anywhere", type=ContextType.LOCATION, sort_order=6),
)
