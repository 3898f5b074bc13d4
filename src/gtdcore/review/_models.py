"""Result types produced by the review scorer."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum

__all__ = [
    "ActionHealth",
    "HealthFactors",
    "HealthGrade",
    "HealthLevel",
    "InboxHealth",
    "OverallHealth",
    "ProjectHealth",
    "ReviewHealth",
    "SystemHealthCheck",
    "WeeklyMetrics",
]


class HealthGrade(StrEnum):
    """Letter grade of the overall health score."""

    A = "A"
    B = "B"
    C = "C"
    D = "D"
    F = "F"


class HealthLevel(StrEnum):
    """Descriptive band of the overall health score."""

    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


@dataclass(frozen=True, slots=True)
class InboxHealth:
    count: int
    oldest_item: datetime | None
    score: float


@dataclass(frozen=True, slots=True)
class ProjectHealth:
    total: int
    with_next_actions: int
    stuck: int
    completed: int
    score: float


@dataclass(frozen=True, slots=True)
class ActionHealth:
    total: int
    overdue: int
    completed: int
    average_age: float
    score: float


@dataclass(frozen=True, slots=True)
class ReviewHealth:
    last_review: datetime | None
    days_since_review: int
    on_schedule: bool
    score: float


@dataclass(frozen=True, slots=True)
class OverallHealth:
    score: int
    grade: HealthGrade
    level: HealthLevel
    recommendations: tuple[str, ...] = ()


@dataclass(frozen=True, slots=True)
class HealthFactors:
    """Yes/no signals shown alongside the weekly review."""

    inbox_empty: bool
    projects_have_next_actions: bool
    low_overdue_items: bool
    regular_reviews: bool


@dataclass(frozen=True, slots=True)
class SystemHealthCheck:
    """Point-in-time health of the whole system.

    Derived data: recompute it from the idea and project pools rather than
    storing and editing it.

    Attributes:
        timestamp: When the check was computed.
        inbox: Inbox backlog sub-report.
        projects: Stuck-project sub-report.
        actions: Overdue and ageing-action sub-report.
        review: Review cadence sub-report.
        overall: Aggregate score, grade and recommendations.
        factors: Yes/no health signals.
    """

    timestamp: datetime
    inbox: InboxHealth
    projects: ProjectHealth
    actions: ActionHealth
    review: ReviewHealth
    overall: OverallHealth
    factors: HealthFactors

    @property
    def sub_scores(self) -> tuple[float, float, float, float]:
        """The four sub-scores: inbox, projects, actions, review."""
        return (
            self.inbox.score,
            self.projects.score,
            self.actions.score,
            self.review.score,
        )


@dataclass(frozen=True, slots=True)
class WeeklyMetrics:
    """Activity rollup for the trailing review window.

    Attributes:
        window_start: Start of the trailing window.
        window_end: End of the trailing window.
        ideas_captured: Ideas created in the window.
        ideas_processed: Ideas created in the window and already clarified.
        ideas_completed: Ideas completed in the window.
        inbox_processing_rate: Processed / captured, 0 when nothing was
            captured.
        actionable_rate: Processed-and-actionable / processed, 0 when
            nothing was processed.
        context_distribution: Active ideas per context.
        projects_active: Active projects.
        projects_completed: Projects completed in the window.
        projects_stuck: Active projects without an active next action.
        overdue_actions: Actionable active ideas past their due date.
    """

    window_start: datetime
    window_end: datetime
    ideas_captured: int = 0
    ideas_processed: int = 0
    ideas_completed: int = 0
    inbox_processing_rate: float = 0.0
    actionable_rate: float = 0.0
    context_distribution: dict[str, int] = field(default_factory=dict)
    projects_active: int = 0
    projects_completed: int = 0
    projects_stuck: int = 0
    overdue_actions: int = 0
