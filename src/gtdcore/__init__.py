"""gtdcore: the decision engine of a Getting Things Done system.

Capture ideas, clarify them one answer at a time, pick what to do next and
check the health of the whole system. Records are immutable; every
operation returns new records and nothing is persisted.
"""

from gtdcore.clarify import (
    ActionType,
    ClarificationState,
    ProcessingDecision,
    ResultType,
    advance,
    back,
    commit,
    start_clarification,
)
from gtdcore.engage import EngageQuery, make_query, rank, rank_scored
from gtdcore.exceptions import (
    GTDError,
    InvalidCaptureError,
    InvalidDecisionError,
    InvalidTransitionError,
    InvariantViolationError,
    MalformedQueryError,
)
from gtdcore.model import (
    CaptureHints,
    Context,
    EnergyLevel,
    Idea,
    IdeaKind,
    IdeaStatus,
    Project,
    ProjectStatus,
    capture_idea,
)
from gtdcore.review import SystemHealthCheck, WeeklyMetrics, score, weekly_metrics

__all__ = [
    "ActionType",
    "CaptureHints",
    "ClarificationState",
    "Context",
    "EnergyLevel",
    "EngageQuery",
    "GTDError",
    "Idea",
    "IdeaKind",
    "IdeaStatus",
    "InvalidCaptureError",
    "InvalidDecisionError",
    "InvalidTransitionError",
    "InvariantViolationError",
    "MalformedQueryError",
    "ProcessingDecision",
    "Project",
    "ProjectStatus",
    "ResultType",
    "SystemHealthCheck",
    "WeeklyMetrics",
    "advance",
    "back",
    "capture_idea",
    "commit",
    "make_query",
    "rank",
    "rank_scored",
    "score",
    "start_clarification",
    "weekly_metrics",
]
