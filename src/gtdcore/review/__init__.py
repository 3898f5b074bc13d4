"""Weekly review: system health scoring and activity metrics."""

from gtdcore.review._health import grade_for, level_for, score
from gtdcore.review._metrics import weekly_metrics
from gtdcore.review._models import (
    ActionHealth,
    HealthFactors,
    HealthGrade,
    HealthLevel,
    InboxHealth,
    OverallHealth,
    ProjectHealth,
    ReviewHealth,
    SystemHealthCheck,
    WeeklyMetrics,
)

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
    "grade_for",
    "level_for",
    "score",
    "weekly_metrics",
]
