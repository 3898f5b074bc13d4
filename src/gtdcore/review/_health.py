"""System health scoring."""

from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta
from typing import Final

from structlog.typing import FilteringBoundLogger

from gtdcore.config import ReviewConfig
from gtdcore.model import (
    Idea,
    IdeaKind,
    IdeaStatus,
    Project,
    ProjectStatus,
    has_next_action,
)
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
)
from gtdcore.utils import days_between, get_engine_logger, resolve_now, round_half_up

__all__ = [
    "grade_for",
    "level_for",
    "score",
]

_MAX_SCORE: Final = 100.0

INBOX_PENALTY: Final = 5
STUCK_PROJECT_PENALTY: Final = 20
OVERDUE_PENALTY: Final = 10
AGE_PENALTY: Final = 2
REVIEW_DAY_PENALTY: Final = 5

_GRADES: Final = (
    (90, HealthGrade.A),
    (80, HealthGrade.B),
    (70, HealthGrade.C),
    (60, HealthGrade.D),
)

_LEVELS: Final = (
    (90, HealthLevel.EXCELLENT),
    (75, HealthLevel.GOOD),
    (60, HealthLevel.FAIR),
)


def _clamp(value: float) -> float:
    return min(_MAX_SCORE, max(0.0, float(value)))


def grade_for(overall: int) -> HealthGrade:
    """Letter grade for an overall score."""
    for threshold, grade in _GRADES:
        if overall >= threshold:
            return grade
    return HealthGrade.F


def level_for(overall: int) -> HealthLevel:
    """Descriptive level for an overall score."""
    for threshold, level in _LEVELS:
        if overall >= threshold:
            return level
    return HealthLevel.POOR


def _completed_since(completed: datetime | None, since: datetime) -> bool:
    return completed is not None and completed >= since


def _inbox_health(ideas: Sequence[Idea]) -> InboxHealth:
    inbox = [i for i in ideas if i.is_inbox]
    oldest = min((i.created_at for i in inbox), default=None)
    return InboxHealth(
        count=len(inbox),
        oldest_item=oldest,
        score=_clamp(_MAX_SCORE - INBOX_PENALTY * len(inbox)),
    )


def _project_health(
    ideas: Sequence[Idea], projects: Sequence[Project], since: datetime
) -> ProjectHealth:
    active = [p for p in projects if p.status is ProjectStatus.ACTIVE]
    with_next = sum(1 for p in active if has_next_action(p, ideas))
    stuck = len(active) - with_next
    completed = sum(
        1
        for p in projects
        if p.status is ProjectStatus.COMPLETED
        and _completed_since(p.completed_date, since)
    )
    value = (
        _MAX_SCORE if not active else _MAX_SCORE - STUCK_PROJECT_PENALTY * stuck
    )
    return ProjectHealth(
        total=len(active),
        with_next_actions=with_next,
        stuck=stuck,
        completed=completed,
        score=_clamp(value),
    )


def _action_health(
    ideas: Sequence[Idea], now: datetime, since: datetime
) -> ActionHealth:
    actions = [
        i
        for i in ideas
        if i.status is IdeaStatus.ACTIVE
        and i.is_actionable
        and i.kind is IdeaKind.ACTION
    ]
    overdue = sum(1 for i in actions if i.is_overdue(now))
    completed = sum(
        1
        for i in ideas
        if i.status is IdeaStatus.COMPLETED
        and _completed_since(i.completed_date, since)
    )
    average_age = (
        sum(days_between(i.created_at, now) for i in actions) / len(actions)
        if actions
        else 0.0
    )
    return ActionHealth(
        total=len(actions),
        overdue=overdue,
        completed=completed,
        average_age=average_age,
        score=_clamp(
            _MAX_SCORE - OVERDUE_PENALTY * overdue - AGE_PENALTY * average_age
        ),
    )


def _review_health(
    last_review: datetime | None, now: datetime, settings: ReviewConfig
) -> ReviewHealth:
    if last_review is None:
        days = settings.missing_review_days
    else:
        days = days_between(last_review, now)
    on_schedule = days <= settings.interval_days
    return ReviewHealth(
        last_review=last_review,
        days_since_review=days,
        on_schedule=on_schedule,
        score=(
            _MAX_SCORE
            if on_schedule
            else _clamp(_MAX_SCORE - REVIEW_DAY_PENALTY * days)
        ),
    )


def _recommendations(
    inbox: InboxHealth,
    projects: ProjectHealth,
    actions: ActionHealth,
    review: ReviewHealth,
    settings: ReviewConfig,
) -> tuple[str, ...]:
    found: list[str] = []
    if inbox.count > settings.inbox_backlog_threshold:
        found.append(
            f"Process inbox: {inbox.count} unprocessed ideas "
            f"(more than {settings.inbox_backlog_threshold})"
        )
    if projects.stuck > 0:
        found.append(f"{projects.stuck} projects need next actions")
    if actions.overdue > 0:
        found.append(f"{actions.overdue} overdue actions need attention")
    if not review.on_schedule and review.last_review is None:
        found.append("Weekly review is overdue: no review has been recorded yet")
    elif not review.on_schedule:
        found.append(
            f"Weekly review is overdue: last one {review.days_since_review} days ago"
        )
    return tuple(found)


def score(
    ideas: Iterable[Idea],
    projects: Iterable[Project],
    last_review: datetime | None = None,
    *,
    now: datetime | None = None,
    settings: ReviewConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> SystemHealthCheck:
    """Compute the health of the whole system.

    Every sub-score and the aggregate lie in [0, 100] regardless of how
    large the input counts get.

    Args:
        ideas: The idea pool.
        projects: The project pool.
        last_review: When the last weekly review was completed, if ever.
        now: Evaluation time; defaults to the current UTC time.
        settings: Review thresholds; defaults to ``ReviewConfig()``.
        logger: Optional logger; defaults to the engine logger.

    Returns:
        The health check with sub-reports, overall grade and
        recommendations.
    """
    if logger is None:
        logger = get_engine_logger()
    if settings is None:
        settings = ReviewConfig()

    now = resolve_now(now)
    since = now - timedelta(days=settings.window_days)
    idea_list = list(ideas)
    project_list = list(projects)

    inbox = _inbox_health(idea_list)
    project_health = _project_health(idea_list, project_list, since)
    actions = _action_health(idea_list, now, since)
    review = _review_health(last_review, now, settings)

    mean = (inbox.score + project_health.score + actions.score + review.score) / 4
    overall_score = min(100, max(0, round_half_up(mean)))
    overall = OverallHealth(
        score=overall_score,
        grade=grade_for(overall_score),
        level=level_for(overall_score),
        recommendations=_recommendations(
            inbox, project_health, actions, review, settings
        ),
    )
    factors = HealthFactors(
        inbox_empty=inbox.count == 0,
        projects_have_next_actions=project_health.stuck == 0,
        low_overdue_items=actions.overdue < settings.overdue_warning_threshold,
        regular_reviews=review.on_schedule,
    )

    logger.info(
        "health_scored",
        score=overall.score,
        grade=overall.grade.value,
        inbox=inbox.count,
        stuck_projects=project_health.stuck,
        overdue_actions=actions.overdue,
        days_since_review=review.days_since_review,
    )
    return SystemHealthCheck(
        timestamp=now,
        inbox=inbox,
        projects=project_health,
        actions=actions,
        review=review,
        overall=overall,
        factors=factors,
    )
