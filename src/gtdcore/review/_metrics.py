"""Weekly activity rollup."""

from collections import Counter
from collections.abc import Iterable, Sequence
from datetime import datetime, timedelta

from structlog.typing import FilteringBoundLogger

from gtdcore.config import ReviewConfig
from gtdcore.model import (
    Context,
    Idea,
    IdeaKind,
    IdeaStatus,
    Project,
    ProjectStatus,
    has_next_action,
)
from gtdcore.review._models import WeeklyMetrics
from gtdcore.utils import get_engine_logger, resolve_now

__all__ = ["weekly_metrics"]


def _in_window(moment: datetime | None, start: datetime) -> bool:
    return moment is not None and moment >= start


def _rate(part: int, whole: int) -> float:
    return part / whole if whole else 0.0


def _context_distribution(
    ideas: Sequence[Idea], contexts: Sequence[Context] | None
) -> dict[str, int]:
    counts = Counter(
        i.context_id
        for i in ideas
        if i.status is IdeaStatus.ACTIVE and i.context_id is not None
    )
    if contexts is None:
        return dict(sorted(counts.items()))
    return {c.name: counts.get(c.id, 0) for c in contexts}


def weekly_metrics(
    ideas: Iterable[Idea],
    projects: Iterable[Project],
    contexts: Iterable[Context] | None = None,
    *,
    now: datetime | None = None,
    settings: ReviewConfig | None = None,
    logger: FilteringBoundLogger | None = None,
) -> WeeklyMetrics:
    """Summarize capture, clarify and completion activity for the window.

    An idea counts as processed when it was captured in the window and is no
    longer an active inbox idea, so trashed captures count as processed.

    Args:
        ideas: The idea pool.
        projects: The project pool.
        contexts: Contexts used to name the distribution keys. When None the
            distribution is keyed by context id.
        now: End of the window; defaults to the current UTC time.
        settings: Review settings supplying the window length.
        logger: Optional logger; defaults to the engine logger.
    """
    if logger is None:
        logger = get_engine_logger()
    if settings is None:
        settings = ReviewConfig()

    end = resolve_now(now)
    start = end - timedelta(days=settings.window_days)
    idea_list = list(ideas)
    project_list = list(projects)
    context_list = None if contexts is None else list(contexts)

    captured = [i for i in idea_list if _in_window(i.created_at, start)]
    processed = [i for i in captured if not i.is_inbox]
    actionable = [i for i in processed if i.is_actionable]
    completed = [
        i
        for i in idea_list
        if i.status is IdeaStatus.COMPLETED and _in_window(i.completed_date, start)
    ]

    active_projects = [p for p in project_list if p.status is ProjectStatus.ACTIVE]
    projects_completed = sum(
        1
        for p in project_list
        if p.status is ProjectStatus.COMPLETED and _in_window(p.completed_date, start)
    )
    projects_stuck = sum(1 for p in active_projects if not has_next_action(p, idea_list))
    overdue = sum(
        1
        for i in idea_list
        if i.status is IdeaStatus.ACTIVE
        and i.is_actionable
        and i.kind is IdeaKind.ACTION
        and i.is_overdue(end)
    )

    metrics = WeeklyMetrics(
        window_start=start,
        window_end=end,
        ideas_captured=len(captured),
        ideas_processed=len(processed),
        ideas_completed=len(completed),
        inbox_processing_rate=_rate(len(processed), len(captured)),
        actionable_rate=_rate(len(actionable), len(processed)),
        context_distribution=_context_distribution(idea_list, context_list),
        projects_active=len(active_projects),
        projects_completed=projects_completed,
        projects_stuck=projects_stuck,
        overdue_actions=overdue,
    )
    logger.debug(
        "weekly_metrics_computed",
        captured=metrics.ideas_captured,
        processed=metrics.ideas_processed,
        completed=metrics.ideas_completed,
    )
    return metrics
