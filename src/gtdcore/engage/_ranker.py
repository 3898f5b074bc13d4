"""Narrowing the next-action pool and ordering what survives."""

from collections.abc import Iterable
from datetime import datetime

from structlog.typing import FilteringBoundLogger

from gtdcore.engage._priority import ScoredIdea, priority_score
from gtdcore.engage._query import EngageQuery, validate_query
from gtdcore.model import Idea, IdeaStatus
from gtdcore.utils import get_engine_logger, resolve_now

__all__ = ["base_set", "filter_candidates", "rank", "rank_scored"]


def base_set(ideas: Iterable[Idea]) -> list[Idea]:
    """Active ideas currently designated as next actions, in pool order."""
    return [i for i in ideas if i.is_next_action and i.status is IdeaStatus.ACTIVE]


def _fits_context(idea: Idea, contexts: frozenset[str]) -> bool:
    return idea.context_id is not None and idea.context_id in contexts


def _fits_time(idea: Idea, max_minutes: int) -> bool:
    # Unestimated work is assumed to fit.
    return idea.estimated_minutes is None or idea.estimated_minutes <= max_minutes


def filter_candidates(
    ideas: Iterable[Idea],
    query: EngageQuery | None = None,
    *,
    logger: FilteringBoundLogger | None = None,
) -> list[Idea]:
    """Apply the base set and the query's context, time and energy filters.

    An empty ``query.contexts`` applies no context filter. The query is
    validated before anything is filtered.

    Args:
        ideas: The idea pool.
        query: Engagement criteria, or None for the base set only.
        logger: Optional logger; defaults to the engine logger.

    Returns:
        The eligible ideas in pool order.

    Raises:
        MalformedQueryError: If the query is malformed.
    """
    if logger is None:
        logger = get_engine_logger()
    if query is not None:
        validate_query(query)

    candidates = base_set(ideas)
    base_count = len(candidates)
    if query is None:
        logger.debug("candidates_filtered", base=base_count, eligible=base_count)
        return candidates

    if query.contexts:
        candidates = [i for i in candidates if _fits_context(i, query.contexts)]
    after_context = len(candidates)

    if query.max_minutes is not None:
        max_minutes = query.max_minutes
        candidates = [i for i in candidates if _fits_time(i, max_minutes)]
    after_time = len(candidates)

    if query.energy_level is not None:
        energy = query.energy_level
        candidates = [
            i
            for i in candidates
            if i.energy_required is None or energy.covers(i.energy_required)
        ]

    logger.debug(
        "candidates_filtered",
        base=base_count,
        after_context=after_context,
        after_time=after_time,
        eligible=len(candidates),
    )
    return candidates


def rank_scored(
    ideas: Iterable[Idea],
    query: EngageQuery | None = None,
    *,
    now: datetime | None = None,
    logger: FilteringBoundLogger | None = None,
) -> list[ScoredIdea]:
    """Filter and sort candidates, keeping their scores.

    The sort is stable: equal scores keep pool order.
    """
    timestamp = resolve_now(now)
    candidates = filter_candidates(ideas, query, logger=logger)
    scored = [ScoredIdea(idea, priority_score(idea, now=timestamp)) for idea in candidates]
    scored.sort(key=lambda s: s.score, reverse=True)
    return scored


def rank(
    ideas: Iterable[Idea],
    query: EngageQuery | None = None,
    *,
    now: datetime | None = None,
    logger: FilteringBoundLogger | None = None,
) -> list[Idea]:
    """Answer "what should I work on now?".

    Args:
        ideas: The idea pool.
        query: Engagement criteria. None sorts the base set unfiltered.
        now: Reference time; defaults to the current UTC time.
        logger: Optional logger; defaults to the engine logger.

    Returns:
        Eligible ideas, highest priority first. Empty when nothing fits.

    Raises:
        MalformedQueryError: If the query is malformed.
    """
    return [s.idea for s in rank_scored(ideas, query, now=now, logger=logger)]
