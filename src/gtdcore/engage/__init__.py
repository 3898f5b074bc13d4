"""Engagement: choosing what to do now under context, time and energy limits."""

from gtdcore.engage._priority import (
    AGE_BONUS_CAP,
    AGE_BONUS_PER_DAY,
    DUE_SOON_DAYS,
    DUE_SOON_POINTS,
    DUE_TODAY_POINTS,
    IMPORTANT_POINTS,
    OVERDUE_POINTS,
    URGENT_POINTS,
    ScoredIdea,
    priority_score,
)
from gtdcore.engage._query import EngageQuery, make_query, validate_query
from gtdcore.engage._ranker import base_set, filter_candidates, rank, rank_scored

__all__ = [
    "AGE_BONUS_CAP",
    "AGE_BONUS_PER_DAY",
    "DUE_SOON_DAYS",
    "DUE_SOON_POINTS",
    "DUE_TODAY_POINTS",
    "IMPORTANT_POINTS",
    "OVERDUE_POINTS",
    "URGENT_POINTS",
    "EngageQuery",
    "ScoredIdea",
    "base_set",
    "filter_candidates",
    "make_query",
    "priority_score",
    "rank",
    "rank_scored",
    "validate_query",
]
