"""Clock and day arithmetic helpers."""

import math
from datetime import datetime
from typing import Final

import pendulum

_SECONDS_PER_DAY: Final = 86400


def utcnow() -> datetime:
    """Return the current time as an aware UTC datetime."""
    return pendulum.now("UTC")


def resolve_now(now: datetime | None) -> datetime:
    """Return ``now`` or the current UTC time when it is None."""
    return utcnow() if now is None else now


def days_between(start: datetime, end: datetime) -> int:
    """Whole days from ``start`` to ``end``, floored.

    A moment in the past relative to ``end`` by even one second counts as
    day ``-1`` when ``start`` is after ``end``.
    """
    return math.floor((end - start).total_seconds() / _SECONDS_PER_DAY)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves going up."""
    return math.floor(value + 0.5)
