"""Engagement queries: where am I, how long do I have, how much energy."""

from collections.abc import Iterable
from dataclasses import dataclass, field

from gtdcore.exceptions import MalformedQueryError
from gtdcore.model import EnergyLevel

__all__ = ["EngageQuery", "make_query", "validate_query"]


@dataclass(frozen=True, slots=True)
class EngageQuery:
    """Criteria for choosing what to work on now.

    Attributes:
        contexts: Acceptable context ids. Empty means no context filter.
        max_minutes: Time available, or None for no limit.
        energy_level: Current energy, or None for no energy filter.
    """

    contexts: frozenset[str] = field(default_factory=frozenset)
    max_minutes: int | None = None
    energy_level: EnergyLevel | None = None


def make_query(
    contexts: Iterable[str] = (),
    max_minutes: int | None = None,
    energy_level: EnergyLevel | str | None = None,
) -> EngageQuery:
    """Build and validate a query from loosely typed input.

    Args:
        contexts: Acceptable context ids.
        max_minutes: Time available in minutes.
        energy_level: Current energy, as an enum member or its value.

    Returns:
        A validated query.

    Raises:
        MalformedQueryError: If minutes are not positive or the energy level
            is not recognized.
    """
    energy: EnergyLevel | None = None
    if energy_level is not None:
        try:
            energy = EnergyLevel(energy_level)
        except ValueError:
            msg = f"Unknown energy level: {energy_level!r}"
            raise MalformedQueryError(
                msg, field="energy_level", value=energy_level
            ) from None

    query = EngageQuery(
        contexts=frozenset(contexts),
        max_minutes=max_minutes,
        energy_level=energy,
    )
    validate_query(query)
    return query


def validate_query(query: EngageQuery) -> None:
    """Reject a malformed query before any filtering happens.

    Raises:
        MalformedQueryError: If a field holds an unusable value.
    """
    minutes = query.max_minutes
    if minutes is not None and (
        isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0
    ):
        msg = f"Available minutes must be a positive integer, got {minutes!r}"
        raise MalformedQueryError(msg, field="max_minutes", value=minutes)

    if query.energy_level is not None and not isinstance(
        query.energy_level, EnergyLevel
    ):
        msg = f"Unknown energy level: {query.energy_level!r}"
        raise MalformedQueryError(msg, field="energy_level", value=query.energy_level)
