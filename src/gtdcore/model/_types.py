"""Enumerations shared by the data model."""

from enum import StrEnum
from typing import Final


class IdeaKind(StrEnum):
    """Mutually exclusive classification of an idea."""

    INBOX = "inbox"
    ACTION = "action"
    PROJECT_LINK = "project-link"
    REFERENCE = "reference"
    SOMEDAY_MAYBE = "someday-maybe"
    WAITING_FOR = "waiting-for"


class IdeaStatus(StrEnum):
    """Lifecycle status of an idea."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    DELEGATED = "delegated"

    @property
    def is_terminal(self) -> bool:
        """Whether no further lifecycle transition is expected."""
        return self in (IdeaStatus.COMPLETED, IdeaStatus.CANCELLED)


class EnergyLevel(StrEnum):
    """Energy a task needs, or the energy a person currently has.

    Levels form a total order ``zombie < low < medium < high``. Use
    :attr:`rank` and :meth:`covers` for comparisons; the string values do not
    sort meaningfully.
    """

    HIGH = "high"
    MEDIUM = "medium"
    LOW = "low"
    ZOMBIE = "zombie"

    @property
    def rank(self) -> int:
        """Position in the energy order, zombie being 0."""
        return _ENERGY_RANK[self]

    def covers(self, required: "EnergyLevel") -> bool:
        """Whether this energy level is enough for a task needing ``required``."""
        return required.rank <= self.rank


_ENERGY_RANK: Final[dict[EnergyLevel, int]] = {
    EnergyLevel.ZOMBIE: 0,
    EnergyLevel.LOW: 1,
    EnergyLevel.MEDIUM: 2,
    EnergyLevel.HIGH: 3,
}


class ProjectStatus(StrEnum):
    """Status values for projects."""

    ACTIVE = "active"
    COMPLETED = "completed"
    CANCELLED = "cancelled"
    ON_HOLD = "on-hold"
    SOMEDAY_MAYBE = "someday-maybe"


class ContextType(StrEnum):
    """What a context tag describes."""

    LOCATION = "location"
    TOOL = "tool"
    PERSON = "person"
    ENERGY = "energy"
    TIME = "time"


MIN_HORIZON: Final = 1
MAX_HORIZON: Final = 5
