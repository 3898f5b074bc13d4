"""gtdcore exceptions."""

from pathlib import Path
from typing import Any


class GTDError(Exception):
    """Base exception for gtdcore errors."""


# =============================================================================
# Engine Exceptions
# =============================================================================


class InvalidDecisionError(GTDError, ValueError):
    """Raised when a processing decision is missing fields for its branch.

    Attributes:
        item_id: The idea the decision targets.
        field: The offending field, if a single field is to blame.
    """

    def __init__(
        self,
        message: str,
        *,
        item_id: str | None = None,
        field: str | None = None,
    ) -> None:
        """Initialize with error message and decision context.

        Args:
            message: Human-readable error message.
            item_id: The idea the decision targets.
            field: The offending field.
        """
        super().__init__(message)
        self.item_id: str | None = item_id
        self.field: str | None = field


class InvariantViolationError(GTDError, ValueError):
    """Raised when an operation would break the next-action invariants.

    Attributes:
        idea_id: The idea involved in the rejected operation.
        project_id: The project involved, if any.
    """

    def __init__(
        self,
        message: str,
        *,
        idea_id: str | None = None,
        project_id: str | None = None,
    ) -> None:
        """Initialize with error message and record context."""
        super().__init__(message)
        self.idea_id: str | None = idea_id
        self.project_id: str | None = project_id


class MalformedQueryError(GTDError, ValueError):
    """Raised when an engagement query is rejected before filtering.

    Attributes:
        field: The query field that failed validation.
        value: The rejected value.
    """

    def __init__(
        self,
        message: str,
        *,
        field: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
    ) -> None:
        """Initialize with error message and query context."""
        super().__init__(message)
        self.field: str = field
        self.value: Any = value  # pyright: ignore[reportExplicitAny]


class InvalidTransitionError(GTDError, ValueError):
    """Raised when an answer does not fit the current clarification step.

    Attributes:
        step: The step the state machine was in.
    """

    def __init__(self, message: str, *, step: str) -> None:
        """Initialize with error message and the current step."""
        super().__init__(message)
        self.step: str = step


class InvalidCaptureError(GTDError, ValueError):
    """Raised when captured content is blank."""


class SnapshotError(GTDError):
    """Raised when a record snapshot cannot be read or decoded.

    Attributes:
        path: The snapshot file, if it came from disk.
    """

    def __init__(self, message: str, *, path: Path | None = None) -> None:
        """Initialize with error message and snapshot location."""
        super().__init__(message)
        self.path: Path | None = path


# =============================================================================
# Configuration Exceptions
# =============================================================================


class ConfigError(GTDError):
    """Base exception for configuration errors."""


class ConfigLoadError(ConfigError):
    """Raised when configuration cannot be loaded or parsed."""

    def __init__(
        self,
        message: str,
        *,
        path: Path | None = None,
        line: int | None = None,
        column: int | None = None,
    ) -> None:
        """Initialize with error message and optional location context."""
        super().__init__(message)
        self.path: Path | None = path
        self.line: int | None = line
        self.column: int | None = column


class ConfigValidationError(ConfigError):
    """Raised when configuration fails validation."""

    def __init__(
        self,
        message: str,
        *,
        key: str,
        value: Any,  # pyright: ignore[reportAny,reportExplicitAny]
        expected: str,
        source: str | None = None,
    ) -> None:
        """Initialize with error message and validation context."""
        super().__init__(message)
        self.key: str = key
        self.value: Any = value  # pyright: ignore[reportExplicitAny]
        self.expected: str = expected
        self.source: str | None = source
