"""Processing decisions and how they are applied to an idea."""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from datetime import datetime
from enum import StrEnum
from typing import Any

from structlog.typing import FilteringBoundLogger

from gtdcore.exceptions import InvalidDecisionError, InvariantViolationError
from gtdcore.model import (
    EnergyLevel,
    Idea,
    IdeaKind,
    IdeaStatus,
    check_idea_invariants,
    current_next_action,
)
from gtdcore.utils import get_engine_logger, resolve_now

__all__ = [
    "ActionType",
    "CommitResult",
    "Completion",
    "ProcessingDecision",
    "ResultType",
    "commit",
    "validate_decision",
]


class ActionType(StrEnum):
    """What to do with an actionable idea."""

    DO_NOW = "do-now"
    SCHEDULE = "schedule"
    DELEGATE = "delegate"
    DEFER = "defer"


class ResultType(StrEnum):
    """Where a non-actionable idea goes."""

    REFERENCE = "reference"
    SOMEDAY_MAYBE = "someday-maybe"
    TRASH = "trash"


@dataclass(frozen=True, slots=True)
class ProcessingDecision:
    """A finalized clarification outcome for one idea.

    Attributes:
        item_id: The idea the decision applies to.
        is_actionable: Whether the idea calls for action.
        action_type: Required when actionable.
        result_type: Required when not actionable.
        context_id: Context to attach, if any.
        project_id: Project to attach, if any.
        estimated_minutes: Estimate (or time spent, for do-now).
        energy_required: Energy the work needs.
        notes: Free-form notes recorded with the decision.
    """

    item_id: str
    is_actionable: bool
    action_type: ActionType | None = None
    result_type: ResultType | None = None
    context_id: str | None = None
    project_id: str | None = None
    estimated_minutes: int | None = None
    energy_required: EnergyLevel | None = None
    notes: str | None = None


@dataclass(frozen=True, slots=True)
class Completion:
    """Side effect of finishing an idea on the spot under the two-minute rule."""

    idea_id: str
    completed_at: datetime
    minutes_spent: int | None


@dataclass(frozen=True, slots=True)
class CommitResult:
    """The mutated idea plus an optional completion side effect."""

    idea: Idea
    completion: Completion | None = None


def validate_decision(decision: ProcessingDecision) -> None:
    """Check that a decision carries the fields its branch needs.

    Raises:
        InvalidDecisionError: If a required field is missing or contradicts
            the branch.
    """
    item_id = decision.item_id
    if decision.is_actionable:
        if decision.action_type is None:
            msg = "Actionable decision needs an action type"
            raise InvalidDecisionError(msg, item_id=item_id, field="action_type")
        if decision.result_type is not None:
            msg = "Actionable decision cannot carry a result type"
            raise InvalidDecisionError(msg, item_id=item_id, field="result_type")
    else:
        if decision.result_type is None:
            msg = "Non-actionable decision needs a result type"
            raise InvalidDecisionError(msg, item_id=item_id, field="result_type")
        if decision.action_type is not None:
            msg = "Non-actionable decision cannot carry an action type"
            raise InvalidDecisionError(msg, item_id=item_id, field="action_type")

    if decision.estimated_minutes is not None and decision.estimated_minutes <= 0:
        msg = f"Estimated minutes must be positive, got {decision.estimated_minutes}"
        raise InvalidDecisionError(msg, item_id=item_id, field="estimated_minutes")


def _branch_updates(
    idea: Idea, decision: ProcessingDecision, now: datetime
) -> dict[str, Any]:  # pyright: ignore[reportExplicitAny]
    if not decision.is_actionable:
        match decision.result_type:
            case ResultType.REFERENCE:
                return {"kind": IdeaKind.REFERENCE, "is_next_action": False}
            case ResultType.SOMEDAY_MAYBE:
                return {"kind": IdeaKind.SOMEDAY_MAYBE, "is_next_action": False}
            case _:
                return {"status": IdeaStatus.CANCELLED, "is_next_action": False}

    match decision.action_type:
        case ActionType.DO_NOW:
            already_done = (
                idea.status is IdeaStatus.COMPLETED and idea.completed_date is not None
            )
            return {
                "kind": IdeaKind.ACTION,
                "status": IdeaStatus.COMPLETED,
                "is_next_action": False,
                "completed_date": idea.completed_date if already_done else now,
                "actual_minutes": decision.estimated_minutes,
            }
        case ActionType.DELEGATE:
            return {
                "kind": IdeaKind.WAITING_FOR,
                "status": IdeaStatus.DELEGATED,
                "is_next_action": False,
            }
        case _:
            return {"kind": IdeaKind.ACTION, "is_next_action": True}


def commit(
    idea: Idea,
    decision: ProcessingDecision,
    *,
    ideas: Iterable[Idea] = (),
    now: datetime | None = None,
    logger: FilteringBoundLogger | None = None,
) -> CommitResult:
    """Apply a finalized decision to an idea.

    Nothing is mutated when the decision is rejected. Applying the same
    decision to the same idea again yields the same record apart from
    ``updated_at``, and for do-now decisions ``completed_date``.

    Args:
        idea: The idea being clarified.
        decision: The finalized decision.
        ideas: The current idea pool; used to reject a second next action
            for the same project.
        now: Commit time; defaults to the current UTC time.
        logger: Optional logger; defaults to the engine logger.

    Returns:
        The mutated idea and, for do-now decisions, the completion record.

    Raises:
        InvalidDecisionError: If the decision is incomplete or targets
            another idea.
        InvariantViolationError: If the result would give a project two
            next actions.
    """
    if logger is None:
        logger = get_engine_logger()

    try:
        if decision.item_id != idea.id:
            msg = f"Decision for {decision.item_id} applied to idea {idea.id}"
            raise InvalidDecisionError(msg, item_id=decision.item_id, field="item_id")
        validate_decision(decision)
    except InvalidDecisionError as e:
        logger.info("decision_rejected", item_id=idea.id, field=e.field, reason=str(e))
        raise

    timestamp = resolve_now(now)
    updates: dict[str, Any] = {  # pyright: ignore[reportExplicitAny]
        "is_actionable": decision.is_actionable,
        "updated_at": timestamp,
    }
    if decision.estimated_minutes is not None:
        updates["estimated_minutes"] = decision.estimated_minutes
    if decision.energy_required is not None:
        updates["energy_required"] = decision.energy_required
    if decision.context_id:
        updates["context_id"] = decision.context_id
    if decision.project_id:
        updates["project_id"] = decision.project_id
    if decision.notes:
        updates["notes"] = decision.notes
    updates.update(_branch_updates(idea, decision, timestamp))

    updated = replace(idea, **updates)
    check_idea_invariants(updated)

    if updated.is_next_action and updated.project_id is not None:
        holder = current_next_action(
            updated.project_id, (i for i in ideas if i.id != idea.id)
        )
        if holder is not None:
            msg = (
                f"Project {updated.project_id} already has next action {holder.id}; "
                "clear it before committing another"
            )
            logger.info(
                "decision_rejected",
                item_id=idea.id,
                project_id=updated.project_id,
                reason=msg,
            )
            raise InvariantViolationError(
                msg, idea_id=idea.id, project_id=updated.project_id
            )

    completion = None
    if decision.is_actionable and decision.action_type == ActionType.DO_NOW:
        assert updated.completed_date is not None  # noqa: S101
        completion = Completion(
            idea_id=idea.id,
            completed_at=updated.completed_date,
            minutes_spent=decision.estimated_minutes,
        )

    logger.debug(
        "decision_committed",
        item_id=idea.id,
        kind=updated.kind.value,
        status=updated.status.value,
        next_action=updated.is_next_action,
    )
    return CommitResult(idea=updated, completion=completion)
