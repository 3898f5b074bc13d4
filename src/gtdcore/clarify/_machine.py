"""The clarification state machine.

A clarification walks one inbox idea through a short series of questions::

    actionable -> not-actionable -> confirm
    actionable -> action-type -> time-energy -> context -> confirm
    actionable -> action-type (do-now finished) -> confirm

Each answer produces a new immutable state. The visited steps are kept on a
stack so that going back always returns along the path actually taken.
"""

from collections.abc import Iterable
from dataclasses import dataclass, replace
from enum import StrEnum
from typing import Final, TypeVar

from structlog.typing import FilteringBoundLogger

from gtdcore.clarify._decision import ActionType, ProcessingDecision, ResultType
from gtdcore.exceptions import InvalidTransitionError
from gtdcore.model import Context, EnergyLevel, Idea
from gtdcore.utils import get_engine_logger, round_half_up

__all__ = [
    "TIME_PRESETS",
    "Actionable",
    "Answer",
    "Back",
    "ChooseAction",
    "ChooseContext",
    "ClarificationState",
    "ClarifyStep",
    "Confirm",
    "DoNowResult",
    "Outcome",
    "TimeEnergy",
    "advance",
    "back",
    "start_clarification",
]

TIME_PRESETS: Final = (5, 15, 30, 60)

E = TypeVar("E", bound=StrEnum)


class ClarifyStep(StrEnum):
    """Steps of a clarification, in canonical order."""

    ACTIONABLE = "actionable"
    NOT_ACTIONABLE = "not-actionable"
    ACTION_TYPE = "action-type"
    TIME_ENERGY = "time-energy"
    CONTEXT = "context"
    CONFIRM = "confirm"


_STEP_ORDER: Final = tuple(ClarifyStep)

# Answers gathered at each step; going back to a step forgets them.
_STEP_FIELDS: Final[dict[ClarifyStep, tuple[str, ...]]] = {
    ClarifyStep.ACTIONABLE: ("is_actionable",),
    ClarifyStep.NOT_ACTIONABLE: ("result_type",),
    ClarifyStep.ACTION_TYPE: ("action_type", "notes"),
    ClarifyStep.TIME_ENERGY: ("estimated_minutes", "energy_required"),
    ClarifyStep.CONTEXT: ("context_id", "project_id"),
    ClarifyStep.CONFIRM: (),
}


# -----------------------------------------------------------------------------
# Answers
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class Actionable:
    """Answer to "is this actionable?"."""

    is_actionable: bool


@dataclass(frozen=True, slots=True)
class Outcome:
    """Where a non-actionable idea goes."""

    result_type: ResultType


@dataclass(frozen=True, slots=True)
class ChooseAction:
    """The kind of action to take.

    Doing it now is reported with :class:`DoNowResult` once the external
    two-minute countdown has finished.
    """

    action_type: ActionType


@dataclass(frozen=True, slots=True)
class DoNowResult:
    """Outcome of the two-minute countdown."""

    completed: bool
    elapsed_seconds: float = 0.0


@dataclass(frozen=True, slots=True)
class TimeEnergy:
    """Time estimate and energy requirement."""

    estimated_minutes: int | None = None
    energy_required: EnergyLevel = EnergyLevel.MEDIUM


@dataclass(frozen=True, slots=True)
class ChooseContext:
    """Context (and optionally project) the action belongs to."""

    context_id: str | None = None
    project_id: str | None = None


@dataclass(frozen=True, slots=True)
class Confirm:
    """Accept the accumulated decision."""


@dataclass(frozen=True, slots=True)
class Back:
    """Return to the previous step."""


Answer = (
    Actionable
    | Outcome
    | ChooseAction
    | DoNowResult
    | TimeEnergy
    | ChooseContext
    | Confirm
    | Back
)


# -----------------------------------------------------------------------------
# State
# -----------------------------------------------------------------------------


@dataclass(frozen=True, slots=True)
class ClarificationState:
    """Immutable snapshot of a clarification in progress.

    Attributes:
        item_id: The idea being clarified.
        step: The current step.
        history: Steps visited before the current one, oldest first.
        available_contexts: Selectable context ids, or None for any.
    """

    item_id: str
    step: ClarifyStep = ClarifyStep.ACTIONABLE
    history: tuple[ClarifyStep, ...] = ()
    is_actionable: bool | None = None
    result_type: ResultType | None = None
    action_type: ActionType | None = None
    estimated_minutes: int | None = None
    energy_required: EnergyLevel | None = None
    context_id: str | None = None
    project_id: str | None = None
    notes: str | None = None
    available_contexts: frozenset[str] | None = None

    @property
    def is_ready(self) -> bool:
        """Whether the decision is complete and waiting for confirmation."""
        return self.step is ClarifyStep.CONFIRM

    def to_decision(self) -> ProcessingDecision:
        """Build the processing decision gathered so far.

        Raises:
            InvalidTransitionError: If the clarification has not reached the
                confirm step.
        """
        if not self.is_ready:
            msg = f"Clarification of {self.item_id} is not ready to confirm"
            raise InvalidTransitionError(msg, step=self.step.value)

        return ProcessingDecision(
            item_id=self.item_id,
            is_actionable=bool(self.is_actionable),
            action_type=self.action_type,
            result_type=self.result_type,
            context_id=self.context_id,
            project_id=self.project_id,
            estimated_minutes=self.estimated_minutes,
            energy_required=self.energy_required,
            notes=self.notes,
        )


def start_clarification(
    idea: Idea, contexts: Iterable[Context] | None = None
) -> ClarificationState:
    """Begin clarifying an inbox idea.

    Args:
        idea: The idea to clarify; must be an active inbox idea.
        contexts: Contexts to choose from. Inactive contexts are not
            selectable. None accepts any context id.

    Returns:
        The initial state, at the actionable step.

    Raises:
        InvalidTransitionError: If the idea has already been clarified.
    """
    if not idea.is_inbox:
        msg = f"Idea {idea.id} is not an active inbox idea"
        raise InvalidTransitionError(msg, step=ClarifyStep.ACTIONABLE.value)

    available = None
    if contexts is not None:
        available = frozenset(c.id for c in contexts if c.is_active)
    return ClarificationState(item_id=idea.id, available_contexts=available)


def _goto(
    state: ClarificationState,
    step: ClarifyStep,
    **answers: object,
) -> ClarificationState:
    return replace(
        state,
        step=step,
        history=(*state.history, state.step),
        **answers,  # pyright: ignore[reportArgumentType]
    )


def back(state: ClarificationState) -> ClarificationState:
    """Return to the previously visited step.

    Answers given at that step and every later step are forgotten. At the
    first step this is a no-op.
    """
    if not state.history:
        return state

    target = state.history[-1]
    forgotten = {
        name: None
        for step in _STEP_ORDER[_STEP_ORDER.index(target) :]
        for name in _STEP_FIELDS[step]
    }
    return replace(state, step=target, history=state.history[:-1], **forgotten)


def _reject(state: ClarificationState, answer: object) -> InvalidTransitionError:
    msg = f"{type(answer).__name__} is not a valid answer at step {state.step.value}"
    return InvalidTransitionError(msg, step=state.step.value)


def _coerce(enum_type: type[E], value: object, state: ClarificationState) -> E:
    try:
        return enum_type(value)
    except ValueError:
        msg = f"Unknown {enum_type.__name__} {value!r} at step {state.step.value}"
        raise InvalidTransitionError(msg, step=state.step.value) from None


def _do_now_minutes(elapsed_seconds: float) -> int:
    return max(1, round_half_up(elapsed_seconds / 60))


def _transition(  # noqa: C901, PLR0911
    state: ClarificationState, answer: Answer
) -> ClarificationState | ProcessingDecision:
    match state.step, answer:
        case _, Back():
            return back(state)

        case ClarifyStep.ACTIONABLE, Actionable(is_actionable=True):
            return _goto(state, ClarifyStep.ACTION_TYPE, is_actionable=True)

        case ClarifyStep.ACTIONABLE, Actionable(is_actionable=False):
            return _goto(state, ClarifyStep.NOT_ACTIONABLE, is_actionable=False)

        case ClarifyStep.NOT_ACTIONABLE, Outcome(result_type=result_type):
            result = _coerce(ResultType, result_type, state)
            return _goto(state, ClarifyStep.CONFIRM, result_type=result)

        case ClarifyStep.ACTION_TYPE, ChooseAction(action_type=action_type):
            action = _coerce(ActionType, action_type, state)
            if action is ActionType.DO_NOW:
                msg = "Report doing it now with DoNowResult after the countdown"
                raise InvalidTransitionError(msg, step=state.step.value)
            return _goto(state, ClarifyStep.TIME_ENERGY, action_type=action)

        case ClarifyStep.ACTION_TYPE, DoNowResult(completed=True, elapsed_seconds=s):
            minutes = _do_now_minutes(s)
            return _goto(
                state,
                ClarifyStep.CONFIRM,
                action_type=ActionType.DO_NOW,
                estimated_minutes=minutes,
                notes=f"Completed in {minutes} minutes using the two-minute rule",
            )

        case ClarifyStep.ACTION_TYPE, DoNowResult(completed=False):
            # Not finished in time: carry on as a deferred action.
            return _goto(state, ClarifyStep.TIME_ENERGY, action_type=ActionType.DEFER)

        case ClarifyStep.TIME_ENERGY, TimeEnergy(
            estimated_minutes=minutes, energy_required=energy
        ):
            if minutes is not None and (
                isinstance(minutes, bool) or not isinstance(minutes, int) or minutes <= 0
            ):
                msg = f"Estimated minutes must be a positive integer, got {minutes!r}"
                raise InvalidTransitionError(msg, step=state.step.value)
            return _goto(
                state,
                ClarifyStep.CONTEXT,
                estimated_minutes=minutes,
                energy_required=_coerce(EnergyLevel, energy, state),
            )

        case ClarifyStep.CONTEXT, ChooseContext(
            context_id=context_id, project_id=project_id
        ):
            if (
                context_id is not None
                and state.available_contexts is not None
                and context_id not in state.available_contexts
            ):
                msg = f"Context {context_id!r} is not available"
                raise InvalidTransitionError(msg, step=state.step.value)
            return _goto(
                state,
                ClarifyStep.CONFIRM,
                context_id=context_id,
                project_id=project_id,
            )

        case ClarifyStep.CONFIRM, Confirm():
            return state.to_decision()

        case _:
            raise _reject(state, answer)


def advance(
    state: ClarificationState,
    answer: Answer,
    *,
    logger: FilteringBoundLogger | None = None,
) -> ClarificationState | ProcessingDecision:
    """Feed one answer to the state machine.

    Args:
        state: The current state.
        answer: The answer for the current step, or :class:`Back`.
        logger: Optional logger; defaults to the engine logger.

    Returns:
        The next state, or the finalized decision when the answer confirms.

    Raises:
        InvalidTransitionError: If the answer does not belong to the current
            step or carries an invalid value.
    """
    if logger is None:
        logger = get_engine_logger()

    result = _transition(state, answer)
    logger.debug(
        "clarification_advanced",
        item_id=state.item_id,
        from_step=state.step.value,
        answer=type(answer).__name__,
        to_step=(
            result.step.value
            if isinstance(result, ClarificationState)
            else "committed"
        ),
    )
    return result
