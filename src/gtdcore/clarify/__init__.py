"""Clarification: turning a captured idea into a categorized record.

The state machine in this package collects a :class:`ProcessingDecision`
one answer at a time; :func:`commit` applies the finalized decision to the
idea and returns the new record.
"""

from gtdcore.clarify._decision import (
    ActionType,
    CommitResult,
    Completion,
    ProcessingDecision,
    ResultType,
    commit,
    validate_decision,
)
from gtdcore.clarify._machine import (
    TIME_PRESETS,
    Actionable,
    Answer,
    Back,
    ChooseAction,
    ChooseContext,
    ClarificationState,
    ClarifyStep,
    Confirm,
    DoNowResult,
    Outcome,
    TimeEnergy,
    advance,
    back,
    start_clarification,
)

__all__ = [
    "TIME_PRESETS",
    "ActionType",
    "Actionable",
    "Answer",
    "Back",
    "ChooseAction",
    "ChooseContext",
    "ClarificationState",
    "ClarifyStep",
    "CommitResult",
    "Completion",
    "Confirm",
    "DoNowResult",
    "Outcome",
    "ProcessingDecision",
    "ResultType",
    "TimeEnergy",
    "advance",
    "back",
    "commit",
    "start_clarification",
    "validate_decision",
]
