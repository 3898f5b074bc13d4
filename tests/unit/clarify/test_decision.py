from collections.abc import Callable
from dataclasses import replace
from datetime import timedelta

import pytest
from pendulum import DateTime

from gtdcore.clarify import (
    ActionType,
    ProcessingDecision,
    ResultType,
    commit,
    validate_decision,
)
from gtdcore.exceptions import InvalidDecisionError, InvariantViolationError
from gtdcore.model import EnergyLevel, Idea, IdeaKind, IdeaStatus


@pytest.fixture
def inbox_idea(make_idea: Callable[..., Idea]) -> Idea:
    return make_idea(id="i-1", content="Call dentist")


def _actionable(action: ActionType, **extra: object) -> ProcessingDecision:
    return ProcessingDecision(
        item_id="i-1",
        is_actionable=True,
        action_type=action,
        **extra,  # pyright: ignore[reportArgumentType]
    )


def _not_actionable(result: ResultType) -> ProcessingDecision:
    return ProcessingDecision(item_id="i-1", is_actionable=False, result_type=result)


class TestValidateDecision:
    def test_actionable_needs_action_type(self) -> None:
        decision = ProcessingDecision(item_id="i-1", is_actionable=True)

        with pytest.raises(InvalidDecisionError) as exc_info:
            validate_decision(decision)

        assert exc_info.value.field == "action_type"
        assert exc_info.value.item_id == "i-1"

    def test_non_actionable_needs_result_type(self) -> None:
        decision = ProcessingDecision(item_id="i-1", is_actionable=False)

        with pytest.raises(InvalidDecisionError) as exc_info:
            validate_decision(decision)

        assert exc_info.value.field == "result_type"

    def test_non_actionable_cannot_carry_action_type(self) -> None:
        decision = ProcessingDecision(
            item_id="i-1",
            is_actionable=False,
            result_type=ResultType.TRASH,
            action_type=ActionType.DEFER,
        )

        with pytest.raises(InvalidDecisionError, match="cannot carry"):
            validate_decision(decision)

    def test_actionable_cannot_carry_result_type(self) -> None:
        decision = _actionable(ActionType.DEFER, result_type=ResultType.REFERENCE)

        with pytest.raises(InvalidDecisionError, match="cannot carry") as exc_info:
            validate_decision(decision)

        assert exc_info.value.field == "result_type"

    def test_commit_rejects_actionable_with_result_type(
        self, inbox_idea: Idea, now: DateTime
    ) -> None:
        decision = _actionable(ActionType.SCHEDULE, result_type=ResultType.TRASH)

        with pytest.raises(InvalidDecisionError):
            commit(inbox_idea, decision, now=now)

    def test_rejects_non_positive_minutes(self) -> None:
        with pytest.raises(InvalidDecisionError) as exc_info:
            validate_decision(_actionable(ActionType.DEFER, estimated_minutes=0))

        assert exc_info.value.field == "estimated_minutes"


class TestCommitActionable:
    def test_scenario_schedule_call(self, inbox_idea: Idea, now: DateTime) -> None:
        decision = _actionable(
            ActionType.SCHEDULE,
            estimated_minutes=15,
            energy_required=EnergyLevel.MEDIUM,
            context_id="calls",
        )

        result = commit(inbox_idea, decision, now=now)

        idea = result.idea
        assert idea.kind is IdeaKind.ACTION
        assert idea.is_actionable is True
        assert idea.is_next_action is True
        assert idea.context_id == "calls"
        assert idea.estimated_minutes == 15
        assert idea.energy_required is EnergyLevel.MEDIUM
        assert result.completion is None

    def test_delegate_waits_for_someone(self, inbox_idea: Idea, now: DateTime) -> None:
        result = commit(inbox_idea, _actionable(ActionType.DELEGATE), now=now)

        assert result.idea.kind is IdeaKind.WAITING_FOR
        assert result.idea.status is IdeaStatus.DELEGATED
        assert result.idea.is_next_action is False

    def test_do_now_completes_with_side_effect(
        self, inbox_idea: Idea, now: DateTime
    ) -> None:
        decision = _actionable(
            ActionType.DO_NOW,
            estimated_minutes=2,
            notes="Completed in 2 minutes using the two-minute rule",
        )

        result = commit(inbox_idea, decision, now=now)

        assert result.idea.status is IdeaStatus.COMPLETED
        assert result.idea.completed_date == now
        assert result.idea.actual_minutes == 2
        assert result.idea.is_next_action is False
        assert result.completion is not None
        assert result.completion.idea_id == "i-1"
        assert result.completion.completed_at == now
        assert result.completion.minutes_spent == 2

    def test_rejects_second_next_action_for_project(
        self, inbox_idea: Idea, make_action: Callable[..., Idea], now: DateTime
    ) -> None:
        holder = make_action(project_id="p-1")
        decision = _actionable(ActionType.DEFER, project_id="p-1")

        with pytest.raises(InvariantViolationError) as exc_info:
            commit(inbox_idea, decision, ideas=[holder, inbox_idea], now=now)

        assert exc_info.value.project_id == "p-1"

    def test_allows_next_action_when_holder_finished(
        self, inbox_idea: Idea, make_action: Callable[..., Idea], now: DateTime
    ) -> None:
        holder = make_action(project_id="p-1", status=IdeaStatus.COMPLETED)
        decision = _actionable(ActionType.DEFER, project_id="p-1")

        result = commit(inbox_idea, decision, ideas=[holder], now=now)

        assert result.idea.project_id == "p-1"
        assert result.idea.is_next_action


class TestCommitNonActionable:
    def test_trash_cancels_and_keeps_kind(self, inbox_idea: Idea, now: DateTime) -> None:
        result = commit(inbox_idea, _not_actionable(ResultType.TRASH), now=now)

        assert result.idea.status is IdeaStatus.CANCELLED
        assert result.idea.kind is IdeaKind.INBOX
        assert result.idea.is_actionable is False

    @pytest.mark.parametrize(
        ("outcome", "kind"),
        [
            (ResultType.REFERENCE, IdeaKind.REFERENCE),
            (ResultType.SOMEDAY_MAYBE, IdeaKind.SOMEDAY_MAYBE),
        ],
    )
    def test_filing_changes_kind(
        self, outcome: ResultType, kind: IdeaKind, inbox_idea: Idea, now: DateTime
    ) -> None:
        result = commit(inbox_idea, _not_actionable(outcome), now=now)

        assert result.idea.kind is kind
        assert result.idea.status is IdeaStatus.ACTIVE

    def test_reprocessing_next_action_clears_flag(
        self, make_action: Callable[..., Idea], now: DateTime
    ) -> None:
        action = make_action(id="i-1")

        result = commit(action, _not_actionable(ResultType.SOMEDAY_MAYBE), now=now)

        assert result.idea.is_next_action is False
        assert result.idea.is_actionable is False


class TestCommitGuards:
    def test_rejects_decision_for_other_idea(
        self, inbox_idea: Idea, now: DateTime
    ) -> None:
        decision = replace(_actionable(ActionType.DEFER), item_id="other")

        with pytest.raises(InvalidDecisionError) as exc_info:
            commit(inbox_idea, decision, now=now)

        assert exc_info.value.field == "item_id"

    def test_invalid_decision_leaves_idea_untouched(
        self, inbox_idea: Idea, now: DateTime
    ) -> None:
        before = replace(inbox_idea)

        with pytest.raises(InvalidDecisionError):
            commit(inbox_idea, ProcessingDecision("i-1", is_actionable=True), now=now)

        assert inbox_idea == before

    def test_commit_twice_is_idempotent(self, inbox_idea: Idea, now: DateTime) -> None:
        decision = _actionable(ActionType.DO_NOW, estimated_minutes=1)

        first = commit(inbox_idea, decision, now=now).idea
        second = commit(first, decision, now=now + timedelta(minutes=5)).idea

        assert replace(second, updated_at=first.updated_at) == first

    @pytest.mark.parametrize(
        "decision",
        [
            _actionable(ActionType.SCHEDULE, context_id="calls", estimated_minutes=15),
            _actionable(ActionType.DEFER, energy_required=EnergyLevel.LOW),
            _actionable(ActionType.DELEGATE, notes="Asked Sam"),
            _actionable(ActionType.DO_NOW, estimated_minutes=2),
            _not_actionable(ResultType.REFERENCE),
            _not_actionable(ResultType.SOMEDAY_MAYBE),
            _not_actionable(ResultType.TRASH),
        ],
        ids=["schedule", "defer", "delegate", "do-now", "reference", "someday", "trash"],
    )
    def test_same_decision_on_same_idea_differs_only_in_timestamps(
        self, decision: ProcessingDecision, inbox_idea: Idea, now: DateTime
    ) -> None:
        later = now + timedelta(hours=3)

        first = commit(inbox_idea, decision, now=now).idea
        second = commit(inbox_idea, decision, now=later).idea

        # Finishing on the spot records when it happened.
        masked = {"updated_at": first.updated_at, "completed_date": first.completed_date}
        assert second.updated_at == later
        assert replace(second, **masked) == first
