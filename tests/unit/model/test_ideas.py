from collections.abc import Callable
from datetime import timedelta

import pytest
from pendulum import DateTime

from gtdcore.exceptions import InvalidCaptureError, InvariantViolationError
from gtdcore.model import (
    CaptureHints,
    EnergyLevel,
    Idea,
    IdeaKind,
    IdeaStatus,
    capture_idea,
    check_idea_invariants,
    complete_idea,
    new_id,
    normalize_context_id,
    update_idea,
)


class TestCaptureIdea:
    def test_creates_active_inbox_idea(self, now: DateTime) -> None:
        idea = capture_idea("  Call dentist  ", now=now, id_factory=lambda: "i-1")

        assert idea.id == "i-1"
        assert idea.content == "Call dentist"
        assert idea.kind is IdeaKind.INBOX
        assert idea.status is IdeaStatus.ACTIVE
        assert idea.is_actionable is False
        assert idea.is_next_action is False
        assert idea.energy_required is EnergyLevel.MEDIUM
        assert idea.created_at == now
        assert idea.updated_at == now

    def test_generates_unique_ids(self, now: DateTime) -> None:
        first = capture_idea("one", now=now)
        second = capture_idea("two", now=now)

        assert first.id != second.id

    @pytest.mark.parametrize("content", ["", "   ", "\n\t"])
    def test_rejects_blank_content(self, content: str, now: DateTime) -> None:
        with pytest.raises(InvalidCaptureError, match="empty"):
            capture_idea(content, now=now)

    def test_applies_hints(self, now: DateTime) -> None:
        hints = CaptureHints(
            energy=EnergyLevel.LOW,
            context="@Calls",
            urgent=True,
            project_id="p-1",
            estimated_minutes=10,
        )

        idea = capture_idea("Ring the bank", hints, now=now)

        assert idea.energy_required is EnergyLevel.LOW
        assert idea.context_id == "calls"
        assert idea.is_urgent is True
        assert idea.project_id == "p-1"
        assert idea.estimated_minutes == 10

    def test_drops_non_positive_estimate_hint(self, now: DateTime) -> None:
        idea = capture_idea("x", CaptureHints(estimated_minutes=0), now=now)

        assert idea.estimated_minutes is None

    def test_uses_current_time_by_default(self, freeze_time: Callable[..., DateTime]) -> None:
        fixed = freeze_time(2025, 1, 2, 3, 4, 5)

        idea = capture_idea("later")

        assert idea.created_at == fixed


@pytest.mark.parametrize(
    ("raw", "expected"),
    [("@Calls", "calls"), ("home", "home"), ("  @Office ", "office")],
)
def test_normalize_context_id(raw: str, expected: str) -> None:
    assert normalize_context_id(raw) == expected


class TestCheckIdeaInvariants:
    def test_next_action_requires_actionable(self, make_idea: Callable[..., Idea]) -> None:
        idea = make_idea(kind=IdeaKind.ACTION, is_next_action=True)

        with pytest.raises(InvariantViolationError) as exc_info:
            check_idea_invariants(idea)

        assert exc_info.value.idea_id == idea.id

    def test_actionable_cannot_stay_in_inbox(self, make_idea: Callable[..., Idea]) -> None:
        idea = make_idea(is_actionable=True)

        with pytest.raises(InvariantViolationError, match="inbox"):
            check_idea_invariants(idea)

    def test_estimate_must_be_positive(self, make_idea: Callable[..., Idea]) -> None:
        with pytest.raises(InvariantViolationError, match="estimate"):
            check_idea_invariants(make_idea(estimated_minutes=-5))

    def test_accepts_valid_next_action(self, make_action: Callable[..., Idea]) -> None:
        check_idea_invariants(make_action(estimated_minutes=5))


class TestUpdateIdea:
    def test_stamps_updated_at(self, make_idea: Callable[..., Idea], now: DateTime) -> None:
        later = now + timedelta(hours=1)

        updated = update_idea(make_idea(), now=later, content="New text")

        assert updated.content == "New text"
        assert updated.updated_at == later

    @pytest.mark.parametrize("field", ["id", "created_at"])
    def test_rejects_immutable_fields(
        self, field: str, make_idea: Callable[..., Idea], now: DateTime
    ) -> None:
        with pytest.raises(InvariantViolationError, match=field):
            update_idea(make_idea(), now=now, **{field: "x"})

    def test_rejects_invariant_breaking_edit(
        self, make_idea: Callable[..., Idea], now: DateTime
    ) -> None:
        with pytest.raises(InvariantViolationError):
            update_idea(make_idea(), now=now, is_next_action=True)


class TestCompleteIdea:
    def test_marks_completed_and_releases_slot(
        self, make_action: Callable[..., Idea], now: DateTime
    ) -> None:
        done = complete_idea(make_action(), now=now, actual_minutes=12)

        assert done.status is IdeaStatus.COMPLETED
        assert done.is_next_action is False
        assert done.completed_date == now
        assert done.actual_minutes == 12

    def test_keeps_original_completion_date(
        self, make_action: Callable[..., Idea], now: DateTime
    ) -> None:
        first = complete_idea(make_action(), now=now)
        second = complete_idea(first, now=now + timedelta(days=2))

        assert second.completed_date == now


class TestIdeaRecord:
    def test_is_overdue(self, make_action: Callable[..., Idea], now: DateTime) -> None:
        assert make_action(due_date=now - timedelta(seconds=1)).is_overdue(now)
        assert not make_action(due_date=now).is_overdue(now)
        assert not make_action().is_overdue(now)

    def test_is_inbox(self, make_idea: Callable[..., Idea]) -> None:
        assert make_idea().is_inbox
        assert not make_idea(status=IdeaStatus.CANCELLED).is_inbox
        assert not make_idea(kind=IdeaKind.REFERENCE).is_inbox


def test_new_id_is_unique_hex() -> None:
    first, second = new_id(), new_id()

    assert first != second
    assert len(first) == 32
    int(first, 16)
