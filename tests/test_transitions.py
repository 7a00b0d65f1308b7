"""Unit tests for the stage transition resolver."""

from datetime import datetime, timezone
from types import SimpleNamespace

from ipms.engine.transitions import apply_transition, next_stage, render_reason, transition
from ipms.schemas.workflow import Decision, Stage, StageStatus


def _idea(stage="L2", status="approved"):
    return SimpleNamespace(idea_id="i-1", evaluation_stage=stage, stage_status=status)


def test_next_stage_order():
    assert next_stage(Stage.L1) == Stage.L2
    assert next_stage(Stage.L4) == Stage.L5
    assert next_stage(Stage.L5) == Stage.L5


def test_advance_moves_to_next_stage():
    result = transition(_idea("L2"), Decision.ADVANCE, "Sam Ortiz", "passed")
    assert result.new_stage == Stage.L3
    assert result.new_status == StageStatus.APPROVED
    assert result.history.from_stage == Stage.L2
    assert result.history.to_stage == Stage.L3
    assert result.history.from_status == StageStatus.APPROVED
    assert result.history.changed_by == "Sam Ortiz"


def test_reject_keeps_stage():
    result = transition(_idea("L3"), Decision.REJECT, "Sam Ortiz")
    assert result.new_stage == Stage.L3
    assert result.new_status == StageStatus.REJECTED
    assert result.history.to_stage == Stage.L3


def test_hold_keeps_stage():
    result = transition(_idea("L4"), Decision.HOLD, "Sam Ortiz")
    assert result.new_stage == Stage.L4
    assert result.new_status == StageStatus.ON_HOLD


def test_advance_at_l5_stays_at_l5():
    """There is no stage after L5; the transition still records history."""
    result = transition(_idea("L5"), Decision.ADVANCE, "Sam Ortiz")
    assert result.new_stage == Stage.L5
    assert result.history.from_stage == Stage.L5
    assert result.history.to_stage == Stage.L5


def test_transition_is_pure():
    idea = _idea("L2", "approved")
    transition(idea, Decision.ADVANCE, "Sam Ortiz")
    assert idea.evaluation_stage == "L2"
    assert idea.stage_status == "approved"


def test_legacy_status_spelling_is_normalized():
    result = transition(_idea("L3", "in-review"), Decision.REJECT, "Sam Ortiz")
    assert result.history.from_status == StageStatus.IN_PROGRESS


def test_history_uses_given_timestamp():
    now = datetime(2026, 5, 1, 12, 0, tzinfo=timezone.utc)
    result = transition(_idea(), Decision.ADVANCE, "Sam Ortiz", now=now)
    assert result.history.created_at == now


def test_render_reason_formats_score():
    assert render_reason("passed with score {score}", score=3.5) == "passed with score 3.50"
    assert render_reason("ROI {roi}%", roi="25.0", score=None) == "ROI 25.0%"


def test_apply_transition_updates_idea_and_completion_time():
    idea = _idea("L2", "approved")
    idea, record = apply_transition(
        idea, Decision.ADVANCE, "Sam Ortiz", "L2 screening passed with score {score}", score=3.25
    )
    assert idea.evaluation_stage == "L3"
    assert idea.stage_status == "approved"
    assert idea.l2_completed_at == record.created_at
    assert record.change_reason == "L2 screening passed with score 3.25"


def test_apply_transition_reject_sets_no_completion_time():
    idea = _idea("L2", "approved")
    idea, record = apply_transition(idea, Decision.REJECT, "Sam Ortiz", "failed with {score}", score=2.0)
    assert idea.evaluation_stage == "L2"
    assert idea.stage_status == "rejected"
    assert not hasattr(idea, "l2_completed_at")
    assert record.to_status == StageStatus.REJECTED


def test_repeated_transitions_each_produce_history():
    """History is append-only: one record per call, never merged."""
    idea = _idea("L1", "pending")
    history = []
    for _ in range(2):
        idea, record = apply_transition(idea, Decision.ADVANCE, "Sam Ortiz", "advanced")
        history.append(record)
    assert len(history) == 2
    assert [r.to_stage for r in history] == [Stage.L2, Stage.L3]


def test_apply_transition_at_l5_does_not_crash():
    idea = _idea("L5", "approved")
    idea, record = apply_transition(idea, Decision.ADVANCE, "Sam Ortiz", "already implemented")
    assert idea.evaluation_stage == "L5"
    assert not hasattr(idea, "l5_completed_at")
    assert record.to_stage == Stage.L5
