"""Stage transition resolver - the single path for workflow mutation."""

import logging
from datetime import datetime, timezone
from typing import Any

from ipms.schemas.workflow import (
    STAGE_ORDER,
    Decision,
    Stage,
    StageHistoryRecord,
    StageStatus,
    TransitionResult,
    normalize_status,
)

logger = logging.getLogger(__name__)


def next_stage(stage: Stage) -> Stage:
    """Following stage in pipeline order; L5 is the last and maps to itself."""
    idx = STAGE_ORDER.index(stage)
    return STAGE_ORDER[min(idx + 1, len(STAGE_ORDER) - 1)]


def _current(idea: Any) -> tuple[Stage, StageStatus]:
    return Stage(idea.evaluation_stage), normalize_status(idea.stage_status)


def transition(
    idea: Any,
    decision: Decision,
    actor: str,
    reason: str | None = None,
    now: datetime | None = None,
) -> TransitionResult:
    """
    Resolve the stage/status an idea moves to for a decision.

    idea is anything with evaluation_stage and stage_status attributes.
    Pure: the idea is not modified. A history record is produced for every
    decision, including an advance at L5 where the stage cannot move.
    """
    stage, status = _current(idea)

    if decision == Decision.ADVANCE:
        new_stage, new_status = next_stage(stage), StageStatus.APPROVED
    elif decision == Decision.REJECT:
        new_stage, new_status = stage, StageStatus.REJECTED
    else:
        new_stage, new_status = stage, StageStatus.ON_HOLD

    history = StageHistoryRecord(
        from_stage=stage,
        to_stage=new_stage,
        from_status=status,
        to_status=new_status,
        changed_by=actor,
        change_reason=reason,
        created_at=now or datetime.now(timezone.utc),
    )
    return TransitionResult(new_stage=new_stage, new_status=new_status, history=history)


def render_reason(template: str, **values: Any) -> str:
    """Fill a reason template such as 'Screening passed with score {score}'."""
    score = values.get("score")
    if isinstance(score, float):
        values["score"] = f"{score:.2f}"
    return template.format(**values)


def apply_transition(
    idea: Any,
    decision: Decision,
    actor: str,
    reason_template: str,
    score: float | None = None,
    **reason_values: Any,
) -> tuple[Any, StageHistoryRecord]:
    """
    Apply a decision to an idea in place and return (idea, history).

    Writes evaluation_stage, stage_status and, on advance, the
    completion timestamp of the stage being left (l1_completed_at ..).
    """
    stage, _ = _current(idea)
    reason = render_reason(
        reason_template,
        score=score,
        stage=stage.value,
        decision=decision.value,
        actor=actor,
        **reason_values,
    )
    result = transition(idea, decision, actor, reason)

    idea.evaluation_stage = result.new_stage.value
    idea.stage_status = result.new_status.value
    if decision == Decision.ADVANCE and result.new_stage != stage:
        setattr(idea, f"{stage.value.lower()}_completed_at", result.history.created_at)

    logger.info(
        "Idea %s: %s/%s -> %s/%s by %s",
        getattr(idea, "idea_id", None),
        result.history.from_stage.value,
        result.history.from_status.value,
        result.new_stage.value,
        result.new_status.value,
        actor,
    )
    return idea, result.history
