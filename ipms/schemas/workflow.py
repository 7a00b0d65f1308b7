"""Workflow vocabulary and engine result schemas."""

from datetime import datetime
from enum import Enum

from pydantic import BaseModel


class Stage(str, Enum):
    """Evaluation stages, in pipeline order."""

    L1 = "L1"
    L2 = "L2"
    L3 = "L3"
    L4 = "L4"
    L5 = "L5"


STAGE_ORDER: list[Stage] = [Stage.L1, Stage.L2, Stage.L3, Stage.L4, Stage.L5]

STAGE_LABELS: dict[Stage, str] = {
    Stage.L1: "Submission",
    Stage.L2: "Screening",
    Stage.L3: "Business Case",
    Stage.L4: "Executive Review",
    Stage.L5: "Implementation",
}


class StageStatus(str, Enum):
    """Status of an idea within its current stage."""

    PENDING = "pending"
    IN_PROGRESS = "in_progress"
    APPROVED = "approved"
    REJECTED = "rejected"
    ON_HOLD = "on_hold"


# Statuses that stop forward progress; no evaluation is accepted afterwards.
FROZEN_STATUSES = {StageStatus.REJECTED, StageStatus.ON_HOLD}

_STATUS_ALIASES = {
    "on-hold": StageStatus.ON_HOLD,
    "in-progress": StageStatus.IN_PROGRESS,
    "in-review": StageStatus.IN_PROGRESS,
    "in_review": StageStatus.IN_PROGRESS,
}


def normalize_status(value: str) -> StageStatus:
    """Map legacy hyphenated spellings onto the canonical status values."""
    key = value.strip().lower()
    if key in _STATUS_ALIASES:
        return _STATUS_ALIASES[key]
    return StageStatus(key)


class Decision(str, Enum):
    """Outcome of a stage evaluation."""

    ADVANCE = "advance"
    REJECT = "reject"
    HOLD = "hold"


_DECISION_ALIASES = {
    "approve": Decision.ADVANCE,
    "approved": Decision.ADVANCE,
    "rejected": Decision.REJECT,
    "on_hold": Decision.HOLD,
    "on-hold": Decision.HOLD,
}


def normalize_decision(value: str) -> Decision:
    """Accept the approve / reject / on-hold wording used by reviewers."""
    key = value.strip().lower()
    if key in _DECISION_ALIASES:
        return _DECISION_ALIASES[key]
    return Decision(key)


class StageEvaluation(BaseModel):
    """Score and decision produced for one stage."""

    stage: Stage
    score: float | None = None
    decision: Decision


class StageHistoryRecord(BaseModel):
    """Audit record describing one stage/status transition."""

    from_stage: Stage | None = None
    to_stage: Stage
    from_status: StageStatus | None = None
    to_status: StageStatus
    changed_by: str
    change_reason: str | None = None
    created_at: datetime


class TransitionResult(BaseModel):
    """New stage/status pair plus the history entry describing the move."""

    new_stage: Stage
    new_status: StageStatus
    history: StageHistoryRecord
