"""Workflow service - idea submission and stage evaluations.

Every change to an idea's stage or status goes through submit_evaluation,
which evaluates a command and hands the decision to apply_transition.
The idea update and the history insert are flushed on the caller's
session and committed together.
"""

import logging

from sqlalchemy.ext.asyncio import AsyncSession

from ipms.engine.commands import StageCommand, SubmitL2Evaluation
from ipms.engine.policy import DEFAULT_POLICY, PolicyTable
from ipms.engine.transitions import apply_transition
from ipms.models import Idea
from ipms.schemas.idea import SubmitIdeaRequest
from ipms.schemas.workflow import (
    FROZEN_STATUSES,
    Decision,
    Stage,
    StageEvaluation,
    StageHistoryRecord,
    StageStatus,
    normalize_status,
)
from ipms.storage import repositories

logger = logging.getLogger(__name__)


class WorkflowError(Exception):
    """Base class for refused workflow operations."""


class IdeaNotFound(WorkflowError):
    def __init__(self, idea_id: str):
        self.idea_id = idea_id
        super().__init__(f"Idea {idea_id} not found")


class DepartmentNotFound(WorkflowError):
    def __init__(self, department_id: str):
        self.department_id = department_id
        super().__init__(f"Department {department_id} not found")


class StageMismatch(WorkflowError):
    def __init__(self, idea_id: str, current: str, expected: Stage):
        self.current = current
        self.expected = expected
        super().__init__(
            f"Idea {idea_id} is at {current}; {expected.value} evaluation not allowed"
        )


class IdeaFrozen(WorkflowError):
    def __init__(self, idea_id: str, status: str):
        self.status = status
        super().__init__(f"Idea {idea_id} is {status}; no further evaluation accepted")


async def submit_idea(db: AsyncSession, data: SubmitIdeaRequest) -> Idea:
    """Create an idea in L1/pending and record its entry in the history."""
    if data.department_id is not None:
        if await repositories.get_department(db, data.department_id) is None:
            raise DepartmentNotFound(data.department_id)

    idea = await repositories.create_idea(db, **data.model_dump())
    record = StageHistoryRecord(
        from_stage=None,
        to_stage=Stage.L1,
        from_status=None,
        to_status=StageStatus.PENDING,
        changed_by=data.submitter_name,
        change_reason="Idea submitted",
        created_at=idea.submission_date,
    )
    await repositories.create_history_entry(db, idea.idea_id, record)
    logger.info("Idea %s submitted by %s", idea.idea_id, data.submitter_name)
    return idea


def check_can_evaluate(idea: Idea, stage: Stage) -> None:
    """Refuse evaluations for the wrong stage or for frozen ideas."""
    if normalize_status(idea.stage_status) in FROZEN_STATUSES:
        raise IdeaFrozen(idea.idea_id, idea.stage_status)
    if idea.evaluation_stage != stage.value:
        raise StageMismatch(idea.idea_id, idea.evaluation_stage, stage)


async def submit_evaluation(
    db: AsyncSession,
    idea_id: str,
    command: StageCommand,
    policy: PolicyTable = DEFAULT_POLICY,
) -> tuple[Idea, StageEvaluation, StageHistoryRecord]:
    """
    Evaluate a stage submission and apply its transition.
    Returns the updated idea, the evaluation and the history record.
    """
    idea = await repositories.get_idea(db, idea_id)
    if idea is None:
        raise IdeaNotFound(idea_id)
    try:
        check_can_evaluate(idea, command.stage)
    except WorkflowError as exc:
        logger.warning("Refused %s: %s", type(command).__name__, exc)
        raise

    evaluation = command.evaluate(policy)
    for column, value in command.field_updates(evaluation).items():
        setattr(idea, column, value)

    idea, record = apply_transition(
        idea,
        evaluation.decision,
        command.actor,
        command.reason_template(evaluation.decision),
        score=evaluation.score,
        **command.reason_values(),
    )
    await repositories.touch_idea(db, idea)
    await repositories.create_history_entry(db, idea.idea_id, record)

    if isinstance(command, SubmitL2Evaluation):
        await repositories.create_review(
            db,
            idea_id=idea.idea_id,
            stage=command.stage.value,
            reviewer_name=command.reviewer_name,
            ratings=command.ratings(),
            overall_score=evaluation.score,
            recommendation="approve" if evaluation.decision == Decision.ADVANCE else "reject",
            comments=command.comments,
        )

    return idea, evaluation, record
