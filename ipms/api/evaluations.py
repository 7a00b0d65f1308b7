"""Stage evaluation endpoints."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ipms.config import settings
from ipms.database import get_db
from ipms.engine.commands import (
    StageCommand,
    SubmitL1Triage,
    SubmitL2Evaluation,
    SubmitL3BusinessCase,
    SubmitL4ExecutiveReview,
)
from ipms.engine.financials import compute, is_long_payback, recommendation_band
from ipms.engine.policy import HoldNotAllowed, PolicyTable, build_policy
from ipms.engine.scoring import score_label
from ipms.schemas.evaluation import EvaluationResponse, FinancialDetails
from ipms.schemas.workflow import Stage, StageStatus
from ipms.services.workflow import (
    IdeaFrozen,
    IdeaNotFound,
    StageMismatch,
    submit_evaluation,
)

logger = logging.getLogger(__name__)

router = APIRouter()


def get_policy() -> PolicyTable:
    return build_policy(settings.screening_pass_score, settings.business_case_min_roi)


async def _evaluate(
    db: AsyncSession, idea_id: str, command: StageCommand, policy: PolicyTable
) -> EvaluationResponse:
    """Run a command through the workflow and map failures to HTTP errors."""
    try:
        idea, evaluation, record = await submit_evaluation(db, idea_id, command, policy)
    except IdeaNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except (StageMismatch, IdeaFrozen) as exc:
        raise HTTPException(status_code=status.HTTP_409_CONFLICT, detail=str(exc))
    except HoldNotAllowed as exc:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc))
    except SQLAlchemyError:
        logger.exception("Failed to submit %s evaluation for idea %s", command.stage.value, idea_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to submit evaluation",
        )

    financials = None
    label = None
    if isinstance(command, SubmitL3BusinessCase):
        summary = compute(command.estimated_cost, command.expected_savings)
        financials = FinancialDetails(
            net_savings=summary.net_savings,
            roi_percent=round(summary.roi_percent, 2),
            payback_months=summary.payback_months,
            recommendation=recommendation_band(summary.roi_percent),
            long_payback=is_long_payback(summary.payback_months),
        )
    elif evaluation.score is not None:
        label = score_label(evaluation.score)

    return EvaluationResponse(
        idea_id=idea.idea_id,
        stage=evaluation.stage,
        score=evaluation.score,
        score_label=label,
        decision=evaluation.decision,
        new_stage=Stage(idea.evaluation_stage),
        new_status=StageStatus(idea.stage_status),
        financials=financials,
        history=record,
    )


@router.post("/ideas/{idea_id}/triage", response_model=EvaluationResponse)
async def triage(
    idea_id: UUID,
    body: SubmitL1Triage,
    db: Annotated[AsyncSession, Depends(get_db)],
    policy: Annotated[PolicyTable, Depends(get_policy)],
):
    """L1 intake triage: explicit accept or decline of a new submission."""
    return await _evaluate(db, str(idea_id), body, policy)


@router.post("/ideas/{idea_id}/screening", response_model=EvaluationResponse)
async def screening(
    idea_id: UUID,
    body: SubmitL2Evaluation,
    db: Annotated[AsyncSession, Depends(get_db)],
    policy: Annotated[PolicyTable, Depends(get_policy)],
):
    """
    L2 screening. The mean of novelty, feasibility, alignment and impact
    must reach the pass score to advance; otherwise the idea is rejected.
    """
    return await _evaluate(db, str(idea_id), body, policy)


@router.post("/ideas/{idea_id}/business-case", response_model=EvaluationResponse)
async def business_case(
    idea_id: UUID,
    body: SubmitL3BusinessCase,
    db: Annotated[AsyncSession, Depends(get_db)],
    policy: Annotated[PolicyTable, Depends(get_policy)],
):
    """L3 business case. Advances when ROI reaches the minimum, rejects otherwise."""
    return await _evaluate(db, str(idea_id), body, policy)


@router.post("/ideas/{idea_id}/executive-review", response_model=EvaluationResponse)
async def executive_review(
    idea_id: UUID,
    body: SubmitL4ExecutiveReview,
    db: Annotated[AsyncSession, Depends(get_db)],
    policy: Annotated[PolicyTable, Depends(get_policy)],
):
    """L4 executive review. The approver's decision is applied as given."""
    return await _evaluate(db, str(idea_id), body, policy)
