"""Idea endpoints - submission, board, history, reviews, comments."""

import logging
from typing import Annotated
from uuid import UUID

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession

from ipms.database import get_db
from ipms.models import Idea
from ipms.schemas.idea import (
    CommentOut,
    CreateCommentRequest,
    HistoryEntryOut,
    IdeaDetail,
    IdeaFilters,
    IdeaSummary,
    ReviewOut,
    StageStatistics,
    SubmitIdeaRequest,
)
from ipms.schemas.workflow import STAGE_ORDER, Stage, normalize_status
from ipms.services.workflow import DepartmentNotFound, submit_idea
from ipms.storage import repositories

logger = logging.getLogger(__name__)

router = APIRouter()


async def _get_idea_or_404(db: AsyncSession, idea_id: UUID) -> Idea:
    idea = await repositories.get_idea(db, str(idea_id))
    if not idea:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Idea not found")
    return idea


@router.post("/ideas", response_model=IdeaDetail, status_code=status.HTTP_201_CREATED)
async def create_idea(
    body: SubmitIdeaRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    """Submit a new idea. It enters L1 (Submission) with status pending."""
    try:
        return await submit_idea(db, body)
    except DepartmentNotFound as exc:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))
    except SQLAlchemyError:
        logger.exception("Failed to submit idea %r", body.title)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to submit idea",
        )


@router.get("/ideas", response_model=list[IdeaSummary])
async def list_ideas(
    db: Annotated[AsyncSession, Depends(get_db)],
    filters: Annotated[IdeaFilters, Depends()],
):
    """Ideas board with optional stage / status / department / category / text filters."""
    return await repositories.list_ideas(db, filters)


@router.get("/ideas/stats", response_model=list[StageStatistics])
async def stage_statistics(db: Annotated[AsyncSession, Depends(get_db)]):
    """Per-stage idea counts broken down by status, in pipeline order."""
    stats = {stage: StageStatistics(stage=stage) for stage in STAGE_ORDER}
    for stage, stage_status, count in await repositories.count_ideas_by_stage_status(db):
        entry = stats[Stage(stage)]
        field = normalize_status(stage_status).value
        setattr(entry, field, getattr(entry, field) + count)
        entry.total += count
    return list(stats.values())


@router.get("/ideas/{idea_id}", response_model=IdeaDetail)
async def get_idea(idea_id: UUID, db: Annotated[AsyncSession, Depends(get_db)]):
    """Full idea record with every stage block."""
    return await _get_idea_or_404(db, idea_id)


@router.get("/ideas/{idea_id}/history", response_model=list[HistoryEntryOut])
async def get_history(idea_id: UUID, db: Annotated[AsyncSession, Depends(get_db)]):
    """Stage history, oldest first."""
    await _get_idea_or_404(db, idea_id)
    return await repositories.list_history(db, str(idea_id))


@router.get("/ideas/{idea_id}/reviews", response_model=list[ReviewOut])
async def get_reviews(idea_id: UUID, db: Annotated[AsyncSession, Depends(get_db)]):
    await _get_idea_or_404(db, idea_id)
    return await repositories.list_reviews(db, str(idea_id))


@router.post(
    "/ideas/{idea_id}/comments",
    response_model=CommentOut,
    status_code=status.HTTP_201_CREATED,
)
async def add_comment(
    idea_id: UUID,
    body: CreateCommentRequest,
    db: Annotated[AsyncSession, Depends(get_db)],
):
    await _get_idea_or_404(db, idea_id)
    try:
        return await repositories.create_comment(db, str(idea_id), **body.model_dump())
    except SQLAlchemyError:
        logger.exception("Failed to add comment to idea %s", idea_id)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Failed to add comment",
        )


@router.get("/ideas/{idea_id}/comments", response_model=list[CommentOut])
async def get_comments(idea_id: UUID, db: Annotated[AsyncSession, Depends(get_db)]):
    await _get_idea_or_404(db, idea_id)
    return await repositories.list_comments(db, str(idea_id))
