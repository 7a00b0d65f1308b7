"""Repository functions for departments, ideas, reviews, history and comments."""

from datetime import datetime, timezone
from uuid import uuid4

from sqlalchemy import func, or_, select
from sqlalchemy.ext.asyncio import AsyncSession

from ipms.models import Department, Idea, IdeaComment, IdeaReview, IdeaStageHistory
from ipms.schemas.idea import IdeaFilters
from ipms.schemas.workflow import StageHistoryRecord


def _iso(dt: datetime) -> str:
    # Microseconds keep history rows written in the same second ordered.
    return dt.astimezone(timezone.utc).strftime("%Y-%m-%dT%H:%M:%S.%fZ")


def _now_iso() -> str:
    return _iso(datetime.now(timezone.utc))


async def get_department(db: AsyncSession, department_id: str) -> Department | None:
    result = await db.execute(
        select(Department).where(Department.department_id == department_id)
    )
    return result.scalar_one_or_none()


async def get_department_by_code(db: AsyncSession, code: str) -> Department | None:
    result = await db.execute(select(Department).where(Department.code == code))
    return result.scalar_one_or_none()


async def list_departments(db: AsyncSession, active_only: bool = True) -> list[Department]:
    """Departments ordered by name."""
    query = select(Department).order_by(Department.name)
    if active_only:
        query = query.where(Department.is_active.is_(True))
    result = await db.execute(query)
    return list(result.scalars().all())


async def create_department(db: AsyncSession, **fields) -> Department:
    department = Department(
        department_id=str(uuid4()),
        is_active=True,
        created_at=_now_iso(),
        **fields,
    )
    db.add(department)
    await db.flush()
    return department


async def get_idea(db: AsyncSession, idea_id: str) -> Idea | None:
    result = await db.execute(select(Idea).where(Idea.idea_id == idea_id))
    return result.scalar_one_or_none()


async def list_ideas(db: AsyncSession, filters: IdeaFilters) -> list[Idea]:
    """Ideas matching the board filters, newest submission first."""
    query = select(Idea).order_by(Idea.submission_date.desc())
    if filters.stage is not None:
        query = query.where(Idea.evaluation_stage == filters.stage.value)
    if filters.status is not None:
        query = query.where(Idea.stage_status == filters.status.value)
    if filters.department_id is not None:
        query = query.where(Idea.department_id == filters.department_id)
    if filters.category is not None:
        query = query.where(Idea.category == filters.category)
    if filters.search:
        pattern = f"%{filters.search}%"
        query = query.where(
            or_(Idea.title.ilike(pattern), Idea.description.ilike(pattern))
        )
    result = await db.execute(query)
    return list(result.scalars().all())


async def count_ideas_by_stage_status(db: AsyncSession) -> list[tuple[str, str, int]]:
    """(stage, status, count) rows across all ideas."""
    result = await db.execute(
        select(Idea.evaluation_stage, Idea.stage_status, func.count())
        .group_by(Idea.evaluation_stage, Idea.stage_status)
    )
    return [(stage, status, count) for stage, status, count in result.all()]


async def create_idea(db: AsyncSession, **fields) -> Idea:
    """Insert a new idea at L1/pending."""
    now = datetime.now(timezone.utc)
    idea = Idea(
        idea_id=str(uuid4()),
        evaluation_stage="L1",
        stage_status="pending",
        submission_date=now,
        created_at=_iso(now),
        updated_at=_iso(now),
        **fields,
    )
    db.add(idea)
    await db.flush()
    return idea


async def touch_idea(db: AsyncSession, idea: Idea) -> Idea:
    """Stamp updated_at and flush pending attribute changes."""
    idea.updated_at = _now_iso()
    await db.flush()
    return idea


async def create_history_entry(
    db: AsyncSession, idea_id: str, record: StageHistoryRecord
) -> IdeaStageHistory:
    """Append a stage history row. Rows are never updated or deleted."""
    entry = IdeaStageHistory(
        history_id=str(uuid4()),
        idea_id=idea_id,
        from_stage=record.from_stage.value if record.from_stage else None,
        to_stage=record.to_stage.value,
        from_status=record.from_status.value if record.from_status else None,
        to_status=record.to_status.value,
        changed_by=record.changed_by,
        change_reason=record.change_reason,
        created_at=_iso(record.created_at),
    )
    db.add(entry)
    await db.flush()
    return entry


async def list_history(db: AsyncSession, idea_id: str) -> list[IdeaStageHistory]:
    result = await db.execute(
        select(IdeaStageHistory)
        .where(IdeaStageHistory.idea_id == idea_id)
        .order_by(IdeaStageHistory.created_at)
    )
    return list(result.scalars().all())


async def create_review(
    db: AsyncSession,
    idea_id: str,
    stage: str,
    reviewer_name: str,
    ratings: dict,
    overall_score: float,
    recommendation: str,
    comments: str | None = None,
) -> IdeaReview:
    review = IdeaReview(
        review_id=str(uuid4()),
        idea_id=idea_id,
        stage=stage,
        reviewer_name=reviewer_name,
        ratings=ratings,
        overall_score=overall_score,
        recommendation=recommendation,
        comments=comments,
        created_at=_now_iso(),
    )
    db.add(review)
    await db.flush()
    return review


async def list_reviews(db: AsyncSession, idea_id: str) -> list[IdeaReview]:
    result = await db.execute(
        select(IdeaReview)
        .where(IdeaReview.idea_id == idea_id)
        .order_by(IdeaReview.created_at.desc())
    )
    return list(result.scalars().all())


async def create_comment(db: AsyncSession, idea_id: str, **fields) -> IdeaComment:
    comment = IdeaComment(
        comment_id=str(uuid4()),
        idea_id=idea_id,
        created_at=_now_iso(),
        **fields,
    )
    db.add(comment)
    await db.flush()
    return comment


async def list_comments(db: AsyncSession, idea_id: str) -> list[IdeaComment]:
    result = await db.execute(
        select(IdeaComment)
        .where(IdeaComment.idea_id == idea_id)
        .order_by(IdeaComment.created_at)
    )
    return list(result.scalars().all())
