"""Idea, review and comment models."""

from datetime import datetime

from sqlalchemy import Boolean, DateTime, Float, ForeignKey, Integer, String, Text
from sqlalchemy.dialects.postgresql import JSONB, UUID
from sqlalchemy.orm import Mapped, mapped_column

from ipms.database import Base


class Idea(Base):
    """Idea moving through the L1-L5 pipeline. Evaluations update the row in place."""

    __tablename__ = "ideas"

    idea_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    title: Mapped[str] = mapped_column(Text, nullable=False)
    category: Mapped[str] = mapped_column(String(32), nullable=False)
    priority: Mapped[str] = mapped_column(String(16), nullable=False)
    description: Mapped[str | None] = mapped_column(Text, nullable=True)
    problem_statement: Mapped[str | None] = mapped_column(Text, nullable=True)
    proposed_solution: Mapped[str | None] = mapped_column(Text, nullable=True)
    expected_benefits: Mapped[str | None] = mapped_column(Text, nullable=True)
    remarks: Mapped[str | None] = mapped_column(Text, nullable=True)

    department_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False), ForeignKey("departments.department_id"), nullable=True
    )
    submitter_name: Mapped[str] = mapped_column(Text, nullable=False)
    submitter_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    submitter_employee_id: Mapped[str | None] = mapped_column(Text, nullable=True)
    submission_date: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    evaluation_stage: Mapped[str] = mapped_column(
        String(2), nullable=False, default="L1", index=True
    )  # L1..L5
    stage_status: Mapped[str] = mapped_column(
        String(20), nullable=False, default="pending"
    )  # pending|in_progress|approved|rejected|on_hold

    # L1 triage
    l1_triaged_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    l1_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # L2 screening
    l2_novelty_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l2_feasibility_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l2_alignment_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l2_impact_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l2_overall_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l2_screened_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    l2_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # L3 business case
    l3_estimated_cost: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_expected_savings: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_roi_percentage: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_payback_period_months: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_net_savings: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_capex: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_opex: Mapped[float | None] = mapped_column(Float, nullable=True)
    l3_headcount_impact: Mapped[int | None] = mapped_column(Integer, nullable=True)
    l3_implementation_timeline: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_technical_feasibility: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_resource_requirements: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_risk_assessment: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_dependencies: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_feasibility_score: Mapped[int | None] = mapped_column(Integer, nullable=True)
    l3_assessed_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    l3_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    # L4 executive review
    l4_strategic_alignment: Mapped[float | None] = mapped_column(Float, nullable=True)
    l4_portfolio_fit: Mapped[float | None] = mapped_column(Float, nullable=True)
    l4_strategic_score: Mapped[float | None] = mapped_column(Float, nullable=True)
    l4_risk_level: Mapped[str | None] = mapped_column(String(16), nullable=True)
    l4_final_decision: Mapped[str | None] = mapped_column(String(16), nullable=True)
    l4_approved_budget: Mapped[float | None] = mapped_column(Float, nullable=True)
    l4_conditions: Mapped[str | None] = mapped_column(Text, nullable=True)
    l4_market_potential: Mapped[str | None] = mapped_column(Text, nullable=True)
    l4_competitive_advantage: Mapped[str | None] = mapped_column(Text, nullable=True)
    l4_approved_by: Mapped[str | None] = mapped_column(Text, nullable=True)
    l4_comments: Mapped[str | None] = mapped_column(Text, nullable=True)

    l1_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    l2_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    l3_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    l4_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)
    l5_completed_at: Mapped[datetime | None] = mapped_column(DateTime(timezone=True), nullable=True)

    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
    updated_at: Mapped[str] = mapped_column(String(50), nullable=False)


class IdeaReview(Base):
    """Rating review recorded with each screening submission."""

    __tablename__ = "idea_reviews"

    review_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    idea_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("ideas.idea_id"), nullable=False, index=True
    )
    stage: Mapped[str] = mapped_column(String(2), nullable=False)
    reviewer_name: Mapped[str] = mapped_column(Text, nullable=False)
    ratings: Mapped[dict] = mapped_column(JSONB, nullable=False)
    overall_score: Mapped[float] = mapped_column(Float, nullable=False)
    recommendation: Mapped[str] = mapped_column(String(16), nullable=False)  # approve|reject
    comments: Mapped[str | None] = mapped_column(Text, nullable=True)
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)


class IdeaComment(Base):
    """Discussion comment on an idea."""

    __tablename__ = "idea_comments"

    comment_id: Mapped[str] = mapped_column(UUID(as_uuid=False), primary_key=True)
    idea_id: Mapped[str] = mapped_column(
        UUID(as_uuid=False), ForeignKey("ideas.idea_id"), nullable=False, index=True
    )
    author_name: Mapped[str] = mapped_column(Text, nullable=False)
    author_email: Mapped[str | None] = mapped_column(Text, nullable=True)
    content: Mapped[str] = mapped_column(Text, nullable=False)
    parent_comment_id: Mapped[str | None] = mapped_column(
        UUID(as_uuid=False), ForeignKey("idea_comments.comment_id"), nullable=True
    )
    is_internal: Mapped[bool] = mapped_column(Boolean, nullable=False, default=False)
    created_at: Mapped[str] = mapped_column(String(50), nullable=False)
