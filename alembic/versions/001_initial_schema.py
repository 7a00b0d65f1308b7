"""Initial schema - departments, ideas, idea_reviews, idea_stage_history, idea_comments.

Revision ID: 001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _text(name: str) -> sa.Column:
    return sa.Column(name, sa.Text(), nullable=True)


def _float(name: str) -> sa.Column:
    return sa.Column(name, sa.Float(), nullable=True)


def _ts(name: str) -> sa.Column:
    return sa.Column(name, sa.TIMESTAMP(timezone=True), nullable=True)


def upgrade() -> None:
    op.create_table(
        "departments",
        sa.Column("department_id", sa.UUID(), primary_key=True),
        sa.Column("name", sa.Text(), nullable=False),
        sa.Column("code", sa.String(32), unique=True, nullable=False),
        _text("head_name"),
        _text("head_email"),
        _text("description"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("created_at", sa.String(50), nullable=False),
    )

    op.create_table(
        "ideas",
        sa.Column("idea_id", sa.UUID(), primary_key=True),
        sa.Column("title", sa.Text(), nullable=False),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False),
        _text("description"),
        _text("problem_statement"),
        _text("proposed_solution"),
        _text("expected_benefits"),
        _text("remarks"),
        sa.Column(
            "department_id",
            sa.UUID(),
            sa.ForeignKey("departments.department_id"),
            nullable=True,
        ),
        sa.Column("submitter_name", sa.Text(), nullable=False),
        _text("submitter_email"),
        _text("submitter_employee_id"),
        sa.Column("submission_date", sa.TIMESTAMP(timezone=True), nullable=False),
        sa.Column("evaluation_stage", sa.String(2), nullable=False, server_default="L1"),
        sa.Column("stage_status", sa.String(20), nullable=False, server_default="pending"),
        _text("l1_triaged_by"),
        _text("l1_comments"),
        _float("l2_novelty_score"),
        _float("l2_feasibility_score"),
        _float("l2_alignment_score"),
        _float("l2_impact_score"),
        _float("l2_overall_score"),
        _text("l2_screened_by"),
        _text("l2_comments"),
        _float("l3_estimated_cost"),
        _float("l3_expected_savings"),
        _float("l3_roi_percentage"),
        _float("l3_payback_period_months"),
        _float("l3_net_savings"),
        _float("l3_capex"),
        _float("l3_opex"),
        sa.Column("l3_headcount_impact", sa.Integer(), nullable=True),
        _text("l3_implementation_timeline"),
        _text("l3_technical_feasibility"),
        _text("l3_resource_requirements"),
        _text("l3_risk_assessment"),
        _text("l3_dependencies"),
        sa.Column("l3_feasibility_score", sa.Integer(), nullable=True),
        _text("l3_assessed_by"),
        _text("l3_comments"),
        _float("l4_strategic_alignment"),
        _float("l4_portfolio_fit"),
        _float("l4_strategic_score"),
        sa.Column("l4_risk_level", sa.String(16), nullable=True),
        sa.Column("l4_final_decision", sa.String(16), nullable=True),
        _float("l4_approved_budget"),
        _text("l4_conditions"),
        _text("l4_market_potential"),
        _text("l4_competitive_advantage"),
        _text("l4_approved_by"),
        _text("l4_comments"),
        _ts("l1_completed_at"),
        _ts("l2_completed_at"),
        _ts("l3_completed_at"),
        _ts("l4_completed_at"),
        _ts("l5_completed_at"),
        sa.Column("created_at", sa.String(50), nullable=False),
        sa.Column("updated_at", sa.String(50), nullable=False),
    )
    op.create_index("ix_ideas_evaluation_stage", "ideas", ["evaluation_stage"])

    op.create_table(
        "idea_reviews",
        sa.Column("review_id", sa.UUID(), primary_key=True),
        sa.Column("idea_id", sa.UUID(), sa.ForeignKey("ideas.idea_id"), nullable=False),
        sa.Column("stage", sa.String(2), nullable=False),
        sa.Column("reviewer_name", sa.Text(), nullable=False),
        sa.Column("ratings", postgresql.JSONB(), nullable=False),
        sa.Column("overall_score", sa.Float(), nullable=False),
        sa.Column("recommendation", sa.String(16), nullable=False),
        _text("comments"),
        sa.Column("created_at", sa.String(50), nullable=False),
    )
    op.create_index("ix_idea_reviews_idea_id", "idea_reviews", ["idea_id"])

    # Append-only: the application never updates or deletes these rows
    op.create_table(
        "idea_stage_history",
        sa.Column("history_id", sa.UUID(), primary_key=True),
        sa.Column("idea_id", sa.UUID(), sa.ForeignKey("ideas.idea_id"), nullable=False),
        sa.Column("from_stage", sa.String(2), nullable=True),
        sa.Column("to_stage", sa.String(2), nullable=False),
        sa.Column("from_status", sa.String(20), nullable=True),
        sa.Column("to_status", sa.String(20), nullable=False),
        sa.Column("changed_by", sa.Text(), nullable=False),
        _text("change_reason"),
        sa.Column("created_at", sa.String(50), nullable=False),
    )
    op.create_index("ix_idea_stage_history_idea_id", "idea_stage_history", ["idea_id"])

    op.create_table(
        "idea_comments",
        sa.Column("comment_id", sa.UUID(), primary_key=True),
        sa.Column("idea_id", sa.UUID(), sa.ForeignKey("ideas.idea_id"), nullable=False),
        sa.Column("author_name", sa.Text(), nullable=False),
        _text("author_email"),
        sa.Column("content", sa.Text(), nullable=False),
        sa.Column(
            "parent_comment_id",
            sa.UUID(),
            sa.ForeignKey("idea_comments.comment_id"),
            nullable=True,
        ),
        sa.Column("is_internal", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("created_at", sa.String(50), nullable=False),
    )
    op.create_index("ix_idea_comments_idea_id", "idea_comments", ["idea_id"])


def downgrade() -> None:
    op.drop_index("ix_idea_comments_idea_id", table_name="idea_comments")
    op.drop_table("idea_comments")
    op.drop_index("ix_idea_stage_history_idea_id", table_name="idea_stage_history")
    op.drop_table("idea_stage_history")
    op.drop_index("ix_idea_reviews_idea_id", table_name="idea_reviews")
    op.drop_table("idea_reviews")
    op.drop_index("ix_ideas_evaluation_stage", table_name="ideas")
    op.drop_table("ideas")
    op.drop_table("departments")
