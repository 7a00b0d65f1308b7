"""Idea, department and comment API schemas."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field, field_validator

from ipms.schemas.workflow import Stage, StageStatus

Category = Literal[
    "innovation",
    "process-improvement",
    "cost-reduction",
    "quality",
    "safety",
    "sustainability",
]
Priority = Literal["high", "medium", "low"]


def _not_blank(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("must not be blank")
    return v


class CreateDepartmentRequest(BaseModel):
    """POST /v1/departments request."""

    name: str
    code: str
    head_name: str | None = None
    head_email: str | None = None
    description: str | None = None

    @field_validator("name", "code")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class DepartmentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    department_id: str
    name: str
    code: str
    head_name: str | None = None
    head_email: str | None = None
    description: str | None = None
    is_active: bool
    created_at: str


class SubmitIdeaRequest(BaseModel):
    """POST /v1/ideas - new submission, enters L1/pending."""

    title: str
    submitter_name: str
    category: Category = "innovation"
    priority: Priority = "medium"
    description: str | None = None
    problem_statement: str | None = None
    proposed_solution: str | None = None
    expected_benefits: str | None = None
    remarks: str | None = None
    department_id: str | None = None
    submitter_email: str | None = None
    submitter_employee_id: str | None = None

    @field_validator("title", "submitter_name")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class IdeaSummary(BaseModel):
    """Idea row as listed on the board."""

    model_config = ConfigDict(from_attributes=True)

    idea_id: str
    title: str
    category: str
    priority: str
    department_id: str | None = None
    submitter_name: str
    evaluation_stage: Stage
    stage_status: StageStatus
    submission_date: datetime
    l2_overall_score: float | None = None
    l3_roi_percentage: float | None = None


class IdeaDetail(IdeaSummary):
    """Full idea record including every stage block."""

    description: str | None = None
    problem_statement: str | None = None
    proposed_solution: str | None = None
    expected_benefits: str | None = None
    remarks: str | None = None
    submitter_email: str | None = None
    submitter_employee_id: str | None = None

    l1_triaged_by: str | None = None
    l1_comments: str | None = None

    l2_novelty_score: float | None = None
    l2_feasibility_score: float | None = None
    l2_alignment_score: float | None = None
    l2_impact_score: float | None = None
    l2_screened_by: str | None = None
    l2_comments: str | None = None

    l3_estimated_cost: float | None = None
    l3_expected_savings: float | None = None
    l3_payback_period_months: float | None = None
    l3_net_savings: float | None = None
    l3_capex: float | None = None
    l3_opex: float | None = None
    l3_headcount_impact: int | None = None
    l3_implementation_timeline: str | None = None
    l3_technical_feasibility: str | None = None
    l3_resource_requirements: str | None = None
    l3_risk_assessment: str | None = None
    l3_dependencies: str | None = None
    l3_feasibility_score: int | None = None
    l3_assessed_by: str | None = None
    l3_comments: str | None = None

    l4_strategic_alignment: float | None = None
    l4_portfolio_fit: float | None = None
    l4_strategic_score: float | None = None
    l4_risk_level: str | None = None
    l4_final_decision: str | None = None
    l4_approved_budget: float | None = None
    l4_conditions: str | None = None
    l4_market_potential: str | None = None
    l4_competitive_advantage: str | None = None
    l4_approved_by: str | None = None
    l4_comments: str | None = None

    l1_completed_at: datetime | None = None
    l2_completed_at: datetime | None = None
    l3_completed_at: datetime | None = None
    l4_completed_at: datetime | None = None
    l5_completed_at: datetime | None = None

    created_at: str
    updated_at: str


class HistoryEntryOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    history_id: str
    idea_id: str
    from_stage: Stage | None = None
    to_stage: Stage
    from_status: StageStatus | None = None
    to_status: StageStatus
    changed_by: str
    change_reason: str | None = None
    created_at: str


class ReviewOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    review_id: str
    idea_id: str
    stage: Stage
    reviewer_name: str
    ratings: dict[str, float]
    overall_score: float
    recommendation: str
    comments: str | None = None
    created_at: str


class CreateCommentRequest(BaseModel):
    """POST /v1/ideas/{idea_id}/comments request."""

    author_name: str
    content: str
    author_email: str | None = None
    parent_comment_id: str | None = None
    is_internal: bool = False

    @field_validator("author_name", "content")
    @classmethod
    def not_blank(cls, v: str) -> str:
        return _not_blank(v)


class CommentOut(BaseModel):
    model_config = ConfigDict(from_attributes=True)

    comment_id: str
    idea_id: str
    author_name: str
    author_email: str | None = None
    content: str
    parent_comment_id: str | None = None
    is_internal: bool
    created_at: str


class StageStatistics(BaseModel):
    """Idea counts for one stage, by status."""

    stage: Stage
    total: int = 0
    pending: int = 0
    in_progress: int = 0
    approved: int = 0
    rejected: int = 0
    on_hold: int = 0


class IdeaFilters(BaseModel):
    """Board filters; None means no filter."""

    stage: Stage | None = None
    status: StageStatus | None = None
    department_id: str | None = None
    category: Category | None = None
    search: str | None = Field(default=None, max_length=200)
