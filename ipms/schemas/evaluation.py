"""Evaluation response schemas."""

from pydantic import BaseModel

from ipms.schemas.workflow import Decision, Stage, StageHistoryRecord, StageStatus


class FinancialDetails(BaseModel):
    """Business case figures returned with an L3 evaluation."""

    net_savings: float
    roi_percent: float
    payback_months: float | None = None
    recommendation: str
    long_payback: bool


class EvaluationResponse(BaseModel):
    """Response for every stage evaluation endpoint."""

    idea_id: str
    stage: Stage
    score: float | None = None
    score_label: str | None = None
    decision: Decision
    new_stage: Stage
    new_status: StageStatus
    financials: FinancialDetails | None = None
    history: StageHistoryRecord
