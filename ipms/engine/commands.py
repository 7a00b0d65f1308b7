"""Evaluation commands - one object per stage submission.

Each command validates its own input, evaluates its stage through
evaluate_stage and supplies the reason template and stage-block field
updates. The workflow service applies them through apply_transition.
"""

from abc import ABC, abstractmethod
from typing import Any, ClassVar, Literal

from pydantic import BaseModel, Field, field_validator

from ipms.engine.financials import compute, feasibility_rating
from ipms.engine.policy import (
    DEFAULT_POLICY,
    MANUAL,
    RATING,
    ROI,
    HoldNotAllowed,
    PolicyTable,
    decide,
)
from ipms.engine.scoring import aggregate
from ipms.schemas.workflow import Decision, Stage, StageEvaluation, normalize_decision


def _rating():
    return Field(ge=0, le=5, allow_inf_nan=False)


def _amount(default: float | None = None):
    if default is None:
        return Field(ge=0, allow_inf_nan=False)
    return Field(default=default, ge=0, allow_inf_nan=False)


def check_half_step(v: float) -> float:
    if (v * 2) != int(v * 2):
        raise ValueError("ratings move in steps of 0.5")
    return v


def require_name(v: str) -> str:
    v = v.strip()
    if not v:
        raise ValueError("name is required")
    return v


def evaluate_stage(
    stage: Stage,
    inputs: dict[str, Any],
    policy: PolicyTable = DEFAULT_POLICY,
) -> StageEvaluation:
    """
    Score a stage and decide it.

    inputs by gate kind:
      rating - {"ratings": [..]}
      roi    - {"estimated_cost": x, "expected_benefit": y}
      manual - {"decision": "approve" | "reject" | "on_hold", "score": optional}

    A hold is refused unless the stage gate allows one.
    """
    gate = policy.gate_for(stage)
    if gate.kind == RATING:
        score = aggregate(inputs["ratings"])
        return StageEvaluation(stage=stage, score=score, decision=decide(stage, score, policy))
    if gate.kind == ROI:
        summary = compute(inputs["estimated_cost"], inputs["expected_benefit"])
        return StageEvaluation(
            stage=stage,
            score=summary.roi_percent,
            decision=decide(stage, summary.roi_percent, policy),
        )
    if gate.kind == MANUAL:
        decision = normalize_decision(inputs["decision"])
        if decision == Decision.HOLD and not gate.allows_hold:
            raise HoldNotAllowed(stage)
        return StageEvaluation(stage=stage, score=inputs.get("score"), decision=decision)
    raise ValueError(f"Unknown gate kind: {gate.kind}")


class StageCommand(BaseModel, ABC):
    """Base for stage submissions."""

    stage: ClassVar[Stage]
    reason_templates: ClassVar[dict[Decision, str]]

    comments: str | None = None

    @property
    @abstractmethod
    def actor(self) -> str:
        ...

    @abstractmethod
    def stage_inputs(self) -> dict[str, Any]:
        ...

    def evaluate(self, policy: PolicyTable = DEFAULT_POLICY) -> StageEvaluation:
        return evaluate_stage(self.stage, self.stage_inputs(), policy)

    def reason_template(self, decision: Decision) -> str:
        return self.reason_templates[decision]

    def reason_values(self) -> dict[str, Any]:
        return {}

    def field_updates(self, evaluation: StageEvaluation) -> dict[str, Any]:
        """Idea columns written alongside the transition."""
        return {}


class SubmitL1Triage(StageCommand):
    """Intake triage of a fresh submission: accept into screening or decline. No hold."""

    stage: ClassVar[Stage] = Stage.L1
    reason_templates: ClassVar[dict[Decision, str]] = {
        Decision.ADVANCE: "Submission accepted for screening",
        Decision.REJECT: "Submission declined at triage: {note}",
    }

    triaged_by: str
    decision: Decision

    @field_validator("triaged_by")
    @classmethod
    def triager_required(cls, v: str) -> str:
        return require_name(v)

    @field_validator("decision", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        return normalize_decision(v) if isinstance(v, str) else v

    @field_validator("decision")
    @classmethod
    def accept_or_decline(cls, v: Decision) -> Decision:
        if v == Decision.HOLD:
            raise ValueError("triage accepts or declines; only executive review can hold")
        return v

    @property
    def actor(self) -> str:
        return self.triaged_by

    def stage_inputs(self) -> dict[str, Any]:
        return {"decision": self.decision.value}

    def reason_values(self) -> dict[str, Any]:
        return {"note": self.comments or "no comment"}

    def field_updates(self, evaluation: StageEvaluation) -> dict[str, Any]:
        return {"l1_triaged_by": self.triaged_by, "l1_comments": self.comments}


class SubmitL2Evaluation(StageCommand):
    """L2 screening: four ratings averaged against the pass score."""

    stage: ClassVar[Stage] = Stage.L2
    reason_templates: ClassVar[dict[Decision, str]] = {
        Decision.ADVANCE: "L2 screening passed with score {score}",
        Decision.REJECT: "L2 screening failed with score {score}",
    }
    criteria: ClassVar[tuple[str, ...]] = ("novelty", "feasibility", "alignment", "impact")

    reviewer_name: str
    novelty: float = _rating()
    feasibility: float = _rating()
    alignment: float = _rating()
    impact: float = _rating()

    @field_validator("reviewer_name")
    @classmethod
    def reviewer_required(cls, v: str) -> str:
        return require_name(v)

    @field_validator("novelty", "feasibility", "alignment", "impact")
    @classmethod
    def ratings_in_half_steps(cls, v: float) -> float:
        return check_half_step(v)

    @property
    def actor(self) -> str:
        return self.reviewer_name

    def ratings(self) -> dict[str, float]:
        return {c: getattr(self, c) for c in self.criteria}

    def stage_inputs(self) -> dict[str, Any]:
        return {"ratings": list(self.ratings().values())}

    def field_updates(self, evaluation: StageEvaluation) -> dict[str, Any]:
        return {
            "l2_novelty_score": self.novelty,
            "l2_feasibility_score": self.feasibility,
            "l2_alignment_score": self.alignment,
            "l2_impact_score": self.impact,
            "l2_overall_score": evaluation.score,
            "l2_screened_by": self.reviewer_name,
            "l2_comments": self.comments,
        }


class SubmitL3BusinessCase(StageCommand):
    """L3 business case: ROI from cost and annual savings against the minimum ROI."""

    stage: ClassVar[Stage] = Stage.L3
    reason_templates: ClassVar[dict[Decision, str]] = {
        Decision.ADVANCE: "L3 business case approved with ROI {roi}%",
        Decision.REJECT: "L3 business case rejected (ROI: {roi}%)",
    }

    assessed_by: str
    estimated_cost: float = _amount()
    expected_savings: float = _amount()
    capex: float = _amount(0)
    opex: float = _amount(0)
    headcount_impact: int = 0
    implementation_timeline: str | None = None
    technical_feasibility: str | None = None
    resource_requirements: str | None = None
    risk_assessment: str | None = None
    dependencies: str | None = None

    @field_validator("assessed_by")
    @classmethod
    def assessor_required(cls, v: str) -> str:
        return require_name(v)

    @property
    def actor(self) -> str:
        return self.assessed_by

    def stage_inputs(self) -> dict[str, Any]:
        return {"estimated_cost": self.estimated_cost, "expected_benefit": self.expected_savings}

    def reason_values(self) -> dict[str, Any]:
        summary = compute(self.estimated_cost, self.expected_savings)
        return {"roi": f"{summary.roi_percent:.1f}"}

    def field_updates(self, evaluation: StageEvaluation) -> dict[str, Any]:
        summary = compute(self.estimated_cost, self.expected_savings)
        return {
            "l3_estimated_cost": self.estimated_cost,
            "l3_expected_savings": self.expected_savings,
            "l3_roi_percentage": round(summary.roi_percent, 2),
            "l3_payback_period_months": summary.payback_months,
            "l3_net_savings": summary.net_savings,
            "l3_capex": self.capex,
            "l3_opex": self.opex,
            "l3_headcount_impact": self.headcount_impact,
            "l3_implementation_timeline": self.implementation_timeline,
            "l3_technical_feasibility": self.technical_feasibility,
            "l3_resource_requirements": self.resource_requirements,
            "l3_risk_assessment": self.risk_assessment,
            "l3_dependencies": self.dependencies,
            "l3_feasibility_score": feasibility_rating(summary.roi_percent),
            "l3_assessed_by": self.assessed_by,
            "l3_comments": self.comments,
        }


class SubmitL4ExecutiveReview(StageCommand):
    """
    L4 executive review. The decision is the approver's explicit choice;
    the strategic score is recorded for audit and never compared to a threshold.
    """

    stage: ClassVar[Stage] = Stage.L4
    reason_templates: ClassVar[dict[Decision, str]] = {
        Decision.ADVANCE: "Executive approval granted with budget ${budget} (strategic score {score})",
        Decision.REJECT: "Executive review rejected: {note}",
        Decision.HOLD: "Placed on hold: {conditions}",
    }

    approved_by: str
    decision: Decision
    strategic_alignment: float = _rating()
    portfolio_fit: float = _rating()
    risk_level: Literal["low", "medium", "high", "critical"] = "medium"
    approved_budget: float = _amount(0)
    conditions: str | None = None
    market_potential: str | None = None
    competitive_advantage: str | None = None

    @field_validator("approved_by")
    @classmethod
    def approver_required(cls, v: str) -> str:
        return require_name(v)

    @field_validator("strategic_alignment", "portfolio_fit")
    @classmethod
    def ratings_in_half_steps(cls, v: float) -> float:
        return check_half_step(v)

    @field_validator("decision", mode="before")
    @classmethod
    def normalize_choice(cls, v):
        return normalize_decision(v) if isinstance(v, str) else v

    @property
    def actor(self) -> str:
        return self.approved_by

    def strategic_score(self) -> float:
        return aggregate([self.strategic_alignment, self.portfolio_fit])

    def stage_inputs(self) -> dict[str, Any]:
        return {"decision": self.decision.value, "score": self.strategic_score()}

    def reason_values(self) -> dict[str, Any]:
        return {
            "budget": f"{self.approved_budget:,.0f}",
            "note": self.comments or "Does not meet strategic criteria",
            "conditions": self.conditions or "Pending further review",
        }

    def field_updates(self, evaluation: StageEvaluation) -> dict[str, Any]:
        return {
            "l4_strategic_alignment": self.strategic_alignment,
            "l4_portfolio_fit": self.portfolio_fit,
            "l4_strategic_score": evaluation.score,
            "l4_risk_level": self.risk_level,
            "l4_final_decision": self.decision.value,
            "l4_approved_budget": self.approved_budget,
            "l4_conditions": self.conditions,
            "l4_market_potential": self.market_potential,
            "l4_competitive_advantage": self.competitive_advantage,
            "l4_approved_by": self.approved_by,
            "l4_comments": self.comments,
        }
