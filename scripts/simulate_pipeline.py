#!/usr/bin/env python3
"""
Walk sample ideas through the evaluation engine in memory (no DB/API needed)
and print every transition.
Usage: python scripts/simulate_pipeline.py
"""

import sys
from pathlib import Path
from types import SimpleNamespace

# Add project root
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from ipms.engine.commands import (
    SubmitL1Triage,
    SubmitL2Evaluation,
    SubmitL3BusinessCase,
    SubmitL4ExecutiveReview,
)
from ipms.engine.transitions import apply_transition

SAMPLES = {
    "Strong idea": [
        SubmitL1Triage(triaged_by="Intake desk", decision="approve"),
        SubmitL2Evaluation(reviewer_name="A. Reviewer", novelty=4, feasibility=4, alignment=5, impact=4),
        SubmitL3BusinessCase(assessed_by="B. Analyst", estimated_cost=50000, expected_savings=90000),
        SubmitL4ExecutiveReview(
            approved_by="C. Exec", decision="approve", strategic_alignment=4, portfolio_fit=4.5, approved_budget=50000
        ),
    ],
    "Weak screening": [
        SubmitL1Triage(triaged_by="Intake desk", decision="approve"),
        SubmitL2Evaluation(reviewer_name="A. Reviewer", novelty=2, feasibility=3, alignment=2.5, impact=3),
    ],
    "Thin business case": [
        SubmitL1Triage(triaged_by="Intake desk", decision="approve"),
        SubmitL2Evaluation(reviewer_name="A. Reviewer", novelty=3, feasibility=3, alignment=3, impact=3),
        SubmitL3BusinessCase(assessed_by="B. Analyst", estimated_cost=100000, expected_savings=110000),
    ],
    "Parked by executives": [
        SubmitL1Triage(triaged_by="Intake desk", decision="approve"),
        SubmitL2Evaluation(reviewer_name="A. Reviewer", novelty=5, feasibility=4, alignment=4, impact=4),
        SubmitL3BusinessCase(assessed_by="B. Analyst", estimated_cost=10000, expected_savings=30000),
        SubmitL4ExecutiveReview(
            approved_by="C. Exec",
            decision="on-hold",
            strategic_alignment=3,
            portfolio_fit=3,
            conditions="Revisit after Q3 budget cycle",
        ),
    ],
}


def main():
    for name, commands in SAMPLES.items():
        idea = SimpleNamespace(idea_id=name, evaluation_stage="L1", stage_status="pending")
        print(f"== {name}")
        for command in commands:
            evaluation = command.evaluate()
            idea, record = apply_transition(
                idea,
                evaluation.decision,
                command.actor,
                command.reason_template(evaluation.decision),
                score=evaluation.score,
                **command.reason_values(),
            )
            print(
                f"  {record.from_stage.value}/{record.from_status.value} -> "
                f"{record.to_stage.value}/{record.to_status.value}: {record.change_reason}"
            )
            if idea.stage_status in ("rejected", "on_hold"):
                break


if __name__ == "__main__":
    main()
