"""Threshold policy - maps a stage score to advance / reject."""

from dataclasses import dataclass, field

from ipms.schemas.workflow import Decision, Stage

# Minimum aggregate rating (0-5 scale) to pass L2 screening. Inclusive.
SCREENING_PASS_SCORE = 3.0
# Minimum ROI percentage to pass the L3 business case. Inclusive.
BUSINESS_CASE_MIN_ROI = 20.0

RATING = "rating"
ROI = "roi"
MANUAL = "manual"


class ManualDecisionRequired(Exception):
    """Raised when a score is offered to a gate decided by a person."""

    def __init__(self, stage: Stage):
        self.stage = stage
        super().__init__(f"Stage {stage.value} is decided by an explicit reviewer choice")


class HoldNotAllowed(Exception):
    """Raised when a hold is chosen at a gate that cannot park an idea."""

    def __init__(self, stage: Stage):
        self.stage = stage
        super().__init__(f"Stage {stage.value} cannot put an idea on hold")


class NoGateForStage(Exception):
    """Raised for stages with no evaluation gate (L5)."""

    def __init__(self, stage: Stage):
        self.stage = stage
        super().__init__(f"Stage {stage.value} has no evaluation gate")


@dataclass(frozen=True)
class Gate:
    """Evaluation gate held while an idea sits in a stage."""

    kind: str
    threshold: float | None = None
    # Only the executive review may park an idea on hold
    allows_hold: bool = False


@dataclass(frozen=True)
class PolicyTable:
    """Per-stage gates. Stages without an entry cannot be evaluated."""

    gates: dict[Stage, Gate] = field(default_factory=dict)

    def gate_for(self, stage: Stage) -> Gate:
        gate = self.gates.get(stage)
        if gate is None:
            raise NoGateForStage(stage)
        return gate


def build_policy(
    screening_pass_score: float = SCREENING_PASS_SCORE,
    business_case_min_roi: float = BUSINESS_CASE_MIN_ROI,
) -> PolicyTable:
    """Standard L1-L4 gates with the two numeric thresholds supplied."""
    return PolicyTable(
        gates={
            Stage.L1: Gate(kind=MANUAL),
            Stage.L2: Gate(kind=RATING, threshold=screening_pass_score),
            Stage.L3: Gate(kind=ROI, threshold=business_case_min_roi),
            Stage.L4: Gate(kind=MANUAL, allows_hold=True),
        }
    )


DEFAULT_POLICY = build_policy()


def decide(stage: Stage, score: float, policy: PolicyTable = DEFAULT_POLICY) -> Decision:
    """
    Compare a score with the stage's threshold.
    Scores at or above the threshold advance, anything below is rejected.
    A computed decision is never HOLD; holds only come from manual gates.
    """
    gate = policy.gate_for(stage)
    if gate.kind == MANUAL:
        raise ManualDecisionRequired(stage)
    return Decision.ADVANCE if score >= gate.threshold else Decision.REJECT
