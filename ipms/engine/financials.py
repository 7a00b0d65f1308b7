"""Business case financials - ROI, payback period, net savings."""

import math

from pydantic import BaseModel

# Paybacks beyond this many months are flagged for strategic review.
LONG_PAYBACK_MONTHS = 24


class FinancialSummary(BaseModel):
    """Derived financial figures for a business case."""

    net_savings: float
    roi_percent: float
    payback_months: float | None = None


def compute(estimated_cost: float, expected_benefit: float) -> FinancialSummary:
    """
    Derive ROI %, payback period and net savings.

    expected_benefit is an annual figure, so payback is
    cost / (benefit / 12) months, rounded to one decimal.
    Zero cost gives 0% ROI; zero benefit gives no payback (None).
    """
    if not (math.isfinite(estimated_cost) and math.isfinite(expected_benefit)):
        raise ValueError("estimated_cost and expected_benefit must be finite numbers")
    if estimated_cost < 0 or expected_benefit < 0:
        raise ValueError("estimated_cost and expected_benefit must be non-negative")

    net_savings = expected_benefit - estimated_cost
    roi = (net_savings / estimated_cost) * 100 if estimated_cost > 0 else 0.0
    payback = (
        round(estimated_cost / (expected_benefit / 12), 1) if expected_benefit > 0 else None
    )
    return FinancialSummary(net_savings=net_savings, roi_percent=roi, payback_months=payback)


def recommendation_band(roi_percent: float) -> str:
    """strong / moderate / weak, as shown next to a business case."""
    if roi_percent > 50:
        return "strong"
    if roi_percent >= 20:
        return "moderate"
    return "weak"


def feasibility_rating(roi_percent: float) -> int:
    """Coarse 1/3/5 feasibility score recorded with the business case."""
    if roi_percent >= 50:
        return 5
    if roi_percent >= 20:
        return 3
    return 1


def is_long_payback(payback_months: float | None) -> bool:
    return payback_months is not None and payback_months > LONG_PAYBACK_MONTHS
