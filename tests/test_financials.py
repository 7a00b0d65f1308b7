"""Unit tests for business case financials."""

import pytest

from ipms.engine.financials import (
    compute,
    feasibility_rating,
    is_long_payback,
    recommendation_band,
)


def test_compute_basic():
    """Cost 1000, benefit 1500: 500 net, 50% ROI, 8 month payback."""
    summary = compute(1000, 1500)
    assert summary.net_savings == 500
    assert summary.roi_percent == 50
    assert summary.payback_months == 8.0


def test_zero_cost_gives_zero_roi():
    summary = compute(0, 500)
    assert summary.roi_percent == 0
    assert summary.net_savings == 500
    assert summary.payback_months == 0.0


def test_zero_benefit_has_no_payback():
    summary = compute(1000, 0)
    assert summary.payback_months is None
    assert summary.roi_percent == -100
    assert summary.net_savings == -1000


def test_zero_cost_and_benefit():
    summary = compute(0, 0)
    assert summary.roi_percent == 0
    assert summary.payback_months is None


def test_payback_uses_annual_benefit():
    """Benefit is annual: 120000 cost against 60000/year pays back in 24 months."""
    assert compute(120000, 60000).payback_months == 24.0
    assert compute(10000, 7000).payback_months == 17.1


def test_negative_inputs_rejected():
    with pytest.raises(ValueError):
        compute(-1, 100)
    with pytest.raises(ValueError):
        compute(100, -1)


def test_recommendation_band():
    assert recommendation_band(75) == "strong"
    assert recommendation_band(50) == "moderate"
    assert recommendation_band(20) == "moderate"
    assert recommendation_band(19.9) == "weak"


def test_feasibility_rating():
    assert feasibility_rating(50) == 5
    assert feasibility_rating(20) == 3
    assert feasibility_rating(-5) == 1


def test_long_payback():
    assert is_long_payback(30) is True
    assert is_long_payback(24) is False
    assert is_long_payback(None) is False


@pytest.mark.parametrize("cost, benefit", [(float("inf"), 100), (100, float("inf")), (float("nan"), 100)])
def test_non_finite_inputs_rejected(cost, benefit):
    """An infinite or NaN amount would turn ROI into NaN."""
    with pytest.raises(ValueError):
        compute(cost, benefit)
