"""Rating aggregation for rating-based stages."""

from collections.abc import Sequence


def aggregate(ratings: Sequence[float]) -> float:
    """
    Arithmetic mean of the ratings, rounded to 2 decimal places.
    Out-of-range ratings are averaged as given; range checks belong to the
    request schemas. An empty sequence has no mean and raises ValueError.
    """
    if len(ratings) == 0:
        raise ValueError("cannot aggregate an empty set of ratings")
    return round(sum(float(r) for r in ratings) / len(ratings), 2)


def score_label(score: float) -> str:
    """Human-readable band for an aggregate score on the 0-5 scale."""
    if score >= 4.5:
        return "Excellent"
    if score >= 3.5:
        return "Good"
    if score >= 2.5:
        return "Fair"
    if score >= 1.5:
        return "Poor"
    return "Very Poor"
