"""
Volunteer-to-volunteer similarity used to pick collaborative neighbors.
"""

from typing import Collection

from backend.src.juntos.ml.recommendations.models import VolunteerProfile

INTEREST_WEIGHT = 0.3
SKILL_WEIGHT = 0.4
APPLIED_WEIGHT = 0.2
FAVORITED_WEIGHT = 0.1


def overlap_ratio(a: Collection[str], b: Collection[str]) -> float:
    """
    Shared items divided by the larger collection size.

    Normalizing by the larger side rather than the union keeps a small
    profile from being punished twice against a large one. Two empty
    collections contribute 0.
    """
    a_set, b_set = set(a), set(b)
    denominator = max(len(a_set), len(b_set))
    if denominator == 0:
        return 0.0
    return len(a_set & b_set) / denominator


def volunteer_similarity(a: VolunteerProfile, b: VolunteerProfile) -> float:
    """
    Weighted overlap of interests, skills, applied and favorited opportunities.

    The result lies in [0, 1] but is not re-normalized; neighbor thresholds
    applied to it are empirical.
    """
    return (
        overlap_ratio(a.interests, b.interests) * INTEREST_WEIGHT
        + overlap_ratio(a.skills, b.skills) * SKILL_WEIGHT
        + overlap_ratio(a.history.applied_ids, b.history.applied_ids) * APPLIED_WEIGHT
        + overlap_ratio(a.history.favorited_ids, b.history.favorited_ids)
        * FAVORITED_WEIGHT
    )
