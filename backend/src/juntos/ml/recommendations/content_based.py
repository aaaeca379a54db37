"""
Content-Based Recommendation System.

Scores opportunities directly against a volunteer's skills, interests,
location and category preferences.
"""

import logging
from typing import Iterable, List, Tuple

from backend.src.juntos.ml.recommendations.models import (
    Opportunity,
    RecommendationItem,
    StrategyTag,
    VolunteerProfile,
    is_candidate,
    rank_items,
)
from backend.src.juntos.ml.shared.geo import distance_km

logger = logging.getLogger(__name__)


class ContentBasedRecommender:
    """
    Content-based recommendation system using opportunity attributes.

    Recommends opportunities based on:
    1. Required skills the volunteer already has
    2. Volunteer interests matching category names
    3. Distance within the volunteer's travel radius
    4. Preferred and avoided categories
    """

    def __init__(
        self,
        min_score: float = 0.3,
        default_max_distance_km: float = 50.0,
        skill_weight: float = 0.4,
        interest_weight: float = 0.3,
        location_weight: float = 0.2,
        preferred_bonus: float = 0.1,
        avoided_penalty: float = 0.3,
    ):
        """
        Initialize content-based recommender.

        Args:
            min_score: Score an opportunity must exceed to be kept
            default_max_distance_km: Travel radius for volunteers without one
            skill_weight: Weight of the required-skill coverage ratio
            interest_weight: Weight of the matched-interest ratio
            location_weight: Weight of the proximity term
            preferred_bonus: Flat bonus for a preferred category
            avoided_penalty: Flat penalty for an avoided category
        """
        self.min_score = min_score
        self.default_max_distance_km = default_max_distance_km
        self.skill_weight = skill_weight
        self.interest_weight = interest_weight
        self.location_weight = location_weight
        self.preferred_bonus = preferred_bonus
        self.avoided_penalty = avoided_penalty

    def score_opportunity(
        self, target: VolunteerProfile, opportunity: Opportunity
    ) -> Tuple[float, List[str]]:
        """
        Score one opportunity for a volunteer.

        The total may go negative when an avoided category outweighs
        everything else.

        Returns:
            Tuple of (score, reasons)
        """
        score = 0.0
        reasons: List[str] = []

        required = opportunity.required_skills
        if required:
            matching_skills = [skill for skill in target.skills if skill in required]
            score += len(matching_skills) / len(required) * self.skill_weight
            if matching_skills:
                reasons.append(f"Skills match: {', '.join(matching_skills)}")

        if target.interests:
            category_names = [name.lower() for name in opportunity.category_names]
            matching_interests = [
                interest
                for interest in target.interests
                if any(interest.lower() in name for name in category_names)
            ]
            score += (
                len(matching_interests) / len(target.interests) * self.interest_weight
            )
            if matching_interests:
                reasons.append(f"Aligned interests: {', '.join(matching_interests)}")

        if target.location and opportunity.location:
            distance = distance_km(
                target.location.latitude,
                target.location.longitude,
                opportunity.location.latitude,
                opportunity.location.longitude,
            )
            max_distance = (
                target.preferences.max_distance_km or self.default_max_distance_km
            )
            if distance <= max_distance:
                score += (1 - distance / max_distance) * self.location_weight
                reasons.append(f"Nearby location ({round(distance)} km)")

        names = set(opportunity.category_names)
        if names & target.preferences.preferred_categories:
            score += self.preferred_bonus
            reasons.append("Preferred category")

        if names & target.preferences.avoid_categories:
            score -= self.avoided_penalty
            reasons.append("Avoided category")

        return score, reasons

    def recommend(
        self,
        target: VolunteerProfile,
        candidates: Iterable[Opportunity],
        limit: int = 10,
    ) -> List[RecommendationItem]:
        """
        Get content-based recommendations for a volunteer.

        Args:
            target: Volunteer receiving recommendations
            candidates: Opportunity universe; seen and unpublished ones are skipped
            limit: Number of recommendations to return

        Returns:
            Items tagged content-based scoring above the cutoff, best first
        """
        seen_ids = target.history.seen_ids
        recommendations = []

        for opportunity in candidates:
            if not is_candidate(opportunity, seen_ids):
                continue

            score, reasons = self.score_opportunity(target, opportunity)
            if score > self.min_score:
                recommendations.append(
                    RecommendationItem(
                        opportunity=opportunity,
                        score=score,
                        strategy=StrategyTag.CONTENT_BASED,
                        reasons=reasons,
                    )
                )

        if not recommendations:
            logger.debug(f"No content matches above cutoff for volunteer {target.id}")

        return rank_items(recommendations, limit)
