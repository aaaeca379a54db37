"""
Popularity-based recommendations.
"""

from typing import Iterable, List

from backend.src.juntos.ml.recommendations.models import (
    Opportunity,
    RecommendationItem,
    StrategyTag,
    VolunteerProfile,
    is_candidate,
)

TRENDING_REASONS = ("Trending opportunity", "High volunteer interest")


class TrendingRecommender:
    """Surfaces unseen opportunities with a high precomputed popularity score."""

    def __init__(self, min_popularity: float = 7.0, popularity_scale: float = 10.0):
        """
        Args:
            min_popularity: Lowest popularity score considered trending
            popularity_scale: Top of the popularity scale, used to map scores to [0, 1]
        """
        self.min_popularity = min_popularity
        self.popularity_scale = popularity_scale

    def recommend(
        self,
        target: VolunteerProfile,
        candidates: Iterable[Opportunity],
        limit: int = 5,
    ) -> List[RecommendationItem]:
        seen_ids = target.history.seen_ids
        trending = [
            opportunity
            for opportunity in candidates
            if is_candidate(opportunity, seen_ids)
            and opportunity.popularity_score >= self.min_popularity
        ]
        trending.sort(key=lambda opportunity: opportunity.popularity_score, reverse=True)

        return [
            RecommendationItem(
                opportunity=opportunity,
                score=opportunity.popularity_score / self.popularity_scale,
                strategy=StrategyTag.TRENDING,
                reasons=list(TRENDING_REASONS),
            )
            for opportunity in trending[: max(limit, 0)]
        ]
