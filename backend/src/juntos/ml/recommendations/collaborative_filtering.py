"""
Collaborative Filtering Recommendation System.

Implements user-based collaborative filtering: find the volunteers most
similar to the target and surface the opportunities they favorited.
"""

import logging
from typing import Dict, Iterable, List, Mapping, Tuple

from backend.src.juntos.ml.recommendations.models import (
    Opportunity,
    RecommendationItem,
    StrategyTag,
    VolunteerProfile,
    is_candidate,
    rank_items,
)
from backend.src.juntos.ml.recommendations.similarity import volunteer_similarity

logger = logging.getLogger(__name__)


class CollaborativeFilter:
    """
    User-based collaborative filtering over volunteer profiles.

    Scores compound additively: an opportunity favorited by several
    neighbors collects `similarity * neighbor_weight` from each of them,
    without a cap.
    """

    def __init__(
        self,
        min_similarity: float = 0.2,
        max_neighbors: int = 3,
        neighbor_weight: float = 0.5,
    ):
        """
        Initialize collaborative filtering system.

        Args:
            min_similarity: Similarity a volunteer must exceed to count as a neighbor
            max_neighbors: Number of nearest neighbors consulted
            neighbor_weight: Multiplier applied to a neighbor's similarity per favorite
        """
        self.min_similarity = min_similarity
        self.max_neighbors = max_neighbors
        self.neighbor_weight = neighbor_weight

    def find_neighbors(
        self, target: VolunteerProfile, pool: Iterable[VolunteerProfile]
    ) -> List[Tuple[VolunteerProfile, float]]:
        """
        Get the most similar volunteers to the target.

        Ties keep the order of the pool (the sort is stable).

        Returns:
            List of (profile, similarity) tuples, most similar first
        """
        similar_volunteers = []
        for other in pool:
            if other.id == target.id:
                continue
            similarity = volunteer_similarity(target, other)
            if similarity > self.min_similarity:
                similar_volunteers.append((other, similarity))

        similar_volunteers.sort(key=lambda pair: pair[1], reverse=True)
        return similar_volunteers[: self.max_neighbors]

    def recommend(
        self,
        target: VolunteerProfile,
        pool: Iterable[VolunteerProfile],
        opportunity_lookup: Mapping[str, Opportunity],
        limit: int = 10,
    ) -> List[RecommendationItem]:
        """
        Get recommendations from what similar volunteers favorited.

        Args:
            target: Volunteer receiving recommendations
            pool: Every known volunteer profile (the target may be included)
            opportunity_lookup: Opportunity id to snapshot
            limit: Number of recommendations to return

        Returns:
            Items tagged collaborative, best first
        """
        neighbors = self.find_neighbors(target, pool)
        if not neighbors:
            logger.debug(f"No neighbors above threshold for volunteer {target.id}")
            return []

        seen_ids = target.history.seen_ids
        scored: Dict[str, RecommendationItem] = {}

        for neighbor, similarity in neighbors:
            reason = f"Similar volunteer ({neighbor.label}) also favorited this"
            for opportunity_id in sorted(neighbor.history.favorited_ids):
                opportunity = opportunity_lookup.get(opportunity_id)
                if opportunity is None or not is_candidate(opportunity, seen_ids):
                    continue

                contribution = similarity * self.neighbor_weight
                existing = scored.get(opportunity_id)
                if existing:
                    existing.score += contribution
                    existing.reasons.append(reason)
                else:
                    scored[opportunity_id] = RecommendationItem(
                        opportunity=opportunity,
                        score=contribution,
                        strategy=StrategyTag.COLLABORATIVE,
                        reasons=[reason],
                    )

        return rank_items(list(scored.values()), limit)
