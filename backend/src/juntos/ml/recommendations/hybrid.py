"""
Hybrid Recommendation System.

Merges collaborative and content-based result sets per opportunity.
"""

import logging
from typing import Dict, List

from backend.src.juntos.ml.recommendations.models import (
    RecommendationItem,
    StrategyTag,
    rank_items,
)

logger = logging.getLogger(__name__)


class HybridRecommender:
    """
    Weighted blend of collaborative and content-based recommendations.

    An opportunity found by both strategies is rescored and relabeled
    hybrid. One found by a single strategy passes through with its score,
    reasons and original tag untouched.
    """

    def __init__(self, collaborative_weight: float = 0.3, content_weight: float = 0.7):
        """
        Initialize hybrid recommender.

        Args:
            collaborative_weight: Weight for the collaborative score
            content_weight: Weight for the content-based score
        """
        self.collaborative_weight = collaborative_weight
        self.content_weight = content_weight

    def blend(
        self,
        collaborative: List[RecommendationItem],
        content_based: List[RecommendationItem],
        limit: int = 10,
    ) -> List[RecommendationItem]:
        """
        Union both result sets by opportunity id and rank the blend.

        Inputs are not modified.

        Args:
            collaborative: Collaborative filtering results
            content_based: Content-based results
            limit: Number of recommendations to return

        Returns:
            Blended items, best first
        """
        combined: Dict[str, RecommendationItem] = {}

        for item in collaborative:
            combined[item.opportunity_id] = RecommendationItem(
                opportunity=item.opportunity,
                score=item.score,
                strategy=item.strategy,
                reasons=list(item.reasons),
            )

        for item in content_based:
            existing = combined.get(item.opportunity_id)
            if existing:
                existing.score = (
                    existing.score * self.collaborative_weight
                    + item.score * self.content_weight
                )
                existing.reasons.extend(item.reasons)
                existing.strategy = StrategyTag.HYBRID
            else:
                combined[item.opportunity_id] = RecommendationItem(
                    opportunity=item.opportunity,
                    score=item.score,
                    strategy=item.strategy,
                    reasons=list(item.reasons),
                )

        return rank_items(list(combined.values()), limit)
