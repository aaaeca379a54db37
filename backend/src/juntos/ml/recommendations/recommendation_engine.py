"""
Main Recommendation Engine.

Orchestrates all recommendation strategies and provides a unified interface
for generating personalized opportunity recommendations.
"""

import logging
import math
from datetime import datetime, timezone
from typing import TYPE_CHECKING, Any, Callable, Dict, List, Optional, Tuple

import pandas as pd

from backend.src.juntos.core.config import Settings, settings as default_settings
from backend.src.juntos.ml.recommendations.collaborative_filtering import (
    CollaborativeFilter,
)
from backend.src.juntos.ml.recommendations.content_based import ContentBasedRecommender
from backend.src.juntos.ml.recommendations.hybrid import HybridRecommender
from backend.src.juntos.ml.recommendations.models import (
    Opportunity,
    RecommendationItem,
    RecommendationOptions,
    VolunteerProfile,
    rank_items,
)
from backend.src.juntos.ml.recommendations.trending import TrendingRecommender
from backend.src.juntos.ml.recommendations.urgent import UrgentRecommender

if TYPE_CHECKING:
    from backend.src.juntos.services.stores import CatalogStore

logger = logging.getLogger(__name__)

# Share of the requested limit handed to each strategy
PRIMARY_SHARE = 0.6
COLLABORATIVE_ONLY_SHARE = 0.4
TRENDING_SHARE = 0.2
URGENT_SHARE = 0.2

STATS_LIMIT = 50


class RecommendationEngine:
    """
    Main recommendation engine that coordinates all recommendation strategies.

    Features:
    1. Unified interface for every strategy
    2. Per-request snapshot of the volunteer and the opportunity universe
    3. Failure isolation: a strategy that raises contributes nothing
    4. De-duplication across strategies, first occurrence wins
    """

    def __init__(
        self,
        store: "CatalogStore",
        settings: Optional[Settings] = None,
        collaborative_filter: Optional[CollaborativeFilter] = None,
        content_recommender: Optional[ContentBasedRecommender] = None,
        hybrid_recommender: Optional[HybridRecommender] = None,
        trending_recommender: Optional[TrendingRecommender] = None,
        urgent_recommender: Optional[UrgentRecommender] = None,
    ):
        """
        Initialize the recommendation engine.

        Args:
            store: Profile and opportunity source
            settings: Tuning values, defaults to the process settings
            collaborative_filter: Override for the collaborative strategy
            content_recommender: Override for the content-based strategy
            hybrid_recommender: Override for the blender
            trending_recommender: Override for the trending strategy
            urgent_recommender: Override for the urgent strategy
        """
        cfg = settings or default_settings
        self.store = store
        self.default_limit = cfg.default_limit
        self.collaborative_filter = collaborative_filter or CollaborativeFilter(
            min_similarity=cfg.neighbor_threshold, max_neighbors=cfg.max_neighbors
        )
        self.content_recommender = content_recommender or ContentBasedRecommender(
            min_score=cfg.content_min_score,
            default_max_distance_km=cfg.default_max_distance_km,
        )
        self.hybrid_recommender = hybrid_recommender or HybridRecommender()
        self.trending_recommender = trending_recommender or TrendingRecommender(
            min_popularity=cfg.trending_min_popularity
        )
        self.urgent_recommender = urgent_recommender or UrgentRecommender(
            window_days=cfg.urgent_window_days
        )

    def get_personalized_recommendations(
        self,
        volunteer_id: str,
        options: Optional[RecommendationOptions] = None,
        now: Optional[datetime] = None,
    ) -> List[RecommendationItem]:
        """
        Get the blended recommendation list for a volunteer.

        Args:
            volunteer_id: Target volunteer ID
            options: Limit and strategy toggles
            now: Reference time for urgency, defaults to the current UTC time

        Returns:
            Unique items sorted by score, at most `options.limit` of them

        Raises:
            VolunteerNotFoundError: If the volunteer does not exist
        """
        options = options or RecommendationOptions(limit=self.default_limit)
        limit = options.limit
        target, opportunities = self._load_snapshot(volunteer_id)

        recommendations: List[RecommendationItem] = []

        if options.include_collaborative and options.include_content_based:
            recommendations.extend(
                self._hybrid(target, opportunities, math.ceil(limit * PRIMARY_SHARE))
            )
        elif options.include_collaborative:
            recommendations.extend(
                self._run_strategy(
                    "collaborative",
                    target,
                    lambda: self._collaborative(
                        target,
                        opportunities,
                        math.ceil(limit * COLLABORATIVE_ONLY_SHARE),
                    ),
                )
            )
        elif options.include_content_based:
            recommendations.extend(
                self._run_strategy(
                    "content-based",
                    target,
                    lambda: self.content_recommender.recommend(
                        target, opportunities, math.ceil(limit * PRIMARY_SHARE)
                    ),
                )
            )

        if options.include_trending:
            recommendations.extend(
                self._run_strategy(
                    "trending",
                    target,
                    lambda: self.trending_recommender.recommend(
                        target, opportunities, math.ceil(limit * TRENDING_SHARE)
                    ),
                )
            )

        if options.include_urgent:
            recommendations.extend(
                self._run_strategy(
                    "urgent",
                    target,
                    lambda: self.urgent_recommender.recommend(
                        target, opportunities, math.ceil(limit * URGENT_SHARE), now=now
                    ),
                )
            )

        unique_recommendations = []
        seen_ids = set()
        for item in recommendations:
            if item.opportunity_id not in seen_ids:
                seen_ids.add(item.opportunity_id)
                unique_recommendations.append(item)

        final = rank_items(unique_recommendations, limit)
        logger.info(
            f"Volunteer {target.id}: {len(final)} recommendations "
            f"from {len(recommendations)} candidates"
        )
        return final

    def get_collaborative_recommendations(
        self, volunteer_id: str, limit: int = 10
    ) -> List[RecommendationItem]:
        target, opportunities = self._load_snapshot(volunteer_id)
        return self._collaborative(target, opportunities, limit)

    def get_content_based_recommendations(
        self, volunteer_id: str, limit: int = 10
    ) -> List[RecommendationItem]:
        target, opportunities = self._load_snapshot(volunteer_id)
        return self.content_recommender.recommend(target, opportunities, limit)

    def get_hybrid_recommendations(
        self, volunteer_id: str, limit: int = 10
    ) -> List[RecommendationItem]:
        target, opportunities = self._load_snapshot(volunteer_id)
        return self._hybrid(target, opportunities, limit)

    def get_trending_recommendations(
        self, volunteer_id: str, limit: int = 5
    ) -> List[RecommendationItem]:
        target, opportunities = self._load_snapshot(volunteer_id)
        return self.trending_recommender.recommend(target, opportunities, limit)

    def get_urgent_recommendations(
        self, volunteer_id: str, limit: int = 5, now: Optional[datetime] = None
    ) -> List[RecommendationItem]:
        target, opportunities = self._load_snapshot(volunteer_id)
        return self.urgent_recommender.recommend(target, opportunities, limit, now=now)

    def get_recommendation_stats(
        self, volunteer_id: str, now: Optional[datetime] = None
    ) -> Dict[str, Any]:
        """
        Summarize what the engine would recommend to a volunteer.

        Args:
            volunteer_id: Target volunteer ID
            now: Reference time for urgency

        Returns:
            Dictionary with counts per strategy, average score and the most
            frequent categories and skills
        """
        items = self.get_personalized_recommendations(
            volunteer_id, RecommendationOptions(limit=STATS_LIMIT), now=now
        )

        stats: Dict[str, Any] = {
            "total_recommendations": len(items),
            "recommendations_by_type": {},
            "average_score": 0.0,
            "top_categories": [],
            "top_skills": [],
            "last_updated": datetime.now(timezone.utc).isoformat(),
        }
        if not items:
            return stats

        frame = pd.DataFrame(
            [{"type": item.strategy.value, "score": item.score} for item in items]
        )
        stats["recommendations_by_type"] = {
            str(kind): int(count)
            for kind, count in frame["type"].value_counts().items()
        }
        stats["average_score"] = float(frame["score"].mean())

        categories = pd.Series(
            [name for item in items for name in item.opportunity.category_names],
            dtype=object,
        )
        stats["top_categories"] = [
            {"category": name, "count": int(count)}
            for name, count in self._top_counts(categories)
        ]

        skills = pd.Series(
            [skill for item in items for skill in item.opportunity.required_skills],
            dtype=object,
        )
        stats["top_skills"] = [
            {"skill": name, "count": int(count)}
            for name, count in self._top_counts(skills)
        ]
        return stats

    def _load_snapshot(
        self, volunteer_id: str
    ) -> Tuple[VolunteerProfile, List[Opportunity]]:
        """Fetch the target and the published universe once per request."""
        target = self.store.get_volunteer(volunteer_id)
        opportunities = self.store.list_opportunities()
        return target, opportunities

    def _collaborative(
        self,
        target: VolunteerProfile,
        opportunities: List[Opportunity],
        limit: int,
    ) -> List[RecommendationItem]:
        lookup = {opportunity.id: opportunity for opportunity in opportunities}
        return self.collaborative_filter.recommend(
            target, self.store.list_volunteers(), lookup, limit
        )

    def _hybrid(
        self,
        target: VolunteerProfile,
        opportunities: List[Opportunity],
        limit: int,
    ) -> List[RecommendationItem]:
        """Blend both strategies, each fed twice the final limit."""
        collaborative = self._run_strategy(
            "collaborative",
            target,
            lambda: self._collaborative(target, opportunities, limit * 2),
        )
        content = self._run_strategy(
            "content-based",
            target,
            lambda: self.content_recommender.recommend(
                target, opportunities, limit * 2
            ),
        )
        return self.hybrid_recommender.blend(collaborative, content, limit)

    @staticmethod
    def _run_strategy(
        name: str,
        target: VolunteerProfile,
        strategy: Callable[[], List[RecommendationItem]],
    ) -> List[RecommendationItem]:
        """Run one strategy; a failure is logged and contributes nothing."""
        try:
            items = strategy()
        except Exception:
            logger.exception(f"{name} strategy failed for volunteer {target.id}")
            return []

        if not items:
            logger.debug(f"{name} strategy found nothing for volunteer {target.id}")
        return items

    @staticmethod
    def _top_counts(values: pd.Series, n: int = 5) -> List[Tuple[str, int]]:
        if values.empty:
            return []
        counts = values.value_counts(sort=False).sort_values(
            ascending=False, kind="stable"
        )
        return list(counts.head(n).items())
