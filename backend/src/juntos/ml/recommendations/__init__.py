"""
Recommendation Systems package for personalized opportunity discovery.

This package contains the recommendation strategies:
- Collaborative Filtering (similar volunteers' favorites)
- Content-Based Filtering (skills, interests, location, preferences)
- Hybrid blending of the two
- Trending and Urgent opportunities
- Main Recommendation Engine (unified interface)
"""

from backend.src.juntos.ml.recommendations.collaborative_filtering import (
    CollaborativeFilter,
)
from backend.src.juntos.ml.recommendations.content_based import ContentBasedRecommender
from backend.src.juntos.ml.recommendations.hybrid import HybridRecommender
from backend.src.juntos.ml.recommendations.recommendation_engine import (
    RecommendationEngine,
)
from backend.src.juntos.ml.recommendations.trending import TrendingRecommender
from backend.src.juntos.ml.recommendations.urgent import UrgentRecommender

__all__ = [
    "CollaborativeFilter",
    "ContentBasedRecommender",
    "HybridRecommender",
    "RecommendationEngine",
    "TrendingRecommender",
    "UrgentRecommender",
]
