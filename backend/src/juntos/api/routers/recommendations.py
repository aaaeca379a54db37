"""
FastAPI routes for personalized opportunity recommendations.
"""

from typing import Any, Dict, List

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.src.juntos.api.dependencies import get_recommendation_engine
from backend.src.juntos.ml.recommendations import RecommendationEngine
from backend.src.juntos.ml.recommendations.models import (
    RecommendationItem,
    RecommendationOptions,
)


# Pydantic models for API responses
class RecommendationItemResponse(BaseModel):
    """API response model for one recommended opportunity."""

    opportunity: Dict[str, Any]
    score: float
    reasons: List[str]
    type: str


class RecommendationListResponse(BaseModel):
    """API response model for a list of recommendations."""

    success: bool = True
    volunteer_id: str
    data: List[RecommendationItemResponse]
    total: int


class TopCategoryResponse(BaseModel):
    category: str
    count: int


class TopSkillResponse(BaseModel):
    skill: str
    count: int


class RecommendationStatsData(BaseModel):
    """API response model for recommendation statistics."""

    total_recommendations: int
    recommendations_by_type: Dict[str, int]
    average_score: float
    top_categories: List[TopCategoryResponse]
    top_skills: List[TopSkillResponse]
    last_updated: str


class RecommendationStatsResponse(BaseModel):
    success: bool = True
    volunteer_id: str
    data: RecommendationStatsData


# Create router
router = APIRouter(prefix="/recommendations", tags=["Recommendations"])


def _to_response(
    volunteer_id: str, items: List[RecommendationItem]
) -> RecommendationListResponse:
    return RecommendationListResponse(
        volunteer_id=volunteer_id,
        data=[RecommendationItemResponse(**item.to_dict()) for item in items],
        total=len(items),
    )


@router.get("/{volunteer_id}", response_model=RecommendationListResponse)
def get_personalized_recommendations(
    volunteer_id: str,
    limit: int = Query(20, ge=1, le=100),
    include_collaborative: bool = True,
    include_content_based: bool = True,
    include_trending: bool = True,
    include_urgent: bool = True,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """
    Get personalized recommendations for a volunteer.

    Blends similar volunteers' favorites, profile matching, trending and
    urgent opportunities into one ranked list.
    """
    options = RecommendationOptions(
        limit=limit,
        include_collaborative=include_collaborative,
        include_content_based=include_content_based,
        include_trending=include_trending,
        include_urgent=include_urgent,
    )
    items = engine.get_personalized_recommendations(volunteer_id, options)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/collaborative", response_model=RecommendationListResponse)
def get_collaborative_recommendations(
    volunteer_id: str,
    limit: int = Query(10, ge=1, le=50),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Opportunities favorited by similar volunteers."""
    items = engine.get_collaborative_recommendations(volunteer_id, limit)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/content-based", response_model=RecommendationListResponse)
def get_content_based_recommendations(
    volunteer_id: str,
    limit: int = Query(10, ge=1, le=50),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Opportunities matching the volunteer's skills, interests and location."""
    items = engine.get_content_based_recommendations(volunteer_id, limit)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/hybrid", response_model=RecommendationListResponse)
def get_hybrid_recommendations(
    volunteer_id: str,
    limit: int = Query(10, ge=1, le=50),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    items = engine.get_hybrid_recommendations(volunteer_id, limit)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/trending", response_model=RecommendationListResponse)
def get_trending_recommendations(
    volunteer_id: str,
    limit: int = Query(5, ge=1, le=20),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    items = engine.get_trending_recommendations(volunteer_id, limit)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/urgent", response_model=RecommendationListResponse)
def get_urgent_recommendations(
    volunteer_id: str,
    limit: int = Query(5, ge=1, le=20),
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    """Opportunities starting within the next week, soonest first."""
    items = engine.get_urgent_recommendations(volunteer_id, limit)
    return _to_response(volunteer_id, items)


@router.get("/{volunteer_id}/stats", response_model=RecommendationStatsResponse)
def get_recommendation_stats(
    volunteer_id: str,
    engine: RecommendationEngine = Depends(get_recommendation_engine),
):
    stats = engine.get_recommendation_stats(volunteer_id)
    return RecommendationStatsResponse(volunteer_id=volunteer_id, data=stats)
