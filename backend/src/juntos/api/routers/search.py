"""
FastAPI routes for opportunity search.
"""

from datetime import datetime
from typing import Any, Dict, List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel

from backend.src.juntos.api.dependencies import get_search_service
from backend.src.juntos.ml.recommendations.models import OpportunityStatus
from backend.src.juntos.services.search_service import (
    DEFAULT_SORT,
    SearchParams,
    SearchService,
)


class PaginationResponse(BaseModel):
    page: int
    limit: int
    total: int
    total_pages: int
    has_next: bool
    has_prev: bool


class SearchResponse(BaseModel):
    """API response model for opportunity search."""

    success: bool = True
    data: List[Dict[str, Any]]
    total: int
    pagination: PaginationResponse


router = APIRouter(prefix="/search", tags=["Search"])


@router.get("/opportunities", response_model=SearchResponse)
def search_opportunities(
    query: Optional[str] = None,
    status: Optional[OpportunityStatus] = None,
    volunteer_type: Optional[str] = None,
    city: Optional[str] = None,
    state: Optional[str] = None,
    category: Optional[str] = None,
    skill: Optional[str] = None,
    is_remote: Optional[bool] = None,
    start_date_from: Optional[datetime] = None,
    start_date_to: Optional[datetime] = None,
    has_available_slots: bool = False,
    latitude: Optional[float] = Query(None, ge=-90, le=90),
    longitude: Optional[float] = Query(None, ge=-180, le=180),
    radius_km: Optional[float] = Query(None, ge=0),
    sort_by: str = DEFAULT_SORT,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    """
    Search opportunities with filters, sorting and pagination.

    Inconsistent parameter combinations (latitude without longitude, an
    unknown sort key) are rejected with a 400 error envelope.
    """
    params = SearchParams(
        query=query,
        status=status,
        volunteer_type=volunteer_type,
        city=city,
        state=state,
        category=category,
        skill=skill,
        is_remote=is_remote,
        start_date_from=start_date_from,
        start_date_to=start_date_to,
        has_available_slots=has_available_slots,
        latitude=latitude,
        longitude=longitude,
        radius_km=radius_km,
        sort_by=sort_by,
        page=page,
        limit=limit,
    )
    result = search_service.search(params).to_dict()
    return SearchResponse(
        data=result["opportunities"],
        total=result["pagination"]["total"],
        pagination=result["pagination"],
    )


class SuggestionsResponse(BaseModel):
    success: bool = True
    query: str
    data: Dict[str, List[Dict[str, Any]]]


class FiltersResponse(BaseModel):
    success: bool = True
    data: Dict[str, Any]


class TagCount(BaseModel):
    tag: str
    count: int


class PopularTagsResponse(BaseModel):
    success: bool = True
    data: List[TagCount]


@router.get("/suggestions", response_model=SuggestionsResponse)
def search_suggestions(
    q: str = Query(""),
    kind: str = Query("all", alias="type"),
    search_service: SearchService = Depends(get_search_service),
):
    """Type-ahead suggestions for opportunities, categories, skills and cities."""
    return SuggestionsResponse(query=q, data=search_service.get_suggestions(q, kind))


@router.get("/filters", response_model=FiltersResponse)
def available_filters(search_service: SearchService = Depends(get_search_service)):
    return FiltersResponse(data=search_service.get_available_filters())


@router.get("/popular-tags", response_model=PopularTagsResponse)
def popular_tags(
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    return PopularTagsResponse(data=search_service.get_popular_tags(limit))
