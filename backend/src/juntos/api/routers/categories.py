"""
FastAPI routes for opportunity categorization.
"""

from typing import List, Optional

from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field

from backend.src.juntos.api.dependencies import get_categorizer, get_search_service
from backend.src.juntos.api.routers.search import SearchResponse
from backend.src.juntos.ml.content_analysis import CATEGORY_NAMES, OpportunityCategorizer
from backend.src.juntos.services.search_service import SearchService


class CategorizeRequest(BaseModel):
    """Free text of an opportunity to categorize."""

    title: str = Field(..., min_length=1)
    description: str = ""
    required_skills: List[str] = Field(default_factory=list)


class CategorySuggestionResponse(BaseModel):
    primary_category_id: str
    primary_category_name: Optional[str]
    secondary_category_ids: List[str]
    tags: List[str]
    confidence: float


class CategorizeResponse(BaseModel):
    success: bool = True
    data: CategorySuggestionResponse


class CategoryResponse(BaseModel):
    id: str
    name: str


class CategoryListResponse(BaseModel):
    success: bool = True
    data: List[CategoryResponse]
    total: int


router = APIRouter(prefix="/categories", tags=["Categories"])


@router.get("", response_model=CategoryListResponse)
def list_categories():
    """List the top-level opportunity categories."""
    categories = [
        CategoryResponse(id=category_id, name=name)
        for category_id, name in CATEGORY_NAMES.items()
    ]
    return CategoryListResponse(data=categories, total=len(categories))


@router.post("/categorize", response_model=CategorizeResponse)
def categorize_opportunity(
    request: CategorizeRequest,
    categorizer: OpportunityCategorizer = Depends(get_categorizer),
):
    """Suggest categories and tags for an opportunity from its text."""
    suggestion = categorizer.categorize(
        request.title, request.description, request.required_skills
    )
    return CategorizeResponse(data=suggestion.to_dict())


@router.get("/{category_id}/opportunities", response_model=SearchResponse)
def opportunities_by_category(
    category_id: str,
    page: int = Query(1, ge=1),
    limit: int = Query(20, ge=1, le=100),
    search_service: SearchService = Depends(get_search_service),
):
    """Opportunities tagged with a category, paginated."""
    result = search_service.get_opportunities_by_category(category_id, page, limit)
    data = result.to_dict()
    return SearchResponse(
        data=data["opportunities"],
        total=result.total,
        pagination=data["pagination"],
    )
