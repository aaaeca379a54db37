"""
Shared FastAPI dependencies.
"""

from typing import Iterator, Optional

from fastapi import Depends

from backend.src.juntos.core.config import settings
from backend.src.juntos.database.models.base import SessionLocal, get_engine
from backend.src.juntos.ml.content_analysis import OpportunityCategorizer
from backend.src.juntos.ml.recommendations import RecommendationEngine
from backend.src.juntos.services.search_service import SearchService
from backend.src.juntos.services.stores import CatalogStore, build_store

# Demo catalog and categorizer are shared across requests (singleton pattern)
_fixture_store: Optional[CatalogStore] = None
_categorizer: Optional[OpportunityCategorizer] = None


def get_store() -> Iterator[CatalogStore]:
    """Yield the configured store, with a per-request session for the database."""
    global _fixture_store
    if not settings.database_url:
        if _fixture_store is None:
            _fixture_store = build_store(settings)
        yield _fixture_store
        return

    get_engine()
    db = SessionLocal()
    try:
        yield build_store(settings, db)
    finally:
        db.close()


def get_recommendation_engine(
    store: CatalogStore = Depends(get_store),
) -> RecommendationEngine:
    return RecommendationEngine(store, settings)


def get_search_service(store: CatalogStore = Depends(get_store)) -> SearchService:
    return SearchService(store)


def get_categorizer() -> OpportunityCategorizer:
    """Get or create categorizer instance."""
    global _categorizer
    if _categorizer is None:
        _categorizer = OpportunityCategorizer()
    return _categorizer
