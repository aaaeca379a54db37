"""
Main API router for Juntos.
"""

from fastapi import APIRouter

from .routers.categories import router as categories_router
from .routers.health import router as health_router
from .routers.recommendations import router as recommendations_router
from .routers.search import router as search_router

# Create main API router
api_router = APIRouter()

# Include sub-routers
api_router.include_router(health_router)
api_router.include_router(recommendations_router)
api_router.include_router(search_router)
api_router.include_router(categories_router)
