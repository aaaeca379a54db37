"""
FastAPI application entry point for Juntos Volunteer Matching.
"""

import logging
from contextlib import asynccontextmanager

import uvicorn
from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from backend.src.juntos.api.router import api_router
from backend.src.juntos.core.config import settings
from backend.src.juntos.core.errors import JuntosError, create_error_response
from backend.src.juntos.database.models.base import create_tables

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan manager."""
    logging.basicConfig(
        level=settings.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    logger.info(f"Starting {settings.app_name} {settings.app_version}")

    if settings.database_url:
        try:
            create_tables()
            logger.info("Database initialized successfully")
        except Exception:
            logger.exception("Database initialization failed")
            raise
    else:
        logger.info("DATABASE_URL not set, serving the demo catalog")

    yield

    logger.info(f"Shutting down {settings.app_name}")


# Create FastAPI application
app = FastAPI(
    title=settings.app_name,
    description="Personalized volunteering opportunity recommendations",
    version=settings.app_version,
    docs_url="/docs",
    redoc_url="/redoc",
    lifespan=lifespan,
)

# Configure CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)


@app.exception_handler(JuntosError)
async def juntos_exception_handler(request: Request, exc: JuntosError):
    """Map domain errors to their status code and the error envelope."""
    return JSONResponse(status_code=exc.status_code, content=create_error_response(exc))


# Global exception handler
@app.exception_handler(Exception)
async def global_exception_handler(request: Request, exc: Exception):
    """Global exception handler for unhandled errors."""
    logger.exception(f"Unhandled error on {request.method} {request.url.path}")
    content = create_error_response(exc, "An unexpected error occurred")
    if settings.debug:
        content["error"]["message"] = str(exc)
    return JSONResponse(status_code=500, content=content)


# Include routers
app.include_router(api_router, prefix=settings.api_prefix)


@app.get("/")
async def root():
    """Root endpoint with API information."""
    return {
        "name": settings.app_name,
        "version": settings.app_version,
        "description": "Volunteering opportunity recommendation API",
        "docs_url": "/docs",
        "health_check": f"{settings.api_prefix}/health",
    }


if __name__ == "__main__":
    uvicorn.run(
        "backend.src.juntos.api.main:app",
        host=settings.api_host,
        port=settings.api_port,
        reload=settings.debug,
        log_level=settings.log_level.lower(),
    )
