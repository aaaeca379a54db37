"""
Base configuration for database models.
"""

from typing import Optional

from sqlalchemy import create_engine
from sqlalchemy.engine import Engine
from sqlalchemy.orm import declarative_base, sessionmaker

from backend.src.juntos.core.config import settings

Base = declarative_base()

_engine: Optional[Engine] = None
SessionLocal = sessionmaker(autocommit=False, autoflush=False)


def make_engine(database_url: str) -> Engine:
    """Create an engine, relaxing SQLite's thread check for the API workers."""
    return create_engine(
        database_url,
        connect_args={"check_same_thread": False}
        if database_url.startswith("sqlite")
        else {},
    )


def get_engine() -> Engine:
    """Engine for the configured DATABASE_URL, created on first use."""
    global _engine
    if _engine is None:
        if not settings.database_url:
            raise RuntimeError("DATABASE_URL is not configured")
        _engine = make_engine(settings.database_url)
        SessionLocal.configure(bind=_engine)
    return _engine


# Database dependency
def get_db():
    """Get database session."""
    get_engine()
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


# Create tables
def create_tables(engine: Optional[Engine] = None):
    """Create all database tables."""
    # Import all models to register them with SQLAlchemy
    from . import opportunity, volunteer  # noqa: F401

    Base.metadata.create_all(bind=engine or get_engine())
