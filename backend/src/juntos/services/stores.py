"""
Read-only store interfaces the recommendation core depends on.

The engine never decides where data comes from; a concrete store is picked
once by `build_store` and injected.
"""

import logging
from typing import List, Optional, Protocol

from sqlalchemy.orm import Session

from backend.src.juntos.core.config import Settings
from backend.src.juntos.ml.recommendations.models import (
    InteractionHistory,
    Opportunity,
    OpportunityStatus,
    VolunteerProfile,
)
from backend.src.juntos.services.database_store import DatabaseStore
from backend.src.juntos.services.fixture_store import FixtureStore

logger = logging.getLogger(__name__)


class ProfileStore(Protocol):
    def get_volunteer(self, volunteer_id: str) -> VolunteerProfile:
        """Return the profile or raise VolunteerNotFoundError."""
        ...

    def list_volunteers(self) -> List[VolunteerProfile]:
        ...

    def get_interaction_history(self, volunteer_id: str) -> InteractionHistory:
        ...


class OpportunityStore(Protocol):
    def list_opportunities(
        self, status: Optional[OpportunityStatus] = OpportunityStatus.PUBLISHED
    ) -> List[Opportunity]:
        """List opportunities with the given status; None lists all of them."""
        ...

    def get_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        ...


class CatalogStore(ProfileStore, OpportunityStore, Protocol):
    """Both halves served by one backend."""


def build_store(settings: Settings, db: Optional[Session] = None) -> CatalogStore:
    """
    Pick the store backing the recommendation engine.

    Args:
        settings: Application settings; a non-empty DATABASE_URL selects the
            database store
        db: Session to read from; required when a database is configured.
            The caller owns it and closes it.

    Returns:
        DatabaseStore when a database is configured, otherwise FixtureStore

    Raises:
        ValueError: If a database is configured but no session is given
    """
    if settings.database_url:
        if db is None:
            raise ValueError("A database session is required when DATABASE_URL is set")
        logger.debug("Using database-backed store")
        return DatabaseStore(db)

    logger.debug("DATABASE_URL not set, using demo fixture store")
    return FixtureStore()
