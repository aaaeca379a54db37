"""
Database models for Juntos.
"""

from backend.src.juntos.database.models.opportunity import (
    Category,
    Opportunity,
    OpportunityCategory,
)
from backend.src.juntos.database.models.volunteer import (
    INTERACTION_TYPES,
    Volunteer,
    VolunteerInteraction,
)
from backend.src.juntos.database.models.base import (
    Base,
    SessionLocal,
    create_tables,
    get_db,
    get_engine,
    make_engine,
)

__all__ = [
    "Category",
    "Opportunity",
    "OpportunityCategory",
    "INTERACTION_TYPES",
    "Volunteer",
    "VolunteerInteraction",
    "Base",
    "SessionLocal",
    "create_tables",
    "get_db",
    "get_engine",
    "make_engine",
]
