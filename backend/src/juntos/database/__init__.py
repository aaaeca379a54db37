"""
Database package for Juntos.
"""

from .models import (
    Category,
    Opportunity,
    Volunteer,
    VolunteerInteraction,
    get_db,
    create_tables,
)

__all__ = [
    "Category",
    "Opportunity",
    "Volunteer",
    "VolunteerInteraction",
    "get_db",
    "create_tables",
]
