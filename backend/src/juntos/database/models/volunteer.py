"""
Volunteer-related database models.
"""

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backend.src.juntos.database.models.base import Base

INTERACTION_TYPES = ("applied", "completed", "favorited", "rejected")


class Volunteer(Base):
    """Volunteer profile as kept by the platform."""

    __tablename__ = "volunteers"

    id = Column(String, primary_key=True, index=True)
    first_name = Column(String)
    last_name = Column(String)

    # JSON lists / maps
    skills = Column(JSON)
    skill_levels = Column(JSON)
    interests = Column(JSON)

    latitude = Column(Float)
    longitude = Column(Float)

    # Preferences
    max_distance_km = Column(Float)
    preferred_categories = Column(JSON)
    avoid_categories = Column(JSON)
    min_hours_per_week = Column(Integer)
    max_hours_per_week = Column(Integer)

    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    interactions = relationship(
        "VolunteerInteraction", back_populates="volunteer", cascade="all, delete-orphan"
    )


class VolunteerInteraction(Base):
    """One applied / completed / favorited / rejected event."""

    __tablename__ = "volunteer_interactions"

    id = Column(Integer, primary_key=True, index=True)
    volunteer_id = Column(String, ForeignKey("volunteers.id"), nullable=False)
    opportunity_id = Column(String, ForeignKey("opportunities.id"), nullable=False)
    interaction_type = Column(String, nullable=False)  # one of INTERACTION_TYPES

    created_at = Column(DateTime, default=func.now())

    # Relationships
    volunteer = relationship("Volunteer", back_populates="interactions")
