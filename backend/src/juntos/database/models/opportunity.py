"""
Opportunity and category database models.
"""

from sqlalchemy import (
    JSON,
    Boolean,
    Column,
    DateTime,
    Float,
    ForeignKey,
    Integer,
    String,
    Text,
)
from sqlalchemy.orm import relationship
from sqlalchemy.sql import func

from backend.src.juntos.database.models.base import Base


class Category(Base):
    """Opportunity category (Educação, Tecnologia, ...)."""

    __tablename__ = "categories"

    id = Column(String, primary_key=True, index=True)
    name = Column(String, nullable=False)
    description = Column(Text)
    parent_id = Column(String, ForeignKey("categories.id"))  # subcategories
    is_active = Column(Boolean, default=True)

    # Relationships
    opportunity_links = relationship("OpportunityCategory", back_populates="category")


class Opportunity(Base):
    """Volunteering opportunity published by an institution."""

    __tablename__ = "opportunities"

    id = Column(String, primary_key=True, index=True)
    title = Column(String, nullable=False)
    description = Column(Text)
    status = Column(String, default="DRAFT", index=True)
    volunteer_type = Column(String)  # 'PRESENTIAL', 'ONLINE', 'HYBRID'

    required_skills = Column(JSON)
    required_skill_levels = Column(JSON)

    city = Column(String)
    state = Column(String)
    latitude = Column(Float)
    longitude = Column(Float)
    is_remote = Column(Boolean, default=False)

    max_volunteers = Column(Integer)
    current_volunteers = Column(Integer, default=0)

    # Maintained by the catalog, read-only here
    popularity_score = Column(Float, default=0.0)

    start_date = Column(DateTime)
    created_at = Column(DateTime, default=func.now())
    updated_at = Column(DateTime, default=func.now(), onupdate=func.now())

    # Relationships
    category_links = relationship(
        "OpportunityCategory",
        back_populates="opportunity",
        cascade="all, delete-orphan",
        order_by="OpportunityCategory.id",
    )


class OpportunityCategory(Base):
    """Category assigned to an opportunity."""

    __tablename__ = "opportunity_categories"

    id = Column(Integer, primary_key=True, index=True)
    opportunity_id = Column(String, ForeignKey("opportunities.id"), nullable=False)
    category_id = Column(String, ForeignKey("categories.id"), nullable=False)
    is_primary = Column(Boolean, default=False)

    created_at = Column(DateTime, default=func.now())

    # Relationships
    opportunity = relationship("Opportunity", back_populates="category_links")
    category = relationship("Category", back_populates="opportunity_links")
