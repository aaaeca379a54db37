"""
SQLAlchemy-backed profile and opportunity store.
"""

import logging
from collections import defaultdict
from typing import Dict, Iterable, List, Optional, Set

from sqlalchemy.orm import Session, selectinload

from backend.src.juntos.core.errors import VolunteerNotFoundError
from backend.src.juntos.database.models.opportunity import (
    Opportunity as OpportunityRow,
    OpportunityCategory,
)
from backend.src.juntos.database.models.volunteer import (
    INTERACTION_TYPES,
    Volunteer,
    VolunteerInteraction,
)
from backend.src.juntos.ml.recommendations.models import (
    InteractionHistory,
    Opportunity,
    OpportunityStatus,
    VolunteerProfile,
)

logger = logging.getLogger(__name__)


class DatabaseStore:
    """
    Reads volunteers, interaction history and opportunities from the database
    and hands them out as immutable domain snapshots.
    """

    def __init__(self, db: Session):
        self.db = db

    def get_volunteer(self, volunteer_id: str) -> VolunteerProfile:
        row = self.db.query(Volunteer).filter(Volunteer.id == str(volunteer_id)).first()
        if row is None:
            raise VolunteerNotFoundError(str(volunteer_id))
        histories = self._load_histories([row.id])
        return self._to_profile(row, histories.get(row.id, {}))

    def list_volunteers(self) -> List[VolunteerProfile]:
        rows = self.db.query(Volunteer).order_by(Volunteer.id).all()
        histories = self._load_histories(row.id for row in rows)
        return [self._to_profile(row, histories.get(row.id, {})) for row in rows]

    def get_interaction_history(self, volunteer_id: str) -> InteractionHistory:
        return self.get_volunteer(volunteer_id).history

    def list_opportunities(
        self, status: Optional[OpportunityStatus] = OpportunityStatus.PUBLISHED
    ) -> List[Opportunity]:
        query = self.db.query(OpportunityRow).options(
            selectinload(OpportunityRow.category_links).selectinload(
                OpportunityCategory.category
            )
        )
        if status is not None:
            query = query.filter(OpportunityRow.status == status.value)
        return [self._to_opportunity(row) for row in query.order_by(OpportunityRow.id)]

    def get_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        row = (
            self.db.query(OpportunityRow)
            .filter(OpportunityRow.id == str(opportunity_id))
            .first()
        )
        return self._to_opportunity(row) if row else None

    def _load_histories(
        self, volunteer_ids: Iterable[str]
    ) -> Dict[str, Dict[str, Set[str]]]:
        """Group interactions per volunteer and type in a single query."""
        ids = list(volunteer_ids)
        histories: Dict[str, Dict[str, Set[str]]] = defaultdict(
            lambda: defaultdict(set)
        )
        if not ids:
            return histories

        interactions = (
            self.db.query(VolunteerInteraction)
            .filter(VolunteerInteraction.volunteer_id.in_(ids))
            .all()
        )
        for interaction in interactions:
            if interaction.interaction_type not in INTERACTION_TYPES:
                logger.warning(
                    f"Skipping interaction {interaction.id} with unknown type "
                    f"{interaction.interaction_type!r}"
                )
                continue
            histories[interaction.volunteer_id][interaction.interaction_type].add(
                interaction.opportunity_id
            )
        return histories

    @staticmethod
    def _to_profile(
        row: Volunteer, history: Dict[str, Set[str]]
    ) -> VolunteerProfile:
        return VolunteerProfile.from_dict(
            {
                "id": row.id,
                "first_name": row.first_name,
                "skills": row.skills,
                "skill_levels": row.skill_levels,
                "interests": row.interests,
                "latitude": row.latitude,
                "longitude": row.longitude,
                "preferences": {
                    "max_distance_km": row.max_distance_km,
                    "preferred_categories": row.preferred_categories,
                    "avoid_categories": row.avoid_categories,
                    "min_hours_per_week": row.min_hours_per_week,
                    "max_hours_per_week": row.max_hours_per_week,
                },
                "history": {
                    f"{kind}_ids": history.get(kind, set())
                    for kind in INTERACTION_TYPES
                },
            }
        )

    @staticmethod
    def _to_opportunity(row: OpportunityRow) -> Opportunity:
        return Opportunity.from_dict(
            {
                "id": row.id,
                "title": row.title,
                "description": row.description,
                "required_skills": row.required_skills,
                "required_skill_levels": row.required_skill_levels,
                "categories": [
                    {"id": link.category.id, "name": link.category.name}
                    for link in row.category_links
                ],
                "latitude": row.latitude,
                "longitude": row.longitude,
                "status": row.status,
                "popularity_score": row.popularity_score,
                "start_date": row.start_date,
                "volunteer_type": row.volunteer_type,
                "city": row.city,
                "state": row.state,
                "is_remote": row.is_remote,
                "max_volunteers": row.max_volunteers,
                "current_volunteers": row.current_volunteers,
                "created_at": row.created_at,
            }
        )
