"""
In-memory demo catalog served when no database is configured.
"""

import logging
from datetime import datetime, timedelta, timezone
from typing import Any, Dict, List, Optional

from backend.src.juntos.core.errors import VolunteerNotFoundError
from backend.src.juntos.ml.recommendations.models import (
    InteractionHistory,
    Opportunity,
    OpportunityStatus,
    VolunteerProfile,
)

logger = logging.getLogger(__name__)

DEMO_VOLUNTEERS: List[Dict[str, Any]] = [
    {
        "id": "1",
        "first_name": "Ana",
        "skills": ["Ensino", "Matemática", "Português", "Paciência"],
        "skill_levels": {
            "Ensino": "EXPERT",
            "Matemática": "EXPERT",
            "Português": "ADVANCED",
            "Paciência": "EXPERT",
        },
        "interests": ["Educação", "Assistência Social"],
        "latitude": -23.5505,
        "longitude": -46.6333,
        "preferences": {
            "max_distance_km": 30,
            "min_hours_per_week": 2,
            "max_hours_per_week": 8,
            "preferred_categories": ["Educação", "Assistência Social"],
            "avoid_categories": [],
        },
        "history": {
            "applied_ids": ["1", "3"],
            "completed_ids": ["2"],
            "favorited_ids": ["1", "4"],
            "rejected_ids": ["5"],
        },
    },
    {
        "id": "2",
        "first_name": "Carlos",
        "skills": ["JavaScript", "HTML/CSS", "React", "Node.js", "Git"],
        "skill_levels": {
            "JavaScript": "EXPERT",
            "HTML/CSS": "EXPERT",
            "React": "ADVANCED",
            "Node.js": "ADVANCED",
            "Git": "ADVANCED",
        },
        "interests": ["Tecnologia", "Proteção Animal"],
        "latitude": -23.5615,
        "longitude": -46.6565,
        "preferences": {
            "max_distance_km": 50,
            "min_hours_per_week": 5,
            "max_hours_per_week": 15,
            "preferred_categories": ["Tecnologia", "Proteção Animal"],
            "avoid_categories": ["Educação"],
        },
        "history": {
            "applied_ids": ["2"],
            "completed_ids": [],
            "favorited_ids": ["2"],
            "rejected_ids": ["1", "3"],
        },
    },
    {
        "id": "3",
        "first_name": "Maria",
        "skills": ["Organização de Eventos", "Comunicação", "Liderança", "Marketing"],
        "skill_levels": {
            "Organização de Eventos": "EXPERT",
            "Comunicação": "EXPERT",
            "Liderança": "ADVANCED",
            "Marketing": "INTERMEDIATE",
        },
        "interests": ["Assistência Social", "Alimentação"],
        "latitude": -23.5475,
        "longitude": -46.6361,
        "preferences": {
            "max_distance_km": 25,
            "min_hours_per_week": 4,
            "max_hours_per_week": 12,
            "preferred_categories": ["Assistência Social", "Alimentação"],
            "avoid_categories": ["Tecnologia"],
        },
        "history": {
            "applied_ids": ["3", "4"],
            "completed_ids": ["1"],
            "favorited_ids": ["3"],
            "rejected_ids": ["2"],
        },
    },
    {
        "id": "4",
        "first_name": "Júlia",
        "skills": ["Comunicação", "Liderança", "Marketing"],
        "skill_levels": {
            "Comunicação": "ADVANCED",
            "Liderança": "INTERMEDIATE",
            "Marketing": "ADVANCED",
        },
        "interests": ["Assistência Social", "Meio Ambiente"],
        "latitude": -23.9608,
        "longitude": -46.3336,
        "preferences": {
            "max_distance_km": 40,
            "preferred_categories": ["Meio Ambiente"],
            "avoid_categories": [],
        },
        "history": {
            "applied_ids": ["3"],
            "completed_ids": [],
            "favorited_ids": ["3", "7"],
            "rejected_ids": [],
        },
    },
]

# Offsets in days relative to the moment the store is built
_DEMO_OPPORTUNITIES: List[Dict[str, Any]] = [
    {
        "id": "1",
        "title": "Aulas de reforço para crianças carentes",
        "description": "Aulas de reforço em matemática e português para crianças "
        "de 8 a 12 anos em situação de vulnerabilidade social.",
        "volunteer_type": "PRESENTIAL",
        "status": "PUBLISHED",
        "max_volunteers": 5,
        "current_volunteers": 2,
        "city": "São Paulo",
        "state": "SP",
        "latitude": -23.5505,
        "longitude": -46.6333,
        "is_remote": False,
        "required_skills": ["Ensino", "Matemática", "Português"],
        "required_skill_levels": {
            "Ensino": "INTERMEDIATE",
            "Matemática": "ADVANCED",
            "Português": "ADVANCED",
        },
        "categories": [
            {"id": "1", "name": "Educação"},
            {"id": "4", "name": "Assistência Social"},
        ],
        "popularity_score": 8.5,
        "start_in_days": 7,
        "created_days_ago": 2,
    },
    {
        "id": "2",
        "title": "Desenvolvimento de site para ONG",
        "description": "Desenvolvimento de website para uma ONG que trabalha "
        "com proteção animal.",
        "volunteer_type": "ONLINE",
        "status": "PUBLISHED",
        "max_volunteers": 3,
        "current_volunteers": 1,
        "is_remote": True,
        "required_skills": ["JavaScript", "HTML/CSS", "React", "Git"],
        "required_skill_levels": {
            "JavaScript": "ADVANCED",
            "HTML/CSS": "ADVANCED",
            "React": "INTERMEDIATE",
            "Git": "INTERMEDIATE",
        },
        "categories": [
            {"id": "7", "name": "Tecnologia"},
            {"id": "8", "name": "Proteção Animal"},
        ],
        "popularity_score": 7.2,
        "start_in_days": 3,
        "created_days_ago": 1,
    },
    {
        "id": "3",
        "title": "Campanha de arrecadação de alimentos",
        "description": "Organização de campanha para arrecadar alimentos não "
        "perecíveis para famílias em situação de vulnerabilidade social.",
        "volunteer_type": "PRESENTIAL",
        "status": "PUBLISHED",
        "max_volunteers": 10,
        "current_volunteers": 4,
        "city": "São Paulo",
        "state": "SP",
        "latitude": -23.5505,
        "longitude": -46.6333,
        "is_remote": False,
        "required_skills": ["Organização de Eventos", "Comunicação", "Liderança"],
        "required_skill_levels": {
            "Organização de Eventos": "INTERMEDIATE",
            "Comunicação": "ADVANCED",
            "Liderança": "INTERMEDIATE",
        },
        "categories": [
            {"id": "4", "name": "Assistência Social"},
            {"id": "11", "name": "Alimentação"},
        ],
        "popularity_score": 9.1,
        "start_in_days": 14,
        "created_days_ago": 3,
    },
    {
        "id": "4",
        "title": "Aulas de música para crianças",
        "description": "Ensino de música para crianças de 6 a 12 anos em "
        "comunidades carentes.",
        "volunteer_type": "PRESENTIAL",
        "status": "PUBLISHED",
        "max_volunteers": 4,
        "current_volunteers": 2,
        "city": "Rio de Janeiro",
        "state": "RJ",
        "latitude": -22.9068,
        "longitude": -43.1729,
        "is_remote": False,
        "required_skills": ["Música", "Violão", "Flauta", "Ensino"],
        "required_skill_levels": {
            "Música": "ADVANCED",
            "Violão": "ADVANCED",
            "Flauta": "INTERMEDIATE",
            "Ensino": "INTERMEDIATE",
        },
        "categories": [
            {"id": "5", "name": "Cultura"},
            {"id": "20", "name": "Música"},
        ],
        "popularity_score": 6.8,
        "start_in_days": 10,
        "created_days_ago": 5,
    },
    {
        "id": "5",
        "title": "Suporte técnico remoto para idosos",
        "description": "Projeto de inclusão digital para idosos via videochamada.",
        "volunteer_type": "ONLINE",
        "status": "PUBLISHED",
        "max_volunteers": 8,
        "current_volunteers": 3,
        "is_remote": True,
        "required_skills": ["Tecnologia", "Paciência", "Comunicação", "Suporte Técnico"],
        "required_skill_levels": {
            "Tecnologia": "ADVANCED",
            "Paciência": "EXPERT",
            "Comunicação": "ADVANCED",
            "Suporte Técnico": "INTERMEDIATE",
        },
        "categories": [
            {"id": "7", "name": "Tecnologia"},
            {"id": "9", "name": "Idosos"},
        ],
        "popularity_score": 7.5,
        "start_in_days": 5,
        "created_days_ago": 4,
    },
    {
        "id": "6",
        "title": "Plantio de mudas no parque",
        "description": "Mutirão de plantio de árvores nativas em parque municipal.",
        "volunteer_type": "PRESENTIAL",
        "status": "DRAFT",
        "max_volunteers": 20,
        "current_volunteers": 0,
        "city": "São Paulo",
        "state": "SP",
        "latitude": -23.5874,
        "longitude": -46.6576,
        "is_remote": False,
        "required_skills": ["Jardinagem"],
        "categories": [{"id": "3", "name": "Meio Ambiente"}],
        "popularity_score": 9.5,
        "start_in_days": 2,
        "created_days_ago": 0,
    },
    {
        "id": "7",
        "title": "Mutirão de limpeza de praia",
        "description": "Recolhimento de resíduos e campanha de conscientização "
        "ambiental na orla.",
        "volunteer_type": "PRESENTIAL",
        "status": "PUBLISHED",
        "max_volunteers": 30,
        "current_volunteers": 12,
        "city": "Santos",
        "state": "SP",
        "latitude": -23.9608,
        "longitude": -46.3336,
        "is_remote": False,
        "required_skills": ["Organização de Eventos", "Comunicação"],
        "categories": [{"id": "3", "name": "Meio Ambiente"}],
        "popularity_score": 8.0,
        "start_in_days": 2,
        "created_days_ago": 6,
    },
]


def build_demo_opportunities(now: datetime) -> List[Opportunity]:
    """Materialize the demo catalog with dates anchored at `now`."""
    opportunities = []
    for raw in _DEMO_OPPORTUNITIES:
        data = dict(raw)
        data["start_date"] = now + timedelta(days=data.pop("start_in_days"))
        data["created_at"] = now - timedelta(days=data.pop("created_days_ago"))
        opportunities.append(Opportunity.from_dict(data))
    return opportunities


class FixtureStore:
    """Profile and opportunity store over the static demo catalog."""

    def __init__(
        self,
        volunteers: Optional[List[VolunteerProfile]] = None,
        opportunities: Optional[List[Opportunity]] = None,
        now: Optional[datetime] = None,
    ):
        now = now or datetime.now(timezone.utc)
        if volunteers is None:
            volunteers = [VolunteerProfile.from_dict(v) for v in DEMO_VOLUNTEERS]
        if opportunities is None:
            opportunities = build_demo_opportunities(now)

        self._volunteers = {volunteer.id: volunteer for volunteer in volunteers}
        self._opportunities = list(opportunities)
        logger.debug(
            f"Fixture store loaded {len(self._volunteers)} volunteers and "
            f"{len(self._opportunities)} opportunities"
        )

    def get_volunteer(self, volunteer_id: str) -> VolunteerProfile:
        volunteer = self._volunteers.get(str(volunteer_id))
        if volunteer is None:
            raise VolunteerNotFoundError(str(volunteer_id))
        return volunteer

    def list_volunteers(self) -> List[VolunteerProfile]:
        return list(self._volunteers.values())

    def get_interaction_history(self, volunteer_id: str) -> InteractionHistory:
        return self.get_volunteer(volunteer_id).history

    def list_opportunities(
        self, status: Optional[OpportunityStatus] = OpportunityStatus.PUBLISHED
    ) -> List[Opportunity]:
        if status is None:
            return list(self._opportunities)
        return [opp for opp in self._opportunities if opp.status == status]

    def get_opportunity(self, opportunity_id: str) -> Optional[Opportunity]:
        for opportunity in self._opportunities:
            if opportunity.id == str(opportunity_id):
                return opportunity
        return None
