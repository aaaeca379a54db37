"""
Domain snapshots consumed and produced by the recommendation core.

Profiles and opportunities are frozen: every strategy works on the same
immutable view for the duration of one aggregation call. Collections are
normalized on construction so partially-onboarded profiles behave like
empty ones instead of failing.
"""

import logging
from dataclasses import dataclass, field
from datetime import datetime, timezone
from enum import Enum
from typing import Any, Dict, FrozenSet, List, Mapping, Optional, Tuple

logger = logging.getLogger(__name__)


class SkillLevel(str, Enum):
    BEGINNER = "BEGINNER"
    INTERMEDIATE = "INTERMEDIATE"
    ADVANCED = "ADVANCED"
    EXPERT = "EXPERT"


class OpportunityStatus(str, Enum):
    DRAFT = "DRAFT"
    PUBLISHED = "PUBLISHED"
    CLOSED = "CLOSED"
    CANCELLED = "CANCELLED"


class StrategyTag(str, Enum):
    """Which algorithm produced a recommendation item."""

    COLLABORATIVE = "collaborative"
    CONTENT_BASED = "content-based"
    HYBRID = "hybrid"
    TRENDING = "trending"
    URGENT = "urgent"


def clean_strings(values: Any) -> List[str]:
    """
    Stringify a stored collection, dropping None and blank entries.

    A bare string is one value, not a sequence of characters.
    """
    if not values:
        return []
    if isinstance(values, str):
        values = [values]
    cleaned = []
    for value in values:
        if value is None:
            continue
        text = str(value).strip()
        if text:
            cleaned.append(text)
    return cleaned


def unique_strings(values: Any) -> Tuple[str, ...]:
    """Order-preserving de-duplication; None becomes an empty tuple."""
    return tuple(dict.fromkeys(clean_strings(values)))


def string_set(values: Any) -> FrozenSet[str]:
    return frozenset(clean_strings(values))


def as_utc(value: Any) -> Optional[datetime]:
    """Parse a datetime or ISO string; naive values are taken as UTC."""
    if value is None or value == "":
        return None
    if isinstance(value, str):
        value = datetime.fromisoformat(value.replace("Z", "+00:00"))
    if value.tzinfo is None:
        value = value.replace(tzinfo=timezone.utc)
    return value


def parse_skill_levels(raw: Optional[Mapping[str, Any]]) -> Dict[str, SkillLevel]:
    levels = {}
    for skill, level in (raw or {}).items():
        try:
            levels[str(skill)] = SkillLevel(str(level).upper())
        except ValueError:
            logger.debug(f"Ignoring unknown skill level {level!r} for {skill}")
    return levels


def parse_status(raw: Any) -> OpportunityStatus:
    """Unknown statuses are treated as drafts so they never get recommended."""
    if not raw:
        return OpportunityStatus.DRAFT
    value = str(getattr(raw, "value", raw)).upper()
    try:
        return OpportunityStatus(value)
    except ValueError:
        logger.warning(f"Unknown opportunity status {raw!r}, treating it as DRAFT")
        return OpportunityStatus.DRAFT


@dataclass(frozen=True)
class GeoPoint:
    latitude: float
    longitude: float

    @classmethod
    def from_coordinates(
        cls, latitude: Optional[float], longitude: Optional[float]
    ) -> Optional["GeoPoint"]:
        if latitude is None or longitude is None:
            return None
        return cls(float(latitude), float(longitude))


@dataclass(frozen=True)
class Category:
    id: str
    name: str


@dataclass(frozen=True)
class VolunteerPreferences:
    max_distance_km: Optional[float] = None
    preferred_categories: FrozenSet[str] = frozenset()
    avoid_categories: FrozenSet[str] = frozenset()
    min_hours_per_week: Optional[int] = None
    max_hours_per_week: Optional[int] = None

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "VolunteerPreferences":
        data = data or {}
        max_distance = data.get("max_distance_km")
        return cls(
            max_distance_km=float(max_distance) if max_distance else None,
            preferred_categories=string_set(data.get("preferred_categories")),
            avoid_categories=string_set(data.get("avoid_categories")),
            min_hours_per_week=data.get("min_hours_per_week"),
            max_hours_per_week=data.get("max_hours_per_week"),
        )


@dataclass(frozen=True)
class InteractionHistory:
    applied_ids: FrozenSet[str] = frozenset()
    completed_ids: FrozenSet[str] = frozenset()
    favorited_ids: FrozenSet[str] = frozenset()
    rejected_ids: FrozenSet[str] = frozenset()

    @property
    def seen_ids(self) -> FrozenSet[str]:
        """Every opportunity the volunteer has interacted with in any way."""
        return (
            self.applied_ids | self.completed_ids | self.favorited_ids | self.rejected_ids
        )

    @classmethod
    def from_dict(cls, data: Optional[Mapping[str, Any]]) -> "InteractionHistory":
        data = data or {}
        return cls(
            applied_ids=string_set(data.get("applied_ids")),
            completed_ids=string_set(data.get("completed_ids")),
            favorited_ids=string_set(data.get("favorited_ids")),
            rejected_ids=string_set(data.get("rejected_ids")),
        )


@dataclass(frozen=True)
class VolunteerProfile:
    id: str
    display_name: str = ""
    skills: Tuple[str, ...] = ()
    skill_levels: Mapping[str, SkillLevel] = field(default_factory=dict)
    interests: Tuple[str, ...] = ()
    location: Optional[GeoPoint] = None
    preferences: VolunteerPreferences = field(default_factory=VolunteerPreferences)
    history: InteractionHistory = field(default_factory=InteractionHistory)

    @property
    def label(self) -> str:
        return self.display_name or self.id

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "VolunteerProfile":
        location = data.get("location") or {}
        return cls(
            id=str(data["id"]),
            display_name=data.get("display_name") or data.get("first_name") or "",
            skills=unique_strings(data.get("skills")),
            skill_levels=parse_skill_levels(data.get("skill_levels")),
            interests=unique_strings(data.get("interests")),
            location=GeoPoint.from_coordinates(
                data.get("latitude", location.get("latitude")),
                data.get("longitude", location.get("longitude")),
            ),
            preferences=VolunteerPreferences.from_dict(data.get("preferences")),
            history=InteractionHistory.from_dict(data.get("history")),
        )


@dataclass(frozen=True)
class Opportunity:
    id: str
    title: str = ""
    description: str = ""
    # Order kept and duplicates allowed: the skill ratio divides by its length
    required_skills: Tuple[str, ...] = ()
    required_skill_levels: Mapping[str, SkillLevel] = field(default_factory=dict)
    categories: Tuple[Category, ...] = ()
    location: Optional[GeoPoint] = None
    status: OpportunityStatus = OpportunityStatus.DRAFT
    popularity_score: float = 0.0
    start_date: Optional[datetime] = None

    # Catalog metadata used by search
    volunteer_type: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    is_remote: bool = False
    max_volunteers: Optional[int] = None
    current_volunteers: int = 0
    created_at: Optional[datetime] = None

    @property
    def is_published(self) -> bool:
        return self.status == OpportunityStatus.PUBLISHED

    @property
    def category_names(self) -> List[str]:
        return [category.name for category in self.categories]

    @property
    def open_slots(self) -> Optional[int]:
        if self.max_volunteers is None:
            return None
        return self.max_volunteers - self.current_volunteers

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Opportunity":
        location = data.get("location") or {}
        categories = tuple(
            Category(id=str(cat.get("id", "")), name=str(cat.get("name", "")))
            for cat in (data.get("categories") or [])
        )
        return cls(
            id=str(data["id"]),
            title=data.get("title") or "",
            description=data.get("description") or "",
            required_skills=tuple(clean_strings(data.get("required_skills"))),
            required_skill_levels=parse_skill_levels(data.get("required_skill_levels")),
            categories=categories,
            location=GeoPoint.from_coordinates(
                data.get("latitude", location.get("latitude")),
                data.get("longitude", location.get("longitude")),
            ),
            status=parse_status(data.get("status")),
            popularity_score=float(data.get("popularity_score") or 0.0),
            start_date=as_utc(data.get("start_date")),
            volunteer_type=data.get("volunteer_type"),
            city=data.get("city"),
            state=data.get("state"),
            is_remote=bool(data.get("is_remote", False)),
            max_volunteers=data.get("max_volunteers"),
            current_volunteers=int(data.get("current_volunteers") or 0),
            created_at=as_utc(data.get("created_at")),
        )

    def to_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "title": self.title,
            "description": self.description,
            "required_skills": list(self.required_skills),
            "required_skill_levels": {
                skill: level.value for skill, level in self.required_skill_levels.items()
            },
            "categories": [{"id": c.id, "name": c.name} for c in self.categories],
            "latitude": self.location.latitude if self.location else None,
            "longitude": self.location.longitude if self.location else None,
            "status": self.status.value,
            "popularity_score": self.popularity_score,
            "start_date": self.start_date.isoformat() if self.start_date else None,
            "volunteer_type": self.volunteer_type,
            "city": self.city,
            "state": self.state,
            "is_remote": self.is_remote,
            "max_volunteers": self.max_volunteers,
            "current_volunteers": self.current_volunteers,
            "created_at": self.created_at.isoformat() if self.created_at else None,
        }


@dataclass
class RecommendationItem:
    """One ranked suggestion. Reasons are append-only and never de-duplicated."""

    opportunity: Opportunity
    score: float
    strategy: StrategyTag
    reasons: List[str] = field(default_factory=list)

    @property
    def opportunity_id(self) -> str:
        return self.opportunity.id

    def to_dict(self) -> Dict[str, Any]:
        return {
            "opportunity": self.opportunity.to_dict(),
            "score": self.score,
            "reasons": list(self.reasons),
            "type": self.strategy.value,
        }


@dataclass(frozen=True)
class RecommendationOptions:
    limit: int = 20
    include_collaborative: bool = True
    include_content_based: bool = True
    include_trending: bool = True
    include_urgent: bool = True


def is_candidate(opportunity: Opportunity, seen_ids: FrozenSet[str]) -> bool:
    """Published and never interacted with: the only recommendable state."""
    return opportunity.is_published and opportunity.id not in seen_ids


def rank_items(items: List[RecommendationItem], limit: int) -> List[RecommendationItem]:
    """Stable sort by score descending, then truncate."""
    return sorted(items, key=lambda item: item.score, reverse=True)[: max(limit, 0)]
