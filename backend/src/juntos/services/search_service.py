"""
Opportunity search with filtering, sorting and pagination.
"""

import logging
import math
from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Optional

import numpy as np

from backend.src.juntos.core.errors import InvalidSearchError
from backend.src.juntos.ml.recommendations.models import (
    Category,
    Opportunity,
    OpportunityStatus,
    SkillLevel,
    as_utc,
)
from backend.src.juntos.ml.shared.geo import distances_km
from backend.src.juntos.services.stores import OpportunityStore

logger = logging.getLogger(__name__)

SORT_FIELDS = ("title", "created_at", "start_date", "volunteers_needed", "distance")
DEFAULT_SORT = "created_at"
SORT_LABELS = {
    "title": "Título A-Z",
    "created_at": "Mais recentes",
    "start_date": "Data de início",
    "volunteers_needed": "Mais vagas disponíveis",
    "distance": "Mais próximas",
}
VOLUNTEER_TYPES = ("PRESENTIAL", "ONLINE", "HYBRID")

SUGGESTION_KINDS = ("opportunities", "categories", "skills", "cities")
MIN_SUGGESTION_LENGTH = 2
MAX_SUGGESTIONS = 5


@dataclass
class SearchParams:
    """Search filters; unset fields do not filter."""

    query: Optional[str] = None
    status: Optional[OpportunityStatus] = None
    volunteer_type: Optional[str] = None
    city: Optional[str] = None
    state: Optional[str] = None
    category: Optional[str] = None
    skill: Optional[str] = None
    is_remote: Optional[bool] = None
    start_date_from: Optional[datetime] = None
    start_date_to: Optional[datetime] = None
    has_available_slots: bool = False
    latitude: Optional[float] = None
    longitude: Optional[float] = None
    radius_km: Optional[float] = None
    sort_by: str = DEFAULT_SORT
    page: int = 1
    limit: int = 20

    def validate(self):
        """Raise InvalidSearchError for parameter combinations that cannot run."""
        if self.page < 1:
            raise InvalidSearchError("page must be at least 1")
        if self.limit < 1:
            raise InvalidSearchError("limit must be at least 1")
        if self.sort_by not in SORT_FIELDS:
            raise InvalidSearchError(
                f"Unsupported sort_by '{self.sort_by}', expected one of {', '.join(SORT_FIELDS)}"
            )
        if (self.latitude is None) != (self.longitude is None):
            raise InvalidSearchError("latitude and longitude must be given together")
        if self.radius_km is not None and self.latitude is None:
            raise InvalidSearchError("radius_km requires latitude and longitude")
        if self.radius_km is not None and self.radius_km < 0:
            raise InvalidSearchError("radius_km must not be negative")

    @property
    def has_origin(self) -> bool:
        return self.latitude is not None and self.longitude is not None


@dataclass
class SearchResult:
    opportunities: List[Opportunity]
    total: int
    page: int
    limit: int
    distances: Dict[str, float] = field(default_factory=dict)

    @property
    def total_pages(self) -> int:
        return math.ceil(self.total / self.limit) if self.limit else 0

    @property
    def pagination(self) -> Dict[str, Any]:
        return {
            "page": self.page,
            "limit": self.limit,
            "total": self.total,
            "total_pages": self.total_pages,
            "has_next": self.page < self.total_pages,
            "has_prev": self.page > 1,
        }

    def to_dict(self) -> Dict[str, Any]:
        opportunities = []
        for opportunity in self.opportunities:
            data = opportunity.to_dict()
            if opportunity.id in self.distances:
                data["distance_km"] = round(self.distances[opportunity.id], 2)
            opportunities.append(data)
        return {"opportunities": opportunities, "pagination": self.pagination}


class SearchService:
    """
    Searches the opportunity catalog.

    Every status is searchable; pass `status` to narrow it down.
    """

    def __init__(self, store: OpportunityStore):
        self.store = store

    def search(self, params: SearchParams) -> SearchResult:
        """
        Run a search.

        Args:
            params: Filters, sort key and page

        Returns:
            SearchResult with the requested page and pagination info

        Raises:
            InvalidSearchError: If the parameters are inconsistent
        """
        params.validate()

        opportunities = [
            opportunity
            for opportunity in self.store.list_opportunities(status=None)
            if self._matches(opportunity, params)
        ]

        distances: Dict[str, float] = {}
        if params.has_origin:
            distances = self._distances(opportunities, params.latitude, params.longitude)
            if params.radius_km is not None:
                opportunities = [
                    opportunity
                    for opportunity in opportunities
                    if opportunity.id in distances
                    and distances[opportunity.id] <= params.radius_km
                ]

        opportunities = self._sort(opportunities, params.sort_by, distances)

        offset = (params.page - 1) * params.limit
        page_items = opportunities[offset : offset + params.limit]
        logger.debug(
            f"Search matched {len(opportunities)} opportunities, "
            f"returning page {params.page}"
        )
        return SearchResult(
            opportunities=page_items,
            total=len(opportunities),
            page=params.page,
            limit=params.limit,
            distances={
                opportunity.id: distances[opportunity.id]
                for opportunity in page_items
                if opportunity.id in distances
            },
        )

    def get_suggestions(
        self, query: str, kind: str = "all", limit: int = MAX_SUGGESTIONS
    ) -> Dict[str, List[Dict[str, Any]]]:
        """
        Type-ahead suggestions for a partial query.

        Args:
            query: Text typed so far; fewer than two characters suggests nothing
            kind: 'all' or one of SUGGESTION_KINDS
            limit: Maximum suggestions per kind

        Returns:
            Dict with one suggestion list per kind, empty for kinds not requested

        Raises:
            InvalidSearchError: If `kind` is unknown
        """
        if kind != "all" and kind not in SUGGESTION_KINDS:
            raise InvalidSearchError(
                f"Unsupported suggestion type '{kind}', expected 'all' or one of "
                f"{', '.join(SUGGESTION_KINDS)}"
            )

        suggestions: Dict[str, List[Dict[str, Any]]] = {
            name: [] for name in SUGGESTION_KINDS
        }
        text = (query or "").strip().lower()
        if len(text) < MIN_SUGGESTION_LENGTH:
            return suggestions

        def wanted(name: str) -> bool:
            return kind in ("all", name)

        catalog = self.store.list_opportunities(status=None)

        if wanted("opportunities"):
            suggestions["opportunities"] = [
                {"id": o.id, "title": o.title, "type": "opportunity"}
                for o in catalog
                if text in o.title.lower() or text in o.description.lower()
            ][:limit]

        if wanted("categories"):
            suggestions["categories"] = [
                {"id": category.id, "name": category.name, "type": "category"}
                for category in self._unique_categories(catalog)
                if text in category.name.lower()
            ][:limit]

        if wanted("skills"):
            suggestions["skills"] = [
                {"name": skill, "type": "skill"}
                for skill in self._unique_skills(catalog)
                if text in skill.lower()
            ][:limit]

        if wanted("cities"):
            places = dict.fromkeys((o.city, o.state or "") for o in catalog if o.city)
            suggestions["cities"] = [
                {"city": city, "state": state, "type": "city"}
                for city, state in places
                if text in city.lower() or text in state.lower()
            ][:limit]

        return suggestions

    def get_available_filters(self) -> Dict[str, Any]:
        """Filter values that currently occur in the catalog, plus the fixed enums."""
        catalog = self.store.list_opportunities(status=None)
        return {
            "statuses": [status.value for status in OpportunityStatus],
            "volunteer_types": list(VOLUNTEER_TYPES),
            "categories": [
                {"id": category.id, "name": category.name}
                for category in self._unique_categories(catalog)
            ],
            "skills": self._unique_skills(catalog),
            "cities": list(dict.fromkeys(o.city for o in catalog if o.city)),
            "states": list(dict.fromkeys(o.state for o in catalog if o.state)),
            "skill_levels": [level.value for level in SkillLevel],
            "sort_options": [
                {"value": value, "label": SORT_LABELS[value]} for value in SORT_FIELDS
            ],
        }

    def get_popular_tags(self, limit: int = 20) -> List[Dict[str, Any]]:
        """Most frequent category names, required skills and cities."""
        counts: Counter = Counter()
        catalog = self.store.list_opportunities(status=None)
        for opportunity in catalog:
            counts.update(opportunity.category_names)
        for opportunity in catalog:
            counts.update(opportunity.required_skills)
        counts.update(o.city for o in catalog if o.city)
        return [{"tag": tag, "count": count} for tag, count in counts.most_common(limit)]

    def get_opportunities_by_category(
        self, category_id: str, page: int = 1, limit: int = 20
    ) -> SearchResult:
        """
        Opportunities tagged with a category, in catalog order.

        Raises:
            InvalidSearchError: If page or limit is below 1
        """
        SearchParams(page=page, limit=limit).validate()
        category_id = str(category_id)
        matches = [
            opportunity
            for opportunity in self.store.list_opportunities(status=None)
            if any(category.id == category_id for category in opportunity.categories)
        ]
        offset = (page - 1) * limit
        return SearchResult(
            opportunities=matches[offset : offset + limit],
            total=len(matches),
            page=page,
            limit=limit,
        )

    @staticmethod
    def _unique_categories(opportunities: List[Opportunity]) -> List[Category]:
        """Categories by first occurrence of their id."""
        categories: Dict[str, Category] = {}
        for opportunity in opportunities:
            for category in opportunity.categories:
                categories.setdefault(category.id, category)
        return list(categories.values())

    @staticmethod
    def _unique_skills(opportunities: List[Opportunity]) -> List[str]:
        return list(
            dict.fromkeys(skill for o in opportunities for skill in o.required_skills)
        )

    @staticmethod
    def _matches(opportunity: Opportunity, params: SearchParams) -> bool:
        if params.query:
            query = params.query.lower()
            if not (
                query in opportunity.title.lower()
                or query in opportunity.description.lower()
                or any(query in skill.lower() for skill in opportunity.required_skills)
            ):
                return False

        if params.status is not None and opportunity.status != params.status:
            return False
        if params.volunteer_type and opportunity.volunteer_type != params.volunteer_type:
            return False
        if params.city and not (
            opportunity.city and params.city.lower() in opportunity.city.lower()
        ):
            return False
        if params.state and opportunity.state != params.state:
            return False
        if params.category and not any(
            params.category.lower() in name.lower()
            for name in opportunity.category_names
        ):
            return False
        if params.skill and not any(
            params.skill.lower() in skill.lower()
            for skill in opportunity.required_skills
        ):
            return False
        if params.is_remote is not None and opportunity.is_remote != params.is_remote:
            return False

        start_from = as_utc(params.start_date_from)
        if start_from and not (
            opportunity.start_date and opportunity.start_date >= start_from
        ):
            return False
        start_to = as_utc(params.start_date_to)
        if start_to and not (opportunity.start_date and opportunity.start_date <= start_to):
            return False

        if params.has_available_slots and not (
            opportunity.open_slots is not None and opportunity.open_slots > 0
        ):
            return False
        return True

    @staticmethod
    def _distances(
        opportunities: List[Opportunity], latitude: float, longitude: float
    ) -> Dict[str, float]:
        """Distances from the origin, only for opportunities with coordinates."""
        if not opportunities:
            return {}

        lats = [o.location.latitude if o.location else np.nan for o in opportunities]
        lngs = [o.location.longitude if o.location else np.nan for o in opportunities]
        values = distances_km(latitude, longitude, lats, lngs)
        return {
            opportunity.id: float(value)
            for opportunity, value in zip(opportunities, values)
            if not np.isnan(value)
        }

    @staticmethod
    def _sort(
        opportunities: List[Opportunity], sort_by: str, distances: Dict[str, float]
    ) -> List[Opportunity]:
        """Stable sort; items missing the sort key go last."""
        if sort_by == "title":
            return sorted(opportunities, key=lambda o: o.title.casefold())
        if sort_by == "start_date":
            return sorted(
                opportunities,
                key=lambda o: (
                    o.start_date is None,
                    o.start_date.timestamp() if o.start_date else 0.0,
                ),
            )
        if sort_by == "volunteers_needed":
            return sorted(
                opportunities,
                key=lambda o: (o.open_slots is None, -(o.open_slots or 0)),
            )
        if sort_by == "distance":
            if not distances:
                return list(opportunities)
            return sorted(
                opportunities,
                key=lambda o: (o.id not in distances, distances.get(o.id, 0.0)),
            )
        # created_at, newest first
        return sorted(
            opportunities,
            key=lambda o: (
                o.created_at is None,
                -o.created_at.timestamp() if o.created_at else 0.0,
            ),
        )
