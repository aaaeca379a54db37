from datetime import datetime, timedelta, timezone

import pytest

from backend.src.juntos.core.config import Settings
from backend.src.juntos.ml.recommendations import RecommendationEngine
from backend.src.juntos.ml.recommendations.models import Opportunity, VolunteerProfile
from backend.src.juntos.services.fixture_store import FixtureStore

NOW = datetime(2026, 1, 15, 12, 0, tzinfo=timezone.utc)


@pytest.fixture
def now():
    return NOW


@pytest.fixture
def fixture_store():
    return FixtureStore(now=NOW)


@pytest.fixture
def engine(fixture_store):
    return RecommendationEngine(fixture_store, Settings())


@pytest.fixture
def make_volunteer():
    def _make(volunteer_id="v1", **fields):
        return VolunteerProfile.from_dict({"id": volunteer_id, **fields})

    return _make


@pytest.fixture
def make_opportunity():
    def _make(opportunity_id="o1", start_in_days=None, **fields):
        data = {"id": opportunity_id, "status": "PUBLISHED", **fields}
        if start_in_days is not None:
            data["start_date"] = NOW + timedelta(days=start_in_days)
        return Opportunity.from_dict(data)

    return _make
