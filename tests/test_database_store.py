from datetime import datetime

import pytest
from sqlalchemy.orm import Session

from backend.src.juntos.core.config import Settings
from backend.src.juntos.core.errors import VolunteerNotFoundError
from backend.src.juntos.database.models import (
    Category,
    Opportunity,
    OpportunityCategory,
    Volunteer,
    VolunteerInteraction,
    create_tables,
    make_engine,
)
from backend.src.juntos.ml.recommendations import RecommendationEngine
from backend.src.juntos.ml.recommendations.models import OpportunityStatus, StrategyTag
from backend.src.juntos.services.database_store import DatabaseStore
from backend.src.juntos.services.search_service import SearchParams, SearchService
from backend.src.juntos.services.stores import build_store


@pytest.fixture
def db():
    engine = make_engine("sqlite://")
    create_tables(engine)
    session = Session(engine)

    environment = Category(id="3", name="Meio Ambiente")
    technology = Category(id="7", name="Tecnologia")
    start = datetime(2026, 1, 20, 9, 0)

    session.add_all(
        [
            Opportunity(
                id="10",
                title="Mutirão de limpeza de praia",
                status="PUBLISHED",
                required_skills=["Comunicação"],
                latitude=-23.9608,
                longitude=-46.3336,
                popularity_score=8.0,
                start_date=start,
                category_links=[OpportunityCategory(category=environment, is_primary=True)],
            ),
            Opportunity(
                id="11",
                title="Site da ONG",
                status="DRAFT",
                required_skills=None,
                category_links=[OpportunityCategory(category=technology, is_primary=True)],
            ),
            Opportunity(id="12", title="Horta", status="PUBLISHED"),
            Volunteer(
                id="a",
                first_name="Bia",
                skills=["Comunicação"],
                interests=["Meio Ambiente"],
                latitude=-23.96,
                longitude=-46.33,
                max_distance_km=10,
            ),
            Volunteer(id="b", first_name="Caio", skills=["Comunicação"], interests=None),
        ]
    )
    session.flush()
    session.add_all(
        [
            VolunteerInteraction(volunteer_id="a", opportunity_id="12", interaction_type="applied"),
            VolunteerInteraction(volunteer_id="b", opportunity_id="10", interaction_type="favorited"),
            VolunteerInteraction(volunteer_id="b", opportunity_id="12", interaction_type="viewed"),
        ]
    )
    session.commit()

    yield session
    session.close()


def test_get_volunteer_maps_row_and_history(db):
    volunteer = DatabaseStore(db).get_volunteer("a")

    assert volunteer.label == "Bia"
    assert volunteer.skills == ("Comunicação",)
    assert volunteer.location.latitude == pytest.approx(-23.96)
    assert volunteer.preferences.max_distance_km == 10
    assert volunteer.history.applied_ids == {"12"}
    assert volunteer.history.seen_ids == {"12"}


def test_null_collections_and_unknown_interactions(db):
    volunteer = DatabaseStore(db).get_volunteer("b")

    assert volunteer.interests == ()
    assert volunteer.history.favorited_ids == {"10"}
    assert "12" not in volunteer.history.seen_ids


def test_unknown_volunteer(db):
    with pytest.raises(VolunteerNotFoundError):
        DatabaseStore(db).get_volunteer("zzz")


def test_list_opportunities_by_status(db):
    store = DatabaseStore(db)

    published = store.list_opportunities()
    everything = store.list_opportunities(status=None)

    assert [o.id for o in published] == ["10", "12"]
    assert [o.id for o in everything] == ["10", "11", "12"]
    assert published[0].category_names == ["Meio Ambiente"]
    assert published[0].start_date.tzinfo is not None
    assert store.get_opportunity("11").status == OpportunityStatus.DRAFT
    assert store.get_opportunity("11").required_skills == ()
    assert store.get_opportunity("nope") is None


def test_list_volunteers_ordered(db):
    assert [v.id for v in DatabaseStore(db).list_volunteers()] == ["a", "b"]


def test_engine_over_database(db):
    engine = RecommendationEngine(DatabaseStore(db), Settings())

    items = engine.get_hybrid_recommendations("a")

    assert [(i.opportunity_id, i.strategy) for i in items] == [("10", StrategyTag.HYBRID)]


def test_build_store_uses_database_when_configured(db):
    settings = Settings()
    settings.database_url = "sqlite://"

    assert isinstance(build_store(settings, db), DatabaseStore)


def test_interaction_history_by_volunteer(db):
    store = DatabaseStore(db)

    history = store.get_interaction_history("b")

    assert history.favorited_ids == {"10"}
    assert history.applied_ids == frozenset()
    with pytest.raises(VolunteerNotFoundError):
        store.get_interaction_history("zzz")


def test_unknown_status_row_does_not_break_search(db):
    db.add(Opportunity(id="13", title="Arquivada", status="ARCHIVED"))
    db.commit()
    store = DatabaseStore(db)

    result = SearchService(store).search(SearchParams())

    assert "13" in {opportunity.id for opportunity in result.opportunities}
    assert store.get_opportunity("13").status == OpportunityStatus.DRAFT
    assert "13" not in {o.id for o in store.list_opportunities()}


def test_build_store_requires_session_for_database():
    settings = Settings()
    settings.database_url = "sqlite://"

    with pytest.raises(ValueError):
        build_store(settings)
