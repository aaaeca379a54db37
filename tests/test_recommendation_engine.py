import logging

import pytest

from backend.src.juntos.core.config import Settings
from backend.src.juntos.core.errors import VolunteerNotFoundError
from backend.src.juntos.ml.recommendations import RecommendationEngine, TrendingRecommender
from backend.src.juntos.ml.recommendations.models import (
    OpportunityStatus,
    RecommendationOptions,
    StrategyTag,
)
from backend.src.juntos.services.fixture_store import FixtureStore


def summary(items):
    return [(item.opportunity_id, item.strategy, round(item.score, 4)) for item in items]


def test_blended_demo_recommendations(engine, now):
    items = engine.get_personalized_recommendations("3", now=now)

    # Trending wins opp 5; opp 7 was first seen by the hybrid blend
    assert summary(items) == [
        ("5", StrategyTag.TRENDING, 0.75),
        ("7", StrategyTag.HYBRID, 0.37),
    ]
    assert items[1].reasons == [
        "Similar volunteer (Júlia) also favorited this",
        "Skills match: Organização de Eventos, Comunicação",
    ]


def test_first_occurrence_wins_over_higher_later_score(engine, now):
    items = engine.get_personalized_recommendations("1", now=now)

    assert summary(items) == [("7", StrategyTag.COLLABORATIVE, 0.125)]


def test_trending_and_urgent_fill_when_nothing_personal(engine, now):
    items = engine.get_personalized_recommendations("2", now=now)

    assert summary(items) == [
        ("7", StrategyTag.TRENDING, 0.8),
        ("5", StrategyTag.TRENDING, 0.75),
    ]


def test_never_recommends_seen_or_unpublished(engine, fixture_store, now):
    for volunteer in fixture_store.list_volunteers():
        items = engine.get_personalized_recommendations(volunteer.id, now=now)
        ids = {item.opportunity_id for item in items}
        assert not ids & volunteer.history.seen_ids
        assert "6" not in ids  # draft


def test_results_are_unique_sorted_and_limited(engine, now):
    items = engine.get_personalized_recommendations(
        "4", RecommendationOptions(limit=3), now=now
    )

    ids = [item.opportunity_id for item in items]
    scores = [item.score for item in items]
    assert len(ids) == len(set(ids)) <= 3
    assert scores == sorted(scores, reverse=True)


def test_is_deterministic(engine, now):
    first = engine.get_personalized_recommendations("4", now=now)
    second = engine.get_personalized_recommendations("4", now=now)
    assert summary(first) == summary(second)
    assert [i.reasons for i in first] == [i.reasons for i in second]


def test_toggles_select_strategies(engine, now):
    options = RecommendationOptions(
        include_collaborative=False,
        include_content_based=False,
        include_trending=False,
        include_urgent=True,
    )

    items = engine.get_personalized_recommendations("2", options, now=now)

    assert summary(items) == [
        ("7", StrategyTag.URGENT, round(0.8 - 2 / 7 * 0.3, 4)),
        ("5", StrategyTag.URGENT, round(0.8 - 5 / 7 * 0.3, 4)),
    ]


def test_collaborative_only_mode(engine, now):
    options = RecommendationOptions(
        include_content_based=False, include_trending=False, include_urgent=False
    )

    items = engine.get_personalized_recommendations("3", options, now=now)

    assert summary(items) == [("7", StrategyTag.COLLABORATIVE, 0.3)]


def test_all_toggles_off_returns_empty(engine, now):
    options = RecommendationOptions(
        include_collaborative=False,
        include_content_based=False,
        include_trending=False,
        include_urgent=False,
    )
    assert engine.get_personalized_recommendations("3", options, now=now) == []


def test_unknown_volunteer_raises(engine):
    with pytest.raises(VolunteerNotFoundError) as exc_info:
        engine.get_personalized_recommendations("404")
    assert exc_info.value.status_code == 404

    with pytest.raises(VolunteerNotFoundError):
        engine.get_trending_recommendations("404")


class ExplodingTrending(TrendingRecommender):
    def recommend(self, target, candidates, limit=5):
        raise RuntimeError("popularity feed down")


def test_failing_strategy_is_isolated(fixture_store, now, caplog):
    engine = RecommendationEngine(
        fixture_store, Settings(), trending_recommender=ExplodingTrending()
    )

    with caplog.at_level(logging.ERROR):
        items = engine.get_personalized_recommendations("2", now=now)

    assert summary(items) == [
        ("7", StrategyTag.URGENT, round(0.8 - 2 / 7 * 0.3, 4)),
        ("5", StrategyTag.URGENT, round(0.8 - 5 / 7 * 0.3, 4)),
    ]
    assert "trending strategy failed for volunteer 2" in caplog.text


def test_empty_catalog(make_volunteer, now):
    store = FixtureStore(volunteers=[make_volunteer("v", skills=["Git"])], opportunities=[])
    engine = RecommendationEngine(store, Settings())

    assert engine.get_personalized_recommendations("v", now=now) == []
    assert engine.get_recommendation_stats("v", now=now)["total_recommendations"] == 0


def test_single_strategy_entry_points(engine, now):
    assert summary(engine.get_collaborative_recommendations("3")) == [
        ("7", StrategyTag.COLLABORATIVE, 0.3)
    ]
    assert summary(engine.get_content_based_recommendations("3")) == [
        ("7", StrategyTag.CONTENT_BASED, 0.4)
    ]
    assert summary(engine.get_hybrid_recommendations("3")) == [
        ("7", StrategyTag.HYBRID, 0.37)
    ]
    assert [i.opportunity_id for i in engine.get_trending_recommendations("3", 1)] == [
        "7"
    ]
    assert [i.opportunity_id for i in engine.get_urgent_recommendations("3", now=now)] == [
        "7",
        "5",
    ]


def test_recommendation_stats(engine, now):
    stats = engine.get_recommendation_stats("3", now=now)

    assert stats["total_recommendations"] == 2
    assert stats["recommendations_by_type"] == {"trending": 1, "hybrid": 1}
    assert stats["average_score"] == pytest.approx((0.75 + 0.37) / 2)
    assert {entry["category"]: entry["count"] for entry in stats["top_categories"]} == {
        "Tecnologia": 1,
        "Idosos": 1,
        "Meio Ambiente": 1,
    }
    assert stats["top_skills"][0] == {"skill": "Comunicação", "count": 2}
    assert "last_updated" in stats


def test_settings_tune_components(fixture_store, now):
    settings = Settings()
    settings.trending_min_popularity = 9.0

    engine = RecommendationEngine(fixture_store, settings)

    assert engine.get_trending_recommendations("2") == []
    assert fixture_store.get_opportunity("6").status == OpportunityStatus.DRAFT


def test_fixture_interaction_history(fixture_store):
    history = fixture_store.get_interaction_history("1")

    assert history.applied_ids == {"1", "3"}
    assert history.seen_ids == {"1", "2", "3", "4", "5"}
    with pytest.raises(VolunteerNotFoundError):
        fixture_store.get_interaction_history("999")
