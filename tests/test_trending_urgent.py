from datetime import timedelta

import pytest

from backend.src.juntos.ml.recommendations.models import StrategyTag
from backend.src.juntos.ml.recommendations.trending import TrendingRecommender
from backend.src.juntos.ml.recommendations.urgent import UrgentRecommender


def test_trending_threshold_and_order(make_volunteer, make_opportunity):
    volunteer = make_volunteer("v", history={"favorited_ids": ["seen"]})
    opportunities = [
        make_opportunity("low", popularity_score=6.9),
        make_opportunity("edge", popularity_score=7.0),
        make_opportunity("hot", popularity_score=9.5),
        make_opportunity("seen", popularity_score=9.9),
        make_opportunity("draft", status="DRAFT", popularity_score=9.9),
    ]

    items = TrendingRecommender().recommend(volunteer, opportunities)

    assert [(i.opportunity_id, i.score) for i in items] == [
        ("hot", pytest.approx(0.95)),
        ("edge", pytest.approx(0.7)),
    ]
    assert items[0].strategy == StrategyTag.TRENDING
    assert items[0].reasons == ["Trending opportunity", "High volunteer interest"]


def test_trending_limit(make_volunteer, make_opportunity):
    opportunities = [
        make_opportunity(f"o{i}", popularity_score=8.0 + i / 10) for i in range(6)
    ]
    items = TrendingRecommender().recommend(make_volunteer("v"), opportunities, limit=2)
    assert [i.opportunity_id for i in items] == ["o5", "o4"]


def test_urgent_three_days_out(make_volunteer, make_opportunity, now):
    opportunity = make_opportunity("o1", start_in_days=3)

    items = UrgentRecommender().recommend(make_volunteer("v"), [opportunity], now=now)

    assert len(items) == 1
    assert items[0].score == pytest.approx(0.8 - 3 / 7 * 0.3)
    assert items[0].reasons == ["Starts in 3 days", "Urgent opportunity"]
    assert items[0].strategy == StrategyTag.URGENT


def test_urgent_window_bounds(make_volunteer, make_opportunity, now):
    opportunities = [
        make_opportunity("past", start_in_days=-1),
        make_opportunity("late", start_in_days=10),
        make_opportunity("edge", start_in_days=7),
        make_opportunity("undated"),
    ]

    items = UrgentRecommender().recommend(make_volunteer("v"), opportunities, now=now)

    assert [i.opportunity_id for i in items] == ["edge"]
    assert items[0].score == pytest.approx(0.5)


def test_urgent_rounds_partial_days_up(make_volunteer, make_opportunity, now):
    opportunity = make_opportunity("o1", start_date=now + timedelta(hours=20))

    items = UrgentRecommender().recommend(make_volunteer("v"), [opportunity], now=now)

    assert items[0].reasons[0] == "Starts in 1 day"
    assert items[0].score == pytest.approx(0.8 - 1 / 7 * 0.3)


def test_urgent_soonest_first_and_skips_seen(make_volunteer, make_opportunity, now):
    volunteer = make_volunteer("v", history={"rejected_ids": ["o2"]})
    opportunities = [
        make_opportunity("o1", start_in_days=5),
        make_opportunity("o2", start_in_days=1),
        make_opportunity("o3", start_in_days=2),
    ]

    items = UrgentRecommender().recommend(volunteer, opportunities, now=now)

    assert [i.opportunity_id for i in items] == ["o3", "o1"]
