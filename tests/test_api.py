import pytest
from fastapi.testclient import TestClient

from backend.src.juntos.api.dependencies import get_store
from backend.src.juntos.api.main import app
from backend.src.juntos.services.fixture_store import FixtureStore


@pytest.fixture
def client():
    store = FixtureStore()
    app.dependency_overrides[get_store] = lambda: store
    yield TestClient(app)
    app.dependency_overrides.clear()


def test_personalized_recommendations(client):
    response = client.get("/api/v1/recommendations/3")

    assert response.status_code == 200
    body = response.json()
    assert body["success"] is True
    assert body["volunteer_id"] == "3"
    assert body["total"] == 2
    assert [(item["opportunity"]["id"], item["type"]) for item in body["data"]] == [
        ("5", "trending"),
        ("7", "hybrid"),
    ]
    assert body["data"][1]["score"] == pytest.approx(0.37)


def test_toggles_via_query(client):
    response = client.get(
        "/api/v1/recommendations/2",
        params={
            "include_collaborative": "false",
            "include_content_based": "false",
            "include_trending": "false",
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert [item["opportunity"]["id"] for item in data] == ["7", "5"]
    assert {item["type"] for item in data} == {"urgent"}


@pytest.mark.parametrize(
    "path, limit",
    [
        ("/api/v1/recommendations/3", 0),
        ("/api/v1/recommendations/3", 101),
        ("/api/v1/recommendations/3/collaborative", 51),
        ("/api/v1/recommendations/3/trending", 21),
        ("/api/v1/recommendations/3/urgent", 0),
    ],
)
def test_limit_validation(client, path, limit):
    assert client.get(path, params={"limit": limit}).status_code == 422


def test_unknown_volunteer_is_404(client):
    response = client.get("/api/v1/recommendations/999")

    assert response.status_code == 404
    assert response.json() == {
        "success": False,
        "error": {
            "code": "volunteer_not_found",
            "message": "Volunteer 999 not found",
            "type": "VolunteerNotFoundError",
        },
    }


@pytest.mark.parametrize(
    "strategy, expected",
    [
        ("collaborative", [("7", "collaborative")]),
        ("content-based", [("7", "content-based")]),
        ("hybrid", [("7", "hybrid")]),
        ("trending", [("7", "trending"), ("5", "trending")]),
        ("urgent", [("7", "urgent"), ("5", "urgent")]),
    ],
)
def test_single_strategy_routes(client, strategy, expected):
    response = client.get(f"/api/v1/recommendations/3/{strategy}")

    assert response.status_code == 200
    data = response.json()["data"]
    assert [(item["opportunity"]["id"], item["type"]) for item in data] == expected


def test_stats(client):
    response = client.get("/api/v1/recommendations/3/stats")

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["total_recommendations"] == 2
    assert data["recommendations_by_type"] == {"trending": 1, "hybrid": 1}
    assert data["top_skills"][0] == {"skill": "Comunicação", "count": 2}


def test_stats_for_unknown_volunteer(client):
    assert client.get("/api/v1/recommendations/999/stats").status_code == 404


def test_search(client):
    response = client.get(
        "/api/v1/search/opportunities", params={"city": "paulo", "limit": 2}
    )

    assert response.status_code == 200
    body = response.json()
    assert body["total"] == 3
    assert len(body["data"]) == 2
    assert body["pagination"]["has_next"] is True


def test_search_with_radius(client):
    response = client.get(
        "/api/v1/search/opportunities",
        params={"latitude": -23.5505, "longitude": -46.6333, "radius_km": 20},
    )

    assert response.status_code == 200
    assert {item["id"] for item in response.json()["data"]} == {"1", "3", "6"}


def test_search_rejects_bad_sort(client):
    response = client.get("/api/v1/search/opportunities", params={"sort_by": "bogus"})

    assert response.status_code == 400
    assert response.json()["error"]["code"] == "invalid_search"


def test_search_rejects_out_of_range_latitude(client):
    response = client.get("/api/v1/search/opportunities", params={"latitude": 100})
    assert response.status_code == 422


def test_categorize(client):
    response = client.post(
        "/api/v1/categories/categorize",
        json={
            "title": "Suporte técnico remoto para idosos",
            "description": "Inclusão digital via internet",
            "required_skills": ["Tecnologia"],
        },
    )

    assert response.status_code == 200
    data = response.json()["data"]
    assert data["primary_category_id"] == "7"
    assert data["primary_category_name"] == "Tecnologia"
    assert data["secondary_category_ids"] == ["9"]


def test_categorize_requires_title(client):
    response = client.post("/api/v1/categories/categorize", json={"description": "x"})
    assert response.status_code == 422


def test_list_categories(client):
    body = client.get("/api/v1/categories").json()
    assert body["total"] == 10


def test_health(client):
    response = client.get("/api/v1/health")

    assert response.status_code == 200
    assert response.json()["status"] == "healthy"


def test_search_suggestions(client):
    response = client.get("/api/v1/search/suggestions", params={"q": "sp", "type": "cities"})

    assert response.status_code == 200
    body = response.json()
    assert body["query"] == "sp"
    assert [city["city"] for city in body["data"]["cities"]] == ["São Paulo", "Santos"]


def test_search_suggestions_rejects_unknown_type(client):
    response = client.get("/api/v1/search/suggestions", params={"q": "sp", "type": "x"})
    assert response.status_code == 400


def test_search_filters_and_popular_tags(client):
    filters = client.get("/api/v1/search/filters").json()["data"]
    tags = client.get("/api/v1/search/popular-tags", params={"limit": 2}).json()["data"]

    assert filters["volunteer_types"] == ["PRESENTIAL", "ONLINE", "HYBRID"]
    assert tags == [{"tag": "Tecnologia", "count": 3}, {"tag": "Comunicação", "count": 3}]


def test_opportunities_by_category(client):
    response = client.get("/api/v1/categories/7/opportunities")

    assert response.status_code == 200
    body = response.json()
    assert [item["id"] for item in body["data"]] == ["2", "5"]
    assert body["pagination"]["total"] == 2
