from backend.src.juntos.core.config import Settings
from backend.src.juntos.core.errors import (
    InvalidSearchError,
    VolunteerNotFoundError,
    create_error_response,
)


def test_recommendation_tunables_from_environment(monkeypatch):
    monkeypatch.setenv("RECO_NEIGHBOR_THRESHOLD", "0.35")
    monkeypatch.setenv("RECO_MAX_NEIGHBORS", "5")
    monkeypatch.setenv("RECO_URGENT_WINDOW_DAYS", "14")
    monkeypatch.setenv("CORS_ORIGINS", "https://a.example, https://b.example")
    monkeypatch.setenv("LOG_LEVEL", "debug")

    settings = Settings()

    assert settings.neighbor_threshold == 0.35
    assert settings.max_neighbors == 5
    assert settings.urgent_window_days == 14
    assert settings.cors_origins == ["https://a.example", "https://b.example"]
    assert settings.log_level == "DEBUG"


def test_defaults(monkeypatch):
    for key in ("RECO_CONTENT_MIN_SCORE", "RECO_TRENDING_MIN_POPULARITY", "DATABASE_URL"):
        monkeypatch.delenv(key, raising=False)

    settings = Settings()

    assert settings.content_min_score == 0.3
    assert settings.trending_min_popularity == 7.0
    assert settings.database_url == ""


def test_error_envelopes():
    assert create_error_response(VolunteerNotFoundError("42"))["error"] == {
        "code": "volunteer_not_found",
        "message": "Volunteer 42 not found",
        "type": "VolunteerNotFoundError",
    }
    assert InvalidSearchError("bad").status_code == 400
    assert create_error_response(ValueError("boom"), "Oops")["error"]["message"] == "Oops"
