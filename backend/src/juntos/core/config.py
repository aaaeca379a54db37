"""
Core configuration and settings for Juntos.
"""

import os
from typing import List
from dataclasses import dataclass
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()


@dataclass
class Settings:
    """Application settings."""

    # Application
    app_name: str = "Juntos Volunteer Matching"
    app_version: str = "1.0.0"
    debug: bool = False
    log_level: str = "INFO"

    # API
    api_host: str = "0.0.0.0"
    api_port: int = 8000
    api_prefix: str = "/api/v1"

    # Database (empty means the in-memory demo catalog is served)
    database_url: str = ""

    # CORS
    cors_origins: List[str] = None  # type: ignore

    # Recommendation tuning
    neighbor_threshold: float = 0.2
    max_neighbors: int = 3
    content_min_score: float = 0.3
    trending_min_popularity: float = 7.0
    urgent_window_days: int = 7
    default_max_distance_km: float = 50.0
    default_limit: int = 20

    def __post_init__(self):
        """Load settings from environment variables."""
        if self.cors_origins is None:
            self.cors_origins = ["http://localhost:3000", "http://localhost:3001"]

        # Override with environment variables
        self.app_name = os.getenv("APP_NAME", self.app_name)
        self.debug = os.getenv("DEBUG", "false").lower() == "true"
        self.log_level = os.getenv("LOG_LEVEL", self.log_level).upper()
        self.api_host = os.getenv("API_HOST", self.api_host)
        self.api_port = int(os.getenv("API_PORT", self.api_port))
        self.database_url = os.getenv("DATABASE_URL", self.database_url)

        env_origins = os.getenv("CORS_ORIGINS")
        if env_origins:
            self.cors_origins = [
                origin.strip() for origin in env_origins.split(",") if origin.strip()
            ]

        self.neighbor_threshold = float(
            os.getenv("RECO_NEIGHBOR_THRESHOLD", self.neighbor_threshold)
        )
        self.max_neighbors = int(os.getenv("RECO_MAX_NEIGHBORS", self.max_neighbors))
        self.content_min_score = float(
            os.getenv("RECO_CONTENT_MIN_SCORE", self.content_min_score)
        )
        self.trending_min_popularity = float(
            os.getenv("RECO_TRENDING_MIN_POPULARITY", self.trending_min_popularity)
        )
        self.urgent_window_days = int(
            os.getenv("RECO_URGENT_WINDOW_DAYS", self.urgent_window_days)
        )
        self.default_max_distance_km = float(
            os.getenv("RECO_DEFAULT_MAX_DISTANCE_KM", self.default_max_distance_km)
        )
        self.default_limit = int(os.getenv("RECO_DEFAULT_LIMIT", self.default_limit))


# Global settings instance
settings = Settings()
