"""
Shared utilities and common functionality for ML modules.
"""

from backend.src.juntos.ml.shared.geo import EARTH_RADIUS_KM, distance_km, distances_km

__all__ = [
    "EARTH_RADIUS_KM",
    "distance_km",
    "distances_km",
]
