"""
Great-circle distance helpers.
"""

import math
from typing import Sequence

import numpy as np

EARTH_RADIUS_KM = 6371.0


def distance_km(lat1: float, lng1: float, lat2: float, lng2: float) -> float:
    """
    Haversine distance between two points in kilometres.

    NaN coordinates propagate to a NaN result.
    """
    d_lat = math.radians(lat2 - lat1)
    d_lng = math.radians(lng2 - lng1)
    a = (
        math.sin(d_lat / 2) ** 2
        + math.cos(math.radians(lat1))
        * math.cos(math.radians(lat2))
        * math.sin(d_lng / 2) ** 2
    )
    c = 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))
    return EARTH_RADIUS_KM * c


def distances_km(
    lat: float, lng: float, lats: Sequence[float], lngs: Sequence[float]
) -> np.ndarray:
    """
    Vectorized haversine from one origin to many points.

    Args:
        lat: Origin latitude
        lng: Origin longitude
        lats: Target latitudes (NaN for points without coordinates)
        lngs: Target longitudes

    Returns:
        Array of distances in kilometres, NaN where a target is NaN
    """
    lat_arr = np.radians(np.asarray(lats, dtype=float))
    lng_arr = np.radians(np.asarray(lngs, dtype=float))
    origin_lat = math.radians(lat)
    origin_lng = math.radians(lng)

    d_lat = lat_arr - origin_lat
    d_lng = lng_arr - origin_lng
    a = (
        np.sin(d_lat / 2) ** 2
        + math.cos(origin_lat) * np.cos(lat_arr) * np.sin(d_lng / 2) ** 2
    )
    c = 2 * np.arctan2(np.sqrt(a), np.sqrt(1 - a))
    return EARTH_RADIUS_KM * c
