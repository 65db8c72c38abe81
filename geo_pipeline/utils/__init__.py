"""Utility functions for the resolution pipeline."""

from .geo import (
    EARTH_RADIUS_KM,
    haversine_km,
    is_valid_point,
    to_lat_lon,
    try_lat_lon,
)

__all__ = [
    "EARTH_RADIUS_KM",
    "haversine_km",
    "is_valid_point",
    "to_lat_lon",
    "try_lat_lon",
]
