"""
Coordinate helpers shared by indexes and selection strategies.

Coordinate payloads arrive in whatever shape the extractor parsed them into;
these helpers turn the supported shapes into ``LatLon`` and measure
great-circle distances between points.
"""

from math import asin, cos, radians, sin, sqrt
from typing import Any, Optional

from geo_pipeline.errors import IndexLookupError
from geo_pipeline.types import DMSCoordinate, LatLon

EARTH_RADIUS_KM = 6371.0088


def to_lat_lon(value: Any) -> LatLon:
    """
    Convert a coordinate payload to decimal degrees.

    Args:
        value: ``LatLon``, ``DMSCoordinate`` or a ``(lat, lon)`` pair

    Returns:
        The payload as ``LatLon``

    Raises:
        IndexLookupError: if the payload shape is not supported
    """
    if isinstance(value, LatLon):
        return value
    if isinstance(value, DMSCoordinate):
        return LatLon(
            latitude=value.latitude.to_decimal(),
            longitude=value.longitude.to_decimal(),
        )
    if isinstance(value, (tuple, list)) and len(value) == 2:
        try:
            return LatLon(latitude=float(value[0]), longitude=float(value[1]))
        except (TypeError, ValueError) as exc:
            raise IndexLookupError(f"Malformed coordinate pair: {value!r}") from exc
    raise IndexLookupError(
        f"Unsupported coordinate payload type: {type(value).__name__}"
    )


def try_lat_lon(value: Any) -> Optional[LatLon]:
    """Like ``to_lat_lon`` but returns None for unsupported or invalid payloads."""
    try:
        point = to_lat_lon(value)
    except IndexLookupError:
        return None
    return point if is_valid_point(point) else None


def is_valid_point(point: LatLon) -> bool:
    return -90.0 <= point.latitude <= 90.0 and -180.0 <= point.longitude <= 180.0


def haversine_km(a: LatLon, b: LatLon) -> float:
    """Great-circle distance between two points in kilometres."""
    dlat = radians(b.latitude - a.latitude)
    dlon = radians(b.longitude - a.longitude)
    h = (
        sin(dlat / 2) ** 2
        + cos(radians(a.latitude)) * cos(radians(b.latitude)) * sin(dlon / 2) ** 2
    )
    return EARTH_RADIUS_KM * 2 * asin(min(1.0, sqrt(h)))
