from __future__ import annotations

import math

from ..core.constants import EARTH_RADIUS_M
from ..core.exceptions import InvalidCoordinate
from .model import CampusLocation


def validate_coordinate(latitude: float, longitude: float) -> tuple[float, float]:
    try:
        lat = float(latitude)
        lon = float(longitude)
    except (TypeError, ValueError):
        raise InvalidCoordinate(f"Coordinate is not numeric: ({latitude!r}, {longitude!r})") from None

    if not (math.isfinite(lat) and math.isfinite(lon)):
        raise InvalidCoordinate(f"Coordinate is not finite: ({lat}, {lon})")
    if not -90.0 <= lat <= 90.0:
        raise InvalidCoordinate(f"Latitude out of range [-90, 90]: {lat}")
    if not -180.0 <= lon <= 180.0:
        raise InvalidCoordinate(f"Longitude out of range [-180, 180]: {lon}")
    return lat, lon


def haversine_distance_m(lat1: float, lon1: float, lat2: float, lon2: float) -> float:
    """Great-circle distance in meters between two coordinates."""
    lat1, lon1 = validate_coordinate(lat1, lon1)
    lat2, lon2 = validate_coordinate(lat2, lon2)

    phi1, phi2 = math.radians(lat1), math.radians(lat2)
    dphi = math.radians(lat2 - lat1)
    dlambda = math.radians(lon2 - lon1)
    a = math.sin(dphi / 2) ** 2 + math.cos(phi1) * math.cos(phi2) * math.sin(dlambda / 2) ** 2
    # Rounding can push a a hair outside [0, 1] for antipodal points.
    a = min(1.0, max(0.0, a))
    return EARTH_RADIUS_M * 2 * math.atan2(math.sqrt(a), math.sqrt(1 - a))


def is_within_campus(latitude: float, longitude: float, campus: CampusLocation) -> bool:
    distance = haversine_distance_m(latitude, longitude, campus.latitude, campus.longitude)
    return distance <= campus.radius_m


class LocationVerifier:
    """Geofence check bound to one configured campus."""

    def __init__(self, campus: CampusLocation):
        validate_coordinate(campus.latitude, campus.longitude)
        if campus.radius_m < 0:
            raise InvalidCoordinate(f"Campus radius must not be negative: {campus.radius_m}")
        self._campus = campus

    @property
    def campus(self) -> CampusLocation:
        return self._campus

    def distance_m(self, latitude: float, longitude: float) -> float:
        return haversine_distance_m(latitude, longitude, self._campus.latitude, self._campus.longitude)

    def is_within_campus(self, latitude: float, longitude: float) -> bool:
        return is_within_campus(latitude, longitude, self._campus)
