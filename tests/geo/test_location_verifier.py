import math

import pytest

from src.campus_attendance.campus_attendance.core.constants import EARTH_RADIUS_M
from src.campus_attendance.campus_attendance.core.exceptions import InvalidCoordinate
from src.campus_attendance.campus_attendance.geo.model import CampusLocation
from src.campus_attendance.campus_attendance.geo.verifier import (
    LocationVerifier,
    haversine_distance_m,
    is_within_campus,
)


def _north_of(campus: CampusLocation, meters: float) -> tuple[float, float]:
    # Along a meridian the haversine distance is exactly R * dlat.
    return campus.latitude + math.degrees(meters / EARTH_RADIUS_M), campus.longitude


@pytest.mark.parametrize("lat,lon", [(0.0, 0.0), (11.0827, 77.0003), (-89.9, 179.9), (90.0, -180.0)])
def test_same_point_is_inside(lat, lon):
    campus = CampusLocation(latitude=lat, longitude=lon, radius_m=0)
    assert haversine_distance_m(lat, lon, lat, lon) == 0
    assert is_within_campus(lat, lon, campus)


def test_distance_is_symmetric():
    a = (11.0827, 77.0003)
    b = (11.0900, 77.0100)
    assert haversine_distance_m(*a, *b) == pytest.approx(haversine_distance_m(*b, *a), abs=1e-9)


def test_one_degree_of_latitude():
    expected = EARTH_RADIUS_M * math.pi / 180
    assert haversine_distance_m(0, 0, 1, 0) == pytest.approx(expected, abs=1)


def test_radius_boundary(campus):
    inside = _north_of(campus, campus.radius_m - 1)
    outside = _north_of(campus, campus.radius_m + 1)

    verifier = LocationVerifier(campus)
    assert verifier.is_within_campus(*inside)
    assert not verifier.is_within_campus(*outside)


def test_antipodal_points_do_not_blow_up():
    d = haversine_distance_m(0, 0, 0, 180)
    assert d == pytest.approx(EARTH_RADIUS_M * math.pi, abs=1)


@pytest.mark.parametrize(
    "lat,lon",
    [(90.1, 0), (-91, 0), (0, 180.5), (0, -181), (float("nan"), 0), (0, float("inf")), ("abc", 0), (None, 0)],
)
def test_invalid_coordinates_rejected(campus, lat, lon):
    with pytest.raises(InvalidCoordinate):
        LocationVerifier(campus).is_within_campus(lat, lon)


def test_invalid_campus_rejected():
    with pytest.raises(InvalidCoordinate):
        LocationVerifier(CampusLocation(latitude=100, longitude=0, radius_m=10))
