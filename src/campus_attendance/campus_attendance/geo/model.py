from __future__ import annotations

from dataclasses import dataclass


@dataclass(frozen=True)
class CampusLocation:
    """Circular geofence: center point plus radius in meters."""

    latitude: float
    longitude: float
    radius_m: float

    @classmethod
    def from_config(cls, value: dict) -> "CampusLocation":
        return cls(
            latitude=float(value["latitude"]),
            longitude=float(value["longitude"]),
            radius_m=float(value["radius_m"]),
        )
