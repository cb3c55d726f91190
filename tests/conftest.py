from __future__ import annotations

from datetime import datetime

import pytest

from src.campus_attendance.campus_attendance.attendance.service import AttendanceRecorder
from src.campus_attendance.campus_attendance.geo.model import CampusLocation
from src.campus_attendance.campus_attendance.geo.verifier import LocationVerifier
from src.campus_attendance.campus_attendance.registry.local_registry_repository import LocalRegistryRepository
from src.campus_attendance.campus_attendance.sessions.issuer import SessionIssuer
from src.campus_attendance.campus_attendance.storage.local_gateway import LocalAttendanceGateway

CAMPUS = CampusLocation(latitude=11.0827, longitude=77.0003, radius_m=800)


@pytest.fixture
def fixed_now() -> datetime:
    return datetime(2026, 2, 2, 9, 0, 0)


@pytest.fixture
def campus() -> CampusLocation:
    return CAMPUS


@pytest.fixture
def gateway() -> LocalAttendanceGateway:
    return LocalAttendanceGateway()


@pytest.fixture
def issuer(gateway) -> SessionIssuer:
    return SessionIssuer(gateway, LocalRegistryRepository(), otp_factory=lambda: "482913")


@pytest.fixture
def recorder(gateway, campus) -> AttendanceRecorder:
    return AttendanceRecorder(gateway, LocationVerifier(campus))
