from __future__ import annotations

from typing import Optional

from ...core.exceptions import OutOfBounds
from ...sessions.model import AttendanceSession
from ..model import CheckInAttempt
from .base import VerificationCheck


class GeofenceCheck(VerificationCheck):
    name = "location"

    def verify(self, attempt: CheckInAttempt, session: Optional[AttendanceSession]) -> None:
        if not attempt.geo_verified:
            raise OutOfBounds()
