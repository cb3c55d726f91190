from __future__ import annotations

from typing import Optional

from ...core.exceptions import OpticalMismatch
from ...sessions.model import AttendanceSession
from ..model import CheckInAttempt
from .base import VerificationCheck


class QRCheck(VerificationCheck):
    name = "qr"

    def verify(self, attempt: CheckInAttempt, session: Optional[AttendanceSession]) -> None:
        if not attempt.qr_match:
            raise OpticalMismatch()
