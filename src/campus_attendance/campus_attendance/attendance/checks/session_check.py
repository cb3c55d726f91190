from __future__ import annotations

from typing import Optional

from ...core.exceptions import SessionExpired
from ...sessions.model import AttendanceSession
from ..model import CheckInAttempt
from .base import VerificationCheck


class ActiveSessionCheck(VerificationCheck):
    name = "session"

    def verify(self, attempt: CheckInAttempt, session: Optional[AttendanceSession]) -> None:
        if session is None or not session.is_active or session.session_id != attempt.session_id:
            raise SessionExpired("Session is not the active attendance session")
        if not session.covers(attempt.current_time):
            raise SessionExpired(
                f"Attendance window {session.start_time:%H:%M:%S}-{session.end_time:%H:%M:%S} is closed"
            )
