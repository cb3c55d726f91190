from __future__ import annotations

import hmac
from typing import Optional

from ...core.exceptions import InvalidToken
from ...sessions.model import AttendanceSession
from ..model import CheckInAttempt
from .base import VerificationCheck


def tokens_equal(submitted: Optional[str], expected: str) -> bool:
    """Exact, constant-time comparison. No trimming, case folding or coercion."""
    if not isinstance(submitted, str):
        return False
    return hmac.compare_digest(submitted.encode("utf-8"), expected.encode("utf-8"))


class OTPCheck(VerificationCheck):
    name = "otp"

    def verify(self, attempt: CheckInAttempt, session: Optional[AttendanceSession]) -> None:
        if session is None or not tokens_equal(attempt.submitted_otp, session.otp):
            raise InvalidToken()
