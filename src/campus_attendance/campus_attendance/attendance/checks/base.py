from __future__ import annotations

from abc import ABC, abstractmethod
from typing import Optional

from ...sessions.model import AttendanceSession
from ..model import CheckInAttempt


class VerificationCheck(ABC):
    """Strategy Pattern: one predicate of the check-in protocol.

    Implementations raise an ``AttendanceRejected`` subclass when the attempt
    fails the predicate and return None otherwise.
    """

    name: str = "check"

    @abstractmethod
    def verify(self, attempt: CheckInAttempt, session: Optional[AttendanceSession]) -> None:
        raise NotImplementedError
