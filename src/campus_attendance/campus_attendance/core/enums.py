from __future__ import annotations

from enum import Enum


class AttendanceStatus(str, Enum):
    """Status stored on an attendance record."""

    PRESENT = "PRESENT"
    ABSENT = "ABSENT"
    LATE = "LATE"


class CheckInState(str, Enum):
    """Lifecycle of one (session, participant) check-in attempt."""

    NOT_ATTEMPTED = "NOT_ATTEMPTED"
    VERIFYING = "VERIFYING"
    COMMITTED = "COMMITTED"
    REJECTED = "REJECTED"


class StorageBackend(str, Enum):
    AUTO = "auto"
    MYSQL = "mysql"
    LOCAL = "local"
