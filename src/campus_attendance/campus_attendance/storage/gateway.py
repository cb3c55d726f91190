from __future__ import annotations

from typing import Optional, Protocol, Sequence

from ..attendance.model import AttendanceRecord
from ..sessions.model import AttendanceSession


class AttendanceGateway(Protocol):
    """Storage boundary for sessions and records.

    Two implementations exist (MySQL and a local file store); which one is
    used is decided once, at container build time.

    Contract:
    - "not found" is ``None`` / an empty sequence, never an exception.
    - ``RemoteUnavailable`` means the store could not be reached and nothing
      took effect.
    - ``insert_record`` raises ``UniqueViolation`` when a record for the same
      (session_id, participant_id) already exists; the check and the insert
      are one atomic step.
    - ``replace_active_session`` deactivates every active session and inserts
      the new one as a single unit, so readers never see two active rows.
    """

    def get_active_session(self) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        raise NotImplementedError

    def insert_session(self, session: AttendanceSession) -> None:
        raise NotImplementedError

    def deactivate_active_sessions(self) -> int:
        raise NotImplementedError

    def replace_active_session(self, session: AttendanceSession) -> None:
        raise NotImplementedError

    def deactivate_session(self, session_id: str) -> bool:
        raise NotImplementedError

    def query_sessions(self, *, department: Optional[str] = None) -> Sequence[AttendanceSession]:
        raise NotImplementedError

    def insert_record(self, record: AttendanceRecord) -> None:
        raise NotImplementedError

    def query_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError

    def query_history(self, participant_id: str) -> Sequence[AttendanceRecord]:
        raise NotImplementedError
