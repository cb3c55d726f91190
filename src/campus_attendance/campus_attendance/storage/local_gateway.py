from __future__ import annotations

import json
import logging
import os
import threading
from pathlib import Path
from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.exceptions import PersistenceFailure, UniqueViolation
from ..sessions.model import AttendanceSession
from .gateway import AttendanceGateway

logger = logging.getLogger(__name__)


class LocalAttendanceGateway(AttendanceGateway):
    """Process-local store used when the remote database is unreachable.

    All state lives in memory behind one lock; when ``path`` is given every
    mutation is also flushed to a JSON file so a restart keeps history.
    A failed flush undoes the in-memory change and raises PersistenceFailure.
    """

    def __init__(self, path: str | Path | None = None):
        self._path = Path(path) if path else None
        self._lock = threading.Lock()
        self._sessions: dict[str, AttendanceSession] = {}
        self._records: dict[tuple[str, str], AttendanceRecord] = {}
        if self._path and self._path.exists():
            self._load()

    def _load(self) -> None:
        try:
            data = json.loads(self._path.read_text(encoding="utf-8"))
        except (OSError, ValueError) as e:
            raise PersistenceFailure(f"Cannot read local store {self._path}: {e}") from e

        for item in data.get("sessions", []):
            s = AttendanceSession.from_dict(item)
            self._sessions[s.session_id] = s
        for item in data.get("records", []):
            r = AttendanceRecord.from_dict(item)
            self._records[(r.session_id, r.participant_id)] = r
        logger.info(
            "Loaded local store %s (sessions=%d, records=%d)",
            self._path,
            len(self._sessions),
            len(self._records),
        )

    def _flush(self) -> None:
        if not self._path:
            return
        data = {
            "sessions": [s.to_dict(include_secrets=True) for s in self._sessions.values()],
            "records": [r.to_dict() for r in self._records.values()],
        }
        tmp = self._path.with_suffix(self._path.suffix + ".tmp")
        self._path.parent.mkdir(parents=True, exist_ok=True)
        tmp.write_text(json.dumps(data, indent=2), encoding="utf-8")
        os.replace(tmp, self._path)

    def _commit(self, sessions: dict, records: dict) -> None:
        """Swap in new state; restore the previous one if the flush fails."""
        old_sessions, old_records = self._sessions, self._records
        self._sessions, self._records = sessions, records
        try:
            self._flush()
        except OSError as e:
            self._sessions, self._records = old_sessions, old_records
            raise PersistenceFailure(f"Cannot write local store {self._path}: {e}") from e

    def get_active_session(self) -> Optional[AttendanceSession]:
        with self._lock:
            for s in self._sessions.values():
                if s.is_active:
                    return s
            return None

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        with self._lock:
            return self._sessions.get(session_id)

    def insert_session(self, session: AttendanceSession) -> None:
        with self._lock:
            if session.session_id in self._sessions:
                raise UniqueViolation(f"Session {session.session_id} already exists")
            if session.is_active and any(s.is_active for s in self._sessions.values()):
                raise UniqueViolation("Another session is already active")
            sessions = dict(self._sessions)
            sessions[session.session_id] = session
            self._commit(sessions, self._records)

    def deactivate_active_sessions(self) -> int:
        with self._lock:
            sessions, count = self._without_active()
            if count:
                self._commit(sessions, self._records)
            return count

    def replace_active_session(self, session: AttendanceSession) -> None:
        with self._lock:
            if session.session_id in self._sessions:
                raise UniqueViolation(f"Session {session.session_id} already exists")
            sessions, _ = self._without_active()
            sessions[session.session_id] = session
            self._commit(sessions, self._records)

    def _without_active(self) -> tuple[dict[str, AttendanceSession], int]:
        sessions = dict(self._sessions)
        count = 0
        for sid, s in sessions.items():
            if s.is_active:
                sessions[sid] = s.deactivated()
                count += 1
        return sessions, count

    def deactivate_session(self, session_id: str) -> bool:
        with self._lock:
            s = self._sessions.get(session_id)
            if not s or not s.is_active:
                return False
            sessions = dict(self._sessions)
            sessions[session_id] = s.deactivated()
            self._commit(sessions, self._records)
            return True

    def query_sessions(self, *, department: Optional[str] = None) -> Sequence[AttendanceSession]:
        with self._lock:
            items = [s for s in self._sessions.values() if department is None or s.department == department]
        return sorted(items, key=lambda s: s.start_time)

    def insert_record(self, record: AttendanceRecord) -> None:
        key = (record.session_id, record.participant_id)
        with self._lock:
            if key in self._records:
                raise UniqueViolation(
                    f"Record exists for session={record.session_id} participant={record.participant_id}"
                )
            records = dict(self._records)
            records[key] = record
            self._commit(self._sessions, records)

    def query_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.session_id == session_id]
        return sorted(items, key=lambda r: r.timestamp)

    def query_history(self, participant_id: str) -> Sequence[AttendanceRecord]:
        with self._lock:
            items = [r for r in self._records.values() if r.participant_id == participant_id]
        return sorted(items, key=lambda r: r.timestamp)
