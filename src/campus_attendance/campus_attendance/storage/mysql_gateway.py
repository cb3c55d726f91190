from __future__ import annotations

from typing import Optional, Sequence

from ..attendance.model import AttendanceRecord
from ..core.enums import AttendanceStatus
from ..core.exceptions import SessionConflict, UniqueViolation
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, fetchone
from ..sessions.model import AttendanceSession
from .gateway import AttendanceGateway

_SESSION_COLUMNS = """
    session_id, subject_id, subject_name, department, faculty_id,
    start_time, end_time, otp, qr_payload, is_active
"""

_RECORD_COLUMNS = """
    record_id, participant_id, participant_name, session_id, `timestamp`,
    status, location_verified, otp_verified, qr_verified
"""

_INSERT_SESSION = """
    INSERT INTO attendance_sessions(
        session_id, subject_id, subject_name, department, faculty_id,
        start_time, end_time, otp, qr_payload, is_active
    )
    VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s,%s)
"""


def _session_from_row(r: dict) -> AttendanceSession:
    return AttendanceSession(
        session_id=r["session_id"],
        subject_id=r["subject_id"],
        subject_name=r["subject_name"],
        department=r["department"],
        faculty_id=r["faculty_id"],
        start_time=r["start_time"],
        end_time=r["end_time"],
        otp=r["otp"],
        qr_payload=r["qr_payload"],
        is_active=bool(r["is_active"]),
    )


def _record_from_row(r: dict) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=r["record_id"],
        participant_id=r["participant_id"],
        participant_name=r["participant_name"],
        session_id=r["session_id"],
        timestamp=r["timestamp"],
        status=AttendanceStatus(r["status"]),
        location_verified=bool(r["location_verified"]),
        otp_verified=bool(r["otp_verified"]),
        qr_verified=bool(r["qr_verified"]),
    )


def _session_params(s: AttendanceSession) -> tuple:
    return (
        s.session_id,
        s.subject_id,
        s.subject_name,
        s.department,
        s.faculty_id,
        s.start_time,
        s.end_time,
        s.otp,
        s.qr_payload,
        int(s.is_active),
    )


class MySQLAttendanceGateway(AttendanceGateway):
    """Remote store.

    Integrity is enforced by the schema: a unique key on
    (session_id, participant_id) for records and a unique generated
    ``active_marker`` column for the single active session.
    """

    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def get_active_session(self) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(f"SELECT {_SESSION_COLUMNS} FROM attendance_sessions WHERE is_active=1")
            r = fetchone(cur)
            return _session_from_row(r) if r else None

    def get_session(self, session_id: str) -> Optional[AttendanceSession]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM attendance_sessions WHERE session_id=%s",
                (session_id,),
            )
            r = fetchone(cur)
            return _session_from_row(r) if r else None

    def insert_session(self, session: AttendanceSession) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(_INSERT_SESSION, _session_params(session))

    def deactivate_active_sessions(self) -> int:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute("UPDATE attendance_sessions SET is_active=0 WHERE is_active=1")
            return int(cur.rowcount)

    def replace_active_session(self, session: AttendanceSession) -> None:
        # One transaction: db_cursor commits only after both statements ran.
        try:
            with db_cursor(self._conn_factory) as (_, cur):
                cur.execute("UPDATE attendance_sessions SET is_active=0 WHERE is_active=1")
                cur.execute(_INSERT_SESSION, _session_params(session))
        except UniqueViolation as e:
            raise SessionConflict(f"Could not activate session {session.session_id}: {e}") from e

    def deactivate_session(self, session_id: str) -> bool:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                "UPDATE attendance_sessions SET is_active=0 WHERE session_id=%s AND is_active=1",
                (session_id,),
            )
            return cur.rowcount > 0

    def query_sessions(self, *, department: Optional[str] = None) -> Sequence[AttendanceSession]:
        clauses = []
        params: list[object] = []
        if department is not None:
            clauses.append("department=%s")
            params.append(department)
        where = f"WHERE {' AND '.join(clauses)}" if clauses else ""

        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"SELECT {_SESSION_COLUMNS} FROM attendance_sessions {where} ORDER BY start_time ASC",
                tuple(params),
            )
            return [_session_from_row(r) for r in fetchall(cur)]

    def insert_record(self, record: AttendanceRecord) -> None:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                INSERT INTO attendance_records({_RECORD_COLUMNS})
                VALUES(%s,%s,%s,%s,%s,%s,%s,%s,%s)
                """,
                (
                    record.record_id,
                    record.participant_id,
                    record.participant_name,
                    record.session_id,
                    record.timestamp,
                    record.status.value,
                    int(record.location_verified),
                    int(record.otp_verified),
                    int(record.qr_verified),
                ),
            )

    def query_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE session_id=%s
                ORDER BY `timestamp` ASC
                """,
                (session_id,),
            )
            return [_record_from_row(r) for r in fetchall(cur)]

    def query_history(self, participant_id: str) -> Sequence[AttendanceRecord]:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                f"""
                SELECT {_RECORD_COLUMNS}
                FROM attendance_records
                WHERE participant_id=%s
                ORDER BY `timestamp` ASC
                """,
                (participant_id,),
            )
            return [_record_from_row(r) for r in fetchall(cur)]
