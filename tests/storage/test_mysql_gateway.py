from __future__ import annotations

from datetime import datetime, timedelta

import mysql.connector
import pytest
from mysql.connector import errorcode

from src.campus_attendance.campus_attendance.attendance.model import AttendanceRecord
from src.campus_attendance.campus_attendance.core.enums import AttendanceStatus
from src.campus_attendance.campus_attendance.core.exceptions import (
    PersistenceFailure,
    RemoteUnavailable,
    SessionConflict,
    UniqueViolation,
)
from src.campus_attendance.campus_attendance.database.mysql_base import translate_mysql_error
from src.campus_attendance.campus_attendance.sessions.model import AttendanceSession
from src.campus_attendance.campus_attendance.storage.mysql_gateway import MySQLAttendanceGateway

T0 = datetime(2026, 2, 2, 9, 0, 0)

SESSION = AttendanceSession(
    session_id="SESS_1",
    subject_id="CS801",
    subject_name="Distributed Systems",
    department="Computer Science",
    faculty_id="F001",
    start_time=T0,
    end_time=T0 + timedelta(minutes=15),
    otp="482913",
    qr_payload="CAMPUS_SESS:SESS_1:482913",
)

RECORD = AttendanceRecord(
    record_id="REC_1",
    participant_id="S101",
    participant_name="Arun Kumar",
    session_id="SESS_1",
    timestamp=T0 + timedelta(minutes=5),
    status=AttendanceStatus.PRESENT,
    location_verified=True,
    otp_verified=True,
    qr_verified=True,
)


def _dup_entry():
    return mysql.connector.errors.IntegrityError(msg="Duplicate entry", errno=errorcode.ER_DUP_ENTRY)


class FakeCursor:
    def __init__(self, conn):
        self._conn = conn
        self.rowcount = 0

    def execute(self, sql, params=None):
        self._conn.executed.append((" ".join(sql.split()), params))
        if self._conn.fail_on and self._conn.fail_on in sql:
            raise self._conn.error
        self.rowcount = self._conn.rowcount

    def fetchone(self):
        return self._conn.rows[0] if self._conn.rows else None

    def fetchall(self):
        return list(self._conn.rows)

    def close(self):
        pass


class FakeConn:
    def __init__(self, *, rows=None, fail_on=None, error=None, rowcount=0):
        self.rows = rows or []
        self.fail_on = fail_on
        self.error = error
        self.rowcount = rowcount
        self.executed = []
        self.committed = False
        self.rolled_back = False
        self.closed = False

    def cursor(self, dictionary=True):
        return FakeCursor(self)

    def commit(self):
        self.committed = True

    def rollback(self):
        self.rolled_back = True

    def close(self):
        self.closed = True


class FakeFactory:
    def __init__(self, conn=None, connect_error=None):
        self.conn = conn
        self.connect_error = connect_error

    def connect(self):
        if self.connect_error:
            raise self.connect_error
        return self.conn


def test_duplicate_record_maps_to_unique_violation():
    conn = FakeConn(fail_on="INSERT INTO attendance_records", error=_dup_entry())
    gw = MySQLAttendanceGateway(FakeFactory(conn))

    with pytest.raises(UniqueViolation):
        gw.insert_record(RECORD)
    assert conn.rolled_back and not conn.committed and conn.closed


def test_replace_active_runs_in_one_transaction():
    conn = FakeConn()
    gw = MySQLAttendanceGateway(FakeFactory(conn))

    gw.replace_active_session(SESSION)

    statements = [sql for sql, _ in conn.executed]
    assert statements[0].startswith("UPDATE attendance_sessions SET is_active=0 WHERE is_active=1")
    assert statements[1].startswith("INSERT INTO attendance_sessions")
    assert conn.committed


def test_replace_active_conflict():
    conn = FakeConn(fail_on="INSERT INTO attendance_sessions", error=_dup_entry())
    gw = MySQLAttendanceGateway(FakeFactory(conn))

    with pytest.raises(SessionConflict):
        gw.replace_active_session(SESSION)
    assert conn.rolled_back


def test_unreachable_is_distinct_from_not_found():
    down = MySQLAttendanceGateway(
        FakeFactory(connect_error=mysql.connector.errors.InterfaceError(msg="Can't connect", errno=2003))
    )
    with pytest.raises(RemoteUnavailable):
        down.get_active_session()

    empty = MySQLAttendanceGateway(FakeFactory(FakeConn(rows=[])))
    assert empty.get_active_session() is None
    assert empty.query_records("SESS_1") == []


def test_rows_map_to_entities():
    row = {
        "session_id": "SESS_1",
        "subject_id": "CS801",
        "subject_name": "Distributed Systems",
        "department": "Computer Science",
        "faculty_id": "F001",
        "start_time": SESSION.start_time,
        "end_time": SESSION.end_time,
        "otp": "482913",
        "qr_payload": "CAMPUS_SESS:SESS_1:482913",
        "is_active": 1,
    }
    gw = MySQLAttendanceGateway(FakeFactory(FakeConn(rows=[row])))
    assert gw.get_active_session() == SESSION


def test_close_reports_whether_anything_changed():
    assert MySQLAttendanceGateway(FakeFactory(FakeConn(rowcount=1))).deactivate_session("SESS_1") is True
    assert MySQLAttendanceGateway(FakeFactory(FakeConn(rowcount=0))).deactivate_session("SESS_1") is False


@pytest.mark.parametrize(
    "error,expected",
    [
        (_dup_entry(), UniqueViolation),
        (mysql.connector.errors.OperationalError(msg="gone", errno=errorcode.CR_SERVER_GONE_ERROR), RemoteUnavailable),
        (mysql.connector.errors.DatabaseError(msg="no route", errno=errorcode.CR_CONN_HOST_ERROR), RemoteUnavailable),
        (mysql.connector.errors.ProgrammingError(msg="syntax", errno=errorcode.ER_PARSE_ERROR), PersistenceFailure),
    ],
)
def test_translate_mysql_error(error, expected):
    assert type(translate_mysql_error(error)) is expected
