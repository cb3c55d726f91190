from __future__ import annotations

from datetime import datetime, timedelta

import pytest

from src.campus_attendance.campus_attendance.attendance.model import AttendanceRecord
from src.campus_attendance.campus_attendance.core.enums import AttendanceStatus
from src.campus_attendance.campus_attendance.core.exceptions import PersistenceFailure, UniqueViolation
from src.campus_attendance.campus_attendance.sessions.model import AttendanceSession
from src.campus_attendance.campus_attendance.storage.local_gateway import LocalAttendanceGateway

T0 = datetime(2026, 2, 2, 9, 0, 0)


def _session(sid: str, *, active: bool = True, department: str = "Computer Science") -> AttendanceSession:
    return AttendanceSession(
        session_id=sid,
        subject_id="CS801",
        subject_name="Distributed Systems",
        department=department,
        faculty_id="F001",
        start_time=T0,
        end_time=T0 + timedelta(minutes=15),
        otp="482913",
        qr_payload=f"CAMPUS_SESS:{sid}:482913",
        is_active=active,
    )


def _record(sid: str, pid: str, minute: int = 1) -> AttendanceRecord:
    return AttendanceRecord(
        record_id=f"REC_{sid}_{pid}",
        participant_id=pid,
        participant_name=pid,
        session_id=sid,
        timestamp=T0 + timedelta(minutes=minute),
        status=AttendanceStatus.PRESENT,
        location_verified=True,
        otp_verified=True,
        qr_verified=True,
    )


def test_replace_keeps_single_active():
    gw = LocalAttendanceGateway()
    gw.replace_active_session(_session("A"))
    gw.replace_active_session(_session("B"))

    assert gw.get_active_session().session_id == "B"
    assert [s.session_id for s in gw.query_sessions() if s.is_active] == ["B"]


def test_insert_session_refuses_second_active():
    gw = LocalAttendanceGateway()
    gw.insert_session(_session("A"))
    with pytest.raises(UniqueViolation):
        gw.insert_session(_session("B"))

    assert gw.deactivate_active_sessions() == 1
    gw.insert_session(_session("B"))
    assert gw.get_active_session().session_id == "B"


def test_insert_record_unique_per_session_and_participant():
    gw = LocalAttendanceGateway()
    gw.insert_record(_record("A", "S101"))
    gw.insert_record(_record("B", "S101"))

    with pytest.raises(UniqueViolation):
        gw.insert_record(_record("A", "S101", minute=2))

    assert len(gw.query_history("S101")) == 2


def test_not_found_is_none_or_empty():
    gw = LocalAttendanceGateway()
    assert gw.get_active_session() is None
    assert gw.get_session("missing") is None
    assert gw.query_records("missing") == []
    assert gw.deactivate_session("missing") is False


def test_query_sessions_filters_by_department():
    gw = LocalAttendanceGateway()
    gw.insert_session(_session("A", active=False, department="Commerce"))
    gw.insert_session(_session("B", active=False))

    assert [s.session_id for s in gw.query_sessions(department="Commerce")] == ["A"]
    assert len(gw.query_sessions()) == 2


def test_json_file_survives_restart(tmp_path):
    path = tmp_path / "store.json"
    gw = LocalAttendanceGateway(path)
    gw.replace_active_session(_session("A"))
    gw.insert_record(_record("A", "S101"))

    reopened = LocalAttendanceGateway(path)
    assert reopened.get_active_session() == _session("A")
    assert reopened.query_records("A") == [_record("A", "S101")]
    with pytest.raises(UniqueViolation):
        reopened.insert_record(_record("A", "S101"))


def test_failed_flush_rolls_back(tmp_path):
    blocker = tmp_path / "not_a_dir"
    blocker.write_text("x")
    gw = LocalAttendanceGateway(blocker / "store.json")

    with pytest.raises(PersistenceFailure):
        gw.replace_active_session(_session("A"))
    assert gw.get_active_session() is None


def test_corrupt_file_is_persistence_failure(tmp_path):
    path = tmp_path / "store.json"
    path.write_text("{not json")
    with pytest.raises(PersistenceFailure):
        LocalAttendanceGateway(path)
