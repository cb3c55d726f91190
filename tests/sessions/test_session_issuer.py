from __future__ import annotations

import re
from datetime import timedelta

import pytest

from src.campus_attendance.campus_attendance.core.exceptions import PersistenceFailure, ValidationError
from src.campus_attendance.campus_attendance.registry.local_registry_repository import LocalRegistryRepository
from src.campus_attendance.campus_attendance.sessions.issuer import (
    SessionIssuer,
    build_qr_payload,
    generate_otp,
    generate_session_id,
)
from src.campus_attendance.campus_attendance.storage.local_gateway import LocalAttendanceGateway


def _open(issuer, now, **overrides):
    kwargs = dict(subject_id="CS801", department="Computer Science", faculty_id="F001", duration_minutes=15, now=now)
    kwargs.update(overrides)
    return issuer.open_session(**kwargs)


def test_open_session_fills_fields(issuer, fixed_now):
    session = _open(issuer, fixed_now)

    assert session.subject_name == "Distributed Systems"
    assert session.start_time == fixed_now
    assert session.end_time == fixed_now + timedelta(minutes=15)
    assert session.otp == "482913"
    assert session.qr_payload == f"CAMPUS_SESS:{session.session_id}:482913"
    assert session.is_active


def test_open_session_is_immediately_active(issuer, fixed_now):
    session = _open(issuer, fixed_now)
    assert issuer.get_active_session() == session


def test_open_session_deactivates_previous(issuer, gateway, fixed_now):
    first = _open(issuer, fixed_now)
    second = _open(issuer, fixed_now + timedelta(minutes=1), subject_id="CS802")

    active = [s for s in gateway.query_sessions() if s.is_active]
    assert active == [second]
    assert gateway.get_session(first.session_id).is_active is False


@pytest.mark.parametrize(
    "overrides",
    [
        {"subject_id": "NOPE"},
        {"department": "Astrology"},
        {"duration_minutes": 0},
        {"duration_minutes": -5},
        {"duration_minutes": 1.5},
        {"duration_minutes": "abc"},
        {"duration_minutes": 24 * 60 + 1},
        {"duration_minutes": 10**12},
        {"faculty_id": " "},
    ],
)
def test_open_session_preconditions(issuer, gateway, fixed_now, overrides):
    with pytest.raises(ValidationError):
        _open(issuer, fixed_now, **overrides)
    assert gateway.get_active_session() is None


def test_persistence_failure_leaves_nothing_open(fixed_now):
    class BrokenGateway(LocalAttendanceGateway):
        def replace_active_session(self, session):
            raise PersistenceFailure("down")

    gateway = BrokenGateway()
    issuer = SessionIssuer(gateway, LocalRegistryRepository())

    with pytest.raises(PersistenceFailure):
        _open(issuer, fixed_now)
    assert gateway.get_active_session() is None


def test_close_session_is_idempotent(issuer, fixed_now):
    session = _open(issuer, fixed_now)

    assert issuer.close_session(session.session_id) is True
    assert issuer.close_session(session.session_id) is False
    assert issuer.close_session("SESS_unknown") is False
    assert issuer.get_active_session() is None


def test_pending_session_hidden_after_marking(issuer, recorder, fixed_now):
    session = _open(issuer, fixed_now)
    assert issuer.get_pending_session("S101") == session

    recorder.mark_present(
        session_id=session.session_id,
        participant_id="S101",
        participant_name="Arun Kumar",
        submitted_otp="482913",
        qr_match=True,
        geo_verified=True,
        current_time=fixed_now + timedelta(minutes=1),
    )

    assert issuer.get_pending_session("S101") is None
    assert issuer.get_pending_session("S102") == session


def test_generate_otp_shape():
    for _ in range(200):
        otp = generate_otp()
        assert re.fullmatch(r"[1-9]\d{5}", otp)


def test_qr_payloads_do_not_collide():
    a, b = generate_session_id(), generate_session_id()
    assert a != b
    assert build_qr_payload(a, "123456") != build_qr_payload(b, "123456")
