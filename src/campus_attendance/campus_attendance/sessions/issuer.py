from __future__ import annotations

import logging
import secrets
import uuid
from datetime import datetime, timedelta
from typing import Callable, Optional

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty, require_positive_int
from ..core.constants import DEFAULT_QR_PREFIX, MAX_SESSION_MINUTES, OTP_MAX, OTP_MIN, SESSION_ID_PREFIX
from ..core.exceptions import ValidationError
from ..registry.repository import RegistryRepository
from ..storage.gateway import AttendanceGateway
from .model import AttendanceSession

logger = logging.getLogger(__name__)


def generate_otp() -> str:
    """Six digits, uniform over 100000..999999."""
    return str(OTP_MIN + secrets.randbelow(OTP_MAX - OTP_MIN + 1))


def generate_session_id() -> str:
    return f"{SESSION_ID_PREFIX}{uuid.uuid4().hex}"


def build_qr_payload(session_id: str, otp: str, *, prefix: str = DEFAULT_QR_PREFIX) -> str:
    # session_id is unique, so no two sessions can share a payload.
    return f"{prefix}:{session_id}:{otp}"


class SessionIssuer:
    """Opens and closes attendance sessions.

    The system runs a single active session at a time: opening one
    deactivates whatever was active before, in the same store operation.
    """

    def __init__(
        self,
        gateway: AttendanceGateway,
        registry: RegistryRepository,
        *,
        qr_prefix: str = DEFAULT_QR_PREFIX,
        otp_factory: Callable[[], str] = generate_otp,
        id_factory: Callable[[], str] = generate_session_id,
    ):
        self._gateway = gateway
        self._registry = registry
        self._qr_prefix = qr_prefix
        self._otp_factory = otp_factory
        self._id_factory = id_factory

    def open_session(
        self,
        *,
        subject_id: str,
        department: str,
        faculty_id: str,
        duration_minutes: int,
        now: Optional[datetime] = None,
    ) -> AttendanceSession:
        subject_id = require_non_empty(subject_id, "subject_id")
        department = require_non_empty(department, "department")
        faculty_id = require_non_empty(faculty_id, "faculty_id")
        duration = require_positive_int(duration_minutes, "duration_minutes")
        if duration > MAX_SESSION_MINUTES:
            raise ValidationError(f"duration_minutes must be at most {MAX_SESSION_MINUTES}")

        subject = self._registry.get_subject(subject_id)
        if not subject:
            raise ValidationError(f"Unknown subject: {subject_id}")
        if not self._registry.has_department(department):
            raise ValidationError(f"Unknown department: {department}")

        now = now or now_local()
        session_id = self._id_factory()
        otp = self._otp_factory()
        session = AttendanceSession(
            session_id=session_id,
            subject_id=subject.subject_id,
            subject_name=subject.name,
            department=department,
            faculty_id=faculty_id,
            start_time=now,
            end_time=now + timedelta(minutes=duration),
            otp=otp,
            qr_payload=build_qr_payload(session_id, otp, prefix=self._qr_prefix),
            is_active=True,
        )

        # PersistenceFailure / SessionConflict propagate: the session is not open.
        self._gateway.replace_active_session(session)
        logger.info(
            "Opened session %s subject=%s department=%s faculty=%s until=%s",
            session.session_id,
            session.subject_id,
            session.department,
            session.faculty_id,
            session.end_time.isoformat(),
        )
        return session

    def close_session(self, session_id: str) -> bool:
        """Idempotent: closing an inactive or unknown session is a no-op."""
        closed = self._gateway.deactivate_session(session_id)
        if closed:
            logger.info("Closed session %s", session_id)
        return closed

    def get_active_session(self) -> Optional[AttendanceSession]:
        return self._gateway.get_active_session()

    def get_pending_session(self, participant_id: str) -> Optional[AttendanceSession]:
        """Active session, unless the participant is already marked in it."""
        session = self._gateway.get_active_session()
        if not session:
            return None
        records = self._gateway.query_records(session.session_id)
        if any(r.participant_id == participant_id for r in records):
            return None
        return session
