from __future__ import annotations

import logging
import uuid
from datetime import datetime
from typing import Callable, Optional, Sequence

from ..common.datetime_utils import now_local
from ..common.validators import require_non_empty
from ..core.constants import RECORD_ID_PREFIX
from ..core.enums import AttendanceStatus
from ..core.exceptions import AttendanceRejected, DuplicateSubmission, UniqueViolation
from ..geo.verifier import LocationVerifier
from ..storage.gateway import AttendanceGateway
from .checks.factory import VerificationPipelineFactory
from .checks.otp_check import tokens_equal
from .model import AttendanceRecord, CheckInAttempt
from .window import OperatingWindow

logger = logging.getLogger(__name__)


def generate_record_id() -> str:
    return f"{RECORD_ID_PREFIX}{uuid.uuid4().hex}"


class AttendanceRecorder:
    """Authoritative check-in: verify every predicate, then commit at most once.

    ``mark_present`` takes the verification bundle as the protocol defines it
    (OTP plus QR/geo booleans). ``check_in`` is the entry point for untrusted
    clients: it recomputes the booleans from raw coordinates and the scanned
    QR payload before delegating.
    """

    def __init__(
        self,
        gateway: AttendanceGateway,
        locator: LocationVerifier,
        *,
        window: Optional[OperatingWindow] = None,
        pipeline_factory: VerificationPipelineFactory | None = None,
        id_factory: Callable[[], str] = generate_record_id,
    ):
        self._gateway = gateway
        self._locator = locator
        self._window = window
        self._checks = (pipeline_factory or VerificationPipelineFactory()).build()
        self._id_factory = id_factory

    def mark_present(
        self,
        *,
        session_id: str,
        participant_id: str,
        participant_name: str,
        submitted_otp: str,
        qr_match: bool,
        geo_verified: bool,
        current_time: Optional[datetime] = None,
    ) -> AttendanceRecord:
        attempt = CheckInAttempt(
            session_id=require_non_empty(session_id, "session_id"),
            participant_id=require_non_empty(participant_id, "participant_id"),
            participant_name=require_non_empty(participant_name, "participant_name"),
            submitted_otp=submitted_otp,
            qr_match=bool(qr_match),
            geo_verified=bool(geo_verified),
            current_time=current_time or now_local(),
        )

        session = self._gateway.get_active_session()
        try:
            for check in self._checks:
                check.verify(attempt, session)
        except AttendanceRejected as e:
            logger.info(
                "Rejected check-in session=%s participant=%s code=%s retryable=%s",
                attempt.session_id,
                attempt.participant_id,
                e.code,
                e.retryable,
            )
            raise

        record = AttendanceRecord(
            record_id=self._id_factory(),
            participant_id=attempt.participant_id,
            participant_name=attempt.participant_name,
            session_id=attempt.session_id,
            timestamp=attempt.current_time,
            status=AttendanceStatus.PRESENT,
            location_verified=True,
            otp_verified=True,
            qr_verified=True,
        )
        try:
            self._gateway.insert_record(record)
        except UniqueViolation as e:
            logger.info(
                "Rejected check-in session=%s participant=%s code=%s",
                attempt.session_id,
                attempt.participant_id,
                DuplicateSubmission.code,
            )
            raise DuplicateSubmission() from e

        logger.info("Committed attendance session=%s participant=%s", record.session_id, record.participant_id)
        return record

    def check_in(
        self,
        *,
        session_id: str,
        participant_id: str,
        participant_name: str,
        submitted_otp: str,
        latitude: float,
        longitude: float,
        scanned_payload: Optional[str],
        current_time: Optional[datetime] = None,
    ) -> AttendanceRecord:
        # Read the clock once so the window gate and the session window agree.
        current_time = current_time or now_local()
        if self._window is not None:
            self._window.require_open(current_time)

        geo_verified = self._locator.is_within_campus(latitude, longitude)

        session = self._gateway.get_session(session_id)
        qr_match = bool(session) and tokens_equal(scanned_payload, session.qr_payload)

        return self.mark_present(
            session_id=session_id,
            participant_id=participant_id,
            participant_name=participant_name,
            submitted_otp=submitted_otp,
            qr_match=qr_match,
            geo_verified=geo_verified,
            current_time=current_time,
        )

    def list_records(self, session_id: str) -> Sequence[AttendanceRecord]:
        return sorted(self._gateway.query_records(session_id), key=lambda r: r.timestamp)

    def list_history(self, participant_id: str) -> Sequence[AttendanceRecord]:
        return sorted(self._gateway.query_history(participant_id), key=lambda r: r.timestamp)
