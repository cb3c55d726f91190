from __future__ import annotations

from dataclasses import dataclass
from datetime import datetime

from ..core.enums import AttendanceStatus


@dataclass(frozen=True)
class AttendanceRecord:
    """Domain entity: proof of presence binding one participant to one session."""

    record_id: str
    participant_id: str
    participant_name: str
    session_id: str
    timestamp: datetime
    status: AttendanceStatus
    location_verified: bool
    otp_verified: bool
    qr_verified: bool

    def to_dict(self) -> dict:
        return {
            "record_id": self.record_id,
            "participant_id": self.participant_id,
            "participant_name": self.participant_name,
            "session_id": self.session_id,
            "timestamp": self.timestamp.isoformat(),
            "status": self.status.value,
            "location_verified": self.location_verified,
            "otp_verified": self.otp_verified,
            "qr_verified": self.qr_verified,
        }

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceRecord":
        return cls(
            record_id=str(data["record_id"]),
            participant_id=str(data["participant_id"]),
            participant_name=str(data["participant_name"]),
            session_id=str(data["session_id"]),
            timestamp=datetime.fromisoformat(data["timestamp"]),
            status=AttendanceStatus(data["status"]),
            location_verified=bool(data["location_verified"]),
            otp_verified=bool(data["otp_verified"]),
            qr_verified=bool(data["qr_verified"]),
        )


@dataclass(frozen=True)
class CheckInAttempt:
    """Everything the verification pipeline looks at for one submission."""

    session_id: str
    participant_id: str
    participant_name: str
    submitted_otp: str
    qr_match: bool
    geo_verified: bool
    current_time: datetime
