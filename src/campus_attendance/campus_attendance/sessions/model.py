from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime


@dataclass(frozen=True)
class AttendanceSession:
    """Domain entity: a time-boxed attendance-collection window.

    Immutable except for the active flag, which only ever flips to False
    (see ``deactivated``).
    """

    session_id: str
    subject_id: str
    subject_name: str
    department: str
    faculty_id: str
    start_time: datetime
    end_time: datetime
    otp: str
    qr_payload: str
    is_active: bool = True

    def covers(self, moment: datetime) -> bool:
        """Closed interval check on [start_time, end_time]."""
        return self.start_time <= moment <= self.end_time

    def deactivated(self) -> "AttendanceSession":
        return replace(self, is_active=False)

    def to_dict(self, *, include_secrets: bool = False) -> dict:
        data = {
            "session_id": self.session_id,
            "subject_id": self.subject_id,
            "subject_name": self.subject_name,
            "department": self.department,
            "faculty_id": self.faculty_id,
            "start_time": self.start_time.isoformat(),
            "end_time": self.end_time.isoformat(),
            "is_active": self.is_active,
        }
        if include_secrets:
            data["otp"] = self.otp
            data["qr_payload"] = self.qr_payload
        return data

    @classmethod
    def from_dict(cls, data: dict) -> "AttendanceSession":
        return cls(
            session_id=str(data["session_id"]),
            subject_id=str(data["subject_id"]),
            subject_name=str(data["subject_name"]),
            department=str(data["department"]),
            faculty_id=str(data["faculty_id"]),
            start_time=datetime.fromisoformat(data["start_time"]),
            end_time=datetime.fromisoformat(data["end_time"]),
            otp=str(data["otp"]),
            qr_payload=str(data["qr_payload"]),
            is_active=bool(data.get("is_active", False)),
        )
