"""Example: drive the service layer directly (no Flask, local store).

Controllers are a thin layer; the protocol lives in the services.
"""

from datetime import timedelta

from src.campus_attendance.campus_attendance.container import build_container
from src.campus_attendance.campus_attendance.core.exceptions import AttendanceRejected


def main():
    container = build_container(
        db_config=None,
        campus_location={"latitude": 11.0827, "longitude": 77.0003, "radius_m": 800},
        storage_backend="local",
    )
    session = container.session_issuer.open_session(
        subject_id="CS801", department="Computer Science", faculty_id="F001", duration_minutes=15
    )
    print("OTP:", session.otp, "QR:", session.qr_payload)

    record = container.attendance_recorder.check_in(
        session_id=session.session_id,
        participant_id="S101",
        participant_name="Arun Kumar",
        submitted_otp=session.otp,
        latitude=11.0830,
        longitude=77.0005,
        scanned_payload=session.qr_payload,
    )
    print("Committed:", record.to_dict())

    try:
        container.attendance_recorder.check_in(
            session_id=session.session_id,
            participant_id="S101",
            participant_name="Arun Kumar",
            submitted_otp=session.otp,
            latitude=11.0830,
            longitude=77.0005,
            scanned_payload=session.qr_payload,
            current_time=session.end_time + timedelta(minutes=1),
        )
    except AttendanceRejected as e:
        print("Rejected:", e.code, "retryable=", e.retryable)


if __name__ == "__main__":
    main()
