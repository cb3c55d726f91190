from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response, json_body
from ..container import Container
from ..core.enums import CheckInState
from ..core.exceptions import ValidationError
from .qr_scanner import decode_qr_payload


def register(app: Flask, container: Container) -> None:
    recorder = container.attendance_recorder

    def _submit(session_id: str, fields, scanned_payload):
        otp = fields.get("otp")
        record = recorder.check_in(
            session_id=session_id,
            participant_id=fields.get("participant_id"),
            participant_name=fields.get("participant_name"),
            submitted_otp=otp.strip() if isinstance(otp, str) else otp,
            latitude=fields.get("latitude"),
            longitude=fields.get("longitude"),
            scanned_payload=scanned_payload,
        )
        return jsonify({
            "success": True,
            "state": CheckInState.COMMITTED.value,
            "record": record.to_dict(),
            "message": "Attendance marked",
        }), 201

    @app.route("/api/sessions/<session_id>/attendance", methods=["POST"], endpoint="mark_attendance")
    def mark_attendance(session_id: str):
        """Participant check-in with the QR payload already decoded on the device."""
        try:
            data = json_body()
            payload = data.get("qr_payload")
            return _submit(session_id, data, payload.strip() if isinstance(payload, str) else payload)
        except Exception as e:
            return error_response(e)

    @app.route("/api/sessions/<session_id>/attendance/image", methods=["POST"], endpoint="mark_attendance_image")
    def mark_attendance_image(session_id: str):
        """Participant check-in with a photo of the QR code, decoded here."""
        try:
            if "image" not in request.files:
                raise ValidationError("Missing image file")
            payload = decode_qr_payload(request.files["image"].stream)
            if payload is None:
                raise ValidationError("No QR code found in the image")
            return _submit(session_id, request.form, payload)
        except Exception as e:
            return error_response(e)

    @app.route("/api/sessions/<session_id>/records", methods=["GET"], endpoint="session_records")
    def session_records(session_id: str):
        try:
            records = recorder.list_records(session_id)
            return jsonify({"success": True, "records": [r.to_dict() for r in records]}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/participants/<participant_id>/history", methods=["GET"], endpoint="participant_history")
    def participant_history(participant_id: str):
        try:
            records = recorder.list_history(participant_id)
            return jsonify({"success": True, "records": [r.to_dict() for r in records]}), 200
        except Exception as e:
            return error_response(e)
