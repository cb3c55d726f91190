from __future__ import annotations

from flask import Flask, jsonify, request, send_file

from ..common.http import error_response, json_body
from ..container import Container
from .qr_image import render_qr_png


def register(app: Flask, container: Container) -> None:
    issuer = container.session_issuer

    @app.route("/api/sessions", methods=["POST"], endpoint="open_session")
    def open_session():
        """Faculty: start a session. The response carries the OTP and QR payload."""
        try:
            data = json_body()
            session = issuer.open_session(
                subject_id=data.get("subject_id"),
                department=data.get("department"),
                faculty_id=data.get("faculty_id"),
                duration_minutes=data.get("duration_minutes", container.default_session_minutes),
            )
            return jsonify({"success": True, "session": session.to_dict(include_secrets=True)}), 201
        except Exception as e:
            return error_response(e)

    @app.route("/api/sessions/<session_id>/close", methods=["POST"], endpoint="close_session")
    def close_session(session_id: str):
        try:
            closed = issuer.close_session(session_id)
            return jsonify({"success": True, "closed": closed}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/sessions/active", methods=["GET"], endpoint="active_session")
    def active_session():
        """Polled by clients. With ``participant_id`` the session is hidden once marked."""
        try:
            participant_id = request.args.get("participant_id")
            if participant_id:
                session = issuer.get_pending_session(participant_id)
            else:
                session = issuer.get_active_session()
            return jsonify({"success": True, "session": session.to_dict() if session else None}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/sessions/active/qr.png", methods=["GET"], endpoint="active_session_qr")
    def active_session_qr():
        """QR image for the faculty screen."""
        try:
            session = issuer.get_active_session()
            if not session:
                return jsonify({"success": False, "code": "NO_ACTIVE_SESSION", "retryable": True, "message": "No active session"}), 404
            return send_file(render_qr_png(session.qr_payload), mimetype="image/png")
        except Exception as e:
            return error_response(e)
