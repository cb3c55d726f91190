from __future__ import annotations

import logging

from flask import jsonify, request

from ..core.enums import CheckInState
from ..core.exceptions import (
    AttendanceRejected,
    DomainError,
    DuplicateSubmission,
    PersistenceFailure,
    SessionConflict,
    SessionExpired,
    ValidationError,
)

logger = logging.getLogger(__name__)


def json_body() -> dict:
    data = request.get_json(silent=True)
    if not isinstance(data, dict):
        raise ValidationError("Request body must be a JSON object")
    return data


def _status_for(e: DomainError) -> int:
    if isinstance(e, SessionExpired):
        return 410
    if isinstance(e, (DuplicateSubmission, SessionConflict)):
        return 409
    if isinstance(e, PersistenceFailure):
        return 503
    return 400


def error_response(e: Exception):
    """JSON error body shared by every controller.

    ``retryable`` separates "fix your input and retry" from "this attempt is
    permanently void"; ``state`` is where the check-in state machine landed.
    """

    if not isinstance(e, DomainError):
        logger.exception("Unhandled error on %s %s", request.method, request.path)
        return jsonify({"success": False, "code": "INTERNAL_ERROR", "retryable": True, "message": "Internal server error"}), 500

    retryable = bool(getattr(e, "retryable", False))
    body = {
        "success": False,
        "code": getattr(e, "code", "VALIDATION_ERROR"),
        "retryable": retryable,
        "message": str(e),
    }
    if isinstance(e, AttendanceRejected):
        body["state"] = (CheckInState.NOT_ATTEMPTED if retryable else CheckInState.REJECTED).value
    return jsonify(body), _status_for(e)
