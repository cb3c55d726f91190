from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.http import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/insights", methods=["GET"], endpoint="insights")
    def insights():
        try:
            department = request.args.get("department") or None
            report = container.insight_service.generate_report(department=department)
            return jsonify({"success": True, "report": report.to_dict()}), 200
        except Exception as e:
            return error_response(e)
