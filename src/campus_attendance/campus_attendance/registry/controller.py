from __future__ import annotations

from flask import Flask, jsonify

from ..common.http import error_response
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/registry/subjects", methods=["GET"], endpoint="registry_subjects")
    def registry_subjects():
        try:
            subjects = container.registry.list_subjects()
            return jsonify({"success": True, "subjects": [{"subject_id": s.subject_id, "name": s.name} for s in subjects]}), 200
        except Exception as e:
            return error_response(e)

    @app.route("/api/registry/departments", methods=["GET"], endpoint="registry_departments")
    def registry_departments():
        try:
            departments = container.registry.list_departments()
            return jsonify({"success": True, "departments": [d.name for d in departments]}), 200
        except Exception as e:
            return error_response(e)
