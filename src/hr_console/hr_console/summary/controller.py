from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, ensure_self_or_admin, login_required, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/summaries/<employee_id>/<year_month>/generate", methods=["POST"], endpoint="summary_generate")
    @admin_required
    def generate(employee_id: str, year_month: str):
        summary = container.summary_service.generate(employee_id, year_month)
        return jsonify({"success": True, "summary": to_json(summary)})

    @app.route("/api/summaries/<employee_id>/<year_month>", methods=["GET"], endpoint="summary_get")
    @login_required
    def get(employee_id: str, year_month: str):
        ensure_self_or_admin(employee_id)
        summary = container.summary_service.get(employee_id, year_month)
        if summary is None:
            return jsonify({"success": False, "message": "Summary not generated yet"}), 404
        return jsonify({"success": True, "summary": to_json(summary)})
