from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.web import current_identity, ensure_self_or_admin, json_body, login_required, parse_date_arg, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/attendance/clock-in", methods=["POST"], endpoint="attendance_clock_in")
    @login_required
    def clock_in():
        location = (json_body().get("location") or "").strip() or None
        record = container.attendance_service.clock_in(current_identity().uid, location=location)
        return jsonify({"success": True, "record": to_json(record)}), 201

    @app.route("/api/attendance/clock-out", methods=["POST"], endpoint="attendance_clock_out")
    @login_required
    def clock_out():
        location = (json_body().get("location") or "").strip() or None
        record = container.attendance_service.clock_out(current_identity().uid, location=location)
        return jsonify({"success": True, "record": to_json(record)})

    @app.route("/api/attendance/<employee_id>/day/<day>", methods=["GET"], endpoint="attendance_day")
    @login_required
    def day_view(employee_id: str, day: str):
        ensure_self_or_admin(employee_id)
        include_open = request.args.get("include_open", "0") in {"1", "true", "yes"}
        view = container.attendance_service.get_day(employee_id, parse_date_arg(day), include_open=include_open)
        if view is None:
            return jsonify({"success": False, "message": "No attendance recorded for this day"}), 404
        return jsonify({"success": True, "day": to_json(view)})

    @app.route("/api/attendance/<employee_id>/month/<year_month>", methods=["GET"], endpoint="attendance_month")
    @login_required
    def month_view(employee_id: str, year_month: str):
        ensure_self_or_admin(employee_id)
        rows = container.attendance_service.get_month_rows(employee_id, year_month)
        return jsonify({"success": True, "rows": rows})
