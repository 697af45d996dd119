from __future__ import annotations

from flask import Flask, jsonify, request

from ..common.datetime_utils import now_local, year_month_of
from ..common.web import admin_required, current_identity, json_body, login_required, parse_date_arg, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    def _month_arg() -> str:
        return (request.args.get("month") or "").strip() or year_month_of(now_local().date())

    @app.route("/api/leaves", methods=["POST"], endpoint="leave_request")
    @login_required
    def request_leave():
        body = json_body()
        leave = container.leave_service.request_leave(
            employee_id=current_identity().uid,
            leave_date=parse_date_arg(body.get("date") or ""),
            reason=body.get("reason") or "",
        )
        return jsonify({"success": True, "request": to_json(leave)}), 201

    @app.route("/api/leaves", methods=["GET"], endpoint="leave_list")
    @admin_required
    def list_leaves():
        month = _month_arg()
        return jsonify(
            {
                "success": True,
                "month": month,
                "pending": to_json(container.leave_service.list_pending(month)),
                "history": to_json(container.leave_service.list_decided(month)),
            }
        )

    @app.route("/api/leaves/history", methods=["GET"], endpoint="leave_history")
    @admin_required
    def leave_history():
        month = _month_arg()
        return jsonify({"success": True, "month": month, "entries": to_json(container.leave_service.list_history(month))})

    @app.route("/api/leaves/<employee_id>/<day>/accept", methods=["POST"], endpoint="leave_accept")
    @admin_required
    def accept(employee_id: str, day: str):
        adjustment = container.leave_service.accept(
            employee_id=employee_id,
            leave_date=parse_date_arg(day),
            comment=json_body().get("comment") or "",
            reviewer=current_identity(),
        )
        return jsonify({"success": True, "adjustment": to_json(adjustment)})

    @app.route("/api/leaves/<employee_id>/<day>/reject", methods=["POST"], endpoint="leave_reject")
    @admin_required
    def reject(employee_id: str, day: str):
        container.leave_service.reject(
            employee_id=employee_id,
            leave_date=parse_date_arg(day),
            comment=json_body().get("comment") or "",
            reviewer=current_identity(),
        )
        return jsonify({"success": True})

    @app.route("/api/leaves/<employee_id>/<day>/reconcile", methods=["POST"], endpoint="leave_reconcile")
    @admin_required
    def reconcile(employee_id: str, day: str):
        adjustment = container.leave_service.reconcile(
            employee_id=employee_id,
            leave_date=parse_date_arg(day),
            reviewer=current_identity(),
        )
        return jsonify({"success": True, "adjustment": to_json(adjustment)})
