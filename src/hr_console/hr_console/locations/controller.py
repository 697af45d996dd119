from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_identity, json_body, to_json
from ..container import Container


def register(app: Flask, container: Container) -> None:
    @app.route("/api/work-locations/<employee_id>", methods=["PUT"], endpoint="work_location_assign")
    @admin_required
    def assign(employee_id: str):
        body = json_body()
        location = container.location_service.assign(
            employee_id,
            name=body.get("name") or "",
            latitude=body.get("latitude"),
            longitude=body.get("longitude"),
            radius_m=body.get("radius_m"),
            assigned_by=current_identity(),
        )
        return jsonify({"success": True, "location": to_json(location)})

    @app.route("/api/work-locations", methods=["GET"], endpoint="work_location_list")
    @admin_required
    def list_locations():
        return jsonify({"success": True, "locations": to_json(container.location_service.list_assignments())})
