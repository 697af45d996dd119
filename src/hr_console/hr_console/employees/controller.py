from __future__ import annotations

from flask import Flask, jsonify

from ..common.web import admin_required, current_identity, json_body, parse_date_arg, to_json
from ..container import Container
from ..core.enums import Role
from ..core.exceptions import ValidationError


def register(app: Flask, container: Container) -> None:
    @app.route("/api/employees", methods=["POST"], endpoint="employee_create")
    @admin_required
    def create_employee():
        body = json_body()
        try:
            role = Role(body.get("role") or Role.EMPLOYEE.value)
        except ValueError:
            raise ValidationError("Unknown role")
        joining = body.get("joining_date")
        employee = container.employee_service.create_employee(
            current=current_identity(),
            name=body.get("name") or "",
            email=body.get("email") or "",
            password=body.get("password") or "",
            phone=body.get("phone"),
            department=body.get("department"),
            joining_date=parse_date_arg(joining) if joining else None,
            role=role,
        )
        return jsonify({"success": True, "employee": to_json(employee)}), 201

    @app.route("/api/employees", methods=["GET"], endpoint="employee_list")
    @admin_required
    def list_employees():
        return jsonify({"success": True, "employees": to_json(container.employee_service.list_employees())})

    @app.route("/api/employees/<employee_id>", methods=["DELETE"], endpoint="employee_delete")
    @admin_required
    def delete_employee(employee_id: str):
        container.employee_service.delete_employee(current=current_identity(), employee_id=employee_id)
        return jsonify({"success": True})
