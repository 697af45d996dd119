from __future__ import annotations

from flask import Flask, Response, jsonify

from ..common.web import admin_required, json_body, to_json
from ..container import Container
from .model import SALARY_COMPONENTS, SalaryProfile

_PROFILE_TEXT_FIELDS = (
    "bank_name",
    "account_holder_name",
    "account_number",
    "ifsc_code",
    "pan_number",
    "uan",
    "esic_number",
)


def register(app: Flask, container: Container) -> None:
    def _payslip_options() -> dict:
        body = json_body()
        return {
            "tax_percent": body.get("tax_percent"),
            "penalty_per_absence": body.get("penalty_per_absence"),
            "notes": body.get("notes") or "",
        }

    @app.route("/api/salary-profiles", methods=["POST"], endpoint="salary_profile_create")
    @admin_required
    def create_profile():
        body = json_body()
        amounts = {name: body.get(name) or 0 for name in SALARY_COMPONENTS}
        texts = {name: str(body.get(name) or "").strip() for name in _PROFILE_TEXT_FIELDS}
        profile = container.payroll_service.register_salary_profile(
            SalaryProfile(employee_id=str(body.get("employee_id") or ""), **amounts, **texts)
        )
        return jsonify({"success": True, "profile": to_json(profile)}), 201

    @app.route("/api/salary-profiles/eligible-employees", methods=["GET"], endpoint="salary_profile_eligible")
    @admin_required
    def eligible_employees():
        return jsonify({"success": True, "employees": container.payroll_service.list_employees_without_profile()})

    @app.route("/api/payslips/<employee_id>/<year_month>/preview", methods=["POST"], endpoint="payslip_preview")
    @admin_required
    def preview(employee_id: str, year_month: str):
        payslip = container.payroll_service.preview(employee_id, year_month, **_payslip_options())
        return jsonify({"success": True, "payslip": to_json(payslip)})

    @app.route("/api/payslips/<employee_id>/<year_month>", methods=["POST"], endpoint="payslip_generate")
    @admin_required
    def generate(employee_id: str, year_month: str):
        payslip = container.payroll_service.generate(employee_id, year_month, **_payslip_options())
        return jsonify({"success": True, "payslip": to_json(payslip)}), 201

    @app.route("/api/payslips/<employee_id>/<year_month>.csv", methods=["GET"], endpoint="payslip_csv")
    @admin_required
    def export_csv(employee_id: str, year_month: str):
        payslip = container.payroll_service.get_payslip(employee_id, year_month)
        filename = f"payslip_{employee_id}_{year_month}.csv"
        return Response(
            container.payroll_service.export_csv(payslip),
            mimetype="text/csv",
            headers={"Content-Disposition": f"attachment; filename={filename}"},
        )
