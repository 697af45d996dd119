from __future__ import annotations

import csv
import io
import logging
from dataclasses import replace
from typing import Callable, Optional

from ..common.datetime_utils import now_local, parse_year_month
from ..common.validators import require_non_negative, require_range
from ..core.exceptions import NotFoundError, ValidationError
from ..employees.repository import EmployeeRepository
from ..summary.model import MonthlySummary
from ..summary.repository import SummaryRepository
from .calculator.base import PayrollCalculator
from .calculator.standard_calculator import StandardPayrollCalculator
from .model import SALARY_COMPONENTS, Payslip, PayrollSettings, SalaryProfile
from .repository import SalaryRepository

logger = logging.getLogger(__name__)

EXPORT_COLUMNS = ["pay_period", "section", "item", "amount"]


class PayrollService:
    """Use case: salary profiles and monthly payslips."""

    def __init__(
        self,
        salaries: SalaryRepository,
        summaries: SummaryRepository,
        employees: EmployeeRepository,
        *,
        settings: Optional[PayrollSettings] = None,
        calculator: Optional[PayrollCalculator] = None,
        clock: Callable = now_local,
    ):
        self._salaries = salaries
        self._summaries = summaries
        self._employees = employees
        self._settings = settings or PayrollSettings()
        self._calculator = calculator or StandardPayrollCalculator()
        self._clock = clock

    def register_salary_profile(self, profile: SalaryProfile) -> SalaryProfile:
        if not self._employees.get_by_id(profile.employee_id):
            raise NotFoundError("Employee not found")
        profile = replace(
            profile,
            **{name: require_non_negative(getattr(profile, name), label) for name, label in SALARY_COMPONENTS.items()},
        )

        if not self._salaries.create_profile(profile):
            raise ValidationError("Salary details already exist for this employee")
        logger.info("Salary profile registered for %s", profile.employee_id)
        return profile

    def list_employees_without_profile(self) -> list[dict]:
        with_profile = {p.employee_id for p in self._salaries.list_profiles()}
        return [
            {"id": e.employee_id, "name": e.name or "Unnamed", "email": e.email}
            for e in self._employees.list_all()
            if e.employee_id not in with_profile
        ]

    def preview(
        self,
        employee_id: str,
        year_month: str,
        *,
        tax_percent: Optional[float] = None,
        penalty_per_absence: Optional[float] = None,
        notes: str = "",
    ) -> Payslip:
        parse_year_month(year_month)
        employee = self._employees.get_by_id(employee_id)
        if not employee:
            raise NotFoundError("Employee not found")
        profile = self._salaries.get_profile(employee_id)
        if not profile:
            raise NotFoundError("No salary details for this employee")

        settings = PayrollSettings(
            standard_monthly_hours=self._settings.standard_monthly_hours,
            tax_percent=self._pick(tax_percent, self._settings.tax_percent, "Tax %", high=100),
            penalty_per_absence=self._pick(penalty_per_absence, self._settings.penalty_per_absence, "Penalty per absence"),
        )
        # No summary yet means nothing worked and nothing to deduct.
        summary = self._summaries.get(employee_id, year_month) or MonthlySummary(employee_id=employee_id, month=year_month)
        projection = self._calculator.project(profile, summary, settings).rounded()

        return Payslip(
            employee_id=employee_id,
            month=year_month,
            projection=projection,
            settings=settings,
            components=profile.components(),
            name=employee.name,
            email=employee.email,
            department=employee.department,
            present_days=summary.present_days,
            half_days=summary.half_days,
            absent_days=summary.absent_days,
            leaves_taken=summary.leaves_taken,
            total_working_days=summary.total_working_days,
            total_worked_hours=summary.total_hours,
            notes=(notes or "").strip(),
            created_at=self._clock(),
        )

    def generate(self, employee_id: str, year_month: str, **kwargs) -> Payslip:
        payslip = self.preview(employee_id, year_month, **kwargs)
        self._salaries.save_payslip(payslip)
        logger.info(
            "Payslip %s saved: gross=%.2f net=%.2f",
            payslip.doc_id,
            payslip.projection.gross,
            payslip.projection.net_salary,
        )
        return payslip

    def get_payslip(self, employee_id: str, year_month: str) -> Payslip:
        payslip = self._salaries.get_payslip(employee_id, year_month)
        if not payslip:
            raise NotFoundError("Payslip not found")
        return payslip

    @staticmethod
    def export_rows(payslip: Payslip) -> list[dict]:
        p = payslip.projection
        period = payslip.month
        rows = [
            {"pay_period": period, "section": "Earnings", "item": label, "amount": round(payslip.components.get(name, 0.0), 2)}
            for name, label in SALARY_COMPONENTS.items()
        ]
        rows += [
            {"pay_period": period, "section": "Earnings", "item": "Gross Salary", "amount": p.gross},
            {"pay_period": period, "section": "Earnings", "item": f"Prorated Gross ({p.hour_ratio:.2f})", "amount": p.gross_adjusted},
            {"pay_period": period, "section": "Deductions", "item": f"Tax ({payslip.settings.tax_percent:g}%)", "amount": p.tax},
            {"pay_period": period, "section": "Deductions", "item": f"Absence Penalty ({payslip.absent_days} days)", "amount": p.penalty},
            {"pay_period": period, "section": "Net", "item": "Net Salary", "amount": p.net_salary},
        ]
        return rows

    def export_csv(self, payslip: Payslip) -> bytes:
        out = io.StringIO()
        writer = csv.DictWriter(out, fieldnames=EXPORT_COLUMNS)
        writer.writeheader()
        for row in self.export_rows(payslip):
            writer.writerow({**row, "amount": f"{row['amount']:.2f}"})
        # BOM so spreadsheet tools pick up UTF-8.
        return out.getvalue().encode("utf-8-sig")

    @staticmethod
    def _pick(value: Optional[float], default: float, label: str, *, high: Optional[float] = None) -> float:
        if value is None or value == "":
            return float(default)
        if high is None:
            return require_non_negative(value, label)
        return require_range(value, label, 0, high)
