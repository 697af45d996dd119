from __future__ import annotations

from dataclasses import dataclass, field, replace
from datetime import datetime
from typing import Optional

from ..core.constants import DEFAULT_PENALTY_PER_ABSENCE, DEFAULT_TAX_PERCENT, STANDARD_MONTHLY_HOURS

# Pay components in payslip order, with their display labels.
SALARY_COMPONENTS: dict[str, str] = {
    "basic_salary": "Basic Salary",
    "house_rent_allowance": "House Rent Allowance",
    "dearness_allowance": "Dearness Allowance",
    "conveyance_allowance": "Conveyance Allowance",
    "medical_allowance": "Medical Allowance",
    "special_allowance": "Special Allowance",
    "overtime_pay": "Overtime Pay",
    "incentives": "Incentives",
    "other_allowances": "Other Allowances",
}


@dataclass(frozen=True)
class SalaryProfile:
    """Static compensation of one employee; bank details do not enter the pay formula."""

    employee_id: str
    basic_salary: float = 0.0
    house_rent_allowance: float = 0.0
    dearness_allowance: float = 0.0
    conveyance_allowance: float = 0.0
    medical_allowance: float = 0.0
    special_allowance: float = 0.0
    overtime_pay: float = 0.0
    incentives: float = 0.0
    other_allowances: float = 0.0
    bank_name: str = ""
    account_holder_name: str = ""
    account_number: str = ""
    ifsc_code: str = ""
    pan_number: str = ""
    uan: str = ""
    esic_number: str = ""

    def components(self) -> dict[str, float]:
        return {name: float(getattr(self, name)) for name in SALARY_COMPONENTS}


@dataclass(frozen=True)
class PayrollSettings:
    standard_monthly_hours: float = STANDARD_MONTHLY_HOURS
    tax_percent: float = DEFAULT_TAX_PERCENT
    penalty_per_absence: float = DEFAULT_PENALTY_PER_ABSENCE


@dataclass(frozen=True)
class PayrollProjection:
    gross: float
    worked_hours: float
    hour_ratio: float
    gross_adjusted: float
    tax: float
    penalty: float
    net_salary: float

    def rounded(self) -> "PayrollProjection":
        """Output step: money to 2 decimals, hours and ratio to 4."""
        return replace(
            self,
            gross=round(self.gross, 2),
            worked_hours=round(self.worked_hours, 4),
            hour_ratio=round(self.hour_ratio, 4),
            gross_adjusted=round(self.gross_adjusted, 2),
            tax=round(self.tax, 2),
            penalty=round(self.penalty, 2),
            net_salary=round(self.net_salary, 2),
        )


@dataclass(frozen=True)
class Payslip:
    employee_id: str
    month: str
    projection: PayrollProjection
    settings: PayrollSettings
    components: dict[str, float] = field(default_factory=dict)
    name: str = ""
    email: str = ""
    department: Optional[str] = None
    present_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    leaves_taken: int = 0
    total_working_days: int = 0
    total_worked_hours: str = ""
    notes: str = ""
    created_at: Optional[datetime] = None

    @property
    def doc_id(self) -> str:
        return f"{self.employee_id}_{self.month}"
