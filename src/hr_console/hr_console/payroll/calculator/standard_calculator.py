from __future__ import annotations

from ...common.datetime_utils import duration_to_hours
from ...summary.model import MonthlySummary
from ..model import PayrollProjection, PayrollSettings, SalaryProfile
from .base import PayrollCalculator


class StandardPayrollCalculator(PayrollCalculator):
    """Standard rule: gross prorated by worked/standard hours (capped at 1),
    minus tax on the prorated gross and a flat penalty per absent day.

    Values are not rounded here; call `PayrollProjection.rounded()` at output.
    """

    def project(self, profile: SalaryProfile, summary: MonthlySummary, settings: PayrollSettings) -> PayrollProjection:
        gross = sum(profile.components().values())
        worked_hours = duration_to_hours(summary.total_hours)

        if settings.standard_monthly_hours > 0:
            hour_ratio = min(worked_hours / settings.standard_monthly_hours, 1.0)
        else:
            hour_ratio = 1.0
        gross_adjusted = gross * hour_ratio

        tax = gross_adjusted * settings.tax_percent / 100
        penalty = summary.absent_days * settings.penalty_per_absence
        return PayrollProjection(
            gross=gross,
            worked_hours=worked_hours,
            hour_ratio=hour_ratio,
            gross_adjusted=gross_adjusted,
            tax=tax,
            penalty=penalty,
            net_salary=gross_adjusted - tax - penalty,
        )
