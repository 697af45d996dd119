from __future__ import annotations

from abc import ABC, abstractmethod

from ...summary.model import MonthlySummary
from ..model import PayrollProjection, PayrollSettings, SalaryProfile


class PayrollCalculator(ABC):
    """Calculator interface (Strategy Pattern for payroll)."""

    @abstractmethod
    def project(self, profile: SalaryProfile, summary: MonthlySummary, settings: PayrollSettings) -> PayrollProjection:
        raise NotImplementedError
