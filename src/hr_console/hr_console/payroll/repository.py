from __future__ import annotations

from typing import Optional, Protocol, Sequence

from .model import Payslip, SalaryProfile


class SalaryRepository(Protocol):
    def get_profile(self, employee_id: str) -> Optional[SalaryProfile]:
        raise NotImplementedError

    def create_profile(self, profile: SalaryProfile) -> bool:
        """False when the employee already has a profile."""

        raise NotImplementedError

    def list_profiles(self) -> Sequence[SalaryProfile]:
        raise NotImplementedError

    def delete_profile(self, employee_id: str) -> bool:
        raise NotImplementedError

    def save_payslip(self, payslip: Payslip) -> None:
        raise NotImplementedError

    def get_payslip(self, employee_id: str, year_month: str) -> Optional[Payslip]:
        raise NotImplementedError
