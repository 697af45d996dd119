from __future__ import annotations

from datetime import date
from typing import Optional, Protocol, Sequence

from .model import DailyAttendanceRecord


class AttendanceRepository(Protocol):
    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        raise NotImplementedError

    def list_for_employee_month(self, employee_id: str, year_month: str) -> Sequence[DailyAttendanceRecord]:
        raise NotImplementedError

    def save(self, record: DailyAttendanceRecord) -> int:
        """Conditional on `record.version` (0 = new day); returns the new version."""

        raise NotImplementedError
