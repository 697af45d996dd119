from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from typing import Optional

from ..core.constants import ZERO_DURATION


def attendance_doc_id(employee_id: str, work_date: date) -> str:
    return f"{employee_id}_{work_date.isoformat()}"


@dataclass(frozen=True)
class Session:
    """One login/logout interval, both as wall-clock strings ('09:00:00 AM'),
    with the place each end was recorded from."""

    login: Optional[str]
    logout: Optional[str] = None
    login_location: Optional[str] = None
    logout_location: Optional[str] = None

    @property
    def is_open(self) -> bool:
        return bool(self.login) and not self.logout


@dataclass(frozen=True)
class DailyAttendanceRecord:
    """Domain entity: all sessions of one employee on one calendar day."""

    employee_id: str
    work_date: date
    sessions: tuple[Session, ...] = ()
    total_hours: str = ZERO_DURATION
    version: int = 0

    @property
    def location(self) -> Optional[str]:
        """Primary location: where the first session of the day was opened."""
        for s in self.sessions:
            if s.login_location:
                return s.login_location
        return None

    @property
    def doc_id(self) -> str:
        return attendance_doc_id(self.employee_id, self.work_date)

    @property
    def open_session(self) -> Optional[Session]:
        if self.sessions and self.sessions[-1].is_open:
            return self.sessions[-1]
        return None


@dataclass(frozen=True)
class DayView:
    """Read-model for one day: computed totals next to the raw record."""

    employee_id: str
    work_date: date
    seconds: int
    total_hours: str
    status: str
    sessions: tuple[Session, ...]
    location: Optional[str] = None
