from __future__ import annotations

from dataclasses import dataclass
from datetime import date, datetime
from typing import Any, Optional

from ..common.datetime_utils import year_month_of
from ..core.constants import ZERO_DURATION
from ..core.enums import LeaveDisposition, LeaveStatus


def leave_doc_id(employee_id: str, leave_date: date) -> str:
    return f"{employee_id}_{leave_date.isoformat()}"


@dataclass(frozen=True)
class LeaveRequest:
    employee_id: str
    leave_date: date
    reason: str
    status: LeaveStatus
    created_at: datetime
    hr_comment: Optional[str] = None
    decided_by: Optional[str] = None
    decided_at: Optional[datetime] = None
    version: int = 0

    @property
    def month(self) -> str:
        return year_month_of(self.leave_date)

    @property
    def doc_id(self) -> str:
        return leave_doc_id(self.employee_id, self.leave_date)


@dataclass(frozen=True)
class LeaveAdjustment:
    """Outcome of folding one accepted leave day into a monthly summary."""

    leave_date: date
    present_days: int
    absent_days: int
    leaves_taken: int
    carry_forward_before: int
    carry_forward_after: int
    carry_forward_used: bool
    marked_as: Optional[LeaveDisposition]
    counted_dates: tuple[str, ...]
    already_counted: bool = False

    def to_fields(self, employee_id: str) -> dict[str, Any]:
        """Only the fields the adjustment touches (for a merge write)."""

        return {
            "employee_id": employee_id,
            "month": year_month_of(self.leave_date),
            "present_days": self.present_days,
            "absent_days": self.absent_days,
            "leaves_taken": self.leaves_taken,
            "carry_forward_leaves": self.carry_forward_after,
            "daily_hours": {self.leave_date.isoformat(): ZERO_DURATION},
            "counted_dates": list(self.counted_dates),
        }


@dataclass(frozen=True)
class LeaveHistoryEntry:
    """Immutable audit record written when a leave is accepted."""

    employee_id: str
    leave_date: date
    status: LeaveStatus
    reason: str
    hr_comment: str
    decided_by: str
    carry_forward_at_that_time: int
    carry_forward_used: bool
    marked_as: LeaveDisposition
    final_carry_forward_left: int
    timestamp: datetime

    @property
    def month(self) -> str:
        return year_month_of(self.leave_date)
