from __future__ import annotations

from datetime import date, datetime
from typing import Optional, Protocol, Sequence

from ..core.enums import LeaveStatus
from .model import LeaveHistoryEntry, LeaveRequest


class LeaveRepository(Protocol):
    def create(self, request: LeaveRequest) -> bool:
        """False when a request already exists for the same employee and date."""

        raise NotImplementedError

    def get(self, employee_id: str, leave_date: date) -> Optional[LeaveRequest]:
        raise NotImplementedError

    def list_for_month(self, year_month: str, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        raise NotImplementedError

    def decide(
        self,
        request: LeaveRequest,
        *,
        status: LeaveStatus,
        hr_comment: str,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        """Conditional on `request.version`; False if someone else changed it first."""

        raise NotImplementedError

    # Audit trail
    def add_history(self, entry: LeaveHistoryEntry) -> bool:
        """Create-only; False when an entry for that day already exists."""

        raise NotImplementedError

    def get_history(self, employee_id: str, leave_date: date) -> Optional[LeaveHistoryEntry]:
        raise NotImplementedError

    def list_history(self, year_month: str) -> Sequence[LeaveHistoryEntry]:
        raise NotImplementedError
