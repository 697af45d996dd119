from __future__ import annotations

from datetime import date, datetime
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import LeaveDisposition, LeaveStatus
from ..core.exceptions import ConcurrencyError
from ..store.model import Document
from ..store.repository import DocumentStore
from .model import LeaveHistoryEntry, LeaveRequest, leave_doc_id
from .repository import LeaveRepository

REQUESTS = "leave_requests"
HISTORY = "leave_history"


class DocumentLeaveRepository(LeaveRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def create(self, request: LeaveRequest) -> bool:
        try:
            self._store.create(REQUESTS, request.doc_id, _request_data(request))
        except ConcurrencyError:
            return False
        return True

    def get(self, employee_id: str, leave_date: date) -> Optional[LeaveRequest]:
        doc = self._store.get(REQUESTS, leave_doc_id(employee_id, leave_date))
        return _request_from(doc) if doc else None

    def list_for_month(self, year_month: str, *, status: Optional[LeaveStatus] = None) -> Sequence[LeaveRequest]:
        out = []
        for doc in self._store.list(REQUESTS):
            req = _request_from(doc)
            if req.month != year_month:
                continue
            if status is not None and req.status != status:
                continue
            out.append(req)
        out.sort(key=lambda r: (r.leave_date, r.employee_id))
        return out

    def decide(
        self,
        request: LeaveRequest,
        *,
        status: LeaveStatus,
        hr_comment: str,
        decided_by: str,
        decided_at: datetime,
    ) -> bool:
        try:
            self._store.set(
                REQUESTS,
                request.doc_id,
                {
                    "status": status.value,
                    "hr_comment": hr_comment,
                    "decided_by": decided_by,
                    "decided_at": decided_at.isoformat(),
                },
                merge=True,
                expected_version=request.version,
            )
        except ConcurrencyError:
            return False
        return True

    def add_history(self, entry: LeaveHistoryEntry) -> bool:
        try:
            self._store.create(HISTORY, leave_doc_id(entry.employee_id, entry.leave_date), _history_data(entry))
        except ConcurrencyError:
            return False
        return True

    def get_history(self, employee_id: str, leave_date: date) -> Optional[LeaveHistoryEntry]:
        doc = self._store.get(HISTORY, leave_doc_id(employee_id, leave_date))
        return _history_from(doc) if doc else None

    def list_history(self, year_month: str) -> Sequence[LeaveHistoryEntry]:
        entries = [_history_from(d) for d in self._store.list(HISTORY)]
        return [e for e in entries if e.month == year_month]


def _request_data(r: LeaveRequest) -> dict[str, Any]:
    return {
        "employee_id": r.employee_id,
        "date": r.leave_date.isoformat(),
        "month": r.month,
        "reason": r.reason,
        "status": r.status.value,
        "created_at": r.created_at.isoformat(),
        "hr_comment": r.hr_comment,
        "decided_by": r.decided_by,
        "decided_at": r.decided_at.isoformat() if r.decided_at else None,
    }


def _request_from(doc: Document) -> LeaveRequest:
    d = doc.data
    return LeaveRequest(
        employee_id=str(d["employee_id"]),
        leave_date=parse_iso_date(d["date"]),
        reason=str(d.get("reason") or ""),
        status=LeaveStatus(d.get("status") or LeaveStatus.PENDING.value),
        created_at=datetime.fromisoformat(d["created_at"]),
        hr_comment=d.get("hr_comment"),
        decided_by=d.get("decided_by"),
        decided_at=datetime.fromisoformat(d["decided_at"]) if d.get("decided_at") else None,
        version=doc.version,
    )


def _history_data(e: LeaveHistoryEntry) -> dict[str, Any]:
    return {
        "employee_id": e.employee_id,
        "date": e.leave_date.isoformat(),
        "month": e.month,
        "status": e.status.value,
        "reason": e.reason,
        "hr_comment": e.hr_comment,
        "decided_by": e.decided_by,
        "carry_forward_at_that_time": e.carry_forward_at_that_time,
        "carry_forward_used": e.carry_forward_used,
        "marked_as": e.marked_as.value,
        "final_carry_forward_left": e.final_carry_forward_left,
        "timestamp": e.timestamp.isoformat(),
    }


def _history_from(doc: Document) -> LeaveHistoryEntry:
    d = doc.data
    return LeaveHistoryEntry(
        employee_id=str(d["employee_id"]),
        leave_date=parse_iso_date(d["date"]),
        status=LeaveStatus(d["status"]),
        reason=str(d.get("reason") or ""),
        hr_comment=str(d.get("hr_comment") or ""),
        decided_by=str(d.get("decided_by") or ""),
        carry_forward_at_that_time=int(d.get("carry_forward_at_that_time") or 0),
        carry_forward_used=bool(d.get("carry_forward_used")),
        marked_as=LeaveDisposition(d["marked_as"]),
        final_carry_forward_left=int(d.get("final_carry_forward_left") or 0),
        timestamp=datetime.fromisoformat(d["timestamp"]),
    )
