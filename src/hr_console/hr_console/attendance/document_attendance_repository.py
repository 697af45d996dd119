from __future__ import annotations

from dataclasses import replace
from datetime import date
from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.constants import ZERO_DURATION
from ..store.model import Document
from ..store.repository import DocumentStore
from .model import DailyAttendanceRecord, Session, attendance_doc_id
from .repository import AttendanceRepository

COLLECTION = "attendance"


class DocumentAttendanceRepository(AttendanceRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_for_employee_and_date(self, employee_id: str, work_date: date) -> Optional[DailyAttendanceRecord]:
        doc = self._store.get(COLLECTION, attendance_doc_id(employee_id, work_date))
        return _from_document(doc) if doc else None

    def list_for_employee_month(self, employee_id: str, year_month: str) -> Sequence[DailyAttendanceRecord]:
        docs = self._store.list(COLLECTION, prefix=f"{employee_id}_{year_month}-")
        return [_from_document(d) for d in docs]

    def save(self, record: DailyAttendanceRecord) -> int:
        return self._store.set(COLLECTION, record.doc_id, _to_data(record), expected_version=record.version)


def _to_data(record: DailyAttendanceRecord) -> dict[str, Any]:
    return {
        "employee_id": record.employee_id,
        "date": record.work_date.isoformat(),
        "sessions": [
            {
                "login": s.login,
                "logout": s.logout,
                "login_location": s.login_location,
                "logout_location": s.logout_location,
            }
            for s in record.sessions
        ],
        "total_hours": record.total_hours,
        "location": record.location,
    }


def _from_document(doc: Document) -> DailyAttendanceRecord:
    d = doc.data
    employee_id, _, day = doc.doc_id.rpartition("_")
    sessions = [
        Session(
            login=s.get("login"),
            logout=s.get("logout"),
            login_location=s.get("login_location"),
            logout_location=s.get("logout_location"),
        )
        for s in d.get("sessions") or []
    ]
    # Older records carry a single day-level location only.
    if sessions and not sessions[0].login_location and d.get("location"):
        sessions[0] = replace(sessions[0], login_location=d["location"])
    return DailyAttendanceRecord(
        employee_id=str(d.get("employee_id") or employee_id),
        work_date=parse_iso_date(str(d.get("date") or day)),
        sessions=tuple(sessions),
        total_hours=str(d.get("total_hours") or ZERO_DURATION),
        version=doc.version,
    )
