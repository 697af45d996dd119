from __future__ import annotations

from typing import Any, Mapping, Optional

from ..core.constants import ZERO_DURATION
from ..store.model import Document
from ..store.repository import DocumentStore
from .model import MonthlySummary, summary_doc_id
from .repository import SummaryRepository

COLLECTION = "attendance_summary"


class DocumentSummaryRepository(SummaryRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get(self, employee_id: str, year_month: str) -> Optional[MonthlySummary]:
        doc = self._store.get(COLLECTION, summary_doc_id(employee_id, year_month))
        return _from_document(doc) if doc else None

    def replace(self, summary: MonthlySummary) -> int:
        return self._store.set(COLLECTION, summary.doc_id, to_data(summary))

    def patch(
        self,
        employee_id: str,
        year_month: str,
        fields: Mapping[str, Any],
        *,
        expected_version: int,
    ) -> int:
        return self._store.set(
            COLLECTION,
            summary_doc_id(employee_id, year_month),
            fields,
            merge=True,
            expected_version=expected_version,
        )


def to_data(summary: MonthlySummary) -> dict[str, Any]:
    return {
        "employee_id": summary.employee_id,
        "month": summary.month,
        "present_days": summary.present_days,
        "half_days": summary.half_days,
        "absent_days": summary.absent_days,
        "leaves_taken": summary.leaves_taken,
        "extra_leaves": summary.extra_leaves,
        "carry_forward_leaves": summary.carry_forward_leaves,
        "total_working_days": summary.total_working_days,
        "total_hours": summary.total_hours,
        "daily_hours": dict(summary.daily_hours),
        "counted_dates": list(summary.counted_dates),
    }


def _from_document(doc: Document) -> MonthlySummary:
    # Patched-only documents may lack fields the monthly scan writes.
    d = doc.data
    employee_id, _, month = doc.doc_id.rpartition("_")
    return MonthlySummary(
        employee_id=str(d.get("employee_id") or employee_id),
        month=str(d.get("month") or month),
        present_days=int(d.get("present_days") or 0),
        half_days=int(d.get("half_days") or 0),
        absent_days=int(d.get("absent_days") or 0),
        leaves_taken=int(d.get("leaves_taken") or 0),
        extra_leaves=int(d.get("extra_leaves") or 0),
        carry_forward_leaves=int(d.get("carry_forward_leaves") or 0),
        total_working_days=int(d.get("total_working_days") or 0),
        total_hours=str(d.get("total_hours") or ZERO_DURATION),
        daily_hours=dict(d.get("daily_hours") or {}),
        counted_dates=tuple(d.get("counted_dates") or ()),
        version=doc.version,
    )
