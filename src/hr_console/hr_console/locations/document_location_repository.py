from __future__ import annotations

from datetime import datetime
from typing import Optional, Sequence

from ..store.model import Document
from ..store.repository import DocumentStore
from .model import WorkLocation
from .repository import WorkLocationRepository

COLLECTION = "work_locations"


class DocumentWorkLocationRepository(WorkLocationRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get(self, employee_id: str) -> Optional[WorkLocation]:
        doc = self._store.get(COLLECTION, employee_id)
        return _from_document(doc) if doc else None

    def save(self, location: WorkLocation) -> None:
        self._store.set(
            COLLECTION,
            location.employee_id,
            {
                "name": location.name,
                "latitude": location.latitude,
                "longitude": location.longitude,
                "radius_m": location.radius_m,
                "assigned_by": location.assigned_by,
                "assigned_at": location.assigned_at.isoformat(),
            },
        )

    def list_all(self) -> Sequence[WorkLocation]:
        return [_from_document(d) for d in self._store.list(COLLECTION)]

    def delete(self, employee_id: str) -> bool:
        return self._store.delete(COLLECTION, employee_id)


def _from_document(doc: Document) -> WorkLocation:
    d = doc.data
    return WorkLocation(
        employee_id=doc.doc_id,
        name=str(d.get("name") or ""),
        latitude=float(d["latitude"]),
        longitude=float(d["longitude"]),
        radius_m=float(d["radius_m"]),
        assigned_by=str(d.get("assigned_by") or ""),
        assigned_at=datetime.fromisoformat(d["assigned_at"]),
    )
