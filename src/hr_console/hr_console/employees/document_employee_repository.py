from __future__ import annotations

from typing import Any, Optional, Sequence

from ..common.datetime_utils import parse_iso_date
from ..core.enums import Role
from ..core.exceptions import ConcurrencyError
from ..store.model import Document
from ..store.repository import DocumentStore
from .model import Employee
from .repository import EmployeeRepository

COLLECTION = "employees"


class DocumentEmployeeRepository(EmployeeRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_by_id(self, employee_id: str) -> Optional[Employee]:
        doc = self._store.get(COLLECTION, employee_id)
        return _from_document(doc) if doc else None

    def get_by_email(self, email: str) -> Optional[Employee]:
        wanted = email.strip().lower()
        for employee in self.list_all():
            if employee.email.lower() == wanted:
                return employee
        return None

    def create(self, employee: Employee) -> bool:
        try:
            self._store.create(COLLECTION, employee.employee_id, _to_data(employee))
        except ConcurrencyError:
            return False
        return True

    def delete_by_id(self, employee_id: str) -> bool:
        return self._store.delete(COLLECTION, employee_id)

    def list_all(self) -> Sequence[Employee]:
        return [_from_document(d) for d in self._store.list(COLLECTION)]


def _to_data(e: Employee) -> dict[str, Any]:
    return {
        "name": e.name,
        "email": e.email,
        "phone": e.phone,
        "department": e.department,
        "joining_date": e.joining_date.isoformat() if e.joining_date else None,
        "role": e.role.value,
    }


def _from_document(doc: Document) -> Employee:
    d = doc.data
    return Employee(
        employee_id=doc.doc_id,
        name=str(d.get("name") or ""),
        email=str(d.get("email") or ""),
        phone=d.get("phone"),
        department=d.get("department"),
        joining_date=parse_iso_date(d["joining_date"]) if d.get("joining_date") else None,
        role=Role(d.get("role") or Role.EMPLOYEE.value),
    )
