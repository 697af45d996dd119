from __future__ import annotations

from dataclasses import asdict, fields
from datetime import datetime
from typing import Any, Optional, Sequence

from ..core.exceptions import ConcurrencyError
from ..store.model import Document
from ..store.repository import DocumentStore
from .model import Payslip, PayrollProjection, PayrollSettings, SalaryProfile
from .repository import SalaryRepository

PROFILES = "salary_profiles"
PAYSLIPS = "payslips"

_PROFILE_FIELDS = {f.name for f in fields(SalaryProfile)}


class DocumentSalaryRepository(SalaryRepository):
    def __init__(self, store: DocumentStore):
        self._store = store

    def get_profile(self, employee_id: str) -> Optional[SalaryProfile]:
        doc = self._store.get(PROFILES, employee_id)
        return _profile_from(doc) if doc else None

    def create_profile(self, profile: SalaryProfile) -> bool:
        try:
            self._store.create(PROFILES, profile.employee_id, asdict(profile))
        except ConcurrencyError:
            return False
        return True

    def list_profiles(self) -> Sequence[SalaryProfile]:
        return [_profile_from(d) for d in self._store.list(PROFILES)]

    def delete_profile(self, employee_id: str) -> bool:
        return self._store.delete(PROFILES, employee_id)

    def save_payslip(self, payslip: Payslip) -> None:
        self._store.set(PAYSLIPS, payslip.doc_id, _payslip_data(payslip))

    def get_payslip(self, employee_id: str, year_month: str) -> Optional[Payslip]:
        doc = self._store.get(PAYSLIPS, f"{employee_id}_{year_month}")
        return _payslip_from(doc) if doc else None


def _profile_from(doc: Document) -> SalaryProfile:
    data = {k: v for k, v in doc.data.items() if k in _PROFILE_FIELDS}
    data.setdefault("employee_id", doc.doc_id)
    return SalaryProfile(**data)


def _payslip_data(p: Payslip) -> dict[str, Any]:
    data = asdict(p)
    data["created_at"] = p.created_at.isoformat() if p.created_at else None
    return data


def _payslip_from(doc: Document) -> Payslip:
    d = dict(doc.data)
    d["projection"] = PayrollProjection(**d["projection"])
    d["settings"] = PayrollSettings(**d["settings"])
    d["created_at"] = datetime.fromisoformat(d["created_at"]) if d.get("created_at") else None
    return Payslip(**d)
