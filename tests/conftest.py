from __future__ import annotations

from datetime import date

import pytest

from src.hr_console.hr_console.attendance.model import DailyAttendanceRecord, Session
from src.hr_console.hr_console.container import build_container
from src.hr_console.hr_console.core.enums import Role
from src.hr_console.hr_console.employees.model import Identity
from src.hr_console.hr_console.store.memory_store import InMemoryDocumentStore


@pytest.fixture
def store():
    return InMemoryDocumentStore()


@pytest.fixture
def container(store):
    return build_container(store=store)


@pytest.fixture
def hr():
    return Identity(uid="hr-1", email="hr@example.com", display_name="HR Reviewer", role=Role.ADMIN)


@pytest.fixture
def staff():
    return Identity(uid="emp-1", email="emp@example.com", display_name="Employee", role=Role.EMPLOYEE)


@pytest.fixture
def make_day():
    """Factory: day record from (login, logout) pairs."""

    def _make(employee_id: str, day: date, *pairs: tuple) -> DailyAttendanceRecord:
        return DailyAttendanceRecord(
            employee_id=employee_id,
            work_date=day,
            sessions=tuple(Session(login=a, logout=b) for a, b in pairs),
        )

    return _make
