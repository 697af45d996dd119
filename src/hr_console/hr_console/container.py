from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Optional

from .attendance.document_attendance_repository import DocumentAttendanceRepository
from .attendance.service import AttendanceService
from .attendance.strategies.threshold_strategy import ThresholdClassificationStrategy
from .core import constants
from .database.connection import DatabaseConnection, DBConfig
from .employees.document_employee_repository import DocumentEmployeeRepository
from .employees.identity import IdentityProvider, InMemoryIdentityProvider
from .employees.service import EmployeeService
from .leaves.document_leave_repository import DocumentLeaveRepository
from .leaves.service import LeaveApprovalService
from .locations.document_location_repository import DocumentWorkLocationRepository
from .locations.service import WorkLocationService
from .payroll.document_salary_repository import DocumentSalaryRepository
from .payroll.model import PayrollSettings
from .payroll.service import PayrollService
from .store.memory_store import InMemoryDocumentStore
from .store.mysql_document_store import MySQLDocumentStore
from .store.repository import DocumentStore
from .summary.document_summary_repository import DocumentSummaryRepository
from .summary.service import MonthlySummaryService


@dataclass(frozen=True)
class Container:
    store: DocumentStore
    identities: IdentityProvider

    attendance_repo: DocumentAttendanceRepository
    summaries_repo: DocumentSummaryRepository
    leaves_repo: DocumentLeaveRepository
    salaries_repo: DocumentSalaryRepository
    employees_repo: DocumentEmployeeRepository
    locations_repo: DocumentWorkLocationRepository

    attendance_service: AttendanceService
    summary_service: MonthlySummaryService
    leave_service: LeaveApprovalService
    payroll_service: PayrollService
    employee_service: EmployeeService
    location_service: WorkLocationService


def build_store(*, backend: str = "memory", db_config: Optional[dict] = None) -> DocumentStore:
    backend = (backend or "memory").lower()
    if backend == "memory":
        return InMemoryDocumentStore()
    if backend == "mysql":
        conn = DatabaseConnection.get_instance(DBConfig.from_mapping(db_config or {}))
        return MySQLDocumentStore(conn)
    raise ValueError(f"Unknown STORE_BACKEND {backend!r}")


def build_container(
    *,
    store: DocumentStore,
    identities: Optional[IdentityProvider] = None,
    settings: Any = None,
) -> Container:
    def setting(name: str, default):
        return getattr(settings, name, default) if settings is not None else default

    identities = identities or InMemoryIdentityProvider()
    strategy = ThresholdClassificationStrategy(
        present_hours=float(setting("PRESENT_HOURS", constants.PRESENT_HOURS)),
        half_day_hours=float(setting("HALF_DAY_HOURS", constants.HALF_DAY_HOURS)),
    )
    payroll_settings = PayrollSettings(
        standard_monthly_hours=float(setting("STANDARD_MONTHLY_HOURS", constants.STANDARD_MONTHLY_HOURS)),
        tax_percent=float(setting("DEFAULT_TAX_PERCENT", constants.DEFAULT_TAX_PERCENT)),
        penalty_per_absence=float(setting("DEFAULT_PENALTY_PER_ABSENCE", constants.DEFAULT_PENALTY_PER_ABSENCE)),
    )

    attendance_repo = DocumentAttendanceRepository(store)
    summaries_repo = DocumentSummaryRepository(store)
    leaves_repo = DocumentLeaveRepository(store)
    salaries_repo = DocumentSalaryRepository(store)
    employees_repo = DocumentEmployeeRepository(store)
    locations_repo = DocumentWorkLocationRepository(store)

    attendance_service = AttendanceService(attendance_repo, strategy=strategy)
    summary_service = MonthlySummaryService(attendance_repo, summaries_repo, strategy=strategy)
    leave_service = LeaveApprovalService(
        leaves_repo,
        summaries_repo,
        max_retries=int(setting("SUMMARY_WRITE_RETRIES", constants.DEFAULT_SUMMARY_WRITE_RETRIES)),
    )
    payroll_service = PayrollService(salaries_repo, summaries_repo, employees_repo, settings=payroll_settings)
    employee_service = EmployeeService(employees_repo, identities, salaries=salaries_repo, locations=locations_repo)
    location_service = WorkLocationService(locations_repo, employees_repo)

    return Container(
        store=store,
        identities=identities,
        attendance_repo=attendance_repo,
        summaries_repo=summaries_repo,
        leaves_repo=leaves_repo,
        salaries_repo=salaries_repo,
        employees_repo=employees_repo,
        locations_repo=locations_repo,
        attendance_service=attendance_service,
        summary_service=summary_service,
        leave_service=leave_service,
        payroll_service=payroll_service,
        employee_service=employee_service,
        location_service=location_service,
    )
