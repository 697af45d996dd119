"""Example: drive the service layer directly (no Flask).

Controllers are a thin layer; the rollup, leave and payroll rules live in services.
"""

from datetime import date, datetime

from src.hr_console.hr_console.container import build_container
from src.hr_console.hr_console.core.enums import Role
from src.hr_console.hr_console.employees.model import Identity
from src.hr_console.hr_console.payroll.model import SalaryProfile
from src.hr_console.hr_console.store.memory_store import InMemoryDocumentStore


def main():
    container = build_container(store=InMemoryDocumentStore())
    hr = Identity(uid="hr-1", email="hr@example.com", display_name="HR", role=Role.ADMIN)

    employee = container.employee_service.create_employee(
        current=hr, name="Asha Rao", email="asha@example.com", password="welcome-123"
    )
    for day in (4, 5, 6):
        container.attendance_service.clock_in(employee.employee_id, location="HQ", now=datetime(2024, 3, day, 9, 0))
        container.attendance_service.clock_out(employee.employee_id, now=datetime(2024, 3, day, 18, 30))

    print(container.summary_service.generate(employee.employee_id, "2024-03"))

    container.leave_service.request_leave(employee_id=employee.employee_id, leave_date=date(2024, 3, 7), reason="Family event")
    print(container.leave_service.accept(employee_id=employee.employee_id, leave_date=date(2024, 3, 7), comment="Approved", reviewer=hr))

    container.payroll_service.register_salary_profile(SalaryProfile(employee_id=employee.employee_id, basic_salary=40000, house_rent_allowance=10000))
    payslip = container.payroll_service.generate(employee.employee_id, "2024-03")
    print(payslip.projection)


if __name__ == "__main__":
    main()
