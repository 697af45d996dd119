from datetime import date, datetime

import pytest

from src.hr_console.hr_console.core.exceptions import NotFoundError, ValidationError
from src.hr_console.hr_console.employees.model import Employee
from src.hr_console.hr_console.payroll.model import SalaryProfile
from src.hr_console.hr_console.payroll.service import PayrollService


@pytest.fixture
def payroll(container):
    container.employees_repo.create(Employee(employee_id="emp-1", name="Asha", email="asha@example.com", department="Ops"))
    container.employees_repo.create(Employee(employee_id="emp-2", name="Ravi", email="ravi@example.com"))
    return PayrollService(
        container.salaries_repo,
        container.summaries_repo,
        container.employees_repo,
        clock=lambda: datetime(2024, 4, 1, 9, 0, 0),
    )


def test_register_profile_once(payroll):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary="50000", bank_name="HDFC"))

    with pytest.raises(ValidationError):
        payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=1))

    assert [e["id"] for e in payroll.list_employees_without_profile()] == ["emp-2"]


def test_register_profile_rejects_negative_amounts(payroll):
    with pytest.raises(ValidationError):
        payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=-1))


def test_register_profile_requires_employee(payroll):
    with pytest.raises(NotFoundError):
        payroll.register_salary_profile(SalaryProfile(employee_id="ghost", basic_salary=1))


def test_preview_without_summary_uses_zero_hours(payroll):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=30000))

    slip = payroll.preview("emp-1", "2024-03")

    assert slip.projection.gross == 30000
    assert slip.projection.gross_adjusted == 0
    assert slip.absent_days == 0
    assert slip.name == "Asha"


def test_preview_requires_profile(payroll):
    with pytest.raises(NotFoundError):
        payroll.preview("emp-2", "2024-03")


def test_generate_uses_summary_and_overrides(payroll, container, make_day):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=19800))
    container.attendance_repo.save(make_day("emp-1", date(2024, 3, 4), ("09:00:00 AM", "06:00:00 PM")))
    container.attendance_repo.save(make_day("emp-1", date(2024, 3, 5), ("09:00:00 AM", "10:00:00 AM")))
    container.summary_service.generate("emp-1", "2024-03")

    slip = payroll.generate("emp-1", "2024-03", tax_percent="10", penalty_per_absence=None, notes=" March ")

    assert slip.projection.worked_hours == 10
    assert slip.projection.gross_adjusted == 1000
    assert slip.projection.tax == 100
    assert slip.projection.penalty == 200
    assert slip.projection.net_salary == 700
    assert slip.notes == "March"
    assert payroll.get_payslip("emp-1", "2024-03") == slip


def test_missing_payslip_is_not_found(payroll):
    with pytest.raises(NotFoundError):
        payroll.get_payslip("emp-1", "2024-03")


def test_csv_export(payroll):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=30000, incentives=500))
    slip = payroll.generate("emp-1", "2024-03")

    data = payroll.export_csv(slip)

    assert data.startswith(b"\xef\xbb\xbf")
    lines = data.decode("utf-8-sig").splitlines()
    assert lines[0] == "pay_period,section,item,amount"
    assert "2024-03,Earnings,Basic Salary,30000.00" in lines
    assert "2024-03,Earnings,Incentives,500.00" in lines
    assert "2024-03,Earnings,Gross Salary,30500.00" in lines
    assert lines[-1] == "2024-03,Net,Net Salary,0.00"


@pytest.mark.parametrize("tax", [101, "150", -1, "lots"])
def test_tax_percent_must_be_a_percentage(payroll, tax):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=30000))

    with pytest.raises(ValidationError):
        payroll.preview("emp-1", "2024-03", tax_percent=tax)


def test_full_tax_is_accepted(payroll, container, make_day):
    payroll.register_salary_profile(SalaryProfile(employee_id="emp-1", basic_salary=19800))
    container.attendance_repo.save(make_day("emp-1", date(2024, 3, 4), ("09:00:00 AM", "10:00:00 AM")))
    container.summary_service.generate("emp-1", "2024-03")

    slip = payroll.preview("emp-1", "2024-03", tax_percent=100, penalty_per_absence=0)

    assert slip.projection.tax == slip.projection.gross_adjusted == 100
    assert slip.projection.net_salary == 0
