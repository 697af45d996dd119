from dataclasses import replace
from datetime import date

import pytest

from src.hr_console.hr_console.core.exceptions import StoreError, ValidationError
from src.hr_console.hr_console.summary.service import MonthlySummaryService


def _seed_march(container, make_day):
    repo = container.attendance_repo
    repo.save(make_day("emp-1", date(2024, 3, 4), ("09:00:00 AM", "06:00:00 PM")))
    repo.save(make_day("emp-1", date(2024, 3, 5), ("09:00:00 AM", "02:00:00 PM")))
    repo.save(make_day("emp-1", date(2024, 3, 6), ("09:00:00 AM", "10:00:00 AM")))
    repo.save(
        make_day(
            "emp-1",
            date(2024, 3, 7),
            ("09:00:00 AM", "01:00:00 PM"),
            ("02:00:00 PM", "07:00:00 PM"),
        )
    )


def test_generate_counts_days_by_status(container, make_day):
    _seed_march(container, make_day)

    summary = container.summary_service.generate("emp-1", "2024-03")

    assert summary.present_days == 2
    assert summary.half_days == 1
    assert summary.absent_days == 1
    assert summary.leaves_taken == 1
    assert summary.extra_leaves == 0
    assert summary.carry_forward_leaves == 0
    assert summary.total_working_days == 4
    assert summary.total_hours == "24h 0m 0s"
    assert summary.daily_hours["2024-03-06"] == "1h 0m 0s"
    assert "2024-03-08" not in summary.daily_hours


def test_generate_is_idempotent(container, make_day):
    _seed_march(container, make_day)
    svc = container.summary_service

    first = svc.generate("emp-1", "2024-03")
    second = svc.generate("emp-1", "2024-03")

    assert second.version == first.version + 1
    assert replace(second, version=0) == replace(first, version=0)
    assert svc.get("emp-1", "2024-03") == second


def test_working_days_add_up(container, make_day):
    _seed_march(container, make_day)
    s = container.summary_service.generate("emp-1", "2024-03")

    assert s.present_days + s.half_days + s.absent_days == s.total_working_days
    assert s.leaves_taken + s.extra_leaves == s.absent_days


def test_month_without_absences_earns_carry_forward(container, make_day):
    container.attendance_repo.save(make_day("emp-1", date(2024, 4, 1), ("09:00:00 AM", "06:00:00 PM")))

    summary = container.summary_service.generate("emp-1", "2024-04")

    assert summary.absent_days == 0
    assert summary.carry_forward_leaves == 2


def test_absences_beyond_covered_leave_are_extra(container, make_day):
    for day in (1, 2, 3):
        container.attendance_repo.save(make_day("emp-1", date(2024, 4, day), ("09:00:00 AM", "10:00:00 AM")))

    summary = container.summary_service.generate("emp-1", "2024-04")

    assert summary.absent_days == 3
    assert summary.leaves_taken == 1
    assert summary.extra_leaves == 2


def test_leap_day_is_scanned(container, make_day):
    container.attendance_repo.save(make_day("emp-1", date(2024, 2, 29), ("09:00:00 AM", "06:00:00 PM")))

    summary = container.summary_service.generate("emp-1", "2024-02")

    assert summary.present_days == 1
    assert "2024-02-29" in summary.daily_hours


def test_empty_month_produces_zero_summary(container):
    summary = container.summary_service.generate("emp-9", "2024-03")

    assert summary.total_working_days == 0
    assert summary.total_hours == "0h 0m 0s"
    assert summary.carry_forward_leaves == 2


def test_invalid_month_is_rejected(container):
    with pytest.raises(ValidationError):
        container.summary_service.generate("emp-1", "2024-3")


class FlakyAttendanceRepository:
    def __init__(self, inner, broken_for):
        self._inner = inner
        self._broken_for = broken_for

    def list_for_employee_month(self, employee_id, year_month):
        if employee_id == self._broken_for:
            raise StoreError("store unavailable")
        return self._inner.list_for_employee_month(employee_id, year_month)


def test_generate_many_collects_failures(container, make_day):
    _seed_march(container, make_day)
    svc = MonthlySummaryService(
        FlakyAttendanceRepository(container.attendance_repo, broken_for="emp-2"),
        container.summaries_repo,
    )

    done, failed = svc.generate_many(["emp-1", "emp-2"], "2024-03")

    assert [s.employee_id for s in done] == ["emp-1"]
    assert failed == {"emp-2": "store unavailable"}
