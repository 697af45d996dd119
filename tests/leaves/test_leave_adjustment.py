from datetime import date

from src.hr_console.hr_console.core.enums import LeaveDisposition
from src.hr_console.hr_console.leaves.adjustment import compute_leave_adjustment
from src.hr_console.hr_console.summary.model import MonthlySummary


def _summary(**kw):
    base = dict(employee_id="emp-1", month="2024-03")
    base.update(kw)
    return MonthlySummary(**base)


def test_carry_forward_turns_leave_into_present_day():
    s = _summary(present_days=20, carry_forward_leaves=2)

    adj = compute_leave_adjustment(s, date(2024, 3, 8))

    assert adj.present_days == 21
    assert adj.absent_days == 0
    assert adj.leaves_taken == 1
    assert adj.carry_forward_before == 2
    assert adj.carry_forward_after == 1
    assert adj.carry_forward_used is True
    assert adj.marked_as == LeaveDisposition.PRESENT
    assert adj.counted_dates == ("2024-03-08",)


def test_without_carry_forward_scanned_absence_is_not_double_counted():
    s = _summary(absent_days=1, leaves_taken=1, daily_hours={"2024-03-06": "1h 0m 0s"})

    adj = compute_leave_adjustment(s, date(2024, 3, 6))

    assert adj.absent_days == 1
    assert adj.leaves_taken == 2
    assert adj.marked_as == LeaveDisposition.ABSENT
    assert adj.carry_forward_after == 0


def test_without_carry_forward_unscanned_day_becomes_absence():
    s = _summary(absent_days=1, leaves_taken=1, daily_hours={"2024-03-06": "1h 0m 0s"})

    adj = compute_leave_adjustment(s, date(2024, 3, 8))

    assert adj.absent_days == 2
    assert adj.leaves_taken == 2


def test_counted_date_is_left_alone():
    s = _summary(present_days=3, leaves_taken=1, carry_forward_leaves=1, counted_dates=("2024-03-08",))

    adj = compute_leave_adjustment(s, date(2024, 3, 8))

    assert adj.already_counted is True
    assert adj.marked_as is None
    assert (adj.present_days, adj.leaves_taken, adj.carry_forward_after) == (3, 1, 1)


def test_missing_summary_starts_from_zero():
    adj = compute_leave_adjustment(None, date(2024, 3, 8))

    assert adj.absent_days == 1
    assert adj.leaves_taken == 1
    assert adj.carry_forward_used is False
    fields = adj.to_fields("emp-1")
    assert fields["month"] == "2024-03"
    assert fields["daily_hours"] == {"2024-03-08": "0h 0m 0s"}
    assert fields["counted_dates"] == ["2024-03-08"]
