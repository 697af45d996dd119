from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.enums import LeaveDisposition
from ..summary.model import MonthlySummary
from .model import LeaveAdjustment


def compute_leave_adjustment(summary: Optional[MonthlySummary], leave_date: date) -> LeaveAdjustment:
    """Reclassify an accepted leave day inside an already generated summary.

    A carry-forward credit, when available, turns the day into a present day.
    Without credit the day stays an absence: it is only added to
    `absent_days` when the monthly scan never counted that date. A date in
    `counted_dates` has been adjusted before and is returned unchanged.
    """

    day = leave_date.isoformat()
    present = summary.present_days if summary else 0
    absent = summary.absent_days if summary else 0
    leaves = summary.leaves_taken if summary else 0
    carry = summary.carry_forward_leaves if summary else 0
    counted = tuple(summary.counted_dates) if summary else ()

    if day in counted:
        return LeaveAdjustment(
            leave_date=leave_date,
            present_days=present,
            absent_days=absent,
            leaves_taken=leaves,
            carry_forward_before=carry,
            carry_forward_after=carry,
            carry_forward_used=False,
            marked_as=None,
            counted_dates=counted,
            already_counted=True,
        )

    scanned = summary is not None and day in summary.daily_hours
    if carry > 0:
        carry_after = carry - 1
        present += 1
        marked = LeaveDisposition.PRESENT
    else:
        carry_after = carry
        if not scanned:
            absent += 1
        marked = LeaveDisposition.ABSENT

    return LeaveAdjustment(
        leave_date=leave_date,
        present_days=present,
        absent_days=absent,
        leaves_taken=leaves + 1,
        carry_forward_before=carry,
        carry_forward_after=carry_after,
        carry_forward_used=carry > 0,
        marked_as=marked,
        counted_dates=counted + (day,),
    )
