from __future__ import annotations

from datetime import date
from typing import Mapping

from ..attendance.duration import calculate_day_seconds
from ..attendance.model import DailyAttendanceRecord
from ..attendance.strategies.base import DayClassificationStrategy
from ..common.datetime_utils import format_duration, iter_month_dates
from ..core.constants import CARRY_FORWARD_CREDIT, COVERED_LEAVES_PER_MONTH
from ..core.enums import DayStatus
from .model import MonthlySummary


def accumulate_month(
    employee_id: str,
    year_month: str,
    records: Mapping[date, DailyAttendanceRecord],
    strategy: DayClassificationStrategy,
) -> MonthlySummary:
    """Roll one month of day records into a summary.

    Days without a record are not working days: they are skipped, not
    counted as absences.
    """

    counts = {DayStatus.PRESENT: 0, DayStatus.HALF_DAY: 0, DayStatus.ABSENT: 0}
    total_seconds = 0
    daily_hours: dict[str, str] = {}

    for day in iter_month_dates(year_month):
        record = records.get(day)
        if record is None:
            continue

        seconds = calculate_day_seconds(record.sessions)
        counts[strategy.classify(seconds)] += 1
        total_seconds += seconds
        daily_hours[day.isoformat()] = format_duration(seconds)

    absent = counts[DayStatus.ABSENT]
    return MonthlySummary(
        employee_id=employee_id,
        month=year_month,
        present_days=counts[DayStatus.PRESENT],
        half_days=counts[DayStatus.HALF_DAY],
        absent_days=absent,
        leaves_taken=min(absent, COVERED_LEAVES_PER_MONTH),
        extra_leaves=max(0, absent - COVERED_LEAVES_PER_MONTH),
        carry_forward_leaves=CARRY_FORWARD_CREDIT if absent == 0 else 0,
        total_working_days=sum(counts.values()),
        total_hours=format_duration(total_seconds),
        daily_hours=daily_hours,
    )
