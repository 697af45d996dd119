from __future__ import annotations

from ...core.constants import HALF_DAY_HOURS, PRESENT_HOURS
from ...core.enums import DayStatus
from .base import DayClassificationStrategy


class ThresholdClassificationStrategy(DayClassificationStrategy):
    """Present from `present_hours`, half day from `half_day_hours`, absent below."""

    def __init__(self, *, present_hours: float = PRESENT_HOURS, half_day_hours: float = HALF_DAY_HOURS):
        if half_day_hours > present_hours:
            raise ValueError("half_day_hours must not exceed present_hours")
        self.present_hours = float(present_hours)
        self.half_day_hours = float(half_day_hours)

    def classify(self, seconds: float) -> DayStatus:
        hours = seconds / 3600
        if hours >= self.present_hours:
            return DayStatus.PRESENT
        if hours >= self.half_day_hours:
            return DayStatus.HALF_DAY
        return DayStatus.ABSENT
