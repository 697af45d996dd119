from __future__ import annotations

from dataclasses import dataclass, field

from ..core.constants import ZERO_DURATION


def summary_doc_id(employee_id: str, year_month: str) -> str:
    return f"{employee_id}_{year_month}"


@dataclass(frozen=True)
class MonthlySummary:
    """Per-employee per-month attendance rollup.

    `daily_hours` maps ISO dates to the worked duration the scan saw that day;
    `counted_dates` lists dates already adjusted by an accepted leave.
    """

    employee_id: str
    month: str
    present_days: int = 0
    half_days: int = 0
    absent_days: int = 0
    leaves_taken: int = 0
    extra_leaves: int = 0
    carry_forward_leaves: int = 0
    total_working_days: int = 0
    total_hours: str = ZERO_DURATION
    daily_hours: dict[str, str] = field(default_factory=dict)
    counted_dates: tuple[str, ...] = ()
    version: int = 0

    @property
    def doc_id(self) -> str:
        return summary_doc_id(self.employee_id, self.month)
