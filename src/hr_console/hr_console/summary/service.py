from __future__ import annotations

import logging
from dataclasses import replace
from typing import Iterable, Optional

from ..attendance.repository import AttendanceRepository
from ..attendance.strategies.base import DayClassificationStrategy
from ..attendance.strategies.threshold_strategy import ThresholdClassificationStrategy
from ..common.datetime_utils import parse_year_month
from ..core.exceptions import DomainError
from .accumulator import accumulate_month
from .model import MonthlySummary
from .repository import SummaryRepository

logger = logging.getLogger(__name__)


class MonthlySummaryService:
    """Use case: (re)generate the monthly attendance summary."""

    def __init__(
        self,
        attendance: AttendanceRepository,
        summaries: SummaryRepository,
        *,
        strategy: Optional[DayClassificationStrategy] = None,
    ):
        self._attendance = attendance
        self._summaries = summaries
        self._strategy = strategy or ThresholdClassificationStrategy()

    def generate(self, employee_id: str, year_month: str) -> MonthlySummary:
        parse_year_month(year_month)
        logger.info("Generating monthly summary for %s, month %s", employee_id, year_month)

        records = {r.work_date: r for r in self._attendance.list_for_employee_month(employee_id, year_month)}
        summary = accumulate_month(employee_id, year_month, records, self._strategy)

        version = self._summaries.replace(summary)
        logger.info(
            "Summary %s: present=%d half=%d absent=%d hours=%s",
            summary.doc_id,
            summary.present_days,
            summary.half_days,
            summary.absent_days,
            summary.total_hours,
        )
        return replace(summary, version=version)

    def generate_many(
        self, employee_ids: Iterable[str], year_month: str
    ) -> tuple[list[MonthlySummary], dict[str, str]]:
        """Batch form; failures are collected per employee instead of aborting the run."""

        parse_year_month(year_month)
        done: list[MonthlySummary] = []
        failed: dict[str, str] = {}
        for employee_id in employee_ids:
            try:
                done.append(self.generate(employee_id, year_month))
            except DomainError as e:
                logger.error("Summary for %s (%s) failed: %s", employee_id, year_month, e)
                failed[employee_id] = str(e)
        return done, failed

    def get(self, employee_id: str, year_month: str) -> Optional[MonthlySummary]:
        parse_year_month(year_month)
        return self._summaries.get(employee_id, year_month)
