from __future__ import annotations

import logging
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Optional

from ..common.datetime_utils import format_clock_time, format_duration, now_local, parse_year_month
from ..core.exceptions import ValidationError
from .duration import calculate_day_seconds
from .model import DailyAttendanceRecord, DayView, Session
from .repository import AttendanceRepository
from .strategies.base import DayClassificationStrategy
from .strategies.threshold_strategy import ThresholdClassificationStrategy

logger = logging.getLogger(__name__)


class AttendanceService:
    def __init__(
        self,
        attendance: AttendanceRepository,
        *,
        strategy: Optional[DayClassificationStrategy] = None,
    ):
        self._attendance = attendance
        self._strategy = strategy or ThresholdClassificationStrategy()

    def clock_in(self, employee_id: str, *, location: Optional[str] = None, now: Optional[datetime] = None) -> DailyAttendanceRecord:
        now = now or now_local()
        today = now.date()

        record = self._attendance.get_for_employee_and_date(employee_id, today)
        if record and record.open_session:
            raise ValidationError("Already clocked in")

        session = Session(login=format_clock_time(now), login_location=location)
        if record is None:
            record = DailyAttendanceRecord(employee_id=employee_id, work_date=today, sessions=(session,))
        else:
            record = replace(record, sessions=record.sessions + (session,))

        record = self._save(record)
        logger.info("Clock-in %s on %s at %s", employee_id, today, session.login)
        return record

    def clock_out(self, employee_id: str, *, location: Optional[str] = None, now: Optional[datetime] = None) -> DailyAttendanceRecord:
        """Close the open session; one opened before midnight is closed on its login day."""

        now = now or now_local()
        record = self._find_open_record(employee_id, now.date())
        if record is None:
            raise ValidationError("Not clocked in")

        closed = replace(record.open_session, logout=format_clock_time(now), logout_location=location)
        sessions = record.sessions[:-1] + (closed,)
        record = self._save(
            replace(record, sessions=sessions, total_hours=format_duration(calculate_day_seconds(sessions)))
        )
        logger.info("Clock-out %s on %s, total %s", employee_id, record.work_date, record.total_hours)
        return record

    def get_day(
        self,
        employee_id: str,
        work_date: date,
        *,
        include_open: bool = False,
        now: Optional[datetime] = None,
    ) -> Optional[DayView]:
        record = self._attendance.get_for_employee_and_date(employee_id, work_date)
        if not record:
            return None
        return self._to_view(record, include_open=include_open, now=now)

    def get_month_rows(self, employee_id: str, year_month: str) -> list[dict]:
        parse_year_month(year_month)
        records = sorted(self._attendance.list_for_employee_month(employee_id, year_month), key=lambda r: r.work_date)
        return [self._to_ui(self._to_view(r)) for r in records]

    def _to_view(self, record: DailyAttendanceRecord, *, include_open: bool = False, now: Optional[datetime] = None) -> DayView:
        seconds = calculate_day_seconds(record.sessions, include_open=include_open, now=now)
        return DayView(
            employee_id=record.employee_id,
            work_date=record.work_date,
            seconds=seconds,
            total_hours=format_duration(seconds),
            status=self._strategy.classify(seconds).value,
            sessions=record.sessions,
            location=record.location,
        )

    def _find_open_record(self, employee_id: str, today: date) -> Optional[DailyAttendanceRecord]:
        for day in (today, today - timedelta(days=1)):
            record = self._attendance.get_for_employee_and_date(employee_id, day)
            if record and record.open_session:
                return record
        return None

    def _save(self, record: DailyAttendanceRecord) -> DailyAttendanceRecord:
        # Conditional write: a concurrent clock action on the same day raises ConcurrencyError.
        return replace(record, version=self._attendance.save(record))

    @staticmethod
    def _to_ui(view: DayView) -> dict:
        return {
            "date": view.work_date.isoformat(),
            "sessions": [
                {
                    "login": s.login,
                    "logout": s.logout or "-",
                    "login_location": s.login_location or "-",
                    "logout_location": s.logout_location or "-",
                }
                for s in view.sessions
            ],
            "total_hours": view.total_hours,
            "status": view.status,
            "location": view.location or "-",
        }
