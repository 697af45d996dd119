from __future__ import annotations

import calendar
import re
from datetime import date, datetime, time
from typing import Iterator

from ..core.exceptions import TimeParseError, ValidationError

_YEAR_MONTH_RE = re.compile(r"^(\d{4})-(\d{2})$")
_DURATION_RE = re.compile(r"(\d+)h\s+(\d+)m\s+(\d+)s")


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def now_local() -> datetime:
    """Current local time.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now()


def parse_year_month(value: str) -> tuple[int, int]:
    m = _YEAR_MONTH_RE.match((value or "").strip())
    if not m:
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")
    year, month = int(m.group(1)), int(m.group(2))
    if not 1 <= month <= 12:
        raise ValidationError(f"Invalid month {value!r}, expected YYYY-MM")
    return year, month


def year_month_of(value: date) -> str:
    return value.strftime("%Y-%m")


def days_in_month(year: int, month: int) -> int:
    return calendar.monthrange(year, month)[1]


def iter_month_dates(year_month: str) -> Iterator[date]:
    """Yield every calendar day of a YYYY-MM month."""
    year, month = parse_year_month(year_month)
    for day in range(1, days_in_month(year, month) + 1):
        yield date(year, month, day)


def parse_clock_time(value: str) -> time:
    """Parse a wall-clock string such as '11:20:28 AM' into a time.

    The AM/PM marker is optional; without it the hour is read on a 24h clock.
    '12:xx AM' is just after midnight and '00:xx AM' is accepted as well.
    """

    if not isinstance(value, str) or not value.strip():
        raise TimeParseError(f"Invalid time string: {value!r}")

    parts = value.strip().split()
    if len(parts) > 2:
        raise TimeParseError(f"Invalid time string: {value!r}")
    modifier = parts[1].upper() if len(parts) == 2 else None
    if modifier not in (None, "AM", "PM"):
        raise TimeParseError(f"Invalid time string: {value!r}")

    fields = parts[0].split(":")
    if len(fields) not in (2, 3):
        raise TimeParseError(f"Invalid time string: {value!r}")
    try:
        hours, minutes = int(fields[0]), int(fields[1])
        seconds = int(fields[2]) if len(fields) == 3 else 0
    except ValueError:
        raise TimeParseError(f"Invalid time string: {value!r}")

    if modifier is not None and hours > 12:
        raise TimeParseError(f"Invalid time string: {value!r}")
    if modifier == "PM" and hours < 12:
        hours += 12
    elif modifier == "AM" and hours == 12:
        hours = 0

    try:
        return time(hour=hours, minute=minutes, second=seconds)
    except ValueError:
        raise TimeParseError(f"Invalid time string: {value!r}")


def format_clock_time(value: datetime | time) -> str:
    """Format a time the way sessions are stored, e.g. '09:05:00 AM'."""
    return value.strftime("%I:%M:%S %p")


def format_duration(seconds: float) -> str:
    """Format seconds as 'Xh Ym Zs' (each part floored)."""
    total = int(max(seconds, 0))
    return f"{total // 3600}h {(total % 3600) // 60}m {total % 60}s"


def duration_to_hours(value: str) -> float:
    """Parse 'Xh Ym Zs' into fractional hours; 0.0 when it does not match."""
    m = _DURATION_RE.search(value or "")
    if not m:
        return 0.0
    h, mins, s = (int(g) for g in m.groups())
    return h + mins / 60 + s / 3600
