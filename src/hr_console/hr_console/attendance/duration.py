"""Session durations.

Only the time of day matters: both ends are placed on one reference date and a
negative difference means the session ran past midnight.
"""

from __future__ import annotations

import logging
from datetime import date, datetime
from typing import Iterable, Optional

from ..common.datetime_utils import now_local, parse_clock_time
from ..core.constants import SECONDS_PER_DAY
from ..core.exceptions import TimeParseError
from .model import Session

logger = logging.getLogger(__name__)

_REFERENCE_DATE = date(1970, 1, 1)


def session_seconds(session: Session, *, include_open: bool = False, now: Optional[datetime] = None) -> int:
    if not session.login:
        return 0
    if not session.logout and not include_open:
        return 0

    try:
        login = parse_clock_time(session.login)
        if session.logout:
            logout = parse_clock_time(session.logout)
        else:
            logout = (now or now_local()).time().replace(microsecond=0)
    except TimeParseError as e:
        logger.warning("Ignoring session %r-%r: %s", session.login, session.logout, e)
        return 0

    diff = (datetime.combine(_REFERENCE_DATE, logout) - datetime.combine(_REFERENCE_DATE, login)).total_seconds()
    if diff < 0:
        diff += SECONDS_PER_DAY
    return int(diff)


def calculate_day_seconds(
    sessions: Iterable[Session],
    *,
    include_open: bool = False,
    now: Optional[datetime] = None,
) -> int:
    return sum(session_seconds(s, include_open=include_open, now=now) for s in sessions)
