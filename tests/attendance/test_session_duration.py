import logging
from datetime import datetime

from src.hr_console.hr_console.attendance.duration import calculate_day_seconds, session_seconds
from src.hr_console.hr_console.attendance.model import Session


def test_overnight_session_wraps_midnight():
    assert session_seconds(Session("11:50:00 PM", "00:10:00 AM")) == 1200


def test_day_total_is_order_independent():
    sessions = [
        Session("09:00:00 AM", "01:00:00 PM"),
        Session("02:00:00 PM", "06:30:15 PM"),
        Session("11:50:00 PM", "12:10:00 AM"),
    ]
    expected = 4 * 3600 + 4 * 3600 + 30 * 60 + 15 + 1200
    assert calculate_day_seconds(sessions) == expected
    assert calculate_day_seconds(list(reversed(sessions))) == expected


def test_open_session_excluded_unless_requested():
    sessions = [Session("09:00:00 AM", "10:00:00 AM"), Session("11:00:00 AM", None)]
    now = datetime(2024, 3, 4, 12, 30, 0)

    assert calculate_day_seconds(sessions, now=now) == 3600
    assert calculate_day_seconds(sessions, include_open=True, now=now) == 3600 + 5400


def test_session_without_login_counts_zero():
    assert session_seconds(Session(None, "10:00:00 AM")) == 0


def test_malformed_session_is_logged_and_skipped(caplog):
    sessions = [Session("9 o'clock", "10:00:00 AM"), Session("10:00:00 AM", "11:00:00 AM")]

    with caplog.at_level(logging.WARNING):
        total = calculate_day_seconds(sessions)

    assert total == 3600
    assert "Ignoring session" in caplog.text
