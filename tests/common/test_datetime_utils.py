from datetime import date, time

import pytest

from src.hr_console.hr_console.common.datetime_utils import (
    days_in_month,
    duration_to_hours,
    format_clock_time,
    format_duration,
    iter_month_dates,
    parse_clock_time,
    parse_year_month,
)
from src.hr_console.hr_console.core.exceptions import TimeParseError, ValidationError


@pytest.mark.parametrize(
    "text, expected",
    [
        ("11:20:28 AM", time(11, 20, 28)),
        ("11:50:00 PM", time(23, 50, 0)),
        ("12:00:00 PM", time(12, 0, 0)),
        ("12:15:00 AM", time(0, 15, 0)),
        ("00:10:00 AM", time(0, 10, 0)),
        ("09:05 pm", time(21, 5, 0)),
        ("17:45:10", time(17, 45, 10)),
    ],
)
def test_parse_clock_time(text, expected):
    assert parse_clock_time(text) == expected


@pytest.mark.parametrize("text", ["", "abc", "25:00:00", "13:00:00 PM", "10:61:00 AM", "10:00:00 XM", None])
def test_parse_clock_time_rejects_malformed(text):
    with pytest.raises(TimeParseError):
        parse_clock_time(text)


def test_format_clock_time_round_trips_through_parser():
    assert format_clock_time(time(21, 5, 0)) == "09:05:00 PM"
    assert parse_clock_time(format_clock_time(time(0, 30, 0))) == time(0, 30, 0)


def test_format_duration_floors_parts():
    assert format_duration(0) == "0h 0m 0s"
    assert format_duration(32399.9) == "8h 59m 59s"
    assert format_duration(90061) == "25h 1m 1s"


def test_duration_to_hours():
    assert duration_to_hours("180h 0m 0s") == 180
    assert duration_to_hours("1h 30m 0s") == 1.5
    assert duration_to_hours("garbage") == 0.0
    assert duration_to_hours("") == 0.0


def test_days_in_month_handles_leap_years():
    assert days_in_month(2024, 2) == 29
    assert days_in_month(2023, 2) == 28
    assert days_in_month(1900, 2) == 28
    assert days_in_month(2000, 2) == 29
    assert len(list(iter_month_dates("2024-04"))) == 30
    assert list(iter_month_dates("2024-02"))[-1] == date(2024, 2, 29)


@pytest.mark.parametrize("value", ["2024-13", "2024-00", "2024-3", "March", ""])
def test_parse_year_month_rejects_bad_input(value):
    with pytest.raises(ValidationError):
        parse_year_month(value)
