"""
Weekly schedule normalization.
"""

from datetime import time

import pytest

from gerihealth.application.services.schedule import (
    WEEKDAYS,
    format_time,
    normalize_day,
    normalize_schedule,
    parse_time,
    sorted_days,
)
from gerihealth.domain.exceptions import InvalidScheduleError


@pytest.mark.parametrize("raw,expected", [
    ("Monday", "Monday"),
    ("monday", "Monday"),
    (" SUNDAY ", "Sunday"),
    ("Mon", "Monday"),
    ("thurs", "Thursday"),
    ("Wensday", "Wednesday"),
    ("Wednsday", "Wednesday"),
    ("Tuesday.", "Tuesday"),
])
def test_normalize_day(raw, expected):
    assert normalize_day(raw) == expected


@pytest.mark.parametrize("raw", ["", "Someday", "T", "Holiday"])
def test_normalize_day_rejects(raw):
    with pytest.raises(InvalidScheduleError):
        normalize_day(raw)


@pytest.mark.parametrize("raw,expected", [
    ("8:00 AM", time(8, 0)),
    ("8:00 pm", time(20, 0)),
    ("8 PM", time(20, 0)),
    ("8:30PM", time(20, 30)),
    ("12:00 AM", time(0, 0)),
    ("12:00 PM", time(12, 0)),
    ("20:15", time(20, 15)),
    ("7:00 PM", time(19, 0)),
    ("9:00 a.m.", time(9, 0)),
])
def test_parse_time(raw, expected):
    assert parse_time(raw) == expected


@pytest.mark.parametrize("raw", ["noon-ish", "25:00", "", 800])
def test_parse_time_rejects(raw):
    with pytest.raises(InvalidScheduleError):
        parse_time(raw)


def test_format_time():
    assert format_time(time(0, 0)) == "12:00 AM"
    assert format_time(time(13, 5)) == "1:05 PM"


def test_normalize_schedule_orders_and_merges():
    schedule = normalize_schedule({
        "Thursday": ["7:00 PM", "8:00 AM"],
        "Wensday": ["8:00 AM"],
        "wednesday": ["8:00 am", "19:00"],
        "Monday": "8 PM",
        "Sunday": [],
    })

    assert list(schedule) == ["Monday", "Wednesday", "Thursday"]
    assert schedule["Wednesday"] == ["8:00 AM", "7:00 PM"]
    assert schedule["Thursday"] == ["8:00 AM", "7:00 PM"]
    assert schedule["Monday"] == ["8:00 PM"]
    assert "Sunday" not in schedule


def test_normalize_schedule_rejects_non_mapping():
    with pytest.raises(InvalidScheduleError):
        normalize_schedule(["Monday"])
    assert normalize_schedule(None) == {}


def test_sorted_days_monday_first():
    days = sorted_days({"Sunday": ["9:00 AM"], "Monday": ["8:00 AM"], "Friday": ["1 PM"]})

    assert [d.day for d in days] == ["Monday", "Friday", "Sunday"]
    assert days[1].to_dict() == {"day": "Friday", "times": ["1:00 PM"]}


def test_weekdays_start_monday():
    assert WEEKDAYS[0] == "Monday"
    assert len(WEEKDAYS) == 7
