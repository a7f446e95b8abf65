"""
Weekly Schedule Helpers

A drug's schedule maps weekday names to dose times, e.g.
{"Monday": ["8:00 AM", "8:00 PM"]}. These helpers clean that mapping up
and order it for display. At most seven buckets, so nothing clever.
"""

from datetime import datetime, time
from difflib import SequenceMatcher
from typing import Dict, Iterable, List, Union
import re

from ...domain.entities.schedule import DaySchedule
from ...domain.exceptions import InvalidScheduleError


WEEKDAYS = [
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
]

_DAY_INDEX = {day: i for i, day in enumerate(WEEKDAYS)}

# Minimum similarity for a misspelled weekday ("Wensday")
FUZZY_DAY_THRESHOLD = 0.75

_TIME_FORMATS = ("%I:%M %p", "%I %p", "%H:%M", "%H:%M:%S")


def normalize_day(name: str) -> str:
    """
    Canonical weekday name for free-form input.

    Accepts any case, unique prefixes of three letters or more ("Mon",
    "Thurs") and close misspellings.

    Raises:
        InvalidScheduleError: If the name matches no weekday
    """
    cleaned = re.sub(r"[^a-z]", "", (name or "").lower())
    if not cleaned:
        raise InvalidScheduleError("day", "weekday is empty")

    for day in WEEKDAYS:
        if cleaned == day.lower():
            return day

    if len(cleaned) >= 3:
        prefixed = [day for day in WEEKDAYS if day.lower().startswith(cleaned)]
        if len(prefixed) == 1:
            return prefixed[0]

    best_day, best_ratio = None, 0.0
    for day in WEEKDAYS:
        ratio = SequenceMatcher(None, cleaned, day.lower()).ratio()
        if ratio > best_ratio:
            best_day, best_ratio = day, ratio

    if best_ratio >= FUZZY_DAY_THRESHOLD:
        return best_day

    raise InvalidScheduleError("day", f"unknown weekday '{name}'")


def parse_time(text: str) -> time:
    """
    Parse a dose time such as "8:00 AM", "8 pm" or "20:00".

    Raises:
        InvalidScheduleError: If the text is not a time of day
    """
    if isinstance(text, time):
        return text
    if not isinstance(text, str):
        raise InvalidScheduleError("time", f"expected text, got {type(text).__name__}")

    # iOS-style formatters put a narrow no-break space before AM/PM
    cleaned = (text or "").replace("\u202f", " ").replace("\xa0", " ").strip().upper()
    cleaned = re.sub(r"\s+", " ", cleaned)
    cleaned = cleaned.replace("A.M.", "AM").replace("P.M.", "PM")
    cleaned = re.sub(r"(?<=\d)(AM|PM)$", r" \1", cleaned)

    for fmt in _TIME_FORMATS:
        try:
            return datetime.strptime(cleaned, fmt).time()
        except ValueError:
            continue

    raise InvalidScheduleError("time", f"cannot read time '{text}'")


def format_time(value: time) -> str:
    """Format as "h:mm AM"."""
    suffix = "AM" if value.hour < 12 else "PM"
    hour = value.hour % 12 or 12
    return f"{hour}:{value.minute:02d} {suffix}"


def normalize_schedule(schedule: Dict[str, Union[str, Iterable[str]]]) -> Dict[str, List[str]]:
    """
    Clean up a schedule mapping.

    Weekday keys become canonical names (two spellings of one day are
    merged), duplicate times are dropped, each day's times are sorted
    through the day and formatted "h:mm AM". Days without times are
    dropped.

    Raises:
        InvalidScheduleError: On an unknown day or unreadable time
    """
    if schedule is None:
        return {}
    if not isinstance(schedule, dict):
        raise InvalidScheduleError("administered", "schedule must map weekdays to times")

    merged: Dict[str, set] = {}
    for raw_day, raw_times in schedule.items():
        day = normalize_day(raw_day)
        if isinstance(raw_times, str):
            raw_times = [raw_times]
        merged.setdefault(day, set()).update(parse_time(t) for t in raw_times)

    return {
        day: [format_time(t) for t in sorted(merged[day])]
        for day in sorted(merged, key=_DAY_INDEX.__getitem__)
        if merged[day]
    }


def sorted_days(schedule: Dict[str, Iterable[str]]) -> List[DaySchedule]:
    """Schedule as a list ordered Monday through Sunday."""
    normalized = normalize_schedule(schedule)
    return [DaySchedule(day=day, times=times) for day, times in normalized.items()]
