# peertutor/timeutils.py
"""
Time and recurrence helpers.

All datetimes are naive local wall-clock time, the same convention the rest of
the service uses for "now".

Recurrence policy (the only one used anywhere in the package):
    - target weekday later this week  -> that day
    - target weekday is today         -> today if the time has not elapsed yet,
                                         otherwise the same weekday next week
    - target weekday earlier this week -> the same weekday next week
"""

import re
from datetime import datetime, date, time, timedelta
from typing import Optional, Tuple, Union

from .errors import ParseError

WEEKDAYS = ["Monday", "Tuesday", "Wednesday", "Thursday", "Friday", "Saturday", "Sunday"]

TimeLike = Union[str, Tuple[int, int]]


def to_24_hour(time12h: str) -> Tuple[int, int]:
    """'2:45 PM' -> (14, 45). 12 AM is midnight, 12 PM is noon."""
    if not isinstance(time12h, str):
        raise ParseError(f"Time must be a string, got {type(time12h).__name__}")

    parts = time12h.strip().split(" ")
    if len(parts) != 2:
        raise ParseError(f"Invalid time {time12h!r}: expected 'H:MM AM' or 'H:MM PM'")
    clock, period = parts
    period = period.upper()
    if period not in ("AM", "PM"):
        raise ParseError(f"Invalid time {time12h!r}: period must be AM or PM")

    match = re.fullmatch(r"(\d{1,2}):(\d{2})", clock, re.ASCII)
    if match is None:
        raise ParseError(f"Invalid time {time12h!r}: hours and minutes must be numeric")
    hours, minutes = int(match.group(1)), int(match.group(2))
    if not (1 <= hours <= 12) or not (0 <= minutes <= 59):
        raise ParseError(f"Invalid time {time12h!r}: out of range")

    if period == "AM" and hours == 12:
        hours = 0
    elif period == "PM" and hours != 12:
        hours += 12
    return hours, minutes


def to_12_hour(hours: int, minutes: int) -> str:
    """(14, 45) -> '2:45 PM'."""
    if not (0 <= hours <= 23) or not (0 <= minutes <= 59):
        raise ParseError(f"Invalid time {hours}:{minutes}")
    period = "PM" if hours >= 12 else "AM"
    display_hours = hours % 12 or 12
    return f"{display_hours}:{minutes:02d} {period}"


def _as_time(value: TimeLike) -> time:
    if isinstance(value, str):
        hours, minutes = to_24_hour(value)
    else:
        hours, minutes = value
    return time(hours, minutes)


def weekday_index(day_name: str) -> int:
    try:
        return WEEKDAYS.index(day_name)
    except ValueError:
        raise ParseError(f"Invalid day: {day_name!r}")


def weekday_name(value: Union[date, datetime]) -> str:
    return WEEKDAYS[value.weekday()]


def combine(on_date: date, time12h: TimeLike) -> datetime:
    return datetime.combine(on_date, _as_time(time12h))


def next_occurrence_of(day_name: str, at: TimeLike, from_dt: datetime) -> datetime:
    """Next datetime >= from_dt that falls on day_name at the given time."""
    target = weekday_index(day_name)
    days_until = (target - from_dt.weekday()) % 7

    candidate = combine(from_dt.date() + timedelta(days=days_until), at)
    if candidate < from_dt:
        # Only possible when the target is today and the time already passed
        candidate += timedelta(days=7)
    return candidate


def expiry_instant(start: datetime, end_time: TimeLike) -> datetime:
    """End-of-session instant: start's calendar date at end_time."""
    return combine(start.date(), end_time)


def is_expired(expiry: Optional[datetime], now: datetime) -> bool:
    if expiry is None:
        return False
    return now > expiry
