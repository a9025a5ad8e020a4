from datetime import datetime, date, timedelta

import pytest

from peertutor.errors import ParseError
from peertutor.timeutils import (
    combine,
    expiry_instant,
    is_expired,
    next_occurrence_of,
    to_12_hour,
    to_24_hour,
    weekday_index,
    weekday_name,
)


def test_to_24_hour_basic():
    assert to_24_hour("2:45 PM") == (14, 45)
    assert to_24_hour("7:00 AM") == (7, 0)
    assert to_24_hour(" 11:30 am ") == (11, 30)


def test_noon_and_midnight():
    assert to_24_hour("12:00 AM") == (0, 0)
    assert to_24_hour("12:15 PM") == (12, 15)
    assert to_12_hour(0, 5) == "12:05 AM"
    assert to_12_hour(12, 0) == "12:00 PM"


@pytest.mark.parametrize("bad", ["7:00AM", "seven:00 AM", "7:xx PM", "13:00 PM", "7:60 AM", "7:00 XM", "", "7 AM", "²:00 AM", "7:²² AM", "٧:٠٠ AM"])
def test_to_24_hour_rejects_malformed(bad):
    with pytest.raises(ParseError):
        to_24_hour(bad)


def test_round_trip_every_minute_of_the_day():
    for hours in range(24):
        for minutes in range(60):
            assert to_24_hour(to_12_hour(hours, minutes)) == (hours, minutes)


def test_to_12_hour_rejects_out_of_range():
    with pytest.raises(ParseError):
        to_12_hour(24, 0)


def test_weekday_helpers():
    assert weekday_index("Monday") == 0
    assert weekday_name(date(2026, 10, 19)) == "Monday"
    with pytest.raises(ParseError):
        weekday_index("Funday")


def test_next_occurrence_later_this_week():
    wednesday = datetime(2026, 10, 14, 12, 0)
    assert next_occurrence_of("Friday", "2:45 PM", wednesday) == datetime(2026, 10, 16, 14, 45)


def test_next_occurrence_earlier_in_week_rolls_to_next_week():
    wednesday = datetime(2026, 10, 14, 12, 0)
    assert next_occurrence_of("Monday", "7:00 AM", wednesday) == datetime(2026, 10, 19, 7, 0)


def test_next_occurrence_same_day_before_time_is_today():
    wednesday = datetime(2026, 10, 14, 12, 0)
    assert next_occurrence_of("Wednesday", "2:45 PM", wednesday) == datetime(2026, 10, 14, 14, 45)


def test_next_occurrence_same_day_after_time_is_next_week():
    wednesday = datetime(2026, 10, 14, 12, 0)
    assert next_occurrence_of("Wednesday", "7:00 AM", wednesday) == datetime(2026, 10, 21, 7, 0)


def test_next_occurrence_accepts_24_hour_tuple():
    wednesday = datetime(2026, 10, 14, 12, 0)
    assert next_occurrence_of("Thursday", (15, 45), wednesday) == datetime(2026, 10, 15, 15, 45)


def test_next_occurrence_never_in_the_past():
    start = datetime(2026, 10, 12, 0, 0)
    for step in range(0, 24 * 7 * 4):
        from_dt = start + timedelta(minutes=15 * step)
        for day in ("Monday", "Wednesday", "Friday", "Sunday"):
            for at in ("7:00 AM", "2:45 PM", "11:59 PM"):
                result = next_occurrence_of(day, at, from_dt)
                assert result >= from_dt
                assert (result - from_dt).days < 7
                assert weekday_name(result) == day


def test_expiry_instant_keeps_date():
    start = datetime(2026, 10, 19, 7, 0)
    assert expiry_instant(start, "7:45 AM") == datetime(2026, 10, 19, 7, 45)
    assert combine(date(2026, 10, 19), "3:45 PM") == datetime(2026, 10, 19, 15, 45)


def test_is_expired():
    expiry = datetime(2026, 10, 19, 7, 45)
    assert not is_expired(None, expiry)
    assert not is_expired(expiry, expiry)
    assert is_expired(expiry, datetime(2026, 10, 19, 7, 46))
