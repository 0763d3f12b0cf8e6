"""Unit tests for the current time formatter."""

import re
from datetime import datetime, timezone

import pytest

from sms_relay.application.use_cases.format_current_time import day_suffix, format_current_time

TIME_PATTERN = re.compile(
    r"^\d{1,2}(st|nd|rd|th) "
    r"(January|February|March|April|May|June|July|August|September|October|November|December) "
    r"\d{4} \d{1,2}:\d{2} (AM|PM) EST$"
)


@pytest.mark.parametrize(
    "day,suffix",
    [
        (1, "st"),
        (2, "nd"),
        (3, "rd"),
        (4, "th"),
        (11, "th"),
        (12, "th"),
        (13, "th"),
        (20, "th"),
        (21, "st"),
        (22, "nd"),
        (23, "rd"),
        (30, "th"),
        (31, "st"),
    ],
)
def test_day_suffix(day, suffix):
    """Test ordinal suffixes including the teens."""
    assert day_suffix(day) == suffix


def test_format_standard_time():
    """Test an afternoon instant in standard time."""
    now = datetime(2024, 3, 5, 20, 7, tzinfo=timezone.utc)  # 15:07 in New York

    assert format_current_time(now) == "5th March 2024 3:07 PM EST"


def test_format_daylight_time_still_labelled_est():
    """Test that summer times are converted with DST but keep the EST label."""
    now = datetime(2024, 7, 4, 16, 5, tzinfo=timezone.utc)  # 12:05 EDT

    assert format_current_time(now) == "4th July 2024 12:05 PM EST"


def test_format_midnight_is_twelve_am():
    """Test that hour zero renders as 12 AM and the date rolls back to New York's day."""
    now = datetime(2024, 1, 1, 5, 0, tzinfo=timezone.utc)  # 00:00 in New York

    assert format_current_time(now) == "1st January 2024 12:00 AM EST"


def test_format_converts_across_date_boundary():
    """Test that UTC early morning falls on the previous New York day."""
    now = datetime(2024, 11, 23, 3, 9, tzinfo=timezone.utc)  # 22:09 on the 22nd

    assert format_current_time(now) == "22nd November 2024 10:09 PM EST"


def test_format_now_matches_pattern():
    """Test that the default current time matches the literal pattern."""
    assert TIME_PATTERN.match(format_current_time())
