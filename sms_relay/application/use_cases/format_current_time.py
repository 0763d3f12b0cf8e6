"""Human readable current time."""

from datetime import datetime
from typing import Optional
from zoneinfo import ZoneInfo

EASTERN = ZoneInfo("America/New_York")

MONTHS = (
    "January",
    "February",
    "March",
    "April",
    "May",
    "June",
    "July",
    "August",
    "September",
    "October",
    "November",
    "December",
)


def day_suffix(day: int) -> str:
    """
    Get the English ordinal suffix for a day of the month.

    Args:
        day: Day of month (1-31)

    Returns:
        'st', 'nd', 'rd' or 'th'
    """
    if 3 < day < 21:
        return "th"
    return {1: "st", 2: "nd", 3: "rd"}.get(day % 10, "th")


def format_current_time(now: Optional[datetime] = None) -> str:
    """
    Format a moment as e.g. '5th March 2024 3:07 PM EST' in New York time.

    The zone label is always 'EST', daylight saving or not.

    Args:
        now: Aware datetime to format (defaults to the current time)

    Returns:
        Formatted time string
    """
    local = (now or datetime.now(EASTERN)).astimezone(EASTERN)
    hour = local.hour % 12 or 12
    meridiem = "PM" if local.hour >= 12 else "AM"
    return (
        f"{local.day}{day_suffix(local.day)} {MONTHS[local.month - 1]} {local.year} "
        f"{hour}:{local.minute:02d} {meridiem} EST"
    )
