"""Relative-time formatter — "3 days ago", "In 2 weeks", "June 15, 2024".

Pure functions of (date, today). Weeks, months and years are rounded
half-up: round(days / 7), round(days / 30), round(days / 365).
"""

from __future__ import annotations

from datetime import date, datetime

from touchbase.core.overdue import as_calendar_date, days_between
from touchbase.core.upcoming import next_occurrence

_MONTH_NAMES = (
    "January", "February", "March", "April", "May", "June",
    "July", "August", "September", "October", "November", "December",
)


def _round_div(days: int, unit: int) -> int:
    """round(days / unit) with halves rounded up, for days >= 0."""
    return (2 * days + unit) // (2 * unit)


def _plural(count: int, word: str) -> str:
    return f"{count} {word}" if count == 1 else f"{count} {word}s"


def relative_time(value: date | datetime | None, today: date | datetime) -> str:
    """Past-relative label for `value` as seen from `today`.

    Absent dates read "Never". Dates after `today` (a backdated log entry
    saved with the wrong year, say) are labelled with future_relative_date().
    """
    if value is None:
        return "Never"
    diff = days_between(value, today)
    if diff < 0:
        return future_relative_date(value, today)
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Yesterday"
    if diff < 7:
        return f"{diff} days ago"
    if diff < 14:
        return "Last week"
    weeks = _round_div(diff, 7)
    if weeks < 9:
        return f"{weeks} weeks ago"
    months = _round_div(diff, 30)
    if months < 12:
        return f"{_plural(months, 'month')} ago"
    years = _round_div(diff, 365)
    return f"{_plural(years, 'year')} ago"


def future_relative_date(value: date | datetime, today: date | datetime) -> str:
    """Future-relative label for `value`; past dates fall back to relative_time()."""
    diff = days_between(today, value)
    if diff < 0:
        return relative_time(value, today)
    if diff == 0:
        return "Today"
    if diff == 1:
        return "Tomorrow"
    if diff < 7:
        return f"In {diff} days"
    if diff < 14:
        return "In 1 week"
    weeks = _round_div(diff, 7)
    if weeks < 5:
        return f"In {weeks} weeks"
    months = _round_div(diff, 30)
    return f"In {_plural(months, 'month')}"


def birthday_relative_date(birthday: date, today: date | datetime) -> str:
    """Future-relative label for the next occurrence of a birthday."""
    return future_relative_date(next_occurrence(birthday, today), today)


def format_long_date(value: date | datetime) -> str:
    """e.g. "June 15, 2024"."""
    d = as_calendar_date(value)
    return f"{_MONTH_NAMES[d.month - 1]} {d.day}, {d.year}"


def format_short_date(value: date | datetime) -> str:
    """e.g. "Jun 15, 2024"."""
    d = as_calendar_date(value)
    return f"{_MONTH_NAMES[d.month - 1][:3]} {d.day}, {d.year}"
