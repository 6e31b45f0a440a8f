"""Upcoming-event window — birthdays and other yearly dates.

Finds the next occurrence of a yearly date and keeps only those falling
within a lookahead window. Feb 29 dates land on Feb 28 in non-leap years.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import dataclasses
import logging
from calendar import isleap
from collections.abc import Iterable
from datetime import date, datetime

from touchbase.core.overdue import as_calendar_date
from touchbase.data.models import Contact, UpcomingReminder

logger = logging.getLogger(__name__)

DEFAULT_DAYS_AHEAD = 60


def _in_year(month_day: date, year: int) -> date:
    """`month_day` moved into `year`, clamping Feb 29 to Feb 28."""
    if month_day.month == 2 and month_day.day == 29 and not isleap(year):
        return date(year, 2, 28)
    return month_day.replace(year=year)


def next_occurrence(yearly: date, today: date | datetime) -> date:
    """Next date (today included) on which a yearly date falls."""
    today = as_calendar_date(today)
    occurrence = _in_year(yearly, today.year)
    if occurrence < today:
        occurrence = _in_year(yearly, today.year + 1)
    return occurrence


def days_until(yearly: date, today: date | datetime) -> int:
    """Whole days until the next occurrence of a yearly date (0 = today)."""
    return (next_occurrence(yearly, today) - as_calendar_date(today)).days


def _within_window(
    items: Iterable[tuple[object, int]], days_ahead: int
) -> list:
    # sorted() is stable: equal diffs keep their input order
    kept = [(item, diff) for item, diff in items if 0 <= diff <= days_ahead]
    kept.sort(key=lambda pair: pair[1])
    return [item for item, _ in kept]


def upcoming_birthdays(
    contacts: Iterable[Contact],
    today: date | datetime,
    days_ahead: int = DEFAULT_DAYS_AHEAD,
) -> list[Contact]:
    """Contacts whose birthday falls within `days_ahead` days, soonest first."""
    return _within_window(
        ((c, days_until(c.birthday, today)) for c in contacts if c.birthday),
        days_ahead,
    )


def birthday_reminders(
    contacts: Iterable[Contact],
    today: date | datetime,
    days_ahead: int = DEFAULT_DAYS_AHEAD,
) -> list[UpcomingReminder]:
    """UpcomingReminder entries for birthdays within the window, soonest first."""
    return [
        UpcomingReminder(
            id=f"birthday-{c.id}",
            kind="birthday",
            label=f"{c.first_name}'s birthday",
            date=next_occurrence(c.birthday, today),
            contact_id=c.id,
            recurs_yearly=True,
        )
        for c in upcoming_birthdays(contacts, today, days_ahead)
    ]


def upcoming_reminders(
    reminders: Iterable[UpcomingReminder],
    today: date | datetime,
    days_ahead: int = DEFAULT_DAYS_AHEAD,
) -> list[UpcomingReminder]:
    """Window a mixed list of reminders, soonest first.

    Yearly reminders are rolled forward to their next occurrence (and the
    returned copy carries that date). One-off reminders are kept only when
    their own date is inside the window.
    """
    today = as_calendar_date(today)
    scored: list[tuple[UpcomingReminder, int]] = []
    for reminder in reminders:
        if reminder.recurs_yearly:
            occurrence = next_occurrence(reminder.date, today)
            if occurrence != reminder.date:
                reminder = dataclasses.replace(reminder, date=occurrence)
        scored.append((reminder, (reminder.date - today).days))
    result = _within_window(scored, days_ahead)
    logger.debug("%d of %d reminders within %d days", len(result), len(scored), days_ahead)
    return result
