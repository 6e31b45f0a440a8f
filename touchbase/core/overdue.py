"""Overdue calculator — signed "days overdue" for each contact.

Positive = overdue by that many days, 0 = due today, negative = days left.
Works on calendar dates only, so daylight-saving shifts never cause an
off-by-one.
"""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from datetime import date, datetime, timedelta

from touchbase.core.cadence import expected_interval_days
from touchbase.data.models import Contact


def as_calendar_date(value: date | datetime) -> date:
    """Strip the time of day, keeping the calendar date."""
    if isinstance(value, datetime):
        return value.date()
    return value


def days_between(start: date | datetime, end: date | datetime) -> int:
    """Whole calendar days from `start` to `end` (negative if end is earlier)."""
    return (as_calendar_date(end) - as_calendar_date(start)).days


def days_overdue(
    last_interaction_date: date | datetime | None,
    tier: str | None,
    today: date | datetime,
) -> int:
    """Compute how many days overdue a contact is.

    A contact who has never been contacted is treated as exactly one cadence
    period overdue: they show up as due immediately but never at the top
    just for being new.
    """
    interval = expected_interval_days(tier)
    if last_interaction_date is None:
        return interval
    return days_between(last_interaction_date, today) - interval


def due_date(
    last_interaction_date: date | datetime | None, tier: str | None
) -> date | None:
    """Date the next touchpoint is due, or None if never contacted."""
    if last_interaction_date is None:
        return None
    return as_calendar_date(last_interaction_date) + timedelta(
        days=expected_interval_days(tier)
    )


def annotate_contacts(
    contacts: Iterable[Contact], today: date | datetime
) -> list[Contact]:
    """Return copies of `contacts` with `days_overdue` freshly computed."""
    return [
        dataclasses.replace(
            c,
            days_overdue=days_overdue(c.last_interaction_date, c.cadence_tier, today),
        )
        for c in contacts
    ]
