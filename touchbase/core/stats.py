"""
Touchbase — Interaction Aggregator.

Turns the interaction history into the numbers on the Stats page:
weekly streaks, twelve monthly buckets and a most-contacted leaderboard.
Everything can be scoped to friends or network via the referenced contact.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
from collections import Counter
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date, datetime, timedelta

from touchbase.core.overdue import as_calendar_date
from touchbase.data.models import Contact, Interaction

logger = logging.getLogger(__name__)

_MONTH_LABELS = (
    "Jan", "Feb", "Mar", "Apr", "May", "Jun",
    "Jul", "Aug", "Sep", "Oct", "Nov", "Dec",
)

_SCOPE_CLASSES = {"friends": "friend", "network": "network"}


@dataclass
class Streak:
    current: int = 0
    best: int = 0


@dataclass
class MonthBucket:
    label: str          # "Mar", "Apr", ...
    year_label: str     # "2025" where the year changes, "" otherwise
    count: int          # total interactions
    unique: int         # distinct contacts


@dataclass
class LeaderEntry:
    contact: Contact
    count: int
    rank: int


@dataclass
class StatsSummary:
    """Everything the Stats page shows for one scope."""

    scope: str
    streak: Streak
    buckets: list[MonthBucket] = field(default_factory=list)
    leaderboard: list[LeaderEntry] = field(default_factory=list)
    total_interactions: int = 0


# ---------------------------------------------------------------------------
# Scope
# ---------------------------------------------------------------------------


def _scope_class(scope: str) -> str | None:
    if scope == "both":
        return None
    try:
        return _SCOPE_CLASSES[scope]
    except KeyError:
        raise ValueError(f"Unknown stats scope: {scope!r}") from None


def scope_contacts(contacts: Iterable[Contact], scope: str = "both") -> list[Contact]:
    """Contacts in scope: "both", "friends" or "network"."""
    wanted = _scope_class(scope)
    return [c for c in contacts if wanted is None or c.relationship_class == wanted]


def scope_interactions(
    interactions: Iterable[Interaction],
    contacts: Iterable[Contact],
    scope: str = "both",
) -> list[Interaction]:
    """Interactions whose contact is in scope.

    With scope "both" every interaction is kept, even ones whose contact is
    unknown; a narrower scope drops them.
    """
    wanted = _scope_class(scope)
    if wanted is None:
        return list(interactions)
    class_by_id = {c.id: c.relationship_class for c in contacts}
    return [i for i in interactions if class_by_id.get(i.contact_id) == wanted]


# ---------------------------------------------------------------------------
# Weekly streak
# ---------------------------------------------------------------------------


def week_start(value: date | datetime) -> date:
    """Monday of the ISO week containing `value`."""
    d = as_calendar_date(value)
    return d - timedelta(days=d.weekday())


def compute_streak(
    interactions: Iterable[Interaction], today: date | datetime
) -> Streak:
    """Current and best runs of consecutive weeks with at least one interaction."""
    weeks = {week_start(i.date_of_interaction) for i in interactions}

    # Current: walk back from this week until the first empty week
    current = 0
    cursor = week_start(today)
    while cursor in weeks:
        current += 1
        cursor -= timedelta(weeks=1)

    best = 0
    run = 0
    previous: date | None = None
    for week in sorted(weeks):
        if previous is not None and week - previous == timedelta(weeks=1):
            run += 1
        else:
            run = 1
        best = max(best, run)
        previous = week

    return Streak(current=current, best=max(best, current))


# ---------------------------------------------------------------------------
# Monthly buckets
# ---------------------------------------------------------------------------


def _shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    index = year * 12 + (month - 1) + delta
    return index // 12, index % 12 + 1


def build_month_buckets(
    interactions: Iterable[Interaction],
    today: date | datetime,
    months: int = 12,
) -> list[MonthBucket]:
    """One bucket per month, oldest first, ending with the month of `today`."""
    today = as_calendar_date(today)
    totals: Counter[tuple[int, int]] = Counter()
    people: dict[tuple[int, int], set[str]] = {}
    for i in interactions:
        key = (i.date_of_interaction.year, i.date_of_interaction.month)
        totals[key] += 1
        people.setdefault(key, set()).add(i.contact_id)

    buckets: list[MonthBucket] = []
    prev_year = None
    for offset in range(months - 1, -1, -1):
        year, month = _shift_month(today.year, today.month, -offset)
        buckets.append(
            MonthBucket(
                label=_MONTH_LABELS[month - 1],
                year_label=str(year) if year != prev_year else "",
                count=totals[(year, month)],
                unique=len(people.get((year, month), ())),
            )
        )
        prev_year = year
    return buckets


# ---------------------------------------------------------------------------
# Leaderboard
# ---------------------------------------------------------------------------


def build_leaderboard(
    interactions: Iterable[Interaction],
    contacts: Iterable[Contact],
    dense: bool = True,
) -> list[LeaderEntry]:
    """Most-contacted people, highest count first, ties by first name.

    Equal counts share a rank. With dense=True the next lower count takes
    the next rank number (3, 3, 1 -> ranks 1, 1, 2); with dense=False it
    takes its position (3, 3, 1 -> ranks 1, 1, 3).
    """
    counts = Counter(i.contact_id for i in interactions)
    ordered = sorted(
        (c for c in contacts if counts[c.id] > 0),
        key=lambda c: (-counts[c.id], c.first_name.casefold(), c.id),
    )

    entries: list[LeaderEntry] = []
    rank = 0
    prev_count = None
    for position, contact in enumerate(ordered):
        count = counts[contact.id]
        if count != prev_count:
            rank = rank + 1 if dense else position + 1
            prev_count = count
        entries.append(LeaderEntry(contact=contact, count=count, rank=rank))
    return entries


def build_stats(
    interactions: Iterable[Interaction],
    contacts: Iterable[Contact],
    today: date | datetime,
    scope: str = "both",
) -> StatsSummary:
    """Streak, monthly buckets and leaderboard for one scope."""
    contacts = list(contacts)
    scoped = scope_interactions(interactions, contacts, scope)
    summary = StatsSummary(
        scope=scope,
        streak=compute_streak(scoped, today),
        buckets=build_month_buckets(scoped, today),
        leaderboard=build_leaderboard(scoped, scope_contacts(contacts, scope)),
        total_interactions=len(scoped),
    )
    logger.debug(
        "Stats (%s): %d interactions, streak %d/%d, %d on leaderboard",
        scope, summary.total_interactions, summary.streak.current,
        summary.streak.best, len(summary.leaderboard),
    )
    return summary
