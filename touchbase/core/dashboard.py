"""
Touchbase — Home pages and daily digest.

Puts the engine together: annotates contacts with days_overdue, builds the
Friends and Network pages (due-now queue, upcoming birthdays, the rest of
the roster) and renders a plain-text digest alongside the stats.

This module depends on the ContactStorePort protocol, not on a specific
store implementation.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date
from typing import TYPE_CHECKING

from touchbase.config import settings
from touchbase.core.cadence import contact_method_label, tier_label
from touchbase.core.interactions import sync_last_interactions
from touchbase.core.overdue import annotate_contacts
from touchbase.core.ranking import partition_roster
from touchbase.core.relative_time import (
    birthday_relative_date,
    format_long_date,
    relative_time,
)
from touchbase.core.stats import StatsSummary, build_stats
from touchbase.core.upcoming import upcoming_birthdays
from touchbase.data.models import Contact

if TYPE_CHECKING:
    from touchbase.ports.contact_store_port import ContactStorePort

logger = logging.getLogger(__name__)

_PAGE_TITLES = {"friend": "Friends", "network": "Network"}


@dataclass
class HomeView:
    """One relationship-class page of the home screen."""

    relationship_class: str
    due_now: list[Contact] = field(default_factory=list)
    due_total: int = 0
    birthdays: list[Contact] = field(default_factory=list)
    remainder: list[Contact] = field(default_factory=list)


def build_home_view(
    contacts: Iterable[Contact],
    relationship_class: str,
    today: date,
    due_limit: int | None = None,
    days_ahead: int | None = None,
) -> HomeView:
    """Build the Friends or Network page for `today`.

    Args:
        contacts: All contacts; only those of `relationship_class` are used.
            days_overdue is recomputed here, whatever the input carries.
        relationship_class: "friend" or "network".
        today: The caller's current date.
        due_limit: Due-now cards shown (defaults to settings.DUE_NOW_LIMIT).
        days_ahead: Birthday lookahead (defaults to settings.BIRTHDAY_LOOKAHEAD_DAYS).
    """
    if due_limit is None:
        due_limit = settings.DUE_NOW_LIMIT
    if days_ahead is None:
        days_ahead = settings.BIRTHDAY_LOOKAHEAD_DAYS

    members = annotate_contacts(
        (c for c in contacts if c.relationship_class == relationship_class), today,
    )
    roster = partition_roster(members, limit=due_limit)
    return HomeView(
        relationship_class=relationship_class,
        due_now=roster.due_now,
        due_total=roster.due_total,
        birthdays=upcoming_birthdays(members, today, days_ahead),
        remainder=roster.remainder,
    )


# ---------------------------------------------------------------------------
# Text rendering
# ---------------------------------------------------------------------------


def _overdue_text(days: int | None) -> str:
    if days is None:
        return ""
    if days > 0:
        return f"{days}d overdue"
    if days == 0:
        return "due today"
    return f"due in {-days}d"


def _contact_line(contact: Contact, today: date) -> str:
    return (
        f"  - {contact.full_name} [{tier_label(contact.cadence_tier)}] "
        f"{contact_method_label(contact.preferred_contact_method)} · "
        f"last: {relative_time(contact.last_interaction_date, today)} · "
        f"{_overdue_text(contact.days_overdue)}"
    )


def format_home_view(view: HomeView, today: date) -> str:
    title = _PAGE_TITLES.get(view.relationship_class, view.relationship_class)
    lines = [f"== {title} =="]

    if view.due_total == 0:
        lines.append("Up next: nobody is due. Nice work!")
    else:
        more = view.due_total - len(view.due_now)
        if not view.due_now:
            header = f"Up next: {more} due"
        elif more > 0:
            header = f"Up next ({more} more due):"
        else:
            header = "Up next:"
        lines.append(header)
        lines.extend(_contact_line(c, today) for c in view.due_now)

    if view.birthdays:
        lines.append("Birthdays:")
        lines.extend(
            f"  - {c.full_name}: {birthday_relative_date(c.birthday, today)}"
            for c in view.birthdays
        )

    if view.remainder:
        lines.append("Everyone else:")
        lines.extend(_contact_line(c, today) for c in view.remainder)

    return "\n".join(lines)


def format_stats(summary: StatsSummary) -> str:
    lines = [
        f"== Stats ({summary.scope}) ==",
        f"Weekly streak: {summary.streak.current} (best {summary.streak.best})",
        f"Interactions logged: {summary.total_interactions}",
    ]
    months = " ".join(
        f"{b.label}{'/' + b.year_label if b.year_label else ''}:{b.count}"
        for b in summary.buckets
    )
    lines.append(f"Last 12 months: {months}")
    if summary.leaderboard:
        lines.append("Most contacted:")
        lines.extend(
            f"  {e.rank}. {e.contact.full_name} ({e.count})"
            for e in summary.leaderboard[:5]
        )
    return "\n".join(lines)


# ---------------------------------------------------------------------------
# Digest
# ---------------------------------------------------------------------------


async def build_digest(store: ContactStorePort, today: date) -> str:
    """Fetch contacts + interactions and render the full digest for `today`.

    Graceful degradation:
    - Interactions unavailable -> pages from stored contact fields, no stats
    - Contacts unavailable -> fallback message
    """
    try:
        contacts = await store.list_contacts()
    except Exception as exc:
        logger.error("Digest: contact fetch failed: %s", exc)
        return f"{format_long_date(today)}\n\nCouldn't load your contacts right now."

    try:
        interactions = await store.list_interactions()
    except Exception as exc:
        logger.warning("Digest: interaction fetch failed: %s", exc)
        interactions = None

    if interactions is not None:
        contacts = sync_last_interactions(contacts, interactions)

    sections = [format_long_date(today)]
    for relationship_class in ("friend", "network"):
        view = build_home_view(contacts, relationship_class, today)
        sections.append(format_home_view(view, today))

    if interactions is None:
        sections.append("== Stats ==\n(unavailable)")
    else:
        sections.append(
            format_stats(build_stats(interactions, contacts, today, settings.STATS_SCOPE))
        )

    logger.info("Digest built for %s (%d contacts)", today, len(contacts))
    return "\n\n".join(sections)
