"""Ranking / selection engine — who to reach out to next.

Sorts contacts by how overdue they are, picks the "due now" queue and the
remaining roster, and provides the alphabetical directory listing.

No I/O: this module only transforms data.
"""

from __future__ import annotations

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field

from touchbase.data.models import Contact

logger = logging.getLogger(__name__)


@dataclass
class RosterView:
    """Due-now queue (already capped) plus everyone else, both most overdue first."""

    due_now: list[Contact] = field(default_factory=list)
    remainder: list[Contact] = field(default_factory=list)
    due_total: int = 0              # due contacts before the cap


def _sort_key(contact: Contact) -> tuple[bool, int, str, str, str]:
    # Contacts without a computed days_overdue sort after everyone else
    return (
        contact.days_overdue is None,
        -(contact.days_overdue or 0),
        contact.first_name.casefold(),
        contact.last_name.casefold(),
        contact.id,
    )


def sort_by_overdue(contacts: Iterable[Contact]) -> list[Contact]:
    """Most overdue first; ties broken by first name, last name, then id."""
    return sorted(contacts, key=_sort_key)


def is_due(contact: Contact) -> bool:
    return contact.days_overdue is not None and contact.days_overdue >= 0


def due_now(contacts: Iterable[Contact]) -> list[Contact]:
    """Every contact with days_overdue >= 0, most overdue first (uncapped)."""
    return [c for c in sort_by_overdue(contacts) if is_due(c)]


def partition_roster(
    contacts: Iterable[Contact], limit: int | None = None
) -> RosterView:
    """Split contacts into the visible due-now queue and the remainder.

    Args:
        contacts: Contacts already annotated with days_overdue.
        limit: How many due contacts to show up front (None = all).
            Due contacts beyond the cap stay in the remainder.
    """
    ordered = sort_by_overdue(contacts)
    due = [c for c in ordered if is_due(c)]
    shown = due if limit is None else due[:limit]
    shown_ids = {c.id for c in shown}
    remainder = [c for c in ordered if c.id not in shown_ids]
    logger.debug(
        "Roster: %d due (%d shown), %d in remainder",
        len(due), len(shown), len(remainder),
    )
    return RosterView(due_now=shown, remainder=remainder, due_total=len(due))


def search_directory(
    contacts: Iterable[Contact],
    tiers: Iterable[str] | None = None,
    query: str = "",
) -> list[Contact]:
    """Alphabetical directory listing with tier and name filters.

    Args:
        contacts: Contacts to list.
        tiers: Only keep these cadence tiers; empty or None keeps all.
        query: Case-insensitive substring matched against the full name.
    """
    tier_filter = set(tiers or ())
    needle = query.strip().casefold()
    matches = [
        c for c in contacts
        if (not tier_filter or c.cadence_tier in tier_filter)
        and (not needle or needle in c.full_name.casefold())
    ]
    return sorted(matches, key=lambda c: (c.full_name.casefold(), c.id))
