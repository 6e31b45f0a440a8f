"""Interaction history — the contact-level projection of logged touchpoints.

A contact's last_interaction_date / last_interaction_note always reflect
the interaction with the latest date_of_interaction. Logging a new one
never mutates anything: callers get back a new Interaction and a refreshed
copy of the contact, and hand both to the Contact Store.
"""

from __future__ import annotations

import dataclasses
import logging
import uuid
from collections.abc import Iterable
from datetime import date, datetime

from touchbase.core.overdue import as_calendar_date
from touchbase.data.models import INTERACTION_TYPES, Contact, Interaction

logger = logging.getLogger(__name__)


def default_interaction_type(contact: Contact | None) -> str:
    """Interaction type preselected when logging for `contact`."""
    if contact is not None and contact.preferred_contact_method in INTERACTION_TYPES:
        return contact.preferred_contact_method
    return "call"


def contact_history(
    contact_id: str, interactions: Iterable[Interaction]
) -> list[Interaction]:
    """All interactions with one contact, newest first."""
    mine = [i for i in interactions if i.contact_id == contact_id]
    # Same-day entries: latest date_logged first
    mine.sort(key=lambda i: (i.date_of_interaction, i.date_logged), reverse=True)
    return mine


def latest_interaction(
    contact_id: str, interactions: Iterable[Interaction]
) -> Interaction | None:
    """The interaction that defines the contact's "last interaction".

    Ties on date_of_interaction go to the later date_logged, then to the one
    appearing later in `interactions`.
    """
    latest = None
    for interaction in interactions:
        if interaction.contact_id != contact_id:
            continue
        if latest is None or (
            (interaction.date_of_interaction, interaction.date_logged)
            >= (latest.date_of_interaction, latest.date_logged)
        ):
            latest = interaction
    return latest


def _note_snippet(notes: str | None) -> str | None:
    if notes is None:
        return None
    return notes.strip() or None


def refresh_last_interaction(
    contact: Contact, interactions: Iterable[Interaction]
) -> Contact:
    """Recompute the contact's derived last-interaction fields."""
    latest = latest_interaction(contact.id, interactions)
    if latest is None:
        return dataclasses.replace(
            contact, last_interaction_date=None, last_interaction_note=None
        )
    return dataclasses.replace(
        contact,
        last_interaction_date=latest.date_of_interaction,
        last_interaction_note=_note_snippet(latest.notes),
    )


def sync_last_interactions(
    contacts: Iterable[Contact], interactions: Iterable[Interaction]
) -> list[Contact]:
    """Recompute derived fields for every contact from the full history.

    `interactions` must be the complete history: a contact with none of its
    own ends up with no last interaction, whatever the store recorded.
    """
    interactions = list(interactions)
    return [refresh_last_interaction(c, interactions) for c in contacts]


def record_interaction(
    contact: Contact,
    date_of_interaction: date | datetime,
    logged_on: date | datetime,
    interaction_type: str | None = None,
    notes: str | None = None,
    interaction_id: str | None = None,
) -> tuple[Interaction, Contact]:
    """Build a new interaction for `contact` and the contact it leaves behind.

    Args:
        contact: The contact the interaction is with.
        date_of_interaction: When it happened (may be backdated).
        logged_on: Today's date, stamped as date_logged.
        interaction_type: Defaults to the contact's preferred method.
        notes: Optional free text.
        interaction_id: Defaults to a fresh UUID.

    Returns:
        (interaction, updated_contact). A backdated interaction older than the
        contact's current last interaction leaves the derived fields unchanged.

    Raises:
        ValueError: if interaction_type is not a known interaction type.
    """
    kind = interaction_type or default_interaction_type(contact)
    if kind not in INTERACTION_TYPES:
        raise ValueError(f"Unknown interaction type: {kind!r}")

    interaction = Interaction(
        id=interaction_id or str(uuid.uuid4()),
        contact_id=contact.id,
        date_of_interaction=as_calendar_date(date_of_interaction),
        date_logged=as_calendar_date(logged_on),
        interaction_type=kind,
        notes=notes,
    )
    if interaction.date_of_interaction > interaction.date_logged:
        logger.warning(
            "Interaction with %s dated %s is after its log date %s",
            contact.id, interaction.date_of_interaction, interaction.date_logged,
        )

    updated = contact
    if (
        contact.last_interaction_date is None
        or interaction.date_of_interaction >= contact.last_interaction_date
    ):
        updated = dataclasses.replace(
            contact,
            last_interaction_date=interaction.date_of_interaction,
            last_interaction_note=_note_snippet(notes),
        )
    logger.info(
        "Logged %s with %s on %s", kind, contact.full_name, interaction.date_of_interaction,
    )
    return interaction, updated
