"""
Touchbase — Data Models.

Contacts and interactions arrive from the Contact Store already parsed.
The engine only reads them; derived fields are produced with
dataclasses.replace(), never by mutation.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date

RELATIONSHIP_CLASSES = ("friend", "network")

FRIEND_TIERS = ("close_friend", "keep_warm", "dont_lose_touch")
NETWORK_TIERS = ("active", "keep_warm", "dont_lose_touch")

INTERACTION_TYPES = ("call", "facetime", "text", "email", "in_person")

REMINDER_KINDS = ("birthday", "custom_event")


@dataclass(frozen=True)
class Contact:
    """A person the user wants to keep in touch with.

    `last_interaction_date` and `last_interaction_note` mirror the most
    recent interaction logged for this contact. `days_overdue` is never
    stored; it is filled in by touchbase.core.overdue.annotate_contacts().
    """

    id: str
    first_name: str
    last_name: str
    relationship_class: str           # "friend" | "network"
    cadence_tier: str                 # see FRIEND_TIERS / NETWORK_TIERS
    date_added: date
    preferred_contact_method: str = "call"
    origin_note: str | None = None    # "where from"
    birthday: date | None = None      # year ignored for recurrence
    last_interaction_date: date | None = None
    last_interaction_note: str | None = None
    days_overdue: int | None = None

    @property
    def full_name(self) -> str:
        return f"{self.first_name} {self.last_name}".strip()


@dataclass(frozen=True)
class Interaction:
    """A single logged touchpoint with a contact. Append-only."""

    id: str
    contact_id: str
    date_of_interaction: date         # user-supplied, may be backdated
    date_logged: date                 # auto-stamped at creation
    interaction_type: str = "call"
    notes: str | None = None


@dataclass(frozen=True)
class UpcomingReminder:
    """A dated reminder shown in the "coming up" strip."""

    id: str
    kind: str                         # "birthday" | "custom_event"
    label: str                        # e.g. "Sarah's birthday"
    date: date
    contact_id: str | None = None     # lookup only, not ownership
    recurs_yearly: bool = False
