"""Tests for touchbase.data.models — Contact / Interaction dataclasses."""

import dataclasses
from dataclasses import asdict
from datetime import date

import pytest

from touchbase.data.models import Contact, Interaction, UpcomingReminder


def test_contact_defaults():
    contact = Contact(
        id="p1",
        first_name="Sarah",
        last_name="Chen",
        relationship_class="friend",
        cadence_tier="close_friend",
        date_added=date(2024, 1, 10),
    )
    assert contact.preferred_contact_method == "call"
    assert contact.birthday is None
    assert contact.last_interaction_date is None
    assert contact.last_interaction_note is None
    assert contact.days_overdue is None
    assert contact.full_name == "Sarah Chen"


def test_full_name_without_last_name(make_contact):
    assert make_contact("Cher", "").full_name == "Cher"


def test_contact_is_immutable(make_contact):
    contact = make_contact()
    with pytest.raises(dataclasses.FrozenInstanceError):
        contact.cadence_tier = "dont_lose_touch"


def test_interaction_serializable():
    interaction = Interaction(
        id="i1",
        contact_id="p1",
        date_of_interaction=date(2024, 6, 1),
        date_logged=date(2024, 6, 2),
    )
    d = asdict(interaction)
    assert d["interaction_type"] == "call"
    assert d["notes"] is None


def test_reminder_defaults():
    reminder = UpcomingReminder(id="r1", kind="custom_event", label="Reunion", date=date(2024, 9, 1))
    assert reminder.contact_id is None
    assert reminder.recurs_yearly is False
