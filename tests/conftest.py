"""Shared test fixtures and configuration.

Sets up predictable environment variables before any touchbase import,
and provides factories for contacts and interactions.
"""

import os

# Patch env vars BEFORE any touchbase imports
os.environ.setdefault("DATA_PATH", "/nonexistent/contacts.json")
os.environ.setdefault("TIMEZONE", "UTC")
os.environ.setdefault("DUE_NOW_LIMIT", "4")
os.environ.setdefault("BIRTHDAY_LOOKAHEAD_DAYS", "60")
os.environ.setdefault("STATS_SCOPE", "both")

from datetime import date

import pytest

from touchbase.data.models import Contact, Interaction


@pytest.fixture
def today():
    """A fixed Saturday: 2024-06-15 (week starts Monday 2024-06-10)."""
    return date(2024, 6, 15)


@pytest.fixture
def make_contact():
    """Return a factory building Contact objects with sensible defaults."""

    def _make(
        first_name: str = "Sarah",
        last_name: str = "Chen",
        relationship_class: str = "friend",
        cadence_tier: str = "keep_warm",
        **overrides,
    ) -> Contact:
        fields = {
            "id": first_name.lower(),
            "first_name": first_name,
            "last_name": last_name,
            "relationship_class": relationship_class,
            "cadence_tier": cadence_tier,
            "date_added": date(2024, 1, 1),
        }
        fields.update(overrides)
        return Contact(**fields)

    return _make


@pytest.fixture
def make_interaction():
    """Return a factory building Interaction objects."""
    counter = {"n": 0}

    def _make(contact_id: str, on: date, **overrides) -> Interaction:
        counter["n"] += 1
        fields = {
            "id": f"i{counter['n']}",
            "contact_id": contact_id,
            "date_of_interaction": on,
            "date_logged": on,
            "interaction_type": "call",
        }
        fields.update(overrides)
        return Interaction(**fields)

    return _make


@pytest.fixture
def export_path(tmp_path):
    """Return a function writing a JSON export to a temp file and returning its path."""
    import json

    def _write(payload) -> str:
        path = tmp_path / "contacts.json"
        path.write_text(json.dumps(payload), encoding="utf-8")
        return str(path)

    return _write
