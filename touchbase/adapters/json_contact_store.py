"""JSON Contact Store adapter — implements ContactStorePort over an export file.

Reads a JSON document shaped like:

    {
        "contacts": [{"id": "...", "first_name": "...", ...}],
        "interactions": [{"id": "...", "contact_id": "...", ...}]
    }

Column names from the hosted backend export (type, where_from,
nudge_interaction_type, person_id) are accepted as aliases.

This is the data-loading boundary: unparseable optional dates become
absent, invalid tiers are normalized, and structurally broken records are
skipped. Each case is logged as a warning.
"""

from __future__ import annotations

import asyncio
import json
import logging
from datetime import date
from pathlib import Path

from pydantic import AliasChoices, BaseModel, Field, ValidationError

from touchbase.config import settings
from touchbase.core.cadence import normalize_tier
from touchbase.data.models import (
    INTERACTION_TYPES,
    RELATIONSHIP_CLASSES,
    Contact,
    Interaction,
)
from touchbase.ports.contact_store_port import ContactStoreError

logger = logging.getLogger(__name__)


class ContactRecord(BaseModel):
    """One contact row as exported by the store."""

    id: str
    first_name: str
    last_name: str = ""
    relationship_class: str = Field(
        validation_alias=AliasChoices("relationship_class", "type"),
    )
    cadence_tier: str = ""
    date_added: date
    preferred_contact_method: str = Field(
        default="call",
        validation_alias=AliasChoices(
            "preferred_contact_method", "nudge_interaction_type"
        ),
    )
    origin_note: str | None = Field(
        default=None, validation_alias=AliasChoices("origin_note", "where_from"),
    )
    birthday: str | None = None
    last_interaction_date: str | None = None
    last_interaction_note: str | None = None


class InteractionRecord(BaseModel):
    """One interaction row as exported by the store."""

    id: str
    contact_id: str = Field(validation_alias=AliasChoices("contact_id", "person_id"))
    date_of_interaction: date
    date_logged: date | None = None
    interaction_type: str = Field(
        default="call", validation_alias=AliasChoices("interaction_type", "type"),
    )
    notes: str | None = None


def _parse_optional_date(raw: str | None, field: str, record_id: str) -> date | None:
    """Parse "YYYY-MM-DD" (or a longer ISO timestamp); None if absent or bad."""
    if not raw:
        return None
    try:
        return date.fromisoformat(raw[:10])
    except ValueError:
        logger.warning("Record %s: unparseable %s %r, treating as absent", record_id, field, raw)
        return None


def _to_contact(record: ContactRecord) -> Contact | None:
    if record.relationship_class not in RELATIONSHIP_CLASSES:
        logger.warning(
            "Skipping contact %s: unknown relationship class %r",
            record.id, record.relationship_class,
        )
        return None

    tier = normalize_tier(record.relationship_class, record.cadence_tier)
    if tier != record.cadence_tier:
        logger.warning(
            "Contact %s: tier %r not valid for %s, using %s",
            record.id, record.cadence_tier, record.relationship_class, tier,
        )

    method = record.preferred_contact_method
    if method not in INTERACTION_TYPES:
        logger.warning("Contact %s: unknown contact method %r, using call", record.id, method)
        method = "call"

    return Contact(
        id=record.id,
        first_name=record.first_name,
        last_name=record.last_name,
        relationship_class=record.relationship_class,
        cadence_tier=tier,
        date_added=record.date_added,
        preferred_contact_method=method,
        origin_note=record.origin_note,
        birthday=_parse_optional_date(record.birthday, "birthday", record.id),
        last_interaction_date=_parse_optional_date(
            record.last_interaction_date, "last_interaction_date", record.id,
        ),
        last_interaction_note=record.last_interaction_note,
    )


def _to_interaction(record: InteractionRecord) -> Interaction:
    kind = record.interaction_type
    if kind not in INTERACTION_TYPES:
        logger.warning("Interaction %s: unknown type %r, using call", record.id, kind)
        kind = "call"
    return Interaction(
        id=record.id,
        contact_id=record.contact_id,
        date_of_interaction=record.date_of_interaction,
        date_logged=record.date_logged or record.date_of_interaction,
        interaction_type=kind,
        notes=record.notes,
    )


def _load_rows(raw: dict, key: str, model: type[BaseModel]) -> list[BaseModel]:
    rows = raw.get(key) or []
    if not isinstance(rows, list):
        raise ContactStoreError(f"Expected a list under {key!r}, got {type(rows).__name__}")

    parsed = []
    for index, row in enumerate(rows):
        try:
            parsed.append(model.model_validate(row))
        except ValidationError as exc:
            logger.warning(
                "Skipping %s[%d]: %d validation error(s): %s",
                key, index, exc.error_count(), exc.errors()[0]["msg"],
            )
    return parsed


class JsonContactStore:
    """JSON-file implementation of ContactStorePort."""

    def __init__(self, path: str | None = None) -> None:
        self._path = Path(path or settings.DATA_PATH)

    def _read(self) -> dict:
        try:
            with self._path.open(encoding="utf-8") as fh:
                raw = json.load(fh)
        except FileNotFoundError as exc:
            raise ContactStoreError(f"Contact export not found: {self._path}") from exc
        except (OSError, json.JSONDecodeError) as exc:
            raise ContactStoreError(f"Failed to read {self._path}: {exc}") from exc

        if not isinstance(raw, dict):
            raise ContactStoreError(f"{self._path}: top level must be a JSON object")
        return raw

    async def list_contacts(self) -> list[Contact]:
        raw = await asyncio.to_thread(self._read)
        contacts = [
            c for c in (_to_contact(r) for r in _load_rows(raw, "contacts", ContactRecord))
            if c is not None
        ]
        logger.info("Loaded %d contacts from %s", len(contacts), self._path)
        return contacts

    async def list_interactions(
        self, contact_id: str | None = None
    ) -> list[Interaction]:
        raw = await asyncio.to_thread(self._read)
        interactions = [
            _to_interaction(r)
            for r in _load_rows(raw, "interactions", InteractionRecord)
        ]
        if contact_id is not None:
            interactions = [i for i in interactions if i.contact_id == contact_id]
        logger.info("Loaded %d interactions from %s", len(interactions), self._path)
        return interactions
