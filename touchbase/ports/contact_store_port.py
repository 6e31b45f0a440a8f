"""Contact Store port — abstract interface for reading contacts and interactions.

Core modules depend on this protocol, never on a specific backend.
"""

from __future__ import annotations

from typing import Protocol

from touchbase.data.models import Contact, Interaction


class ContactStoreError(Exception):
    """Raised when any Contact Store operation fails."""


class ContactStorePort(Protocol):
    """Abstract Contact Store interface used by core modules."""

    async def list_contacts(self) -> list[Contact]: ...

    async def list_interactions(
        self, contact_id: str | None = None
    ) -> list[Interaction]: ...
