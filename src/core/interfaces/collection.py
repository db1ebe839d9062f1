"""Contract for the remote animal collection.

Why Protocol:
- A structural contract (duck typing) without rigid inheritance.
- Lets the controller run against httpx in production and an in-memory
  fake in tests without coupling the core to either.
"""

from __future__ import annotations

from typing import Protocol, runtime_checkable

from core.domain.models import Entity, EntityDraft, EntityId


@runtime_checkable
class CollectionClient(Protocol):
    """Minimal read-all / read-one / create contract.

    Design rules:
    - Every method is async because it does network I/O.
    - Each call resolves exactly once: a value, or `FetchFailed` /
      `CreateFailed`. No partial results, no retries.
    """

    async def list_all(self) -> list[Entity]:
        """Return every entity in server order."""

        ...

    async def get_one(self, entity_id: EntityId) -> Entity:
        """Return a fresh copy of one entity."""

        ...

    async def create(self, draft: EntityDraft) -> Entity:
        """Submit a draft and return the server-assigned entity."""

        ...
