"""In-memory store of the last fetched animal list.

The store is the single source of truth the presentation reads from. It is
replaced wholesale on every fetch (never diffed) and mutated only through
`set_votes`.
"""

from __future__ import annotations

from typing import Iterable, Iterator

from core.domain.errors import DuplicateEntityId
from core.domain.models import Entity, EntityId


class EntityStore:
    """Ordered sequence of `Entity` in server response order, unique ids."""

    def __init__(self, entities: Iterable[Entity] = ()) -> None:
        self._entities: list[Entity] = []
        self._index: dict[str, int] = {}
        self.replace_all(entities)

    def replace_all(self, entities: Iterable[Entity]) -> None:
        """Swap in a new sequence; duplicates leave the old content in place."""

        items = list(entities)
        index: dict[str, int] = {}
        for position, entity in enumerate(items):
            key = str(entity.id)
            if key in index:
                raise DuplicateEntityId(entity.id)
            index[key] = position

        self._entities = items
        self._index = index

    def find_by_id(self, entity_id: EntityId) -> Entity | None:
        """Return the stored entity, or None when it is not (or no longer) present."""

        position = self._index.get(str(entity_id))
        if position is None:
            return None
        return self._entities[position]

    def set_votes(self, entity_id: EntityId, value: int) -> None:
        entity = self.find_by_id(entity_id)
        if entity is None:
            return
        entity.votes = value

    @property
    def entities(self) -> tuple[Entity, ...]:
        return tuple(self._entities)

    @property
    def ids(self) -> list[EntityId]:
        return [entity.id for entity in self._entities]

    def __len__(self) -> int:
        return len(self._entities)

    def __iter__(self) -> Iterator[Entity]:
        return iter(tuple(self._entities))

    def __contains__(self, entity_id: object) -> bool:
        return str(entity_id) in self._index
