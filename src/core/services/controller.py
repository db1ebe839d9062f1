"""Selection and vote mutation controller.

This module owns the only real state rules of the application:

- The selected animal is a *separate copy* returned by a detail fetch, not a
  reference into the store. Every mutation is therefore applied to both the
  selected copy and the store copy (looked up by id).
- Failures never clear state: the store and the selection keep their last
  known good values and a failure event is emitted instead.
- Overlapping selections resolve as "last response wins" unless
  `discard_stale_selections` is set, in which case only the most recently
  requested selection may land.

Side effects (printing, prompts) stay out of here; presentation layers
subscribe with `add_listener` and render from the event snapshot.
"""

from __future__ import annotations

import logging
from typing import Callable

from core.config import AppSettings
from core.domain.errors import CreateFailed, DuplicateEntityId, FetchFailed, ValidationFailed
from core.domain.events import ControllerEvent, EventKind, EventListener
from core.domain.models import Entity, EntityDraft, EntityId
from core.interfaces.collection import CollectionClient
from core.services.entity_store import EntityStore

logger = logging.getLogger(__name__)

ConfirmCallback = Callable[[Entity], bool]


class VoteController:
    """Keeps the store, the current selection and user mutations consistent."""

    def __init__(
        self,
        client: CollectionClient,
        store: EntityStore | None = None,
        *,
        discard_stale_selections: bool = False,
    ) -> None:
        self._client = client
        self._store = store if store is not None else EntityStore()
        self._current: Entity | None = None
        self._discard_stale = discard_stale_selections
        self._selection_ticket = 0
        self._listeners: list[EventListener] = []

    @classmethod
    def from_settings(cls, client: CollectionClient, settings: AppSettings) -> "VoteController":
        return cls(client, discard_stale_selections=settings.discard_stale_selections)

    @property
    def store(self) -> EntityStore:
        return self._store

    @property
    def current(self) -> Entity | None:
        return self._current

    def add_listener(self, listener: EventListener) -> None:
        self._listeners.append(listener)

    def remove_listener(self, listener: EventListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(
        self,
        kind: EventKind,
        *,
        entity: Entity | None = None,
        **kwargs: object,
    ) -> ControllerEvent:
        """Build an event carrying copies of the store contents and selection.

        Copies keep a stored event frozen at the moment it was emitted.
        """

        return ControllerEvent(
            kind=kind,
            entities=tuple(e.model_copy() for e in self._store.entities),
            current=self._current.model_copy() if self._current is not None else None,
            entity=entity.model_copy() if entity is not None else None,
            **kwargs,  # type: ignore[arg-type]
        )

    async def load_all(self) -> bool:
        """Fetch the whole collection into the store."""

        try:
            entities = await self._client.list_all()
            self._store.replace_all(entities)
        except (FetchFailed, DuplicateEntityId) as exc:
            logger.warning("Could not load animals: %s", exc)
            self._emit(EventKind.LIST_LOAD_FAILED, error=str(exc))
            return False

        logger.debug("Loaded %d animals", len(self._store))
        self._emit(EventKind.LIST_LOADED)
        return True

    async def select(self, entity_id: EntityId) -> Entity | None:
        """Fetch one animal and make it current.

        On failure the previous selection is left untouched.
        """

        self._selection_ticket += 1
        ticket = self._selection_ticket

        try:
            entity = await self._client.get_one(entity_id)
        except FetchFailed as exc:
            if self._is_stale(ticket):
                logger.debug("Ignoring failure of superseded selection %s", entity_id)
                return None
            logger.warning("Could not load animal %s: %s", entity_id, exc)
            self._emit(EventKind.DETAIL_LOAD_FAILED, error=str(exc), details={"id": entity_id})
            return None

        if self._is_stale(ticket):
            logger.debug("Dropping stale detail for animal %s", entity_id)
            return None

        self._current = entity
        self._emit(EventKind.DETAIL_LOADED, entity=entity)
        return entity

    def add_vote(self) -> int | None:
        """Add one vote to the current animal; no-op when nothing is selected."""

        current = self._current
        if current is None:
            return None

        current.votes += 1
        self._store.set_votes(current.id, current.votes)
        self._emit(EventKind.VOTE_ADDED, entity=current)
        return current.votes

    def reset_votes(self, confirm: ConfirmCallback) -> bool:
        """Zero the current animal's votes once `confirm` agrees.

        A refusal changes nothing at all.
        """

        current = self._current
        if current is None:
            return False

        if not confirm(current):
            logger.debug("Reset of %s declined", current.name)
            return False

        current.votes = 0
        self._store.set_votes(current.id, 0)
        self._emit(EventKind.VOTES_RESET, entity=current)
        return True

    async def create_entity(self, name: str | None, image: str | None) -> Entity | None:
        """Validate, submit and then re-fetch the whole list.

        The selection is not touched by a successful create.
        """

        try:
            draft = EntityDraft.from_input(name=name, image=image)
        except ValidationFailed as exc:
            self._emit(
                EventKind.VALIDATION_FAILED,
                error=str(exc),
                details={"fields": exc.fields},
            )
            return None

        try:
            created = await self._client.create(draft)
        except CreateFailed as exc:
            logger.warning("Could not add %s: %s", draft.name, exc)
            self._emit(EventKind.CREATE_FAILED, error=str(exc))
            return None

        logger.info("Created animal %s (id=%s)", created.name, created.id)
        await self.load_all()
        self._emit(EventKind.ENTITY_CREATED, entity=created)
        return created

    def _is_stale(self, ticket: int) -> bool:
        return self._discard_stale and ticket != self._selection_ticket

    def _emit(self, kind: EventKind, **kwargs: object) -> None:
        event = self.snapshot(kind, **kwargs)
        for listener in list(self._listeners):
            try:
                listener(event)
            except Exception:
                logger.exception("Listener %r failed on %s", listener, kind.value)
