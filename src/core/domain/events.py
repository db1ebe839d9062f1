"""Outcome events emitted by the controller for the presentation layer."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from core.domain.models import Entity


class EventKind(str, Enum):
    """Discrete outcomes a presentation layer can react to."""

    LIST_LOADED = "listLoaded"
    LIST_LOAD_FAILED = "listLoadFailed"
    DETAIL_LOADED = "detailLoaded"
    DETAIL_LOAD_FAILED = "detailLoadFailed"
    VOTE_ADDED = "voteAdded"
    VOTES_RESET = "votesReset"
    ENTITY_CREATED = "entityCreated"
    CREATE_FAILED = "createFailed"
    VALIDATION_FAILED = "validationFailed"

    @property
    def is_failure(self) -> bool:
        return self in _FAILURES


_FAILURES = frozenset(
    {
        EventKind.LIST_LOAD_FAILED,
        EventKind.DETAIL_LOAD_FAILED,
        EventKind.CREATE_FAILED,
        EventKind.VALIDATION_FAILED,
    }
)


@dataclass(frozen=True)
class ControllerEvent:
    """What happened, plus the state to render afterwards.

    `entities` and `current` are taken right after the state change, so a
    listener can re-render without reaching back into the controller.
    """

    kind: EventKind
    entities: tuple[Entity, ...] = ()
    current: Entity | None = None
    entity: Entity | None = None
    error: str | None = None
    details: dict[str, object] = field(default_factory=dict)


EventListener = Callable[[ControllerEvent], None]
