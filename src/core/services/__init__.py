"""Stateful services: the entity store and the vote controller."""

from core.services.controller import VoteController
from core.services.entity_store import EntityStore

__all__ = [
	"EntityStore",
	"VoteController",
]
