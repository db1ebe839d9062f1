"""Error types shared by adapters and services.

Every error here is terminal for the operation that raised it and never for
the process.
"""

from __future__ import annotations


class AnimalVotesError(Exception):
    """Base class for all expected failures."""


class FetchFailed(AnimalVotesError):
    """A list or detail read did not produce usable data."""


class CreateFailed(AnimalVotesError):
    """Submitting a new animal failed."""


class ValidationFailed(AnimalVotesError):
    """A draft was rejected before any network call."""

    def __init__(self, message: str, *, fields: list[str] | None = None) -> None:
        super().__init__(message)
        self.fields = fields or []


class DuplicateEntityId(AnimalVotesError, ValueError):
    """A fetched list contained the same id twice."""

    def __init__(self, entity_id: object) -> None:
        super().__init__(f"duplicate entity id: {entity_id!r}")
        self.entity_id = entity_id
