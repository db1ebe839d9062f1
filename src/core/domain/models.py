"""Domain models (Pydantic v2).

Why Pydantic in the domain:
- Strict validation right at the edge where server payloads come in.
- Self-documenting fields (Field) without coupling the core to HTTP.

Note:
- These models describe *what* an animal is, not *how* it is fetched.
"""

from __future__ import annotations

from pydantic import BaseModel, Field, ValidationError
from pydantic.config import ConfigDict

from core.domain.errors import ValidationFailed


EntityId = int | str


def same_id(left: EntityId, right: EntityId) -> bool:
    """Compare identifiers by their string form (json-server emits int or str)."""

    return str(left) == str(right)


class Entity(BaseModel):
    """One votable animal as held by the remote collection.

    The model is mutable on purpose: `votes` is bumped in place by the
    controller, both on the selected copy and on the store copy.
    """

    model_config = ConfigDict(extra="ignore")

    id: EntityId = Field(
        ...,
        description="Server-assigned identifier, never generated client-side.",
    )
    name: str = Field(
        ...,
        min_length=1,
        description="Display label.",
    )
    image: str = Field(
        default="",
        description="URI of the picture; may fail to resolve at render time.",
    )
    votes: int = Field(
        default=0,
        ge=0,
        description="In-memory vote counter, never written back to the server.",
    )


class EntityDraft(BaseModel):
    """Name and image submitted to create a new animal.

    `votes` always goes out as 0; the server assigns the id.
    """

    model_config = ConfigDict(str_strip_whitespace=True, frozen=True)

    name: str = Field(..., min_length=1, description="Animal name (trimmed).")
    image: str = Field(..., min_length=1, description="Image URL (trimmed).")
    votes: int = Field(default=0, ge=0, le=0)

    @classmethod
    def from_input(cls, *, name: str | None, image: str | None) -> "EntityDraft":
        """Build a draft from raw form input, raising `ValidationFailed` on blanks."""

        try:
            return cls(name=name or "", image=image or "")
        except ValidationError as exc:
            fields = sorted({str(err["loc"][0]) for err in exc.errors() if err.get("loc")})
            raise ValidationFailed(
                "Please fill in both animal name and image URL",
                fields=fields,
            ) from exc
