"""Base model for domain entities."""

from pydantic import BaseModel, ConfigDict


class DomainModel(BaseModel):
    """Immutable domain entity.

    Updates go through ``model_copy(update=...)``. Unknown fields are
    rejected, so a misspelt provider slot fails at construction.
    """

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        arbitrary_types_allowed=True,
    )
