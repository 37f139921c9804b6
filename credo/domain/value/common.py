"""Base classes for value objects."""

from typing import Generic, TypeVar

from pydantic import BaseModel, ConfigDict, RootModel


class ValueObject(BaseModel):
    """Immutable, compared by value."""

    model_config = ConfigDict(frozen=True)


T = TypeVar("T")


class RootValueObject(RootModel[T], Generic[T]):
    """Value object wrapping one primitive (``Email``).

    The primitive is ``.root``; ``model_dump()`` returns it unwrapped, which
    is what the persistence mappers store.
    """

    model_config = ConfigDict(frozen=True)

    def __str__(self) -> str:
        return str(self.root)
