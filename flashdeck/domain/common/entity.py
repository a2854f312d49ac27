"""
Base classes for Entities and their identifiers.

Entities are objects that have a distinct identity that runs through time
and different states. Concrete entities are dataclasses, so equality and
repr come from their fields.
"""

from abc import ABC
from dataclasses import dataclass
from typing import Generic, Self, TypeVar


@dataclass(frozen=True)
class EntityId:
    """
    Base class for strongly-typed entity identifiers.

    Database-generated ids wrap an int; identities issued outside this
    system (users) wrap an opaque string.
    """

    value: int | str

    def __str__(self) -> str:
        return str(self.value)

    @classmethod
    def generate(cls) -> Self:
        """Set placeholder id. Usually these are set by the database"""
        return cls(0)


IdType = TypeVar("IdType", bound=EntityId)


class Entity(ABC, Generic[IdType]):
    """
    Base class for Entities in the domain model.

    Subclasses must have an 'id' attribute of type IdType.
    """

    id: IdType
