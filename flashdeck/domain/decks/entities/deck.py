"""
Deck entity.
"""

from dataclasses import dataclass
from datetime import datetime

from flashdeck.config import utcnow
from flashdeck.domain.common.entity import Entity
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import DeckId, UserId

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1000


def validate_deck_name(name: str) -> str:
    name = (name or "").strip()
    if not name:
        raise ValidationError("Deck name cannot be empty", field="name")
    if len(name) > NAME_MAX_LENGTH:
        raise ValidationError(
            f"Deck name must be at most {NAME_MAX_LENGTH} characters", field="name"
        )
    return name


def validate_deck_description(description: str | None) -> str | None:
    if description is None:
        return None
    description = description.strip()
    if len(description) > DESCRIPTION_MAX_LENGTH:
        raise ValidationError(
            f"Deck description must be at most {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )
    return description or None


@dataclass
class Deck(Entity[DeckId]):
    """
    A named collection of flashcards.

    Business Rules:
    - Name is required and at most 255 characters
    - Description is optional, at most 1000 characters; blank means none
    - The owner is fixed at creation
    """

    id: DeckId
    owner_id: UserId
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.name = validate_deck_name(self.name)
        self.description = validate_deck_description(self.description)

    @classmethod
    def create(cls, owner_id: UserId, name: str, description: str | None = None) -> "Deck":
        """Create a new deck (ID will be 0 until persisted)."""
        now = utcnow()
        return cls(
            id=DeckId.generate(),
            owner_id=owner_id,
            name=name,
            description=description,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: DeckId,
        owner_id: UserId,
        name: str,
        description: str | None,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Deck":
        """Reconstitute a deck from persistence."""
        return cls(
            id=id,
            owner_id=owner_id,
            name=name,
            description=description,
            created_at=created_at,
            updated_at=updated_at,
        )
