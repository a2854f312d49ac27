"""
Card entity.
"""

from dataclasses import dataclass
from datetime import datetime

from flashdeck.config import utcnow
from flashdeck.domain.common.entity import Entity
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import CardId, DeckId

TEXT_MAX_LENGTH = 2000


def validate_card_side(value: str, field: str) -> str:
    value = (value or "").strip()
    if not value:
        raise ValidationError(f"Card {field} cannot be empty", field=field)
    if len(value) > TEXT_MAX_LENGTH:
        raise ValidationError(
            f"Card {field} must be at most {TEXT_MAX_LENGTH} characters", field=field
        )
    return value


@dataclass
class Card(Entity[CardId]):
    """
    Flashcard with a front (prompt) and back (answer).

    Business Rules:
    - Front and back cannot be empty, at most 2000 characters each
    - A card has no owner of its own; access follows its deck
    - The deck is fixed at creation
    """

    id: CardId
    deck_id: DeckId
    front: str
    back: str
    created_at: datetime
    updated_at: datetime

    def __post_init__(self) -> None:
        """Validate invariants."""
        self.front = validate_card_side(self.front, "front")
        self.back = validate_card_side(self.back, "back")

    @classmethod
    def create(cls, deck_id: DeckId, front: str, back: str) -> "Card":
        """Create a new card (ID will be 0 until persisted)."""
        now = utcnow()
        return cls(
            id=CardId.generate(),
            deck_id=deck_id,
            front=front,
            back=back,
            created_at=now,
            updated_at=now,
        )

    @classmethod
    def create_with_id(
        cls,
        id: CardId,
        deck_id: DeckId,
        front: str,
        back: str,
        created_at: datetime,
        updated_at: datetime,
    ) -> "Card":
        """Reconstitute a card from persistence."""
        return cls(
            id=id,
            deck_id=deck_id,
            front=front,
            back=back,
            created_at=created_at,
            updated_at=updated_at,
        )
