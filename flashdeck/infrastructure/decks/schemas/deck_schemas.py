"""Pydantic schemas for Deck and Card API responses."""

from datetime import datetime

from pydantic import BaseModel, Field

from flashdeck.domain.decks.entities.card import Card as CardEntity
from flashdeck.domain.decks.entities.deck import Deck as DeckEntity


class Deck(BaseModel):
    """Schema for Deck response."""

    id: int
    name: str
    description: str | None
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class Card(BaseModel):
    """Schema for Card response."""

    id: int
    deck_id: int
    front: str
    back: str
    created_at: datetime
    updated_at: datetime

    model_config = {"from_attributes": True}


class DecksListResponse(BaseModel):
    """Schema for list of decks response."""

    decks: list[Deck] = Field(..., description="Decks, most recently updated first")


class CardsListResponse(BaseModel):
    """Schema for list of cards response."""

    cards: list[Card] = Field(..., description="Cards in creation order")


class DeckDetailResponse(Deck):
    """Schema for a deck with its cards."""

    cards: list[Card] = Field(default_factory=list, description="Cards in creation order")


def deck_schema(entity: DeckEntity) -> Deck:
    """Build the response schema from a domain entity."""
    return Deck(
        id=entity.id.value,
        name=entity.name,
        description=entity.description,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )


def card_schema(entity: CardEntity) -> Card:
    """Build the response schema from a domain entity."""
    return Card(
        id=entity.id.value,
        deck_id=entity.deck_id.value,
        front=entity.front,
        back=entity.back,
        created_at=entity.created_at,
        updated_at=entity.updated_at,
    )
