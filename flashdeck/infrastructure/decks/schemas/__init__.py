"""Deck context schemas."""

from flashdeck.infrastructure.decks.schemas.deck_schemas import (
    Card,
    CardsListResponse,
    Deck,
    DeckDetailResponse,
    DecksListResponse,
    card_schema,
    deck_schema,
)

__all__ = [
    "Card",
    "CardsListResponse",
    "Deck",
    "DeckDetailResponse",
    "DecksListResponse",
    "card_schema",
    "deck_schema",
]
