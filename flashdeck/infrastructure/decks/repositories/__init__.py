from flashdeck.infrastructure.decks.repositories.card_repository import CardRepository
from flashdeck.infrastructure.decks.repositories.deck_repository import DeckRepository

__all__ = ["CardRepository", "DeckRepository"]
