from flashdeck.infrastructure.decks.mappers.card_mapper import CardMapper
from flashdeck.infrastructure.decks.mappers.deck_mapper import DeckMapper

__all__ = ["CardMapper", "DeckMapper"]
