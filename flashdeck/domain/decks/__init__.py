"""
Decks bounded context - Domain layer.

Aggregates:
- Deck: a named, user-owned collection of flashcards
- Card: a front/back text pair; access is inherited from its deck
"""

from .entities import Card, Deck

__all__ = ["Card", "Deck"]
