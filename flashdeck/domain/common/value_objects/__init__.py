"""Common value objects shared across all domain modules."""

from .ids import MAX_ID, CardId, DeckId, UserId

__all__ = [
    "MAX_ID",
    "CardId",
    "DeckId",
    "UserId",
]
