"""Protocol for Card repository."""

from typing import Protocol

from flashdeck.domain.common.value_objects import CardId, DeckId, UserId
from flashdeck.domain.decks.entities.card import Card


class CardRepositoryProtocol(Protocol):
    """Card storage scoped through the parent deck's owner."""

    def list_for_deck(self, deck_id: DeckId, user_id: UserId) -> list[Card]:
        """
        Get all cards of a deck.

        Returns:
            Cards ordered by created_at ASC, empty if the deck is not the caller's
        """
        ...

    def find_by_id(self, card_id: CardId, user_id: UserId) -> Card | None:
        """Find a card whose deck is owned by the caller."""
        ...

    def create(self, deck_id: DeckId, user_id: UserId, front: str, back: str) -> Card | None:
        """
        Add a card to the caller's deck.

        Returns:
            Created card, or None if the deck is not found or not owned by user
        """
        ...

    def update(
        self,
        card_id: CardId,
        user_id: UserId,
        front: str | None = None,
        back: str | None = None,
    ) -> Card | None:
        """Update front and/or back in one ownership-guarded write."""
        ...

    def delete(self, card_id: CardId, user_id: UserId) -> Card | None:
        """
        Delete a card.

        Returns:
            The removed card, or None if not found or not owned by user
        """
        ...
