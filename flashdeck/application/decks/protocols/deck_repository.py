"""Protocol for Deck repository."""

from typing import Protocol

from flashdeck.domain.common.value_objects import DeckId, UserId
from flashdeck.domain.decks.entities.deck import Deck


class DeckRepositoryProtocol(Protocol):
    """Ownership-scoped deck storage.

    Every method takes the caller's id. A deck that doesn't exist and a deck
    owned by someone else produce the same result.
    """

    def list_for_user(self, user_id: UserId) -> list[Deck]:
        """
        Get all decks owned by the user.

        Returns:
            Decks ordered by updated_at DESC
        """
        ...

    def find_by_id(self, deck_id: DeckId, user_id: UserId) -> Deck | None:
        """
        Find a deck by ID with user ownership check.

        Returns:
            Deck entity if found and owned by user, None otherwise
        """
        ...

    def create(self, user_id: UserId, name: str, description: str | None = None) -> Deck:
        """Create a deck owned by the caller."""
        ...

    def update(
        self,
        deck_id: DeckId,
        user_id: UserId,
        name: str | None = None,
        description: str | None = None,
    ) -> Deck | None:
        """
        Update name and/or description in one ownership-guarded write.

        Returns:
            Updated deck, or None if not found or not owned by user
        """
        ...

    def delete(self, deck_id: DeckId, user_id: UserId) -> bool:
        """
        Delete a deck and all of its cards.

        Returns:
            True if deleted, False if not found or not owned by user
        """
        ...
