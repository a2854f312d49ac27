"""Read-side use case behind the pages and the JSON read API."""

from dataclasses import dataclass

from flashdeck.application.decks.protocols import CardRepositoryProtocol, DeckRepositoryProtocol
from flashdeck.domain.common.value_objects import MAX_ID, CardId, DeckId, UserId
from flashdeck.domain.decks.entities.card import Card
from flashdeck.domain.decks.entities.deck import Deck
from flashdeck.exceptions import CardNotFoundError, DeckNotFoundError


@dataclass
class DeckWithCards:
    """A deck together with its cards in creation order."""

    deck: Deck
    cards: list[Card]


class DeckQueryUseCase:
    """Ownership-scoped reads for decks and cards."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        card_repository: CardRepositoryProtocol,
    ) -> None:
        """Initialize use case with repository protocols."""
        self.deck_repository = deck_repository
        self.card_repository = card_repository

    def list_decks(self, user_id: str) -> list[Deck]:
        """Get the caller's decks, most recently updated first."""
        return self.deck_repository.list_for_user(UserId(user_id))

    def get_deck(self, user_id: str, deck_id: int) -> Deck:
        """
        Get one of the caller's decks.

        Raises:
            DeckNotFoundError: If the deck is missing or owned by someone else
        """
        if not 0 < deck_id <= MAX_ID:
            raise DeckNotFoundError(deck_id)
        deck = self.deck_repository.find_by_id(DeckId(deck_id), UserId(user_id))
        if deck is None:
            raise DeckNotFoundError(deck_id)
        return deck

    def get_deck_with_cards(self, user_id: str, deck_id: int) -> DeckWithCards:
        """
        Get a deck and its cards.

        Raises:
            DeckNotFoundError: If the deck is missing or owned by someone else
        """
        deck = self.get_deck(user_id, deck_id)
        cards = self.card_repository.list_for_deck(deck.id, UserId(user_id))
        return DeckWithCards(deck=deck, cards=cards)

    def get_card(self, user_id: str, card_id: int) -> Card:
        """
        Get a card from one of the caller's decks.

        Raises:
            CardNotFoundError: If the card is missing or in someone else's deck
        """
        if not 0 < card_id <= MAX_ID:
            raise CardNotFoundError(card_id)
        card = self.card_repository.find_by_id(CardId(card_id), UserId(user_id))
        if card is None:
            raise CardNotFoundError(card_id)
        return card
