"""Mutation handlers for cards."""

from collections.abc import Mapping
from typing import Any

import structlog

from flashdeck.application.common.result import (
    ActionFailure,
    ActionResult,
    ActionSuccess,
    FailureReason,
)
from flashdeck.application.decks.actions.base import (
    DASHBOARD_PATH,
    deck_paths,
    domain_validation_failure,
    parse_input,
    resolve_caller,
    unauthenticated,
)
from flashdeck.application.decks.actions.deck_actions import DECK_NOT_FOUND_MESSAGE
from flashdeck.application.decks.actions.inputs import (
    CreateCardInput,
    DeleteCardInput,
    UpdateCardInput,
)
from flashdeck.application.decks.protocols import (
    CardRepositoryProtocol,
    PathRevalidatorProtocol,
)
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import CardId, DeckId
from flashdeck.domain.decks.entities.card import Card

logger = structlog.get_logger(__name__)

CARD_NOT_FOUND_MESSAGE = "Card not found or access denied"


def _not_found(message: str) -> ActionFailure:
    return ActionFailure(error=message, reason=FailureReason.NOT_FOUND)


def _storage_failure(verb: str) -> ActionFailure:
    return ActionFailure(error=f"Failed to {verb} card", reason=FailureReason.STORAGE)


class CardActions:
    """Validated entry points for creating, updating and deleting cards."""

    def __init__(
        self,
        card_repository: CardRepositoryProtocol,
        path_revalidator: PathRevalidatorProtocol,
    ) -> None:
        """Initialize handlers with the card repository and view revalidator."""
        self.card_repository = card_repository
        self.path_revalidator = path_revalidator

    def _revalidate_deck(self, deck_id: DeckId) -> None:
        self.path_revalidator.revalidate(DASHBOARD_PATH, *deck_paths(deck_id.value))

    def create_card(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[Card]:
        """
        Add a card to one of the caller's decks.

        Args:
            user_id: Authenticated user id, None if the request is anonymous
            payload: Raw ``{deck_id, front, back}`` input

        Returns:
            ActionSuccess with the new card, or ActionFailure (not found when
            the deck is missing or belongs to someone else)
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(CreateCardInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            card = self.card_repository.create(DeckId(data.deck_id), caller, data.front, data.back)
        except ValidationError as e:
            return domain_validation_failure(e)
        except Exception:
            logger.exception(
                "card_action_failed",
                action="create_card",
                deck_id=data.deck_id,
                user_id=caller.value,
            )
            return _storage_failure("create")

        if card is None:
            return _not_found(DECK_NOT_FOUND_MESSAGE)

        self._revalidate_deck(card.deck_id)
        logger.info("created_card", card_id=card.id.value, deck_id=data.deck_id)
        return ActionSuccess(card, message="Card created successfully")

    def update_card(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[Card]:
        """
        Update a card's front and/or back.

        Args:
            user_id: Authenticated user id, None if the request is anonymous
            payload: Raw ``{id, front?, back?}`` input; one side is required

        Returns:
            ActionSuccess with the updated card, or ActionFailure
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(UpdateCardInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            card = self.card_repository.update(
                CardId(data.id), caller, front=data.front, back=data.back
            )
        except ValidationError as e:
            return domain_validation_failure(e)
        except Exception:
            logger.exception(
                "card_action_failed", action="update_card", card_id=data.id, user_id=caller.value
            )
            return _storage_failure("update")

        if card is None:
            return _not_found(CARD_NOT_FOUND_MESSAGE)

        self._revalidate_deck(card.deck_id)
        logger.info("updated_card", card_id=data.id)
        return ActionSuccess(card, message="Card updated successfully")

    def delete_card(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[Card]:
        """
        Delete a card.

        Returns:
            ActionSuccess carrying the removed card, or ActionFailure
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(DeleteCardInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            card = self.card_repository.delete(CardId(data.id), caller)
        except Exception:
            logger.exception(
                "card_action_failed", action="delete_card", card_id=data.id, user_id=caller.value
            )
            return _storage_failure("delete")

        if card is None:
            return _not_found(CARD_NOT_FOUND_MESSAGE)

        self._revalidate_deck(card.deck_id)
        logger.info("deleted_card", card_id=data.id, deck_id=card.deck_id.value)
        return ActionSuccess(card, message="Card deleted successfully")
