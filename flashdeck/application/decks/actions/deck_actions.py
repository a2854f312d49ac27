"""Mutation handlers for decks."""

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
from flashdeck.application.decks.actions.inputs import (
    CreateDeckInput,
    DeleteDeckInput,
    UpdateDeckInput,
)
from flashdeck.application.decks.protocols import (
    DeckRepositoryProtocol,
    PathRevalidatorProtocol,
)
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import DeckId
from flashdeck.domain.decks.entities.deck import Deck

logger = structlog.get_logger(__name__)

DECK_NOT_FOUND_MESSAGE = "Deck not found or access denied"


def _deck_not_found() -> ActionFailure:
    return ActionFailure(error=DECK_NOT_FOUND_MESSAGE, reason=FailureReason.NOT_FOUND)


def _storage_failure(verb: str) -> ActionFailure:
    return ActionFailure(error=f"Failed to {verb} deck", reason=FailureReason.STORAGE)


class DeckActions:
    """Validated entry points for creating, updating and deleting decks."""

    def __init__(
        self,
        deck_repository: DeckRepositoryProtocol,
        path_revalidator: PathRevalidatorProtocol,
    ) -> None:
        """Initialize handlers with the deck repository and view revalidator."""
        self.deck_repository = deck_repository
        self.path_revalidator = path_revalidator

    def create_deck(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[Deck]:
        """
        Create a deck owned by the caller.

        Args:
            user_id: Authenticated user id, None if the request is anonymous
            payload: Raw ``{name, description?}`` input

        Returns:
            ActionSuccess with the new deck, or ActionFailure
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(CreateDeckInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            deck = self.deck_repository.create(caller, data.name, data.description)
        except ValidationError as e:
            return domain_validation_failure(e)
        except Exception:
            logger.exception("deck_action_failed", action="create_deck", user_id=caller.value)
            return _storage_failure("create")

        self.path_revalidator.revalidate(DASHBOARD_PATH, *deck_paths(deck.id.value))
        logger.info("created_deck", deck_id=deck.id.value, user_id=caller.value)
        return ActionSuccess(deck, message="Deck created successfully")

    def update_deck(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[Deck]:
        """
        Update a deck's name and/or description.

        Args:
            user_id: Authenticated user id, None if the request is anonymous
            payload: Raw ``{id, name?, description?}`` input; one of name or
                description is required

        Returns:
            ActionSuccess with the updated deck, or ActionFailure
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(UpdateDeckInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            deck = self.deck_repository.update(
                DeckId(data.id), caller, name=data.name, description=data.description
            )
        except ValidationError as e:
            return domain_validation_failure(e)
        except Exception:
            logger.exception(
                "deck_action_failed", action="update_deck", deck_id=data.id, user_id=caller.value
            )
            return _storage_failure("update")

        if deck is None:
            return _deck_not_found()

        self.path_revalidator.revalidate(DASHBOARD_PATH, *deck_paths(data.id))
        logger.info("updated_deck", deck_id=data.id)
        return ActionSuccess(deck, message="Deck updated successfully")

    def delete_deck(self, user_id: str | None, payload: Mapping[str, Any]) -> ActionResult[None]:
        """
        Delete a deck together with its cards.

        Args:
            user_id: Authenticated user id, None if the request is anonymous
            payload: Raw ``{id}`` input

        Returns:
            ActionSuccess without data, or ActionFailure
        """
        caller = resolve_caller(user_id)
        if caller is None:
            return unauthenticated()

        data = parse_input(DeleteDeckInput, payload)
        if isinstance(data, ActionFailure):
            return data

        try:
            deleted = self.deck_repository.delete(DeckId(data.id), caller)
        except Exception:
            logger.exception(
                "deck_action_failed", action="delete_deck", deck_id=data.id, user_id=caller.value
            )
            return _storage_failure("delete")

        if not deleted:
            return _deck_not_found()

        self.path_revalidator.revalidate(DASHBOARD_PATH, *deck_paths(data.id))
        logger.info("deleted_deck", deck_id=data.id)
        return ActionSuccess(None, message="Deck deleted successfully")
