"""JSON endpoints for the deck and card mutation handlers.

The request body is handed to the handler untouched; validation, ownership
and error mapping all happen there.
"""

from typing import Annotated, Any

from fastapi import APIRouter, Body, status
from fastapi.responses import JSONResponse

from flashdeck.infrastructure.common.di import RequestContainer
from flashdeck.infrastructure.common.responses import action_response
from flashdeck.infrastructure.common.schemas import ActionResponse
from flashdeck.infrastructure.decks.schemas import Card, Deck, card_schema, deck_schema
from flashdeck.infrastructure.identity.dependencies import OptionalUserId

router = APIRouter(prefix="/actions", tags=["actions"])

Payload = Annotated[Any, Body()]


@router.post(
    "/decks/create",
    response_model=ActionResponse[Deck],
    status_code=status.HTTP_201_CREATED,
)
def create_deck(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Create a deck owned by the caller."""
    result = container.deck_actions().create_deck(user_id, payload)
    return action_response(
        result,
        container.path_revalidator(),
        serialize=deck_schema,
        success_status=status.HTTP_201_CREATED,
    )


@router.post("/decks/update", response_model=ActionResponse[Deck])
def update_deck(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Update a deck's name and/or description."""
    result = container.deck_actions().update_deck(user_id, payload)
    return action_response(result, container.path_revalidator(), serialize=deck_schema)


@router.post("/decks/delete", response_model=ActionResponse[None])
def delete_deck(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Delete a deck and its cards."""
    result = container.deck_actions().delete_deck(user_id, payload)
    return action_response(result, container.path_revalidator())


@router.post(
    "/cards/create",
    response_model=ActionResponse[Card],
    status_code=status.HTTP_201_CREATED,
)
def create_card(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Add a card to one of the caller's decks."""
    result = container.card_actions().create_card(user_id, payload)
    return action_response(
        result,
        container.path_revalidator(),
        serialize=card_schema,
        success_status=status.HTTP_201_CREATED,
    )


@router.post("/cards/update", response_model=ActionResponse[Card])
def update_card(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Update a card's front and/or back."""
    result = container.card_actions().update_card(user_id, payload)
    return action_response(result, container.path_revalidator(), serialize=card_schema)


@router.post("/cards/delete", response_model=ActionResponse[Card])
def delete_card(
    user_id: OptionalUserId, container: RequestContainer, payload: Payload = None
) -> JSONResponse:
    """Delete a card. The removed card is returned."""
    result = container.card_actions().delete_card(user_id, payload)
    return action_response(result, container.path_revalidator(), serialize=card_schema)
