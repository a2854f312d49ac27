"""Read-only API routes for decks."""

import logging

from fastapi import APIRouter, HTTPException, status

from flashdeck.domain.common.exceptions import DomainError
from flashdeck.exceptions import FlashdeckError
from flashdeck.infrastructure.common.di import RequestContainer
from flashdeck.infrastructure.decks.schemas import (
    CardsListResponse,
    DeckDetailResponse,
    DecksListResponse,
    card_schema,
    deck_schema,
)
from flashdeck.infrastructure.identity.dependencies import CurrentUserId

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/decks", tags=["decks"])


@router.get("", response_model=DecksListResponse, status_code=status.HTTP_200_OK)
def list_decks(user_id: CurrentUserId, container: RequestContainer) -> DecksListResponse:
    """
    Get the caller's decks, most recently updated first.

    Raises:
        HTTPException: 401 without a valid token, 500 if fetching fails
    """
    try:
        decks = container.deck_query_use_case().list_decks(user_id)
        return DecksListResponse(decks=[deck_schema(deck) for deck in decks])
    except (FlashdeckError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to list decks: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{deck_id}", response_model=DeckDetailResponse, status_code=status.HTTP_200_OK)
def get_deck(
    deck_id: int, user_id: CurrentUserId, container: RequestContainer
) -> DeckDetailResponse:
    """
    Get one of the caller's decks together with its cards.

    Raises:
        DeckNotFoundError: 404 if the deck is missing or owned by someone else
    """
    try:
        result = container.deck_query_use_case().get_deck_with_cards(user_id, deck_id)
        return DeckDetailResponse(
            **deck_schema(result.deck).model_dump(),
            cards=[card_schema(card) for card in result.cards],
        )
    except (FlashdeckError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fetch deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e


@router.get("/{deck_id}/cards", response_model=CardsListResponse, status_code=status.HTTP_200_OK)
def list_deck_cards(
    deck_id: int, user_id: CurrentUserId, container: RequestContainer
) -> CardsListResponse:
    """
    Get a deck's cards in creation order.

    Raises:
        DeckNotFoundError: 404 if the deck is missing or owned by someone else
    """
    try:
        result = container.deck_query_use_case().get_deck_with_cards(user_id, deck_id)
        return CardsListResponse(cards=[card_schema(card) for card in result.cards])
    except (FlashdeckError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fetch cards for deck {deck_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
