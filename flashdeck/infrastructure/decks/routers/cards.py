"""Read-only API routes for cards."""

import logging

from fastapi import APIRouter, HTTPException, status

from flashdeck.domain.common.exceptions import DomainError
from flashdeck.exceptions import FlashdeckError
from flashdeck.infrastructure.common.di import RequestContainer
from flashdeck.infrastructure.decks.schemas import Card, card_schema
from flashdeck.infrastructure.identity.dependencies import CurrentUserId

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/cards", tags=["cards"])


@router.get("/{card_id}", response_model=Card, status_code=status.HTTP_200_OK)
def get_card(card_id: int, user_id: CurrentUserId, container: RequestContainer) -> Card:
    """
    Get a card from one of the caller's decks.

    Raises:
        CardNotFoundError: 404 if the card is missing or in someone else's deck
    """
    try:
        return card_schema(container.deck_query_use_case().get_card(user_id, card_id))
    except (FlashdeckError, DomainError):
        raise
    except Exception as e:
        logger.error(f"Failed to fetch card {card_id}: {e!s}", exc_info=True)
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="An unexpected error occurred. Please try again later.",
        ) from e
