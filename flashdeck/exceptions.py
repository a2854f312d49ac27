"""Custom exception hierarchy for the Flashdeck application."""

from fastapi import HTTPException
from starlette import status


class FlashdeckError(Exception):
    """Base exception for all Flashdeck errors."""

    def __init__(self, message: str, status_code: int = 500) -> None:
        """Initialize exception with message and optional status code."""
        self.message = message
        self.status_code = status_code
        super().__init__(self.message)


class NotFoundError(FlashdeckError):
    """Resource not found error."""

    def __init__(self, message: str) -> None:
        """Initialize with message and 404 status code."""
        super().__init__(message, status_code=404)


class DeckNotFoundError(NotFoundError):
    """Deck absent or owned by someone else.

    The message is identical in both cases so callers can't probe for
    other users' decks.
    """

    def __init__(self, deck_id: int | None = None) -> None:
        """Initialize with the requested deck ID."""
        self.deck_id = deck_id
        super().__init__("Deck not found or access denied")


class CardNotFoundError(NotFoundError):
    """Card absent or in a deck owned by someone else."""

    def __init__(self, card_id: int | None = None) -> None:
        """Initialize with the requested card ID."""
        self.card_id = card_id
        super().__init__("Card not found or access denied")


CredentialsException = HTTPException(
    status_code=status.HTTP_401_UNAUTHORIZED,
    detail="Could not validate credentials",
    headers={"WWW-Authenticate": "Bearer"},
)
