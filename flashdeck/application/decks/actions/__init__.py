from .card_actions import CardActions
from .deck_actions import DeckActions

__all__ = ["CardActions", "DeckActions"]
