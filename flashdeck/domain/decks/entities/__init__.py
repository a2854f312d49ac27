from .card import Card
from .deck import Deck

__all__ = ["Card", "Deck"]
