from .card_repository import CardRepositoryProtocol
from .deck_repository import DeckRepositoryProtocol
from .path_revalidator import PathRevalidatorProtocol

__all__ = ["CardRepositoryProtocol", "DeckRepositoryProtocol", "PathRevalidatorProtocol"]
