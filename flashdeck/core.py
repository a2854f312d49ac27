from dependency_injector import containers, providers
from sqlalchemy.orm import Session

from flashdeck.application.decks.actions import CardActions, DeckActions
from flashdeck.application.decks.queries import DeckQueryUseCase
from flashdeck.infrastructure.common.revalidation import RequestPathRevalidator
from flashdeck.infrastructure.decks.repositories import CardRepository, DeckRepository


class Container(containers.DeclarativeContainer):
    """Dependency injection container."""

    # Declare db as a dependency that will be provided at runtime
    db = providers.Dependency(instance_of=Session)

    # Collects stale paths for the lifetime of the container
    path_revalidator = providers.Singleton(RequestPathRevalidator)

    # Repositories
    deck_repository = providers.Factory(DeckRepository, db=db)
    card_repository = providers.Factory(CardRepository, db=db)

    # Mutation handlers
    deck_actions = providers.Factory(
        DeckActions,
        deck_repository=deck_repository,
        path_revalidator=path_revalidator,
    )
    card_actions = providers.Factory(
        CardActions,
        card_repository=card_repository,
        path_revalidator=path_revalidator,
    )

    # Queries
    deck_query_use_case = providers.Factory(
        DeckQueryUseCase,
        deck_repository=deck_repository,
        card_repository=card_repository,
    )
