"""Mapper for Deck ORM ↔ Domain conversion."""

from flashdeck.domain.common.value_objects import DeckId, UserId
from flashdeck.domain.decks.entities.deck import Deck
from flashdeck.models import Deck as DeckORM


class DeckMapper:
    """Mapper for Deck ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: DeckORM) -> Deck:
        """Convert ORM model to domain entity."""
        return Deck.create_with_id(
            id=DeckId(orm_model.id),
            owner_id=UserId(orm_model.owner_id),
            name=orm_model.name,
            description=orm_model.description,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def to_orm(self, domain_entity: Deck) -> DeckORM:
        """Convert a new domain entity to an ORM model."""
        return DeckORM(
            owner_id=domain_entity.owner_id.value,
            name=domain_entity.name,
            description=domain_entity.description,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
