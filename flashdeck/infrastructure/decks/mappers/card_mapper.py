"""Mapper for Card ORM ↔ Domain conversion."""

from typing import Any

from sqlalchemy import Row

from flashdeck.domain.common.value_objects import CardId, DeckId
from flashdeck.domain.decks.entities.card import Card
from flashdeck.models import Card as CardORM


class CardMapper:
    """Mapper for Card ORM ↔ Domain conversion."""

    def to_domain(self, orm_model: CardORM) -> Card:
        """Convert ORM model to domain entity."""
        return Card.create_with_id(
            id=CardId(orm_model.id),
            deck_id=DeckId(orm_model.deck_id),
            front=orm_model.front,
            back=orm_model.back,
            created_at=orm_model.created_at,
            updated_at=orm_model.updated_at,
        )

    def row_to_domain(self, row: Row[Any]) -> Card:
        """Convert a ``RETURNING`` row of card columns to a domain entity."""
        return Card.create_with_id(
            id=CardId(row.id),
            deck_id=DeckId(row.deck_id),
            front=row.front,
            back=row.back,
            created_at=row.created_at,
            updated_at=row.updated_at,
        )

    def to_orm(self, domain_entity: Card) -> CardORM:
        """Convert a new domain entity to an ORM model."""
        return CardORM(
            deck_id=domain_entity.deck_id.value,
            front=domain_entity.front,
            back=domain_entity.back,
            created_at=domain_entity.created_at,
            updated_at=domain_entity.updated_at,
        )
