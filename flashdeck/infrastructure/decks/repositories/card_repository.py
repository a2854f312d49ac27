"""Repository for Card domain entities."""

import logging
from typing import Any

from sqlalchemy import Select, delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashdeck.config import utcnow
from flashdeck.domain.common.value_objects import CardId, DeckId, UserId
from flashdeck.domain.decks.entities.card import Card, validate_card_side
from flashdeck.infrastructure.decks.mappers.card_mapper import CardMapper
from flashdeck.models import Card as CardORM
from flashdeck.models import Deck as DeckORM

logger = logging.getLogger(__name__)


def owned_deck_ids(user_id: UserId) -> Select[tuple[int]]:
    """Subquery selecting the IDs of every deck the user owns."""
    return select(DeckORM.id).where(DeckORM.owner_id == user_id.value)


class CardRepository:
    """Repository for Card domain entities.

    Cards have no owner column of their own; every statement resolves
    ownership through the parent deck.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = CardMapper()

    def list_for_deck(self, deck_id: DeckId, user_id: UserId) -> list[Card]:
        """
        Get all cards of a deck.

        Args:
            deck_id: The deck ID
            user_id: The user ID for ownership verification

        Returns:
            List of card entities ordered by created_at ASC, empty if the deck
            is missing or owned by someone else
        """
        if not deck_id.is_storable:
            return []
        stmt = (
            select(CardORM)
            .join(DeckORM, CardORM.deck_id == DeckORM.id)
            .where(
                CardORM.deck_id == deck_id.value,
                DeckORM.owner_id == user_id.value,
            )
            .order_by(CardORM.created_at.asc(), CardORM.id.asc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, card_id: CardId, user_id: UserId) -> Card | None:
        """
        Find a card by ID through its deck's owner.

        Returns:
            Card entity if found and its deck is owned by user, None otherwise
        """
        if not card_id.is_storable:
            return None
        stmt = (
            select(CardORM)
            .join(DeckORM, CardORM.deck_id == DeckORM.id)
            .where(
                CardORM.id == card_id.value,
                DeckORM.owner_id == user_id.value,
            )
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def create(self, deck_id: DeckId, user_id: UserId, front: str, back: str) -> Card | None:
        """
        Add a card to one of the caller's decks.

        The deck row is locked for the rest of the transaction so the
        ownership check and the insert can't interleave with a deck delete.

        Returns:
            Created card, or None if the deck is missing or owned by someone else

        Raises:
            ValidationError: If front or back break card invariants
        """
        card = Card.create(deck_id=deck_id, front=front, back=back)
        if not deck_id.is_storable:
            return None
        deck_stmt = (
            select(DeckORM.id)
            .where(DeckORM.id == deck_id.value, DeckORM.owner_id == user_id.value)
            .with_for_update()
        )
        try:
            if self.db.execute(deck_stmt).scalar_one_or_none() is None:
                self.db.rollback()
                return None

            orm_model = self.mapper.to_orm(card)
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.debug(f"Created card {orm_model.id} in deck {deck_id.value}")
        return self.mapper.to_domain(orm_model)

    def update(
        self,
        card_id: CardId,
        user_id: UserId,
        front: str | None = None,
        back: str | None = None,
    ) -> Card | None:
        """
        Update a card's front and/or back.

        The ownership predicate (``deck_id IN`` the caller's decks) is part of
        the ``UPDATE`` statement itself.

        Returns:
            Updated card, or None if not found or not owned by user

        Raises:
            ValidationError: If the new values break card invariants
        """
        if not card_id.is_storable:
            return None
        values: dict[str, Any] = {"updated_at": utcnow()}
        if front is not None:
            values["front"] = validate_card_side(front, "front")
        if back is not None:
            values["back"] = validate_card_side(back, "back")

        stmt = (
            update(CardORM)
            .where(CardORM.id == card_id.value, CardORM.deck_id.in_(owned_deck_ids(user_id)))
            .values(**values)
            .returning(CardORM)
            .execution_options(synchronize_session="fetch")
        )
        try:
            orm_model = self.db.execute(stmt).scalar_one_or_none()
            card = self.mapper.to_domain(orm_model) if orm_model else None
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return card

    def delete(self, card_id: CardId, user_id: UserId) -> Card | None:
        """
        Delete a card.

        Returns:
            The removed card, or None if not found or not owned by user
        """
        if not card_id.is_storable:
            return None
        stmt = (
            delete(CardORM)
            .where(CardORM.id == card_id.value, CardORM.deck_id.in_(owned_deck_ids(user_id)))
            .returning(
                CardORM.id,
                CardORM.deck_id,
                CardORM.front,
                CardORM.back,
                CardORM.created_at,
                CardORM.updated_at,
            )
            .execution_options(synchronize_session="fetch")
        )
        try:
            row = self.db.execute(stmt).one_or_none()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        if row is None:
            return None
        logger.debug(f"Deleted card {row.id} from deck {row.deck_id}")
        return self.mapper.row_to_domain(row)
