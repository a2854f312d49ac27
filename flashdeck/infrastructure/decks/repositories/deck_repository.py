"""Repository for Deck domain entities."""

import logging
from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from flashdeck.config import utcnow
from flashdeck.domain.common.value_objects import DeckId, UserId
from flashdeck.domain.decks.entities.deck import (
    Deck,
    validate_deck_description,
    validate_deck_name,
)
from flashdeck.infrastructure.decks.mappers.deck_mapper import DeckMapper
from flashdeck.models import Card as CardORM
from flashdeck.models import Deck as DeckORM

logger = logging.getLogger(__name__)


class DeckRepository:
    """Repository for Deck domain entities.

    Every query carries an ``owner_id`` predicate, so a deck owned by someone
    else behaves exactly like a missing one.
    """

    def __init__(self, db: Session) -> None:
        self.db = db
        self.mapper = DeckMapper()

    def list_for_user(self, user_id: UserId) -> list[Deck]:
        """
        Get all decks owned by a user.

        Args:
            user_id: The caller's user ID

        Returns:
            List of deck entities, most recently updated first
        """
        stmt = (
            select(DeckORM)
            .where(DeckORM.owner_id == user_id.value)
            .order_by(DeckORM.updated_at.desc(), DeckORM.id.desc())
        )
        orm_models = self.db.execute(stmt).scalars().all()
        return [self.mapper.to_domain(orm) for orm in orm_models]

    def find_by_id(self, deck_id: DeckId, user_id: UserId) -> Deck | None:
        """
        Find a deck by ID with user ownership check.

        Args:
            deck_id: The deck ID
            user_id: The user ID for ownership verification

        Returns:
            Deck entity if found and owned by user, None otherwise
        """
        if not deck_id.is_storable:
            return None
        stmt = select(DeckORM).where(
            DeckORM.id == deck_id.value,
            DeckORM.owner_id == user_id.value,
        )
        orm_model = self.db.execute(stmt).scalar_one_or_none()
        return self.mapper.to_domain(orm_model) if orm_model else None

    def create(self, user_id: UserId, name: str, description: str | None = None) -> Deck:
        """
        Create a deck owned by the caller.

        Raises:
            ValidationError: If name or description break deck invariants
        """
        deck = Deck.create(owner_id=user_id, name=name, description=description)
        orm_model = self.mapper.to_orm(deck)
        try:
            self.db.add(orm_model)
            self.db.commit()
            self.db.refresh(orm_model)
        except SQLAlchemyError:
            self.db.rollback()
            raise

        logger.debug(f"Created deck {orm_model.id} for user {user_id.value}")
        return self.mapper.to_domain(orm_model)

    def update(
        self,
        deck_id: DeckId,
        user_id: UserId,
        name: str | None = None,
        description: str | None = None,
    ) -> Deck | None:
        """
        Update a deck's name and/or description.

        Ownership check and write happen in one ``UPDATE ... WHERE id AND
        owner_id`` statement. A blank description clears it.

        Returns:
            Updated deck, or None if not found or not owned by user

        Raises:
            ValidationError: If the new values break deck invariants
        """
        if not deck_id.is_storable:
            return None
        values: dict[str, Any] = {"updated_at": utcnow()}
        if name is not None:
            values["name"] = validate_deck_name(name)
        if description is not None:
            values["description"] = validate_deck_description(description)

        stmt = (
            update(DeckORM)
            .where(DeckORM.id == deck_id.value, DeckORM.owner_id == user_id.value)
            .values(**values)
            .returning(DeckORM)
            .execution_options(synchronize_session="fetch")
        )
        try:
            orm_model = self.db.execute(stmt).scalar_one_or_none()
            deck = self.mapper.to_domain(orm_model) if orm_model else None
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise
        return deck

    def delete(self, deck_id: DeckId, user_id: UserId) -> bool:
        """
        Delete a deck and all of its cards in one transaction.

        Args:
            deck_id: The deck ID
            user_id: The user ID for ownership verification

        Returns:
            True if deleted, False if not found or not owned by user
        """
        if not deck_id.is_storable:
            return False
        owned_deck = select(DeckORM.id).where(
            DeckORM.id == deck_id.value,
            DeckORM.owner_id == user_id.value,
        )
        try:
            self.db.execute(
                delete(CardORM)
                .where(CardORM.deck_id.in_(owned_deck))
                .execution_options(synchronize_session="fetch")
            )
            deleted_id = self.db.execute(
                delete(DeckORM)
                .where(DeckORM.id == deck_id.value, DeckORM.owner_id == user_id.value)
                .returning(DeckORM.id)
                .execution_options(synchronize_session="fetch")
            ).scalar_one_or_none()
            self.db.commit()
        except SQLAlchemyError:
            self.db.rollback()
            raise

        if deleted_id is None:
            return False
        logger.debug(f"Deleted deck {deleted_id} for user {user_id.value}")
        return True
