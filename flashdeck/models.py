"""Database models."""

from datetime import datetime

from sqlalchemy import DateTime, ForeignKey, Index, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from flashdeck.config import utcnow
from flashdeck.database import Base
from flashdeck.domain.decks.entities.deck import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class Deck(Base):
    """A named collection of flashcards owned by one user."""

    __tablename__ = "decks"
    __table_args__ = (Index("ix_decks_owner_id_updated_at", "owner_id", "updated_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    owner_id: Mapped[str] = mapped_column(String(255), nullable=False, index=True)
    name: Mapped[str] = mapped_column(String(NAME_MAX_LENGTH), nullable=False)
    description: Mapped[str | None] = mapped_column(
        String(DESCRIPTION_MAX_LENGTH), nullable=True
    )
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    cards: Mapped[list["Card"]] = relationship(
        back_populates="deck",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="Card.created_at",
    )

    def __repr__(self) -> str:
        """String representation of Deck."""
        return f"<Deck(id={self.id}, name='{self.name}', owner_id='{self.owner_id}')>"


class Card(Base):
    """A front/back text pair belonging to exactly one deck."""

    __tablename__ = "cards"
    __table_args__ = (Index("ix_cards_deck_id_created_at", "deck_id", "created_at"),)

    id: Mapped[int] = mapped_column(primary_key=True, index=True)
    deck_id: Mapped[int] = mapped_column(
        ForeignKey("decks.id", ondelete="CASCADE"), nullable=False, index=True
    )
    front: Mapped[str] = mapped_column(Text, nullable=False)
    back: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)
    updated_at: Mapped[datetime] = mapped_column(DateTime, default=utcnow, nullable=False)

    deck: Mapped[Deck] = relationship(back_populates="cards")

    def __repr__(self) -> str:
        """String representation of Card."""
        return f"<Card(id={self.id}, deck_id={self.deck_id}, front='{self.front[:50]}')>"
