"""Pydantic schemas for validating raw mutation handler input."""

from typing import Annotated, Self

from pydantic import AliasChoices, BaseModel, Field, StringConstraints, model_validator

from flashdeck.domain.decks.entities.card import TEXT_MAX_LENGTH
from flashdeck.domain.decks.entities.deck import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH

DeckName = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=NAME_MAX_LENGTH)
]
DeckDescription = Annotated[
    str, StringConstraints(strip_whitespace=True, max_length=DESCRIPTION_MAX_LENGTH)
]
CardText = Annotated[
    str, StringConstraints(strip_whitespace=True, min_length=1, max_length=TEXT_MAX_LENGTH)
]
PositiveId = Annotated[int, Field(gt=0)]


class ActionInput(BaseModel):
    """Base schema for handler input.

    Unknown keys (an ``owner_id`` sent by a client, for instance) are dropped;
    ownership always comes from the authenticated caller.
    """

    model_config = {"extra": "ignore"}


class CreateDeckInput(ActionInput):
    """Schema for creating a deck."""

    name: DeckName = Field(..., title="Name")
    description: DeckDescription | None = Field(None, title="Description")


class UpdateDeckInput(ActionInput):
    """Schema for updating a deck; at least one field must change."""

    id: PositiveId = Field(..., title="Deck ID")
    name: DeckName | None = Field(None, title="Name")
    description: DeckDescription | None = Field(None, title="Description")

    @model_validator(mode="after")
    def check_has_changes(self) -> Self:
        if self.name is None and self.description is None:
            raise ValueError("At least one of name or description must be provided")
        return self


class DeleteDeckInput(ActionInput):
    """Schema for deleting a deck."""

    id: PositiveId = Field(..., title="Deck ID")


class CreateCardInput(ActionInput):
    """Schema for adding a card to a deck.

    The deck reference is accepted as ``deck_id`` or ``deckId``.
    """

    deck_id: PositiveId = Field(
        ..., title="Deck ID", validation_alias=AliasChoices("deck_id", "deckId")
    )
    front: CardText = Field(..., title="Front content")
    back: CardText = Field(..., title="Back content")


class UpdateCardInput(ActionInput):
    """Schema for updating a card; at least one side must change."""

    id: PositiveId = Field(..., title="Card ID")
    front: CardText | None = Field(None, title="Front content")
    back: CardText | None = Field(None, title="Back content")

    @model_validator(mode="after")
    def check_has_changes(self) -> Self:
        if self.front is None and self.back is None:
            raise ValueError("At least one of front or back must be provided")
        return self


class DeleteCardInput(ActionInput):
    """Schema for deleting a card."""

    id: PositiveId = Field(..., title="Card ID")
