"""
Study session state machine.

A session walks a deck's cards in order. The answer has to be revealed
before moving on; advancing past the last card completes the session.
Sessions are never persisted.

States:
    Active(position, revealed) --flip--> Active(position, not revealed)
    Active(p, True) --advance--> Active(p + 1, False) | Complete
    Active(p, _) --retreat--> Active(p - 1, False)       (p > 0)
    any --restart--> Active(0, False)
"""

from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field
from enum import StrEnum

from flashdeck.domain.common.exceptions import InvalidTransitionError
from flashdeck.domain.common.value_objects import CardId
from flashdeck.domain.decks.entities.card import Card


class EmptyStudySessionError(InvalidTransitionError):
    """Raised when a session is started over an empty card list."""

    def __init__(self) -> None:
        super().__init__("Cannot study a deck with no cards")


class StudyState(StrEnum):
    ACTIVE = "active"
    COMPLETE = "complete"


@dataclass
class StudySession:
    """Sequential traversal over a snapshot of a deck's cards."""

    cards: tuple[Card, ...]
    position: int = 0
    revealed: bool = False
    visited: set[CardId] = field(default_factory=set)
    state: StudyState = StudyState.ACTIVE

    def __post_init__(self) -> None:
        if not self.cards:
            raise EmptyStudySessionError

    @classmethod
    def start(cls, cards: Sequence[Card]) -> "StudySession":
        """Start a session at the first card with the answer hidden.

        Raises:
            EmptyStudySessionError: If there are no cards
        """
        return cls(cards=tuple(cards))

    @classmethod
    def restore(
        cls,
        cards: Sequence[Card],
        position: int,
        revealed: bool,
        visited_ids: Iterable[int],
        complete: bool = False,
    ) -> "StudySession":
        """
        Rebuild a session from state carried between requests.

        The card list is re-fetched on every request, so the carried state is
        checked against it: visited ids that left the deck are dropped and an
        out-of-range position starts the session over.

        Raises:
            EmptyStudySessionError: If there are no cards
        """
        session = cls.start(cards)
        if not 0 <= position < len(session.cards):
            return session

        known_ids = {card.id.value: card.id for card in session.cards}
        session.visited = {known_ids[v] for v in visited_ids if v in known_ids}
        if complete:
            session.position = len(session.cards) - 1
            session.state = StudyState.COMPLETE
            return session

        session.position = position
        session.revealed = revealed
        return session

    @property
    def total(self) -> int:
        return len(self.cards)

    @property
    def last_index(self) -> int:
        return len(self.cards) - 1

    @property
    def is_complete(self) -> bool:
        return self.state is StudyState.COMPLETE

    @property
    def current_card(self) -> Card | None:
        """The card on screen, or None once the session is complete."""
        if self.is_complete:
            return None
        return self.cards[self.position]

    @property
    def progress_percent(self) -> int:
        if self.is_complete:
            return 100
        return round((self.position + 1) / self.total * 100)

    def flip(self) -> bool:
        """Toggle answer visibility."""
        if self.is_complete:
            return False
        self.revealed = not self.revealed
        return True

    def advance(self) -> bool:
        """
        Move past the current card once its answer has been revealed.

        Returns:
            True if the session moved, False if the answer is still hidden
            or the session is already complete
        """
        if self.is_complete or not self.revealed:
            return False

        self.visited.add(self.cards[self.position].id)
        if self.position < self.last_index:
            self.position += 1
            self.revealed = False
        else:
            self.state = StudyState.COMPLETE
        return True

    def retreat(self) -> bool:
        """Go back one card with the answer hidden. Visited cards stay visited."""
        if self.is_complete or self.position == 0:
            return False
        self.position -= 1
        self.revealed = False
        return True

    def restart(self) -> bool:
        """Return to the first card and forget visited cards."""
        self.position = 0
        self.revealed = False
        self.visited = set()
        self.state = StudyState.ACTIVE
        return True
