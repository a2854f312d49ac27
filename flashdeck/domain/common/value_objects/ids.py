from dataclasses import dataclass

from ..entity import EntityId

# Largest value the integer primary key columns hold
MAX_ID = 2**31 - 1


@dataclass(frozen=True)
class UserId(EntityId):
    """Opaque user identifier issued by the external identity provider."""

    value: str

    def __post_init__(self) -> None:
        if not isinstance(self.value, str) or not self.value.strip():
            raise ValueError("UserId must be a non-empty string")

    @classmethod
    def generate(cls) -> "UserId":
        raise TypeError("UserId is issued by the identity provider and cannot be generated")


@dataclass(frozen=True)
class DeckId(EntityId):
    """Strongly-typed deck identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("DeckId must be non-negative")

    @classmethod
    def generate(cls) -> "DeckId":
        return cls(0)  # Database assigns real ID

    @property
    def is_storable(self) -> bool:
        """Whether a stored deck could carry this id."""
        return 0 < self.value <= MAX_ID


@dataclass(frozen=True)
class CardId(EntityId):
    """Strongly-typed card identifier."""

    value: int

    def __post_init__(self) -> None:
        if self.value < 0:
            raise ValueError("CardId must be non-negative")

    @classmethod
    def generate(cls) -> "CardId":
        return cls(0)  # Database assigns real ID

    @property
    def is_storable(self) -> bool:
        return 0 < self.value <= MAX_ID
