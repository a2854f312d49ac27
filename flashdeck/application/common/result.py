"""
Result type for mutation handler outcomes.

Handlers never raise expected failures past their boundary. They return
either an ActionSuccess carrying the affected data or an ActionFailure
carrying a user-facing message and, for invalid input, per-field errors.

Example:
    result = deck_actions.create_deck(user_id, {"name": "Spanish"})
    if result.is_success:
        print(f"Created: {result.data.id}")
    else:
        print(f"Error: {result.error} {result.field_errors}")
"""

from dataclasses import dataclass, field
from enum import StrEnum
from typing import Generic, Literal, TypeVar

T = TypeVar("T")  # Success value type


class FailureReason(StrEnum):
    """Why a handler refused or failed a request."""

    UNAUTHENTICATED = "unauthenticated"
    VALIDATION = "validation"
    NOT_FOUND = "not_found"
    STORAGE = "storage"


@dataclass(frozen=True)
class ActionSuccess(Generic[T]):
    """Represents a successful mutation."""

    data: T
    message: str | None = None
    success: Literal[True] = True

    @property
    def is_success(self) -> bool:
        """Always True for ActionSuccess."""
        return True

    def __repr__(self) -> str:
        return f"ActionSuccess({self.data!r})"


@dataclass(frozen=True)
class ActionFailure:
    """Represents a refused or failed mutation."""

    error: str
    reason: FailureReason
    field_errors: dict[str, list[str]] | None = field(default=None)
    success: Literal[False] = False

    @property
    def is_success(self) -> bool:
        """Always False for ActionFailure."""
        return False

    def __repr__(self) -> str:
        return f"ActionFailure({self.reason.value}: {self.error!r})"


# Tagged union; narrow on ``success`` or ``isinstance``
ActionResult = ActionSuccess[T] | ActionFailure
