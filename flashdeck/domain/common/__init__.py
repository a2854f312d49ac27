"""
Domain common module.

Contains base classes for domain modeling:
- EntityId: Immutable, strongly-typed identifiers
- Entity: Objects with identity and lifecycle
"""

from .entity import Entity, EntityId
from .exceptions import (
    DomainError,
    InvalidTransitionError,
    ValidationError,
)

__all__ = [
    "DomainError",
    "Entity",
    "EntityId",
    "InvalidTransitionError",
    "ValidationError",
]
