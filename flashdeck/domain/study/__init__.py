"""
Study bounded context - Domain layer.

Ephemeral study sessions over a deck's cards; nothing here is persisted.
"""

from .session import EmptyStudySessionError, StudySession, StudyState

__all__ = ["EmptyStudySessionError", "StudySession", "StudyState"]
