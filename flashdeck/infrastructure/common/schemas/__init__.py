"""Common infrastructure schemas."""

from flashdeck.infrastructure.common.schemas.response_wrappers import (
    ActionResponse,
    HealthResponse,
)

__all__ = [
    "ActionResponse",
    "HealthResponse",
]
