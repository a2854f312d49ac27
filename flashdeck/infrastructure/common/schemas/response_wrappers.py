"""Common response wrapper schemas for API responses."""

from typing import Generic, TypeVar

from pydantic import BaseModel, Field

T = TypeVar("T")


class ActionResponse(BaseModel, Generic[T]):
    """
    Wire form of a mutation handler result.

    Success: ``{"success": true, "data": ..., "message": ...}``.
    Failure: ``{"success": false, "error": ..., "fieldErrors": {...}}``.
    """

    success: bool = Field(..., description="Whether the action succeeded")
    data: T | None = Field(None, description="Affected record, if any")
    message: str | None = Field(None, description="Success message")
    error: str | None = Field(None, description="Error message")
    field_errors: dict[str, list[str]] | None = Field(
        None,
        serialization_alias="fieldErrors",
        description="Validation messages keyed by input field",
    )


class HealthResponse(BaseModel):
    """Health check response."""

    status: str
