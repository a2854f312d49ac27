"""Translate mutation handler results into HTTP responses."""

from collections.abc import Callable
from typing import Any, TypeVar

from fastapi import status
from fastapi.responses import JSONResponse
from pydantic import BaseModel

from flashdeck.application.common.result import ActionFailure, ActionResult, FailureReason
from flashdeck.infrastructure.common.revalidation import (
    INVALIDATED_PATHS_HEADER,
    RequestPathRevalidator,
)
from flashdeck.infrastructure.common.schemas import ActionResponse

T = TypeVar("T")

FAILURE_STATUS_CODES: dict[FailureReason, int] = {
    FailureReason.UNAUTHENTICATED: status.HTTP_401_UNAUTHORIZED,
    FailureReason.VALIDATION: status.HTTP_422_UNPROCESSABLE_CONTENT,
    FailureReason.NOT_FOUND: status.HTTP_404_NOT_FOUND,
    FailureReason.STORAGE: status.HTTP_500_INTERNAL_SERVER_ERROR,
}


def failure_status_code(failure: ActionFailure) -> int:
    return FAILURE_STATUS_CODES[failure.reason]


def invalidation_headers(revalidator: RequestPathRevalidator) -> dict[str, str]:
    """Headers announcing the paths made stale by the request, if any."""
    if not revalidator.paths:
        return {}
    return {INVALIDATED_PATHS_HEADER: revalidator.header_value()}


def action_response(
    result: ActionResult[T],
    revalidator: RequestPathRevalidator,
    serialize: Callable[[T], BaseModel] | None = None,
    success_status: int = status.HTTP_200_OK,
) -> JSONResponse:
    """
    Render a handler result as an ``ActionResponse`` JSON body.

    Args:
        result: Handler result
        revalidator: The request's path revalidator
        serialize: Converts the success payload to its response schema
        success_status: Status code used on success

    Returns:
        JSONResponse with the envelope, status code and invalidation header
    """
    if isinstance(result, ActionFailure):
        envelope: ActionResponse[Any] = ActionResponse(
            success=False, error=result.error, field_errors=result.field_errors
        )
        return JSONResponse(
            status_code=failure_status_code(result),
            content=envelope.model_dump(
                mode="json", by_alias=True, include={"success", "error", "field_errors"}
            ),
        )

    data = serialize(result.data) if serialize and result.data is not None else None
    envelope = ActionResponse(success=True, data=data, message=result.message)
    return JSONResponse(
        status_code=success_status,
        content=envelope.model_dump(mode="json", include={"success", "data", "message"}),
        headers=invalidation_headers(revalidator),
    )
