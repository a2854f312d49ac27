"""Shared plumbing for mutation handlers."""

from collections.abc import Mapping
from typing import TypeVar

from pydantic import AliasChoices, BaseModel
from pydantic import ValidationError as PydanticValidationError
from pydantic_core import ErrorDetails

from flashdeck.application.common.result import ActionFailure, FailureReason
from flashdeck.domain.common.exceptions import ValidationError
from flashdeck.domain.common.value_objects import UserId

InputT = TypeVar("InputT", bound=BaseModel)

ROOT_FIELD = "__root__"
INVALID_INPUT_MESSAGE = "Invalid input data"
UNAUTHORIZED_MESSAGE = "Unauthorized"

DASHBOARD_PATH = "/dashboard"

_ID_ERROR_TYPES = {"greater_than", "int_parsing", "int_type", "int_from_float"}


def deck_paths(deck_id: int) -> tuple[str, str]:
    """View paths that render a deck."""
    return f"/decks/{deck_id}", f"/decks/{deck_id}/study"


def resolve_caller(user_id: str | None) -> UserId | None:
    """Wrap the authenticated identity, or None when there is none."""
    if user_id is None:
        return None
    try:
        return UserId(user_id)
    except ValueError:
        return None


def unauthenticated() -> ActionFailure:
    return ActionFailure(error=UNAUTHORIZED_MESSAGE, reason=FailureReason.UNAUTHENTICATED)


def _field_label(model: type[BaseModel], field_name: str) -> str:
    field = model.model_fields.get(field_name)
    if field is not None and field.title:
        return field.title
    return field_name.replace("_", " ").capitalize()


def _field_name(model: type[BaseModel], error: ErrorDetails) -> str:
    """Map an error location, which may be an input alias, to its field name."""
    if not error["loc"]:
        return ROOT_FIELD
    key = str(error["loc"][0])
    if key in model.model_fields:
        return key
    for name, field in model.model_fields.items():
        alias = field.validation_alias
        if alias == key or (isinstance(alias, AliasChoices) and key in alias.choices):
            return name
    return key


def _error_message(model: type[BaseModel], field_name: str, error: ErrorDetails) -> str:
    label = _field_label(model, field_name)
    error_type = error["type"]
    ctx = error.get("ctx") or {}

    if error_type in ("missing", "string_too_short"):
        return f"{label} is required"
    if error_type == "string_too_long":
        return f"{label} must be at most {ctx['max_length']} characters"
    if error_type in _ID_ERROR_TYPES:
        return f"Invalid {label[0].lower()}{label[1:]}"
    if error_type == "value_error" and "error" in ctx:
        return str(ctx["error"])
    return error["msg"]


def collect_field_errors(
    model: type[BaseModel], exc: PydanticValidationError
) -> dict[str, list[str]]:
    """Group validation errors by field, keeping their order.

    Keys are field names even when the input used an alias. Errors raised
    by model-level checks land under ``__root__``.
    """
    field_errors: dict[str, list[str]] = {}
    for error in exc.errors():
        field_name = _field_name(model, error)
        field_errors.setdefault(field_name, []).append(_error_message(model, field_name, error))
    return field_errors


def validation_failure(field_errors: dict[str, list[str]]) -> ActionFailure:
    return ActionFailure(
        error=INVALID_INPUT_MESSAGE,
        reason=FailureReason.VALIDATION,
        field_errors=field_errors,
    )


def domain_validation_failure(exc: ValidationError) -> ActionFailure:
    return validation_failure({exc.field or ROOT_FIELD: [exc.message]})


def parse_input(model: type[InputT], payload: object) -> InputT | ActionFailure:
    """Validate a raw payload, returning a failure result instead of raising."""
    if not isinstance(payload, Mapping):
        return validation_failure({ROOT_FIELD: ["Expected an object"]})
    try:
        return model.model_validate(dict(payload))
    except PydanticValidationError as e:
        return validation_failure(collect_field_errors(model, e))
