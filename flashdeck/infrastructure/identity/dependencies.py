"""FastAPI dependencies for identity and authentication."""

from typing import Annotated

from fastapi import Depends, Request
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from flashdeck.config import Settings, get_settings
from flashdeck.exceptions import CredentialsException
from flashdeck.infrastructure.identity.token_service import verify_access_token

bearer_scheme = HTTPBearer(auto_error=False)


def get_optional_user_id(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(bearer_scheme)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> str | None:
    """
    Resolve the caller from the Authorization header or the session cookie.

    Returns:
        The caller's user id, or None for anonymous requests and bad tokens
    """
    token = credentials.credentials if credentials else request.cookies.get(
        settings.SESSION_COOKIE_NAME
    )
    if not token:
        return None
    return verify_access_token(token, settings)


def get_current_user_id(
    user_id: Annotated[str | None, Depends(get_optional_user_id)],
) -> str:
    """
    Get the authenticated caller's user id.

    Raises:
        CredentialsException: If no valid token was presented
    """
    if user_id is None:
        raise CredentialsException
    return user_id


OptionalUserId = Annotated[str | None, Depends(get_optional_user_id)]
CurrentUserId = Annotated[str, Depends(get_current_user_id)]
