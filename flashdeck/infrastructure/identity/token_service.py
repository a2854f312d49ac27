"""Access token verification."""

import jwt
from jwt import InvalidTokenError

from flashdeck.config import Settings


def verify_access_token(token: str, settings: Settings) -> str | None:
    """
    Verify an access token and return the user_id if valid.

    The token is issued by the external auth provider; its ``sub`` claim is
    the opaque user id. Issuer and audience are checked when configured.
    """
    if not token or not settings.SECRET_KEY:
        return None
    try:
        payload = jwt.decode(
            token,
            settings.SECRET_KEY,
            algorithms=[settings.JWT_ALGORITHM],
            issuer=settings.JWT_ISSUER,
            audience=settings.JWT_AUDIENCE,
            options={"require": ["sub"]},
        )
    except InvalidTokenError:
        return None

    user_id = payload.get("sub")
    if not isinstance(user_id, str) or not user_id.strip():
        return None
    return user_id
