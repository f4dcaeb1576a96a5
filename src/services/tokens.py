"""Session token signing and cookie handling."""

import logging
from datetime import UTC, datetime, timedelta

from jose import jwt
from jose.exceptions import JOSEError
from starlette.responses import Response

from src.config import Settings, get_settings
from src.errors import SigningError

logger = logging.getLogger(__name__)

TOKEN_COOKIE_NAME = "token"  # noqa: S105


def issue_token(user_id: int | str, expires_delta: timedelta, settings: Settings | None = None) -> str:
    """Sign a token whose only claim is the user id.

    Raises SigningError instead of ever returning an empty or unsigned token.
    """
    settings = settings or get_settings()
    if not settings.jwt_secret:
        raise SigningError("JWT secret is not configured")

    to_encode = {
        "user": {"id": user_id},
        "exp": datetime.now(UTC) + expires_delta,
    }
    try:
        return jwt.encode(to_encode, settings.jwt_secret, algorithm=settings.jwt_algorithm)
    except (JOSEError, TypeError, ValueError) as e:
        logger.error(f"Token signing failed: {e}")
        raise SigningError("Token signing failed") from e


def decode_token(token: str, settings: Settings | None = None) -> int | str | None:
    """Return the user id from a valid token, or None if invalid or expired."""
    settings = settings or get_settings()
    try:
        payload = jwt.decode(token, settings.jwt_secret, algorithms=[settings.jwt_algorithm])
    except JOSEError:
        return None

    user = payload.get("user")
    if not isinstance(user, dict):
        return None
    return user.get("id")


def set_token_cookie(response: Response, token: str, settings: Settings | None = None) -> None:
    """Attach the token as an HTTP-only cookie, secure-only in production."""
    settings = settings or get_settings()
    expires = datetime.now(UTC) + timedelta(days=settings.jwt_cookie_expire)
    response.set_cookie(
        key=TOKEN_COOKIE_NAME,
        value=token,
        expires=expires,
        httponly=True,
        secure=settings.is_production,
    )
