"""FastAPI dependencies for authentication and database."""

from typing import Annotated

from fastapi import Cookie, Depends
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from src.database import get_db
from src.errors import AuthError
from src.models.user import User
from src.services.tokens import decode_token
from src.services.user_store import UserStore

security = HTTPBearer(auto_error=False)

NOT_AUTHORIZED = "Not authorized to access this route"


def get_user_store(
    db: Annotated[Session, Depends(get_db)],
) -> UserStore:
    """Get the credential store bound to the request's session."""
    return UserStore(db)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    store: Annotated[UserStore, Depends(get_user_store)],
    token: Annotated[str | None, Cookie()] = None,
) -> User:
    """Get the current authenticated user from a Bearer header or the token cookie."""
    if credentials is not None:
        token = credentials.credentials

    if not token:
        raise AuthError(NOT_AUTHORIZED)

    user_id = decode_token(token)
    if user_id is None:
        raise AuthError(NOT_AUTHORIZED)

    try:
        user = store.get_by_id(int(user_id))
    except (TypeError, ValueError):
        user = None
    if user is None:
        raise AuthError(NOT_AUTHORIZED)

    return user
