"""Authentication API endpoints."""

import logging
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, Response, status
from fastapi.responses import PlainTextResponse
from sqlalchemy.exc import SQLAlchemyError

from src.api.dependencies import get_current_user, get_user_store
from src.config import get_settings
from src.errors import AuthError, DuplicateError, PersistenceError, SigningError, ValidationError
from src.models.user import User
from src.schemas.auth import (
    CurrentUserResponse,
    LoginResponse,
    SignupResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)
from src.services.passwords import hash_password
from src.services.tokens import issue_token, set_token_cookie
from src.services.user_store import UserStore

logger = logging.getLogger(__name__)

router = APIRouter(tags=["auth"])

settings = get_settings()

INVALID_CREDENTIALS = "Invalid credentials"


@router.post(
    "/signup",
    response_model=SignupResponse,
    responses={status.HTTP_500_INTERNAL_SERVER_ERROR: {"description": "Error in Saving"}},
)
def signup(
    user_data: UserSignup,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Register a new user and return a short-lived token.

    Duplicate and validation errors propagate to their handlers; any other
    failure while checking, saving or signing answers with "Error in Saving".
    """
    try:
        if store.exists(user_data.email):
            raise DuplicateError()

        user = store.create(user_data.username, user_data.email, hash_password(user_data.password))
        logger.info(f"Registered user {user.id}")

        token = issue_token(user.id, timedelta(seconds=settings.signup_token_expire_seconds))
    except (DuplicateError, ValidationError):
        raise
    except PersistenceError:
        # Cause already logged by the store
        return PlainTextResponse("Error in Saving", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)
    except (SQLAlchemyError, SigningError):
        logger.exception(f"Signup failed for {user_data.email}")
        return PlainTextResponse("Error in Saving", status_code=status.HTTP_500_INTERNAL_SERVER_ERROR)

    return SignupResponse(token=token)


@router.post("/login", response_model=LoginResponse)
def login(
    credentials: UserLogin,
    response: Response,
    store: Annotated[UserStore, Depends(get_user_store)],
):
    """Login with email and password; the token is also set as a cookie."""
    if not credentials.email or not credentials.password:
        raise AuthError("Please provide an email and password", status.HTTP_400_BAD_REQUEST)

    user = store.find_by_email(credentials.email, include_password=True)
    if user is None:
        raise AuthError(INVALID_CREDENTIALS)

    if not store.verify_password(user, credentials.password):
        raise AuthError(INVALID_CREDENTIALS)

    token = issue_token(user.id, timedelta(days=settings.jwt_expire))
    set_token_cookie(response, token, settings)
    return LoginResponse(token=token)


@router.get("/me", response_model=CurrentUserResponse)
def get_me(
    current_user: Annotated[User, Depends(get_current_user)],
):
    """Get current user information."""
    return CurrentUserResponse(data=UserResponse.model_validate(current_user))
