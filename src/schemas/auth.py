"""Authentication schemas."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field, field_validator
from pydantic_core import PydanticCustomError

from src.models.user import (
    EMAIL_MESSAGE,
    PASSWORD_MESSAGE,
    PASSWORD_MIN_LENGTH,
    USERNAME_MESSAGE,
    is_valid_email,
)


class UserSignup(BaseModel):
    """User signup request.

    Fields default to empty so a missing field reports the same message as
    an invalid one.
    """

    model_config = ConfigDict(validate_default=True)

    username: str = ""
    email: str = ""
    password: str = ""

    @field_validator("username")
    @classmethod
    def username_not_empty(cls, value: str) -> str:
        if not value:
            raise PydanticCustomError("invalid_username", USERNAME_MESSAGE)
        return value

    @field_validator("email")
    @classmethod
    def email_well_formed(cls, value: str) -> str:
        if not is_valid_email(value):
            raise PydanticCustomError("invalid_email", EMAIL_MESSAGE)
        return value

    @field_validator("password")
    @classmethod
    def password_long_enough(cls, value: str) -> str:
        if len(value) < PASSWORD_MIN_LENGTH:
            raise PydanticCustomError("invalid_password", PASSWORD_MESSAGE)
        return value


class UserLogin(BaseModel):
    """User login request. Presence is checked by the login handler."""

    email: str | None = None
    password: str | None = None


class SignupResponse(BaseModel):
    """Token issued right after signup."""

    token: str


class LoginResponse(BaseModel):
    """Token issued on login."""

    success: bool = True
    token: str


class UserResponse(BaseModel):
    """User information response."""

    model_config = ConfigDict(from_attributes=True)

    id: int
    username: str
    email: str
    created_at: datetime = Field(serialization_alias="createdAt")


class CurrentUserResponse(BaseModel):
    """Envelope for the current user profile."""

    success: bool = True
    data: UserResponse
