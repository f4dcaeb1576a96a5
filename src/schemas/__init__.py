"""Pydantic schemas for request/response validation."""

from src.schemas.auth import (
    CurrentUserResponse,
    LoginResponse,
    SignupResponse,
    UserLogin,
    UserResponse,
    UserSignup,
)

__all__ = [
    "CurrentUserResponse",
    "LoginResponse",
    "SignupResponse",
    "UserLogin",
    "UserResponse",
    "UserSignup",
]
