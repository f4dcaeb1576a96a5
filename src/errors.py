"""Application error types and their HTTP mappings."""

import logging
from typing import Any

from fastapi import FastAPI, Request, status
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

logger = logging.getLogger(__name__)

GENERIC_SERVER_ERROR = "Server Error"


class AppError(Exception):
    """Base error carrying a client-facing message and an HTTP status."""

    status_code: int = status.HTTP_500_INTERNAL_SERVER_ERROR

    def __init__(self, message: str, status_code: int | None = None):
        super().__init__(message)
        self.message = message
        if status_code is not None:
            self.status_code = status_code


class ValidationError(AppError):
    """Malformed or missing input fields."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, errors: list[dict[str, Any]]):
        super().__init__("; ".join(error["msg"] for error in errors))
        self.errors = errors


class DuplicateError(AppError):
    """Email already registered."""

    status_code = status.HTTP_400_BAD_REQUEST

    def __init__(self, message: str = "User Already Exists"):
        super().__init__(message)


class AuthError(AppError):
    """Missing or invalid credentials."""

    status_code = status.HTTP_401_UNAUTHORIZED


class PersistenceError(AppError):
    """Unexpected database failure during a write."""


class SigningError(AppError):
    """Token minting failed."""


def field_error(param: str, msg: str, location: str = "body") -> dict[str, Any]:
    """Build a single field-level validation error entry."""
    return {"msg": msg, "param": param, "location": location}


def _request_validation_errors(exc: RequestValidationError) -> list[dict[str, Any]]:
    errors = []
    for error in exc.errors():
        loc = error.get("loc", ())
        location = str(loc[0]) if loc else "body"
        param = ".".join(str(part) for part in loc[1:]) or location
        errors.append(field_error(param, error.get("msg", "Invalid value"), location))
    return errors


def register_exception_handlers(app: FastAPI) -> None:
    """Attach JSON error responses for the application error types."""

    @app.exception_handler(RequestValidationError)
    async def handle_request_validation(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"errors": _request_validation_errors(exc)},
        )

    @app.exception_handler(ValidationError)
    async def handle_validation(request: Request, exc: ValidationError):
        return JSONResponse(status_code=exc.status_code, content={"errors": exc.errors})

    @app.exception_handler(DuplicateError)
    async def handle_duplicate(request: Request, exc: DuplicateError):
        return JSONResponse(status_code=exc.status_code, content={"msg": exc.message})

    @app.exception_handler(AppError)
    async def handle_app_error(request: Request, exc: AppError):
        message = exc.message
        if exc.status_code >= 500:
            logger.error(
                f"{type(exc).__name__} on {request.method} {request.url.path}: {exc.message}",
                exc_info=exc,
            )
            message = GENERIC_SERVER_ERROR
        return JSONResponse(
            status_code=exc.status_code,
            content={"success": False, "error": message},
        )

    @app.exception_handler(Exception)
    async def handle_unexpected(request: Request, exc: Exception):
        logger.error(f"Unhandled error on {request.method} {request.url.path}", exc_info=exc)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"success": False, "error": GENERIC_SERVER_ERROR},
        )
