"""User model."""

from email_validator import EmailNotValidError, validate_email
from sqlalchemy import Column, Integer, String
from sqlalchemy.orm import deferred, validates

from src.database import Base
from src.errors import ValidationError, field_error
from src.models.mixins import CreatedAtMixin

USERNAME_MESSAGE = "Please Enter a Valid Username"
EMAIL_MESSAGE = "Please enter a valid email"
PASSWORD_MESSAGE = "Please enter a valid password"
PASSWORD_MIN_LENGTH = 6


def is_valid_email(value: str | None) -> bool:
    """Check email syntax without any DNS lookups."""
    if not value:
        return False
    try:
        validate_email(value, check_deliverability=False, test_environment=True)
    except EmailNotValidError:
        return False
    return True


class User(Base, CreatedAtMixin):
    """User account used for authentication.

    The password hash column is deferred: ordinary queries leave it unloaded
    and callers must ask for it with ``undefer(User.password_hash)``.
    """

    __tablename__ = "users"

    id = Column(Integer, primary_key=True, index=True)
    username = Column(String(255), nullable=False)
    email = Column(String(255), unique=True, nullable=False, index=True)
    password_hash = deferred(Column(String(255), nullable=False))

    @validates("username")
    def validate_username(self, key, value):
        if not value:
            raise ValidationError([field_error(key, USERNAME_MESSAGE)])
        return value

    @validates("email")
    def validate_email_address(self, key, value):
        if not is_valid_email(value):
            raise ValidationError([field_error(key, EMAIL_MESSAGE)])
        return value

    @validates("password_hash")
    def validate_password_hash(self, key, value):
        if not value:
            raise ValidationError([field_error("password", PASSWORD_MESSAGE)])
        return value
