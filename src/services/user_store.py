"""Credential store for user accounts."""

import logging

from sqlalchemy import exists, select
from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import Session, undefer

from src.errors import DuplicateError, PersistenceError
from src.models.user import User
from src.services.passwords import verify_password

logger = logging.getLogger(__name__)


class UserStore:
    """Persists users and checks candidate passwords against stored hashes.

    The password hash never leaves this class: callers get a boolean from
    ``verify_password`` instead.
    """

    def __init__(self, db: Session):
        self.db = db

    def find_by_email(self, email: str, include_password: bool = False) -> User | None:
        """Exact-match lookup. The password hash is loaded only on request."""
        query = select(User).where(User.email == email)
        if include_password:
            query = query.options(undefer(User.password_hash))
        return self.db.scalars(query).first()

    def get_by_id(self, user_id: int) -> User | None:
        """Get a user by primary key, without the password hash."""
        return self.db.get(User, user_id)

    def exists(self, email: str) -> bool:
        """Check whether an account is registered under this email."""
        return bool(self.db.scalar(select(exists().where(User.email == email))))

    def create(self, username: str, email: str, password_hash: str) -> User:
        """Create a user from an already-hashed password.

        Raises ValidationError for invalid fields, DuplicateError when the
        email was registered concurrently, PersistenceError otherwise.
        """
        user = User(username=username, email=email, password_hash=password_hash)
        self.db.add(user)
        try:
            self.db.commit()
        except IntegrityError:
            self.db.rollback()
            logger.info(f"Rejected duplicate registration for {email}")
            raise DuplicateError() from None
        except SQLAlchemyError as e:
            self.db.rollback()
            logger.exception(f"Failed to save user {email}")
            raise PersistenceError("Error in Saving") from e
        self.db.refresh(user)
        return user

    def verify_password(self, user: User, candidate: str) -> bool:
        """Compare a plaintext candidate against the user's stored hash."""
        if not candidate:
            return False
        return verify_password(candidate, user.password_hash)
