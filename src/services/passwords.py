"""Password hashing with bcrypt."""

from passlib.context import CryptContext

BCRYPT_ROUNDS = 10

# Password hashing context
pwd_context = CryptContext(schemes=["bcrypt"], deprecated="auto", bcrypt__rounds=BCRYPT_ROUNDS)


def hash_password(password: str) -> str:
    """Hash a password with a fresh random salt.

    The returned string embeds the salt and cost factor, so it is all that
    ``verify_password`` needs.
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """Verify a password against its hash. Never raises on a bad hash."""
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except (ValueError, TypeError):
        return False
