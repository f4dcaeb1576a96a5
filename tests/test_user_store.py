"""Credential store tests."""

from unittest.mock import patch

import pytest
from sqlalchemy import inspect
from sqlalchemy.exc import OperationalError

from src.errors import DuplicateError, PersistenceError, ValidationError
from src.services.passwords import hash_password


def test_create_and_find_by_email(store):
    """Test a created user can be looked up by email."""
    created = store.create("al", "a@x.com", hash_password("secret1"))
    assert created.id is not None
    assert created.created_at is not None

    found = store.find_by_email("a@x.com")
    assert found is not None
    assert found.id == created.id


def test_find_by_email_excludes_password_by_default(store, db):
    """Test the password hash is only loaded when asked for."""
    store.create("al", "a@x.com", hash_password("secret1"))
    db.expunge_all()

    user = store.find_by_email("a@x.com")
    assert "password_hash" in inspect(user).unloaded

    db.expunge_all()
    user = store.find_by_email("a@x.com", include_password=True)
    assert "password_hash" not in inspect(user).unloaded
    assert user.password_hash != "secret1"


def test_find_by_email_is_exact_match(store):
    """Test lookups do not match partial emails."""
    store.create("al", "a@x.com", hash_password("secret1"))
    assert store.find_by_email("x.com") is None


def test_exists(store):
    """Test existence check before and after registration."""
    assert store.exists("a@x.com") is False
    store.create("al", "a@x.com", hash_password("secret1"))
    assert store.exists("a@x.com") is True


def test_create_duplicate_email(store):
    """Test the unique constraint rejects a second account for an email."""
    store.create("al", "a@x.com", hash_password("secret1"))
    with pytest.raises(DuplicateError):
        store.create("bo", "a@x.com", hash_password("secret2"))
    assert store.exists("a@x.com") is True


@pytest.mark.parametrize(
    ("username", "email", "param"),
    [
        ("", "a@x.com", "username"),
        ("al", "not-an-email", "email"),
    ],
)
def test_create_invalid_fields(store, username, email, param):
    """Test invalid fields are rejected before anything is written."""
    with pytest.raises(ValidationError) as exc_info:
        store.create(username, email, hash_password("secret1"))
    assert exc_info.value.errors[0]["param"] == param


def test_verify_password(store):
    """Test password comparison against the stored hash."""
    store.create("al", "a@x.com", hash_password("secret1"))
    user = store.find_by_email("a@x.com", include_password=True)
    assert store.verify_password(user, "secret1") is True
    assert store.verify_password(user, "wrong") is False
    assert store.verify_password(user, "") is False


def test_get_by_id(store):
    """Test fetching a user by id."""
    created = store.create("al", "a@x.com", hash_password("secret1"))
    assert store.get_by_id(created.id).email == "a@x.com"
    assert store.get_by_id(created.id + 1000) is None


def test_create_commit_failure_raises_persistence_error(store, db):
    """Test a failed write rolls back and leaves the session usable."""
    failure = OperationalError("INSERT INTO users", {}, Exception("disk I/O error"))
    with patch.object(db, "commit", side_effect=failure):
        with pytest.raises(PersistenceError):
            store.create("al", "a@x.com", hash_password("secret1"))

    assert store.exists("a@x.com") is False
    created = store.create("al", "a@x.com", hash_password("secret1"))
    assert store.get_by_id(created.id) is not None


def test_create_accepts_whitespace_username(store):
    """Test only an empty username is rejected."""
    created = store.create(" ", "a@x.com", hash_password("secret1"))
    assert created.username == " "
